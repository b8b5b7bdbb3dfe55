"""
Parse HTML and pull out the JSON-LD structured-data entities.

The BeautifulSoup document returned by load_document() is what the
meta / Open Graph / Twitter extractors query.
"""

import json
import logging

from bs4 import BeautifulSoup

log = logging.getLogger(__name__)


def load_document(html: str) -> BeautifulSoup:
    return BeautifulSoup(html or "", "lxml")


def _flatten(node) -> list:
    """Split top-level arrays and @graph containers into single entities."""
    if isinstance(node, list):
        return [entity for item in node for entity in _flatten(item)]
    if isinstance(node, dict) and "@graph" in node and "@type" not in node:
        graph = node["@graph"]
        return _flatten(graph if isinstance(graph, list) else [graph])
    return [node]


def extract_json_ld(doc: BeautifulSoup) -> list:
    """Decoded JSON-LD entities, in document order.

    Blocks that fail to decode are skipped.
    """
    entities = []
    for script in doc.find_all("script", type="application/ld+json"):
        text = script.string or script.get_text()
        try:
            found = _flatten(json.loads(text))
        except (ValueError, RecursionError, TypeError) as e:
            # ValueError covers JSONDecodeError and over-long integer literals
            log.debug("Skipping undecodable JSON-LD block: %s", e)
            continue
        entities.extend(found)
    return entities
