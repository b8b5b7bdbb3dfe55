"""Open Graph (og:*) tags."""

import re

from bs4 import BeautifulSoup

from ..models import IssueRecord, TagBag
from ..urls import is_absolute_url

OG_REQUIRED = ("title", "description", "image", "url", "type")

_OG_PREFIX = re.compile(r"^og:")


def _collect(doc: BeautifulSoup, attr: str, into: TagBag) -> None:
    for tag in doc.find_all("meta", attrs={attr: _OG_PREFIX}):
        content = tag.get("content")
        if not content:
            continue
        key = tag[attr][len("og:"):]
        if not into.get(key):
            into[key] = content


def extract_open_graph(doc: BeautifulSoup) -> TagBag:
    """og:* tags keyed by bare suffix.

    Some sites put og:* in `name=` instead of `property=`; those are read too
    but never overwrite a value taken from `property=`.
    """
    og: TagBag = {}
    _collect(doc, "property", og)
    _collect(doc, "name", og)
    return og


def missing_required(og: TagBag) -> list[str]:
    return [field for field in OG_REQUIRED if not og.get(field)]


def validate_open_graph(og: TagBag) -> list[IssueRecord]:
    issues = [
        IssueRecord(type="error", field=f"og:{field}", message=f"og:{field}が設定されていません")
        for field in missing_required(og)
    ]

    if og.get("image") and not is_absolute_url(og["image"]):
        issues.append(IssueRecord(type="error", field="og:image", message="og:imageのURLが無効です"))

    if og.get("url") and not is_absolute_url(og["url"]):
        issues.append(IssueRecord(type="error", field="og:url", message="og:urlが無効です"))

    return issues
