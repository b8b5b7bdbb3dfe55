"""
Main analysis engine: orchestrates parse, validate, analyze, score, advise.
"""

from typing import Optional, Sequence

from bs4 import BeautifulSoup

from .analyzers import meta, open_graph, schema, twitter
from .catalog import DEFAULT_CATALOG, SchemaCatalog
from .guidance import generate_guidance
from .models import PageAnalysis
from .parser import extract_json_ld, load_document
from .scorer import calculate_scores

TOP_ISSUES = 10


def analyze_document(
    doc: BeautifulSoup,
    entities: Optional[Sequence] = None,
    base_url: Optional[str] = None,
    catalog: SchemaCatalog = DEFAULT_CATALOG,
) -> PageAnalysis:
    """
    Analyze an already-parsed document.

    Args:
        doc: Parsed HTML document
        entities: Structured-data entities; read from the document's
            JSON-LD blocks when None
        base_url: Page URL, used to resolve a relative canonical href
        catalog: Schema requirement catalog

    Returns:
        PageAnalysis with extracted tags, issues, scores and guidance
    """
    if entities is None:
        entities = extract_json_ld(doc)
    entities = list(entities)

    # Phase 1: Extract + validate tags
    extracted_meta = meta.extract_basic_meta(doc, base_url=base_url)
    og = open_graph.extract_open_graph(doc)
    tw = twitter.extract_twitter_cards(doc)

    meta_issues = meta.validate_basic_meta(extracted_meta)
    og_issues = open_graph.validate_open_graph(og)
    twitter_issues = twitter.validate_twitter_cards(tw)

    # Phase 2: Structured data
    analyses = schema.analyze_entities(entities, catalog)

    # Phase 3: Score & advise
    scores = calculate_scores(meta_issues, og, analyses)
    guidance = generate_guidance(
        scores, extracted_meta, meta_issues, og, tw, entities, analyses, catalog,
    )

    return PageAnalysis(
        meta=extracted_meta,
        og=og,
        twitter=tw,
        meta_issues=tuple(meta_issues),
        og_issues=tuple(og_issues),
        twitter_issues=tuple(twitter_issues),
        schema_analyses=tuple(analyses),
        schema_severity=schema.overall_severity(analyses),
        scores=scores,
        guidance=guidance,
    )


def analyze_html(
    html: str,
    schemas: Optional[Sequence] = None,
    base_url: Optional[str] = None,
    catalog: SchemaCatalog = DEFAULT_CATALOG,
) -> PageAnalysis:
    """Parse `html` and run the full analysis."""
    return analyze_document(load_document(html), schemas, base_url=base_url, catalog=catalog)


def issue_summary(analysis: PageAnalysis) -> dict:
    """Error/warning counts across all tag validators plus the first issues."""
    all_issues = [*analysis.meta_issues, *analysis.og_issues, *analysis.twitter_issues]
    return {
        "total": len(all_issues),
        "errors": sum(1 for i in all_issues if i.type == "error"),
        "warnings": sum(1 for i in all_issues if i.type == "warning"),
        "topIssues": [i.model_dump(by_alias=True) for i in all_issues[:TOP_ISSUES]],
        "remaining": max(0, len(all_issues) - TOP_ISSUES),
    }


def field_status(analysis: PageAnalysis, field: str) -> str:
    """Status of a basic meta field: missing / error / warning / ok."""
    if not getattr(analysis.meta, field, ""):
        return "missing"
    issue = next((i for i in analysis.meta_issues if i.field == field), None)
    return issue.type if issue else "ok"
