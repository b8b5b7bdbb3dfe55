import json

from seo_signals.context import build_advisor_context, render_advisor_context
from seo_signals.engine import TOP_ISSUES, analyze_html, field_status, issue_summary
from seo_signals.parser import extract_json_ld, load_document


def _page(head="", jsonld=()):
    scripts = "".join(
        f'<script type="application/ld+json">{block}</script>' for block in jsonld
    )
    return f"<html><head>{head}{scripts}</head><body></body></html>"


def test_full_page_scores(full_page):
    analysis = analyze_html(full_page)
    assert analysis.meta_issues == ()
    assert analysis.og_issues == ()
    assert analysis.twitter_issues == ()
    assert (analysis.scores.meta, analysis.scores.sns, analysis.scores.schema_) == (25, 15, 18)
    assert analysis.scores.total_score == 97
    assert analysis.schema_severity == "success"
    assert analysis.meta.language == "ja"
    assert analysis.meta.charset == "utf-8"
    assert analysis.guidance.overall.priority == ()


def test_bare_page_scores(bare_page):
    analysis = analyze_html(bare_page)
    assert [i.field for i in analysis.meta_issues] == ["title", "description"]
    assert len(analysis.og_issues) == 5
    assert {i.type for i in analysis.twitter_issues} == {"warning"}
    assert (analysis.scores.meta, analysis.scores.sns, analysis.scores.schema_) == (15, 8, 0)
    assert analysis.scores.total_score == 38
    assert analysis.schema_severity == "none"
    assert analysis.guidance.schema_.message == "構造化データが検出されていません"
    assert [p.area for p in analysis.guidance.overall.priority] == [
        "メタタグ", "構造化データ", "SNS最適化",
    ]


def test_analysis_is_deterministic(full_page):
    dumps = {
        json.dumps(analyze_html(full_page).model_dump(by_alias=True), ensure_ascii=False)
        for _ in range(3)
    }
    assert len(dumps) == 1


def test_serialized_keys_are_camel_case(full_page):
    dumped = analyze_html(full_page).model_dump(by_alias=True)
    assert {"metaIssues", "ogIssues", "twitterIssues", "schemaAnalyses", "schemaSeverity"} <= set(dumped)
    assert dumped["scores"]["totalScore"] == 97
    assert dumped["schemaAnalyses"][0]["isSupportedType"] is True
    assert dumped["guidance"]["schema"]["maxScore"] == 20


def test_graph_and_arrays_are_flattened():
    html = _page(jsonld=[
        json.dumps({"@context": "https://schema.org", "@graph": [
            {"@type": "WebSite", "name": "Example", "url": "https://example.com"},
            {"@type": "Organization", "name": "ACME"},
        ]}),
        json.dumps([{"@type": "Recipe"}, {"@type": "Person", "name": "Y"}]),
    ])
    entities = extract_json_ld(load_document(html))
    assert [e["@type"] for e in entities] == ["WebSite", "Organization", "Recipe", "Person"]
    analysis = analyze_html(html)
    assert [a.schema_type for a in analysis.schema_analyses] == [
        "WebSite", "Organization", "Recipe", "Person",
    ]


def test_invalid_json_ld_blocks_are_skipped():
    html = _page(jsonld=[
        "{not json",
        '{"@type": "Product", "sku": ' + "1" * 5000 + "}",
        "[" * 100000 + "]" * 100000,
        json.dumps({"@type": "Article", "headline": "X"}),
    ])
    analysis = analyze_html(html)
    assert len(analysis.schema_analyses) == 1
    assert analysis.schema_analyses[0].schema_type == "Article"
    assert analysis.schema_analyses[0].severity == "error"


def test_analyze_endpoint_survives_undecodable_json_ld():
    from fastapi.testclient import TestClient

    from seo_signals.main import app

    html = _page(jsonld=["[" * 100000 + "]" * 100000])
    resp = TestClient(app).post("/analyze", json={"html": html})
    assert resp.status_code == 200
    assert resp.json()["schemaSeverity"] == "none"


def test_explicit_schemas_replace_page_json_ld(full_page):
    analysis = analyze_html(full_page, schemas=[{"@type": "Recipe"}])
    assert [a.schema_type for a in analysis.schema_analyses] == ["Recipe"]
    assert analysis.scores.schema_ == 0
    assert analysis.schema_analyses[0].severity == "info"
    assert analysis.schema_severity == "success"


def test_relative_canonical_is_resolved_against_page_url():
    html = _page('<link rel="canonical" href="/guide">')
    assert analyze_html(html).meta.canonical == "/guide"
    resolved = analyze_html(html, base_url="https://example.com/a/b")
    assert resolved.meta.canonical == "https://example.com/guide"
    assert not any(i.field == "canonical" for i in resolved.meta_issues)


def test_issue_summary(bare_page):
    summary = issue_summary(analyze_html(bare_page))
    # 2 meta errors + 5 og errors + 4 twitter warnings
    assert summary["total"] == 11
    assert summary["errors"] == 7
    assert summary["warnings"] == 4
    assert len(summary["topIssues"]) == TOP_ISSUES
    assert summary["remaining"] == 1
    assert summary["topIssues"][0] == {
        "type": "error", "field": "title", "message": "Titleが設定されていません",
    }


def test_field_status():
    html = _page("<title>short</title>")
    analysis = analyze_html(html)
    assert field_status(analysis, "title") == "warning"
    assert field_status(analysis, "description") == "missing"
    assert field_status(analysis, "keywords") == "missing"

    html = _page('<title>A title that is comfortably long enough</title><meta name="robots" content="index">')
    analysis = analyze_html(html)
    assert field_status(analysis, "title") == "ok"
    assert field_status(analysis, "robots") == "ok"


def test_advisor_context_is_json_ready(full_page):
    analysis = analyze_html(full_page)
    entities = extract_json_ld(load_document(full_page))
    context = build_advisor_context(analysis, entities)
    json.dumps(context, ensure_ascii=False)

    assert context["scores"]["totalScore"] == 97
    assert context["maxScores"] == {"meta": 25, "sns": 15, "schema": 20, "totalScore": 100}
    assert context["schemaSeverity"] == "success"
    assert context["schemas"][0]["type"] == "Article"
    assert context["schemas"][0]["percentage"] == 88
    assert context["missingMainProperties"] == ["name", "url"]
    assert set(context["recommendations"]) == {"meta", "sns", "schema"}
    assert all(len(recs) <= 3 for recs in context["recommendations"].values())


def test_render_advisor_context(bare_page):
    text = render_advisor_context(analyze_html(bare_page))
    lines = text.splitlines()
    assert lines[0] == "総合スコア: 38/100"
    assert "メタタグ: 15/25" in lines[1]
    assert "Title: 未設定 (0文字)" in lines
    assert "- [error] title: Titleが設定されていません" in lines
    assert "優先1: メタタグ (15点)" in lines
