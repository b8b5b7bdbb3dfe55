"""Background payload for the AI chat advisor (serialization only)."""

from .engine import issue_summary
from .guidance import missing_main_properties
from .models import META_MAX, SCHEMA_MAX, SNS_MAX, PageAnalysis


def build_advisor_context(analysis: PageAnalysis, entities=()) -> dict:
    """JSON-ready record with the scores, issues and top recommendations."""
    scores = analysis.scores
    guidance = analysis.guidance
    return {
        "scores": scores.model_dump(by_alias=True),
        "maxScores": {"meta": META_MAX, "sns": SNS_MAX, "schema": SCHEMA_MAX, "totalScore": 100},
        "meta": analysis.meta.model_dump(by_alias=True),
        "og": dict(analysis.og),
        "twitter": dict(analysis.twitter),
        "issues": issue_summary(analysis),
        "schemaSeverity": analysis.schema_severity,
        "schemas": [
            {
                "type": a.schema_type,
                "supported": a.is_supported_type,
                "severity": a.severity,
                "percentage": a.percentage,
                "missingRequired": list(a.missing_required),
                "missingRecommended": list(a.missing_recommended),
            }
            for a in analysis.schema_analyses
        ],
        "missingMainProperties": missing_main_properties(entities) if entities else [],
        "priority": [p.model_dump(by_alias=True) for p in guidance.overall.priority],
        "recommendations": {
            name: [r.model_dump(by_alias=True) for r in category.recommendations[:3]]
            for name, category in (
                ("meta", guidance.meta), ("sns", guidance.sns), ("schema", guidance.schema_),
            )
        },
    }


def render_advisor_context(analysis: PageAnalysis) -> str:
    """Compact plain-text summary used as chat background."""
    s = analysis.scores
    lines = [
        f"総合スコア: {s.total_score}/100",
        f"メタタグ: {s.meta}/{META_MAX}  SNS: {s.sns}/{SNS_MAX}  構造化データ: {s.schema_}/{SCHEMA_MAX}",
        f"Title: {analysis.meta.title or '未設定'} ({analysis.meta.title_length}文字)",
        f"Description: {analysis.meta.description or '未設定'} ({analysis.meta.description_length}文字)",
    ]
    for issue in [*analysis.meta_issues, *analysis.og_issues, *analysis.twitter_issues]:
        lines.append(f"- [{issue.type}] {issue.field}: {issue.message}")
    for a in analysis.schema_analyses:
        lines.append(f"- schema {a.schema_type or '不明'}: {a.severity} {a.message}")
    for p in analysis.guidance.overall.priority:
        lines.append(f"優先{p.priority}: {p.area} ({p.score}点)")
    return "\n".join(lines)
