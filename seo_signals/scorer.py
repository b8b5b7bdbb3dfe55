"""
Score aggregator: builds the ScoreBreakdown from validator and schema results.

Sub-scores:
  meta:   25 - 5/error - 2/warning          (floor 0)
  sns:    15 - 1.5/missing og required tag  (floor 0, Twitter ignored)
  schema: summed entity score / summed max * 20
Total:
  each sub-score rescaled to 0-100, then an unweighted mean.
"""

from typing import Iterable, Sequence

from .analyzers.open_graph import missing_required
from .models import (
    META_MAX, SCHEMA_MAX, SNS_MAX,
    IssueRecord, SchemaAnalysisResult, ScoreBreakdown, TagBag,
    normalize_total,
)
from .rounding import round_half_up

META_ERROR_PENALTY = 5
META_WARNING_PENALTY = 2
SNS_MISSING_PENALTY = 1.5


def meta_score(meta_issues: Iterable[IssueRecord]) -> int:
    issues = list(meta_issues)
    errors = sum(1 for i in issues if i.type == "error")
    warnings = sum(1 for i in issues if i.type == "warning")
    score = META_MAX - errors * META_ERROR_PENALTY - warnings * META_WARNING_PENALTY
    return round_half_up(max(0, score))


def sns_score(og: TagBag) -> int:
    score = SNS_MAX - len(missing_required(og)) * SNS_MISSING_PENALTY
    return round_half_up(max(0, score))


def schema_score(analyses: Sequence[SchemaAnalysisResult]) -> int:
    if not analyses:
        return 0
    total = sum(a.score for a in analyses)
    total_max = sum(a.max_score for a in analyses)
    if not total_max:
        return 0
    return round_half_up(total / total_max * SCHEMA_MAX)


def calculate_scores(
    meta_issues: Iterable[IssueRecord],
    og: TagBag,
    analyses: Sequence[SchemaAnalysisResult],
) -> ScoreBreakdown:
    return ScoreBreakdown(
        meta=meta_score(meta_issues),
        sns=sns_score(og),
        schema=schema_score(analyses),
    )
