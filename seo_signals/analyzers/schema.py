"""Structured data (JSON-LD): per-entity checklist against the catalog."""

import logging
from collections.abc import Mapping
from typing import Iterable, Optional, Union

from ..catalog import DEFAULT_CATALOG, SchemaCatalog, build_profile
from ..models import ChecklistItem, SchemaAnalysisResult, SchemaTypeProfile
from ..rounding import round_half_up

log = logging.getLogger(__name__)

TIER_WEIGHTS = (
    ("required", 3),
    ("recommended", 2),
    ("optimization", 1),
)

UNSUPPORTED_MESSAGE = "このスキーマタイプは自動分析の対象外です。手動で検証してください。"
COMPLETE_MESSAGE = "完璧です！"


def entity_type(entity) -> Optional[str]:
    """The entity's @type. For a list of types only the first is used."""
    if not isinstance(entity, Mapping):
        return None
    t = entity.get("@type")
    if isinstance(t, (list, tuple)):
        t = t[0] if t else None
    return t if isinstance(t, str) else None


def is_present(entity: Mapping, key: str) -> bool:
    """Present unless unset, None or "". 0 and False count as present."""
    if key not in entity:
        return False
    value = entity[key]
    return value is not None and not (isinstance(value, str) and value == "")


def _unsupported(schema_type: Optional[str]) -> SchemaAnalysisResult:
    return SchemaAnalysisResult(
        is_supported_type=False,
        schema_type=schema_type,
        severity="info",
        message=UNSUPPORTED_MESSAGE,
    )


def analyze_entity(entity, profile: Union[SchemaTypeProfile, Mapping, None]) -> SchemaAnalysisResult:
    if not isinstance(entity, Mapping):
        log.warning("Structured data entity is not an object (%s); skipped", type(entity).__name__)
        return _unsupported(None)

    schema_type = entity_type(entity)
    if isinstance(profile, Mapping):
        # Raw definition handed in directly; missing tiers become empty
        profile, problems = build_profile(schema_type or "?", profile)
        for problem in problems:
            log.warning("Schema profile %s: %s", problem.type_name, problem.reason)
    if profile is None:
        return _unsupported(schema_type)

    checklist = []
    score = 0
    max_score = 0
    for level, weight in TIER_WEIGHTS:
        for prop in getattr(profile, level):
            present = is_present(entity, prop.key)
            max_score += weight
            score += weight if present else 0
            checklist.append(ChecklistItem(
                level=level,
                key=prop.key,
                label=prop.label,
                description=prop.description,
                present=present,
                score=weight if present else 0,
            ))

    missing_required = [i for i in checklist if i.level == "required" and not i.present]
    missing_recommended = [i for i in checklist if i.level == "recommended" and not i.present]

    if missing_required:
        severity = "error"
        message = f"致命的な欠損: {', '.join(i.label for i in missing_required)} が未設定です"
    elif missing_recommended:
        severity = "warning"
        message = f"推奨: {', '.join(i.label for i in missing_recommended)} を追加することをお勧めします"
    else:
        severity = "success"
        message = COMPLETE_MESSAGE

    return SchemaAnalysisResult(
        is_supported_type=True,
        schema_type=schema_type,
        checklist=tuple(checklist),
        score=score,
        max_score=max_score,
        percentage=round_half_up(score / max_score * 100) if max_score else None,
        severity=severity,
        message=message,
        missing_required=tuple(i.key for i in missing_required),
        missing_recommended=tuple(i.key for i in missing_recommended),
    )


def analyze_with_catalog(entity, catalog: SchemaCatalog = DEFAULT_CATALOG) -> SchemaAnalysisResult:
    return analyze_entity(entity, catalog.get(entity_type(entity)))


def analyze_entities(
    entities: Iterable, catalog: SchemaCatalog = DEFAULT_CATALOG,
) -> list[SchemaAnalysisResult]:
    return [analyze_with_catalog(entity, catalog) for entity in entities]


def overall_severity(analyses: Iterable[SchemaAnalysisResult]) -> str:
    """Worst verdict across entities: error > warning > success ("none" if empty)."""
    severities = {a.severity for a in analyses}
    if not severities:
        return "none"
    if "error" in severities:
        return "error"
    if "warning" in severities:
        return "warning"
    return "success"
