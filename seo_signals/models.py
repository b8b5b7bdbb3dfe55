"""
Result records shared by the analyzers, scorer and guidance generator.

All records are frozen and serialize with camelCase keys
(`model_dump(by_alias=True)`), which is what the HTTP layer returns.
"""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, computed_field
from pydantic.alias_generators import to_camel

from .rounding import round_half_up

IssueType = Literal["error", "warning"]
TierLevel = Literal["required", "recommended", "optimization"]
Severity = Literal["success", "warning", "error", "info"]
Priority = Literal["高", "中", "低"]

# Sub-score maxima
META_MAX = 25
SNS_MAX = 15
SCHEMA_MAX = 20

TagBag = dict[str, str]


def normalize_total(meta: int, sns: int, schema: int) -> int:
    """0-100 total; the three categories weigh equally whatever their maxima."""
    return round_half_up((
        meta / META_MAX * 100
        + sns / SNS_MAX * 100
        + schema / SCHEMA_MAX * 100
    ) / 3)


class Record(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )


class ExtractedMeta(Record):
    title: str = ""
    title_length: int = 0
    description: str = ""
    description_length: int = 0
    keywords: str = ""
    canonical: str = ""
    robots: str = ""
    viewport: str = ""
    charset: str = ""
    language: str = ""


class IssueRecord(Record):
    type: IssueType
    field: str
    message: str


class PropertySpec(Record):
    key: str
    label: str
    description: str = ""


class SchemaTypeProfile(Record):
    label: str
    required: tuple[PropertySpec, ...] = ()
    recommended: tuple[PropertySpec, ...] = ()
    optimization: tuple[PropertySpec, ...] = ()


class ChecklistItem(Record):
    level: TierLevel
    key: str
    label: str
    description: str
    present: bool
    score: int


class SchemaAnalysisResult(Record):
    is_supported_type: bool
    schema_type: Optional[str] = None
    checklist: tuple[ChecklistItem, ...] = ()
    score: int = 0
    max_score: int = 0
    percentage: Optional[int] = None
    severity: Severity
    message: str
    missing_required: tuple[str, ...] = ()
    missing_recommended: tuple[str, ...] = ()


class ScoreBreakdown(Record):
    meta: int
    sns: int
    schema_: int

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=lambda name: "schema" if name == "schema_" else to_camel(name),
    )

    @computed_field(alias="totalScore")
    @property
    def total_score(self) -> int:
        return normalize_total(self.meta, self.sns, self.schema_)


class Recommendation(Record):
    priority: Priority
    title: str
    description: str
    example: str = ""


class CategoryGuidance(Record):
    score: int
    max_score: int
    level: str
    message: str
    details: tuple[str, ...] = ()
    recommendations: tuple[Recommendation, ...] = ()
    seo_impact: str = ""


class PriorityArea(Record):
    priority: int
    area: str
    score: int


class OverallGuidance(Record):
    total_score: int
    overall_level: str
    priority: tuple[PriorityArea, ...] = ()
    tips: tuple[str, ...] = ()


class GuidanceBundle(Record):
    meta: CategoryGuidance
    sns: CategoryGuidance
    schema_: CategoryGuidance
    overall: OverallGuidance

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=lambda name: "schema" if name == "schema_" else to_camel(name),
    )


class PageAnalysis(Record):
    meta: ExtractedMeta
    og: TagBag
    twitter: TagBag
    meta_issues: tuple[IssueRecord, ...] = ()
    og_issues: tuple[IssueRecord, ...] = ()
    twitter_issues: tuple[IssueRecord, ...] = ()
    schema_analyses: tuple[SchemaAnalysisResult, ...] = ()
    schema_severity: Literal["success", "warning", "error", "none"] = "none"
    scores: ScoreBreakdown
    guidance: GuidanceBundle
