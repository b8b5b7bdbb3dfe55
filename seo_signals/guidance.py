"""
Guidance: turns sub-scores into messages, SEO impact and ranked recommendations.

Brackets (upper bound inclusive):
  schema (of 20): 0 / 1-5 / 6-10 / 11-15 / 16-20
  meta   (of 25): 0-10 / 11-15 / 16-20 / 21-25
  sns    (of 15): 0 / 1-8 / 9-15
  total  (of 100) tips: <40 / <60 / <80 / >=80
"""

from collections.abc import Mapping
from typing import Optional, Sequence

from .analyzers.open_graph import OG_REQUIRED
from .analyzers.schema import entity_type
from .catalog import DEFAULT_CATALOG, SchemaCatalog
from .models import (
    META_MAX, SCHEMA_MAX, SNS_MAX,
    CategoryGuidance, ExtractedMeta, GuidanceBundle, IssueRecord,
    OverallGuidance, PriorityArea, Recommendation, SchemaAnalysisResult,
    ScoreBreakdown, TagBag,
)

MAIN_PROPERTIES = ("name", "description", "url", "image")

# (score key, rank, area label, threshold): a score below its threshold is a priority
PRIORITY_AREAS = (
    ("meta", 1, "メタタグ", 20),
    ("schema", 2, "構造化データ", 15),
    ("sns", 3, "SNS最適化", 12),
)
MAX_PRIORITIES = 3

TIPS = (
    (40, (
        "SEO対策が不十分です。メタタグ、構造化データ、SNS最適化すべての分野で改善が必要です。",
        "最初に「メタタグ」から改善を始めることをお勧めします。",
        "Google検索セントラルの資料を参考に、基本的なSEO対策を実施してください。",
    )),
    (60, (
        "SEO対策が基本的に実施されていますが、改善の余地があります。",
        "不足しているエリアに焦点を当てて、スコアを上げてください。",
        "定期的にこのツールで分析して、改善状況を確認しましょう。",
    )),
    (80, (
        "SEO対策が良好に実施されています。",
        "残りの点数を取得するために、詳細なプロパティの追加を検討してください。",
        "Google Search Consoleで実際の検索パフォーマンスを確認すると参考になります。",
    )),
    (None, (
        "SEO対策が優秀です。現在の状態を維持してください。",
        "定期的なメンテナンスと、新機能への対応を検討してください。",
        "Google検索セントラルの最新情報をフォローして、アップデートに対応しましょう。",
    )),
)


def determine_score_level(score: float, max_score: float) -> str:
    percentage = score / max_score * 100 if max_score else 0
    if percentage >= 80:
        return "excellent"
    if percentage >= 60:
        return "good"
    if percentage >= 40:
        return "fair"
    return "poor"


def _rec(priority, title, description, example=""):
    return Recommendation(priority=priority, title=title, description=description, example=example)


# ---------------------------------------------------------------------------
# Structured data
# ---------------------------------------------------------------------------

def _required_fix_recommendations(
    analyses: Sequence[SchemaAnalysisResult], catalog: SchemaCatalog,
) -> list[Recommendation]:
    recs = []
    seen = set()
    for analysis in analyses:
        if not analysis.missing_required:
            continue
        key = (analysis.schema_type, analysis.missing_required)
        if key in seen:
            continue
        seen.add(key)
        labels = {
            item.key: item.label for item in analysis.checklist if item.level == "required"
        }
        missing = ", ".join(f"{k}（{labels.get(k, k)}）" for k in analysis.missing_required)
        recs.append(_rec(
            "高",
            f"{analysis.schema_type}の必須プロパティを追加",
            f"{analysis.schema_type}に不足している必須プロパティを設定してください: {missing}",
            f'"{analysis.missing_required[0]}": ... を{analysis.schema_type}のJSON-LDに追加',
        ))
    if not recs:
        job = catalog.get("JobPosting")
        example = ""
        if job is not None:
            example = "JobPostingの場合: " + ", ".join(p.key for p in job.required)
        recs.append(_rec(
            "高",
            "スキーマタイプ別の必須プロパティを追加",
            "各スキーマタイプ（JobPosting、BlogPosting等）に応じた必須プロパティを設定してください",
            example,
        ))
    return recs


def schema_guidance(
    score: int,
    entities: Sequence,
    analyses: Sequence[SchemaAnalysisResult] = (),
    catalog: SchemaCatalog = DEFAULT_CATALOG,
) -> CategoryGuidance:
    count = len(entities)

    if score == 0:
        if count:
            message = "構造化データが検出されましたが、自動分析できるスキーマタイプがありません"
            details = [
                f"{count}個のスキーマが見つかりました",
                "対応タイプ: " + ", ".join(catalog.type_names()),
            ]
        else:
            message = "構造化データが検出されていません"
            details = [
                "JSON-LD形式の構造化データが設定されていない状態です",
                "検索エンジンがページの内容を正確に理解できません",
            ]
        seo_impact = "低 - 検索結果の表示方法が限定される可能性があります"
        recommendations = [
            _rec("高", "構造化データの追加",
                 "Schema.orgに準拠したJSON-LDを<head>内に追加してください",
                 "Article、Product、LocalBusiness など適切なタイプを選択"),
            _rec("高", "ページの種類に応じたスキーマ選択",
                 "ブログ記事ならArticle、商品ページならProduct、など最適なタイプを使用してください",
                 "ページの内容に最も合致するスキーマタイプを選びます"),
        ]
    elif score <= 5:
        has_type = any(entity_type(e) for e in entities)
        message = "構造化データが検出されましたが、品質が低い状態です"
        details = [
            f"{count}個のスキーマが見つかりました",
            "@typeが設定されているスキーマがあります" if has_type else "@typeが不足しています",
            "必須プロパティが不足しているスキーマがあります",
        ]
        seo_impact = "低～中 - リッチスニペット表示の不足によるSEO効果の低下があります"
        recommendations = _required_fix_recommendations(analyses, catalog) + [
            _rec("中", "@typeの明示",
                 "すべてのスキーマに@typeを明示的に指定",
                 '例: "@type": "Article" または "@type": "BlogPosting"'),
        ]
    elif score <= 10:
        message = "構造化データが基本的に設定されていますが、追加情報が不足しています"
        details = [
            f"{count}個のデータ定義が見つかりました",
            "基本的な情報は含まれていますが、詳細情報が不足しています",
            "詳細情報を追加すると、検索結果でより多くの情報が表示される可能性があります",
        ]
        seo_impact = "中 - 検索結果に追加情報が表示される可能性があります"
        recommendations = [
            _rec("中", "不足している基本情報を追加する",
                 "各データ定義に、「データの種類」（@type）を明記してください。これでGoogleが内容を正確に判断できます",
                 "例えば、記事であることを明記すれば、Google検索で記事として扱われやすくなります"),
            _rec("中", "詳細な情報を追加する",
                 "著者名、公開日時、キーワードなど、ページの詳細情報を追加してください。これらが検索結果に表示される可能性があります",
                 "ブログ記事の場合：著者名、公開日、記事内容など"),
        ]
    elif score <= 15:
        message = "構造化データが良好に設定されています"
        details = [
            f"{count}個のスキーマが検出されました",
            "@typeと主要プロパティが設定されています",
            "検索結果で充実した情報が表示される状態です",
        ]
        seo_impact = "高 - Google検索での表示効果が大きく高まります"
        recommendations = [
            _rec("低", "詳細プロパティの追加",
                 "現在設定されていない詳細なプロパティを追加して、さらに充実させる",
                 "rating、aggregateRating、availability、priceなど"),
            _rec("低", "複数タイプスキーマの活用",
                 "Article かつ NewsArticle など、複数の@typeを使用して表現力を向上",
                 '"@type": ["Article", "NewsArticle"]'),
        ]
    else:
        message = "構造化データが最適に設定されています"
        details = [
            f"{count}個のスキーマが検出されました",
            "@typeと主要プロパティが適切に設定されています",
            "SEO観点で最良の状態です",
        ]
        seo_impact = "優秀 - Google検索での表示効果が最大化されています"
        recommendations = [
            _rec("低", "維持と定期確認",
                 "現在の設定を維持しながら、定期的に構造化データテストツールで検証",
                 "Google Search Consoleの「リッチ検索結果」セクションを定期確認"),
            _rec("低", "スキーマの一貫性",
                 "すべてのページで一貫した構造化データ形式を使用",
                 "ウェブサイト全体でスキーマのバージョンと形式を統一"),
        ]

    return CategoryGuidance(
        score=score,
        max_score=SCHEMA_MAX,
        level=determine_score_level(score, SCHEMA_MAX),
        message=message,
        details=tuple(details),
        recommendations=tuple(recommendations),
        seo_impact=seo_impact,
    )


def missing_main_properties(entities: Sequence) -> list[str]:
    """MAIN_PROPERTIES that no entity on the page sets."""
    return [
        prop for prop in MAIN_PROPERTIES
        if not any(isinstance(e, Mapping) and e.get(prop) for e in entities)
    ]


# ---------------------------------------------------------------------------
# Meta tags
# ---------------------------------------------------------------------------

def _meta_recommendations(meta: ExtractedMeta) -> list[Recommendation]:
    recs = []

    if not meta.title:
        recs.append(_rec("高", "Titleの設定",
                         "ページを説明する簡潔で固有なタイトル（30～70文字）を設定",
                         '例: "SEO対策ガイド | 検索エンジン最適化の基本"'))
    elif meta.title_length < 30:
        recs.append(_rec("中", "Titleが短すぎます",
                         "より詳しく、キーワードを含むタイトルに変更（推奨: 30～70文字）",
                         f'現在: "{meta.title}" → 拡張版へ変更'))
    elif meta.title_length > 70:
        recs.append(_rec("中", "Titleが長すぎます",
                         "タイトルを簡潔にして70文字以内に調整",
                         f"現在: {meta.title_length}文字 → 70文字以内に短縮"))

    if not meta.description:
        recs.append(_rec("高", "Descriptionの設定",
                         "ページの要約（70～200文字）を設定。検索結果に表示されるテキスト",
                         '例: "このガイドではSEOの基本から実践的なテクニックまで解説します"'))
    elif meta.description_length < 70:
        recs.append(_rec("中", "Descriptionが短すぎます",
                         "より詳しい説明文へ変更（推奨: 70～200文字）",
                         f'現在: "{meta.description}" → より詳しい説明へ'))
    elif meta.description_length > 200:
        recs.append(_rec("中", "Descriptionが長すぎます",
                         "概要を200文字以内にまとめる。検索結果では省略されます",
                         f"現在: {meta.description_length}文字 → 200文字以内に短縮"))

    if not meta.robots:
        recs.append(_rec(
            "中", "Robotsメタタグの設定",
            "Googleに対して、このページを検索結果に表示するか、ページ内のリンクをたどるかを指示します。"
            "通常のページでは「表示して、リンクもたどる」という設定（index,follow）を推奨します。"
            "ステージング環境など、検索結果に表示したくないページでは別の設定が必要です",
            '<meta name="robots" content="index,follow"> を<head>内に追加します',
        ))
    elif "noindex" in meta.robots.lower():
        recs.append(_rec("高", "noindexが設定されています",
                         "noindexが有効な場合、検索結果に表示されません。意図的な場合は問題ありません",
                         "ステージング環境やプライベートページ用"))

    if not meta.canonical:
        recs.append(_rec("低", "Canonical URLの設定",
                         "ページの正規URL。特に複数のURLでアクセス可能な場合は重要",
                         '<link rel="canonical" href="https://example.com/page">'))

    if not meta.viewport:
        recs.append(_rec("高", "Viewportメタタグの設定",
                         "モバイル表示を最適化。ほぼすべてのページで必須",
                         '<meta name="viewport" content="width=device-width, initial-scale=1.0">'))

    return recs


def _truncate(text: str, limit: int = 50) -> str:
    return f"{text[:limit]}..." if len(text) > limit else text


def meta_guidance(score: int, meta: ExtractedMeta, issues: Sequence[IssueRecord]) -> CategoryGuidance:
    errors = sum(1 for i in issues if i.type == "error")
    warnings = sum(1 for i in issues if i.type == "warning")

    if score <= 10:
        message = "メタタグの設定が不十分です"
        seo_impact = "低 - 検索結果の表示が最適化されていません"
    elif score <= 15:
        message = "メタタグが基本的に設定されていますが改善の余地があります"
        seo_impact = "中 - いくつかの修正で検索結果が改善されます"
    elif score <= 20:
        message = "メタタグが良好に設定されています"
        seo_impact = "高 - 検索結果がしっかり表示されます"
    else:
        message = "メタタグが最適に設定されています"
        seo_impact = "高 - SEO観点で優秀な状態です"

    details = (
        f"エラー: {errors}件、警告: {warnings}件",
        f"Title: {_truncate(meta.title)}" if meta.title else "Title未設定",
        f"Description: {_truncate(meta.description)}" if meta.description else "Description未設定",
        f"Robots: {meta.robots}" if meta.robots else "Robots未設定",
    )

    return CategoryGuidance(
        score=score,
        max_score=META_MAX,
        level=determine_score_level(score, META_MAX),
        message=message,
        details=details,
        recommendations=tuple(_meta_recommendations(meta)),
        seo_impact=seo_impact,
    )


# ---------------------------------------------------------------------------
# SNS (Open Graph)
# ---------------------------------------------------------------------------

def sns_guidance(score: int, og: TagBag, twitter: Optional[TagBag] = None) -> CategoryGuidance:
    missing = [field for field in OG_REQUIRED if not og.get(field)]

    if score == 0:
        message = "SNS共有時の設定がされていません"
        seo_impact = "中 - SNS共有時にページ情報が正しく表示されない可能性があります"
        recommendations = [
            _rec("中", "SNS共有情報の追加",
                 "Facebook、LinkedInなどでのシェア時に、ページのタイトル・説明・画像が正しく表示されるようにタグを設定します",
                 "og:title（ページタイトル）、og:description（説明）、og:image（画像URL）など"),
        ]
    elif score <= 8:
        message = "SNS共有情報が部分的に設定されています"
        seo_impact = "中 - SNS共有時に一部の情報が不完全に表示される可能性があります"
        recommendations = [
            _rec("中", "不足するSNS共有情報を設定",
                 f"現在{len(OG_REQUIRED) - len(missing)}個設定、{len(missing)}個不足しています。不足している情報を追加してください",
                 "不足: " + ", ".join(missing)),
        ]
    else:
        message = "SNS共有情報が適切に設定されています"
        seo_impact = "高 - SNS共有時にページ情報が正しく表示されます"
        recommendations = []
        if missing:
            recommendations.append(_rec(
                "低", "残りのOGタグを設定",
                "すべての基本OGタグを揃えると、共有時の表示が安定します",
                "不足: " + ", ".join(missing),
            ))

    # Twitter falls back to og:* so a missing card is only a low-priority hint
    if twitter is not None and not twitter.get("card") and score > 0:
        recommendations.append(_rec(
            "低", "Twitter Cardの設定",
            "X(Twitter)での表示形式を指定できます。未設定の場合はOGタグが使用されます",
            '<meta name="twitter:card" content="summary_large_image">',
        ))

    details = tuple(
        (f"og:type: {og['type']}" if field == "type" else f"og:{field}: 設定済")
        if og.get(field) else f"og:{field}: 未設定"
        for field in OG_REQUIRED
    )

    return CategoryGuidance(
        score=score,
        max_score=SNS_MAX,
        level=determine_score_level(score, SNS_MAX),
        message=message,
        details=details,
        recommendations=tuple(recommendations),
        seo_impact=seo_impact,
    )


# ---------------------------------------------------------------------------
# Overall
# ---------------------------------------------------------------------------

def overall_guidance(total_score: int, scores: ScoreBreakdown) -> OverallGuidance:
    values = {"meta": scores.meta, "schema": scores.schema_, "sns": scores.sns}
    items = [
        PriorityArea(priority=rank, area=area, score=values[key])
        for key, rank, area, threshold in PRIORITY_AREAS
        if values[key] < threshold
    ]
    items.sort(key=lambda item: item.priority)

    tips = next(t for limit, t in TIPS if limit is None or total_score < limit)

    return OverallGuidance(
        total_score=total_score,
        overall_level=determine_score_level(total_score, 100),
        priority=tuple(items[:MAX_PRIORITIES]),
        tips=tips,
    )


def generate_guidance(
    scores: ScoreBreakdown,
    meta: ExtractedMeta,
    meta_issues: Sequence[IssueRecord],
    og: TagBag,
    twitter: TagBag,
    entities: Sequence,
    analyses: Sequence[SchemaAnalysisResult],
    catalog: SchemaCatalog = DEFAULT_CATALOG,
) -> GuidanceBundle:
    return GuidanceBundle(
        meta=meta_guidance(scores.meta, meta, meta_issues),
        sns=sns_guidance(scores.sns, og, twitter),
        schema=schema_guidance(scores.schema_, entities, analyses, catalog),
        overall=overall_guidance(scores.total_score, scores),
    )
