"""
Schema requirement catalog.

Maps a schema.org type name to three tiers of properties:
  required (weight 3), recommended (weight 2), optimization (weight 1).

The raw table is validated once when the module is imported; the resulting
DEFAULT_CATALOG is read-only and shared by every analysis.
"""

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional, Union

from pydantic import ValidationError

from .models import PropertySpec, SchemaTypeProfile

log = logging.getLogger(__name__)

TIERS = ("required", "recommended", "optimization")

SCHEMA_REQUIREMENTS = {
    "SoftwareApplication": {
        "label": "ソフトウェア/ウェブアプリケーション",
        "required": [
            {"key": "name", "label": "名前", "description": "アプリケーション名"},
            {"key": "description", "label": "説明", "description": "アプリケーションの説明"},
        ],
        "recommended": [
            {"key": "applicationCategory", "label": "カテゴリー", "description": "Utility, Productivity など"},
            {"key": "operatingSystem", "label": "OS対応", "description": "Windows, iOS, Web など"},
            {"key": "url", "label": "URL", "description": "アプリケーションのURL"},
            {"key": "image", "label": "イメージ", "description": "アプリケーションのロゴ・スクリーンショット"},
            {"key": "author", "label": "作成者", "description": "Organization または Person オブジェクト"},
        ],
        "optimization": [
            {"key": "aggregateRating", "label": "集計評価", "description": "ユーザー評価（4.5/5など）"},
            {"key": "offers", "label": "料金体系", "description": "無料/有料、価格情報"},
            {"key": "screenshot", "label": "スクリーンショット", "description": "複数のスクリーンショット"},
            {"key": "dateModified", "label": "更新日", "description": "最終更新日"},
        ],
    },
    # Google for Jobs
    "JobPosting": {
        "label": "求人情報",
        "required": [
            {"key": "title", "label": "タイトル", "description": "職種名"},
            {"key": "description", "label": "説明", "description": "職務内容の説明"},
            {"key": "datePosted", "label": "掲載日", "description": "公開日（ISO 8601形式）"},
            {"key": "validThrough", "label": "応募期限", "description": "応募締切日（ISO 8601形式）"},
            {"key": "jobLocation", "label": "勤務地", "description": "Place オブジェクト"},
            {"key": "hiringOrganization", "label": "採用企業", "description": "Organization オブジェクト"},
            {"key": "employmentType", "label": "雇用形態", "description": "FULL_TIME, PART_TIME など"},
        ],
        "recommended": [
            {"key": "baseSalary", "label": "基本給", "description": "MonetaryAmount オブジェクト"},
            {"key": "jobBenefits", "label": "福利厚生", "description": "給与以外の待遇"},
            {"key": "qualifications", "label": "必須スキル", "description": "求める経験・スキル"},
            {"key": "responsibilities", "label": "職務内容", "description": "担当する業務"},
            {"key": "experienceRequirements", "label": "経験要件", "description": "必要な実務経験"},
        ],
        "optimization": [
            {"key": "educationRequirements", "label": "学歴要件", "description": "学位や資格の要件"},
            {"key": "incentiveCompensation", "label": "インセンティブ", "description": "ボーナス、コミッション"},
            {"key": "workHours", "label": "勤務時間", "description": "勤務形態（フレックスなど）"},
        ],
    },
    "BlogPosting": {
        "label": "ブログ記事",
        "required": [
            {"key": "headline", "label": "タイトル", "description": "記事のタイトル"},
            {"key": "datePublished", "label": "公開日", "description": "記事の公開日"},
        ],
        "recommended": [
            {"key": "author", "label": "著者", "description": "Person または Organization"},
            {"key": "image", "label": "アイキャッチ", "description": "記事のメインイメージ"},
            {"key": "articleBody", "label": "本文", "description": "記事の本文内容"},
            {"key": "description", "label": "説明", "description": "短い説明またはプレビュー"},
            {"key": "dateModified", "label": "更新日", "description": "最終更新日"},
        ],
        "optimization": [
            {"key": "commentCount", "label": "コメント数", "description": "コメント数"},
            {"key": "keywords", "label": "キーワード", "description": "SEO用キーワード"},
            {"key": "articleSection", "label": "カテゴリー", "description": "記事のカテゴリー分類"},
        ],
    },
    "Article": {
        "label": "記事",
        "required": [
            {"key": "headline", "label": "タイトル", "description": "記事のタイトル"},
            {"key": "datePublished", "label": "公開日", "description": "記事の公開日"},
        ],
        "recommended": [
            {"key": "author", "label": "著者", "description": "Person または Organization"},
            {"key": "image", "label": "イメージ", "description": "記事のメインイメージ"},
            {"key": "description", "label": "説明", "description": "記事の説明"},
            {"key": "articleBody", "label": "本文", "description": "記事の本文"},
        ],
        "optimization": [
            {"key": "dateModified", "label": "更新日", "description": "最終更新日"},
            {"key": "wordCount", "label": "ワード数", "description": "記事の文字数"},
        ],
    },
    "NewsArticle": {
        "label": "ニュース記事",
        "required": [
            {"key": "headline", "label": "タイトル", "description": "ニュースのタイトル"},
            {"key": "datePublished", "label": "公開日", "description": "ニュースの公開日"},
        ],
        "recommended": [
            {"key": "author", "label": "著者", "description": "ニュース機関またはジャーナリスト"},
            {"key": "image", "label": "メイン画像", "description": "ニュース関連の画像"},
            {"key": "articleBody", "label": "本文", "description": "ニュースの本文"},
            {"key": "description", "label": "リード", "description": "ニュースの要約"},
        ],
        "optimization": [
            {"key": "dateModified", "label": "更新日", "description": "更新日（重要）"},
            {"key": "articleSection", "label": "セクション", "description": "Politics, Technology など"},
        ],
    },
    "Organization": {
        "label": "組織・企業",
        "required": [
            {"key": "name", "label": "名前", "description": "企業名・組織名"},
        ],
        "recommended": [
            {"key": "url", "label": "URL", "description": "公式ウェブサイト"},
            {"key": "image", "label": "ロゴ", "description": "企業ロゴ"},
            {"key": "description", "label": "説明", "description": "企業概要"},
            {"key": "founder", "label": "創業者", "description": "Person オブジェクト"},
            {"key": "foundingDate", "label": "創立日", "description": "創立年月日"},
        ],
        "optimization": [
            {"key": "sameAs", "label": "SNS", "description": "SNSプロフィールURL"},
            {"key": "address", "label": "住所", "description": "PostalAddress オブジェクト"},
            {"key": "contactPoint", "label": "連絡先", "description": "ContactPoint オブジェクト"},
            {"key": "aggregateRating", "label": "レーティング", "description": "組織への評価"},
        ],
    },
    # Stores, clinics, restaurants
    "LocalBusiness": {
        "label": "ローカルビジネス",
        "required": [
            {"key": "name", "label": "ビジネス名", "description": "店舗名・サービス名"},
            {"key": "address", "label": "住所", "description": "PostalAddress オブジェクト"},
        ],
        "recommended": [
            {"key": "telephone", "label": "電話番号", "description": "ビジネス連絡先"},
            {"key": "url", "label": "URL", "description": "ウェブサイト"},
            {"key": "image", "label": "イメージ", "description": "ビジネスの写真"},
            {"key": "priceRange", "label": "料金帯", "description": "$$, $$$, $$$$ など"},
            {"key": "openingHoursSpecification", "label": "営業時間", "description": "OpeningHoursSpecification"},
        ],
        "optimization": [
            {"key": "aggregateRating", "label": "レーティング", "description": "ビジネスへの評価"},
            {"key": "geo", "label": "地理情報", "description": "GeoCoordinates オブジェクト"},
        ],
    },
    "Product": {
        "label": "商品",
        "required": [
            {"key": "name", "label": "商品名", "description": "商品の名前"},
        ],
        "recommended": [
            {"key": "image", "label": "画像", "description": "商品画像"},
            {"key": "description", "label": "説明", "description": "商品説明"},
            {"key": "aggregateRating", "label": "レーティング", "description": "ユーザー評価"},
            {"key": "offers", "label": "オファー", "description": "価格・在庫情報"},
        ],
        "optimization": [
            {"key": "sku", "label": "SKU", "description": "商品SKU"},
            {"key": "brand", "label": "ブランド", "description": "Brand オブジェクト"},
            {"key": "review", "label": "レビュー", "description": "Review オブジェクト配列"},
        ],
    },
    "WebPage": {
        "label": "ウェブページ",
        "required": [
            {"key": "name", "label": "ページ名", "description": "ページのタイトル"},
        ],
        "recommended": [
            {"key": "url", "label": "URL", "description": "ページの正規URL"},
            {"key": "description", "label": "説明", "description": "ページの概要"},
            {"key": "inLanguage", "label": "言語", "description": "ja, en など"},
            {"key": "isPartOf", "label": "所属サイト", "description": "WebSite オブジェクト"},
        ],
        "optimization": [
            {"key": "breadcrumb", "label": "パンくず", "description": "BreadcrumbList オブジェクト"},
            {"key": "primaryImageOfPage", "label": "メイン画像", "description": "ImageObject オブジェクト"},
            {"key": "datePublished", "label": "公開日", "description": "ページの公開日"},
            {"key": "dateModified", "label": "更新日", "description": "最終更新日"},
        ],
    },
    "WebSite": {
        "label": "ウェブサイト",
        "required": [
            {"key": "name", "label": "サイト名", "description": "サイトの名称"},
            {"key": "url", "label": "URL", "description": "サイトのトップページURL"},
        ],
        "recommended": [
            {"key": "description", "label": "説明", "description": "サイトの概要"},
            {"key": "publisher", "label": "運営者", "description": "Organization または Person"},
            {"key": "inLanguage", "label": "言語", "description": "ja, en など"},
        ],
        "optimization": [
            {"key": "potentialAction", "label": "サイト内検索", "description": "SearchAction オブジェクト"},
            {"key": "alternateName", "label": "別名", "description": "サイトの略称・別表記"},
        ],
    },
    "BreadcrumbList": {
        "label": "パンくずリスト",
        "required": [
            {"key": "itemListElement", "label": "リスト要素", "description": "ListItem オブジェクトの配列"},
        ],
        "recommended": [
            {"key": "numberOfItems", "label": "要素数", "description": "パンくずの階層数"},
        ],
        "optimization": [
            {"key": "name", "label": "名前", "description": "パンくずリストの名称"},
        ],
    },
    "Person": {
        "label": "人物",
        "required": [
            {"key": "name", "label": "名前", "description": "氏名"},
        ],
        "recommended": [
            {"key": "url", "label": "URL", "description": "プロフィールページ"},
            {"key": "image", "label": "写真", "description": "プロフィール画像"},
            {"key": "jobTitle", "label": "肩書き", "description": "職種・役職"},
            {"key": "sameAs", "label": "SNS", "description": "SNSプロフィールURL"},
        ],
        "optimization": [
            {"key": "worksFor", "label": "所属", "description": "Organization オブジェクト"},
            {"key": "description", "label": "説明", "description": "経歴・紹介文"},
            {"key": "knowsAbout", "label": "専門分野", "description": "得意分野・専門領域"},
        ],
    },
    "Event": {
        "label": "イベント",
        "required": [
            {"key": "name", "label": "イベント名", "description": "イベントの名前"},
            {"key": "startDate", "label": "開始日", "description": "イベント開始日時"},
        ],
        "recommended": [
            {"key": "endDate", "label": "終了日", "description": "イベント終了日時"},
            {"key": "location", "label": "場所", "description": "Place オブジェクト"},
            {"key": "description", "label": "説明", "description": "イベント説明"},
            {"key": "image", "label": "イメージ", "description": "イベント画像"},
            {"key": "url", "label": "URL", "description": "イベントページのURL"},
            {"key": "offers", "label": "チケット", "description": "Offer オブジェクト"},
        ],
        "optimization": [
            {"key": "organizer", "label": "開催者", "description": "Organization オブジェクト"},
            {"key": "eventAttendanceMode", "label": "形式", "description": "OnlineEventAttendanceMode など"},
        ],
    },
}


@dataclass(frozen=True)
class Supported:
    profile: SchemaTypeProfile


@dataclass(frozen=True)
class Unsupported:
    type_name: Optional[str]


Lookup = Union[Supported, Unsupported]


@dataclass(frozen=True)
class CatalogError:
    type_name: str
    reason: str


class SchemaCatalog:
    """Immutable type name -> SchemaTypeProfile table."""

    def __init__(self, profiles: Mapping[str, SchemaTypeProfile], errors=()):
        self._profiles = MappingProxyType(dict(profiles))
        self.errors: tuple[CatalogError, ...] = tuple(errors)

    def lookup(self, type_name: Optional[str]) -> Lookup:
        profile = self._profiles.get(type_name) if isinstance(type_name, str) else None
        if profile is None:
            return Unsupported(type_name)
        return Supported(profile)

    def get(self, type_name: Optional[str]) -> Optional[SchemaTypeProfile]:
        found = self.lookup(type_name)
        return found.profile if isinstance(found, Supported) else None

    @property
    def profiles(self) -> Mapping[str, SchemaTypeProfile]:
        return self._profiles

    def type_names(self) -> list[str]:
        return list(self._profiles)

    def __contains__(self, type_name) -> bool:
        return type_name in self._profiles

    def __len__(self) -> int:
        return len(self._profiles)


def build_profile(type_name: str, raw) -> tuple[Optional[SchemaTypeProfile], list[CatalogError]]:
    if not isinstance(raw, Mapping):
        return None, [CatalogError(type_name, "definition is not a mapping")]

    errors = []
    tiers = {}
    for tier in TIERS:
        specs = raw.get(tier)
        if not isinstance(specs, (list, tuple)):
            errors.append(CatalogError(type_name, f"'{tier}' is missing or not a list; treated as empty"))
            specs = []
        tiers[tier] = specs

    try:
        profile = SchemaTypeProfile(
            label=raw.get("label") or type_name,
            **{tier: tuple(PropertySpec(**spec) for spec in specs) for tier, specs in tiers.items()},
        )
    except (TypeError, ValidationError) as e:
        return None, errors + [CatalogError(type_name, f"invalid property spec: {e}")]
    return profile, errors


def build_catalog(raw: Mapping[str, Mapping]) -> SchemaCatalog:
    """Validate a raw requirements table into a SchemaCatalog.

    Problems are collected as CatalogError entries and logged once here,
    so analyses never have to re-check profile shape.
    """
    profiles = {}
    errors = []
    for type_name, definition in raw.items():
        profile, problems = build_profile(type_name, definition)
        errors.extend(problems)
        if profile is not None:
            profiles[type_name] = profile

    for error in errors:
        log.warning("Schema catalog entry %s: %s", error.type_name, error.reason)

    return SchemaCatalog(profiles, errors)


DEFAULT_CATALOG = build_catalog(SCHEMA_REQUIREMENTS)


def get_schema_requirements(schema_type: Optional[str]) -> Optional[SchemaTypeProfile]:
    """Profile for `schema_type` from the default catalog, or None."""
    return DEFAULT_CATALOG.get(schema_type)
