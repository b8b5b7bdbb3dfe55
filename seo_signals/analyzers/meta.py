"""Basic <head> meta tags: title, description, canonical, robots, viewport."""

from typing import Optional
from urllib.parse import urljoin

from bs4 import BeautifulSoup

from ..models import ExtractedMeta, IssueRecord
from ..urls import is_absolute_url

TITLE_MIN, TITLE_MAX = 30, 70
DESCRIPTION_MIN, DESCRIPTION_MAX = 70, 200


def _meta_content(doc: BeautifulSoup, name: str) -> str:
    tag = doc.find("meta", attrs={"name": name})
    return (tag.get("content") or "") if tag else ""


def extract_basic_meta(doc: BeautifulSoup, base_url: Optional[str] = None) -> ExtractedMeta:
    """Read the basic head tags. Missing tags become empty strings."""
    title_tag = doc.find("title")
    title = title_tag.get_text() if title_tag else ""
    description = _meta_content(doc, "description")

    canonical = ""
    link = doc.find("link", rel="canonical")
    if link and link.get("href"):
        canonical = link["href"]
        if base_url:
            canonical = urljoin(base_url, canonical)

    charset = ""
    charset_tag = doc.find("meta", charset=True)
    if charset_tag:
        charset = charset_tag["charset"]
    else:
        equiv = doc.find(
            "meta", attrs={"http-equiv": lambda v: v and v.lower() == "content-type"}
        )
        if equiv:
            charset = equiv.get("content") or ""

    html_tag = doc.find("html")
    language = (html_tag.get("lang") or "") if html_tag else ""

    return ExtractedMeta(
        title=title,
        title_length=len(title),
        description=description,
        description_length=len(description),
        keywords=_meta_content(doc, "keywords"),
        canonical=canonical,
        robots=_meta_content(doc, "robots"),
        viewport=_meta_content(doc, "viewport"),
        charset=charset,
        language=language,
    )


def validate_basic_meta(meta: ExtractedMeta) -> list[IssueRecord]:
    issues = []

    def issue(type, field, message):
        issues.append(IssueRecord(type=type, field=field, message=message))

    # Title
    if not meta.title:
        issue("error", "title", "Titleが設定されていません")
    elif meta.title_length < TITLE_MIN:
        issue("warning", "title", f"Titleが短すぎます（{TITLE_MIN}文字未満）")
    elif meta.title_length > TITLE_MAX:
        issue("warning", "title", f"Titleが長すぎます（{TITLE_MAX}文字超）")

    # Description
    if not meta.description:
        issue("error", "description", "Descriptionが設定されていません")
    elif meta.description_length < DESCRIPTION_MIN:
        issue("warning", "description", f"Descriptionが短すぎます（{DESCRIPTION_MIN}文字未満）")
    elif meta.description_length > DESCRIPTION_MAX:
        issue("warning", "description", f"Descriptionが長すぎます（{DESCRIPTION_MAX}文字超）")

    # Canonical
    if meta.canonical and not is_absolute_url(meta.canonical):
        issue("error", "canonical", "Canonical URLが無効です")

    return issues
