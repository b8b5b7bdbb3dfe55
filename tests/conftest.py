import pytest

from seo_signals.parser import load_document

FULL_PAGE = """
<!DOCTYPE html>
<html lang="ja">
<head>
  <meta charset="utf-8">
  <title>Complete Guide to Structured Data for SEO</title>
  <meta name="description" content="Learn how to add JSON-LD structured data, Open Graph and Twitter Card tags to every page of your site.">
  <meta name="keywords" content="seo, json-ld">
  <meta name="robots" content="index,follow">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <link rel="canonical" href="https://example.com/guide">
  <meta property="og:title" content="Structured Data Guide">
  <meta property="og:description" content="How to add structured data">
  <meta property="og:image" content="https://example.com/og.png">
  <meta property="og:url" content="https://example.com/guide">
  <meta property="og:type" content="article">
  <meta name="twitter:card" content="summary_large_image">
  <meta name="twitter:title" content="Structured Data Guide">
  <meta name="twitter:description" content="How to add structured data">
  <meta name="twitter:image" content="https://example.com/tw.png">
  <script type="application/ld+json">
  {
    "@context": "https://schema.org",
    "@type": "Article",
    "headline": "Structured Data Guide",
    "datePublished": "2024-01-01",
    "author": {"@type": "Person", "name": "Y"},
    "image": "https://example.com/og.png",
    "description": "d",
    "articleBody": "b"
  }
  </script>
</head>
<body><h1>Structured Data Guide</h1></body>
</html>
"""

BARE_PAGE = "<html><head></head><body><p>Hello</p></body></html>"

FULL_ARTICLE = {
    "@type": "Article",
    "headline": "X",
    "datePublished": "2024-01-01",
    "author": "Y",
    "image": "https://i",
    "description": "d",
    "articleBody": "b",
}


@pytest.fixture
def full_page():
    return FULL_PAGE


@pytest.fixture
def bare_page():
    return BARE_PAGE


@pytest.fixture
def make_doc():
    def _make(head: str = "", lang: str = ""):
        lang_attr = f' lang="{lang}"' if lang else ""
        return load_document(f"<html{lang_attr}><head>{head}</head><body></body></html>")
    return _make


@pytest.fixture
def full_article():
    return dict(FULL_ARTICLE)
