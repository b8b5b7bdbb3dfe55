import pytest

from seo_signals.analyzers.open_graph import extract_open_graph, validate_open_graph
from seo_signals.analyzers.twitter import extract_twitter_cards, validate_twitter_cards
from seo_signals.parser import load_document
from seo_signals.scorer import sns_score
from seo_signals.urls import is_absolute_url, is_url_or_relative

COMPLETE_OG = {
    "title": "T",
    "description": "D",
    "image": "https://example.com/i.png",
    "url": "https://example.com/",
    "type": "website",
}


def test_extract_open_graph(full_page):
    og = extract_open_graph(load_document(full_page))
    assert og == {
        "title": "Structured Data Guide",
        "description": "How to add structured data",
        "image": "https://example.com/og.png",
        "url": "https://example.com/guide",
        "type": "article",
    }


def test_name_attribute_fallback_does_not_overwrite_property(make_doc):
    doc = make_doc(
        '<meta name="og:title" content="From name">'
        '<meta property="og:title" content="From property">'
        '<meta name="og:site_name" content="Example">'
        '<meta property="og:image" content="">'
    )
    og = extract_open_graph(doc)
    assert og["title"] == "From property"
    assert og["site_name"] == "Example"
    assert "image" not in og


def test_complete_open_graph_has_no_issues():
    assert validate_open_graph(COMPLETE_OG) == []
    assert sns_score(COMPLETE_OG) == 15


def test_missing_open_graph_fields_are_errors():
    og = {k: v for k, v in COMPLETE_OG.items() if k not in ("image", "url")}
    issues = validate_open_graph(og)
    assert [(i.type, i.field) for i in issues] == [("error", "og:image"), ("error", "og:url")]
    assert sns_score(og) == 12


def test_invalid_open_graph_urls():
    og = dict(COMPLETE_OG, image="og.png", url="example.com")
    fields = [i.field for i in validate_open_graph(og)]
    assert fields == ["og:image", "og:url"]
    # presence-only scoring: invalid values still count as set
    assert sns_score(og) == 15


def test_sns_score_rounds_half_up():
    assert sns_score({}) == 8  # 7.5
    assert sns_score({"title": "T", "description": "D"}) == 11  # 10.5


def test_extract_twitter_cards(full_page):
    twitter = extract_twitter_cards(load_document(full_page))
    assert twitter["card"] == "summary_large_image"
    assert set(twitter) == {"card", "title", "description", "image"}


def test_missing_twitter_fields_are_warnings():
    issues = validate_twitter_cards({})
    assert {i.type for i in issues} == {"warning"}
    assert [i.field for i in issues] == [
        "twitter:card", "twitter:title", "twitter:description", "twitter:image",
    ]


def test_invalid_twitter_card_type():
    twitter = {"card": "gallery", "title": "T", "description": "D", "image": "/tw.png"}
    issues = validate_twitter_cards(twitter)
    assert [(i.type, i.field) for i in issues] == [("error", "twitter:card")]
    assert "gallery" in issues[0].message


def test_invalid_twitter_image():
    twitter = {"card": "summary", "title": "T", "description": "D", "image": "ht tp://bad"}
    issues = validate_twitter_cards(twitter)
    assert [(i.type, i.field) for i in issues] == [("error", "twitter:image")]


def test_twitter_issues_do_not_affect_sns_score():
    assert validate_twitter_cards({"card": "bogus"})
    assert sns_score(COMPLETE_OG) == 15


def test_url_checks():
    assert is_absolute_url("https://example.com/a?b=c")
    assert is_absolute_url("mailto:info@example.com")
    assert not is_absolute_url("")
    assert not is_absolute_url("example.com")
    assert not is_absolute_url("https://")
    assert not is_absolute_url("http://exa mple.com")
    assert not is_absolute_url("https://example.com:abc/")
    assert is_url_or_relative("/img.png")
    assert is_url_or_relative("../img.png")
    assert is_url_or_relative("data:image/png;base64,AAAA")
    assert not is_url_or_relative("img.png")


@pytest.mark.parametrize("value", [
    "https://x.test/a.png ",
    " https://x.test/a.png",
    "https://cdn.test/my photo.jpg",
    "https://cdn.test/a\n.png",
    "http:example.com",
    "http:/example.com/page",
])
def test_url_checks_follow_browser_leniency(value):
    assert is_absolute_url(value)


@pytest.mark.parametrize("value", [
    "   ",
    "http:",
    "https://exa mple.com/a.png",
    "http: example.com",
])
def test_url_checks_still_reject_bad_hosts(value):
    assert not is_absolute_url(value)


def test_padded_og_urls_raise_no_issues():
    og = dict(COMPLETE_OG, image=" https://x.test/a.png", url="https://x.test/my page ")
    assert validate_open_graph(og) == []
    twitter = {"card": "summary", "title": "T", "description": "D", "image": " /tw.png"}
    assert validate_twitter_cards(twitter) == []
