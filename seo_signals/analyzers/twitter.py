"""Twitter Card (twitter:*) tags."""

import re

from bs4 import BeautifulSoup

from ..models import IssueRecord, TagBag
from ..urls import is_url_or_relative

TWITTER_REQUIRED = ("card", "title", "description", "image")
VALID_CARDS = ("summary", "summary_large_image", "app", "player")


def extract_twitter_cards(doc: BeautifulSoup) -> TagBag:
    twitter: TagBag = {}
    for tag in doc.find_all("meta", attrs={"name": re.compile(r"^twitter:")}):
        content = tag.get("content")
        if content:
            twitter[tag["name"][len("twitter:"):]] = content
    return twitter


def validate_twitter_cards(twitter: TagBag) -> list[IssueRecord]:
    issues = [
        IssueRecord(
            type="warning",
            field=f"twitter:{field}",
            message=f"twitter:{field}が設定されていません",
        )
        for field in TWITTER_REQUIRED
        if not twitter.get(field)
    ]

    card = twitter.get("card")
    if card and card not in VALID_CARDS:
        issues.append(IssueRecord(
            type="error", field="twitter:card",
            message=f"twitter:cardの値が無効です: {card}",
        ))

    image = twitter.get("image")
    if image and not is_url_or_relative(image):
        issues.append(IssueRecord(
            type="error", field="twitter:image",
            message="twitter:imageのURLが無効です",
        ))

    return issues
