"""
Hashtag extraction from article HTML.

Markup is stripped before matching so that ``#`` characters inside tags and
attribute values (anchors, image URLs, inline styles) never become tags.
"""

import re

from bs4 import BeautifulSoup

MAX_TAG_LENGTH = 50

# CJK unified ideographs, ASCII letters, digits, underscore
_TAG_CHARS = r"\u4e00-\u9fffA-Za-z0-9_"

# A tag is rejected outright if more tag characters or another '#' follow it,
# so "#a#b" yields only "b" and over-long runs yield nothing.
HASHTAG_PATTERN = re.compile(
    rf"#([{_TAG_CHARS}]{{1,{MAX_TAG_LENGTH}}})(?![#{_TAG_CHARS}])"
)


def strip_html(html: str) -> str:
    """Return the visible text of an HTML fragment, block boundaries as spaces."""
    if not html:
        return ""
    return BeautifulSoup(html, "html.parser").get_text(" ")


def extract_hashtags(html: str) -> list[str]:
    """
    Extract the set of hashtags from article content.

    Args:
        html: Article content as an HTML string

    Returns:
        Lowercased, de-duplicated tag names in first-seen order. Order carries
        no meaning; an empty list is valid.
    """
    text = strip_html(html)

    seen: dict[str, None] = {}
    for match in HASHTAG_PATTERN.finditer(text):
        seen.setdefault(match.group(1).lower(), None)
    return list(seen)
