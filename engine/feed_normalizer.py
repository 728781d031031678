"""Turn one raw feed entry into an ``ArticleRecord``."""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from typing import Any

from bs4 import BeautifulSoup

from engine.trust import placeholder_trust_score
from schemas.article import SUMMARY_MAX_CHARS, ArticleRecord

DEFAULT_HEADLINE = "(no title)"
DEFAULT_OUTLET = "unknown"

_SPACE_BEFORE_PUNCT = re.compile(r"\s+([.,;:!?])")


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _content_text(content: Any) -> str:
    """feedparser yields ``content`` as a list of ``{"value": ...}`` parts."""
    if isinstance(content, list):
        for part in content:
            value = part.get("value") if isinstance(part, Mapping) else part
            if _text(value):
                return _text(value)
        return ""
    return _text(content)


def entry_url(entry: Mapping[str, Any]) -> str:
    return _text(entry.get("link")) or _text(entry.get("guid")) or _text(entry.get("id"))


def plain_text(html: str) -> str:
    """Drop markup and collapse whitespace; feedparser hands back summaries as HTML."""
    if "<" not in html and "&" not in html:
        return " ".join(html.split())
    soup = BeautifulSoup(html, "lxml")
    text = " ".join(soup.get_text(" ", strip=True).split())
    # inline tags leave "passed ." after joining with spaces
    return _SPACE_BEFORE_PUNCT.sub(r"\1", text)


def entry_summary(entry: Mapping[str, Any]) -> str | None:
    snippet = plain_text(_text(entry.get("contentSnippet"))) or plain_text(_text(entry.get("summary")))
    summary = snippet or plain_text(_content_text(entry.get("content")))
    return summary[:SUMMARY_MAX_CHARS] or None


def normalize_entry(
    entry: Mapping[str, Any],
    feed_title: str | None,
    *,
    score_trust: Callable[[], int] = placeholder_trust_score,
) -> ArticleRecord | None:
    """Return the normalized record, or ``None`` when the entry has no link or guid."""
    url = entry_url(entry)
    if not url:
        return None

    return ArticleRecord(
        url=url,
        headline=_text(entry.get("title")) or DEFAULT_HEADLINE,
        outlet=_text(feed_title) or DEFAULT_OUTLET,
        ai_summary=entry_summary(entry),
        trust_score=score_trust(),
        publish_ok=True,
    )
