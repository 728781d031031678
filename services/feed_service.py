"""Fetch and parse RSS/Atom feeds (requests + feedparser)."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import feedparser
import requests

from errors import FeedFetchError

logger = logging.getLogger("claimdesk.feeds")

_HEADERS = {"User-Agent": "Claimdesk/0.1 (+feed ingestion)"}


@dataclass(frozen=True)
class ParsedFeed:
    url: str
    title: str | None
    entries: list[dict[str, Any]] = field(default_factory=list)


def fetch_feed(url: str, *, timeout: float = 15.0) -> ParsedFeed:
    """GET *url* and parse it.

    Raises ``FeedFetchError`` on transport errors, non-2xx responses, or a
    document feedparser cannot make sense of.
    """
    try:
        resp = requests.get(url, headers=_HEADERS, timeout=timeout)
        resp.raise_for_status()
    except requests.RequestException as exc:
        raise FeedFetchError(f"Failed to fetch feed {url}", detail=str(exc)) from exc

    parsed = feedparser.parse(resp.content)
    if parsed.bozo and not parsed.entries:
        raise FeedFetchError(
            f"Failed to parse feed {url}",
            detail=str(parsed.get("bozo_exception", "malformed feed")),
        )

    title = parsed.feed.get("title")
    logger.debug("Fetched %s — %d entries", url, len(parsed.entries))
    return ParsedFeed(url=url, title=title, entries=list(parsed.entries))
