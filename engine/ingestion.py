"""Feed ingestion — fetch each source, normalize entries, upsert by url."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from engine.feed_normalizer import normalize_entry
from errors import StoreError, ValidationError
from services.feed_service import ParsedFeed, fetch_feed
from services.store import ArticleStore

logger = logging.getLogger("claimdesk.engine.ingestion")

DEFAULT_MAX_ENTRIES = 30


@dataclass
class IngestResult:
    scanned: int = 0
    inserted: int = 0


def run_ingestion(
    feed_urls: Sequence[str],
    store: ArticleStore | None,
    *,
    fetch: Callable[[str], ParsedFeed] = fetch_feed,
    max_entries: int = DEFAULT_MAX_ENTRIES,
) -> IngestResult:
    """Ingest every feed in *feed_urls* into *store*.

    A fetch failure aborts the run (upserts from earlier feeds stay applied);
    a failed upsert only skips that entry.

    Parameters
    ----------
    feed_urls : Sequence[str]
        Feed sources, processed in order.
    store : ArticleStore | None
        ``None`` when the store is not configured.
    fetch : callable
        Returns a ``ParsedFeed`` for a URL; raises ``FeedFetchError``.
    max_entries : int
        Entries considered per feed.

    Returns
    -------
    IngestResult
        ``scanned`` counts every entry examined, ``inserted`` every successful upsert.
    """
    if store is None:
        raise ValidationError("Missing Supabase configuration")
    if not feed_urls:
        raise ValidationError("No RSS feeds configured")

    t0 = time.perf_counter()
    result = IngestResult()

    for feed_url in feed_urls:
        feed = fetch(feed_url)
        feed_inserted = 0

        for entry in feed.entries[:max_entries]:
            result.scanned += 1
            record = normalize_entry(entry, feed.title)
            if record is None:
                continue
            try:
                store.upsert_article(record)
            except StoreError as exc:
                logger.warning("Skipping %s: %s", record.url, exc.detail or exc.message)
                continue
            result.inserted += 1
            feed_inserted += 1

        logger.info("Feed %s — %d inserted", feed_url, feed_inserted)

    elapsed = time.perf_counter() - t0
    logger.info(
        "Ingestion complete in %.2fs — scanned=%d inserted=%d",
        elapsed,
        result.scanned,
        result.inserted,
    )
    return result
