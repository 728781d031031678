"""Claim-suggestion orchestrator.

Flow: validate params → check moderator key → load article → LLM extraction
(when configured) → summary fallback → generic fallback → validation.
"""

from __future__ import annotations

import asyncio
import logging
import re
import secrets
import time
from typing import Any

from engine.claim_extractor import extract_claims
from engine.claim_validator import validate_claims
from engine.fallback import generic_claims, sentence_claims
from errors import AuthError, NotFoundError, ValidationError
from schemas.response import SuggestionSource, SuggestResponse
from services.llm_service import ChatService
from services.store import ArticleStore

logger = logging.getLogger("claimdesk.engine.suggestion")

_UUID_RE = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[1-5][0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$",
    re.I,
)


def is_uuid(value: str) -> bool:
    return bool(_UUID_RE.match(value))


async def suggest_claims(
    key: str | None,
    article_id: str | None,
    store: ArticleStore | None,
    chat: ChatService | None,
) -> SuggestResponse:
    """Produce up to three sanitized claim suggestions for one article.

    Parameters
    ----------
    key : str | None
        Moderator key supplied by the caller.
    article_id : str | None
        UUID of the article to analyse.
    store : ArticleStore | None
        ``None`` when the store is not configured.
    chat : ChatService | None
        ``None`` when no generation-service key is configured.

    Raises
    ------
    ValidationError, AuthError, NotFoundError, UpstreamServiceError
    """
    key = (key or "").strip()
    article_id = (article_id or "").strip()
    if not key:
        raise ValidationError("Missing key")
    if not is_uuid(article_id):
        raise ValidationError("articleId must be a UUID")
    if store is None:
        raise ValidationError("Missing Supabase configuration")

    mod_key = await asyncio.to_thread(store.fetch_mod_key)
    if not mod_key or not secrets.compare_digest(str(mod_key).encode(), key.encode()):
        raise AuthError("Unauthorized")

    article = await asyncio.to_thread(store.fetch_article, article_id)
    if article is None:
        raise NotFoundError("Article not found")

    t0 = time.perf_counter()
    candidates: list[Any] = []
    source = SuggestionSource.LLM

    if chat is not None:
        candidates = await extract_claims(article, chat)

    if not candidates:
        source = SuggestionSource.SUMMARY
        candidates = sentence_claims(article.ai_summary)
    if not candidates:
        source = SuggestionSource.GENERIC
        candidates = generic_claims(article.headline)

    suggestions = validate_claims(candidates)

    elapsed = time.perf_counter() - t0
    logger.info(
        "Suggestions for %s in %.2fs — %d via %s",
        article.id,
        elapsed,
        len(suggestions),
        source.value,
    )
    return SuggestResponse(article_id=article.id, source=source, suggestions=suggestions)
