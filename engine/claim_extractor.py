"""Claim extraction through the generation service."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from engine.json_extract import extract_json
from prompts.system_prompt import ARTICLE_CONTEXT_TEMPLATE, CLAIM_SUGGESTION_PROMPT
from schemas.article import StoredArticle
from schemas.response import MAX_SUGGESTIONS
from services.llm_service import ChatService

logger = logging.getLogger("claimdesk.engine.claim_extractor")

_LIST_KEYS = ("suggestions", "claims")


def build_context(article: StoredArticle) -> str:
    return ARTICLE_CONTEXT_TEMPLATE.format(
        outlet=article.outlet or "n/a",
        headline=article.headline or "n/a",
        url=article.url or "n/a",
        summary=article.ai_summary or "(none)",
    )


def candidates_from_payload(payload: Any) -> list[Any]:
    """Objects from a bare array, or from an array wrapped under a known key.

    Non-object items (citation markers like ``[1]``) are not candidates.
    """
    items: Any = None
    if isinstance(payload, list):
        items = payload
    elif isinstance(payload, Mapping):
        items = next((payload[k] for k in _LIST_KEYS if isinstance(payload.get(k), list)), None)
    if not items:
        return []
    return [item for item in items if isinstance(item, Mapping)]


def has_candidates(payload: Any) -> bool:
    return bool(candidates_from_payload(payload))


async def extract_claims(article: StoredArticle, chat: ChatService) -> list[Any]:
    """Ask the model for claims about *article*; at most three raw candidates.

    ``UpstreamServiceError`` from the chat service propagates. Output that
    holds no recognisable JSON is treated as "no suggestions".
    """
    raw = await chat.complete(CLAIM_SUGGESTION_PROMPT, build_context(article))

    extraction = extract_json(raw, accept=has_candidates)
    if not extraction.ok:
        logger.warning("LLM output held no JSON; treating as no suggestions. Raw: %s", raw[:300])
        return []

    candidates = candidates_from_payload(extraction.value)
    if not candidates:
        logger.warning("LLM JSON had no candidate list; treating as no suggestions.")
    return candidates[:MAX_SUGGESTIONS]
