"""Claim validation — the single enforcement point for the suggestion schema."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from schemas.response import (
    CLAIM_TEXT_MAX_CHARS,
    EVIDENCE_MAX_CHARS,
    MAX_SUGGESTIONS,
    ClaimSuggestion,
    Verdict,
)

logger = logging.getLogger("claimdesk.engine.claim_validator")


def _first(candidate: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        value = candidate.get(key)
        # 0, False, "" and empty containers count as absent
        if value:
            return value
    return None


def parse_verdict(raw: Any) -> Verdict:
    """Normalise a free-form verdict; unknown or missing values become ``unverifiable``."""
    value = str(raw or "").strip().lower()
    for v in Verdict:
        if v.value == value:
            return v
    if value:
        logger.debug("Unrecognised verdict '%s'; defaulting to unverifiable.", raw)
    return Verdict.UNVERIFIABLE


def validate_claims(candidates: Iterable[Any]) -> list[ClaimSuggestion]:
    """Return at most three sanitized suggestions, in input order."""
    cleaned: list[ClaimSuggestion] = []
    seen: set[str] = set()

    for c in candidates:
        if not isinstance(c, Mapping):
            continue
        raw_text = _first(c, "claim_text", "text")
        text = str(raw_text if raw_text is not None else "").strip()[:CLAIM_TEXT_MAX_CHARS].strip()
        if not text:
            continue
        key = text.lower()
        if key in seen:
            continue
        seen.add(key)

        evidence = _first(c, "evidence_url", "evidence")
        cleaned.append(
            ClaimSuggestion(
                claim_text=text,
                verdict=parse_verdict(c.get("verdict")),
                evidence_url=str(evidence)[:EVIDENCE_MAX_CHARS] if evidence is not None else "",
            )
        )
        if len(cleaned) >= MAX_SUGGESTIONS:
            break

    return cleaned
