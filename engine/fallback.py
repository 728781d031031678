"""Offline claim proposals used when the LLM path yields nothing."""

from __future__ import annotations

import re
from typing import Any

from schemas.response import MAX_SUGGESTIONS, Verdict

_SENTENCE_BOUNDARY = re.compile(r"[.!?]\s+")
FALLBACK_CLAIM_MAX_CHARS = 200


def sentence_claims(summary: str | None) -> list[dict[str, Any]]:
    """Split *summary* into sentences and propose the first three as claims."""
    if not summary:
        return []
    segments = [s.strip() for s in _SENTENCE_BOUNDARY.split(summary)]
    return [
        {
            "claim_text": s[:FALLBACK_CLAIM_MAX_CHARS],
            "verdict": Verdict.UNVERIFIABLE.value,
            "evidence_url": "",
        }
        for s in segments
        if s
    ][:MAX_SUGGESTIONS]


def generic_claims(headline: str | None) -> list[dict[str, Any]]:
    """Fixed pair of review prompts for articles without a usable summary."""
    return [
        {
            "claim_text": f'Is the headline claim accurate: "{headline or "(no title)"}"?',
            "verdict": Verdict.UNVERIFIABLE.value,
            "evidence_url": "",
        },
        {
            "claim_text": "Are the cited figures or percentages backed by official sources?",
            "verdict": Verdict.PARTIAL.value,
            "evidence_url": "",
        },
    ]
