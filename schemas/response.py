"""Response schemas for the Claimdesk API."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

CLAIM_TEXT_MAX_CHARS = 300
EVIDENCE_MAX_CHARS = 400
MAX_SUGGESTIONS = 3


# ── Enums ──────────────────────────────────────────────────────────────

class Verdict(str, Enum):
    SUPPORTED = "supported"
    PARTIAL = "partial"
    NOT_SUPPORTED = "not_supported"
    UNVERIFIABLE = "unverifiable"


class SuggestionSource(str, Enum):
    LLM = "llm"
    SUMMARY = "summary"
    GENERIC = "generic"


# ── Sub-models ─────────────────────────────────────────────────────────

class ClaimSuggestion(BaseModel):
    claim_text: str = Field(min_length=1, max_length=CLAIM_TEXT_MAX_CHARS)
    verdict: Verdict = Verdict.UNVERIFIABLE
    evidence_url: str = Field(default="", max_length=EVIDENCE_MAX_CHARS)


# ── Top-level responses ────────────────────────────────────────────────

class IngestResponse(BaseModel):
    ok: bool = True
    scanned: int = Field(ge=0)
    inserted: int = Field(ge=0)


class SuggestResponse(BaseModel):
    article_id: str
    source: SuggestionSource = Field(description="Which path produced the suggestions.")
    suggestions: list[ClaimSuggestion] = Field(default_factory=list, max_length=MAX_SUGGESTIONS)


class ErrorResponse(BaseModel):
    error: str
    detail: str | None = None
