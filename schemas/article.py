"""Article records exchanged with the store."""

from __future__ import annotations

from pydantic import BaseModel, Field

SUMMARY_MAX_CHARS = 600
TRUST_SCORE_MIN = 40
TRUST_SCORE_MAX = 80


class ArticleRecord(BaseModel):
    """Normalized feed entry, ready to upsert on ``url``."""

    url: str = Field(min_length=1)
    headline: str = "(no title)"
    outlet: str = "unknown"
    ai_summary: str | None = Field(default=None, max_length=SUMMARY_MAX_CHARS)
    trust_score: int = Field(ge=TRUST_SCORE_MIN, le=TRUST_SCORE_MAX)
    publish_ok: bool = True


class StoredArticle(BaseModel):
    """Subset of an ``articles`` row used as claim-suggestion context."""

    id: str
    headline: str | None = None
    ai_summary: str | None = None
    url: str | None = None
    outlet: str | None = None

    model_config = {"extra": "ignore"}
