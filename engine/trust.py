"""Trust-score policy applied to freshly ingested articles."""

from __future__ import annotations

import random

from schemas.article import TRUST_SCORE_MAX, TRUST_SCORE_MIN


def placeholder_trust_score(rng: random.Random | None = None) -> int:
    """Uniform random score in [40, 80].

    Placeholder only; it carries no signal about the outlet or the article.
    """
    return (rng or random).randint(TRUST_SCORE_MIN, TRUST_SCORE_MAX)
