"""Freshness decay model."""

from datetime import datetime

from src.analytics.dates import days_since
from src.config.schemas.engine import ScoringConfig


_DEFAULT_SCORING = ScoringConfig()


def compute_freshness(
    saved_at: datetime,
    now: datetime,
    scoring: ScoringConfig | None = None,
) -> float:
    """Compute the freshness of a saved article.

    Linear decay: 1.0 at save time, 0.0 once the decay window has elapsed.

        freshness = clamp(1 - days_since(saved_at) / decay_days, 0, 1)

    Args:
        saved_at: When the article was saved.
        now: Reference instant for the derivation pass.
        scoring: Scoring configuration (defaults to a 60-day window).

    Returns:
        Freshness in [0, 1].
    """
    decay_days = (scoring or _DEFAULT_SCORING).freshness_decay_days
    raw = 1.0 - days_since(saved_at, now) / decay_days
    return min(1.0, max(0.0, raw))
