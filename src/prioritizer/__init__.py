"""Reading queue prioritizer.

This module provides deterministic freshness and priority scoring, the
bounded read-next queue, and archive suggestions. Every function takes the
pass instant explicitly and never reads the system clock.
"""

from src.prioritizer.applicator import apply_scores
from src.prioritizer.deriver import QueueDeriver, derive_queue, suggest_archive
from src.prioritizer.freshness import compute_freshness
from src.prioritizer.metrics import PrioritizerMetrics
from src.prioritizer.models import DerivedViews, PriorityComponents
from src.prioritizer.pipeline import derive_views
from src.prioritizer.scorer import PriorityScorer, ScorerConfig, score_article_pure
from src.prioritizer.time_fit import fits_time_slot, time_slot_for_hour


__all__ = [
    "DerivedViews",
    "PrioritizerMetrics",
    "PriorityComponents",
    "PriorityScorer",
    "QueueDeriver",
    "ScorerConfig",
    "apply_scores",
    "compute_freshness",
    "derive_queue",
    "derive_views",
    "fits_time_slot",
    "score_article_pure",
    "suggest_archive",
    "time_slot_for_hour",
]
