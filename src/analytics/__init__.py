"""Reading statistics.

Aggregates a collection into counts, weekly histograms, growth rate,
streaks, and top hashtag/creator rankings.
"""

from src.analytics.aggregator import StatsAggregator, compute_stats, growth_percent
from src.analytics.models import CreatorCount, HashtagCount, ReadingStats


__all__ = [
    "CreatorCount",
    "HashtagCount",
    "ReadingStats",
    "StatsAggregator",
    "compute_stats",
    "growth_percent",
]
