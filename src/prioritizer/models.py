"""Data models for the prioritizer."""

from dataclasses import dataclass
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from src.analytics.models import ReadingStats
from src.library.models import ArchiveSuggestion, Article


@dataclass(frozen=True)
class PriorityComponents:
    """Breakdown of an article's priority into components.

    Attributes:
        status_score: Contribution from reading status.
        freshness_score: Contribution from freshness decay.
        time_fit_score: Contribution from the reading-slot heuristic.
        popularity_score: Contribution from the like count.
        total_score: Capped sum of all components.
    """

    status_score: float
    freshness_score: float
    time_fit_score: float
    popularity_score: float
    total_score: float = 0.0

    def to_dict(self) -> dict[str, float]:
        """Convert to dictionary for serialization.

        Returns:
            Dictionary of component name to value.
        """
        return {
            "status_score": self.status_score,
            "freshness_score": self.freshness_score,
            "time_fit_score": self.time_fit_score,
            "popularity_score": self.popularity_score,
            "total_score": self.total_score,
        }


class DerivedViews(BaseModel):
    """All views republished after one derivation pass.

    Attributes:
        now: Instant sampled once for the whole pass.
        articles: Scored copies of every article.
        queue: Read-next queue (bounded).
        archive_suggestions: Unread, stale articles proposed for archival.
        stats: Reading statistics snapshot.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    now: datetime
    articles: list[Article] = Field(default_factory=list)
    queue: list[Article] = Field(default_factory=list)
    archive_suggestions: list[ArchiveSuggestion] = Field(default_factory=list)
    stats: ReadingStats
