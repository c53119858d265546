"""Metrics collection for the prioritizer module."""

from dataclasses import dataclass, field
from typing import ClassVar


@dataclass
class PrioritizerMetrics:
    """Metrics for prioritizer operations.

    Attributes:
        articles_scored: Number of articles scored in the last pass.
        queue_size: Entries in the last derived queue.
        archive_suggestions: Suggestions in the last derivation.
        passes_total: Derivation passes run since reset.
        priority_values: Priorities from the last pass for percentiles.
        scoring_duration_ms: Time spent scoring.
        derivation_duration_ms: Time spent deriving queue and archive views.
    """

    articles_scored: int = 0
    queue_size: int = 0
    archive_suggestions: int = 0
    passes_total: int = 0
    priority_values: list[float] = field(default_factory=list)
    scoring_duration_ms: float = 0.0
    derivation_duration_ms: float = 0.0

    _instance: ClassVar["PrioritizerMetrics | None"] = None

    @classmethod
    def get_instance(cls) -> "PrioritizerMetrics":
        """Get singleton metrics instance."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset metrics (primarily for testing)."""
        cls._instance = None

    def record_scored(self, priorities: list[float], duration_ms: float) -> None:
        """Record a completed scoring pass.

        Args:
            priorities: Priority of every scored article.
            duration_ms: Duration in milliseconds.
        """
        self.articles_scored = len(priorities)
        self.priority_values = list(priorities)
        self.scoring_duration_ms = duration_ms

    def record_derived(
        self, queue_size: int, archive_suggestions: int, duration_ms: float
    ) -> None:
        """Record a completed queue/archive derivation.

        Args:
            queue_size: Entries in the queue.
            archive_suggestions: Number of archive suggestions.
            duration_ms: Duration in milliseconds.
        """
        self.queue_size = queue_size
        self.archive_suggestions = archive_suggestions
        self.derivation_duration_ms = duration_ms
        self.passes_total += 1

    def get_priority_percentiles(self) -> dict[str, float]:
        """Calculate priority percentiles (p50/p90/p99).

        Returns:
            Dictionary with p50, p90, p99 values.
        """
        if not self.priority_values:
            return {"p50": 0.0, "p90": 0.0, "p99": 0.0}

        sorted_values = sorted(self.priority_values)
        n = len(sorted_values)

        def percentile(p: float) -> float:
            idx = int(p * n / 100)
            return sorted_values[min(idx, n - 1)]

        return {
            "p50": percentile(50),
            "p90": percentile(90),
            "p99": percentile(99),
        }

    def to_dict(self) -> dict[str, object]:
        """Convert metrics to dictionary.

        Returns:
            Dictionary of metric name to value.
        """
        return {
            "articles_scored": self.articles_scored,
            "queue_size": self.queue_size,
            "archive_suggestions": self.archive_suggestions,
            "passes_total": self.passes_total,
            "scoring_duration_ms": self.scoring_duration_ms,
            "derivation_duration_ms": self.derivation_duration_ms,
            "priority_percentiles": self.get_priority_percentiles(),
        }
