"""Metrics collection for the article store."""

from dataclasses import dataclass, field
from typing import ClassVar


@dataclass
class StoreMetrics:
    """Metrics for article store operations.

    Attributes:
        articles_inserted_total: Articles inserted.
        articles_updated_total: Article rows changed by updates.
        articles_deleted_total: Article rows deleted.
        db_tx_duration_ms: Cumulative transaction duration in milliseconds.
        db_tx_count: Number of committed transactions.
        db_tx_failed_total: Number of rolled back transactions.
    """

    articles_inserted_total: int = 0
    articles_updated_total: int = 0
    articles_deleted_total: int = 0
    db_tx_duration_ms: float = 0.0
    db_tx_count: int = 0
    db_tx_failed_total: int = 0

    _instance: ClassVar["StoreMetrics | None"] = None

    @classmethod
    def get_instance(cls) -> "StoreMetrics":
        """Get singleton metrics instance."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset metrics (primarily for testing)."""
        cls._instance = None

    def record_inserted(self, count: int = 1) -> None:
        """Record inserted articles."""
        self.articles_inserted_total += count

    def record_updated(self, count: int) -> None:
        """Record updated article rows."""
        self.articles_updated_total += count

    def record_deleted(self, count: int) -> None:
        """Record deleted article rows."""
        self.articles_deleted_total += count

    def record_tx_duration(self, duration_ms: float) -> None:
        """Record transaction duration.

        Args:
            duration_ms: Duration in milliseconds.
        """
        self.db_tx_duration_ms += duration_ms
        self.db_tx_count += 1

    def record_tx_failed(self) -> None:
        """Record a rolled back transaction."""
        self.db_tx_failed_total += 1

    def to_dict(self) -> dict[str, float | int]:
        """Convert metrics to dictionary.

        Returns:
            Dictionary of metric name to value.
        """
        return {
            "articles_inserted_total": self.articles_inserted_total,
            "articles_updated_total": self.articles_updated_total,
            "articles_deleted_total": self.articles_deleted_total,
            "db_tx_duration_ms": self.db_tx_duration_ms,
            "db_tx_count": self.db_tx_count,
            "db_tx_failed_total": self.db_tx_failed_total,
        }

    @property
    def avg_tx_duration_ms(self) -> float:
        """Calculate average transaction duration.

        Returns:
            Average duration in milliseconds.
        """
        if self.db_tx_count == 0:
            return 0.0
        return self.db_tx_duration_ms / self.db_tx_count


@dataclass
class TransactionContext:
    """Context for a single transaction with timing.

    Attributes:
        tx_id: Unique transaction identifier.
        start_time_ns: Start time in nanoseconds.
        operation: The operation being performed.
    """

    tx_id: str
    start_time_ns: int
    operation: str
    affected_rows: int = field(default=0)

    def add_affected_rows(self, rows: int) -> None:
        """Add to the affected row count.

        Args:
            rows: Number of rows affected.
        """
        self.affected_rows += rows
