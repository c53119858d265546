"""Read-next queue and archive suggestion derivation."""

import time

import structlog

from src.config.schemas.engine import QueueConfig
from src.library.models import ArchiveReason, ArchiveSuggestion, Article, ArticleStatus
from src.prioritizer.metrics import PrioritizerMetrics


logger = structlog.get_logger()


def _is_queue_candidate(article: Article) -> bool:
    """Check if an article may enter the queue or archive suggestions.

    Args:
        article: Article to check.

    Returns:
        True for active, unread articles.
    """
    return article.is_active and article.status == ArticleStatus.UNREAD


class QueueDeriver:
    """Derives the read-next queue and archive suggestions.

    Both views are recomputed from scratch on every call; the deriver keeps
    no state between passes.

    Enforces:
    - queue_size: Maximum entries in the queue
    - archive_freshness_threshold: Freshness below which unread items are
      suggested for archival
    - low_freshness_threshold: Freshness below which the suggestion is
      tagged low_freshness instead of unread_30_days
    """

    def __init__(
        self,
        queue_config: QueueConfig | None = None,
        metrics: PrioritizerMetrics | None = None,
    ) -> None:
        """Initialize the deriver.

        Args:
            queue_config: Queue configuration.
            metrics: Optional metrics instance.
        """
        self._config = queue_config or QueueConfig()
        self._metrics = metrics or PrioritizerMetrics.get_instance()
        self._log = logger.bind(component="prioritizer", subcomponent="deriver")

    def derive(
        self, scored: list[Article]
    ) -> tuple[list[Article], list[ArchiveSuggestion]]:
        """Derive both views from a scored collection.

        Args:
            scored: Articles with freshness and priority applied.

        Returns:
            Tuple of (queue, archive suggestions).
        """
        start = time.perf_counter()
        queue = self.derive_queue(scored)
        suggestions = self.suggest_archive(scored)
        duration_ms = (time.perf_counter() - start) * 1000

        self._metrics.record_derived(len(queue), len(suggestions), duration_ms)
        self._log.info(
            "views_derived",
            input_count=len(scored),
            queue_count=len(queue),
            archive_suggestion_count=len(suggestions),
        )

        return queue, suggestions

    def derive_queue(self, scored: list[Article]) -> list[Article]:
        """Build the bounded read-next queue.

        Order:
        1. priority descending
        2. input order (stable sort), i.e. most recently saved first when
           the collection arrives newest first

        Args:
            scored: Articles with priority applied.

        Returns:
            At most queue_size unread articles.
        """
        candidates = [a for a in scored if _is_queue_candidate(a)]
        ordered = sorted(candidates, key=lambda a: -a.priority)
        return ordered[: self._config.queue_size]

    def suggest_archive(self, scored: list[Article]) -> list[ArchiveSuggestion]:
        """Propose stale unread articles for archival.

        No cap is applied and filter order is preserved.

        Args:
            scored: Articles with freshness applied.

        Returns:
            Archive suggestions with their reasons.
        """
        suggestions: list[ArchiveSuggestion] = []
        for article in scored:
            if not _is_queue_candidate(article):
                continue
            if article.freshness_score >= self._config.archive_freshness_threshold:
                continue
            suggestions.append(
                ArchiveSuggestion(
                    article=article,
                    archive_reason=self._archive_reason(article),
                )
            )
        return suggestions

    def _archive_reason(self, article: Article) -> ArchiveReason:
        """Tag why an article is suggested for archival.

        Args:
            article: Suggested article.

        Returns:
            LOW_FRESHNESS below the low threshold, UNREAD_30_DAYS otherwise.
        """
        if article.freshness_score < self._config.low_freshness_threshold:
            return ArchiveReason.LOW_FRESHNESS
        return ArchiveReason.UNREAD_30_DAYS


def derive_queue(
    scored: list[Article], queue_config: QueueConfig | None = None
) -> list[Article]:
    """Pure function API for queue derivation.

    Args:
        scored: Articles with priority applied.
        queue_config: Queue configuration.

    Returns:
        Bounded read-next queue.
    """
    return QueueDeriver(queue_config).derive_queue(scored)


def suggest_archive(
    scored: list[Article], queue_config: QueueConfig | None = None
) -> list[ArchiveSuggestion]:
    """Pure function API for archive suggestions.

    Args:
        scored: Articles with freshness applied.
        queue_config: Queue configuration.

    Returns:
        Archive suggestions in filter order.
    """
    return QueueDeriver(queue_config).suggest_archive(scored)
