"""One full derivation pass over a collection snapshot."""

from datetime import datetime

import structlog

from src.analytics.aggregator import StatsAggregator
from src.config.schemas.engine import EngineConfig
from src.library.models import Article
from src.prioritizer.applicator import apply_scores
from src.prioritizer.deriver import QueueDeriver
from src.prioritizer.metrics import PrioritizerMetrics
from src.prioritizer.models import DerivedViews


logger = structlog.get_logger()


def derive_views(
    articles: list[Article],
    now: datetime,
    config: EngineConfig | None = None,
    metrics: PrioritizerMetrics | None = None,
) -> DerivedViews:
    """Recompute every derived view from scratch.

    Flow:
        articles -> apply_scores -> QueueDeriver (queue, archive suggestions)
        articles -> StatsAggregator (statistics, independent of scores)

    The same ``now`` is used for freshness, time-fit and statistics so a
    pass straddling an hour or midnight stays internally consistent.

    Args:
        articles: Collection snapshot.
        now: Instant sampled once for this pass, in the reader's timezone.
        config: Engine configuration.
        metrics: Optional metrics instance.

    Returns:
        DerivedViews for this pass.
    """
    config = config or EngineConfig()

    scored = apply_scores(articles, now, config=config, metrics=metrics)
    queue, suggestions = QueueDeriver(config.queue, metrics=metrics).derive(scored)
    stats = StatsAggregator(now=now, config=config.stats).compute(articles)

    logger.info(
        "derivation_pass_complete",
        component="prioritizer",
        articles_in=len(articles),
        queue_count=len(queue),
        archive_suggestion_count=len(suggestions),
        now=now.isoformat(),
    )

    return DerivedViews(
        now=now,
        articles=scored,
        queue=queue,
        archive_suggestions=suggestions,
        stats=stats,
    )
