"""Apply freshness and priority scores across a collection."""

import time
from datetime import datetime

import structlog

from src.config.schemas.engine import EngineConfig
from src.library.models import Article
from src.prioritizer.freshness import compute_freshness
from src.prioritizer.metrics import PrioritizerMetrics
from src.prioritizer.scorer import PriorityScorer, ScorerConfig


logger = structlog.get_logger()


def apply_scores(
    articles: list[Article],
    now: datetime,
    config: EngineConfig | None = None,
    metrics: PrioritizerMetrics | None = None,
) -> list[Article]:
    """Return scored copies of every article.

    Freshness is evaluated first and fed into the priority scorer, so both
    values in a copy come from the same instant. The input list and its
    articles are left untouched.

    Args:
        articles: Articles to score.
        now: Instant of the derivation pass.
        config: Engine configuration.
        metrics: Optional metrics instance.

    Returns:
        New list of Article copies in input order.
    """
    config = config or EngineConfig()
    metrics = metrics or PrioritizerMetrics.get_instance()
    scorer = PriorityScorer(
        ScorerConfig(now=now, scoring=config.scoring, time_fit=config.time_fit)
    )

    start = time.perf_counter()
    scored: list[Article] = []
    for article in articles:
        freshness = compute_freshness(article.saved_at, now, config.scoring)
        components = scorer.score_article(article, freshness)
        scored.append(
            article.model_copy(
                update={
                    "freshness_score": freshness,
                    "priority": components.total_score,
                }
            )
        )
    duration_ms = (time.perf_counter() - start) * 1000

    priorities = [a.priority for a in scored]
    metrics.record_scored(priorities, duration_ms)

    logger.debug(
        "scoring_complete",
        component="prioritizer",
        subcomponent="applicator",
        articles_scored=len(scored),
        min_priority=min(priorities, default=0.0),
        max_priority=max(priorities, default=0.0),
    )

    return scored
