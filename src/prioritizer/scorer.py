"""Priority scoring for saved articles."""

from dataclasses import dataclass, field
from datetime import datetime

from src.config.schemas.engine import ScoringConfig, TimeFitConfig
from src.library.models import Article, ArticleStatus
from src.prioritizer.models import PriorityComponents
from src.prioritizer.time_fit import fits_time_slot


@dataclass
class ScorerConfig:
    """Configuration bundle for PriorityScorer.

    Attributes:
        now: Instant of the derivation pass (local time of the reader).
        scoring: Priority weights.
        time_fit: Reading-slot policy.
    """

    now: datetime
    scoring: ScoringConfig = field(default_factory=ScoringConfig)
    time_fit: TimeFitConfig = field(default_factory=TimeFitConfig)


class PriorityScorer:
    """Computes the read-next priority of an article.

    Scoring formula:
        priority = min(cap, status_score + freshness_score
                            + time_fit_score + popularity_score)

    Where:
        - status_score: unread weight, or the partial reading weight
        - freshness_score: precomputed freshness times the freshness weight
        - time_fit_score: bonus when the article fits the current hour
        - popularity_score: bonus when likes exceed the threshold
    """

    def __init__(self, config: ScorerConfig) -> None:
        """Initialize the scorer.

        Args:
            config: Scorer configuration bundle.
        """
        self._scoring = config.scoring
        self._time_fit = config.time_fit
        self._now = config.now

    @property
    def now(self) -> datetime:
        """Get the reference instant of this scorer."""
        return self._now

    def score_article(
        self, article: Article, freshness: float | None = None
    ) -> PriorityComponents:
        """Compute the priority breakdown for a single article.

        Args:
            article: Article to score.
            freshness: Precomputed freshness; the article's stored value is
                used when omitted.

        Returns:
            PriorityComponents with the capped total.
        """
        if freshness is None:
            freshness = article.freshness_score

        status_score = self._compute_status_score(article)
        freshness_score = freshness * self._scoring.freshness_weight
        time_fit_score = self._compute_time_fit_score(article)
        popularity_score = self._compute_popularity_score(article)

        total = status_score + freshness_score + time_fit_score + popularity_score

        return PriorityComponents(
            status_score=status_score,
            freshness_score=freshness_score,
            time_fit_score=time_fit_score,
            popularity_score=popularity_score,
            total_score=min(self._scoring.priority_cap, total),
        )

    def _compute_status_score(self, article: Article) -> float:
        """Compute status contribution.

        Args:
            article: Article to score.

        Returns:
            Status score component.
        """
        if article.status == ArticleStatus.UNREAD:
            return self._scoring.unread_weight
        if article.status == ArticleStatus.READING:
            return self._scoring.reading_weight
        return 0.0

    def _compute_time_fit_score(self, article: Article) -> float:
        """Compute reading-slot bonus.

        Args:
            article: Article to score.

        Returns:
            Time-fit score component.
        """
        if fits_time_slot(
            self._now.hour, article.reading_time_minutes, self._time_fit
        ):
            return self._scoring.time_fit_bonus
        return 0.0

    def _compute_popularity_score(self, article: Article) -> float:
        """Compute popularity bonus.

        Args:
            article: Article to score.

        Returns:
            Popularity score component.
        """
        if article.like_count > self._scoring.popularity_like_threshold:
            return self._scoring.popularity_bonus
        return 0.0


def score_article_pure(
    article: Article,
    now: datetime,
    freshness: float | None = None,
    scoring: ScoringConfig | None = None,
    time_fit: TimeFitConfig | None = None,
) -> float:
    """Pure function API for priority scoring.

    Args:
        article: Article to score.
        now: Instant of the derivation pass.
        freshness: Precomputed freshness (article's stored value if omitted).
        scoring: Priority weights.
        time_fit: Reading-slot policy.

    Returns:
        Priority in [0, 1].
    """
    scorer = PriorityScorer(
        ScorerConfig(
            scoring=scoring or ScoringConfig(),
            time_fit=time_fit or TimeFitConfig(),
            now=now,
        )
    )
    return scorer.score_article(article, freshness).total_score
