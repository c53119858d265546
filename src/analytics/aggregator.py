"""Reading statistics aggregation."""

import time
from collections import Counter
from datetime import date, datetime, timedelta

import structlog

from src.analytics.constants import DAYS_PER_WEEK, MIN_TOTAL_SAVED
from src.analytics.dates import (
    calendar_day_diff,
    local_date,
    monday_index,
    round_half_up,
)
from src.analytics.models import CreatorCount, HashtagCount, ReadingStats
from src.config.schemas.engine import StatsConfig
from src.library.models import Article, ArticleStatus


logger = structlog.get_logger()


class StatsAggregator:
    """Aggregates a collection into a ReadingStats snapshot.

    Every field is computed independently from the full collection, so the
    aggregator does not depend on scores or on the derived queue. All day
    arithmetic uses calendar dates in the timezone of ``now``.
    """

    def __init__(self, now: datetime, config: StatsConfig | None = None) -> None:
        """Initialize the aggregator.

        Args:
            now: Instant of the derivation pass.
            config: Statistics configuration.
        """
        self._now = now
        self._today = now.date()
        self._config = config or StatsConfig()
        self._log = logger.bind(component="analytics", subcomponent="aggregator")

    def compute(self, articles: list[Article]) -> ReadingStats:
        """Compute the statistics snapshot.

        Args:
            articles: Full collection, archived articles included.

        Returns:
            ReadingStats for this pass.
        """
        start = time.perf_counter()

        active = [a for a in articles if a.is_active]
        read = [a for a in articles if a.status == ArticleStatus.READ]
        read_moments = [a.read_at for a in read if a.read_at is not None]
        read_dates = {local_date(m, self._now) for m in read_moments}

        streak = self._current_streak(read_dates)
        this_week, last_week = self._weekly_totals(read_moments)

        stats = ReadingStats(
            total_read=len(read),
            total_saved=max(MIN_TOTAL_SAVED, len(active)),
            unread_count=sum(1 for a in active if a.status == ArticleStatus.UNREAD),
            top_hashtags=self._top_hashtags(active),
            top_creators=self._top_creators(active),
            weekly_read=self._weekly_histogram(read_moments),
            weekly_growth_percent=growth_percent(this_week, last_week),
            streak=streak,
            best_streak=self._best_streak(read_dates, streak),
            average_reading_time=self._average_reading_time(read),
        )

        self._log.info(
            "stats_computed",
            articles_in=len(articles),
            total_read=stats.total_read,
            total_saved=stats.total_saved,
            streak=stats.streak,
            best_streak=stats.best_streak,
            duration_ms=round((time.perf_counter() - start) * 1000, 2),
        )

        return stats

    def _top_hashtags(self, active: list[Article]) -> list[HashtagCount]:
        """Rank hashtags by occurrence across active articles.

        Ties keep first-seen order.

        Args:
            active: Non-archived articles.

        Returns:
            Top entries, or the single sentinel entry when empty.
        """
        counts: Counter[str] = Counter()
        for article in active:
            # Hashtags behave as a set per article
            counts.update(dict.fromkeys(article.hashtags, 1))

        top = [
            HashtagCount(name=name, count=count)
            for name, count in counts.most_common(self._config.top_n)
        ]
        return top or [HashtagCount.no_data()]

    def _top_creators(self, active: list[Article]) -> list[CreatorCount]:
        """Rank creators by saved-article count.

        Grouped by urlname; the display name comes from the first article
        seen for that creator.

        Args:
            active: Non-archived articles.

        Returns:
            Top entries, or the single sentinel entry when empty.
        """
        counts: Counter[str] = Counter()
        names: dict[str, str] = {}
        for article in active:
            key = article.creator.urlname
            names.setdefault(key, article.creator.nickname)
            counts[key] += 1

        top = [
            CreatorCount(name=names[urlname], urlname=urlname, count=count)
            for urlname, count in counts.most_common(self._config.top_n)
        ]
        return top or [CreatorCount.no_data()]

    def _weekly_histogram(self, read_moments: list[datetime]) -> list[int]:
        """Bucket reads from the last 7 days by weekday.

        Args:
            read_moments: read_at of every read article.

        Returns:
            Seven counts, index 0 = Monday ... 6 = Sunday.
        """
        histogram = [0] * DAYS_PER_WEEK
        for moment in read_moments:
            if 0 <= calendar_day_diff(moment, self._now) < DAYS_PER_WEEK:
                histogram[monday_index(local_date(moment, self._now))] += 1
        return histogram

    def _weekly_totals(self, read_moments: list[datetime]) -> tuple[int, int]:
        """Count reads in this week (days 0-6) and last week (days 7-13).

        Args:
            read_moments: read_at of every read article.

        Returns:
            Tuple of (this week, last week).
        """
        this_week = 0
        last_week = 0
        for moment in read_moments:
            diff = calendar_day_diff(moment, self._now)
            if 0 <= diff < DAYS_PER_WEEK:
                this_week += 1
            elif DAYS_PER_WEEK <= diff < 2 * DAYS_PER_WEEK:
                last_week += 1
        return this_week, last_week

    def _current_streak(self, read_dates: set[date]) -> int:
        """Count consecutive reading days walking back from today.

        A missing read today does not break the streak, since the day is
        not over yet. The first missing day before today ends the walk.

        Args:
            read_dates: Distinct local dates with at least one read.

        Returns:
            Current streak length in days.
        """
        streak = 0
        for offset in range(self._config.streak_horizon_days):
            day = self._today - timedelta(days=offset)
            if day in read_dates:
                streak += 1
            elif offset > 0:
                break
        return streak

    def _best_streak(self, read_dates: set[date], streak: int) -> int:
        """Find the longest run of consecutive reading days.

        Args:
            read_dates: Distinct local dates with at least one read.
            streak: Current streak, used when there are no read dates.

        Returns:
            Longest run length in days.
        """
        if not read_dates:
            return streak

        ordered = sorted(read_dates)
        best = 1
        run = 1
        for previous, current in zip(ordered, ordered[1:], strict=False):
            if (current - previous).days == 1:
                run += 1
                best = max(best, run)
            else:
                run = 1
        return best

    def _average_reading_time(self, read: list[Article]) -> int:
        """Mean reading minutes of read articles, rounded.

        Args:
            read: Articles with status read.

        Returns:
            Rounded mean, or 0 when nothing has been read.
        """
        if not read:
            return 0
        total = sum(a.reading_time_minutes for a in read)
        return round_half_up(total / len(read))


def growth_percent(this_week: int, last_week: int) -> int:
    """Percent change of this week's reads over last week's.

    Args:
        this_week: Reads in days 0-6.
        last_week: Reads in days 7-13.

    Returns:
        Rounded percent change; 100 when last week was empty and this week
        was not, 0 when both were empty.
    """
    if last_week > 0:
        return round_half_up((this_week - last_week) / last_week * 100)
    return 100 if this_week > 0 else 0


def compute_stats(
    articles: list[Article],
    now: datetime,
    config: StatsConfig | None = None,
) -> ReadingStats:
    """Pure function API for statistics aggregation.

    Args:
        articles: Full collection.
        now: Instant of the derivation pass.
        config: Statistics configuration.

    Returns:
        ReadingStats snapshot.
    """
    return StatsAggregator(now=now, config=config).compute(articles)
