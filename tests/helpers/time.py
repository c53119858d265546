"""Shared, deterministic timestamps for tests."""

from datetime import UTC, datetime, timedelta
from zoneinfo import ZoneInfo


# Wednesday 10:00 UTC. Hour 10 is outside the commute and lunch windows,
# so only short reads (<= 10 min) get the time-fit bonus.
FIXED_NOW = datetime(2025, 6, 11, 10, 0, 0, tzinfo=UTC)

TOKYO = ZoneInfo("Asia/Tokyo")


def days_ago(days: float, now: datetime = FIXED_NOW) -> datetime:
    """Instant a number of days before now."""
    return now - timedelta(days=days)


def at_hour(hour: int, now: datetime = FIXED_NOW) -> datetime:
    """Same calendar day as now, at the given hour."""
    return now.replace(hour=hour, minute=0, second=0, microsecond=0)
