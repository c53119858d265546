"""Date and bucketing helpers shared by scoring and statistics."""

import math
from datetime import date, datetime

from src.analytics.constants import SECONDS_PER_DAY


def days_since(then: datetime, now: datetime) -> float:
    """Fractional days elapsed between two instants.

    Args:
        then: Earlier instant.
        now: Reference instant.

    Returns:
        Elapsed days (negative if then is after now).
    """
    return (now - then).total_seconds() / SECONDS_PER_DAY


def local_date(moment: datetime, now: datetime) -> date:
    """Calendar date of an instant in the reference instant's timezone.

    Args:
        moment: Instant to convert.
        now: Reference instant carrying the local timezone.

    Returns:
        Local calendar date.
    """
    if moment.tzinfo is not None and now.tzinfo is not None:
        return moment.astimezone(now.tzinfo).date()
    return moment.date()


def calendar_day_diff(moment: datetime, now: datetime) -> int:
    """Whole calendar days between an instant's local date and today.

    Args:
        moment: Instant to compare.
        now: Reference instant ("today").

    Returns:
        0 for today, 1 for yesterday, negative for future dates.
    """
    return (now.date() - local_date(moment, now)).days


def monday_index(day: date) -> int:
    """Weekday bucket with Monday = 0 ... Sunday = 6."""
    return day.weekday()


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward +infinity."""
    return math.floor(value + 0.5)
