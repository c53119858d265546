"""Constants for the analytics module."""

from typing import Final


DAYS_PER_WEEK: Final[int] = 7

SECONDS_PER_DAY: Final[int] = 24 * 60 * 60

# Sentinel entries returned when there is nothing to rank
NO_DATA_NAME: Final[str] = "no data"
NO_DATA_URLNAME: Final[str] = "-"

# Divisor floor for totals used in ratios
MIN_TOTAL_SAVED: Final[int] = 1
