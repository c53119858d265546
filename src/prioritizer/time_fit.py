"""Reading-slot heuristic."""

from src.config.schemas.engine import TimeFitConfig
from src.prioritizer.constants import DEFAULT_TIME_SLOT, TIME_SLOTS


_DEFAULT_TIME_FIT = TimeFitConfig()


def fits_time_slot(
    hour: int,
    reading_time_minutes: int,
    policy: TimeFitConfig | None = None,
) -> bool:
    """Check if an article fits the reader's current time slot.

    Rules are evaluated in order and the first match wins:
        1. Morning commute window: short reads only.
        2. Lunch window: slightly longer reads.
        3. Evening onward: everything fits.
        4. Any other hour: short reads only.

    Args:
        hour: Local hour of day (0-23).
        reading_time_minutes: Estimated reading duration.
        policy: Slot policy (defaults to 6-9 / 12-14 / 20+).

    Returns:
        True if the article fits the slot.
    """
    policy = policy or _DEFAULT_TIME_FIT

    morning_start, morning_end = policy.morning_window
    if morning_start <= hour < morning_end:
        return reading_time_minutes <= policy.morning_max_minutes

    lunch_start, lunch_end = policy.lunch_window
    if lunch_start <= hour < lunch_end:
        return reading_time_minutes <= policy.lunch_max_minutes

    if hour >= policy.evening_start_hour:
        return True

    return reading_time_minutes <= policy.default_max_minutes


def time_slot_for_hour(hour: int) -> str:
    """Label the part of the day an hour falls into."""
    for slot, start, end in TIME_SLOTS:
        if start <= hour < end:
            return slot
    return DEFAULT_TIME_SLOT
