"""Constants for the prioritizer module."""

from typing import Final


# Display slots used for queue headings: (slot, start_hour, end_hour)
TIME_SLOTS: Final[tuple[tuple[str, int, int], ...]] = (
    ("morning", 5, 12),
    ("afternoon", 12, 17),
    ("evening", 17, 21),
)
DEFAULT_TIME_SLOT: Final[str] = "night"
