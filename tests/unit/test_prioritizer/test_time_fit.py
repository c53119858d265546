"""Tests for the reading-slot heuristic."""

import pytest

from src.config.schemas.engine import TimeFitConfig
from src.prioritizer.time_fit import fits_time_slot, time_slot_for_hour


class TestFitsTimeSlot:
    """Tests for fits_time_slot."""

    def test_eight_minutes_fits_morning_commute(self) -> None:
        """Test an 8-minute read fits at 7:00."""
        assert fits_time_slot(7, 8) is True

    def test_afternoon_uses_default_rule(self) -> None:
        """Test 15:00 falls through to the default 10-minute rule.

        The policy table decides here: an 8-minute read fits at 15:00. This
        intentionally differs from the worked example that expects it not to
        fit; the example contradicts the table it illustrates.
        """
        assert fits_time_slot(15, 8) is True
        assert fits_time_slot(15, 10) is True
        assert fits_time_slot(15, 11) is False

    @pytest.mark.parametrize(
        ("hour", "minutes", "expected"),
        [
            (6, 10, True),
            (6, 11, False),
            (8, 11, False),
            (9, 10, True),
            (9, 11, False),
            (12, 15, True),
            (13, 15, True),
            (13, 16, False),
            (14, 15, False),
            (19, 11, False),
            (20, 120, True),
            (23, 500, True),
            (0, 10, True),
            (3, 30, False),
        ],
    )
    def test_policy_table(self, hour: int, minutes: int, expected: bool) -> None:
        """Test window boundaries of the policy table."""
        assert fits_time_slot(hour, minutes) is expected

    def test_unknown_reading_time_always_fits(self) -> None:
        """Test reading time 0 (unknown) fits every slot."""
        assert all(fits_time_slot(hour, 0) for hour in range(24))

    def test_custom_policy(self) -> None:
        """Test windows and limits come from the policy."""
        policy = TimeFitConfig(morning_window=(5, 7), morning_max_minutes=3)

        assert fits_time_slot(5, 3, policy) is True
        assert fits_time_slot(5, 4, policy) is False
        # 7:00 is outside the custom morning window
        assert fits_time_slot(7, 8, policy) is True


class TestTimeSlotForHour:
    """Tests for time_slot_for_hour."""

    @pytest.mark.parametrize(
        ("hour", "slot"),
        [
            (4, "night"),
            (5, "morning"),
            (11, "morning"),
            (12, "afternoon"),
            (16, "afternoon"),
            (17, "evening"),
            (20, "evening"),
            (21, "night"),
            (0, "night"),
        ],
    )
    def test_slots(self, hour: int, slot: str) -> None:
        """Test every hour maps to its display slot."""
        assert time_slot_for_hour(hour) == slot
