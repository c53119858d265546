"""Tests for the freshness decay model."""

import pytest

from src.config.schemas.engine import ScoringConfig
from src.prioritizer.freshness import compute_freshness
from tests.helpers.time import FIXED_NOW, days_ago


class TestComputeFreshness:
    """Tests for compute_freshness."""

    def test_just_saved_is_fully_fresh(self) -> None:
        """Test an article saved now has freshness 1."""
        assert compute_freshness(FIXED_NOW, FIXED_NOW) == 1.0

    def test_linear_decay_halfway(self) -> None:
        """Test freshness is 0.5 halfway through the 60-day window."""
        assert compute_freshness(days_ago(30), FIXED_NOW) == pytest.approx(0.5)

    def test_fractional_days_count(self) -> None:
        """Test decay uses fractional days, not whole days."""
        assert compute_freshness(days_ago(1.5), FIXED_NOW) == pytest.approx(
            1 - 1.5 / 60
        )

    @pytest.mark.parametrize("age_days", [60, 61, 100, 1000])
    def test_zero_at_and_after_window(self, age_days: int) -> None:
        """Test freshness is exactly 0 from day 60 on."""
        assert compute_freshness(days_ago(age_days), FIXED_NOW) == 0.0

    def test_future_saved_at_clamps_to_one(self) -> None:
        """Test a saved_at after now clamps to 1 instead of exceeding it."""
        assert compute_freshness(days_ago(-3), FIXED_NOW) == 1.0

    def test_non_increasing_and_bounded(self) -> None:
        """Test freshness never increases with age and stays in [0, 1]."""
        values = [compute_freshness(days_ago(d / 2), FIXED_NOW) for d in range(200)]

        assert all(0.0 <= v <= 1.0 for v in values)
        assert all(a >= b for a, b in zip(values, values[1:], strict=False))

    def test_custom_decay_window(self) -> None:
        """Test the decay window is configurable."""
        scoring = ScoringConfig(freshness_decay_days=10)

        assert compute_freshness(days_ago(5), FIXED_NOW, scoring) == pytest.approx(0.5)
        assert compute_freshness(days_ago(10), FIXED_NOW, scoring) == 0.0
