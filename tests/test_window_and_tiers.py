"""Tests for the check-in window gate and arrival tiers."""

from datetime import datetime, timezone

import pytest

from attendance_rewards.checkin import WindowGate, classify_arrival, minutes_of_day
from attendance_rewards.clock import FixedClock
from attendance_rewards.config import CheckInConfig, TierPoints
from attendance_rewards.domain import ArrivalTier
from attendance_rewards.errors import ErrorCode, WindowReason
from tests.conftest import denver


def gate_at(config: CheckInConfig, instant: datetime) -> WindowGate:
    return WindowGate(config, FixedClock(instant))


class TestWindowGate:
    """Test the inclusive daily window."""

    def test_inside_window(self, config):
        result = gate_at(config, denver(2026, 3, 2, 7, 40)).check()
        assert result.is_valid is True
        assert result.error is None
        assert result.current_time == "07:40"

    @pytest.mark.parametrize("hour,minute", [(6, 0), (9, 0)])
    def test_bounds_are_inclusive(self, config, hour, minute):
        assert gate_at(config, denver(2026, 3, 2, hour, minute)).check().is_valid is True

    def test_before_window_is_too_early(self, config):
        result = gate_at(config, denver(2026, 3, 2, 5, 59)).check()
        assert result.is_valid is False
        assert result.error == ErrorCode.OUTSIDE_TIME_WINDOW
        assert result.window_reason == WindowReason.TOO_EARLY
        assert result.reason == "Check-in window hasn't opened yet. Please wait until 06:00."

    def test_after_window_is_closed(self, config):
        result = gate_at(config, denver(2026, 3, 2, 9, 1)).check()
        assert result.window_reason == WindowReason.WINDOW_CLOSED
        assert result.reason == (
            "Check-in window has closed. Check-in is only available between 06:00 - 09:00."
        )

    def test_uses_configured_timezone_not_utc(self, config):
        """13:30 UTC is 06:30 in Denver during standard time."""
        instant = datetime(2026, 3, 2, 13, 30, tzinfo=timezone.utc)
        result = gate_at(config, instant).check()
        assert result.is_valid is True
        assert result.current_time == "06:30"

    def test_follows_daylight_saving(self, config):
        """After the March switch Denver is UTC-6."""
        instant = datetime(2026, 3, 9, 12, 30, tzinfo=timezone.utc)
        assert gate_at(config, instant).check().current_time == "06:30"

    def test_custom_window(self):
        config = CheckInConfig(window_start="07:30", window_end="10:15")
        result = gate_at(config, denver(2026, 3, 2, 7, 0)).check()
        assert result.reason == "Check-in window hasn't opened yet. Please wait until 07:30."


    def test_explicit_instant_overrides_clock(self, config):
        gate = gate_at(config, denver(2026, 3, 2, 7, 40))
        result = gate.check(denver(2026, 3, 2, 5, 0))
        assert result.window_reason == WindowReason.TOO_EARLY
        assert result.current_time == "05:00"


class TestMinutesOfDay:
    def test_local_minutes(self, config):
        assert minutes_of_day(denver(2026, 3, 2, 7, 40), config) == 460


class TestClassifyArrival:
    """Test tier thresholds: early <= 465 < on time <= 480 < late."""

    @pytest.mark.parametrize(
        "minute,tier,points",
        [
            (360, ArrivalTier.EARLY, 2),
            (460, ArrivalTier.EARLY, 2),
            (465, ArrivalTier.EARLY, 2),
            (466, ArrivalTier.ON_TIME, 1),
            (480, ArrivalTier.ON_TIME, 1),
            (481, ArrivalTier.LATE, 0),
            (540, ArrivalTier.LATE, 0),
            (541, ArrivalTier.LATE, 0),
        ],
    )
    def test_default_thresholds(self, config, minute, tier, points):
        result = classify_arrival(minute, config)
        assert result.tier == tier
        assert result.points == points

    def test_custom_tier_points(self):
        config = CheckInConfig(tier_points=TierPoints(early=5, on_time=3, late=1))
        assert classify_arrival(400, config).points == 5
        assert classify_arrival(470, config).points == 3
        assert classify_arrival(500, config).points == 1
