"""Tests for recording check-ins."""

from attendance_rewards.affirmations import DEFAULT_QUOTES
from attendance_rewards.checkin import TokenValidation, generate_check_in_url
from attendance_rewards.config import CheckInConfig
from attendance_rewards.domain import ArrivalTier
from attendance_rewards.engine import RewardsEngine
from attendance_rewards.errors import ErrorCode, WindowReason
from attendance_rewards.events import CheckInRecorded
from tests.conftest import MONDAY, current_url, denver


class SteppingClock:
    """Returns each instant once, then repeats the last."""

    def __init__(self, instants):
        self.instants = list(instants)

    def now(self):
        if len(self.instants) > 1:
            return self.instants.pop(0)
        return self.instants[0]


class TestSuccessfulCheckIn:
    """Test accepted check-ins and their scoring."""

    def test_early_check_in_earns_two_points(self, engine, employee):
        """07:40 is minute 460, inside the early tier."""
        result = engine.check_in(employee.employee_id, current_url(engine))

        assert result.success is True
        assert result.error is None
        assert result.tier == ArrivalTier.EARLY
        assert result.points_earned == 2
        assert result.message == "Early Bird! +2 points"
        assert result.current_streak == 1
        assert result.bonus_reason is None
        assert result.affirmation in DEFAULT_QUOTES[ArrivalTier.EARLY]

    def test_balances_credited_on_every_counter(self, engine, employee):
        engine.check_in(employee.employee_id, current_url(engine))

        stored = engine.get_employee(employee.employee_id)
        assert stored.total_points == 2
        assert stored.weekly_points == 2
        assert stored.monthly_points == 2
        assert stored.quarterly_points == 2
        assert stored.last_check_in == MONDAY
        assert len(stored.check_ins) == 1
        assert stored.check_ins[0].local_date.isoformat() == "2026-03-02"

    def test_on_time_check_in(self, engine, employee, clock):
        clock.set(denver(2026, 3, 2, 7, 55))
        result = engine.check_in(employee.employee_id, current_url(engine))
        assert result.tier == ArrivalTier.ON_TIME
        assert result.points_earned == 1
        assert result.message == "On Time! +1 point"
        assert result.affirmation in DEFAULT_QUOTES[ArrivalTier.ON_TIME]

    def test_late_check_in_earns_nothing_but_counts(self, engine, employee, clock):
        clock.set(denver(2026, 3, 2, 8, 45))
        result = engine.check_in(employee.employee_id, current_url(engine))
        assert result.success is True
        assert result.tier == ArrivalTier.LATE
        assert result.points_earned == 0
        assert result.message == "Better luck tomorrow!"
        assert result.current_streak == 1

    def test_publishes_check_in_recorded(self, engine, employee, published):
        result = engine.check_in(employee.employee_id, current_url(engine))

        recorded = [e for e in published if isinstance(e, CheckInRecorded)]
        assert len(recorded) == 1
        assert recorded[0].check_in_id == result.check_in_id
        assert recorded[0].tier == "early"
        assert recorded[0].points_earned == 2
        assert recorded[0].metadata.actor_id == employee.employee_id


class TestRejectedCheckIn:
    """Test refusals. Nothing may be written when a check-in is refused."""

    def test_second_check_in_same_day_is_duplicate(self, engine, employee, clock):
        engine.check_in(employee.employee_id, current_url(engine))
        clock.set(denver(2026, 3, 2, 8, 59))

        result = engine.check_in(employee.employee_id, current_url(engine))

        assert result.success is False
        assert result.error == ErrorCode.DUPLICATE_CHECK_IN
        assert result.message == "You have already checked in today. Come back tomorrow!"
        assert result.points_earned == 0
        stored = engine.get_employee(employee.employee_id)
        assert stored.total_points == 2
        assert len(stored.check_ins) == 1

    def test_invalid_token_writes_nothing(self, engine, employee, published):
        result = engine.check_in(employee.employee_id, "https://example.com/not-ours")

        assert result.error == ErrorCode.INVALID_TOKEN
        stored = engine.get_employee(employee.employee_id)
        assert stored.check_ins == []
        assert stored.version == employee.version
        assert published == []

    def test_expired_token(self, engine, employee, clock):
        yesterday = generate_check_in_url(engine.config, MONDAY)
        clock.set(denver(2026, 3, 3, 7, 30))
        result = engine.check_in(employee.employee_id, yesterday)
        assert result.error == ErrorCode.EXPIRED_TOKEN
        assert result.message == "QR code is expired. Please use today's QR code."

    def test_too_early(self, engine, employee, clock):
        clock.set(denver(2026, 3, 2, 5, 45))
        result = engine.check_in(employee.employee_id, current_url(engine))
        assert result.error == ErrorCode.OUTSIDE_TIME_WINDOW
        assert result.window_reason == WindowReason.TOO_EARLY
        assert engine.get_employee(employee.employee_id).check_ins == []

    def test_window_closed(self, engine, employee, clock):
        clock.set(denver(2026, 3, 2, 9, 30))
        result = engine.check_in(employee.employee_id, current_url(engine))
        assert result.error == ErrorCode.OUTSIDE_TIME_WINDOW
        assert result.window_reason == WindowReason.WINDOW_CLOSED

    def test_unknown_employee(self, engine):
        result = engine.check_in("nobody", current_url(engine))
        assert result.error == ErrorCode.EMPLOYEE_NOT_FOUND

    def test_token_checked_before_employee(self, engine):
        assert engine.check_in("nobody", "garbage").error == ErrorCode.INVALID_TOKEN

    def test_rejection_without_error_code_defaults_to_invalid_token(
        self, engine, employee, published, monkeypatch
    ):
        monkeypatch.setattr(
            engine.check_ins.tokens, "validate", lambda raw, now=None: TokenValidation(is_valid=False)
        )

        result = engine.check_in(employee.employee_id, current_url(engine))

        assert result.success is False
        assert result.error == ErrorCode.INVALID_TOKEN
        assert result.message == "Invalid QR code."
        assert engine.get_employee(employee.employee_id).check_ins == []
        assert published == []


class TestLocalCalendarDay:
    """Test that "today" is the calendar day in the configured timezone."""

    def test_evening_check_in_belongs_to_local_day(self, repository, clock, employee):
        config = CheckInConfig(window_start="00:00", window_end="23:59")
        engine = RewardsEngine(repository, config, clock)

        # 21:00 in Denver is already the next day in UTC
        clock.set(denver(2026, 3, 2, 21, 0))
        first = engine.check_in(employee.employee_id, current_url(engine))
        assert first.success is True
        assert engine.get_employee(employee.employee_id).check_ins[0].local_date.isoformat() == (
            "2026-03-02"
        )

        clock.set(denver(2026, 3, 3, 6, 0))
        second = engine.check_in(employee.employee_id, current_url(engine))
        assert second.success is True
        assert second.current_streak == 2

    def test_one_instant_per_attempt(self, repository, employee):
        """A clock ticking past midnight mid-attempt still records the token's day."""
        config = CheckInConfig(window_start="00:00", window_end="23:59")
        url = generate_check_in_url(config, denver(2026, 3, 2, 12, 0))
        clock = SteppingClock(
            [denver(2026, 3, 2, 23, 59).replace(second=59), denver(2026, 3, 3, 0, 0)]
        )
        engine = RewardsEngine(repository, config, clock)

        result = engine.check_in(employee.employee_id, url)

        assert result.success is True
        stored = engine.get_employee(employee.employee_id).check_ins[0]
        assert stored.local_date.isoformat() == "2026-03-02"
        assert stored.timestamp == denver(2026, 3, 2, 23, 59).replace(second=59)
