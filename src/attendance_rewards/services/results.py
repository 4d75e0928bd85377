"""Typed results returned across the service boundary.

Domain failures never raise: they come back as a result with success=False,
an ErrorCode and a message suitable for showing to the user verbatim.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from attendance_rewards.domain import (
    ArrivalTier,
    BonusGrant,
    CheckInEvent,
    RewardRedemption,
)
from attendance_rewards.errors import ErrorCode, WindowReason


@dataclass(frozen=True)
class CheckInResult:
    """Outcome of a check-in attempt.

    `tier` is the key for the affirmation provider; `affirmation` is the
    text it returned.
    """

    success: bool
    message: str
    points_earned: int = 0
    tier: ArrivalTier | None = None
    error: ErrorCode | None = None
    window_reason: WindowReason | None = None
    check_in_id: str | None = None
    bonus_reason: str | None = None
    current_streak: int | None = None
    new_badges: tuple[str, ...] = ()
    affirmation: str | None = None

    @classmethod
    def failure(
        cls,
        error: ErrorCode,
        message: str,
        window_reason: WindowReason | None = None,
    ) -> CheckInResult:
        return cls(success=False, message=message, error=error, window_reason=window_reason)


@dataclass(frozen=True)
class RedemptionResult:
    """Outcome of redeem, approve or reject."""

    success: bool
    message: str
    error: ErrorCode | None = None
    redemption: RewardRedemption | None = None
    total_points: int | None = None

    @classmethod
    def failure(
        cls,
        error: ErrorCode,
        message: str,
        redemption: RewardRedemption | None = None,
    ) -> RedemptionResult:
        return cls(success=False, message=message, error=error, redemption=redemption)


@dataclass(frozen=True)
class BonusResult:
    """Outcome of an administrator bonus grant."""

    success: bool
    message: str
    error: ErrorCode | None = None
    grant: BonusGrant | None = None
    total_points: int | None = None
    new_badges: tuple[str, ...] = ()


@dataclass(frozen=True)
class LeaderboardEntry:
    rank: int
    employee_id: str
    name: str
    points: int
    current_streak: int


@dataclass(frozen=True)
class EmployeeStats:
    """Dashboard summary for one employee."""

    employee_id: str
    as_of: date
    today_points: int
    total_points: int
    weekly_points: int
    monthly_points: int
    quarterly_points: int
    current_streak: int
    longest_streak: int
    recent_check_ins: tuple[CheckInEvent, ...]


@dataclass(frozen=True)
class PendingRedemption:
    """A redemption awaiting administrator decision."""

    employee_id: str
    employee_name: str
    redemption: RewardRedemption
