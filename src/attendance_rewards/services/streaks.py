"""Streak derivation and milestone bonuses."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

from attendance_rewards.config import CheckInConfig, StreakBonus
from attendance_rewards.domain import CheckInEvent, Employee


@dataclass(frozen=True)
class StreakUpdate:
    """Outcome of updating an employee's streak after a check-in."""

    current_streak: int
    longest_streak: int
    bonus: StreakBonus | None = None


def milestone_bonus(streak: int, config: CheckInConfig) -> StreakBonus | None:
    """Return the bonus for a streak length, matched by exact equality."""
    for bonus in config.streak_bonuses:
        if bonus.streak_length == streak:
            return bonus
    return None


def update_streak(
    employee: Employee, event: CheckInEvent, config: CheckInConfig
) -> StreakUpdate:
    """Advance or reset the streak for a newly appended check-in.

    The streak continues only when a check-in exists on the local day
    immediately before the event's day. A milestone bonus is merged into the
    event itself, so it is credited together with the base points.
    """
    previous_day = event.local_date - timedelta(days=1)
    if employee.check_in_on(previous_day) is not None:
        employee.current_streak += 1
    else:
        employee.current_streak = 1

    employee.longest_streak = max(employee.longest_streak, employee.current_streak)

    bonus = milestone_bonus(employee.current_streak, config)
    if bonus is not None:
        event.points_earned += bonus.points
        event.bonus_reason = bonus.reason

    return StreakUpdate(
        current_streak=employee.current_streak,
        longest_streak=employee.longest_streak,
        bonus=bonus,
    )
