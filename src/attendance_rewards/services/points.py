"""Point counters and balance reconstruction.

Every credit and debit applies to all four counters (total, weekly,
monthly, quarterly). The period counters are never reset here.
"""

from __future__ import annotations

from dataclasses import dataclass

from attendance_rewards.domain import Employee


def credit(employee: Employee, points: int) -> None:
    """Add points to every counter."""
    if points < 0:
        raise ValueError("Credit must not be negative")
    employee.total_points += points
    employee.weekly_points += points
    employee.monthly_points += points
    employee.quarterly_points += points


def debit(employee: Employee, points: int) -> None:
    """Remove points from every counter."""
    if points < 0:
        raise ValueError("Debit must not be negative")
    employee.total_points -= points
    employee.weekly_points -= points
    employee.monthly_points -= points
    employee.quarterly_points -= points


def expected_total(employee: Employee) -> int:
    """Rebuild the total balance from the employee's history.

    Balance = check-in points + bonus grants - cost of redemptions that
    were not rejected.
    """
    earned = sum(event.points_earned for event in employee.check_ins)
    granted = sum(grant.points_awarded for grant in employee.bonus_grants)
    held = sum(r.points_cost for r in employee.redemptions if r.holds_points)
    return earned + granted - held


@dataclass(frozen=True)
class BalanceCheck:
    """Comparison of the recorded balance against the rebuilt one."""

    employee_id: str
    recorded: int
    expected: int

    @property
    def is_balanced(self) -> bool:
        return self.recorded == self.expected

    @property
    def drift(self) -> int:
        return self.recorded - self.expected


def verify_balance(employee: Employee) -> BalanceCheck:
    return BalanceCheck(
        employee_id=employee.employee_id,
        recorded=employee.total_points,
        expected=expected_total(employee),
    )
