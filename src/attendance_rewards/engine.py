"""Rewards engine facade.

Pattern:
    engine = RewardsEngine(
        repository=InMemoryEmployeeRepository(),
        config=CheckInConfig(timezone="America/Denver"),
        clock=SystemClock(),
    )
    employee = engine.create_employee("Sarah Johnson", "sarah@company.com")
    result = engine.check_in(employee.employee_id, scanned_url)

All state lives behind the injected repository. The engine holds no
employee data of its own.
"""

from __future__ import annotations

import logging

from attendance_rewards.affirmations import AffirmationProvider
from attendance_rewards.catalog import BADGE_CATALOG
from attendance_rewards.checkin import CheckInCode, TokenValidation, build_check_in_code
from attendance_rewards.clock import Clock, SystemClock
from attendance_rewards.config import CheckInConfig
from attendance_rewards.domain import (
    BadgeDefinition,
    Employee,
    PointsPeriod,
    RedemptionStatus,
    RewardDefinition,
    RotationStrategy,
    new_id,
)
from attendance_rewards.events import EventEmitter
from attendance_rewards.repositories.base import EmployeeRepository
from attendance_rewards.services.badges import BadgeEngine
from attendance_rewards.services.checkin_service import CheckInService
from attendance_rewards.services.context import ServiceContext
from attendance_rewards.services.locking import EmployeeLockRegistry
from attendance_rewards.services.points import BalanceCheck, verify_balance
from attendance_rewards.services.results import (
    BonusResult,
    CheckInResult,
    EmployeeStats,
    LeaderboardEntry,
    PendingRedemption,
    RedemptionResult,
)
from attendance_rewards.services.reward_service import RewardService

logger = logging.getLogger(__name__)

RECENT_CHECK_IN_LIMIT = 7


class RewardsEngine:
    """Entry point for every check-in and rewards operation."""

    def __init__(
        self,
        repository: EmployeeRepository,
        config: CheckInConfig | None = None,
        clock: Clock | None = None,
        emitter: EventEmitter | None = None,
        affirmations: AffirmationProvider | None = None,
        badge_engine: BadgeEngine | None = None,
    ):
        config = config or CheckInConfig()
        self.context = ServiceContext(
            repository=repository,
            config=config,
            clock=clock or SystemClock(),
            emitter=emitter or EventEmitter(),
            locks=EmployeeLockRegistry(),
            badge_engine=badge_engine,
        )
        self.check_ins = CheckInService(self.context, affirmations)
        self.rewards = RewardService(self.context)

    @property
    def repository(self) -> EmployeeRepository:
        return self.context.repository

    @property
    def config(self) -> CheckInConfig:
        return self.context.config

    @property
    def clock(self) -> Clock:
        return self.context.clock

    @property
    def emitter(self) -> EventEmitter:
        return self.context.emitter

    # -------------------------------------------------------------------------
    # Profiles
    # -------------------------------------------------------------------------

    def create_employee(self, name: str, email: str) -> Employee:
        """Create an employee profile with empty balances."""
        name, email = name.strip(), email.strip()
        if not name or not email:
            raise ValueError("name and email are required")
        employee = Employee(
            employee_id=new_id(),
            name=name,
            email=email,
            created_at=self.clock.now(),
        )
        self.repository.save(employee)
        logger.info("Created employee %s (%s)", employee.employee_id, email)
        return employee

    def get_employee(self, employee_id: str) -> Employee | None:
        return self.repository.load(employee_id)

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def check_in(self, employee_id: str, raw_token: str) -> CheckInResult:
        return self.check_ins.check_in(employee_id, raw_token)

    def redeem(self, employee_id: str, reward_id: str) -> RedemptionResult:
        return self.rewards.redeem(employee_id, reward_id)

    def approve(self, redemption_id: str, decided_by: str | None = None) -> RedemptionResult:
        return self.rewards.approve(redemption_id, decided_by)

    def reject(self, redemption_id: str, decided_by: str | None = None) -> RedemptionResult:
        return self.rewards.reject(redemption_id, decided_by)

    def grant_bonus(
        self,
        employee_id: str,
        points: int,
        reason: str,
        granted_by: str | None = None,
    ) -> BonusResult:
        return self.rewards.grant_bonus(employee_id, points, reason, granted_by)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def validate_token(self, raw_token: str) -> TokenValidation:
        return self.check_ins.tokens.validate(raw_token)

    def check_in_code(self, strategy: RotationStrategy | None = None) -> CheckInCode:
        """The code an administrator should display right now."""
        return build_check_in_code(self.config, self.clock.now(), strategy)

    def reward_catalog(self) -> list[RewardDefinition]:
        return self.rewards.catalog()

    def badge_catalog(self) -> list[BadgeDefinition]:
        return list(BADGE_CATALOG.values())

    def leaderboard(
        self,
        period: PointsPeriod = PointsPeriod.ALL,
        limit: int | None = None,
    ) -> list[LeaderboardEntry]:
        """Employees ranked by the counter for `period`, highest first."""
        ranked = sorted(
            self.repository.list_employees(),
            key=lambda e: (-e.points_for(period), e.name.lower(), e.employee_id),
        )
        if limit is not None:
            ranked = ranked[:limit]
        return [
            LeaderboardEntry(
                rank=index,
                employee_id=e.employee_id,
                name=e.name,
                points=e.points_for(period),
                current_streak=e.current_streak,
            )
            for index, e in enumerate(ranked, start=1)
        ]

    def employee_stats(self, employee_id: str) -> EmployeeStats | None:
        employee = self.repository.load(employee_id)
        if employee is None:
            return None
        today = self.context.local_date(self.clock.now())
        recent = employee.check_ins[-RECENT_CHECK_IN_LIMIT:]
        return EmployeeStats(
            employee_id=employee.employee_id,
            as_of=today,
            today_points=sum(e.points_earned for e in employee.check_ins if e.local_date == today),
            total_points=employee.total_points,
            weekly_points=employee.weekly_points,
            monthly_points=employee.monthly_points,
            quarterly_points=employee.quarterly_points,
            current_streak=employee.current_streak,
            longest_streak=employee.longest_streak,
            recent_check_ins=tuple(reversed(recent)),
        )

    def pending_redemptions(self) -> list[PendingRedemption]:
        """Approval queue across the roster, oldest request first."""
        pending = [
            PendingRedemption(
                employee_id=employee.employee_id,
                employee_name=employee.name,
                redemption=redemption,
            )
            for employee in self.repository.list_employees()
            for redemption in employee.redemptions
            if redemption.status == RedemptionStatus.PENDING
        ]
        return sorted(pending, key=lambda p: p.redemption.redeemed_at)

    def audit_balances(self) -> list[BalanceCheck]:
        """Rebuild every balance from history and report the comparison."""
        checks = [verify_balance(employee) for employee in self.repository.list_employees()]
        for check in checks:
            if not check.is_balanced:
                logger.error(
                    "Balance drift for %s: recorded %d, expected %d",
                    check.employee_id,
                    check.recorded,
                    check.expected,
                )
        return checks
