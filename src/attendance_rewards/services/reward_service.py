"""Reward ledger: redemption escrow, approval and bonus grants.

Redeeming debits the cost from every point counter immediately (escrow).
Approval leaves balances alone; rejection credits the snapshot cost back.
"""

from __future__ import annotations

import dataclasses
import logging
from datetime import datetime
from uuid import UUID, uuid4

from attendance_rewards.domain import (
    Badge,
    BonusGrant,
    Employee,
    RedemptionStatus,
    RewardDefinition,
    RewardRedemption,
    new_id,
)
from attendance_rewards.errors import ErrorCode
from attendance_rewards.events import (
    BadgeUnlocked,
    BonusGranted,
    DomainEvent,
    RedemptionApproved,
    RedemptionRejected,
    RewardRedeemed,
)
from attendance_rewards.services import points
from attendance_rewards.services.context import ServiceContext
from attendance_rewards.services.results import BonusResult, RedemptionResult
from attendance_rewards.services.state_machine import (
    InvalidTransitionError,
    RedemptionStateMachine,
)

logger = logging.getLogger(__name__)


class RewardService:
    """Service for the redemption lifecycle.

    Operations:
    - redeem: create a pending redemption and escrow its cost
    - approve: pending → approved
    - reject: pending → rejected, refunding the cost
    - grant_bonus: administrator bonus points
    """

    def __init__(self, context: ServiceContext):
        self.context = context

    def catalog(self) -> list[RewardDefinition]:
        return self.context.repository.load_catalog()

    def find_reward(self, reward_id: str) -> RewardDefinition | None:
        for reward in self.catalog():
            if reward.reward_id == reward_id:
                return reward
        return None

    def redeem(self, employee_id: str, reward_id: str) -> RedemptionResult:
        ctx = self.context
        events: list[DomainEvent] = []
        with ctx.locks.hold(employee_id):
            employee = ctx.repository.load(employee_id)
            if employee is None:
                return RedemptionResult.failure(ErrorCode.EMPLOYEE_NOT_FOUND, "Employee not found")

            reward = self.find_reward(reward_id)
            if reward is None:
                return RedemptionResult.failure(ErrorCode.REWARD_NOT_FOUND, "Reward not found")
            if not reward.available:
                return RedemptionResult.failure(
                    ErrorCode.REWARD_UNAVAILABLE, f"{reward.name} is not available right now"
                )

            if employee.total_points < reward.points_cost:
                logger.warning(
                    "Employee %s cannot afford %s (%d < %d)",
                    employee_id,
                    reward_id,
                    employee.total_points,
                    reward.points_cost,
                )
                return RedemptionResult.failure(
                    ErrorCode.INSUFFICIENT_POINTS,
                    f"Not enough points: {reward.name} costs {reward.points_cost} points, "
                    f"you have {employee.total_points}.",
                )

            now = ctx.clock.now()
            redemption = RewardRedemption(
                redemption_id=new_id(),
                reward_id=reward.reward_id,
                reward_name=reward.name,
                points_cost=reward.points_cost,
                redeemed_at=now,
            )
            employee.redemptions.append(redemption)
            points.debit(employee, reward.points_cost)
            unlocked = ctx.badges.evaluate(employee, now)
            ctx.repository.save(employee)

            correlation_id = uuid4()
            events.append(
                RewardRedeemed(
                    metadata=ctx.metadata(now, correlation_id, employee_id, "employee"),
                    employee_id=employee_id,
                    redemption_id=redemption.redemption_id,
                    reward_id=reward.reward_id,
                    points_cost=reward.points_cost,
                )
            )
            events.extend(self._badge_events(employee, unlocked, correlation_id, now))

        logger.info(
            "Employee %s redeemed %s for %d points (pending)",
            employee_id,
            reward_id,
            reward.points_cost,
        )
        ctx.publish(events)
        return RedemptionResult(
            success=True,
            message=f"{reward.name} requested. Awaiting approval.",
            redemption=dataclasses.replace(redemption),
            total_points=employee.total_points,
        )

    def approve(self, redemption_id: str, decided_by: str | None = None) -> RedemptionResult:
        return self._decide(redemption_id, RedemptionStatus.APPROVED, decided_by)

    def reject(self, redemption_id: str, decided_by: str | None = None) -> RedemptionResult:
        return self._decide(redemption_id, RedemptionStatus.REJECTED, decided_by)

    def _decide(
        self,
        redemption_id: str,
        to_status: RedemptionStatus,
        decided_by: str | None,
    ) -> RedemptionResult:
        ctx = self.context
        employee_id = ctx.repository.find_redemption_owner(redemption_id)
        if employee_id is None:
            return RedemptionResult.failure(ErrorCode.REDEMPTION_NOT_FOUND, "Redemption not found")

        events: list[DomainEvent] = []
        with ctx.locks.hold(employee_id):
            employee = ctx.repository.load(employee_id)
            redemption = employee.find_redemption(redemption_id) if employee else None
            if employee is None or redemption is None:
                return RedemptionResult.failure(
                    ErrorCode.REDEMPTION_NOT_FOUND, "Redemption not found"
                )

            try:
                RedemptionStateMachine.validate_transition(redemption.status, to_status)
            except InvalidTransitionError as e:
                logger.warning("Refused %s of redemption %s: %s", to_status.value, redemption_id, e)
                return RedemptionResult.failure(
                    ErrorCode.INVALID_REDEMPTION_STATE,
                    f"Redemption is already {redemption.status.value}",
                    dataclasses.replace(redemption),
                )

            now = ctx.clock.now()
            redemption.status = to_status
            redemption.decided_at = now
            redemption.decided_by = decided_by
            if RedemptionStateMachine.refunds(to_status):
                points.credit(employee, redemption.points_cost)
            unlocked = ctx.badges.evaluate(employee, now)
            ctx.repository.save(employee)

            correlation_id = uuid4()
            meta = ctx.metadata(now, correlation_id, decided_by, "admin")
            if to_status == RedemptionStatus.APPROVED:
                events.append(
                    RedemptionApproved(
                        metadata=meta,
                        employee_id=employee_id,
                        redemption_id=redemption_id,
                        points_cost=redemption.points_cost,
                    )
                )
            else:
                events.append(
                    RedemptionRejected(
                        metadata=meta,
                        employee_id=employee_id,
                        redemption_id=redemption_id,
                        points_refunded=redemption.points_cost,
                    )
                )
            events.extend(self._badge_events(employee, unlocked, correlation_id, now))

        logger.info("Redemption %s %s by %s", redemption_id, to_status.value, decided_by or "admin")
        ctx.publish(events)

        if to_status == RedemptionStatus.APPROVED:
            message = f"{redemption.reward_name} approved."
        else:
            message = (
                f"{redemption.reward_name} rejected. "
                f"{redemption.points_cost} points refunded."
            )
        return RedemptionResult(
            success=True,
            message=message,
            redemption=dataclasses.replace(redemption),
            total_points=employee.total_points,
        )

    def grant_bonus(
        self,
        employee_id: str,
        points_awarded: int,
        reason: str,
        granted_by: str | None = None,
    ) -> BonusResult:
        """Award bonus points to an employee."""
        if isinstance(points_awarded, bool) or not isinstance(points_awarded, int) or points_awarded <= 0:
            return BonusResult(
                success=False,
                message="Bonus points must be a positive whole number.",
                error=ErrorCode.INVALID_BONUS,
            )
        reason = (reason or "").strip()
        if not reason:
            return BonusResult(
                success=False,
                message="A reason is required for bonus points.",
                error=ErrorCode.INVALID_BONUS,
            )

        ctx = self.context
        events: list[DomainEvent] = []
        with ctx.locks.hold(employee_id):
            employee = ctx.repository.load(employee_id)
            if employee is None:
                return BonusResult(
                    success=False, message="Employee not found", error=ErrorCode.EMPLOYEE_NOT_FOUND
                )

            now = ctx.clock.now()
            grant = BonusGrant(
                grant_id=new_id(),
                timestamp=now,
                points_awarded=points_awarded,
                reason=reason,
                granted_by=granted_by,
            )
            employee.bonus_grants.append(grant)
            points.credit(employee, points_awarded)
            unlocked = ctx.badges.evaluate(employee, now)
            ctx.repository.save(employee)

            correlation_id = uuid4()
            events.append(
                BonusGranted(
                    metadata=ctx.metadata(now, correlation_id, granted_by, "admin"),
                    employee_id=employee_id,
                    grant_id=grant.grant_id,
                    points_awarded=points_awarded,
                    reason=reason,
                )
            )
            events.extend(self._badge_events(employee, unlocked, correlation_id, now))

        logger.info("Granted %d bonus points to %s: %s", points_awarded, employee_id, reason)
        ctx.publish(events)
        return BonusResult(
            success=True,
            message=f"Awarded {points_awarded} bonus points to {employee.name}.",
            grant=grant,
            total_points=employee.total_points,
            new_badges=tuple(badge.badge_id for badge in unlocked),
        )

    def _badge_events(
        self,
        employee: Employee,
        unlocked: list[Badge],
        correlation_id: UUID,
        now: datetime,
    ) -> list[DomainEvent]:
        return [
            BadgeUnlocked(
                metadata=self.context.metadata(now, correlation_id, employee.employee_id, "system"),
                employee_id=employee.employee_id,
                badge_id=badge.badge_id,
                badge_name=badge.name,
            )
            for badge in unlocked
        ]
