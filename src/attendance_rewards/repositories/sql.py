"""SQLAlchemy-backed repository.

Check-ins, bonus grants and badges are append-only: save() inserts rows it
has not seen and never updates or deletes existing ones. Redemptions are
inserted once and may have their status columns updated.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from sqlalchemy import select, text
from sqlalchemy.orm import Session, sessionmaker

from attendance_rewards.domain import (
    ArrivalTier,
    Badge,
    BonusGrant,
    CheckInEvent,
    Employee,
    RedemptionStatus,
    RewardCategory,
    RewardDefinition,
    RewardRedemption,
)
from attendance_rewards.errors import ConcurrentModificationError
from attendance_rewards.models import (
    BadgeRecord,
    BonusGrantRecord,
    CheckInRecord,
    EmployeeRecord,
    RedemptionRecord,
    RewardRecord,
)

logger = logging.getLogger(__name__)


def _to_domain(row: EmployeeRecord) -> Employee:
    return Employee(
        employee_id=row.employee_id,
        name=row.name,
        email=row.email,
        created_at=row.created_at,
        total_points=row.total_points,
        weekly_points=row.weekly_points,
        monthly_points=row.monthly_points,
        quarterly_points=row.quarterly_points,
        current_streak=row.current_streak,
        longest_streak=row.longest_streak,
        badges=[
            Badge(
                badge_id=b.badge_id,
                name=b.name,
                description=b.description,
                icon=b.icon,
                color=b.color,
                unlocked_at=b.unlocked_at,
            )
            for b in row.badges
        ],
        check_ins=[
            CheckInEvent(
                event_id=c.check_in_id,
                timestamp=c.timestamp,
                local_date=c.local_date,
                tier=ArrivalTier(c.tier),
                points_earned=c.points_earned,
                bonus_reason=c.bonus_reason,
            )
            for c in row.check_ins
        ],
        bonus_grants=[
            BonusGrant(
                grant_id=g.grant_id,
                timestamp=g.timestamp,
                points_awarded=g.points_awarded,
                reason=g.reason,
                granted_by=g.granted_by,
            )
            for g in row.bonus_grants
        ],
        redemptions=[
            RewardRedemption(
                redemption_id=r.redemption_id,
                reward_id=r.reward_id,
                reward_name=r.reward_name,
                points_cost=r.points_cost,
                redeemed_at=r.redeemed_at,
                status=RedemptionStatus(r.status),
                decided_at=r.decided_at,
                decided_by=r.decided_by,
            )
            for r in row.redemptions
        ],
        last_check_in=row.last_check_in,
        version=row.version,
    )


def _reward_to_domain(row: RewardRecord) -> RewardDefinition:
    return RewardDefinition(
        reward_id=row.reward_id,
        name=row.name,
        description=row.description,
        points_cost=row.points_cost,
        category=RewardCategory(row.category),
        icon=row.icon,
        available=row.available,
    )


class SqlEmployeeRepository:
    """Repository over a SQLAlchemy session factory, one transaction per call."""

    def __init__(self, session_factory: sessionmaker[Session]):
        self.session_factory = session_factory

    def load(self, employee_id: str) -> Employee | None:
        with self.session_factory() as session:
            row = session.get(EmployeeRecord, employee_id)
            return _to_domain(row) if row is not None else None

    def save(self, employee: Employee) -> None:
        with self.session_factory.begin() as session:
            row = session.get(EmployeeRecord, employee.employee_id, with_for_update=True)
            if row is None:
                if employee.version != 0:
                    raise ConcurrentModificationError(employee.employee_id, employee.version, 0)
                row = EmployeeRecord(employee_id=employee.employee_id, created_at=employee.created_at)
                session.add(row)
            elif row.version != employee.version:
                raise ConcurrentModificationError(
                    employee.employee_id, employee.version, row.version
                )

            row.name = employee.name
            row.email = employee.email
            row.total_points = employee.total_points
            row.weekly_points = employee.weekly_points
            row.monthly_points = employee.monthly_points
            row.quarterly_points = employee.quarterly_points
            row.current_streak = employee.current_streak
            row.longest_streak = employee.longest_streak
            row.last_check_in = employee.last_check_in
            row.version = employee.version + 1

            self._append_history(row, employee)

        employee.version += 1

    def _append_history(self, row: EmployeeRecord, employee: Employee) -> None:
        seen_check_ins = {c.check_in_id for c in row.check_ins}
        for event in employee.check_ins:
            if event.event_id not in seen_check_ins:
                row.check_ins.append(
                    CheckInRecord(
                        check_in_id=event.event_id,
                        timestamp=event.timestamp,
                        local_date=event.local_date,
                        tier=event.tier.value,
                        points_earned=event.points_earned,
                        bonus_reason=event.bonus_reason,
                    )
                )

        seen_grants = {g.grant_id for g in row.bonus_grants}
        for grant in employee.bonus_grants:
            if grant.grant_id not in seen_grants:
                row.bonus_grants.append(
                    BonusGrantRecord(
                        grant_id=grant.grant_id,
                        timestamp=grant.timestamp,
                        points_awarded=grant.points_awarded,
                        reason=grant.reason,
                        granted_by=grant.granted_by,
                    )
                )

        seen_badges = {b.badge_id for b in row.badges}
        for position, badge in enumerate(employee.badges):
            if badge.badge_id not in seen_badges:
                row.badges.append(
                    BadgeRecord(
                        badge_id=badge.badge_id,
                        position=position,
                        name=badge.name,
                        description=badge.description,
                        icon=badge.icon,
                        color=badge.color,
                        unlocked_at=badge.unlocked_at,
                    )
                )

        stored = {r.redemption_id: r for r in row.redemptions}
        for redemption in employee.redemptions:
            record = stored.get(redemption.redemption_id)
            if record is None:
                row.redemptions.append(
                    RedemptionRecord(
                        redemption_id=redemption.redemption_id,
                        reward_id=redemption.reward_id,
                        reward_name=redemption.reward_name,
                        points_cost=redemption.points_cost,
                        status=redemption.status.value,
                        redeemed_at=redemption.redeemed_at,
                        decided_at=redemption.decided_at,
                        decided_by=redemption.decided_by,
                    )
                )
            elif record.status != redemption.status.value:
                record.status = redemption.status.value
                record.decided_at = redemption.decided_at
                record.decided_by = redemption.decided_by

    def load_catalog(self) -> list[RewardDefinition]:
        with self.session_factory() as session:
            rows = session.scalars(
                select(RewardRecord).order_by(RewardRecord.position, RewardRecord.reward_id)
            )
            return [_reward_to_domain(row) for row in rows]

    def seed_catalog(self, rewards: Iterable[RewardDefinition]) -> int:
        """Insert or update catalog entries. Returns the number written."""
        count = 0
        with self.session_factory.begin() as session:
            for position, reward in enumerate(rewards):
                session.merge(
                    RewardRecord(
                        reward_id=reward.reward_id,
                        name=reward.name,
                        description=reward.description,
                        points_cost=reward.points_cost,
                        category=reward.category.value,
                        icon=reward.icon,
                        available=reward.available,
                        position=position,
                    )
                )
                count += 1
        logger.info("Seeded %d catalog rewards", count)
        return count

    def list_employees(self) -> list[Employee]:
        with self.session_factory() as session:
            rows = session.scalars(select(EmployeeRecord).order_by(EmployeeRecord.created_at))
            return [_to_domain(row) for row in rows]

    def find_redemption_owner(self, redemption_id: str) -> str | None:
        with self.session_factory() as session:
            return session.scalar(
                select(RedemptionRecord.employee_id).where(
                    RedemptionRecord.redemption_id == redemption_id
                )
            )

    def ping(self) -> bool:
        try:
            with self.session_factory() as session:
                session.execute(text("SELECT 1"))
        except Exception:
            logger.exception("Database ping failed")
            return False
        return True
