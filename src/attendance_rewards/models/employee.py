"""Employee, check-in, bonus and badge models."""

from __future__ import annotations

from datetime import date, datetime
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, Date, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from attendance_rewards.models.base import Base

if TYPE_CHECKING:
    from attendance_rewards.models.rewards import RedemptionRecord


class EmployeeRecord(Base):
    """Employee profile with running balances and streaks."""

    __tablename__ = "employee"

    employee_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    email: Mapped[str] = mapped_column(String, nullable=False)
    total_points: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    weekly_points: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    monthly_points: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    quarterly_points: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    current_streak: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    longest_streak: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    last_check_in: Mapped[datetime | None] = mapped_column(nullable=True)
    created_at: Mapped[datetime] = mapped_column(nullable=False)
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    __table_args__ = (
        CheckConstraint("longest_streak >= current_streak", name="employee_streak_check"),
    )

    # Relationships
    check_ins: Mapped[list[CheckInRecord]] = relationship(
        back_populates="employee",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="CheckInRecord.timestamp",
    )
    bonus_grants: Mapped[list[BonusGrantRecord]] = relationship(
        back_populates="employee",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="BonusGrantRecord.timestamp",
    )
    badges: Mapped[list[BadgeRecord]] = relationship(
        back_populates="employee",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="BadgeRecord.position",
    )
    redemptions: Mapped[list[RedemptionRecord]] = relationship(
        back_populates="employee",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="RedemptionRecord.redeemed_at",
    )


class CheckInRecord(Base):
    """Append-only check-in event, unique per employee and local day."""

    __tablename__ = "check_in_event"

    check_in_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    employee_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("employee.employee_id", ondelete="CASCADE"),
        nullable=False,
    )
    timestamp: Mapped[datetime] = mapped_column(nullable=False)
    local_date: Mapped[date] = mapped_column(Date, nullable=False)
    tier: Mapped[str] = mapped_column(String, nullable=False)
    points_earned: Mapped[int] = mapped_column(Integer, nullable=False)
    bonus_reason: Mapped[str | None] = mapped_column(String, nullable=True)

    __table_args__ = (
        UniqueConstraint("employee_id", "local_date", name="check_in_one_per_day"),
        CheckConstraint("tier IN ('early', 'onTime', 'late')", name="check_in_tier_check"),
    )

    employee: Mapped[EmployeeRecord] = relationship(back_populates="check_ins")


class BonusGrantRecord(Base):
    """Append-only administrator bonus."""

    __tablename__ = "bonus_grant"

    grant_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    employee_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("employee.employee_id", ondelete="CASCADE"),
        nullable=False,
    )
    timestamp: Mapped[datetime] = mapped_column(nullable=False)
    points_awarded: Mapped[int] = mapped_column(Integer, nullable=False)
    reason: Mapped[str] = mapped_column(String, nullable=False)
    granted_by: Mapped[str | None] = mapped_column(String, nullable=True)

    __table_args__ = (
        CheckConstraint("points_awarded > 0", name="bonus_grant_points_check"),
    )

    employee: Mapped[EmployeeRecord] = relationship(back_populates="bonus_grants")


class BadgeRecord(Base):
    """Badge held by an employee."""

    __tablename__ = "employee_badge"

    employee_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("employee.employee_id", ondelete="CASCADE"),
        primary_key=True,
    )
    badge_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    name: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str] = mapped_column(String, nullable=False)
    icon: Mapped[str] = mapped_column(String, nullable=False)
    color: Mapped[str] = mapped_column(String, nullable=False)
    unlocked_at: Mapped[datetime] = mapped_column(nullable=False)

    employee: Mapped[EmployeeRecord] = relationship(back_populates="badges")
