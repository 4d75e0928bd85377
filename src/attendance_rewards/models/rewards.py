"""Reward catalog and redemption models."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, CheckConstraint, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from attendance_rewards.models.base import Base

if TYPE_CHECKING:
    from attendance_rewards.models.employee import EmployeeRecord


class RewardRecord(Base):
    """Catalog entry."""

    __tablename__ = "reward_definition"

    reward_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str] = mapped_column(String, nullable=False, default="")
    points_cost: Mapped[int] = mapped_column(Integer, nullable=False)
    category: Mapped[str] = mapped_column(String, nullable=False)
    icon: Mapped[str] = mapped_column(String, nullable=False, default="gift")
    available: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    __table_args__ = (
        CheckConstraint("points_cost > 0", name="reward_cost_check"),
        CheckConstraint(
            "category IN ('weekly', 'monthly', 'quarterly', 'annual')",
            name="reward_category_check",
        ),
    )


class RedemptionRecord(Base):
    """Redemption request with the reward snapshot taken at request time."""

    __tablename__ = "reward_redemption"

    redemption_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    employee_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("employee.employee_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    reward_id: Mapped[str] = mapped_column(String(64), nullable=False)
    reward_name: Mapped[str] = mapped_column(String, nullable=False)
    points_cost: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[str] = mapped_column(String, nullable=False, default="pending")
    redeemed_at: Mapped[datetime] = mapped_column(nullable=False)
    decided_at: Mapped[datetime | None] = mapped_column(nullable=True)
    decided_by: Mapped[str | None] = mapped_column(String, nullable=True)

    __table_args__ = (
        CheckConstraint(
            "status IN ('pending', 'approved', 'rejected')",
            name="redemption_status_check",
        ),
    )

    employee: Mapped[EmployeeRecord] = relationship(back_populates="redemptions")
