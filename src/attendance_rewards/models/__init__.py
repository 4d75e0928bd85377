"""SQLAlchemy ORM models."""

from attendance_rewards.models.base import Base, UTCDateTime
from attendance_rewards.models.employee import (
    BadgeRecord,
    BonusGrantRecord,
    CheckInRecord,
    EmployeeRecord,
)
from attendance_rewards.models.rewards import RedemptionRecord, RewardRecord

__all__ = [
    "BadgeRecord",
    "Base",
    "BonusGrantRecord",
    "CheckInRecord",
    "EmployeeRecord",
    "RedemptionRecord",
    "RewardRecord",
    "UTCDateTime",
]
