"""Domain events package."""

from attendance_rewards.events.emitter import EventEmitter, EventHandler
from attendance_rewards.events.types import (
    BadgeUnlocked,
    BonusGranted,
    CheckInRecorded,
    DomainEvent,
    EventCategory,
    EventMetadata,
    RedemptionApproved,
    RedemptionRejected,
    RewardRedeemed,
    StreakBonusAwarded,
)

__all__ = [
    "BadgeUnlocked",
    "BonusGranted",
    "CheckInRecorded",
    "DomainEvent",
    "EventCategory",
    "EventEmitter",
    "EventHandler",
    "EventMetadata",
    "RedemptionApproved",
    "RedemptionRejected",
    "RewardRedeemed",
    "StreakBonusAwarded",
]
