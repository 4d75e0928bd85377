"""Domain event types for check-in and rewards operations.

All events are:
- Immutable (frozen dataclasses)
- Typed with explicit payloads
- Traceable via metadata
- Serializable for notifications and audit logs
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any
from uuid import UUID, uuid4


class EventCategory(str, Enum):
    """Event categories for routing and filtering."""

    CHECK_IN = "check_in"
    POINTS = "points"
    BADGE = "badge"
    REWARD = "reward"


@dataclass(frozen=True)
class EventMetadata:
    """Metadata attached to every domain event."""

    event_id: UUID
    timestamp: datetime
    correlation_id: UUID  # Links events raised by one operation
    actor_id: str | None  # Employee or administrator that triggered
    actor_type: str  # 'employee', 'admin', 'system'
    source_service: str = "rewards_engine"
    version: int = 1

    @classmethod
    def create(
        cls,
        timestamp: datetime,
        correlation_id: UUID | None = None,
        actor_id: str | None = None,
        actor_type: str = "system",
    ) -> EventMetadata:
        """Create metadata with auto-generated ids."""
        return cls(
            event_id=uuid4(),
            timestamp=timestamp,
            correlation_id=correlation_id or uuid4(),
            actor_id=actor_id,
            actor_type=actor_type,
        )


@dataclass(frozen=True)
class DomainEvent:
    """Base class for all domain events."""

    metadata: EventMetadata

    @property
    def event_type(self) -> str:
        """Event type name for routing."""
        return self.__class__.__name__

    @property
    def category(self) -> EventCategory:
        """Event category for filtering."""
        raise NotImplementedError("Subclasses must define category")

    def to_dict(self) -> dict[str, Any]:
        """Serialize event to dictionary."""
        data = _serialize(asdict(self))
        data["event_type"] = self.event_type
        data["category"] = self.category.value
        return data

    def to_json(self) -> str:
        """Serialize event to JSON string."""
        return json.dumps(self.to_dict(), default=str)


def _serialize(obj: Any) -> Any:
    """Recursively serialize objects for JSON compatibility."""
    if isinstance(obj, dict):
        return {k: _serialize(v) for k, v in obj.items()}
    elif isinstance(obj, (list, tuple)):
        return [_serialize(v) for v in obj]
    elif isinstance(obj, UUID):
        return str(obj)
    elif isinstance(obj, (datetime, date)):
        return obj.isoformat()
    elif isinstance(obj, Enum):
        return obj.value
    return obj


# =============================================================================
# Check-in Events
# =============================================================================


@dataclass(frozen=True)
class CheckInRecorded(DomainEvent):
    """An employee checked in."""

    employee_id: str
    check_in_id: str
    tier: str
    points_earned: int
    current_streak: int

    @property
    def category(self) -> EventCategory:
        return EventCategory.CHECK_IN


@dataclass(frozen=True)
class StreakBonusAwarded(DomainEvent):
    """A streak milestone bonus was merged into a check-in."""

    employee_id: str
    check_in_id: str
    streak: int
    bonus_points: int
    reason: str

    @property
    def category(self) -> EventCategory:
        return EventCategory.CHECK_IN


# =============================================================================
# Points and Badge Events
# =============================================================================


@dataclass(frozen=True)
class BonusGranted(DomainEvent):
    """An administrator awarded bonus points."""

    employee_id: str
    grant_id: str
    points_awarded: int
    reason: str

    @property
    def category(self) -> EventCategory:
        return EventCategory.POINTS


@dataclass(frozen=True)
class BadgeUnlocked(DomainEvent):
    """An employee unlocked a badge."""

    employee_id: str
    badge_id: str
    badge_name: str

    @property
    def category(self) -> EventCategory:
        return EventCategory.BADGE


# =============================================================================
# Reward Events
# =============================================================================


@dataclass(frozen=True)
class RewardRedeemed(DomainEvent):
    """A redemption was requested and its cost placed in escrow."""

    employee_id: str
    redemption_id: str
    reward_id: str
    points_cost: int

    @property
    def category(self) -> EventCategory:
        return EventCategory.REWARD


@dataclass(frozen=True)
class RedemptionApproved(DomainEvent):
    """A pending redemption was approved."""

    employee_id: str
    redemption_id: str
    points_cost: int

    @property
    def category(self) -> EventCategory:
        return EventCategory.REWARD


@dataclass(frozen=True)
class RedemptionRejected(DomainEvent):
    """A pending redemption was rejected and its cost refunded."""

    employee_id: str
    redemption_id: str
    points_refunded: int

    @property
    def category(self) -> EventCategory:
        return EventCategory.REWARD
