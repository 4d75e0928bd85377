"""Domain types for the check-in and rewards ledger.

Closed sets (tier, strategy, category, status) are str enums so values
round-trip through JSON and the database unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from uuid import uuid4


class ArrivalTier(str, Enum):
    """Arrival classification of a check-in."""

    EARLY = "early"
    ON_TIME = "onTime"
    LATE = "late"


class RotationStrategy(str, Enum):
    """How often a check-in token's valid period changes."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    MANUAL = "manual"


class RewardCategory(str, Enum):
    """Reward catalog tiers."""

    WEEKLY = "weekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    ANNUAL = "annual"


class RedemptionStatus(str, Enum):
    """Reward redemption status values."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class PointsPeriod(str, Enum):
    """Point counters an employee carries, used to rank the leaderboard."""

    ALL = "all"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"


def new_id() -> str:
    """Generate an identifier for a new entity."""
    return str(uuid4())


@dataclass(frozen=True)
class BadgeDefinition:
    """A badge from the fixed catalog."""

    badge_id: str
    name: str
    description: str
    icon: str
    color: str


@dataclass(frozen=True)
class Badge:
    """A badge unlocked by an employee."""

    badge_id: str
    name: str
    description: str
    icon: str
    color: str
    unlocked_at: datetime

    @classmethod
    def unlock(cls, definition: BadgeDefinition, unlocked_at: datetime) -> Badge:
        return cls(
            badge_id=definition.badge_id,
            name=definition.name,
            description=definition.description,
            icon=definition.icon,
            color=definition.color,
            unlocked_at=unlocked_at,
        )


@dataclass
class CheckInEvent:
    """A recorded check-in.

    points_earned is final once the check-in operation returns. The streak
    tracker may merge a milestone bonus into it before then.
    """

    event_id: str
    timestamp: datetime
    local_date: date
    tier: ArrivalTier
    points_earned: int
    bonus_reason: str | None = None


@dataclass(frozen=True)
class BonusGrant:
    """Points awarded to an employee by an administrator."""

    grant_id: str
    timestamp: datetime
    points_awarded: int
    reason: str
    granted_by: str | None = None


@dataclass(frozen=True)
class RewardDefinition:
    """A reward from the read-only catalog."""

    reward_id: str
    name: str
    description: str
    points_cost: int
    category: RewardCategory
    icon: str
    available: bool = True


@dataclass
class RewardRedemption:
    """A redemption request with a snapshot of the reward at request time."""

    redemption_id: str
    reward_id: str
    reward_name: str
    points_cost: int
    redeemed_at: datetime
    status: RedemptionStatus = RedemptionStatus.PENDING
    decided_at: datetime | None = None
    decided_by: str | None = None

    @property
    def holds_points(self) -> bool:
        """Whether the cost is still debited from the employee's balance."""
        return self.status != RedemptionStatus.REJECTED


@dataclass
class Employee:
    """An employee with balances, streaks, badges and history."""

    employee_id: str
    name: str
    email: str
    created_at: datetime
    total_points: int = 0
    weekly_points: int = 0
    monthly_points: int = 0
    quarterly_points: int = 0
    current_streak: int = 0
    longest_streak: int = 0
    badges: list[Badge] = field(default_factory=list)
    check_ins: list[CheckInEvent] = field(default_factory=list)
    bonus_grants: list[BonusGrant] = field(default_factory=list)
    redemptions: list[RewardRedemption] = field(default_factory=list)
    last_check_in: datetime | None = None
    version: int = 0

    def has_badge(self, badge_id: str) -> bool:
        return any(badge.badge_id == badge_id for badge in self.badges)

    def check_in_on(self, day: date) -> CheckInEvent | None:
        """Return the check-in recorded on a local calendar day, if any."""
        for event in self.check_ins:
            if event.local_date == day:
                return event
        return None

    def find_redemption(self, redemption_id: str) -> RewardRedemption | None:
        for redemption in self.redemptions:
            if redemption.redemption_id == redemption_id:
                return redemption
        return None

    def points_for(self, period: PointsPeriod) -> int:
        """Return the counter for a leaderboard period."""
        if period == PointsPeriod.WEEKLY:
            return self.weekly_points
        if period == PointsPeriod.MONTHLY:
            return self.monthly_points
        if period == PointsPeriod.QUARTERLY:
            return self.quarterly_points
        return self.total_points
