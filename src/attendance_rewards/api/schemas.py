"""Pydantic schemas for API request/response models."""

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from attendance_rewards.domain import (
    ArrivalTier,
    PointsPeriod,
    RedemptionStatus,
    RewardCategory,
    RotationStrategy,
)


# ============================================================================
# Employee schemas
# ============================================================================


class EmployeeCreate(BaseModel):
    """Schema for creating an employee profile."""

    name: str = Field(min_length=1, max_length=200)
    email: str = Field(min_length=3, max_length=320)


class BadgeResponse(BaseModel):
    """Schema for an unlocked badge."""

    model_config = ConfigDict(from_attributes=True)

    badge_id: str
    name: str
    description: str
    icon: str
    color: str
    unlocked_at: datetime


class CheckInEventResponse(BaseModel):
    """Schema for a recorded check-in."""

    model_config = ConfigDict(from_attributes=True)

    event_id: str
    timestamp: datetime
    local_date: date
    tier: ArrivalTier
    points_earned: int
    bonus_reason: str | None = None


class EmployeeResponse(BaseModel):
    """Schema for employee response."""

    model_config = ConfigDict(from_attributes=True)

    employee_id: str
    name: str
    email: str
    created_at: datetime
    total_points: int
    weekly_points: int
    monthly_points: int
    quarterly_points: int
    current_streak: int
    longest_streak: int
    badges: list[BadgeResponse] = []
    last_check_in: datetime | None = None


class EmployeeStatsResponse(BaseModel):
    """Schema for the employee dashboard summary."""

    model_config = ConfigDict(from_attributes=True)

    employee_id: str
    as_of: date
    today_points: int
    total_points: int
    weekly_points: int
    monthly_points: int
    quarterly_points: int
    current_streak: int
    longest_streak: int
    recent_check_ins: list[CheckInEventResponse]


# ============================================================================
# Check-in schemas
# ============================================================================


class CheckInRequest(BaseModel):
    """Schema for a check-in attempt with the scanned QR payload."""

    employee_id: str
    token: str


class CheckInResponse(BaseModel):
    """Schema for a successful check-in."""

    message: str
    check_in_id: str
    tier: ArrivalTier
    points_earned: int
    bonus_reason: str | None = None
    current_streak: int
    new_badges: list[str] = []
    affirmation: str | None = None


class CheckInCodeResponse(BaseModel):
    """Schema for the code an administrator displays."""

    model_config = ConfigDict(from_attributes=True)

    url: str
    period: str
    strategy: RotationStrategy
    version: int
    valid_time_window: str
    timezone: str
    instructions: list[str]


# ============================================================================
# Bonus schemas
# ============================================================================


class BonusRequest(BaseModel):
    """Schema for an administrator bonus grant."""

    points: int
    reason: str
    granted_by: str | None = None


class BonusResponse(BaseModel):
    """Schema for bonus grant response."""

    message: str
    grant_id: str
    points_awarded: int
    reason: str
    total_points: int
    new_badges: list[str] = []


# ============================================================================
# Leaderboard schemas
# ============================================================================


class LeaderboardEntryResponse(BaseModel):
    """Schema for one leaderboard row."""

    model_config = ConfigDict(from_attributes=True)

    rank: int
    employee_id: str
    name: str
    points: int
    current_streak: int


class LeaderboardResponse(BaseModel):
    """Schema for leaderboard response."""

    period: PointsPeriod
    entries: list[LeaderboardEntryResponse]


# ============================================================================
# Catalog schemas
# ============================================================================


class RewardResponse(BaseModel):
    """Schema for a catalog reward."""

    model_config = ConfigDict(from_attributes=True)

    reward_id: str
    name: str
    description: str
    points_cost: int
    category: RewardCategory
    icon: str
    available: bool


class BadgeDefinitionResponse(BaseModel):
    """Schema for a catalog badge."""

    model_config = ConfigDict(from_attributes=True)

    badge_id: str
    name: str
    description: str
    icon: str
    color: str


# ============================================================================
# Redemption schemas
# ============================================================================


class RedemptionCreate(BaseModel):
    """Schema for requesting a reward."""

    employee_id: str
    reward_id: str


class DecisionRequest(BaseModel):
    """Schema for approving or rejecting a redemption."""

    decided_by: str | None = None


class RedemptionResponse(BaseModel):
    """Schema for a reward redemption."""

    model_config = ConfigDict(from_attributes=True)

    redemption_id: str
    reward_id: str
    reward_name: str
    points_cost: int
    redeemed_at: datetime
    status: RedemptionStatus
    decided_at: datetime | None = None
    decided_by: str | None = None


class RedemptionResultResponse(BaseModel):
    """Schema for redeem, approve and reject responses."""

    message: str
    redemption: RedemptionResponse
    total_points: int


class PendingRedemptionResponse(BaseModel):
    """Schema for an entry in the approval queue."""

    model_config = ConfigDict(from_attributes=True)

    employee_id: str
    employee_name: str
    redemption: RedemptionResponse


# ============================================================================
# Error schemas
# ============================================================================


class ErrorResponse(BaseModel):
    """Schema for error response."""

    detail: str
    code: str | None = None
    context: dict[str, Any] | None = None
