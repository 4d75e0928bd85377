"""Business logic services."""

from attendance_rewards.services.badges import BadgeEngine, BadgeRule
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
from attendance_rewards.services.state_machine import (
    InvalidTransitionError,
    RedemptionStateMachine,
)

__all__ = [
    "BadgeEngine",
    "BadgeRule",
    "BalanceCheck",
    "BonusResult",
    "CheckInResult",
    "CheckInService",
    "EmployeeLockRegistry",
    "EmployeeStats",
    "InvalidTransitionError",
    "LeaderboardEntry",
    "PendingRedemption",
    "RedemptionResult",
    "RedemptionStateMachine",
    "RewardService",
    "ServiceContext",
    "verify_balance",
]
