"""Error codes and exceptions.

Domain failures are reported as ErrorCode values on result objects. The
exceptions here are for conditions that cannot be expressed as a result:
broken invariants and infrastructure conflicts.
"""

from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Reasons a check-in or rewards operation was refused."""

    INVALID_TOKEN = "invalid_token"
    EXPIRED_TOKEN = "expired_token"
    OUTSIDE_TIME_WINDOW = "outside_time_window"
    DUPLICATE_CHECK_IN = "duplicate_check_in"
    EMPLOYEE_NOT_FOUND = "employee_not_found"
    INSUFFICIENT_POINTS = "insufficient_points"
    INVALID_REDEMPTION_STATE = "invalid_redemption_state"
    REWARD_NOT_FOUND = "reward_not_found"
    REWARD_UNAVAILABLE = "reward_unavailable"
    REDEMPTION_NOT_FOUND = "redemption_not_found"
    INVALID_BONUS = "invalid_bonus"


class WindowReason(str, Enum):
    """Why a check-in fell outside the daily window."""

    TOO_EARLY = "too_early"
    WINDOW_CLOSED = "window_closed"


class ConcurrentModificationError(Exception):
    """Raised when an employee record changed between load and save."""

    def __init__(self, employee_id: str, expected_version: int, actual_version: int):
        self.employee_id = employee_id
        self.expected_version = expected_version
        self.actual_version = actual_version
        super().__init__(
            f"Employee '{employee_id}' was modified concurrently "
            f"(expected version {expected_version}, found {actual_version})"
        )
