"""Reward redemption state machine with transition validation."""

from __future__ import annotations

from enum import Enum

from attendance_rewards.domain import RedemptionStatus


def _status_value(status: str) -> str:
    return status.value if isinstance(status, Enum) else str(status)


class InvalidTransitionError(Exception):
    """Raised when an invalid state transition is attempted."""

    def __init__(self, from_status: str, to_status: str, reason: str | None = None):
        self.from_status = from_status
        self.to_status = to_status
        self.reason = reason
        msg = f"Invalid transition from '{from_status}' to '{to_status}'"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class RedemptionStateMachine:
    """State machine for redemption status transitions.

    Allowed transitions:
    - pending → approved
    - pending → rejected (refunds the escrowed cost)

    Approved and rejected are terminal.
    """

    VALID_TRANSITIONS: dict[str, list[str]] = {
        RedemptionStatus.PENDING: [RedemptionStatus.APPROVED, RedemptionStatus.REJECTED],
        RedemptionStatus.APPROVED: [],
        RedemptionStatus.REJECTED: [],
    }

    # Statuses whose cost is returned to the employee
    REFUNDING = {RedemptionStatus.REJECTED}

    @classmethod
    def can_transition(cls, from_status: str, to_status: str) -> bool:
        """Check if a transition is valid."""
        allowed = cls.VALID_TRANSITIONS.get(from_status, [])
        return to_status in allowed

    @classmethod
    def validate_transition(cls, from_status: str, to_status: str) -> None:
        """Validate a transition, raising InvalidTransitionError if invalid."""
        if not cls.can_transition(from_status, to_status):
            from_value, to_value = _status_value(from_status), _status_value(to_status)
            reason = None
            if cls.is_terminal(from_status):
                reason = f"redemption is already {from_value}"
            raise InvalidTransitionError(from_value, to_value, reason)

    @classmethod
    def is_terminal(cls, status: str) -> bool:
        return status in cls.VALID_TRANSITIONS and not cls.VALID_TRANSITIONS[status]

    @classmethod
    def refunds(cls, to_status: str) -> bool:
        """Check if entering this status returns the escrowed cost."""
        return to_status in cls.REFUNDING

    @classmethod
    def get_next_statuses(cls, current_status: str) -> list[str]:
        """Get list of valid next statuses from current status."""
        return cls.VALID_TRANSITIONS.get(current_status, [])
