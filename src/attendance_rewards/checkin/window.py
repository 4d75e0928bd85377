"""Daily check-in window gate."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from attendance_rewards.clock import Clock
from attendance_rewards.config import CheckInConfig, format_minutes
from attendance_rewards.errors import ErrorCode, WindowReason


def minutes_of_day(instant: datetime, config: CheckInConfig) -> int:
    """Minutes since local midnight in the configured timezone."""
    local = instant.astimezone(config.tz)
    return local.hour * 60 + local.minute


@dataclass(frozen=True)
class WindowCheck:
    """Result of checking the current time against the window."""

    is_valid: bool
    current_time: str
    window_start: str
    window_end: str
    window_reason: WindowReason | None = None
    reason: str | None = None

    @property
    def error(self) -> ErrorCode | None:
        return None if self.is_valid else ErrorCode.OUTSIDE_TIME_WINDOW


class WindowGate:
    """Accepts check-ins only inside the inclusive [start, end] window."""

    def __init__(self, config: CheckInConfig, clock: Clock):
        self.config = config
        self.clock = clock

    def check(self, now: datetime | None = None) -> WindowCheck:
        """Check `now` (default: the clock) against the window."""
        current = minutes_of_day(now or self.clock.now(), self.config)
        start = self.config.window_start_minutes
        end = self.config.window_end_minutes
        times = {
            "current_time": format_minutes(current),
            "window_start": format_minutes(start),
            "window_end": format_minutes(end),
        }

        if current < start:
            return WindowCheck(
                is_valid=False,
                window_reason=WindowReason.TOO_EARLY,
                reason=(
                    "Check-in window hasn't opened yet. "
                    f"Please wait until {times['window_start']}."
                ),
                **times,
            )
        if current > end:
            return WindowCheck(
                is_valid=False,
                window_reason=WindowReason.WINDOW_CLOSED,
                reason=(
                    "Check-in window has closed. Check-in is only available "
                    f"between {times['window_start']} - {times['window_end']}."
                ),
                **times,
            )
        return WindowCheck(is_valid=True, **times)
