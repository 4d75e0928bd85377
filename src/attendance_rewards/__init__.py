"""Attendance rewards engine: QR check-ins, streaks, badges and a points ledger."""

from attendance_rewards.clock import Clock, FixedClock, SystemClock
from attendance_rewards.config import CheckInConfig, Settings, get_settings
from attendance_rewards.engine import RewardsEngine

__version__ = "0.1.0"

__all__ = [
    "CheckInConfig",
    "Clock",
    "FixedClock",
    "RewardsEngine",
    "Settings",
    "SystemClock",
    "get_settings",
]
