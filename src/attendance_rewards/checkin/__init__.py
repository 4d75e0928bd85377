"""Check-in gating: token validation, window gate and tier classification."""

from attendance_rewards.checkin.tiers import TierResult, classify_arrival
from attendance_rewards.checkin.token import (
    CheckInCode,
    ParsedToken,
    TokenValidation,
    TokenValidator,
    build_check_in_code,
    current_period,
    generate_check_in_url,
    sign_period,
)
from attendance_rewards.checkin.window import WindowCheck, WindowGate, minutes_of_day

__all__ = [
    "CheckInCode",
    "ParsedToken",
    "TierResult",
    "TokenValidation",
    "TokenValidator",
    "WindowCheck",
    "WindowGate",
    "build_check_in_code",
    "classify_arrival",
    "current_period",
    "generate_check_in_url",
    "minutes_of_day",
    "sign_period",
]
