"""Arrival tier classification."""

from __future__ import annotations

from dataclasses import dataclass

from attendance_rewards.config import CheckInConfig
from attendance_rewards.domain import ArrivalTier


@dataclass(frozen=True)
class TierResult:
    tier: ArrivalTier
    points: int


def classify_arrival(minute: int, config: CheckInConfig) -> TierResult:
    """Map a minute of day to an arrival tier and its base points.

    Arrivals after late_threshold score the same as the late range; there is
    no separate missed tier.
    """
    if minute <= config.early_threshold:
        return TierResult(ArrivalTier.EARLY, config.tier_points.early)
    if minute <= config.on_time_threshold:
        return TierResult(ArrivalTier.ON_TIME, config.tier_points.on_time)
    return TierResult(ArrivalTier.LATE, config.tier_points.late)
