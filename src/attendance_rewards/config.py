"""Configuration management for the attendance rewards engine.

Two layers:
    - CheckInConfig: explicit, immutable rules for check-in gating and
      scoring. Passed to the engine; never read from globals.
    - Settings: process settings loaded from the environment (and .env),
      which build a CheckInConfig for the API and CLI entry points.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from functools import lru_cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

from attendance_rewards.domain import RotationStrategy

DEFAULT_BASE_URL = "https://rewards.company.com/checkin"


def parse_clock_time(value: str) -> int:
    """Parse an "HH:MM" string into minutes since midnight."""
    try:
        hours_str, minutes_str = value.split(":")
        hours, minutes = int(hours_str), int(minutes_str)
    except ValueError:
        raise ValueError(f"Invalid time '{value}', expected HH:MM") from None
    if not (0 <= hours < 24 and 0 <= minutes < 60):
        raise ValueError(f"Invalid time '{value}', expected HH:MM")
    return hours * 60 + minutes


def format_minutes(minutes: int) -> str:
    """Format minutes since midnight as "HH:MM"."""
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


@dataclass(frozen=True)
class TierPoints:
    """Base points awarded per arrival tier."""

    early: int = 2
    on_time: int = 1
    late: int = 0


@dataclass(frozen=True)
class StreakBonus:
    """A milestone bonus that fires when the streak equals `streak_length`."""

    streak_length: int
    points: int
    reason: str


DEFAULT_STREAK_BONUSES = (
    StreakBonus(streak_length=7, points=5, reason="Perfect Week Bonus"),
    StreakBonus(streak_length=10, points=10, reason="10-Day Streak Bonus"),
)


@dataclass(frozen=True)
class CheckInConfig:
    """
    Check-in gating and scoring rules.

    Attributes:
        base_url: Identity marker every check-in token must carry.
        window_start: Opening time of the daily check-in window, "HH:MM".
        window_end: Closing time of the daily check-in window, "HH:MM".
            Both ends are inclusive.
        timezone: IANA timezone used for the window, tiers and calendar days.
        rotation_strategy: Strategy used when generating new tokens.
        manual_version: Version embedded in manual-strategy tokens.
            Informational only: the validator accepts any correctly signed
            manual token, so retiring printed codes is up to the operator.
        early_threshold: Last minute of day that counts as early.
        on_time_threshold: Last minute of day that counts as on time.
        late_threshold: Last minute of day for the late tier. Arrivals after
            it are still scored as late.
        tier_points: Base points per tier.
        streak_bonuses: Milestone bonuses keyed by exact streak length.
        point_collector_threshold: Total points that unlock Point Collector.
        streak_master_threshold: Current streak that unlocks Streak Master.
    """

    base_url: str = DEFAULT_BASE_URL
    window_start: str = "06:00"
    window_end: str = "09:00"
    timezone: str = "America/Denver"
    rotation_strategy: RotationStrategy = RotationStrategy.DAILY
    manual_version: int = 1
    early_threshold: int = 465
    on_time_threshold: int = 480
    late_threshold: int = 540
    tier_points: TierPoints = field(default_factory=TierPoints)
    streak_bonuses: tuple[StreakBonus, ...] = DEFAULT_STREAK_BONUSES
    point_collector_threshold: int = 100
    streak_master_threshold: int = 7

    def __post_init__(self) -> None:
        """Validate configuration."""
        if not self.base_url:
            raise ValueError("base_url is required")
        if self.window_start_minutes > self.window_end_minutes:
            raise ValueError("window_start must not be after window_end")
        try:
            ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"Unknown timezone '{self.timezone}'") from None
        if not (self.early_threshold <= self.on_time_threshold <= self.late_threshold):
            raise ValueError(
                "thresholds must satisfy early <= on_time <= late"
            )
        if self.manual_version < 1:
            raise ValueError("manual_version must be at least 1")
        lengths = [bonus.streak_length for bonus in self.streak_bonuses]
        if len(lengths) != len(set(lengths)):
            raise ValueError("streak_bonuses must have distinct streak lengths")

    @property
    def tz(self) -> ZoneInfo:
        """Configured timezone."""
        return ZoneInfo(self.timezone)

    @property
    def window_start_minutes(self) -> int:
        return parse_clock_time(self.window_start)

    @property
    def window_end_minutes(self) -> int:
        return parse_clock_time(self.window_end)


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment."""

    database_url: str
    host: str
    port: int
    debug: bool
    log_level: str
    check_in: CheckInConfig

    @property
    def HOST(self) -> str:
        """Alias for host."""
        return self.host

    @property
    def PORT(self) -> int:
        """Alias for port."""
        return self.port

    @property
    def DEBUG(self) -> bool:
        """Alias for debug."""
        return self.debug

    @classmethod
    def from_env(cls) -> Settings:
        """Load settings from environment variables."""
        load_dotenv()

        check_in = CheckInConfig(
            base_url=os.getenv("CHECKIN_BASE_URL", DEFAULT_BASE_URL),
            window_start=os.getenv("CHECKIN_WINDOW_START", "06:00"),
            window_end=os.getenv("CHECKIN_WINDOW_END", "09:00"),
            timezone=os.getenv("CHECKIN_TIMEZONE", "America/Denver"),
            rotation_strategy=RotationStrategy(
                os.getenv("CHECKIN_ROTATION_STRATEGY", "daily")
            ),
            manual_version=int(os.getenv("CHECKIN_MANUAL_VERSION", "1")),
            early_threshold=int(os.getenv("CHECKIN_EARLY_THRESHOLD", "465")),
            on_time_threshold=int(os.getenv("CHECKIN_ON_TIME_THRESHOLD", "480")),
            late_threshold=int(os.getenv("CHECKIN_LATE_THRESHOLD", "540")),
        )

        return cls(
            database_url=os.getenv("DATABASE_URL", "sqlite:///./attendance_rewards.db"),
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "8000")),
            debug=os.getenv("DEBUG", "false").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            check_in=check_in,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings.from_env()


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging for the API and CLI entry points."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
