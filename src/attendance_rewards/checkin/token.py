"""Check-in token generation and validation.

Wire formats:
    current: <base_url>?period=<p>&token=<t>&strategy=<s>&v=<version>
    legacy:  <base_url>?date=<YYYY-MM-DD>&token=<t>  (treated as daily)

The token is base64("employee-checkin-<period>-<base_url>"). It is a
deterministic encoding of public inputs, not a MAC: anyone who knows the
base URL can mint a valid token for any period.
"""

from __future__ import annotations

import base64
import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from urllib.parse import quote, unquote, urlencode

from attendance_rewards.clock import Clock
from attendance_rewards.config import CheckInConfig
from attendance_rewards.domain import RotationStrategy
from attendance_rewards.errors import ErrorCode

logger = logging.getLogger(__name__)

TOKEN_MARKER = "employee-checkin"

EXPIRED_MESSAGES = {
    RotationStrategy.DAILY: "QR code is expired. Please use today's QR code.",
    RotationStrategy.WEEKLY: "QR code is expired. Please use this week's QR code.",
    RotationStrategy.MONTHLY: "QR code is expired. Please use this month's QR code.",
}

CHECK_IN_INSTRUCTIONS = (
    "Open the RewardSpace employee app",
    'Tap the "Check In Now" button on your dashboard',
    "Point your camera at this QR code",
    "Wait for confirmation and earn your points!",
    "One scan per day during valid hours only",
)


@dataclass(frozen=True)
class ParsedToken:
    """Fields extracted from a scanned check-in code."""

    period: str
    token: str
    strategy: RotationStrategy
    version: str | None = None
    legacy: bool = False


@dataclass(frozen=True)
class TokenValidation:
    """Result of validating a scanned check-in code."""

    is_valid: bool
    error: ErrorCode | None = None
    reason: str | None = None
    token: ParsedToken | None = None

    @classmethod
    def failure(
        cls, error: ErrorCode, reason: str, token: ParsedToken | None = None
    ) -> TokenValidation:
        return cls(is_valid=False, error=error, reason=reason, token=token)


@dataclass(frozen=True)
class CheckInCode:
    """A generated check-in code plus the text shown next to the QR image."""

    url: str
    period: str
    strategy: RotationStrategy
    version: int
    valid_time_window: str
    timezone: str
    instructions: tuple[str, ...] = field(default=CHECK_IN_INSTRUCTIONS)


def sign_period(period: str, base_url: str) -> str:
    """Compute the token for a period."""
    raw = f"{TOKEN_MARKER}-{period}-{base_url}"
    return base64.b64encode(raw.encode("utf-8")).decode("ascii")


def current_period(
    strategy: RotationStrategy, now: datetime, config: CheckInConfig
) -> str:
    """Return the period string that is valid at `now` for a strategy."""
    today = now.astimezone(config.tz).date()
    if strategy == RotationStrategy.DAILY:
        return today.isoformat()
    if strategy == RotationStrategy.WEEKLY:
        monday = today - timedelta(days=today.weekday())
        return f"week-{monday.isoformat()}"
    if strategy == RotationStrategy.MONTHLY:
        return f"month-{today.year:04d}-{today.month:02d}"
    return f"manual-v{config.manual_version}"


def generate_check_in_url(
    config: CheckInConfig,
    now: datetime,
    strategy: RotationStrategy | None = None,
) -> str:
    """Build the check-in URL encoded into the QR image."""
    strategy = strategy or config.rotation_strategy
    period = current_period(strategy, now, config)
    query = urlencode(
        {
            "period": period,
            "token": sign_period(period, config.base_url),
            "strategy": strategy.value,
            "v": str(config.manual_version),
        },
        quote_via=quote,
        safe="",
    )
    return f"{config.base_url}?{query}"


def build_check_in_code(
    config: CheckInConfig,
    now: datetime,
    strategy: RotationStrategy | None = None,
) -> CheckInCode:
    """Generate the current code and its display information."""
    strategy = strategy or config.rotation_strategy
    return CheckInCode(
        url=generate_check_in_url(config, now, strategy),
        period=current_period(strategy, now, config),
        strategy=strategy,
        version=config.manual_version,
        valid_time_window=f"{config.window_start} - {config.window_end}",
        timezone=config.timezone,
    )


def parse_query(raw: str) -> dict[str, str]:
    """Parse query parameters from a scanned string.

    Values are percent-decoded but '+' is kept literally, since legacy
    codes embed unescaped base64.
    """
    _, sep, query = raw.partition("?")
    if not sep:
        return {}
    query = query.split("#", 1)[0]
    params: dict[str, str] = {}
    for pair in query.split("&"):
        if not pair:
            continue
        key, _, value = pair.partition("=")
        params.setdefault(unquote(key), unquote(value))
    return params


class TokenValidator:
    """Validates scanned check-in codes against the current period."""

    def __init__(self, config: CheckInConfig, clock: Clock):
        self.config = config
        self.clock = clock

    def parse(self, raw: str) -> ParsedToken | TokenValidation:
        """Extract token fields, or return a failed validation."""
        if not raw or self.config.base_url not in raw:
            return TokenValidation.failure(
                ErrorCode.INVALID_TOKEN,
                "Invalid QR code format. Please use the official check-in QR code.",
            )

        params = parse_query(raw)
        token = params.get("token")
        version = params.get("v")

        if "period" in params:
            period = params["period"]
            strategy_value = params.get("strategy")
            if not strategy_value:
                return TokenValidation.failure(
                    ErrorCode.INVALID_TOKEN, "Missing required parameters in QR code."
                )
            try:
                strategy = RotationStrategy(strategy_value)
            except ValueError:
                return TokenValidation.failure(
                    ErrorCode.INVALID_TOKEN,
                    f"Unknown rotation strategy '{strategy_value}' in QR code.",
                )
            legacy = False
        elif "date" in params:
            period = params["date"]
            strategy = RotationStrategy.DAILY
            legacy = True
        else:
            return TokenValidation.failure(
                ErrorCode.INVALID_TOKEN, "Missing required parameters in QR code."
            )

        if not period or not token:
            return TokenValidation.failure(
                ErrorCode.INVALID_TOKEN, "Missing required parameters in QR code."
            )

        return ParsedToken(
            period=period,
            token=token,
            strategy=strategy,
            version=version,
            legacy=legacy,
        )

    def validate(self, raw: str, now: datetime | None = None) -> TokenValidation:
        """Validate a scanned code as of `now` (default: the clock).

        Checks, in order: base URL marker, required parameters, token
        signature, then the period against the current period for the
        declared strategy. Manual tokens skip the period check.
        """
        parsed = self.parse(raw)
        if isinstance(parsed, TokenValidation):
            logger.warning("Rejected check-in code: %s", parsed.reason)
            return parsed

        if parsed.token != sign_period(parsed.period, self.config.base_url):
            logger.warning("Rejected check-in code with bad token for period %s", parsed.period)
            return TokenValidation.failure(
                ErrorCode.INVALID_TOKEN,
                "Invalid QR code token. Please use the official QR code.",
                parsed,
            )

        if parsed.strategy != RotationStrategy.MANUAL:
            expected = current_period(parsed.strategy, now or self.clock.now(), self.config)
            if parsed.period != expected:
                logger.info(
                    "Expired %s check-in code: period %s, current %s",
                    parsed.strategy.value,
                    parsed.period,
                    expected,
                )
                return TokenValidation.failure(
                    ErrorCode.EXPIRED_TOKEN,
                    EXPIRED_MESSAGES[parsed.strategy],
                    parsed,
                )

        return TokenValidation(is_valid=True, token=parsed)
