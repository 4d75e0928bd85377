"""Attendance rewards command line interface.

Provides operational tools for:
- Printing the current check-in URL for the QR display
- Validating a scanned check-in URL
- Leaderboard queries
- Balance audits
- Serving the HTTP API

Usage:
    python -m attendance_rewards.cli token --strategy weekly
    python -m attendance_rewards.cli validate "https://rewards.company.com/checkin?..."
    python -m attendance_rewards.cli leaderboard --period monthly --limit 10
    python -m attendance_rewards.cli audit
    python -m attendance_rewards.cli serve --port 8080
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Callable

from attendance_rewards.checkin import TokenValidator, build_check_in_code
from attendance_rewards.clock import Clock, SystemClock
from attendance_rewards.config import CheckInConfig, configure_logging, get_settings
from attendance_rewards.domain import PointsPeriod, RotationStrategy
from attendance_rewards.engine import RewardsEngine
from attendance_rewards.errors import ErrorCode


class RewardsCli:
    """Attendance rewards command line interface."""

    def __init__(self, engine: RewardsEngine | None = None) -> None:
        self._engine = engine
        self.parser = self._build_parser()

    @property
    def engine(self) -> RewardsEngine:
        if self._engine is None:
            from attendance_rewards.api.app import build_engine

            self._engine = build_engine()
        return self._engine

    def _config_and_clock(self) -> tuple[CheckInConfig, Clock]:
        # Token commands need no database
        if self._engine is not None:
            return self._engine.config, self._engine.clock
        return get_settings().check_in, SystemClock()

    def _build_parser(self) -> argparse.ArgumentParser:
        """Build argument parser."""
        parser = argparse.ArgumentParser(
            prog="python -m attendance_rewards.cli",
            description="Attendance rewards operational tools",
        )
        parser.add_argument(
            "--log-level",
            type=str,
            help="Logging level (default: LOG_LEVEL or INFO)",
        )
        subparsers = parser.add_subparsers(dest="command", help="Commands")

        # token command
        token = subparsers.add_parser(
            "token",
            help="Print the check-in URL to encode into the QR image",
        )
        token.add_argument(
            "--strategy",
            type=RotationStrategy,
            choices=list(RotationStrategy),
            help="Rotation strategy (default: CHECKIN_ROTATION_STRATEGY)",
        )
        token.add_argument(
            "--json",
            action="store_true",
            help="Print the code and display information as JSON",
        )

        # validate command
        validate = subparsers.add_parser(
            "validate",
            help="Check whether a scanned URL would be accepted now",
        )
        validate.add_argument("url", type=str, help="Scanned check-in URL")

        # leaderboard command
        leaderboard = subparsers.add_parser(
            "leaderboard",
            help="Show employees ranked by points",
        )
        leaderboard.add_argument(
            "--period",
            type=PointsPeriod,
            choices=list(PointsPeriod),
            default=PointsPeriod.ALL,
            help="Point counter to rank by (default: all)",
        )
        leaderboard.add_argument(
            "--limit",
            type=int,
            default=10,
            help="Maximum rows to show (default: 10)",
        )

        # audit command
        subparsers.add_parser(
            "audit",
            help="Rebuild every balance from history and report drift",
        )

        # serve command
        serve = subparsers.add_parser(
            "serve",
            help="Run the HTTP API with uvicorn",
        )
        serve.add_argument("--host", type=str, help="Bind address (default: HOST)")
        serve.add_argument("--port", type=int, help="Port (default: PORT)")
        serve.add_argument(
            "--reload",
            action="store_true",
            help="Reload on code changes",
        )

        return parser

    def run(self, args: list[str] | None = None) -> int:
        """Run the CLI with given arguments."""
        parsed = self.parser.parse_args(args)

        if not parsed.command:
            self.parser.print_help()
            return 1

        if parsed.log_level:
            configure_logging(parsed.log_level)

        handlers: dict[str, Callable[..., int]] = {
            "token": self._cmd_token,
            "validate": self._cmd_validate,
            "leaderboard": self._cmd_leaderboard,
            "audit": self._cmd_audit,
            "serve": self._cmd_serve,
        }

        handler = handlers.get(parsed.command)
        if handler:
            return handler(parsed)

        print(f"Unknown command: {parsed.command}", file=sys.stderr)
        return 1

    def _cmd_token(self, args: argparse.Namespace) -> int:
        """Print the current check-in code."""
        config, clock = self._config_and_clock()
        code = build_check_in_code(config, clock.now(), args.strategy)

        if args.json:
            print(
                json.dumps(
                    {
                        "url": code.url,
                        "period": code.period,
                        "strategy": code.strategy.value,
                        "version": code.version,
                        "valid_time_window": code.valid_time_window,
                        "timezone": code.timezone,
                        "instructions": list(code.instructions),
                    },
                    indent=2,
                )
            )
            return 0

        print(code.url)
        print(f"  Period:   {code.period} ({code.strategy.value})")
        print(f"  Window:   {code.valid_time_window} {code.timezone}")
        return 0

    def _cmd_validate(self, args: argparse.Namespace) -> int:
        """Validate a scanned check-in URL against the current time."""
        config, clock = self._config_and_clock()
        validation = TokenValidator(config, clock).validate(args.url)

        token = validation.token
        if validation.is_valid and token is not None:
            print(f"✓ Valid {token.strategy.value} code for period {token.period}")
            if token.legacy:
                print("  (legacy date format)")
            return 0

        error = validation.error or ErrorCode.INVALID_TOKEN
        print(f"✗ {error.value}: {validation.reason}")
        return 1

    def _cmd_leaderboard(self, args: argparse.Namespace) -> int:
        """Print the leaderboard."""
        entries = self.engine.leaderboard(args.period, args.limit)
        print(f"Leaderboard ({args.period.value})")
        print("=" * 40)
        if not entries:
            print("No employees yet.")
            return 0
        for entry in entries:
            print(
                f"{entry.rank:>3}. {entry.name:<24} {entry.points:>6} pts"
                f"  streak {entry.current_streak}"
            )
        return 0

    def _cmd_audit(self, args: argparse.Namespace) -> int:
        """Verify every balance against its history."""
        checks = self.engine.audit_balances()
        print("Balance Audit")
        print("=" * 40)

        drifted = [c for c in checks if not c.is_balanced]
        for check in drifted:
            print(
                f"✗ {check.employee_id}: recorded {check.recorded}, "
                f"expected {check.expected} (drift {check.drift:+d})"
            )

        print(f"\nChecked {len(checks)} employee(s)")
        if drifted:
            print(f"Audit: FAILED ({len(drifted)} mismatched)")
            return 1
        print("Audit: PASSED")
        return 0

    def _cmd_serve(self, args: argparse.Namespace) -> int:
        """Serve the HTTP API."""
        import uvicorn

        settings = get_settings()
        uvicorn.run(
            "attendance_rewards.api.app:app",
            host=args.host or settings.HOST,
            port=args.port or settings.PORT,
            reload=args.reload or settings.DEBUG,
        )
        return 0


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    cli = RewardsCli()
    return cli.run(argv)


if __name__ == "__main__":
    sys.exit(main())
