"""Check-in ledger: gate, record and score daily check-ins."""

from __future__ import annotations

import logging
from uuid import uuid4

from attendance_rewards.affirmations import AffirmationProvider, QuoteAffirmationProvider
from attendance_rewards.checkin import TokenValidator, WindowGate, classify_arrival, minutes_of_day
from attendance_rewards.domain import ArrivalTier, CheckInEvent, new_id
from attendance_rewards.errors import ErrorCode
from attendance_rewards.events import (
    BadgeUnlocked,
    CheckInRecorded,
    DomainEvent,
    StreakBonusAwarded,
)
from attendance_rewards.services import points
from attendance_rewards.services.context import ServiceContext
from attendance_rewards.services.results import CheckInResult
from attendance_rewards.services.streaks import update_streak

logger = logging.getLogger(__name__)

TIER_MESSAGES = {
    ArrivalTier.EARLY: "Early Bird! +{points} points",
    ArrivalTier.ON_TIME: "On Time! +{points} point",
    ArrivalTier.LATE: "Better luck tomorrow!",
}


class CheckInService:
    """Records at most one check-in per employee per local day.

    Order of checks: token, window, employee lookup, duplicate. The first
    failure is returned and nothing is written.
    """

    def __init__(
        self,
        context: ServiceContext,
        affirmations: AffirmationProvider | None = None,
    ):
        self.context = context
        self.tokens = TokenValidator(context.config, context.clock)
        self.window = WindowGate(context.config, context.clock)
        self.affirmations = affirmations or QuoteAffirmationProvider()

    def check_in(self, employee_id: str, raw_token: str) -> CheckInResult:
        # One instant for the whole attempt: token period, window and recorded day
        now = self.context.clock.now()

        validation = self.tokens.validate(raw_token, now)
        if not validation.is_valid:
            return CheckInResult.failure(
                validation.error or ErrorCode.INVALID_TOKEN,
                validation.reason or "Invalid QR code.",
            )

        window = self.window.check(now)
        if not window.is_valid:
            logger.info(
                "Check-in by %s outside window (%s at %s)",
                employee_id,
                window.window_reason.value if window.window_reason else None,
                window.current_time,
            )
            return CheckInResult.failure(
                ErrorCode.OUTSIDE_TIME_WINDOW,
                window.reason or "Check-in is not available right now.",
                window.window_reason,
            )

        ctx = self.context
        events: list[DomainEvent] = []
        with ctx.locks.hold(employee_id):
            employee = ctx.repository.load(employee_id)
            if employee is None:
                logger.warning("Check-in for unknown employee %s", employee_id)
                return CheckInResult.failure(ErrorCode.EMPLOYEE_NOT_FOUND, "Employee not found")

            today = ctx.local_date(now)
            if employee.check_in_on(today) is not None:
                logger.warning("Duplicate check-in by %s on %s", employee_id, today)
                return CheckInResult.failure(
                    ErrorCode.DUPLICATE_CHECK_IN,
                    "You have already checked in today. Come back tomorrow!",
                )

            arrival = classify_arrival(minutes_of_day(now, ctx.config), ctx.config)
            event = CheckInEvent(
                event_id=new_id(),
                timestamp=now,
                local_date=today,
                tier=arrival.tier,
                points_earned=arrival.points,
            )
            employee.check_ins.append(event)
            streak = update_streak(employee, event, ctx.config)
            points.credit(employee, event.points_earned)
            employee.last_check_in = now
            unlocked = ctx.badges.evaluate(employee, now)
            ctx.repository.save(employee)

            correlation_id = uuid4()
            events.append(
                CheckInRecorded(
                    metadata=ctx.metadata(now, correlation_id, employee_id, "employee"),
                    employee_id=employee_id,
                    check_in_id=event.event_id,
                    tier=event.tier.value,
                    points_earned=event.points_earned,
                    current_streak=streak.current_streak,
                )
            )
            if streak.bonus is not None:
                events.append(
                    StreakBonusAwarded(
                        metadata=ctx.metadata(now, correlation_id, employee_id, "employee"),
                        employee_id=employee_id,
                        check_in_id=event.event_id,
                        streak=streak.current_streak,
                        bonus_points=streak.bonus.points,
                        reason=streak.bonus.reason,
                    )
                )
            events.extend(
                BadgeUnlocked(
                    metadata=ctx.metadata(now, correlation_id, employee_id, "employee"),
                    employee_id=employee_id,
                    badge_id=badge.badge_id,
                    badge_name=badge.name,
                )
                for badge in unlocked
            )

        logger.info(
            "Employee %s checked in %s for %d points (streak %d)",
            employee_id,
            event.tier.value,
            event.points_earned,
            streak.current_streak,
        )
        ctx.publish(events)

        message = TIER_MESSAGES[event.tier].format(points=arrival.points)
        if streak.bonus is not None:
            message += f" (+{streak.bonus.points} {streak.bonus.reason})"

        return CheckInResult(
            success=True,
            message=message,
            points_earned=event.points_earned,
            tier=event.tier,
            check_in_id=event.event_id,
            bonus_reason=event.bonus_reason,
            current_streak=streak.current_streak,
            new_badges=tuple(badge.badge_id for badge in unlocked),
            affirmation=self.affirmations.pick(event.tier),
        )
