"""Badge unlock evaluation."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime

from attendance_rewards.catalog import BADGE_CATALOG, POINT_COLLECTOR, STREAK_MASTER
from attendance_rewards.config import CheckInConfig
from attendance_rewards.domain import Badge, BadgeDefinition, Employee

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BadgeRule:
    """Unlocks `badge_id` when `qualifies` holds for an employee."""

    badge_id: str
    qualifies: Callable[[Employee, CheckInConfig], bool]


DEFAULT_RULES: tuple[BadgeRule, ...] = (
    BadgeRule(
        POINT_COLLECTOR,
        lambda employee, config: employee.total_points >= config.point_collector_threshold,
    ),
    BadgeRule(
        STREAK_MASTER,
        lambda employee, config: employee.current_streak >= config.streak_master_threshold,
    ),
)


class BadgeEngine:
    """Evaluates the ordered rule list against an employee.

    Rules are idempotent: a held badge is skipped, and badges are never
    removed when a condition later stops holding.
    """

    def __init__(
        self,
        config: CheckInConfig,
        rules: Sequence[BadgeRule] = DEFAULT_RULES,
        catalog: Mapping[str, BadgeDefinition] = BADGE_CATALOG,
    ):
        self.config = config
        self.rules = tuple(rules)
        self.catalog = catalog
        for rule in self.rules:
            if rule.badge_id not in catalog:
                raise ValueError(f"Badge rule references unknown badge '{rule.badge_id}'")

    def evaluate(self, employee: Employee, now: datetime) -> list[Badge]:
        """Unlock every newly qualifying badge and return them."""
        unlocked: list[Badge] = []
        for rule in self.rules:
            if employee.has_badge(rule.badge_id):
                continue
            if not rule.qualifies(employee, self.config):
                continue
            badge = Badge.unlock(self.catalog[rule.badge_id], now)
            employee.badges.append(badge)
            unlocked.append(badge)
            logger.info("Employee %s unlocked badge %s", employee.employee_id, rule.badge_id)
        return unlocked
