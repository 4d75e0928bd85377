"""Pytest fixtures for attendance rewards tests."""

from __future__ import annotations

import random
from datetime import datetime
from zoneinfo import ZoneInfo

import pytest

from attendance_rewards.affirmations import QuoteAffirmationProvider
from attendance_rewards.checkin import generate_check_in_url
from attendance_rewards.clock import FixedClock
from attendance_rewards.config import CheckInConfig
from attendance_rewards.domain import Employee, RotationStrategy
from attendance_rewards.engine import RewardsEngine
from attendance_rewards.events import DomainEvent, EventEmitter
from attendance_rewards.repositories import InMemoryEmployeeRepository

DENVER = ZoneInfo("America/Denver")

# Monday, 07:40 local: minute 460, inside the window and early
MONDAY = datetime(2026, 3, 2, 7, 40, tzinfo=DENVER)


def denver(year: int, month: int, day: int, hour: int, minute: int = 0) -> datetime:
    """Wall-clock time in the default check-in timezone."""
    return datetime(year, month, day, hour, minute, tzinfo=DENVER)


def current_url(
    engine: RewardsEngine, strategy: RotationStrategy | None = None
) -> str:
    """The check-in URL an administrator would display right now."""
    return generate_check_in_url(engine.config, engine.clock.now(), strategy)


def check_in_on_consecutive_days(
    engine: RewardsEngine, employee_id: str, clock: FixedClock, days: int
) -> list:
    """Check in once per day at the clock's wall time, advancing a day after each."""
    results = []
    for _ in range(days):
        results.append(engine.check_in(employee_id, current_url(engine)))
        clock.advance(days=1)
    return results


@pytest.fixture
def config() -> CheckInConfig:
    return CheckInConfig()


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(MONDAY)


@pytest.fixture
def repository() -> InMemoryEmployeeRepository:
    return InMemoryEmployeeRepository()


@pytest.fixture
def emitter() -> EventEmitter:
    return EventEmitter()


@pytest.fixture
def published(emitter: EventEmitter) -> list[DomainEvent]:
    """Every event the engine publishes, in order."""
    events: list[DomainEvent] = []
    emitter.on_all(events.append)
    return events


@pytest.fixture
def engine(
    repository: InMemoryEmployeeRepository,
    config: CheckInConfig,
    clock: FixedClock,
    emitter: EventEmitter,
) -> RewardsEngine:
    return RewardsEngine(
        repository=repository,
        config=config,
        clock=clock,
        emitter=emitter,
        affirmations=QuoteAffirmationProvider(rng=random.Random(7)),
    )


@pytest.fixture
def employee(engine: RewardsEngine) -> Employee:
    return engine.create_employee("Sarah Johnson", "sarah@company.com")
