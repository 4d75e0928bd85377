"""Collaborators shared by the check-in and reward services."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date, datetime
from uuid import UUID

from attendance_rewards.clock import Clock
from attendance_rewards.config import CheckInConfig
from attendance_rewards.events import DomainEvent, EventEmitter, EventMetadata
from attendance_rewards.repositories.base import EmployeeRepository
from attendance_rewards.services.badges import BadgeEngine
from attendance_rewards.services.locking import EmployeeLockRegistry


@dataclass
class ServiceContext:
    """Everything a service needs, injected once."""

    repository: EmployeeRepository
    config: CheckInConfig
    clock: Clock
    emitter: EventEmitter = field(default_factory=EventEmitter)
    locks: EmployeeLockRegistry = field(default_factory=EmployeeLockRegistry)
    badge_engine: BadgeEngine | None = None

    def __post_init__(self) -> None:
        if self.badge_engine is None:
            self.badge_engine = BadgeEngine(self.config)

    @property
    def badges(self) -> BadgeEngine:
        if self.badge_engine is None:
            self.badge_engine = BadgeEngine(self.config)
        return self.badge_engine

    def local_date(self, instant: datetime) -> date:
        """Calendar day of an instant in the configured timezone."""
        return instant.astimezone(self.config.tz).date()

    def metadata(
        self,
        timestamp: datetime,
        correlation_id: UUID,
        actor_id: str | None,
        actor_type: str,
    ) -> EventMetadata:
        return EventMetadata.create(
            timestamp=timestamp,
            correlation_id=correlation_id,
            actor_id=actor_id,
            actor_type=actor_type,
        )

    def publish(self, events: Sequence[DomainEvent]) -> None:
        """Publish events after the state change they describe is saved."""
        self.emitter.emit_all(events)
