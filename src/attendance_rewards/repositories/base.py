"""Persistence port consumed by the rewards engine."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from attendance_rewards.domain import Employee, RewardDefinition


@runtime_checkable
class EmployeeRepository(Protocol):
    """Synchronous key-value store for employees and the reward catalog.

    load() returns a detached copy: changes are only visible to other
    callers after save(). save() raises ConcurrentModificationError when the
    stored version no longer matches employee.version, and bumps
    employee.version on success.
    """

    def load(self, employee_id: str) -> Employee | None:
        ...

    def save(self, employee: Employee) -> None:
        ...

    def load_catalog(self) -> list[RewardDefinition]:
        ...

    def list_employees(self) -> list[Employee]:
        ...

    def find_redemption_owner(self, redemption_id: str) -> str | None:
        """Return the id of the employee holding a redemption."""
        ...

    def ping(self) -> bool:
        """Return True if the backing store is reachable."""
        ...
