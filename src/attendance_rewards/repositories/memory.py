"""In-memory repository for tests, demos and single-process deployments."""

from __future__ import annotations

import copy
import threading
from collections.abc import Iterable

from attendance_rewards.catalog import DEFAULT_REWARDS
from attendance_rewards.domain import Employee, RewardDefinition
from attendance_rewards.errors import ConcurrentModificationError


class InMemoryEmployeeRepository:
    """Dictionary-backed repository that copies on every load and save."""

    def __init__(
        self,
        employees: Iterable[Employee] = (),
        catalog: Iterable[RewardDefinition] = DEFAULT_REWARDS,
    ) -> None:
        self._employees: dict[str, Employee] = {}
        self._catalog = list(catalog)
        self._lock = threading.Lock()
        for employee in employees:
            self.save(employee)

    def load(self, employee_id: str) -> Employee | None:
        with self._lock:
            stored = self._employees.get(employee_id)
            return copy.deepcopy(stored) if stored is not None else None

    def save(self, employee: Employee) -> None:
        with self._lock:
            stored = self._employees.get(employee.employee_id)
            stored_version = stored.version if stored is not None else 0
            if stored_version != employee.version:
                raise ConcurrentModificationError(
                    employee.employee_id, employee.version, stored_version
                )
            employee.version += 1
            self._employees[employee.employee_id] = copy.deepcopy(employee)

    def load_catalog(self) -> list[RewardDefinition]:
        return list(self._catalog)

    def list_employees(self) -> list[Employee]:
        with self._lock:
            return [copy.deepcopy(e) for e in self._employees.values()]

    def find_redemption_owner(self, redemption_id: str) -> str | None:
        with self._lock:
            for employee in self._employees.values():
                if employee.find_redemption(redemption_id) is not None:
                    return employee.employee_id
        return None

    def ping(self) -> bool:
        return True
