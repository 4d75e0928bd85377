"""Per-employee serialization of mutations.

Every operation that reads and then writes an employee's balances, check-in
log, streak, badges or redemptions holds that employee's lock for the whole
load → mutate → save sequence. Different employees never contend.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager


class EmployeeLockRegistry:
    """Hands out one lock per employee id.

    A lock lives only while some thread holds or waits for it; the last one
    out removes it, so unknown or idle ids do not accumulate.
    """

    def __init__(self) -> None:
        self._locks: dict[str, threading.Lock] = {}
        self._holders: dict[str, int] = {}
        self._guard = threading.Lock()

    def _acquire_ref(self, employee_id: str) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(employee_id)
            if lock is None:
                lock = threading.Lock()
                self._locks[employee_id] = lock
                self._holders[employee_id] = 0
            self._holders[employee_id] += 1
            return lock

    def _release_ref(self, employee_id: str) -> None:
        with self._guard:
            self._holders[employee_id] -= 1
            if self._holders[employee_id] == 0:
                del self._holders[employee_id]
                del self._locks[employee_id]

    @contextmanager
    def hold(self, employee_id: str) -> Iterator[None]:
        """Hold the employee's lock for the duration of the block."""
        lock = self._acquire_ref(employee_id)
        try:
            with lock:
                yield
        finally:
            self._release_ref(employee_id)

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)
