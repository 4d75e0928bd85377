"""Persistence adapters."""

from attendance_rewards.repositories.base import EmployeeRepository
from attendance_rewards.repositories.memory import InMemoryEmployeeRepository
from attendance_rewards.repositories.sql import SqlEmployeeRepository

__all__ = [
    "EmployeeRepository",
    "InMemoryEmployeeRepository",
    "SqlEmployeeRepository",
]
