"""API routes."""

from attendance_rewards.api.routes.check_ins import router as check_ins_router
from attendance_rewards.api.routes.employees import router as employees_router
from attendance_rewards.api.routes.health import router as health_router
from attendance_rewards.api.routes.rewards import router as rewards_router

__all__ = ["check_ins_router", "employees_router", "health_router", "rewards_router"]
