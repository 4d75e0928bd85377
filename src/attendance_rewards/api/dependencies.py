"""FastAPI dependencies for dependency injection."""

from typing import Annotated

from fastapi import Depends, Request

from attendance_rewards.engine import RewardsEngine


def get_rewards_engine(request: Request) -> RewardsEngine:
    """Get the engine built at application startup."""
    return request.app.state.engine


# Type alias for cleaner dependency injection
Engine = Annotated[RewardsEngine, Depends(get_rewards_engine)]
