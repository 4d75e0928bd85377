"""Health check endpoints."""

from datetime import datetime

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from attendance_rewards.api.dependencies import Engine
from attendance_rewards.checkin import WindowGate

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    timestamp: datetime
    database: str
    check_in_window: str
    timezone: str


@router.get(
    "/health",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
)
def health_check(engine: Engine) -> HealthResponse:
    """Storage status plus whether check-ins are accepted right now."""
    db_status = "healthy" if engine.repository.ping() else "unhealthy"
    window = WindowGate(engine.config, engine.clock).check()
    return HealthResponse(
        status="healthy" if db_status == "healthy" else "degraded",
        timestamp=engine.clock.now(),
        database=db_status,
        check_in_window="open" if window.is_valid else "closed",
        timezone=engine.config.timezone,
    )


@router.get("/ready", status_code=status.HTTP_200_OK)
def readiness_check(engine: Engine):
    """Ready once the repository answers."""
    if not engine.repository.ping():
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "unavailable"},
        )
    return {"status": "ready"}


@router.get("/live", status_code=status.HTTP_200_OK)
def liveness_check() -> dict[str, str]:
    """Liveness check for container orchestration."""
    return {"status": "alive"}
