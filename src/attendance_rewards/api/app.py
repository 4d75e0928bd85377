"""FastAPI application factory."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from attendance_rewards.api.errors import ServiceError, service_error_handler
from attendance_rewards.api.routes import (
    check_ins_router,
    employees_router,
    health_router,
    rewards_router,
)
from attendance_rewards.catalog import DEFAULT_REWARDS
from attendance_rewards.clock import SystemClock
from attendance_rewards.config import configure_logging, get_settings
from attendance_rewards.database import dispose_db, init_db
from attendance_rewards.engine import RewardsEngine
from attendance_rewards.errors import ConcurrentModificationError
from attendance_rewards.repositories import SqlEmployeeRepository

logger = logging.getLogger(__name__)


def build_engine() -> RewardsEngine:
    """Build an engine backed by the configured database."""
    settings = get_settings()
    _, session_factory = init_db(settings.database_url)
    repository = SqlEmployeeRepository(session_factory)
    if not repository.load_catalog():
        repository.seed_catalog(DEFAULT_REWARDS)
    return RewardsEngine(repository, settings.check_in, SystemClock())


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    owns_engine = getattr(app.state, "engine", None) is None
    if owns_engine:
        configure_logging(get_settings().log_level)
        app.state.engine = build_engine()
    yield
    if owns_engine:
        dispose_db()
        app.state.engine = None


def create_app(engine: RewardsEngine | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Pass an engine to serve it directly; otherwise one is built from
    settings at startup.
    """
    app = FastAPI(
        title="Attendance Rewards API",
        description="QR check-ins, streaks, badges and reward redemptions",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.engine = engine

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ServiceError, service_error_handler)

    @app.exception_handler(ConcurrentModificationError)
    async def concurrent_modification_handler(
        request: Request, exc: ConcurrentModificationError
    ) -> JSONResponse:
        """Another writer saved the employee first; the client may retry."""
        logger.warning("%s", exc)
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content={
                "detail": "The record was modified concurrently. Please retry.",
                "code": "concurrent_modification",
            },
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "detail": "An unexpected error occurred",
                "code": "INTERNAL_ERROR",
            },
        )

    app.include_router(health_router)
    app.include_router(employees_router, prefix="/api/v1")
    app.include_router(check_ins_router, prefix="/api/v1")
    app.include_router(rewards_router, prefix="/api/v1")

    return app


# Default app instance for uvicorn
app = create_app()
