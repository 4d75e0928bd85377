"""Employee profile, stats, bonus and leaderboard endpoints."""

from typing import Annotated

from fastapi import APIRouter, HTTPException, Path, Query, status

from attendance_rewards.api.dependencies import Engine
from attendance_rewards.api.errors import ServiceError
from attendance_rewards.api.schemas import (
    BonusRequest,
    BonusResponse,
    EmployeeCreate,
    EmployeeResponse,
    EmployeeStatsResponse,
    ErrorResponse,
    LeaderboardEntryResponse,
    LeaderboardResponse,
)
from attendance_rewards.domain import PointsPeriod
from attendance_rewards.errors import ErrorCode

router = APIRouter(tags=["employees"])


@router.post(
    "/employees",
    response_model=EmployeeResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
def create_employee(engine: Engine, payload: EmployeeCreate) -> EmployeeResponse:
    """Create an employee profile with empty balances."""
    try:
        employee = engine.create_employee(payload.name, payload.email)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
    return EmployeeResponse.model_validate(employee)


@router.get(
    "/employees/{employee_id}",
    response_model=EmployeeResponse,
    responses={404: {"model": ErrorResponse}},
)
def get_employee(
    engine: Engine,
    employee_id: Annotated[str, Path()],
) -> EmployeeResponse:
    """Get an employee's balances, streaks and badges."""
    employee = engine.get_employee(employee_id)
    if employee is None:
        raise ServiceError(ErrorCode.EMPLOYEE_NOT_FOUND, "Employee not found")
    return EmployeeResponse.model_validate(employee)


@router.get(
    "/employees/{employee_id}/stats",
    response_model=EmployeeStatsResponse,
    responses={404: {"model": ErrorResponse}},
)
def get_employee_stats(
    engine: Engine,
    employee_id: Annotated[str, Path()],
) -> EmployeeStatsResponse:
    """Dashboard summary: today's points, counters and recent check-ins."""
    stats = engine.employee_stats(employee_id)
    if stats is None:
        raise ServiceError(ErrorCode.EMPLOYEE_NOT_FOUND, "Employee not found")
    return EmployeeStatsResponse.model_validate(stats)


@router.post(
    "/employees/{employee_id}/bonuses",
    response_model=BonusResponse,
    status_code=status.HTTP_201_CREATED,
    responses={404: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
)
def grant_bonus(
    engine: Engine,
    employee_id: Annotated[str, Path()],
    payload: BonusRequest,
) -> BonusResponse:
    """Award bonus points to an employee."""
    result = engine.grant_bonus(employee_id, payload.points, payload.reason, payload.granted_by)
    if not result.success:
        raise ServiceError(result.error, result.message)
    return BonusResponse(
        message=result.message,
        grant_id=result.grant.grant_id,
        points_awarded=result.grant.points_awarded,
        reason=result.grant.reason,
        total_points=result.total_points,
        new_badges=list(result.new_badges),
    )


@router.get(
    "/leaderboard",
    response_model=LeaderboardResponse,
)
def get_leaderboard(
    engine: Engine,
    period: PointsPeriod = PointsPeriod.ALL,
    limit: Annotated[int | None, Query(ge=1, le=100)] = None,
) -> LeaderboardResponse:
    """Employees ranked by points for a period."""
    entries = engine.leaderboard(period, limit)
    return LeaderboardResponse(
        period=period,
        entries=[LeaderboardEntryResponse.model_validate(entry) for entry in entries],
    )
