"""Check-in endpoints."""

from fastapi import APIRouter, status

from attendance_rewards.api.dependencies import Engine
from attendance_rewards.api.errors import ServiceError
from attendance_rewards.api.schemas import (
    CheckInCodeResponse,
    CheckInRequest,
    CheckInResponse,
    ErrorResponse,
)
from attendance_rewards.domain import RotationStrategy

router = APIRouter(tags=["check-ins"])


@router.post(
    "/check-ins",
    response_model=CheckInResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
def check_in(engine: Engine, payload: CheckInRequest) -> CheckInResponse:
    """Record today's check-in from a scanned QR payload."""
    result = engine.check_in(payload.employee_id, payload.token)
    if not result.success:
        context = None
        if result.window_reason is not None:
            context = {"window_reason": result.window_reason.value}
        raise ServiceError(result.error, result.message, context)
    return CheckInResponse(
        message=result.message,
        check_in_id=result.check_in_id,
        tier=result.tier,
        points_earned=result.points_earned,
        bonus_reason=result.bonus_reason,
        current_streak=result.current_streak,
        new_badges=list(result.new_badges),
        affirmation=result.affirmation,
    )


@router.get(
    "/check-in-code",
    response_model=CheckInCodeResponse,
)
def get_check_in_code(
    engine: Engine,
    strategy: RotationStrategy | None = None,
) -> CheckInCodeResponse:
    """The check-in URL to encode into today's QR image."""
    code = engine.check_in_code(strategy)
    return CheckInCodeResponse.model_validate(code)
