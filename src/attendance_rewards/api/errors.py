"""Translation of service failures into HTTP error responses."""

from typing import Any

from fastapi import Request, status
from fastapi.responses import JSONResponse

from attendance_rewards.api.schemas import ErrorResponse
from attendance_rewards.errors import ErrorCode

STATUS_BY_CODE: dict[ErrorCode, int] = {
    ErrorCode.INVALID_TOKEN: status.HTTP_400_BAD_REQUEST,
    ErrorCode.EXPIRED_TOKEN: status.HTTP_400_BAD_REQUEST,
    ErrorCode.OUTSIDE_TIME_WINDOW: status.HTTP_403_FORBIDDEN,
    ErrorCode.DUPLICATE_CHECK_IN: status.HTTP_409_CONFLICT,
    ErrorCode.EMPLOYEE_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.INSUFFICIENT_POINTS: status.HTTP_409_CONFLICT,
    ErrorCode.INVALID_REDEMPTION_STATE: status.HTTP_409_CONFLICT,
    ErrorCode.REWARD_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.REWARD_UNAVAILABLE: status.HTTP_409_CONFLICT,
    ErrorCode.REDEMPTION_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.INVALID_BONUS: 422,
}


class ServiceError(Exception):
    """A refused operation, rendered as an ErrorResponse."""

    def __init__(
        self,
        code: ErrorCode,
        detail: str,
        context: dict[str, Any] | None = None,
    ):
        self.code = code
        self.detail = detail
        self.context = context
        self.status_code = STATUS_BY_CODE[code]
        super().__init__(detail)


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    """Render a ServiceError with its mapped status code."""
    body = ErrorResponse(detail=exc.detail, code=exc.code.value, context=exc.context)
    return JSONResponse(
        status_code=exc.status_code,
        content=body.model_dump(exclude_none=True),
    )
