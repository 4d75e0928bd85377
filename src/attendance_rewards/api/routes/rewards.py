"""Reward catalog and redemption endpoints."""

from typing import Annotated

from fastapi import APIRouter, Path, status

from attendance_rewards.api.dependencies import Engine
from attendance_rewards.api.errors import ServiceError
from attendance_rewards.api.schemas import (
    BadgeDefinitionResponse,
    DecisionRequest,
    ErrorResponse,
    PendingRedemptionResponse,
    RedemptionCreate,
    RedemptionResponse,
    RedemptionResultResponse,
    RewardResponse,
)
from attendance_rewards.services.results import RedemptionResult

router = APIRouter(tags=["rewards"])


def _to_response(result: RedemptionResult) -> RedemptionResultResponse:
    if not result.success:
        raise ServiceError(result.error, result.message)
    return RedemptionResultResponse(
        message=result.message,
        redemption=RedemptionResponse.model_validate(result.redemption),
        total_points=result.total_points,
    )


# ============================================================================
# Catalogs
# ============================================================================


@router.get("/rewards", response_model=list[RewardResponse])
def list_rewards(engine: Engine) -> list[RewardResponse]:
    """List the reward catalog."""
    return [RewardResponse.model_validate(r) for r in engine.reward_catalog()]


@router.get("/badges", response_model=list[BadgeDefinitionResponse])
def list_badges(engine: Engine) -> list[BadgeDefinitionResponse]:
    """List every badge that can be unlocked."""
    return [BadgeDefinitionResponse.model_validate(b) for b in engine.badge_catalog()]


# ============================================================================
# Redemptions
# ============================================================================


@router.post(
    "/redemptions",
    response_model=RedemptionResultResponse,
    status_code=status.HTTP_201_CREATED,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
def redeem_reward(engine: Engine, payload: RedemptionCreate) -> RedemptionResultResponse:
    """Request a reward. The cost is held until an administrator decides."""
    return _to_response(engine.redeem(payload.employee_id, payload.reward_id))


@router.get(
    "/redemptions/pending",
    response_model=list[PendingRedemptionResponse],
)
def list_pending_redemptions(engine: Engine) -> list[PendingRedemptionResponse]:
    """Approval queue, oldest request first."""
    return [PendingRedemptionResponse.model_validate(p) for p in engine.pending_redemptions()]


@router.post(
    "/redemptions/{redemption_id}/approve",
    response_model=RedemptionResultResponse,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
def approve_redemption(
    engine: Engine,
    redemption_id: Annotated[str, Path()],
    payload: DecisionRequest | None = None,
) -> RedemptionResultResponse:
    """Approve a pending redemption."""
    decided_by = payload.decided_by if payload else None
    return _to_response(engine.approve(redemption_id, decided_by))


@router.post(
    "/redemptions/{redemption_id}/reject",
    response_model=RedemptionResultResponse,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
def reject_redemption(
    engine: Engine,
    redemption_id: Annotated[str, Path()],
    payload: DecisionRequest | None = None,
) -> RedemptionResultResponse:
    """Reject a pending redemption and refund its cost."""
    decided_by = payload.decided_by if payload else None
    return _to_response(engine.reject(redemption_id, decided_by))
