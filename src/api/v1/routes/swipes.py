"""Swipe API routes."""

from fastapi import APIRouter, Depends, Request

from api.v1.dependencies import CurrentViewer, get_swipe_service
from api.v1.schemas.common import ErrorResponse
from api.v1.schemas.swipe import SwipeCreate, SwipeResponse, SwipeResult
from core.rate_limit import SWIPE_LIMIT, limiter
from domain.services.swipe_service import SwipeService

router = APIRouter(prefix="/swipes", tags=["swipes"])


@router.post(
    "",
    response_model=SwipeResponse,
    summary="Like or pass on a profile",
    responses={
        400: {"model": ErrorResponse, "description": "Swiping on yourself"},
        404: {"model": ErrorResponse, "description": "Profile not found"},
        409: {"model": ErrorResponse, "description": "Concurrent match could not be resolved"},
    },
)
@limiter.limit(SWIPE_LIMIT)  # type: ignore[untyped-decorator]
async def create_swipe(
    request: Request,
    body: SwipeCreate,
    viewer: CurrentViewer,
    service: SwipeService = Depends(get_swipe_service),
) -> SwipeResponse:
    """
    Record a decision about another profile.

    A LIKE answering an earlier LIKE creates a match. Repeating a swipe
    overwrites the earlier decision and is safe to retry.
    """
    outcome = await service.record_swipe(viewer.profile_id, body.to_profile_id, body.type)
    return SwipeResponse(
        data=SwipeResult(match_created=outcome.match_created, match_id=outcome.match_id)
    )
