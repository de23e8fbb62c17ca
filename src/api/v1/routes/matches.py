"""Match API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, Request

from api.v1.dependencies import CurrentViewer, get_match_service
from api.v1.schemas.common import ErrorResponse
from api.v1.schemas.match import (
    MatchDetailResponse,
    MatchListResponse,
    MatchResponse,
    MatchStatus,
    MatchStatusResponse,
)
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.services.match_service import MatchService

router = APIRouter(prefix="/matches", tags=["matches"])

_MATCH_ERRORS = {
    403: {"model": ErrorResponse, "description": "Not a participant of this match"},
    404: {"model": ErrorResponse, "description": "Match not found"},
}


@router.get(
    "",
    response_model=MatchListResponse,
    summary="List own matches",
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_matches(
    request: Request,
    viewer: CurrentViewer,
    service: MatchService = Depends(get_match_service),
) -> MatchListResponse:
    """All matches of the viewer, open and closed, newest first."""
    views = await service.list_for_profile(viewer.profile_id)
    return MatchListResponse(data=[MatchResponse.from_view(view) for view in views])


@router.get(
    "/{match_id}",
    response_model=MatchDetailResponse,
    summary="Get a match",
    responses=_MATCH_ERRORS,
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_match(
    request: Request,
    match_id: UUID,
    viewer: CurrentViewer,
    service: MatchService = Depends(get_match_service),
) -> MatchDetailResponse:
    """Get one match with the other participant's card."""
    view = await service.get_for_participant(match_id, viewer.profile_id)
    return MatchDetailResponse(data=MatchResponse.from_view(view))


@router.post(
    "/{match_id}/close",
    response_model=MatchStatusResponse,
    summary="Close a match",
    responses=_MATCH_ERRORS,
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def close_match(
    request: Request,
    match_id: UUID,
    viewer: CurrentViewer,
    service: MatchService = Depends(get_match_service),
) -> MatchStatusResponse:
    """Close a match for both sides. Closing twice is a no-op."""
    match = await service.close(match_id, viewer.profile_id)
    return MatchStatusResponse(data=MatchStatus.from_entity(match))
