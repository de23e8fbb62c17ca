"""Discovery feed routes."""

from fastapi import APIRouter, Depends, Query, Request

from api.v1.dependencies import CurrentViewer, get_discovery_service
from api.v1.schemas.feed import FeedResponse
from api.v1.schemas.profile import ProfileCard
from core.config import settings
from core.rate_limit import READ_LIMIT, limiter
from domain.services.discovery_service import DiscoveryService

router = APIRouter(prefix="/feed", tags=["feed"])


@router.get(
    "",
    response_model=FeedResponse,
    summary="Get swipe candidates",
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_feed(
    request: Request,
    viewer: CurrentViewer,
    limit: int | None = Query(None, ge=1, le=settings.feed_max_page_size),
    service: DiscoveryService = Depends(get_discovery_service),
) -> FeedResponse:
    """
    Profiles of the opposite role the viewer has not swiped on yet.

    Empty while the viewer's own profile is incomplete.
    """
    page = await service.get_feed(viewer.profile_id, limit=limit)
    return FeedResponse(
        profiles=[ProfileCard.from_entity(profile) for profile in page.profiles],
        has_more=page.has_more,
    )
