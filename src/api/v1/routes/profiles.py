"""Profile API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, Request, status

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import CurrentViewer, get_profile_service
from api.v1.schemas.common import ErrorResponse
from api.v1.schemas.profile import (
    CompletionDetailResponse,
    CompletionResponse,
    ProfileCard,
    ProfileCardResponse,
    ProfileCreate,
    ProfileDetailResponse,
    ProfileResponse,
    ProfileUpdate,
)
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.services.profile_service import ProfileService

router = APIRouter(prefix="/profiles", tags=["profiles"])


@router.post(
    "",
    response_model=ProfileDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a profile",
    responses={
        201: {"description": "Profile created successfully"},
        409: {"model": ErrorResponse, "description": "User already has a profile"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def create_profile(
    request: Request,
    body: ProfileCreate,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Create the clinic or worker profile of the authenticated user."""
    profile = await service.create(
        user_id=user.id,
        role=body.role,
        name=body.name,
        **body.model_dump(exclude={"role", "name"}, exclude_none=True),
    )
    return ProfileDetailResponse(data=ProfileResponse.from_entity(profile))


@router.get(
    "/me",
    response_model=ProfileDetailResponse,
    summary="Get own profile",
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_my_profile(
    request: Request,
    viewer: CurrentViewer,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Get the full profile of the authenticated user."""
    profile = await service.get(viewer.profile_id)
    return ProfileDetailResponse(data=ProfileResponse.from_entity(profile))


@router.patch(
    "/me",
    response_model=ProfileDetailResponse,
    summary="Update own profile",
    responses={
        400: {"model": ErrorResponse, "description": "Profile invariant violated"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def update_my_profile(
    request: Request,
    body: ProfileUpdate,
    viewer: CurrentViewer,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Partially update the own profile. Only fields present in the body change."""
    profile = await service.update(viewer.profile_id, **body.model_dump(exclude_unset=True))
    return ProfileDetailResponse(data=ProfileResponse.from_entity(profile))


@router.get(
    "/me/completion",
    response_model=CompletionDetailResponse,
    summary="Get own profile completion",
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_my_completion(
    request: Request,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> CompletionDetailResponse:
    """Report required fields still missing and the completion percentage.

    Works before registration too: a user without a profile scores 0%.
    """
    result = await service.get_completion_for_user(user.id)
    return CompletionDetailResponse(data=CompletionResponse.from_result(result))


@router.get(
    "/{profile_id}",
    response_model=ProfileCardResponse,
    summary="Get a profile card",
    responses={
        404: {"model": ErrorResponse, "description": "Profile not found"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_profile(
    request: Request,
    profile_id: UUID,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileCardResponse:
    """Get the public card of any profile."""
    profile = await service.get(profile_id)
    return ProfileCardResponse(data=ProfileCard.from_entity(profile))
