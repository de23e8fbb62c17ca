"""Dependency injection factories for API v1."""

from functools import lru_cache
from typing import Annotated, Callable

import structlog
from fastapi import Depends

from api.dependencies.auth import CurrentUser
from core.config import settings
from domain.entities.session import ViewerSession
from domain.services.discovery_service import DiscoveryService
from domain.services.match_service import MatchService
from domain.services.message_service import MessageService
from domain.services.profile_service import ProfileService
from domain.services.swipe_service import SwipeService
from infrastructure.database.session import async_session_factory
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork


def get_uow_factory() -> Callable[[], SQLAlchemyUnitOfWork]:
    """Factory for creating Unit of Work instances."""

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(async_session_factory)

    return factory


@lru_cache
def get_profile_service() -> ProfileService:
    """Get Profile service instance."""
    return ProfileService(get_uow_factory())


@lru_cache
def get_discovery_service() -> DiscoveryService:
    """Get Discovery service instance."""
    return DiscoveryService(get_uow_factory(), page_size=settings.feed_page_size)


@lru_cache
def get_swipe_service() -> SwipeService:
    """Get Swipe service instance."""
    return SwipeService(get_uow_factory())


@lru_cache
def get_match_service() -> MatchService:
    """Get Match service instance."""
    return MatchService(get_uow_factory())


@lru_cache
def get_message_service() -> MessageService:
    """Get Message service instance."""
    return MessageService(get_uow_factory())


async def get_viewer_session(
    user: CurrentUser,
    profile_service: ProfileService = Depends(get_profile_service),
) -> ViewerSession:
    """
    Resolve the caller's profile for the lifetime of one request.

    Raises:
        AuthenticationError: PROFILE_REQUIRED if the user has not registered
    """
    viewer = await profile_service.resolve_viewer(user.id)
    structlog.contextvars.bind_contextvars(
        profile_id=str(viewer.profile_id),
        role=viewer.role.value,
    )
    return viewer


CurrentViewer = Annotated[ViewerSession, Depends(get_viewer_session)]
