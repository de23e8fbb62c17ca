"""Discovery feed service."""

from collections.abc import Callable
from dataclasses import dataclass
from uuid import UUID

import structlog

from core.exceptions import AuthenticationError
from domain.entities.profile import Profile
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.eligibility import candidates_for
from domain.services.profile_completion import is_complete

logger = structlog.get_logger()


@dataclass(frozen=True, slots=True)
class FeedPage:
    """Read-only value object: one page of the discovery feed."""

    profiles: list[Profile]
    has_more: bool


class DiscoveryService:
    """Service layer that assembles the swipe feed for a viewer."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork], page_size: int = 20) -> None:
        self._uow_factory = uow_factory
        self._page_size = page_size

    async def get_feed(self, viewer_profile_id: UUID, limit: int | None = None) -> FeedPage:
        """Return the next candidates the viewer has not decided on yet.

        Raises AuthenticationError when the viewer profile does not resolve.
        An incomplete viewer gets an empty page; the client is expected to
        send them to profile completion instead.
        """
        page_size = limit if limit is not None else self._page_size

        async with self._uow_factory() as uow:
            viewer = await uow.profiles.get(viewer_profile_id)
            if not viewer:
                raise AuthenticationError("Viewer profile could not be resolved")

            if not is_complete(viewer):
                logger.info("feed_blocked_incomplete_profile", profile_id=str(viewer.id))
                return FeedPage(profiles=[], has_more=False)

            # Role, self, decided and required-field filters run in SQL; one
            # extra row tells whether another page exists
            pool = await uow.profiles.list_candidates(
                viewer.id, viewer.role.opposite, limit=page_size + 1
            )

        eligible = candidates_for(viewer, pool, [], limit=page_size + 1)
        return FeedPage(
            profiles=eligible[:page_size],
            has_more=len(eligible) > page_size,
        )
