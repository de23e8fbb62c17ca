"""Match registry service."""

from collections.abc import Callable
from uuid import UUID

import structlog

from core.exceptions import (
    MatchNotFoundError,
    NotAMatchParticipantError,
    ProfileNotFoundError,
)
from domain.entities.match import Match, MatchView
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()


class MatchService:
    """Service layer for listing and closing matches."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def list_for_profile(self, profile_id: UUID) -> list[MatchView]:
        """All matches of a profile, open and closed, newest first."""
        async with self._uow_factory() as uow:
            matches = await uow.matches.list_for_profile(profile_id)
            if not matches:
                return []

            other_ids = [m.other_party(profile_id) for m in matches]
            profiles = await uow.profiles.get_many(other_ids)

            views = []
            for match in matches:
                other = profiles.get(match.other_party(profile_id))
                if other is None:
                    # Dangling match row; the FK cascade should prevent this
                    logger.warning(
                        "match_counterpart_missing",
                        match_id=str(match.id),
                    )
                    continue
                views.append(MatchView(match=match, other_profile=other))
            return views

    async def get_for_participant(self, match_id: UUID, profile_id: UUID) -> MatchView:
        """Get one match as seen by one of its participants."""
        async with self._uow_factory() as uow:
            match = await self._require_participant(uow, match_id, profile_id)
            other_id = match.other_party(profile_id)
            other = await uow.profiles.get(other_id)
            if not other:
                raise ProfileNotFoundError(str(other_id))
            return MatchView(match=match, other_profile=other)

    async def close(self, match_id: UUID, closing_profile_id: UUID) -> Match:
        """Close a match. Closing an already-closed match is a no-op.

        When two participants close at once, the first committed close wins
        and both callers get its state back.
        """
        async with self._uow_factory() as uow:
            match = await self._require_participant(uow, match_id, closing_profile_id)

            if not match.close(closing_profile_id):
                return match

            stored = await uow.matches.close_if_open(match)
            await uow.commit()

        if stored.closed_by == closing_profile_id:
            logger.info(
                "match_closed",
                match_id=str(match_id),
                closed_by=str(closing_profile_id),
            )
        return stored

    async def _require_participant(
        self,
        uow: IUnitOfWork,
        match_id: UUID,
        profile_id: UUID,
    ) -> Match:
        """Load a match and verify the profile is one of its two parties."""
        match = await uow.matches.get(match_id)
        if not match:
            raise MatchNotFoundError(str(match_id))
        if not match.involves(profile_id):
            raise NotAMatchParticipantError(str(match_id))
        return match
