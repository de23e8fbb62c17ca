"""Swipe decision service: records likes/passes and creates mutual matches."""

from collections.abc import Callable
from uuid import UUID

import structlog
from sqlalchemy.exc import IntegrityError

from core.exceptions import (
    AppException,
    ErrorCode,
    InvalidSwipeError,
    MatchConflictError,
    ProfileNotFoundError,
)
from domain.entities.match import Match
from domain.entities.swipe import SwipeDecision, SwipeOutcome, SwipeType
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()


def _is_unique_violation(exc: IntegrityError) -> bool:
    orig = str(exc.orig).lower() if exc.orig else ""
    return "unique" in orig or "duplicate" in orig


class SwipeService:
    """Service layer for the swipe/match decision core."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def record_swipe(
        self,
        from_profile_id: UUID,
        to_profile_id: UUID,
        swipe_type: SwipeType,
    ) -> SwipeOutcome:
        """Record a decision and create a match on mutual LIKE.

        Re-swiping a pair overwrites the earlier decision. It never reopens,
        duplicates or removes an existing match, so the call is safe to retry.
        """
        if from_profile_id == to_profile_id:
            raise InvalidSwipeError(str(from_profile_id))
        try:
            swipe_type = SwipeType(swipe_type)
        except ValueError:
            raise AppException(
                ErrorCode.VALIDATION_ERROR,
                f"Unknown swipe type: {swipe_type}",
                400,
                {"type": str(swipe_type)},
            ) from None

        try:
            return await self._record(from_profile_id, to_profile_id, swipe_type)
        except IntegrityError as exc:
            # Only a lost unique race (same pair swiped twice, or both sides
            # matching at once) is recoverable; anything else is a bug.
            if not _is_unique_violation(exc):
                raise

        # The competing writer has committed; replaying sees its rows and
        # turns the insert into an update / an existing-match lookup.
        try:
            outcome = await self._record(from_profile_id, to_profile_id, swipe_type)
        except IntegrityError as exc:
            raise MatchConflictError(str(from_profile_id), str(to_profile_id)) from exc

        logger.info(
            "match_race_resolved",
            profile_id=str(from_profile_id),
            match_id=str(outcome.match_id) if outcome.match_id else None,
        )
        return outcome

    async def _record(
        self,
        from_profile_id: UUID,
        to_profile_id: UUID,
        swipe_type: SwipeType,
    ) -> SwipeOutcome:
        async with self._uow_factory() as uow:
            await self._lock_profiles(uow, from_profile_id, to_profile_id)
            await uow.swipes.upsert(
                SwipeDecision(
                    from_profile_id=from_profile_id,
                    to_profile_id=to_profile_id,
                    type=swipe_type,
                )
            )

            if swipe_type is SwipeType.PASS:
                await uow.commit()
                return SwipeOutcome(match_created=False)

            reciprocal = await uow.swipes.get(to_profile_id, from_profile_id)
            if not reciprocal or not reciprocal.is_like:
                await uow.commit()
                return SwipeOutcome(match_created=False)

            existing = await uow.matches.get_between(from_profile_id, to_profile_id)
            if existing:
                # Already matched (possibly closed): never reopen or duplicate
                await uow.commit()
                return SwipeOutcome(match_created=False, match_id=existing.id)

            created = await uow.matches.create(Match.between(from_profile_id, to_profile_id))
            await uow.commit()

        logger.info(
            "match_created",
            match_id=str(created.id),
            profile_ids=[str(created.profile_a_id), str(created.profile_b_id)],
        )
        return SwipeOutcome(match_created=True, match_id=created.id)

    async def _lock_profiles(self, uow: IUnitOfWork, *profile_ids: UUID) -> None:
        """Verify every referenced profile exists and lock the pair.

        Both directions of a pair lock the same two rows, so a reciprocal LIKE
        waits here until the other transaction commits and then sees its swipe.
        """
        found = await uow.profiles.lock_many(list(profile_ids))
        for profile_id in profile_ids:
            if profile_id not in found:
                raise ProfileNotFoundError(str(profile_id))
