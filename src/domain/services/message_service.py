"""Message service: stores chat messages of open matches."""

from collections.abc import Callable
from uuid import UUID

from core.exceptions import (
    InvalidMessageError,
    MatchClosedError,
    MatchNotFoundError,
    NotAMatchParticipantError,
)
from domain.entities.match import Match
from domain.entities.message import MESSAGE_MAX_LENGTH, Message
from domain.repositories.unit_of_work import IUnitOfWork


class MessageService:
    """Service layer for per-match messages.

    Delivery is pull-based: clients poll ``list_messages``.
    """

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def list_messages(self, match_id: UUID, profile_id: UUID) -> list[Message]:
        """Messages of a match, oldest first. Closed matches stay readable."""
        async with self._uow_factory() as uow:
            await self._require_participant(uow, match_id, profile_id)
            return await uow.messages.list_for_match(match_id)  # type: ignore[no-any-return]

    async def send(self, match_id: UUID, sender_id: UUID, content: str) -> Message:
        """Send a message. Only allowed while the match is open."""
        text = content.strip()
        if not text:
            raise InvalidMessageError()
        if len(text) > MESSAGE_MAX_LENGTH:
            raise InvalidMessageError(
                f"Message must be at most {MESSAGE_MAX_LENGTH} characters"
            )

        async with self._uow_factory() as uow:
            match = await self._require_participant(uow, match_id, sender_id)
            if match.is_closed:
                raise MatchClosedError(str(match_id))

            created = await uow.messages.create(
                Message(match_id=match_id, sender_id=sender_id, content=text)
            )
            await uow.commit()
            return created

    async def _require_participant(
        self,
        uow: IUnitOfWork,
        match_id: UUID,
        profile_id: UUID,
    ) -> Match:
        match = await uow.matches.get(match_id)
        if not match:
            raise MatchNotFoundError(str(match_id))
        if not match.involves(profile_id):
            raise NotAMatchParticipantError(str(match_id))
        return match
