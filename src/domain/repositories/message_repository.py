"""Message repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.message import Message


class IMessageRepository(Protocol):
    """Repository interface for Message entities."""

    async def list_for_match(self, match_id: UUID) -> list[Message]:
        """Get all messages of a match, oldest first."""
        ...

    async def create(self, message: Message) -> Message:
        """Create a new message."""
        ...
