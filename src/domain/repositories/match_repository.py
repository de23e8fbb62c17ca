"""Match repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.match import Match


class IMatchRepository(Protocol):
    """Repository interface for Match entities."""

    async def get(self, id: UUID) -> Match | None:
        """Get a match by ID."""
        ...

    async def get_between(self, first: UUID, second: UUID) -> Match | None:
        """Get the match for an unordered pair of profiles."""
        ...

    async def list_for_profile(self, profile_id: UUID) -> list[Match]:
        """Get all matches (open and closed) of a profile, newest first."""
        ...

    async def create(self, match: Match) -> Match:
        """Create a new match. Raises IntegrityError if the pair already has one."""
        ...

    async def close_if_open(self, match: Match) -> Match:
        """Close the match unless it is already closed; return the stored state."""
        ...
