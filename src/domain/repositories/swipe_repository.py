"""Swipe decision repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.swipe import SwipeDecision


class ISwipeRepository(Protocol):
    """Repository interface for SwipeDecision entities."""

    async def get(self, from_profile_id: UUID, to_profile_id: UUID) -> SwipeDecision | None:
        """Get the live decision for an ordered pair."""
        ...

    async def upsert(self, decision: SwipeDecision) -> SwipeDecision:
        """Insert a decision, or overwrite the existing one for the same ordered pair."""
        ...
