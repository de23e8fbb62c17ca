"""Profile repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.profile import Profile, ProfileRole


class IProfileRepository(Protocol):
    """Repository interface for Profile entities."""

    async def get(self, id: UUID) -> Profile | None:
        """Get a profile by ID."""
        ...

    async def get_by_user_id(self, user_id: UUID) -> Profile | None:
        """Get the profile owned by an auth user."""
        ...

    async def get_many(self, ids: list[UUID]) -> dict[UUID, Profile]:
        """Get several profiles in a single query, keyed by ID."""
        ...

    async def lock_many(self, ids: list[UUID]) -> dict[UUID, Profile]:
        """Load profiles and hold their row locks until the transaction ends.

        Rows are locked in id order so concurrent callers cannot deadlock.
        """
        ...

    async def list_candidates(
        self,
        viewer_id: UUID,
        role: ProfileRole,
        limit: int,
    ) -> list[Profile]:
        """Complete profiles of ``role`` the viewer has not swiped on, oldest first."""
        ...

    async def create(self, profile: Profile) -> Profile:
        """Create a new profile."""
        ...

    async def update(self, profile: Profile) -> Profile:
        """Update an existing profile."""
        ...
