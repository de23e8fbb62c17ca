"""Match domain entities."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4

from domain.entities.profile import Profile


def canonical_pair(first: UUID, second: UUID) -> tuple[UUID, UUID]:
    """Order two profile ids so that an unordered pair has one stored form."""
    if str(first) <= str(second):
        return first, second
    return second, first


@dataclass
class Match:
    """Domain entity for a confirmed mutual like between two profiles.

    ``profile_a_id``/``profile_b_id`` are stored in canonical order; callers
    should use ``involves`` and ``other_party`` instead of relying on it.
    """

    profile_a_id: UUID
    profile_b_id: UUID
    id: UUID = field(default_factory=uuid4)
    is_closed: bool = False
    closed_by: UUID | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self) -> None:
        self.profile_a_id, self.profile_b_id = canonical_pair(
            self.profile_a_id, self.profile_b_id
        )
        if self.updated_at < self.created_at:
            self.updated_at = self.created_at

    @classmethod
    def between(cls, first: UUID, second: UUID) -> "Match":
        """Create a new open match for the unordered pair."""
        return cls(profile_a_id=first, profile_b_id=second)

    @property
    def participants(self) -> tuple[UUID, UUID]:
        return self.profile_a_id, self.profile_b_id

    def involves(self, profile_id: UUID) -> bool:
        return profile_id in self.participants

    def other_party(self, profile_id: UUID) -> UUID:
        """Return the id of the participant that is not ``profile_id``."""
        if profile_id == self.profile_a_id:
            return self.profile_b_id
        if profile_id == self.profile_b_id:
            return self.profile_a_id
        raise ValueError(f"Profile {profile_id} is not part of match {self.id}")

    def close(self, closed_by: UUID) -> bool:
        """Close the match. Returns False if it was already closed (no-op)."""
        if self.is_closed:
            return False
        self.is_closed = True
        self.closed_by = closed_by
        self.updated_at = datetime.utcnow()
        return True


@dataclass(frozen=True, slots=True)
class MatchView:
    """Read-only value object: a match as seen by one of its participants."""

    match: Match
    other_profile: Profile
