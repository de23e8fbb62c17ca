"""Swipe decision domain entity."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from uuid import UUID, uuid4


class SwipeType(StrEnum):
    """Direction of a swipe."""

    LIKE = "LIKE"
    PASS = "PASS"


@dataclass
class SwipeDecision:
    """Domain entity for one profile's decision about another.

    There is at most one decision per ordered (from, to) pair; a later swipe
    replaces the earlier one.
    """

    from_profile_id: UUID
    to_profile_id: UUID
    type: SwipeType
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self) -> None:
        self.type = SwipeType(self.type)

    @property
    def is_like(self) -> bool:
        return self.type is SwipeType.LIKE


@dataclass(frozen=True, slots=True)
class SwipeOutcome:
    """Read-only value object: result of recording a swipe."""

    match_created: bool
    match_id: UUID | None = None
