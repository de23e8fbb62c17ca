"""Pydantic schemas for Match API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from api.v1.schemas.profile import ProfileCard
from domain.entities.match import Match, MatchView


class MatchResponse(BaseModel):
    """A match as seen by one of its participants."""

    id: UUID
    is_closed: bool
    closed_by: UUID | None = None
    created_at: datetime
    updated_at: datetime
    other_profile: ProfileCard

    @classmethod
    def from_view(cls, view: MatchView) -> "MatchResponse":
        match = view.match
        return cls(
            id=match.id,
            is_closed=match.is_closed,
            closed_by=match.closed_by,
            created_at=match.created_at,
            updated_at=match.updated_at,
            other_profile=ProfileCard.from_entity(view.other_profile),
        )


class MatchStatus(BaseModel):
    """Lifecycle state of a match, returned after closing it."""

    id: UUID
    is_closed: bool
    closed_by: UUID | None = None
    updated_at: datetime

    @classmethod
    def from_entity(cls, match: Match) -> "MatchStatus":
        return cls(
            id=match.id,
            is_closed=match.is_closed,
            closed_by=match.closed_by,
            updated_at=match.updated_at,
        )


class MatchListResponse(BaseModel):
    """Schema for list of Matches."""

    data: list[MatchResponse]


class MatchDetailResponse(BaseModel):
    """Schema for single Match."""

    data: MatchResponse


class MatchStatusResponse(BaseModel):
    """Schema for the close endpoint."""

    data: MatchStatus
