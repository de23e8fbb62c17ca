"""Pydantic schemas for Swipe API."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict

from domain.entities.swipe import SwipeType


class SwipeCreate(BaseModel):
    """Schema for recording a swipe decision."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "to_profile_id": "123e4567-e89b-12d3-a456-426614174000",
                "type": "LIKE",
            }
        },
    )

    to_profile_id: UUID
    type: SwipeType


class SwipeResult(BaseModel):
    """Outcome of a swipe. ``match_id`` is set whenever the pair is matched."""

    match_created: bool
    match_id: UUID | None = None


class SwipeResponse(BaseModel):
    """Schema for swipe response."""

    data: SwipeResult
