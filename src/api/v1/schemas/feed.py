"""Pydantic schemas for the discovery feed."""

from pydantic import BaseModel

from api.v1.schemas.profile import ProfileCard


class FeedResponse(BaseModel):
    """One page of swipe candidates."""

    profiles: list[ProfileCard]
    has_more: bool
