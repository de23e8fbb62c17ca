"""Pydantic schemas for Message API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from domain.entities.message import MESSAGE_MAX_LENGTH


class MessageCreate(BaseModel):
    """Schema for sending a message."""

    content: str = Field(..., min_length=1, max_length=MESSAGE_MAX_LENGTH)


class MessageResponse(BaseModel):
    """Schema for Message response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    match_id: UUID
    sender_id: UUID
    content: str
    created_at: datetime


class MessageListResponse(BaseModel):
    """Schema for list of Messages."""

    data: list[MessageResponse]


class MessageDetailResponse(BaseModel):
    """Schema for single Message."""

    data: MessageResponse
