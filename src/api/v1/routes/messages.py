"""Message API routes (nested under a match)."""

from uuid import UUID

from fastapi import APIRouter, Depends, Request, status

from api.v1.dependencies import CurrentViewer, get_message_service
from api.v1.schemas.common import ErrorResponse
from api.v1.schemas.message import (
    MessageCreate,
    MessageDetailResponse,
    MessageListResponse,
    MessageResponse,
)
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.services.message_service import MessageService

router = APIRouter(prefix="/matches/{match_id}/messages", tags=["messages"])


@router.get(
    "",
    response_model=MessageListResponse,
    summary="List messages of a match",
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_messages(
    request: Request,
    match_id: UUID,
    viewer: CurrentViewer,
    service: MessageService = Depends(get_message_service),
) -> MessageListResponse:
    """Messages of a match, oldest first. Poll this endpoint for new ones."""
    messages = await service.list_messages(match_id, viewer.profile_id)
    return MessageListResponse(data=[MessageResponse.model_validate(m) for m in messages])


@router.post(
    "",
    response_model=MessageDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Send a message",
    responses={
        409: {"model": ErrorResponse, "description": "Match is closed"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def send_message(
    request: Request,
    match_id: UUID,
    body: MessageCreate,
    viewer: CurrentViewer,
    service: MessageService = Depends(get_message_service),
) -> MessageDetailResponse:
    """Send a message to the other participant of an open match."""
    message = await service.send(match_id, viewer.profile_id, body.content)
    return MessageDetailResponse(data=MessageResponse.model_validate(message))
