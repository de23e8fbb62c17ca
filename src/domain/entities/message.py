"""Chat message domain entity."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4

MESSAGE_MAX_LENGTH = 2000


@dataclass
class Message:
    """Domain entity for a message exchanged inside a match."""

    match_id: UUID
    sender_id: UUID
    content: str
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=datetime.utcnow)
