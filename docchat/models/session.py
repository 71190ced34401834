"""Chat session model."""
from datetime import datetime

from docchat.models.base import CamelModel


class SessionCreate(CamelModel):
    document_id: int
    name: str


class Session(SessionCreate):
    """Conversation about a single document."""

    id: int
    created_at: datetime
    last_message_at: datetime
