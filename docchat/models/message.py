"""Chat message model."""
from datetime import datetime
from typing import Literal

from docchat.models.base import CamelModel

Role = Literal["system", "user", "assistant"]


class MessageCreate(CamelModel):
    session_id: int
    role: Role
    content: str


class Message(MessageCreate):
    """Single append-only entry in a session's history."""

    id: int
    timestamp: datetime
