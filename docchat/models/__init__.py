"""Entity models."""
from docchat.models.user import User, UserCreate
from docchat.models.document import Document, DocumentCreate
from docchat.models.session import Session, SessionCreate
from docchat.models.message import Message, MessageCreate, Role

__all__ = [
    "User",
    "UserCreate",
    "Document",
    "DocumentCreate",
    "Session",
    "SessionCreate",
    "Message",
    "MessageCreate",
    "Role",
]
