"""In-memory repository for users, documents, sessions and messages.

Each entity kind lives in its own id-keyed dict with its own counter. Ids
start at 1 and are never reused, even after deletion. Every public method
holds the store lock, so the store can be shared by FastAPI's worker threads.
Entities are handed out as copies; callers cannot mutate stored state.
"""
import logging
import threading
from typing import Dict, List, Optional

from docchat.core.exceptions import ConflictError
from docchat.models import (
    Document,
    DocumentCreate,
    Message,
    MessageCreate,
    Session,
    SessionCreate,
    User,
    UserCreate,
)
from docchat.models.base import utcnow

logger = logging.getLogger(__name__)


class MemStorage:
    """Process-lifetime store. Nothing is persisted."""

    def __init__(self):
        self._lock = threading.RLock()
        self._users: Dict[int, User] = {}
        self._documents: Dict[int, Document] = {}
        self._sessions: Dict[int, Session] = {}
        self._messages: Dict[int, Message] = {}
        self._user_id_counter = 1
        self._document_id_counter = 1
        self._session_id_counter = 1
        self._message_id_counter = 1

    # User methods

    def get_user(self, user_id: int) -> Optional[User]:
        with self._lock:
            user = self._users.get(user_id)
            return user.model_copy() if user else None

    def get_user_by_username(self, username: str) -> Optional[User]:
        with self._lock:
            for user in self._users.values():
                if user.username == username:
                    return user.model_copy()
            return None

    def create_user(self, draft: UserCreate) -> User:
        with self._lock:
            if any(u.username == draft.username for u in self._users.values()):
                raise ConflictError(f"Username '{draft.username}' already exists")
            user_id = self._user_id_counter
            self._user_id_counter += 1
            user = User(id=user_id, **draft.model_dump())
            self._users[user_id] = user
            return user.model_copy()

    # Document methods

    def get_documents(self) -> List[Document]:
        """All documents, newest upload first."""
        with self._lock:
            documents = sorted(
                self._documents.values(),
                key=lambda d: (d.uploaded_at, d.id),
                reverse=True,
            )
            return [d.model_copy() for d in documents]

    def get_document(self, document_id: int) -> Optional[Document]:
        with self._lock:
            document = self._documents.get(document_id)
            return document.model_copy() if document else None

    def create_document(self, draft: DocumentCreate) -> Document:
        with self._lock:
            document_id = self._document_id_counter
            self._document_id_counter += 1
            document = Document(id=document_id, uploaded_at=utcnow(), **draft.model_dump())
            self._documents[document_id] = document
            return document.model_copy()

    def delete_document(self, document_id: int) -> bool:
        """Remove a document together with its sessions and their messages.

        Returns False if no such document existed.
        """
        with self._lock:
            if self._documents.pop(document_id, None) is None:
                return False

            session_ids = {s.id for s in self._sessions.values() if s.document_id == document_id}
            for session_id in session_ids:
                del self._sessions[session_id]

            message_ids = [m.id for m in self._messages.values() if m.session_id in session_ids]
            for message_id in message_ids:
                del self._messages[message_id]

            logger.info(
                "Deleted document %s with %d session(s) and %d message(s)",
                document_id, len(session_ids), len(message_ids),
            )
            return True

    # Session methods

    def get_sessions(self, document_id: int) -> List[Session]:
        """Sessions of a document, most recently active first."""
        with self._lock:
            sessions = sorted(
                (s for s in self._sessions.values() if s.document_id == document_id),
                key=lambda s: (s.last_message_at, s.id),
                reverse=True,
            )
            return [s.model_copy() for s in sessions]

    def get_session(self, session_id: int) -> Optional[Session]:
        with self._lock:
            session = self._sessions.get(session_id)
            return session.model_copy() if session else None

    def create_session(self, draft: SessionCreate) -> Session:
        with self._lock:
            session_id = self._session_id_counter
            self._session_id_counter += 1
            now = utcnow()
            session = Session(
                id=session_id,
                created_at=now,
                last_message_at=now,
                **draft.model_dump(),
            )
            self._sessions[session_id] = session
            return session.model_copy()

    def update_session_name(self, session_id: int, name: str) -> Optional[Session]:
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                return None
            updated = session.model_copy(update={"name": name})
            self._sessions[session_id] = updated
            return updated.model_copy()

    # Message methods

    def get_messages(self, session_id: int) -> List[Message]:
        """Messages of a session in chronological order."""
        with self._lock:
            messages = sorted(
                (m for m in self._messages.values() if m.session_id == session_id),
                key=lambda m: (m.timestamp, m.id),
            )
            return [m.model_copy() for m in messages]

    def create_message(self, draft: MessageCreate) -> Message:
        """Store a message and bump its session's ``last_message_at``.

        A missing session is ignored; the message is stored regardless.
        """
        with self._lock:
            message_id = self._message_id_counter
            self._message_id_counter += 1
            now = utcnow()
            message = Message(id=message_id, timestamp=now, **draft.model_dump())
            self._messages[message_id] = message

            session = self._sessions.get(draft.session_id)
            if session is not None:
                # wall clock may step backwards; activity time must not
                self._sessions[session.id] = session.model_copy(
                    update={"last_message_at": max(session.last_message_at, now)}
                )
            return message.model_copy()

    def append_message(self, draft: MessageCreate) -> Optional[Message]:
        """Store a message only if its session still exists, else return None."""
        with self._lock:
            if draft.session_id not in self._sessions:
                return None
            return self.create_message(draft)
