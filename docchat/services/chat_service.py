"""Chat service.

Runs one question/answer turn against a document: resolves the session,
records the user's message, sends the document plus the whole conversation to
the completion client and records the reply.
"""
import logging
from typing import Dict, List, NamedTuple, Optional, Protocol

from docchat.core.exceptions import CompletionError, NotFoundError
from docchat.db.storage import MemStorage
from docchat.models import Document, Message, MessageCreate, Session, SessionCreate

logger = logging.getLogger(__name__)

DOCUMENT_NOT_FOUND = "Document not found"
SESSION_NOT_FOUND = "Session not found"

SYSTEM_PROMPT_TEMPLATE = """You're an AI assistant specialized in helping users analyze documents. Refer to the document content below when answering questions. If you can't find relevant information in the document, be honest about it.

Document Content:
{content}

Answer the question based on the document content. Be clear, concise, and helpful."""


class CompletionClient(Protocol):
    def complete(self, messages: List[Dict[str, str]]) -> str:
        ...


class ChatResult(NamedTuple):
    session: Session
    user_message: Message
    ai_message: Message


def session_name(document: Document) -> str:
    return f"Chat about {document.name}"


def greeting(document: Document) -> str:
    return f"I've processed your {document.name} document. What would you like to know about it?"


def build_prompt(document: Document, history: List[Message]) -> List[Dict[str, str]]:
    """System instructions with the document text, then the history in order."""
    prompt = [{"role": "system", "content": SYSTEM_PROMPT_TEMPLATE.format(content=document.content)}]
    prompt.extend({"role": m.role, "content": m.content} for m in history)
    return prompt


class ChatService:
    def __init__(self, storage: MemStorage, completion_client: CompletionClient):
        self.storage = storage
        self.completion_client = completion_client

    def start_session(self, document: Document) -> Session:
        """Open a new session for a document and seed it with a greeting."""
        session = self.storage.create_session(
            SessionCreate(document_id=document.id, name=session_name(document))
        )
        self.storage.create_message(
            MessageCreate(session_id=session.id, role="system", content=greeting(document))
        )
        logger.info("Started session %s for document %s", session.id, document.id)
        return self.storage.get_session(session.id) or session

    def handle_chat(self, document_id: int, message: str, session_id: Optional[int] = None) -> ChatResult:
        """
        Answer a user message in the context of a document.

        A new session is created when ``session_id`` is None or 0 (ids start
        at 1). The user's message is stored before the completion call, so it
        remains in the history even if that call fails.

        Raises:
            NotFoundError: If the document is missing, the session is missing
                or belongs to another document, or the document was deleted
                before the reply could be stored
            CompletionError: If the completion client fails
        """
        document = self.storage.get_document(document_id)
        if document is None:
            raise NotFoundError(DOCUMENT_NOT_FOUND)

        if session_id:
            session = self.storage.get_session(session_id)
            if session is None or session.document_id != document.id:
                raise NotFoundError(SESSION_NOT_FOUND)
        else:
            session = self.storage.create_session(
                SessionCreate(document_id=document.id, name=session_name(document))
            )
            logger.info("Created session %s for document %s", session.id, document.id)

        user_message = self.storage.create_message(
            MessageCreate(session_id=session.id, role="user", content=message)
        )

        history = self.storage.get_messages(session.id)
        prompt = build_prompt(document, history)

        try:
            reply = self.completion_client.complete(prompt)
        except CompletionError as e:
            logger.error("Completion failed for session %s: %s", session.id, e.message)
            raise
        except Exception as e:
            logger.exception("Completion failed for session %s", session.id)
            raise CompletionError(str(e)) from e

        # the document may have been deleted while the completion was running
        ai_message = self.storage.append_message(
            MessageCreate(session_id=session.id, role="assistant", content=reply)
        )
        if ai_message is None:
            logger.warning("Session %s was deleted before the reply could be stored", session.id)
            raise NotFoundError(SESSION_NOT_FOUND)

        return ChatResult(
            session=self.storage.get_session(session.id) or session,
            user_message=user_message,
            ai_message=ai_message,
        )
