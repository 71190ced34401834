"""Chat routes."""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import StrictInt, StrictStr

from docchat.core.exceptions import DocChatError
from docchat.db.dependencies import get_chat_service
from docchat.models import Message, Session
from docchat.models.base import CamelModel
from docchat.services.chat_service import ChatService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Chat"])


class ChatRequest(CamelModel):
    """Chat body. ``sessionId`` of 0 or null starts a new session."""

    document_id: StrictInt
    message: StrictStr
    session_id: Optional[StrictInt] = None


class ChatResponse(CamelModel):
    session: Session
    user_message: Message
    ai_message: Message


@router.post("/chat", response_model=ChatResponse)
def chat(request: ChatRequest, chat_service: ChatService = Depends(get_chat_service)):
    """
    Ask a question about a document.

    Starts a new session when ``sessionId`` is omitted or 0. The whole session
    history is sent to the model on every turn.

    Raises:
        HTTPException 404: If the document or session does not exist
        HTTPException 500: If the completion API fails
    """
    try:
        result = chat_service.handle_chat(
            document_id=request.document_id,
            message=request.message,
            session_id=request.session_id,
        )
    except DocChatError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)

    return ChatResponse(
        session=result.session,
        user_message=result.user_message,
        ai_message=result.ai_message,
    )
