"""Session routes."""
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import Field

from docchat.db.dependencies import get_storage
from docchat.db.storage import MemStorage
from docchat.models import Message, Session
from docchat.models.base import CamelModel
from docchat.services.chat_service import SESSION_NOT_FOUND

router = APIRouter(prefix="/api/sessions", tags=["Sessions"])


class RenameSessionRequest(CamelModel):
    name: str = Field(..., min_length=1)


@router.get("/{session_id}/messages", response_model=List[Message])
def list_messages(session_id: int, storage: MemStorage = Depends(get_storage)):
    """Return a session's messages in chronological order."""
    if not storage.get_session(session_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=SESSION_NOT_FOUND)
    return storage.get_messages(session_id)


@router.patch("/{session_id}", response_model=Session)
def rename_session(session_id: int, request: RenameSessionRequest, storage: MemStorage = Depends(get_storage)):
    session = storage.update_session_name(session_id, request.name)
    if not session:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=SESSION_NOT_FOUND)
    return session
