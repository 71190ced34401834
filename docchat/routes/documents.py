"""Document routes."""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from pydantic import BaseModel

from docchat.core.exceptions import DocChatError
from docchat.db.dependencies import get_chat_service, get_document_service, get_storage
from docchat.db.storage import MemStorage
from docchat.models import Document, Session
from docchat.models.base import CamelModel
from docchat.services.chat_service import DOCUMENT_NOT_FOUND, ChatService
from docchat.services.document_service import DocumentService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/documents", tags=["Documents"])


class UploadResponse(CamelModel):
    document: Document
    session: Session


class DeleteResponse(BaseModel):
    message: str


def _get_document_or_404(storage: MemStorage, document_id: int) -> Document:
    document = storage.get_document(document_id)
    if not document:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=DOCUMENT_NOT_FOUND)
    return document


@router.get("", response_model=List[Document])
def list_documents(storage: MemStorage = Depends(get_storage)):
    """List all documents, most recently uploaded first."""
    return storage.get_documents()


@router.post("/upload", response_model=UploadResponse, status_code=status.HTTP_201_CREATED)
async def upload_document(
    file: Optional[UploadFile] = File(None),
    document_service: DocumentService = Depends(get_document_service),
):
    """
    Upload a PDF, DOC, DOCX or TXT file.

    Extracts the text, stores the document and opens a first chat session
    seeded with a greeting.

    Raises:
        HTTPException 400: If no file was sent or its type is not supported
        HTTPException 413: If the file is larger than the upload limit
        HTTPException 500: If text extraction fails
    """
    if file is None or not file.filename:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No file uploaded")

    data = await file.read()
    try:
        document, session = document_service.upload(file.filename, file.content_type or "", data)
    except DocChatError as e:
        logger.warning("Upload of %s rejected: %s", file.filename, e.message)
        raise HTTPException(status_code=e.status_code, detail=e.message)

    return UploadResponse(document=document, session=session)


@router.get("/{document_id}", response_model=Document)
def get_document(document_id: int, storage: MemStorage = Depends(get_storage)):
    return _get_document_or_404(storage, document_id)


@router.delete("/{document_id}", response_model=DeleteResponse)
def delete_document(document_id: int, storage: MemStorage = Depends(get_storage)):
    """Delete a document. Its sessions and messages are removed with it."""
    if not storage.delete_document(document_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=DOCUMENT_NOT_FOUND)
    return DeleteResponse(message="Document deleted successfully")


@router.get("/{document_id}/sessions", response_model=List[Session])
def list_sessions(document_id: int, storage: MemStorage = Depends(get_storage)):
    """List a document's sessions, most recently active first."""
    _get_document_or_404(storage, document_id)
    return storage.get_sessions(document_id)


@router.post("/{document_id}/sessions", response_model=Session, status_code=status.HTTP_201_CREATED)
def create_session(
    document_id: int,
    storage: MemStorage = Depends(get_storage),
    chat_service: ChatService = Depends(get_chat_service),
):
    document = _get_document_or_404(storage, document_id)
    return chat_service.start_session(document)
