"""Document model."""
from datetime import datetime

from docchat.models.base import CamelModel


class DocumentCreate(CamelModel):
    """Fields supplied when a document is stored."""

    name: str
    original_name: str
    mime_type: str
    size: int
    content: str


class Document(DocumentCreate):
    """Uploaded document with its extracted text."""

    id: int
    uploaded_at: datetime
