"""Document upload service."""
import logging
from typing import Tuple

from docchat.core.exceptions import FileTooLargeError, UnsupportedFileError
from docchat.db.storage import MemStorage
from docchat.models import Document, DocumentCreate, Session
from docchat.services.chat_service import ChatService
from docchat.utils.file_processor import FileProcessor

logger = logging.getLogger(__name__)


class DocumentService:
    def __init__(self, storage: MemStorage, chat_service: ChatService, max_upload_size: int):
        self.storage = storage
        self.chat_service = chat_service
        self.max_upload_size = max_upload_size

    def upload(self, filename: str, mime_type: str, data: bytes) -> Tuple[Document, Session]:
        """
        Validate and extract an uploaded file, then store it with a first session.

        Nothing is stored unless validation and extraction both succeed.

        Args:
            filename: Client-supplied file name
            mime_type: Declared content type
            data: Entire file content

        Returns:
            Tuple of (document, session)

        Raises:
            FileTooLargeError: If the file exceeds the upload limit
            UnsupportedFileError: If the type is not accepted or no text was found
            ExtractionError: If the file cannot be parsed
        """
        if len(data) > self.max_upload_size:
            raise FileTooLargeError(
                f"File exceeds the maximum upload size of {self.max_upload_size} bytes"
            )

        if not FileProcessor.is_supported(filename, mime_type):
            raise UnsupportedFileError()

        content = FileProcessor.extract_text(data, mime_type)
        if not content:
            raise UnsupportedFileError("Failed to process file")

        document = self.storage.create_document(
            DocumentCreate(
                name=filename,
                original_name=filename,
                mime_type=mime_type,
                size=len(data),
                content=content,
            )
        )
        logger.info("Stored document %s (%s, %d bytes)", document.id, mime_type, document.size)

        session = self.chat_service.start_session(document)
        return document, session
