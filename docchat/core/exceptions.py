"""Domain exceptions raised by the store and services.

Routes translate these into ``HTTPException`` using ``status_code``.
"""
from typing import Optional


class DocChatError(Exception):
    """Base class for all DocChat errors."""

    status_code = 500
    default_message = "An unexpected error occurred"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(DocChatError):
    """Requested document or session does not exist."""

    status_code = 404
    default_message = "Resource not found"


class UnsupportedFileError(DocChatError):
    """Uploaded file has a type we do not accept or holds no text."""

    status_code = 400
    default_message = "Invalid file format. Please upload only PDF, DOC, or TXT files."


class FileTooLargeError(DocChatError):
    status_code = 413
    default_message = "File exceeds the maximum upload size"


class ConflictError(DocChatError):
    status_code = 409
    default_message = "Resource already exists"


class ExtractionError(DocChatError):
    """Text could not be extracted from an accepted file."""

    status_code = 500
    default_message = "Failed to process file"


class CompletionError(DocChatError):
    """The hosted completion API failed or returned an unusable reply."""

    status_code = 500
    default_message = "Failed to get response from GROQ API"
