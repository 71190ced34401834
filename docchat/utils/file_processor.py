"""File processing utilities for extracting text from uploaded documents."""
import io
from pathlib import Path
from typing import Dict, Set

import pypdf
from docx import Document as DocxDocument

from docchat.core.exceptions import ExtractionError, UnsupportedFileError

PDF_MIME = "application/pdf"
DOC_MIME = "application/msword"
DOCX_MIME = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
TEXT_MIME = "text/plain"


class FileProcessor:
    """Extract text content from in-memory PDF, DOC/DOCX and TXT uploads."""

    SUPPORTED_MIME_TYPES: Set[str] = {PDF_MIME, DOC_MIME, DOCX_MIME, TEXT_MIME}

    # MIME types each extension may be declared with
    EXTENSION_MIME_TYPES: Dict[str, Set[str]] = {
        '.pdf': {PDF_MIME},
        '.doc': {DOC_MIME, DOCX_MIME},
        '.docx': {DOC_MIME, DOCX_MIME},
        '.txt': {TEXT_MIME},
    }

    @staticmethod
    def is_supported(filename: str, mime_type: str) -> bool:
        """Check that the MIME type is accepted and agrees with the extension."""
        if mime_type not in FileProcessor.SUPPORTED_MIME_TYPES:
            return False
        extension = Path(filename or "").suffix.lower()
        return mime_type in FileProcessor.EXTENSION_MIME_TYPES.get(extension, set())

    @staticmethod
    def extract_text(data: bytes, mime_type: str) -> str:
        """
        Extract text from raw file bytes.

        Args:
            data: File content
            mime_type: Declared MIME type of the upload

        Returns:
            The extracted plain text

        Raises:
            UnsupportedFileError: If the MIME type is not supported
            ExtractionError: If the file cannot be parsed
        """
        if mime_type == PDF_MIME:
            return FileProcessor._extract_from_pdf(data)
        elif mime_type in {DOC_MIME, DOCX_MIME}:
            return FileProcessor._extract_from_docx(data)
        elif mime_type == TEXT_MIME:
            return FileProcessor._extract_from_text(data)

        raise UnsupportedFileError(f"Unsupported file type: {mime_type}")

    @staticmethod
    def _extract_from_pdf(data: bytes) -> str:
        """Extract text from PDF bytes, one block per non-empty page."""
        text_parts = []

        try:
            pdf_reader = pypdf.PdfReader(io.BytesIO(data))

            for page_num, page in enumerate(pdf_reader.pages, 1):
                page_text = page.extract_text() or ""
                if page_text.strip():
                    text_parts.append(f"[Page {page_num}]\n{page_text}")
        except Exception as e:
            raise ExtractionError(f"Error extracting text from PDF: {str(e)}")

        return "\n\n".join(text_parts)

    @staticmethod
    def _extract_from_docx(data: bytes) -> str:
        """Extract text from DOCX bytes.

        Legacy binary .doc files are not OOXML and fail here.
        """
        try:
            doc = DocxDocument(io.BytesIO(data))
            paragraphs = [para.text for para in doc.paragraphs if para.text.strip()]
            return "\n\n".join(paragraphs)
        except Exception as e:
            raise ExtractionError(f"Error extracting text from Word document: {str(e)}")

    @staticmethod
    def _extract_from_text(data: bytes) -> str:
        try:
            return data.decode('utf-8')
        except UnicodeDecodeError:
            # latin-1 maps every byte, so this cannot fail
            return data.decode('latin-1')
