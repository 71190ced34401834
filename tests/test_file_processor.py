"""Unit tests for text extraction."""

import io
import unittest

import pypdf
from docx import Document as DocxDocument
from fakes import pdf_bytes

from docchat.core.exceptions import ExtractionError, UnsupportedFileError
from docchat.utils.file_processor import (
    DOC_MIME,
    DOCX_MIME,
    PDF_MIME,
    TEXT_MIME,
    FileProcessor,
)


def _docx_bytes(*paragraphs: str) -> bytes:
    doc = DocxDocument()
    for text in paragraphs:
        doc.add_paragraph(text)
    buffer = io.BytesIO()
    doc.save(buffer)
    return buffer.getvalue()


def _blank_pdf_bytes() -> bytes:
    writer = pypdf.PdfWriter()
    writer.add_blank_page(width=72, height=72)
    buffer = io.BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


class TestIsSupported(unittest.TestCase):
    def test_matching_extension_and_mime(self) -> None:
        self.assertTrue(FileProcessor.is_supported("notes.txt", TEXT_MIME))
        self.assertTrue(FileProcessor.is_supported("report.PDF", PDF_MIME))
        self.assertTrue(FileProcessor.is_supported("memo.docx", DOCX_MIME))
        self.assertTrue(FileProcessor.is_supported("memo.doc", DOC_MIME))

    def test_unsupported_mime(self) -> None:
        self.assertFalse(FileProcessor.is_supported("image.png", "image/png"))
        self.assertFalse(FileProcessor.is_supported("notes.txt", "application/json"))

    def test_mismatched_extension(self) -> None:
        self.assertFalse(FileProcessor.is_supported("notes.pdf", TEXT_MIME))
        self.assertFalse(FileProcessor.is_supported("notes", TEXT_MIME))


class TestExtractText(unittest.TestCase):
    def test_plain_text_utf8(self) -> None:
        self.assertEqual(FileProcessor.extract_text("Hello world".encode("utf-8"), TEXT_MIME), "Hello world")
        self.assertEqual(FileProcessor.extract_text("café".encode("utf-8"), TEXT_MIME), "café")

    def test_plain_text_latin1_fallback(self) -> None:
        self.assertEqual(FileProcessor.extract_text("café".encode("latin-1"), TEXT_MIME), "café")

    def test_docx_paragraphs(self) -> None:
        data = _docx_bytes("First paragraph", "", "Second paragraph")
        self.assertEqual(
            FileProcessor.extract_text(data, DOCX_MIME),
            "First paragraph\n\nSecond paragraph",
        )

    def test_invalid_word_file_raises(self) -> None:
        with self.assertRaises(ExtractionError):
            FileProcessor.extract_text(b"\xd0\xcf\x11\xe0 legacy binary", DOC_MIME)

    def test_pdf_text_is_marked_per_page(self) -> None:
        text = FileProcessor.extract_text(pdf_bytes("Hello PDF"), PDF_MIME)
        self.assertTrue(text.startswith("[Page 1]\n"))
        self.assertIn("Hello PDF", text)

    def test_pdf_skips_empty_pages_and_joins_blocks(self) -> None:
        text = FileProcessor.extract_text(pdf_bytes("First page", "", "Third page"), PDF_MIME)
        blocks = text.split("\n\n")
        self.assertEqual(len(blocks), 2)
        self.assertTrue(blocks[0].startswith("[Page 1]\n"))
        self.assertIn("First page", blocks[0])
        self.assertTrue(blocks[1].startswith("[Page 3]\n"))
        self.assertIn("Third page", blocks[1])
        self.assertNotIn("[Page 2]", text)

    def test_blank_pdf_has_no_text(self) -> None:
        self.assertEqual(FileProcessor.extract_text(_blank_pdf_bytes(), PDF_MIME), "")

    def test_corrupt_pdf_raises(self) -> None:
        with self.assertRaises(ExtractionError):
            FileProcessor.extract_text(b"this is not a pdf", PDF_MIME)

    def test_unknown_mime_raises(self) -> None:
        with self.assertRaises(UnsupportedFileError):
            FileProcessor.extract_text(b"data", "image/png")


if __name__ == "__main__":
    unittest.main()
