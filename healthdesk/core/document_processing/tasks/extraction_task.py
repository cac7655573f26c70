"""
Text extraction task for uploaded documents.

Turns raw upload bytes into plain text, keyed by MIME type and extension.
Plain text is decoded as UTF-8; PDFs go through pypdf. Word documents are
recognised but explicitly unsupported.

Dependencies: pypdf
System role: First stage of document ingestion pipeline
"""

import io
import logging
from pathlib import PurePath

from pypdf import PdfReader
from pypdf.errors import PyPdfError

from healthdesk.core.exceptions import ExtractionError, FailureKind

logger = logging.getLogger(__name__)

PDF_MIME_TYPE = "application/pdf"
TEXT_MIME_TYPE = "text/plain"
WORD_MIME_TYPES = frozenset(
    {
        "application/msword",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    }
)
WORD_EXTENSIONS = frozenset({".doc", ".docx"})


class TextExtractionTask:
    """Extract plain text from TXT and PDF uploads."""

    def detect_type(self, filename: str, mime_type: str | None) -> str:
        """
        Resolve the document type from MIME type, falling back to extension.

        Returns:
            str: "text", "pdf" or "word"; anything else raises

        Raises:
            ExtractionError: Unsupported file type
        """
        mime = (mime_type or "").split(";")[0].strip().lower()
        suffix = PurePath(filename).suffix.lower()

        if mime == PDF_MIME_TYPE or (not mime.startswith("text/") and suffix == ".pdf"):
            return "pdf"
        if mime.startswith("text/") or suffix == ".txt":
            return "text"
        if mime in WORD_MIME_TYPES or suffix in WORD_EXTENSIONS:
            return "word"

        raise ExtractionError(
            "Unsupported file type. Please upload a PDF or TXT file.",
            filename=filename,
            file_type=mime or suffix or "unknown",
        )

    def extract(self, content: bytes, filename: str, mime_type: str | None = None) -> str:
        """
        Extract text from raw document bytes.

        Args:
            content: Raw file bytes
            filename: Original filename
            mime_type: Declared MIME type, if any

        Returns:
            str: Extracted text (never empty)

        Raises:
            ExtractionError: Unsupported format, unreadable PDF, or no text
        """
        doc_type = self.detect_type(filename, mime_type)

        if doc_type == "word":
            raise ExtractionError(
                "Word documents are not supported yet. Please convert to PDF or TXT.",
                filename=filename,
                file_type="docx",
            )
        if doc_type == "pdf":
            text = self._extract_pdf(content, filename)
        else:
            text = content.decode("utf-8", errors="replace")

        if not text.strip():
            raise ExtractionError(
                "No text content could be extracted from the file",
                filename=filename,
                file_type=doc_type,
                kind=FailureKind.VALIDATION,
            )

        logger.info(
            "Extracted document text",
            extra={"document_name": filename, "doc_type": doc_type, "char_count": len(text)},
        )
        return text

    def _extract_pdf(self, content: bytes, filename: str) -> str:
        try:
            reader = PdfReader(io.BytesIO(content))
            pages = [page.extract_text() or "" for page in reader.pages]
        except (PyPdfError, ValueError) as e:
            raise ExtractionError(
                f"Failed to read PDF: {e}",
                filename=filename,
                file_type="pdf",
            ) from e
        return "\n".join(pages)
