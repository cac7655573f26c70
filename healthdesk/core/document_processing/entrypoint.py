"""
Document pipeline orchestrator.

Coordinates validation, text extraction, chunking and storage for one
uploaded document: Received -> Extracted -> Chunked -> Stored. Each step
raises its own step-tagged exception; counts are returned, never vectors.

Dependencies: All task modules
System role: Pipeline orchestration (coordinates only)
"""

import logging
import time

from healthdesk.core.exceptions import ChunkingError, DocumentTooLargeError, ValidationError

from .models import IngestionResult, UploadedDocument
from .tasks import ChunkingTask, DocumentSink, TextExtractionTask

logger = logging.getLogger(__name__)

DEFAULT_MAX_UPLOAD_BYTES = 10 * 1024 * 1024


class DocumentPipeline:
    """Orchestrate document ingestion: validate -> extract -> chunk -> store."""

    def __init__(
        self,
        chunker: ChunkingTask,
        sink: DocumentSink,
        extractor: TextExtractionTask | None = None,
        max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES,
    ) -> None:
        """
        Initialize pipeline.

        Args:
            chunker: Chunking strategy for this entry point
            sink: Destination for the chunks
            extractor: Text extractor (default TXT/PDF extractor)
            max_upload_bytes: Size ceiling checked before extraction
        """
        self._chunker = chunker
        self._sink = sink
        self._extractor = extractor or TextExtractionTask()
        self._max_upload_bytes = max_upload_bytes

    @property
    def sink_name(self) -> str:
        return self._sink.name

    def validate(self, document: UploadedDocument) -> None:
        """
        Check filename, emptiness and size.

        Raises:
            ValidationError: Missing filename or empty content
            DocumentTooLargeError: Content above the byte ceiling
        """
        if not document.filename:
            raise ValidationError("No file provided", field="file")
        if len(document.content) > self._max_upload_bytes:
            raise DocumentTooLargeError(len(document.content), self._max_upload_bytes)
        if not document.content:
            raise ValidationError("Uploaded file is empty", field="file")

    def extract(self, document: UploadedDocument) -> str:
        """Validate and extract text (raises ExtractionError on failure)."""
        self.validate(document)
        return self._extractor.extract(document.content, document.filename, document.mime_type)

    def ingest_text(
        self,
        text: str,
        filename: str,
        started_at: float | None = None,
    ) -> IngestionResult:
        """
        Chunk and store already-extracted text.

        Args:
            text: Extracted document text
            filename: Source filename
            started_at: perf_counter() value the timing starts from

        Returns:
            IngestionResult: Counts and processing time

        Raises:
            ChunkingError: No chunks produced
            EmbeddingError: Embedding failed
            UpsertError: Storage failed
        """
        start_time = started_at if started_at is not None else time.perf_counter()

        chunks = self._chunker.chunk(text, filename)
        if not chunks:
            raise ChunkingError(
                "Document produced no chunks",
                details={"document_name": filename, "char_count": len(text)},
            )

        stored = self._sink.store(chunks, filename)
        elapsed_ms = (time.perf_counter() - start_time) * 1000

        logger.info(
            "Document ingested",
            extra={
                "document_name": filename,
                "sink": self._sink.name,
                "chunk_count": stored,
                "char_count": len(text),
                "processing_time_ms": round(elapsed_ms, 2),
            },
        )
        return IngestionResult(
            filename=filename,
            chunk_count=stored,
            char_count=len(text),
            processing_time_ms=elapsed_ms,
        )

    def ingest(self, document: UploadedDocument) -> IngestionResult:
        """
        Process an uploaded document through the full pipeline.

        Args:
            document: Uploaded file

        Returns:
            IngestionResult: Chunk count, character count, processing time

        Raises:
            ValidationError: Missing, empty or oversized upload
            ExtractionError: Unsupported format or no extractable text
            ChunkingError: No chunks produced
            EmbeddingError: Embedding failed
            UpsertError: Storage failed
        """
        start_time = time.perf_counter()
        text = self.extract(document)
        return self.ingest_text(text, document.filename, started_at=start_time)
