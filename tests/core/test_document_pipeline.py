"""
Tests for DocumentPipeline orchestration and ingestion sinks.

Covers validation order, step-tagged failures, and both sinks (vector
index and Vectorize.io combined text upload).
"""

from unittest.mock import MagicMock

import pytest

from healthdesk.boundary.vdb.embedder import Embedder
from healthdesk.boundary.vdb.vector_store_client import VectorStoreClient
from healthdesk.core.document_processing import DocumentPipeline, UploadedDocument
from healthdesk.core.document_processing.tasks import (
    VectorizeSink,
    VectorStoreSink,
    WindowChunkingTask,
    WordChunkingTask,
)
from healthdesk.core.document_processing.tasks.vector_store_task import render_combined_text
from healthdesk.core.exceptions import (
    ChunkingError,
    DocumentTooLargeError,
    EmbeddingError,
    ExtractionError,
    FailureKind,
    IngestionStep,
    UpsertError,
    ValidationError,
)

POLICY_TEXT = (
    "Your health insurance plan covers preventive care at no cost. "
    "The annual deductible is $1,500 for individuals and $3,000 for families. "
) * 20


@pytest.fixture
def index_pipeline(vector_store) -> DocumentPipeline:
    return DocumentPipeline(
        chunker=WordChunkingTask(chunk_size=500),
        sink=VectorStoreSink(vector_store),
    )


def _txt(content: bytes, filename: str = "policy.txt") -> UploadedDocument:
    return UploadedDocument(filename=filename, content=content, mime_type="text/plain")


class TestValidation:
    """Checks that run before any extraction."""

    def test_missing_filename(self, index_pipeline) -> None:
        with pytest.raises(ValidationError) as exc_info:
            index_pipeline.ingest(_txt(b"text", filename=""))

        assert exc_info.value.message == "No file provided"

    def test_empty_upload(self, index_pipeline) -> None:
        with pytest.raises(ValidationError) as exc_info:
            index_pipeline.ingest(_txt(b""))

        assert exc_info.value.message == "Uploaded file is empty"
        assert exc_info.value.step == IngestionStep.VALIDATE

    def test_oversized_upload_checked_before_extraction(self, vector_store) -> None:
        """Size is checked first; the extractor never runs."""
        # Arrange
        extractor = MagicMock()
        pipeline = DocumentPipeline(
            chunker=WordChunkingTask(),
            sink=VectorStoreSink(vector_store),
            extractor=extractor,
            max_upload_bytes=10,
        )

        # Act
        with pytest.raises(DocumentTooLargeError) as exc_info:
            pipeline.ingest(_txt(b"x" * 11))

        # Assert
        assert exc_info.value.details["size_bytes"] == 11
        extractor.extract.assert_not_called()

    def test_upload_at_limit_is_accepted(self, vector_store) -> None:
        pipeline = DocumentPipeline(
            chunker=WordChunkingTask(),
            sink=VectorStoreSink(vector_store),
            max_upload_bytes=len(b"insurance card"),
        )

        result = pipeline.ingest(_txt(b"insurance card"))

        assert result.chunk_count == 1

    def test_ten_megabyte_message(self) -> None:
        error = DocumentTooLargeError(11 * 1024 * 1024, 10 * 1024 * 1024)

        assert error.message == "File size exceeds 10MB limit"


class TestIngest:
    """End-to-end ingestion into the in-memory index."""

    def test_counts_match_index_growth(self, index_pipeline, vector_store) -> None:
        """Reported chunk count equals vectors added to the index."""
        # Arrange
        before = vector_store.document_count()

        # Act
        result = index_pipeline.ingest(_txt(POLICY_TEXT.encode("utf-8")))

        # Assert
        assert result.filename == "policy.txt"
        assert result.char_count == len(POLICY_TEXT)
        assert result.chunk_count > 1
        assert vector_store.document_count() - before == result.chunk_count
        assert result.processing_time_ms >= 0

    def test_reingest_same_filename_overwrites(self, index_pipeline, vector_store) -> None:
        """Deterministic ids mean a second upload of the same file adds nothing."""
        document = _txt(POLICY_TEXT.encode("utf-8"))

        first = index_pipeline.ingest(document)
        index_pipeline.ingest(document)

        assert vector_store.document_count() == first.chunk_count

    def test_stored_metadata_includes_text(self, index_pipeline, memory_index) -> None:
        index_pipeline.ingest(_txt(b"Prescription drug coverage tier 2: $35 copay"))

        match = memory_index.query([1.0] * 16, top_k=1)[0]
        assert match.id == "policy.txt_chunk_0"
        assert match.metadata["text"] == "Prescription drug coverage tier 2: $35 copay"
        assert match.metadata["filename"] == "policy.txt"
        assert match.metadata["chunk_index"] == 0
        assert match.metadata["total_chunks"] == 1
        assert match.metadata["document_type"] == "user_upload"

    def test_unsupported_type_is_extraction_failure(self, index_pipeline) -> None:
        document = UploadedDocument(filename="scan.png", content=b"\x89PNG", mime_type="image/png")

        with pytest.raises(ExtractionError):
            index_pipeline.ingest(document)

    def test_no_chunks_raises_chunking_error(self, vector_store) -> None:
        """A chunker that yields nothing fails at the chunk step."""
        chunker = MagicMock()
        chunker.chunk.return_value = []
        pipeline = DocumentPipeline(chunker=chunker, sink=VectorStoreSink(vector_store))

        with pytest.raises(ChunkingError) as exc_info:
            pipeline.ingest(_txt(b"Medical record"))

        assert exc_info.value.step == IngestionStep.CHUNK

    def test_embedding_failure_writes_nothing(self, memory_index) -> None:
        """When embedding fails no upsert is attempted."""
        # Arrange
        model = MagicMock()
        model.embed_documents.side_effect = RuntimeError("rate limited")
        store = VectorStoreClient(Embedder(model), memory_index)
        pipeline = DocumentPipeline(chunker=WordChunkingTask(), sink=VectorStoreSink(store))

        # Act
        with pytest.raises(EmbeddingError) as exc_info:
            pipeline.ingest(_txt(b"Lab result: cholesterol 180"))

        # Assert
        assert exc_info.value.step == IngestionStep.EMBED
        assert memory_index.describe_stats().total_vector_count == 0

    def test_upsert_failure_carries_step(self, embedder) -> None:
        index = MagicMock()
        index.upsert.side_effect = RuntimeError("connection reset")
        store = VectorStoreClient(embedder, index)
        pipeline = DocumentPipeline(chunker=WordChunkingTask(), sink=VectorStoreSink(store))

        with pytest.raises(UpsertError) as exc_info:
            pipeline.ingest(_txt(b"Radiology report"))

        assert exc_info.value.step == IngestionStep.UPSERT
        assert exc_info.value.kind == FailureKind.BACKEND


class TestVectorizeSink:
    """Combined-text upload to Vectorize.io."""

    def test_uploads_one_combined_file(self, mock_vectorize_client) -> None:
        # Arrange
        pipeline = DocumentPipeline(
            chunker=WindowChunkingTask(chunk_size=1000, chunk_overlap=200),
            sink=VectorizeSink(mock_vectorize_client),
        )

        # Act
        result = pipeline.ingest(_txt(("a" * 2500).encode("utf-8"), filename="eob.txt"))

        # Assert
        assert result.chunk_count == 4
        assert pipeline.sink_name == "vectorize"
        mock_vectorize_client.upload_text_file.assert_called_once()
        filename, content = mock_vectorize_client.upload_text_file.call_args.args
        assert filename == "eob.txt"
        assert content.count("---") == 4
        assert "Source: eob.txt\nChunk 1/4\n\n" in content
        assert "Chunk 4/4" in content
        assert mock_vectorize_client.upload_text_file.call_args.kwargs == {"chunk_count": 4}

    def test_render_combined_text_format(self) -> None:
        chunks = WindowChunkingTask().chunk("Coverage details for outpatient surgery.", "c.txt")

        rendered = render_combined_text(chunks)

        assert rendered == (
            "Source: c.txt\nChunk 1/1\n\n"
            "Coverage details for outpatient surgery.\n\n---\n\n"
        )
