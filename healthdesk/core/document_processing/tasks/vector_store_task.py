"""
Ingestion sinks.

VectorStoreSink embeds chunks in batches and upserts them into the
embedding vector index. VectorizeSink uploads the chunks as one combined
text file to a Vectorize.io file-upload connector.

Dependencies: healthdesk.boundary.vdb, healthdesk.boundary.vectorize
System role: Final stage of document ingestion pipeline
"""

import logging
from typing import Protocol

from healthdesk.boundary.vdb.vector_schemas import VectorRecord
from healthdesk.boundary.vdb.vector_store_client import VectorStoreClient
from healthdesk.boundary.vectorize.client import VectorizeClient
from healthdesk.core.document_processing.models import Chunk

logger = logging.getLogger(__name__)


class DocumentSink(Protocol):
    """Destination for a document's chunks."""

    name: str

    def store(self, chunks: list[Chunk], filename: str) -> int: ...


class VectorStoreSink:
    """Embed and upsert chunks into the vector index."""

    name = "index"

    def __init__(self, client: VectorStoreClient) -> None:
        self._client = client

    def store(self, chunks: list[Chunk], filename: str) -> int:
        """
        Embed chunk texts and upsert one record per chunk.

        Returns:
            int: Number of records written

        Raises:
            EmbeddingError: Embedding failed (nothing written)
            UpsertError: An upsert batch failed (later batches not sent)
        """
        embeddings = self._client.embed([chunk.text for chunk in chunks])
        records = [
            VectorRecord(
                id=chunk.id,
                embedding=embedding,
                metadata={**chunk.metadata.model_dump(), "text": chunk.text},
            )
            for chunk, embedding in zip(chunks, embeddings)
        ]
        written = self._client.upsert(records)
        logger.info(
            "Stored document in vector index",
            extra={"document_name": filename, "records": written},
        )
        return written


def render_combined_text(chunks: list[Chunk]) -> str:
    """Render chunks as one text file with per-chunk headers."""
    return "".join(
        f"Source: {chunk.metadata.source}\n"
        f"Chunk {chunk.metadata.chunk_index + 1}/{chunk.metadata.total_chunks}\n\n"
        f"{chunk.text}\n\n---\n\n"
        for chunk in chunks
    )


class VectorizeSink:
    """Upload chunks to Vectorize.io as a single text file."""

    name = "vectorize"

    def __init__(self, client: VectorizeClient) -> None:
        self._client = client

    def store(self, chunks: list[Chunk], filename: str) -> int:
        self._client.upload_text_file(filename, render_combined_text(chunks), chunk_count=len(chunks))
        return len(chunks)
