"""
Chunk domain model for document processing pipeline.

Represents a document chunk with deterministic ID, text span and the
metadata record shared by chunker, embedder and vector index.

Dependencies: pydantic
System role: Data structure for document chunks in ingestion pipeline
"""

from datetime import datetime, timezone

from pydantic import BaseModel, Field, model_validator

USER_UPLOAD_DOCUMENT_TYPE = "user_upload"


def chunk_id_for(filename: str, chunk_index: int) -> str:
    """Deterministic chunk ID; re-ingesting a same-named file overwrites."""
    return f"{filename}_chunk_{chunk_index}"


def utc_now_iso() -> str:
    """Current UTC time as an ISO 8601 string."""
    return datetime.now(timezone.utc).isoformat()


class ChunkMetadata(BaseModel):
    """Metadata stored alongside every chunk vector."""

    source: str = Field(description="Document origin (filename for user uploads)")
    source_display_name: str = Field(description="Human-readable source name")
    filename: str = Field(min_length=1, description="Uploaded filename")
    chunk_index: int = Field(ge=0, description="Position of the chunk within the document")
    total_chunks: int = Field(ge=1, description="Number of chunks emitted for the document")
    upload_date: str = Field(default_factory=utc_now_iso, description="ISO 8601 upload time")
    document_type: str = Field(default=USER_UPLOAD_DOCUMENT_TYPE, description="Document category")

    @model_validator(mode="after")
    def _index_within_total(self) -> "ChunkMetadata":
        if self.chunk_index >= self.total_chunks:
            raise ValueError(
                f"chunk_index {self.chunk_index} out of range for total_chunks {self.total_chunks}"
            )
        return self


class Chunk(BaseModel):
    """Document chunk with its text span."""

    id: str = Field(description="Deterministic chunk identifier ({filename}_chunk_{index})")
    text: str = Field(description="Chunk text content")
    start: int = Field(ge=0, description="Start offset of the source window")
    end: int = Field(ge=0, description="End offset (exclusive) of the source window")
    metadata: ChunkMetadata
