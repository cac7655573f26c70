"""
Vector database schemas.

Pydantic models for vector operations (records, matches, index stats).
Used for type-safe vector store interactions.

Dependencies: pydantic
System role: Type definitions for vector operations
"""

from typing import Any

from pydantic import BaseModel, Field


class VectorRecord(BaseModel):
    """
    Vector written to the index.

    The id is the chunk id, so re-ingesting a same-named file overwrites
    existing vectors instead of duplicating them. Metadata is the chunk
    metadata plus the chunk text.
    """

    id: str = Field(description="Chunk identifier")
    embedding: list[float] = Field(description="Embedding vector")
    metadata: dict[str, Any] = Field(default_factory=dict, description="Chunk metadata and text")


class VectorMatch(BaseModel):
    """Single result from a similarity query."""

    id: str = Field(description="Vector identifier")
    score: float = Field(description="Similarity score (higher is closer)")
    metadata: dict[str, Any] = Field(default_factory=dict, description="Stored metadata")

    @property
    def text(self) -> str:
        return str(self.metadata.get("text", ""))


class IndexStats(BaseModel):
    """Live index statistics."""

    total_vector_count: int = Field(default=0, ge=0, description="Vectors currently stored")
