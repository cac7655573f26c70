"""
Input and result models for the ingestion pipeline.

Dependencies: pydantic
System role: Argument and return types for DocumentPipeline.ingest()
"""

from pydantic import BaseModel, Field


class UploadedDocument(BaseModel):
    """Raw uploaded file as received from a client."""

    filename: str = Field(description="Original filename")
    content: bytes = Field(description="Raw file bytes")
    mime_type: str = Field(default="", description="Declared MIME type")


class IngestionResult(BaseModel):
    """Result of document ingestion."""

    filename: str = Field(description="Ingested filename")
    chunk_count: int = Field(description="Number of chunks stored")
    char_count: int = Field(description="Characters of extracted text")
    processing_time_ms: float = Field(description="Total processing time in milliseconds")
