"""
Configuration settings for the document ingestion pipeline.

Provides environment-based configuration for upload limits and chunking.

Dependencies: pydantic, pydantic_settings
System role: Centralized pipeline configuration
"""

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class IngestionSettings(BaseSettings):
    """Settings for document ingestion pipeline."""

    model_config = SettingsConfigDict(
        env_prefix="INGESTION_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # Sliding-window chunking
    chunk_size: int = Field(
        default=1000,
        description="Window size in characters",
        gt=0,
    )
    chunk_overlap: int = Field(
        default=200,
        description="Overlap between consecutive windows",
        ge=0,
    )
    min_chunk_chars: int = Field(
        default=50,
        description="Trimmed windows shorter than this are dropped",
        ge=0,
    )

    # Word-boundary chunking (vector index sink)
    word_chunk_size: int = Field(
        default=1000,
        description="Maximum word-chunk size in characters",
        gt=0,
    )

    # Upload limits
    max_upload_bytes: int = Field(
        default=10 * 1024 * 1024,
        description="Maximum accepted upload size in bytes",
        gt=0,
    )
    processing_timeout_seconds: float = Field(
        default=300.0,
        description="Time budget for one ingestion request",
        gt=0,
    )

    @model_validator(mode="after")
    def _check_overlap(self) -> "IngestionSettings":
        if self.chunk_overlap >= self.chunk_size:
            raise ValueError("chunk_overlap must be smaller than chunk_size")
        return self
