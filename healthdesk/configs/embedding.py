"""
Embedding model configuration.

Dependencies: pydantic, pydantic_settings
System role: OpenAI embedding settings shared by ingestion and retrieval
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class EmbeddingSettings(BaseSettings):
    """OpenAI embedding model settings."""

    model_config = SettingsConfigDict(
        env_prefix="EMBEDDING_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    openai_api_key: str = Field(default="", description="OpenAI API key")
    model: str = Field(
        default="text-embedding-3-small",
        description="OpenAI embedding model name",
    )
    dimension: int = Field(default=1536, description="Embedding vector dimension", gt=0)
    batch_size: int = Field(
        default=20,
        description="Maximum texts sent per embedding request",
        gt=0,
    )
    request_timeout: float = Field(
        default=30.0,
        description="Embedding request timeout in seconds",
        gt=0,
    )
