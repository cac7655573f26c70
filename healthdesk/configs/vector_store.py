"""
Vector store configuration settings.

Manages the primary vector index (Pinecone in production, in-memory for
local development) and the ordered retrieval chain with its fallback policy.

Dependencies: pydantic, pydantic_settings
System role: Vector database configuration for RAG retrieval
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

RetrievalBackendName = Literal["index", "vectorize"]


class VectorStoreSettings(BaseSettings):
    """Vector store configuration (in-memory for dev, Pinecone for prod)."""

    model_config = SettingsConfigDict(
        env_prefix="VECTOR_STORE_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    store_type: Literal["pinecone", "memory"] = Field(
        default="pinecone",
        description="Primary index type: 'memory' for local dev, 'pinecone' for production",
    )
    pinecone_api_key: str = Field(default="", description="Pinecone API key")
    index_name: str = Field(default="healthcare-docs", description="Pinecone index name")
    namespace: str = Field(default="", description="Pinecone namespace ('' is the default namespace)")

    upsert_batch_size: int = Field(
        default=100,
        description="Maximum vectors per upsert request",
        gt=0,
    )
    top_k: int = Field(default=5, description="Number of top results to retrieve", ge=1, le=100)

    # Retrieval chain
    retrieval_backends: list[RetrievalBackendName] = Field(
        default=["index", "vectorize"],
        description="Retrieval backends in priority order",
    )
    fallback_on_error: bool = Field(
        default=True,
        description="Try the next backend when one raises",
    )
    fallback_on_empty: bool = Field(
        default=False,
        description="Try the next backend when one returns no matches",
    )

    @field_validator("retrieval_backends")
    @classmethod
    def _require_backends(cls, value: list[str]) -> list[str]:
        if not value:
            raise ValueError("At least one retrieval backend must be configured")
        if len(set(value)) != len(value):
            raise ValueError("Retrieval backends must not repeat")
        return value
