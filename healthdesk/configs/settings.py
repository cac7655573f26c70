"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.
Provides dependency injection factory for FastAPI.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from pydantic import Field

from healthdesk.configs.base import BaseSettings
from healthdesk.configs.embedding import EmbeddingSettings
from healthdesk.configs.ingestion import IngestionSettings
from healthdesk.configs.search import SearchSettings
from healthdesk.configs.session import SessionSettings
from healthdesk.configs.vector_store import VectorStoreSettings
from healthdesk.configs.vectorize import VectorizeSettings


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    embedding: EmbeddingSettings = Field(default_factory=EmbeddingSettings)
    vector_store: VectorStoreSettings = Field(default_factory=VectorStoreSettings)
    vectorize: VectorizeSettings = Field(default_factory=VectorizeSettings)
    ingestion: IngestionSettings = Field(default_factory=IngestionSettings)
    session: SessionSettings = Field(default_factory=SessionSettings)
    search: SearchSettings = Field(default_factory=SearchSettings)


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns Settings instance, cached for dependency injection.
    Environment variables loaded once at startup.

    Returns:
        Settings: Application settings instance
    """
    return Settings()
