"""Tests for environment-driven settings."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from healthdesk.configs import Settings, get_settings
from healthdesk.configs.ingestion import IngestionSettings
from healthdesk.configs.vector_store import VectorStoreSettings


class TestSettings:
    """Defaults, env prefixes and validators."""

    def test_defaults(self, monkeypatch) -> None:
        for name in ("INGESTION_CHUNK_SIZE", "INGESTION_CHUNK_OVERLAP", "VECTOR_STORE_TOP_K"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings()

        assert settings.ingestion.chunk_size == 1000
        assert settings.ingestion.chunk_overlap == 200
        assert settings.ingestion.max_upload_bytes == 10 * 1024 * 1024
        assert settings.vector_store.top_k == 5
        assert settings.embedding.batch_size == 20

    def test_env_prefix(self, monkeypatch) -> None:
        monkeypatch.setenv("VECTOR_STORE_STORE_TYPE", "memory")
        monkeypatch.setenv("VECTOR_STORE_RETRIEVAL_BACKENDS", '["vectorize", "index"]')
        monkeypatch.setenv("SESSION_CLEAR_METHOD", "none")

        settings = Settings()

        assert settings.vector_store.store_type == "memory"
        assert settings.vector_store.retrieval_backends == ["vectorize", "index"]
        assert settings.session.clear_method == "none"

    def test_server_settings(self, monkeypatch) -> None:
        monkeypatch.setenv("PORT", "9100")
        monkeypatch.setenv("CORS_ALLOW_ORIGINS", '["http://localhost:3000"]')

        settings = Settings()

        assert settings.port == 9100
        assert settings.cors_allow_origins == ["http://localhost:3000"]

    def test_overlap_must_be_smaller_than_chunk(self) -> None:
        with pytest.raises(PydanticValidationError):
            IngestionSettings(chunk_size=500, chunk_overlap=500)

    @pytest.mark.parametrize("backends", [[], ["index", "index"], ["elastic"]])
    def test_invalid_retrieval_backends(self, backends) -> None:
        with pytest.raises(PydanticValidationError):
            VectorStoreSettings(retrieval_backends=backends)

    def test_get_settings_is_cached(self) -> None:
        get_settings.cache_clear()

        assert get_settings() is get_settings()
