"""
Shared test fixtures and configuration for entire test suite.

Provides: Settings, fake embedder, in-memory index, mocked external clients,
service container and FastAPI test client
Dependencies: pytest, langchain_core, fastapi
System role: Test infrastructure and fixture management
"""

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient
from langchain_core.embeddings import DeterministicFakeEmbedding

from healthdesk.api.deps import ServiceCache
from healthdesk.boundary.search.google_search import GoogleSearchClient
from healthdesk.boundary.vdb.embedder import Embedder
from healthdesk.boundary.vdb.memory_index import InMemoryIndex
from healthdesk.boundary.vdb.vector_store_client import VectorStoreClient
from healthdesk.boundary.vectorize.client import VectorizeClient
from healthdesk.configs import Settings
from healthdesk.configs.vector_store import VectorStoreSettings
from healthdesk.main import create_app

EMBEDDING_SIZE = 16


@pytest.fixture
def settings() -> Settings:
    """Settings pinned to the in-memory index."""
    return Settings(vector_store=VectorStoreSettings(store_type="memory"))


@pytest.fixture
def embedder() -> Embedder:
    """Embedder over a deterministic fake model (same text -> same vector)."""
    return Embedder(DeterministicFakeEmbedding(size=EMBEDDING_SIZE), batch_size=20)


@pytest.fixture
def memory_index() -> InMemoryIndex:
    return InMemoryIndex()


@pytest.fixture
def vector_store(embedder, memory_index) -> VectorStoreClient:
    return VectorStoreClient(embedder, memory_index, upsert_batch_size=100, top_k=5)


@pytest.fixture
def mock_vectorize_client() -> MagicMock:
    """VectorizeClient mock that retrieves nothing and accepts uploads."""
    client = MagicMock(spec=VectorizeClient)
    client.retrieve.return_value = []
    client.upload_text_file.return_value = None
    return client


@pytest.fixture
def mock_search_client() -> MagicMock:
    client = MagicMock(spec=GoogleSearchClient)
    client.search.return_value = []
    return client


@pytest.fixture
def services(
    settings,
    embedder,
    memory_index,
    mock_vectorize_client,
    mock_search_client,
) -> ServiceCache:
    """Service container wired to fakes only."""
    return ServiceCache(
        settings,
        embedder=embedder,
        index=memory_index,
        vectorize_client=mock_vectorize_client,
        search_client=mock_search_client,
    )


@pytest.fixture
def client(services):
    """
    Test client with lifespan run (services warmed, session initialized).

    Yields:
        TestClient: Client bound to an app using the fake services
    """
    app = create_app(services)
    with TestClient(app) as test_client:
        yield test_client
