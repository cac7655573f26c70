"""
Dependency injection container.

ServiceCache builds each shared service once (guarded by a lock) and is
attached to app.state by create_app(). Factory functions below expose the
services to FastAPI handlers through Depends.

Dependencies: healthdesk.configs, healthdesk.boundary, healthdesk.core
System role: DI container for service injection
"""

import logging
import threading

from fastapi import Depends, Request

from healthdesk.boundary.search.google_search import GoogleSearchClient
from healthdesk.boundary.vdb.embedder import Embedder
from healthdesk.boundary.vdb.vector_index import VectorIndex
from healthdesk.boundary.vdb.vector_store_client import VectorStoreClient
from healthdesk.boundary.vdb.vector_store_factory import get_vector_store
from healthdesk.boundary.vectorize.client import VectorizeClient, VectorizeRetrievalBackend
from healthdesk.configs import Settings
from healthdesk.core.document_processing import DocumentPipeline
from healthdesk.core.document_processing.tasks import (
    VectorizeSink,
    VectorStoreSink,
    WindowChunkingTask,
    WordChunkingTask,
)
from healthdesk.core.retriever import FallbackPolicy, RetrievalBackend, RetrievalOrchestrator
from healthdesk.core.session_manager import SessionManager
from healthdesk.core.tools import (
    CostLookupService,
    JsonRpcToolServer,
    ToolRegistry,
    build_tool_registry,
)
from healthdesk.models.session import SessionConfig

logger = logging.getLogger(__name__)


class ServiceCache:
    """Container for shared service instances, built on first access."""

    def __init__(
        self,
        settings: Settings,
        embedder: Embedder | None = None,
        index: VectorIndex | None = None,
        vectorize_client: VectorizeClient | None = None,
        search_client: GoogleSearchClient | None = None,
    ) -> None:
        """
        Initialize container.

        Args:
            settings: Application settings
            embedder: Embedder override (OpenAI by default)
            index: Vector index override (selected by settings by default)
            vectorize_client: Vectorize.io client override
            search_client: Web search client override
        """
        self._settings = settings
        self._embedder = embedder
        self._index = index
        self._vectorize_client = vectorize_client
        self._search_client = search_client
        self._lock = threading.RLock()

        self._vector_store: VectorStoreClient | None = None
        self._retriever: RetrievalOrchestrator | None = None
        self._session_manager: SessionManager | None = None
        self._vector_pipeline: DocumentPipeline | None = None
        self._vectorize_pipeline: DocumentPipeline | None = None
        self._tool_registry: ToolRegistry | None = None

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def vector_store(self) -> VectorStoreClient:
        """Get cached vector store."""
        with self._lock:
            if self._vector_store is None:
                self._vector_store = get_vector_store(
                    self._settings, embedder=self._embedder, index=self._index
                )
            return self._vector_store

    @property
    def vectorize_client(self) -> VectorizeClient:
        """Get cached Vectorize.io client."""
        with self._lock:
            if self._vectorize_client is None:
                self._vectorize_client = VectorizeClient(self._settings.vectorize)
            return self._vectorize_client

    @property
    def retriever(self) -> RetrievalOrchestrator:
        """Get cached retrieval orchestrator (backends in configured order)."""
        with self._lock:
            if self._retriever is None:
                vs = self._settings.vector_store
                backends: list[RetrievalBackend] = []
                for name in vs.retrieval_backends:
                    if name == "index":
                        backends.append(self.vector_store)
                    else:
                        backends.append(VectorizeRetrievalBackend(self.vectorize_client))
                self._retriever = RetrievalOrchestrator(
                    backends,
                    policy=FallbackPolicy(
                        fallback_on_error=vs.fallback_on_error,
                        fallback_on_empty=vs.fallback_on_empty,
                    ),
                    top_k=vs.top_k,
                )
            return self._retriever

    @property
    def session_manager(self) -> SessionManager:
        """Get the process-wide session manager."""
        with self._lock:
            if self._session_manager is None:
                session = self._settings.session
                self._session_manager = SessionManager(
                    self.vector_store,
                    SessionConfig(
                        clear_on_start=session.clear_on_start,
                        clear_method=session.clear_method,
                    ),
                )
            return self._session_manager

    @property
    def vector_pipeline(self) -> DocumentPipeline:
        """Word chunks -> embeddings -> vector index."""
        with self._lock:
            if self._vector_pipeline is None:
                ingestion = self._settings.ingestion
                self._vector_pipeline = DocumentPipeline(
                    chunker=WordChunkingTask(chunk_size=ingestion.word_chunk_size),
                    sink=VectorStoreSink(self.vector_store),
                    max_upload_bytes=ingestion.max_upload_bytes,
                )
            return self._vector_pipeline

    @property
    def vectorize_pipeline(self) -> DocumentPipeline:
        """Sliding-window chunks -> Vectorize.io file upload."""
        with self._lock:
            if self._vectorize_pipeline is None:
                ingestion = self._settings.ingestion
                self._vectorize_pipeline = DocumentPipeline(
                    chunker=WindowChunkingTask(
                        chunk_size=ingestion.chunk_size,
                        chunk_overlap=ingestion.chunk_overlap,
                        min_chunk_chars=ingestion.min_chunk_chars,
                    ),
                    sink=VectorizeSink(self.vectorize_client),
                    max_upload_bytes=ingestion.max_upload_bytes,
                )
            return self._vectorize_pipeline

    @property
    def default_pipeline(self) -> DocumentPipeline:
        """Pipeline writing to the backend retrieval asks first."""
        if self._settings.vector_store.retrieval_backends[0] == "vectorize":
            return self.vectorize_pipeline
        return self.vector_pipeline

    @property
    def tool_registry(self) -> ToolRegistry:
        """Get cached tool registry."""
        with self._lock:
            if self._tool_registry is None:
                search_client = self._search_client or GoogleSearchClient(self._settings.search)
                self._tool_registry = build_tool_registry(
                    retriever=self.retriever,
                    cost_lookup=CostLookupService(search_client),
                    upload_pipeline=self.vector_pipeline,
                )
            return self._tool_registry

    def warm(self) -> None:
        """Build every service up front."""
        _ = self.retriever
        _ = self.session_manager
        _ = self.vector_pipeline
        _ = self.vectorize_pipeline
        _ = self.tool_registry
        logger.info("Service cache pre-warmed")


def get_service_cache(request: Request) -> ServiceCache:
    """Get the service cache attached to the running app."""
    return request.app.state.services


def get_settings_dependency(services: ServiceCache = Depends(get_service_cache)) -> Settings:
    return services.settings


def get_vector_store_client(services: ServiceCache = Depends(get_service_cache)) -> VectorStoreClient:
    return services.vector_store


def get_session_manager(services: ServiceCache = Depends(get_service_cache)) -> SessionManager:
    return services.session_manager


def get_tool_registry(services: ServiceCache = Depends(get_service_cache)) -> ToolRegistry:
    return services.tool_registry


def get_jsonrpc_server(
    registry: ToolRegistry = Depends(get_tool_registry),
) -> JsonRpcToolServer:
    return JsonRpcToolServer(registry)


def get_vector_pipeline(services: ServiceCache = Depends(get_service_cache)) -> DocumentPipeline:
    return services.vector_pipeline


def get_default_pipeline(services: ServiceCache = Depends(get_service_cache)) -> DocumentPipeline:
    return services.default_pipeline


def get_vectorize_pipeline(services: ServiceCache = Depends(get_service_cache)) -> DocumentPipeline:
    return services.vectorize_pipeline
