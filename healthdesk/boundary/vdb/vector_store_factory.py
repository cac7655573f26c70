"""
Vector store factory.

Builds the primary VectorStoreClient from settings: Pinecone in production,
the in-memory index for local development.

Dependencies: healthdesk.configs, healthdesk.boundary.vdb
System role: Environment-based vector store selection
"""

import logging

from healthdesk.boundary.vdb.embedder import Embedder, create_openai_embedder
from healthdesk.boundary.vdb.memory_index import InMemoryIndex
from healthdesk.boundary.vdb.pinecone_index import PineconeIndex
from healthdesk.boundary.vdb.vector_index import VectorIndex
from healthdesk.boundary.vdb.vector_store_client import VectorStoreClient
from healthdesk.configs import Settings

logger = logging.getLogger(__name__)


def create_vector_index(settings: Settings) -> VectorIndex:
    """Create the index selected by VECTOR_STORE_STORE_TYPE."""
    vs = settings.vector_store
    if vs.store_type == "memory":
        logger.info("Using in-memory vector index")
        return InMemoryIndex()

    logger.info("Using Pinecone vector index", extra={"index_name": vs.index_name})
    return PineconeIndex.connect(
        api_key=vs.pinecone_api_key,
        index_name=vs.index_name,
        namespace=vs.namespace,
    )


def get_vector_store(
    settings: Settings,
    embedder: Embedder | None = None,
    index: VectorIndex | None = None,
) -> VectorStoreClient:
    """
    Build the primary vector store client.

    Args:
        settings: Application settings
        embedder: Embedder override (OpenAI by default)
        index: Index override (selected by store_type by default)

    Returns:
        VectorStoreClient: Configured client
    """
    return VectorStoreClient(
        embedder=embedder or create_openai_embedder(settings.embedding),
        index=index or create_vector_index(settings),
        upsert_batch_size=settings.vector_store.upsert_batch_size,
        top_k=settings.vector_store.top_k,
    )
