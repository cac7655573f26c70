"""
Vector database boundary.

Exports: Embedder, VectorStoreClient, PineconeIndex, InMemoryIndex, schemas
"""

from .embedder import Embedder, create_openai_embedder
from .memory_index import InMemoryIndex
from .pinecone_index import PineconeIndex
from .vector_index import VectorIndex
from .vector_schemas import IndexStats, VectorMatch, VectorRecord
from .vector_store_client import VectorStoreClient

__all__ = [
    "Embedder",
    "create_openai_embedder",
    "InMemoryIndex",
    "PineconeIndex",
    "VectorIndex",
    "IndexStats",
    "VectorMatch",
    "VectorRecord",
    "VectorStoreClient",
]
