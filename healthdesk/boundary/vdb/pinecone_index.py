"""
Pinecone vector index for production retrieval.

Wraps a Pinecone index handle with retry on transient server errors and
maps SDK and transport exceptions onto VectorStoreError with a FailureKind.

Dependencies: pinecone, tenacity
System role: Production vector store (Pinecone)
"""

import logging
from typing import Any

from pinecone import Pinecone
from pinecone.exceptions import (
    ForbiddenException,
    NotFoundException,
    ServiceException,
    UnauthorizedException,
)
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

from healthdesk.boundary.vdb.vector_schemas import IndexStats, VectorMatch, VectorRecord
from healthdesk.core.exceptions import FailureKind, VectorStoreError

logger = logging.getLogger(__name__)

_retry_transient = retry(
    retry=retry_if_exception_type(ServiceException),
    stop=stop_after_attempt(3),
    wait=wait_exponential_jitter(initial=1, max=10, jitter=1),
    before_sleep=lambda retry_state: logger.warning(
        f"{__name__} - Retry {retry_state.attempt_number}/3 after Pinecone service error"
    ),
    reraise=True,
)


def _to_vector_store_error(error: Exception, operation: str) -> VectorStoreError:
    if isinstance(error, (UnauthorizedException, ForbiddenException)):
        kind = FailureKind.CREDENTIALS
    elif isinstance(error, NotFoundException):
        kind = FailureKind.NOT_FOUND
    else:
        kind = FailureKind.BACKEND
    return VectorStoreError(f"Pinecone {operation} failed: {error}", operation=operation, kind=kind)


class PineconeIndex:
    """Pinecone-backed vector index."""

    def __init__(self, index: Any, namespace: str = "") -> None:
        """
        Initialize with an existing Pinecone index handle.

        Args:
            index: pinecone Index object (from Pinecone(...).Index(name))
            namespace: Namespace all operations are scoped to
        """
        self._index = index
        self._namespace = namespace

    @classmethod
    def connect(cls, api_key: str, index_name: str, namespace: str = "") -> "PineconeIndex":
        """
        Open a Pinecone index by name.

        Raises:
            VectorStoreError: Missing API key
        """
        if not api_key:
            raise VectorStoreError(
                "Pinecone API key is not configured",
                operation="connect",
                kind=FailureKind.CREDENTIALS,
            )
        client = Pinecone(api_key=api_key)
        logger.info("Connected to Pinecone", extra={"index_name": index_name})
        return cls(client.Index(index_name), namespace=namespace)

    @_retry_transient
    def _upsert(self, vectors: list[dict[str, Any]]) -> None:
        self._index.upsert(vectors=vectors, namespace=self._namespace)

    def upsert(self, records: list[VectorRecord]) -> None:
        vectors = [
            {"id": record.id, "values": record.embedding, "metadata": record.metadata}
            for record in records
        ]
        try:
            self._upsert(vectors)
        except Exception as e:
            raise _to_vector_store_error(e, "upsert") from e

    @_retry_transient
    def _query(self, vector: list[float], top_k: int) -> Any:
        return self._index.query(
            vector=vector,
            top_k=top_k,
            include_metadata=True,
            namespace=self._namespace,
        )

    def query(self, vector: list[float], top_k: int) -> list[VectorMatch]:
        try:
            response = self._query(vector, top_k)
        except Exception as e:
            raise _to_vector_store_error(e, "query") from e

        return [
            VectorMatch(id=match.id, score=match.score or 0.0, metadata=dict(match.metadata or {}))
            for match in response.matches
        ]

    @_retry_transient
    def _describe(self) -> Any:
        return self._index.describe_index_stats()

    def describe_stats(self) -> IndexStats:
        try:
            stats = self._describe()
        except Exception as e:
            raise _to_vector_store_error(e, "stats") from e

        if self._namespace:
            summary = (stats.namespaces or {}).get(self._namespace)
            count = summary.vector_count if summary else 0
        else:
            count = stats.total_vector_count or 0
        return IndexStats(total_vector_count=count)

    def delete_all(self) -> None:
        """Delete every vector; a missing or already-empty namespace is a no-op."""
        if self.describe_stats().total_vector_count == 0:
            logger.info("Pinecone index already empty, skipping delete")
            return
        try:
            self._index.delete(delete_all=True, namespace=self._namespace)
        except NotFoundException:
            logger.info("Pinecone namespace not found, nothing to delete")
        except Exception as e:
            raise _to_vector_store_error(e, "delete") from e

    def delete_by_filter(self, metadata_filter: dict[str, Any]) -> None:
        pinecone_filter = {key: {"$eq": value} for key, value in metadata_filter.items()}
        try:
            self._index.delete(filter=pinecone_filter, namespace=self._namespace)
        except NotFoundException:
            logger.info("Pinecone namespace not found, nothing to delete")
        except Exception as e:
            raise _to_vector_store_error(e, "delete") from e
