"""
Vector store client.

Combines the batched embedder with a vector index: sequential batched
upserts that stop at the first failing batch, question queries, live
document counts, and idempotent clearing. Also serves as the first
retrieval backend of the RetrievalOrchestrator.

Dependencies: healthdesk.boundary.vdb
System role: Single entry point for embedding-index reads and writes
"""

import logging

from healthdesk.boundary.vdb.embedder import Embedder
from healthdesk.boundary.vdb.vector_index import VectorIndex
from healthdesk.boundary.vdb.vector_schemas import VectorMatch, VectorRecord
from healthdesk.core.exceptions import HealthDeskException, UpsertError, VectorStoreError

logger = logging.getLogger(__name__)


class VectorStoreClient:
    """Embedding vector store facade over a VectorIndex."""

    name = "index"

    def __init__(
        self,
        embedder: Embedder,
        index: VectorIndex,
        upsert_batch_size: int = 100,
        top_k: int = 5,
    ) -> None:
        """
        Initialize vector store client.

        Args:
            embedder: Batched embedder used for documents and questions
            index: Backing vector index
            upsert_batch_size: Maximum records per upsert request
            top_k: Default number of matches per query
        """
        if upsert_batch_size <= 0:
            raise ValueError("upsert_batch_size must be positive")
        self._embedder = embedder
        self._index = index
        self._upsert_batch_size = upsert_batch_size
        self._top_k = top_k

    def _call_index(self, operation: str, method, *args):
        try:
            return method(*args)
        except HealthDeskException:
            raise
        except Exception as e:
            raise VectorStoreError(
                f"Vector index {operation} failed: {e}", operation=operation
            ) from e

    def embed(self, texts: list[str]) -> list[list[float]]:
        """Embed texts in order (see Embedder.embed)."""
        return self._embedder.embed(texts)

    def upsert(self, records: list[VectorRecord]) -> int:
        """
        Write records in sequential batches.

        Args:
            records: Records to write

        Returns:
            int: Number of records written

        Raises:
            UpsertError: A batch was rejected; no later batch is sent
        """
        written = 0
        for batch_index, start in enumerate(range(0, len(records), self._upsert_batch_size)):
            batch = records[start : start + self._upsert_batch_size]
            try:
                self._index.upsert(batch)
            except HealthDeskException as e:
                raise UpsertError(
                    f"Upsert batch {batch_index} failed: {e.message}",
                    batch_index=batch_index,
                    kind=e.kind,
                    details={"written": written},
                ) from e
            except Exception as e:
                raise UpsertError(
                    f"Upsert batch {batch_index} failed: {e}",
                    batch_index=batch_index,
                    details={"written": written},
                ) from e
            written += len(batch)
            logger.debug(
                "Upserted batch",
                extra={"batch_index": batch_index, "batch_size": len(batch)},
            )
        return written

    def query(self, question: str, top_k: int | None = None) -> list[VectorMatch]:
        """
        Embed a question and return its nearest matches.

        Args:
            question: Natural-language question
            top_k: Number of matches (defaults to the configured top_k)

        Returns:
            list[VectorMatch]: Up to top_k matches, best first
        """
        vector = self._embedder.embed_query(question)
        top_k = top_k if top_k is not None else self._top_k
        return self._call_index("query", self._index.query, vector, top_k)

    def search(self, question: str, top_k: int) -> list[VectorMatch]:
        """Retrieval backend entry point."""
        return self.query(question, top_k)

    def document_count(self) -> int:
        """Live number of stored vectors."""
        return self._call_index("stats", self._index.describe_stats).total_vector_count

    def clear_all(self) -> None:
        """Delete every vector; clearing an empty index is a no-op."""
        before = self.document_count()
        if before == 0:
            logger.info("Vector index already empty")
            return
        self._call_index("delete", self._index.delete_all)
        logger.info("Cleared vector index", extra={"deleted": before})

    def clear_by_filename(self, filename: str) -> None:
        """Delete only vectors whose metadata filename equals the value."""
        self._call_index("delete", self._index.delete_by_filter, {"filename": filename})
        logger.info("Cleared vectors for document", extra={"document_name": filename})
