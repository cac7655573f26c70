"""
In-memory vector index for local development and tests.

Brute-force cosine similarity over numpy arrays; thread-safe.

Dependencies: numpy
System role: Development vector store (no external service)
"""

import logging
import threading
from typing import Any

import numpy as np

from healthdesk.boundary.vdb.vector_schemas import IndexStats, VectorMatch, VectorRecord

logger = logging.getLogger(__name__)


class InMemoryIndex:
    """Dictionary-backed vector index with cosine similarity search."""

    def __init__(self) -> None:
        self._vectors: dict[str, np.ndarray] = {}
        self._metadata: dict[str, dict[str, Any]] = {}
        self._lock = threading.Lock()

    def upsert(self, records: list[VectorRecord]) -> None:
        with self._lock:
            for record in records:
                self._vectors[record.id] = np.asarray(record.embedding, dtype=np.float32)
                self._metadata[record.id] = dict(record.metadata)

    def query(self, vector: list[float], top_k: int) -> list[VectorMatch]:
        with self._lock:
            if not self._vectors:
                return []
            ids = list(self._vectors)
            matrix = np.stack([self._vectors[vid] for vid in ids])
            metadata = [self._metadata[vid] for vid in ids]

        query = np.asarray(vector, dtype=np.float32)
        norms = np.linalg.norm(matrix, axis=1) * np.linalg.norm(query)
        scores = (matrix @ query) / np.where(norms == 0, 1.0, norms)

        order = np.argsort(-scores)[:top_k]
        return [
            VectorMatch(id=ids[i], score=float(scores[i]), metadata=dict(metadata[i]))
            for i in order
        ]

    def describe_stats(self) -> IndexStats:
        with self._lock:
            return IndexStats(total_vector_count=len(self._vectors))

    def delete_all(self) -> None:
        with self._lock:
            self._vectors.clear()
            self._metadata.clear()

    def delete_by_filter(self, metadata_filter: dict[str, Any]) -> None:
        with self._lock:
            doomed = [
                vid
                for vid, meta in self._metadata.items()
                if all(meta.get(key) == value for key, value in metadata_filter.items())
            ]
            for vid in doomed:
                del self._vectors[vid]
                del self._metadata[vid]
        logger.debug("Deleted vectors by filter", extra={"deleted": len(doomed)})
