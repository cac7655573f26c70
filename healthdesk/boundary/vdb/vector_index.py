"""
Vector index capability interface.

Dependencies: None
System role: Contract implemented by Pinecone and in-memory indexes
"""

from typing import Any, Protocol

from healthdesk.boundary.vdb.vector_schemas import IndexStats, VectorMatch, VectorRecord


class VectorIndex(Protocol):
    """Minimal set of operations the application needs from a vector index."""

    def upsert(self, records: list[VectorRecord]) -> None: ...

    def query(self, vector: list[float], top_k: int) -> list[VectorMatch]: ...

    def describe_stats(self) -> IndexStats: ...

    def delete_all(self) -> None: ...

    def delete_by_filter(self, metadata_filter: dict[str, Any]) -> None: ...
