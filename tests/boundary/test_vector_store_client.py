"""Tests for VectorStoreClient over the in-memory index and mocked indexes."""

from unittest.mock import MagicMock

import pytest
import requests

from healthdesk.boundary.vdb.memory_index import InMemoryIndex
from healthdesk.boundary.vdb.vector_schemas import IndexStats, VectorRecord
from healthdesk.boundary.vdb.vector_store_client import VectorStoreClient
from healthdesk.boundary.vdb.vector_store_factory import create_vector_index, get_vector_store
from healthdesk.configs import Settings
from healthdesk.configs.vector_store import VectorStoreSettings
from healthdesk.core.exceptions import FailureKind, UpsertError, VectorStoreError


def _records(count: int, filename: str = "doc.txt") -> list[VectorRecord]:
    return [
        VectorRecord(
            id=f"{filename}_chunk_{i}",
            embedding=[float(i + 1), 1.0, 0.5, 0.0],
            metadata={"text": f"chunk {i}", "filename": filename},
        )
        for i in range(count)
    ]


class TestUpsert:
    """Sequential batched upserts."""

    def test_batches_sequentially(self, embedder) -> None:
        """250 records with batch size 100 take three requests of 100, 100 and 50."""
        # Arrange
        index = MagicMock()
        store = VectorStoreClient(embedder, index, upsert_batch_size=100)

        # Act
        written = store.upsert(_records(250))

        # Assert
        assert written == 250
        assert [len(c.args[0]) for c in index.upsert.call_args_list] == [100, 100, 50]

    def test_first_failure_stops_later_batches(self, embedder) -> None:
        # Arrange
        index = MagicMock()
        index.upsert.side_effect = [None, RuntimeError("503 from index"), None]
        store = VectorStoreClient(embedder, index, upsert_batch_size=100)

        # Act
        with pytest.raises(UpsertError) as exc_info:
            store.upsert(_records(250))

        # Assert
        assert exc_info.value.batch_index == 1
        assert exc_info.value.details["written"] == 100
        assert index.upsert.call_count == 2

    def test_failure_kind_is_propagated(self, embedder) -> None:
        """A credentials failure from the index stays a credentials failure."""
        index = MagicMock()
        index.upsert.side_effect = VectorStoreError(
            "unauthorized", operation="upsert", kind=FailureKind.CREDENTIALS
        )
        store = VectorStoreClient(embedder, index)

        with pytest.raises(UpsertError) as exc_info:
            store.upsert(_records(1))

        assert exc_info.value.kind == FailureKind.CREDENTIALS

    def test_same_id_overwrites(self, vector_store) -> None:
        vector_store.upsert(_records(3))
        vector_store.upsert(_records(3))

        assert vector_store.document_count() == 3


class TestQueryAndClear:
    """Queries, counts and clearing."""

    def test_query_returns_best_match_first(self, vector_store, embedder) -> None:
        texts = ["vision exam coverage", "dental cleaning coverage", "hospital stay coverage"]
        vector_store.upsert(
            [
                VectorRecord(id=f"t_{i}", embedding=vector, metadata={"text": text})
                for i, (text, vector) in enumerate(zip(texts, embedder.embed(texts)))
            ]
        )

        matches = vector_store.query("dental cleaning coverage", top_k=2)

        assert len(matches) == 2
        assert matches[0].text == "dental cleaning coverage"
        assert matches[0].score >= matches[1].score

    def test_query_empty_index(self, vector_store) -> None:
        assert vector_store.query("anything") == []

    def test_clear_all_twice_is_noop(self, vector_store) -> None:
        vector_store.upsert(_records(4))

        vector_store.clear_all()
        vector_store.clear_all()

        assert vector_store.document_count() == 0

    def test_clear_all_skips_delete_when_empty(self, embedder) -> None:
        index = MagicMock()
        index.describe_stats.return_value = IndexStats(total_vector_count=0)

        VectorStoreClient(embedder, index).clear_all()

        index.delete_all.assert_not_called()

    def test_explicit_zero_top_k_is_passed_through(self, embedder) -> None:
        index = MagicMock()
        index.query.return_value = []

        VectorStoreClient(embedder, index, top_k=5).query("copay", top_k=0)

        assert index.query.call_args.args[1] == 0

    def test_default_top_k(self, embedder) -> None:
        index = MagicMock()
        index.query.return_value = []

        VectorStoreClient(embedder, index, top_k=5).query("copay")

        assert index.query.call_args.args[1] == 5

    def test_unreachable_index_is_vector_store_error(self, embedder) -> None:
        # Arrange
        index = MagicMock()
        index.describe_stats.side_effect = requests.ConnectionError("connection refused")
        store = VectorStoreClient(embedder, index)

        # Act
        with pytest.raises(VectorStoreError) as exc_info:
            store.clear_all()

        # Assert
        assert exc_info.value.kind == FailureKind.BACKEND
        assert exc_info.value.operation == "stats"
        index.delete_all.assert_not_called()

    def test_clear_by_filename_only_removes_that_file(self, vector_store) -> None:
        vector_store.upsert(_records(2, "a.txt") + _records(3, "b.txt"))

        vector_store.clear_by_filename("a.txt")

        assert vector_store.document_count() == 3


class TestFactory:
    """Index selection from settings."""

    def test_memory_store_type(self) -> None:
        settings = Settings(vector_store=VectorStoreSettings(store_type="memory"))

        assert isinstance(create_vector_index(settings), InMemoryIndex)

    def test_pinecone_without_key_fails(self) -> None:
        settings = Settings(vector_store=VectorStoreSettings(store_type="pinecone", pinecone_api_key=""))

        with pytest.raises(VectorStoreError) as exc_info:
            create_vector_index(settings)

        assert exc_info.value.kind == FailureKind.CREDENTIALS

    def test_get_vector_store_uses_overrides(self, settings, embedder, memory_index) -> None:
        store = get_vector_store(settings, embedder=embedder, index=memory_index)

        assert store.document_count() == 0
        assert store.name == "index"
