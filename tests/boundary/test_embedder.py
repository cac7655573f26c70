"""Tests for the batched Embedder and the OpenAI factory."""

from unittest.mock import MagicMock

import httpx
import openai
import pytest
from langchain_core.embeddings import DeterministicFakeEmbedding

from healthdesk.boundary.vdb.embedder import Embedder, create_openai_embedder
from healthdesk.configs.embedding import EmbeddingSettings
from healthdesk.core.exceptions import EmbeddingError, FailureKind, IngestionStep

OPENAI_REQUEST = httpx.Request("POST", "https://api.openai.com/v1/embeddings")


def _fake_model() -> MagicMock:
    model = MagicMock()
    model.embed_documents.side_effect = lambda texts: [[float(len(t))] * 4 for t in texts]
    return model


class TestEmbedder:
    """Batching and error classification."""

    def test_one_call_per_batch(self) -> None:
        """45 texts with batch size 20 take exactly three calls of 20, 20 and 5."""
        # Arrange
        model = _fake_model()
        texts = [f"chunk {i}" for i in range(45)]

        # Act
        vectors = Embedder(model, batch_size=20).embed(texts)

        # Assert
        assert len(vectors) == 45
        assert [len(c.args[0]) for c in model.embed_documents.call_args_list] == [20, 20, 5]

    def test_preserves_order(self) -> None:
        embedder = Embedder(DeterministicFakeEmbedding(size=8), batch_size=2)
        texts = ["alpha", "beta", "gamma", "delta", "epsilon"]

        batched = embedder.embed(texts)

        assert batched == [embedder.embed_query(text) for text in texts]

    def test_empty_input_makes_no_calls(self) -> None:
        model = _fake_model()

        assert Embedder(model).embed([]) == []
        model.embed_documents.assert_not_called()

    def test_wrong_vector_count_fails(self) -> None:
        model = MagicMock()
        model.embed_documents.return_value = [[0.1, 0.2]]

        with pytest.raises(EmbeddingError) as exc_info:
            Embedder(model).embed(["a", "b"])

        assert exc_info.value.details["batch_index"] == 0

    def test_failure_reports_batch_and_stops(self) -> None:
        """The failing batch index is reported and later batches are not sent."""
        model = MagicMock()
        model.embed_documents.side_effect = [[[0.0]] * 2, RuntimeError("server error"), [[0.0]] * 2]

        with pytest.raises(EmbeddingError) as exc_info:
            Embedder(model, batch_size=2).embed(["a", "b", "c", "d", "e", "f"])

        assert exc_info.value.details["batch_index"] == 1
        assert exc_info.value.kind == FailureKind.BACKEND
        assert exc_info.value.step == IngestionStep.EMBED
        assert model.embed_documents.call_count == 2

    def test_authentication_failure_is_credentials(self) -> None:
        model = MagicMock()
        model.embed_documents.side_effect = openai.AuthenticationError(
            "Incorrect API key provided",
            response=httpx.Response(401, request=OPENAI_REQUEST),
            body=None,
        )

        with pytest.raises(EmbeddingError) as exc_info:
            Embedder(model).embed(["a"])

        assert exc_info.value.kind == FailureKind.CREDENTIALS

    def test_timeout_failure_is_timeout(self) -> None:
        model = MagicMock()
        model.embed_documents.side_effect = openai.APITimeoutError(request=OPENAI_REQUEST)

        with pytest.raises(EmbeddingError) as exc_info:
            Embedder(model).embed(["a"])

        assert exc_info.value.kind == FailureKind.TIMEOUT

    def test_rejects_non_positive_batch_size(self) -> None:
        with pytest.raises(ValueError):
            Embedder(_fake_model(), batch_size=0)


class TestCreateOpenAIEmbedder:
    """Factory."""

    def test_missing_key_is_credentials_failure(self) -> None:
        with pytest.raises(EmbeddingError) as exc_info:
            create_openai_embedder(EmbeddingSettings(openai_api_key=""))

        assert exc_info.value.kind == FailureKind.CREDENTIALS

    def test_uses_configured_batch_size(self) -> None:
        embedder = create_openai_embedder(
            EmbeddingSettings(openai_api_key="sk-test", batch_size=7)
        )

        assert embedder.batch_size == 7
