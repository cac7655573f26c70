"""
Batched text embedder.

Wraps a LangChain Embeddings model and calls it once per batch of at most
batch_size texts, sequentially, preserving input order. Provider errors are
tagged with a FailureKind so callers can pick remediation text.

Dependencies: langchain_core, langchain_openai, openai
System role: Embedding generation for ingestion and retrieval
"""

import logging

import openai
from langchain_core.embeddings import Embeddings
from langchain_openai import OpenAIEmbeddings

from healthdesk.configs.embedding import EmbeddingSettings
from healthdesk.core.exceptions import EmbeddingError, FailureKind

logger = logging.getLogger(__name__)


def _classify(error: Exception) -> FailureKind:
    if isinstance(error, (openai.AuthenticationError, openai.PermissionDeniedError)):
        return FailureKind.CREDENTIALS
    if isinstance(error, openai.APITimeoutError):
        return FailureKind.TIMEOUT
    return FailureKind.BACKEND


class Embedder:
    """Embed texts in ordered batches."""

    def __init__(self, embeddings: Embeddings, batch_size: int = 20) -> None:
        """
        Initialize embedder.

        Args:
            embeddings: LangChain embedding model
            batch_size: Maximum texts per model call
        """
        if batch_size <= 0:
            raise ValueError("batch_size must be positive")
        self._embeddings = embeddings
        self._batch_size = batch_size

    @property
    def batch_size(self) -> int:
        return self._batch_size

    def embed(self, texts: list[str]) -> list[list[float]]:
        """
        Embed texts, one model call per batch.

        Args:
            texts: Texts to embed

        Returns:
            list[list[float]]: One vector per input, in input order

        Raises:
            EmbeddingError: Model call failed or returned the wrong count
        """
        vectors: list[list[float]] = []
        for batch_index, start in enumerate(range(0, len(texts), self._batch_size)):
            batch = texts[start : start + self._batch_size]
            try:
                result = self._embeddings.embed_documents(batch)
            except Exception as e:
                kind = _classify(e)
                logger.error(
                    "Embedding batch failed",
                    extra={"batch_index": batch_index, "kind": kind.value, "error": str(e)},
                )
                raise EmbeddingError(
                    f"Embedding request failed: {e}",
                    kind=kind,
                    batch_index=batch_index,
                ) from e

            if len(result) != len(batch):
                raise EmbeddingError(
                    f"Embedding model returned {len(result)} vectors for {len(batch)} texts",
                    batch_index=batch_index,
                )
            vectors.extend(result)

        return vectors

    def embed_query(self, text: str) -> list[float]:
        """Embed a single query text."""
        return self.embed([text])[0]


def create_openai_embedder(settings: EmbeddingSettings) -> Embedder:
    """
    Build an Embedder backed by OpenAI embeddings.

    Raises:
        EmbeddingError: No API key configured
    """
    if not settings.openai_api_key:
        raise EmbeddingError(
            "OpenAI API key is not configured",
            kind=FailureKind.CREDENTIALS,
        )

    embeddings = OpenAIEmbeddings(
        model=settings.model,
        dimensions=settings.dimension,
        api_key=settings.openai_api_key,
        timeout=settings.request_timeout,
        max_retries=2,
    )
    logger.info(
        "OpenAI embedder initialized",
        extra={"model": settings.model, "dimension": settings.dimension},
    )
    return Embedder(embeddings, batch_size=settings.batch_size)
