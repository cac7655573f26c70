"""
Retrieval orchestrator.

Queries an ordered chain of retrieval backends (embedding vector index
first, Vectorize.io second) and formats the winning matches into context
text plus citations. retrieve() never raises: when every backend fails it
returns a fixed apology message with no sources.

Dependencies: healthdesk.boundary, healthdesk.models
System role: Question -> context documents for the chat layer
"""

import logging
from dataclasses import dataclass
from typing import Protocol

from healthdesk.boundary.vdb.vector_schemas import VectorMatch
from healthdesk.core.exceptions import RetrievalError
from healthdesk.models.retrieval import RetrievalResult, Source

logger = logging.getLogger(__name__)

RETRIEVAL_UNAVAILABLE_MESSAGE = "Unable to retrieve relevant documents at this time."
NO_DOCUMENTS_MESSAGE = "No relevant documents found."


class RetrievalBackend(Protocol):
    """Anything that can answer a question with vector matches."""

    name: str

    def search(self, question: str, top_k: int) -> list[VectorMatch]: ...


@dataclass(frozen=True)
class FallbackPolicy:
    """When to move on to the next backend."""

    fallback_on_error: bool = True
    fallback_on_empty: bool = False


def match_title(match: VectorMatch, position: int) -> str:
    """Display title: filename, then display name, then source, then position."""
    meta = match.metadata
    for key in ("filename", "source_display_name", "source"):
        value = meta.get(key)
        if value:
            return str(value)
    return f"Document {position}"


def format_context(matches: list[VectorMatch]) -> str:
    """Render matches as '[title]\\ntext' blocks separated by blank lines."""
    return "\n\n".join(
        f"[{match_title(match, position)}]\n{match.text}"
        for position, match in enumerate(matches, start=1)
    )


def to_sources(matches: list[VectorMatch]) -> list[Source]:
    return [
        Source(
            id=match.id,
            title=match_title(match, position),
            snippet=match.text,
            url=str(match.metadata.get("source") or ""),
            similarity=match.score,
        )
        for position, match in enumerate(matches, start=1)
    ]


class RetrievalOrchestrator:
    """Try retrieval backends in order according to a FallbackPolicy."""

    def __init__(
        self,
        backends: list[RetrievalBackend],
        policy: FallbackPolicy | None = None,
        top_k: int = 5,
    ) -> None:
        """
        Initialize orchestrator.

        Args:
            backends: Backends in priority order
            policy: Fallback policy (fallback on error only by default)
            top_k: Matches requested from each backend
        """
        if not backends:
            raise ValueError("At least one retrieval backend is required")
        self._backends = backends
        self._policy = policy or FallbackPolicy()
        self._top_k = top_k

    @property
    def backend_names(self) -> list[str]:
        return [backend.name for backend in self._backends]

    def retrieve(self, query: str) -> RetrievalResult:
        """
        Retrieve context for a question.

        Args:
            query: User question

        Returns:
            RetrievalResult: Context text and sources (never raises)
        """
        attempted: list[str] = []
        answered_empty: str | None = None

        for backend in self._backends:
            attempted.append(backend.name)
            try:
                matches = backend.search(query, self._top_k)
            except Exception as e:
                logger.warning(
                    "Retrieval backend failed",
                    extra={"backend": backend.name, "error": str(e)},
                )
                if self._policy.fallback_on_error:
                    continue
                break

            if matches:
                logger.info(
                    "Retrieved documents",
                    extra={"backend": backend.name, "match_count": len(matches)},
                )
                return RetrievalResult(
                    context_documents=format_context(matches),
                    sources=to_sources(matches),
                    backend=backend.name,
                    attempted=attempted,
                )

            answered_empty = backend.name
            if not self._policy.fallback_on_empty:
                break

        if answered_empty is not None:
            return RetrievalResult(
                context_documents=NO_DOCUMENTS_MESSAGE,
                backend=answered_empty,
                attempted=attempted,
            )

        error = RetrievalError(
            "All retrieval backends failed",
            details={"attempted": attempted},
        )
        logger.error(str(error))
        return RetrievalResult(
            context_documents=RETRIEVAL_UNAVAILABLE_MESSAGE,
            attempted=attempted,
        )
