"""
Exception hierarchy for the HealthDesk backend.

Provides layered exception structure for domain-specific errors.
Every exception carries a FailureKind set by the component that observed
the failure, and ingestion errors also carry the IngestionStep they occurred
at. Callers branch on these tags, never on message text.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from enum import Enum
from typing import Any


class FailureKind(str, Enum):
    """Category of a failure, used to pick status codes and remediation text."""

    VALIDATION = "validation"
    FORMAT = "format"
    CREDENTIALS = "credentials"
    TIMEOUT = "timeout"
    BACKEND = "backend"
    NOT_FOUND = "not_found"


class IngestionStep(str, Enum):
    """Ingestion pipeline step at which a failure occurred."""

    VALIDATE = "validate"
    EXTRACT = "extract"
    CHUNK = "chunk"
    EMBED = "embed"
    UPSERT = "upsert"


class HealthDeskException(Exception):
    """Base exception for all HealthDesk application errors."""

    default_kind: FailureKind = FailureKind.BACKEND
    default_step: IngestionStep | None = None

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        kind: FailureKind | None = None,
        step: IngestionStep | None = None,
    ) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
            kind: Failure category (defaults to the class default)
            step: Ingestion step (defaults to the class default)
        """
        self.message = message
        self.details = details or {}
        self.kind = kind or self.default_kind
        self.step = step or self.default_step
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ValidationError(HealthDeskException):
    """Raised when input validation fails."""

    default_kind = FailureKind.VALIDATION
    default_step = IngestionStep.VALIDATE

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class DocumentTooLargeError(ValidationError):
    """Raised when an upload exceeds the configured byte ceiling."""

    def __init__(self, size_bytes: int, limit_bytes: int) -> None:
        limit_mb = limit_bytes // (1024 * 1024)
        super().__init__(
            f"File size exceeds {limit_mb}MB limit",
            field="file",
            details={"size_bytes": size_bytes, "limit_bytes": limit_bytes},
        )


class ExtractionError(HealthDeskException):
    """Raised when text cannot be extracted from an uploaded document."""

    default_kind = FailureKind.FORMAT
    default_step = IngestionStep.EXTRACT

    def __init__(
        self,
        message: str,
        filename: str | None = None,
        file_type: str | None = None,
        kind: FailureKind | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize extraction error.

        Args:
            message: Error message
            filename: Name of the uploaded file
            file_type: MIME type or extension that failed
            kind: FORMAT for unsupported/unreadable input, VALIDATION for empty text
            details: Additional context
        """
        details = details or {}
        if filename:
            details["filename"] = filename
        if file_type:
            details["file_type"] = file_type
        super().__init__(message, details, kind=kind)


class ChunkingError(HealthDeskException):
    """Raised when chunking produces no usable chunks."""

    default_kind = FailureKind.VALIDATION
    default_step = IngestionStep.CHUNK


class EmbeddingError(HealthDeskException):
    """Raised when the embedding model call fails."""

    default_step = IngestionStep.EMBED

    def __init__(
        self,
        message: str,
        kind: FailureKind | None = None,
        batch_index: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if batch_index is not None:
            details["batch_index"] = batch_index
        super().__init__(message, details, kind=kind)


class VectorStoreError(HealthDeskException):
    """Raised when a vector index operation fails."""

    def __init__(
        self,
        message: str,
        operation: str,
        kind: FailureKind | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize vector store error.

        Args:
            message: Error message
            operation: Operation that failed (upsert, query, stats, delete)
            kind: Failure category
            details: Additional context
        """
        details = details or {}
        details["operation"] = operation
        self.operation = operation
        super().__init__(message, details, kind=kind)


class UpsertError(VectorStoreError):
    """Raised when an upsert batch is rejected; later batches are not sent."""

    default_step = IngestionStep.UPSERT

    def __init__(
        self,
        message: str,
        batch_index: int,
        kind: FailureKind | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        details["batch_index"] = batch_index
        self.batch_index = batch_index
        super().__init__(message, operation="upsert", kind=kind, details=details)


class RetrievalError(HealthDeskException):
    """Raised when a retrieval backend fails to answer a query."""

    def __init__(
        self,
        message: str,
        backend: str | None = None,
        kind: FailureKind | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if backend:
            details["backend"] = backend
        super().__init__(message, details, kind=kind)


class UnknownToolError(HealthDeskException):
    """Raised when a tool name is not registered."""

    default_kind = FailureKind.NOT_FOUND

    def __init__(self, tool_name: str, available_tools: list[str]) -> None:
        self.tool_name = tool_name
        self.available_tools = available_tools
        super().__init__(
            f"Unknown tool: {tool_name}",
            {"tool": tool_name, "available_tools": available_tools},
        )


class IngestionTimeoutError(HealthDeskException):
    """Raised when ingestion exceeds its processing-time budget."""

    default_kind = FailureKind.TIMEOUT

    def __init__(self, timeout_seconds: float, filename: str | None = None) -> None:
        details: dict[str, Any] = {"timeout_seconds": timeout_seconds}
        if filename:
            details["filename"] = filename
        super().__init__(
            f"Document processing exceeded {timeout_seconds:g} seconds",
            details,
        )
