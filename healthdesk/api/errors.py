"""
HTTP error mapping.

Chooses status codes and user-facing remediation text from the
FailureKind and IngestionStep carried by HealthDeskException.

Dependencies: fastapi, healthdesk.core.exceptions
System role: Single place where domain errors become HTTP responses
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from healthdesk.core.exceptions import (
    DocumentTooLargeError,
    FailureKind,
    HealthDeskException,
    IngestionStep,
)

logger = logging.getLogger(__name__)

_STATUS_BY_KIND = {
    FailureKind.VALIDATION: 400,
    FailureKind.FORMAT: 400,
    FailureKind.NOT_FOUND: 404,
    FailureKind.TIMEOUT: 504,
    FailureKind.CREDENTIALS: 500,
    FailureKind.BACKEND: 500,
}


def status_for(exc: HealthDeskException) -> int:
    if isinstance(exc, DocumentTooLargeError):
        return 413
    return _STATUS_BY_KIND.get(exc.kind, 500)


def remediation_message(exc: HealthDeskException) -> str:
    """User-facing message for a failure, chosen by kind and step."""
    if exc.kind == FailureKind.TIMEOUT:
        return "Upload timed out. Please try with a smaller file or contact support."

    if exc.step == IngestionStep.EMBED:
        if exc.kind == FailureKind.CREDENTIALS:
            return "Embedding service rejected the request. Check the OpenAI API key."
        return "Failed to generate embeddings. Please try again."

    if exc.step == IngestionStep.UPSERT:
        if exc.kind == FailureKind.CREDENTIALS:
            return "Vector database rejected the request. Check the vector store API key."
        return "Failed to upload to vector database. Please try again."

    return exc.message


async def healthdesk_exception_handler(request: Request, exc: HealthDeskException) -> JSONResponse:
    status_code = status_for(exc)
    logger.error(
        "Request failed",
        extra={
            "path": request.url.path,
            "status_code": status_code,
            "kind": exc.kind.value,
            "error": str(exc),
        },
    )
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": remediation_message(exc)},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(HealthDeskException, healthdesk_exception_handler)
