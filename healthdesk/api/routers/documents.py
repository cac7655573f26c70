"""
Document upload API endpoints.

Routes:
- POST /upload - Pipeline for the first retrieval backend (vector index by default)
- POST /upload-vectorize - Window chunks -> Vectorize.io file connector
- POST /upload-pinecone - Word chunks -> embeddings -> vector index

Ingestion runs in an executor thread under a processing-time budget; on
timeout the request returns 504 while the thread finishes in the background.

Dependencies: healthdesk.core.document_processing, healthdesk.api.errors
System role: Document ingestion HTTP API
"""

import asyncio
import logging
import time

from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.responses import JSONResponse

from healthdesk.api.deps import (
    get_default_pipeline,
    get_settings_dependency,
    get_vector_pipeline,
    get_vectorize_pipeline,
)
from healthdesk.api.errors import remediation_message, status_for
from healthdesk.configs import Settings
from healthdesk.core.document_processing import DocumentPipeline, UploadedDocument
from healthdesk.core.exceptions import HealthDeskException, IngestionTimeoutError
from healthdesk.models.document import UploadErrorResponse, UploadResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["documents"])

_ERROR_RESPONSES = {
    400: {"model": UploadErrorResponse},
    413: {"model": UploadErrorResponse},
    500: {"model": UploadErrorResponse},
    504: {"model": UploadErrorResponse},
}


def _error(status_code: int, message: str, started_at: float | None = None) -> JSONResponse:
    body = UploadErrorResponse(
        error=message,
        processing_time=round(time.perf_counter() - started_at) if started_at is not None else None,
    )
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(by_alias=True, exclude_none=True),
    )


async def handle_upload(
    file: UploadFile | None,
    pipeline: DocumentPipeline,
    settings: Settings,
) -> UploadResponse | JSONResponse:
    """
    Run one upload through a pipeline and shape the HTTP response.

    Args:
        file: Multipart file (None when the field is missing)
        pipeline: Ingestion pipeline for this entry point
        settings: Application settings (time budget)

    Returns:
        UploadResponse on success, JSONResponse with {error} otherwise
    """
    started_at = time.perf_counter()
    if file is None or not file.filename:
        return _error(400, "No file uploaded")

    content = await file.read()
    document = UploadedDocument(
        filename=file.filename,
        content=content,
        mime_type=file.content_type or "",
    )
    timeout = settings.ingestion.processing_timeout_seconds

    logger.info(
        "Processing upload",
        extra={
            "document_name": file.filename,
            "size_bytes": len(content),
            "content_type": file.content_type,
            "sink": pipeline.sink_name,
        },
    )

    try:
        try:
            loop = asyncio.get_running_loop()
            result = await asyncio.wait_for(
                loop.run_in_executor(None, pipeline.ingest, document),
                timeout=timeout,
            )
        except asyncio.TimeoutError as e:
            raise IngestionTimeoutError(timeout, filename=file.filename) from e
    except HealthDeskException as e:
        logger.error(
            "Upload failed",
            extra={
                "document_name": file.filename,
                "kind": e.kind.value,
                "step": e.step.value if e.step else None,
                "error": str(e),
            },
        )
        return _error(status_for(e), remediation_message(e), started_at)
    except Exception as e:
        logger.exception("Upload failed unexpectedly", extra={"document_name": file.filename})
        return _error(500, str(e) or "Upload failed", started_at)

    return UploadResponse(
        message=f"Successfully uploaded {file.filename}",
        chunks=result.chunk_count,
        characters=result.char_count,
        processing_time=round(time.perf_counter() - started_at),
    )


@router.post("/upload", response_model=UploadResponse, responses=_ERROR_RESPONSES)
async def upload_document(
    file: UploadFile | None = File(default=None),
    pipeline: DocumentPipeline = Depends(get_default_pipeline),
    settings: Settings = Depends(get_settings_dependency),
):
    """Upload a document to the store that retrieval queries first."""
    return await handle_upload(file, pipeline, settings)


@router.post("/upload-vectorize", response_model=UploadResponse, responses=_ERROR_RESPONSES)
async def upload_document_vectorize(
    file: UploadFile | None = File(default=None),
    pipeline: DocumentPipeline = Depends(get_vectorize_pipeline),
    settings: Settings = Depends(get_settings_dependency),
):
    """Upload a document to the Vectorize.io pipeline."""
    return await handle_upload(file, pipeline, settings)


@router.post("/upload-pinecone", response_model=UploadResponse, responses=_ERROR_RESPONSES)
async def upload_document_pinecone(
    file: UploadFile | None = File(default=None),
    pipeline: DocumentPipeline = Depends(get_vector_pipeline),
    settings: Settings = Depends(get_settings_dependency),
):
    """Upload a document to the embedding vector index."""
    return await handle_upload(file, pipeline, settings)
