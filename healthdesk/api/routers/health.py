"""
Health check API endpoints.

Routes: GET /health, GET /health/vector-store

Dependencies: healthdesk.api.deps
System role: Health check HTTP API
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from healthdesk.api.deps import get_vector_store_client
from healthdesk.boundary.vdb.vector_store_client import VectorStoreClient
from healthdesk.core.exceptions import HealthDeskException

logger = logging.getLogger(__name__)


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    message: str


router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Basic health check."""
    return HealthResponse(status="healthy", message="Server Healthy")


@router.get("/vector-store", response_model=HealthResponse)
async def health_check_vector_store(
    store: VectorStoreClient = Depends(get_vector_store_client),
):
    """Vector store health check with live document count."""
    try:
        count = await run_in_threadpool(store.document_count)
    except HealthDeskException as e:
        logger.warning("Vector store health check failed", extra={"error": str(e)})
        return JSONResponse(
            status_code=503,
            content={"status": "unhealthy", "message": e.message},
        )
    return HealthResponse(status="healthy", message=f"Vector store accessible ({count} documents)")
