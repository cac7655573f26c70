"""
API routes module.

FastAPI routers for all HTTP endpoints under /api. The tool-call transport
router is mounted separately at the root.
"""

from fastapi import APIRouter

from .routers import documents_router, health_router, sessions_router

api_router = APIRouter()

api_router.include_router(health_router)
api_router.include_router(sessions_router)
api_router.include_router(documents_router)

__all__ = ["api_router"]
