"""API routers."""

from .documents import router as documents_router
from .health import router as health_router
from .mcp import router as mcp_router
from .sessions import router as sessions_router

__all__ = [
    "documents_router",
    "health_router",
    "mcp_router",
    "sessions_router",
]
