"""API-specific dependencies."""

from .dependencies import (
    ServiceCache,
    get_default_pipeline,
    get_jsonrpc_server,
    get_service_cache,
    get_session_manager,
    get_settings_dependency,
    get_tool_registry,
    get_vector_pipeline,
    get_vector_store_client,
    get_vectorize_pipeline,
)

__all__ = [
    "ServiceCache",
    "get_default_pipeline",
    "get_jsonrpc_server",
    "get_service_cache",
    "get_session_manager",
    "get_settings_dependency",
    "get_tool_registry",
    "get_vector_pipeline",
    "get_vector_store_client",
    "get_vectorize_pipeline",
]
