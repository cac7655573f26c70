"""Logging setup and HTTP observability middleware."""

from .logger import configure_logging
from .middleware import CorrelationMiddleware, RequestLoggingMiddleware

__all__ = ["configure_logging", "CorrelationMiddleware", "RequestLoggingMiddleware"]
