"""
FastAPI application entry point.

Initializes FastAPI app, registers routers, adds middleware, and configures lifespan.

Dependencies: fastapi, healthdesk.api, healthdesk.observability, healthdesk.configs
System role: Application initialization and configuration
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware

from healthdesk.api import api_router
from healthdesk.api.deps import ServiceCache
from healthdesk.api.errors import register_exception_handlers
from healthdesk.api.routers import mcp_router
from healthdesk.configs import get_settings
from healthdesk.core.exceptions import HealthDeskException
from healthdesk.observability.logger import configure_logging
from healthdesk.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Builds shared services once and runs the one-time session start-up clear.
    """
    services: ServiceCache = app.state.services
    configure_logging(services.settings.log_level)
    logger.info("Application startup: logging configured")

    try:
        await run_in_threadpool(services.warm)
    except Exception as e:
        logger.exception("Failed to initialize application services", extra={"error": str(e)})
        raise

    try:
        await run_in_threadpool(services.session_manager.ensure_initialized)
    except HealthDeskException as e:
        # Session can still be initialized later through POST /api/session
        logger.error("Session start-up clear failed", extra={"error": str(e)})
    except Exception as e:
        logger.exception("Session start-up clear failed unexpectedly", extra={"error": str(e)})

    logger.info(
        "Application startup complete",
        extra={"session_id": services.session_manager.session_id},
    )

    yield

    logger.info("Application shutdown")


def create_app(services: ServiceCache | None = None) -> FastAPI:
    """
    Create and configure FastAPI application.

    Args:
        services: Service container (built from environment settings if None)

    Returns:
        FastAPI: Configured application instance
    """
    app = FastAPI(
        title="HealthDesk API",
        description="Healthcare assistant document ingestion, retrieval and tool calls",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.services = services or ServiceCache(get_settings())
    settings = app.state.services.settings

    # Observability middleware (added first = last to execute)
    app.add_middleware(CorrelationMiddleware)
    app.add_middleware(RequestLoggingMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=False,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(api_router, prefix="/api")
    # Catch-all /{transport} must come after /api routes
    app.include_router(mcp_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "healthdesk.main:app",
        host=settings.host,
        port=settings.port,
    )
