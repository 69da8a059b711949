"""
FastAPI application with assembled routers.

Initializes FastAPI app with all API routers and configures uvicorn server.

Dependencies: fastapi, firefli.api.routers, uvicorn
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from firefli.api.deps.dependencies import get_service_cache
from firefli.configs import get_settings
from firefli.observability import configure_logging
from firefli.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware
from .routers import activity_router, cron_router, health_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Configures logging on startup; drains background deliveries and
    closes outbound HTTP connections on shutdown.
    """
    configure_logging(get_settings().log_level)
    logger = logging.getLogger(__name__)

    cache = get_service_cache()
    _ = cache.http_client
    logger.info("Service cache pre-warmed")

    yield

    await cache.aclose()
    logger.info("Service cache closed")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    app = FastAPI(
        title="Firefli Session Core",
        description="Session lifecycle reconciliation, activity ingestion and Discord notifications",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Add observability middleware
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    # Register all routers with /api/v1 prefix for versioning
    app.include_router(health_router, prefix="/api/v1")
    app.include_router(cron_router, prefix="/api/v1")
    app.include_router(activity_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "firefli.api.main:app",
        host="0.0.0.0",
        port=8000,
    )
