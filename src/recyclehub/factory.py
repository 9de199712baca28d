"""Application factory for creating FastAPI instances.

This module provides the create_app factory function that:
- Configures the FastAPI application with appropriate settings
- Sets up the middleware stack in the correct order
- Registers exception handlers
- Mounts API routers
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from recyclehub.api.v1.router import router as v1_router
from recyclehub.core.config import Settings, get_settings
from recyclehub.core.events import lifespan
from recyclehub.core.exceptions import setup_exception_handlers
from recyclehub.core.middleware import (
    REQUEST_ID_HEADER,
    LoggingMiddleware,
    RequestIDMiddleware,
)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure a FastAPI application instance.

    Args:
        settings: Optional settings override. If not provided, uses get_settings().

    Returns:
        Configured FastAPI application instance.
    """
    if settings is None:
        settings = get_settings()

    app = FastAPI(
        title=settings.app.name,
        version=settings.app.version,
        description="RecycleHub - device recycling marketplace API",
        lifespan=lifespan,
        docs_url="/docs" if not settings.is_production else None,
        redoc_url="/redoc" if not settings.is_production else None,
        openapi_url="/openapi.json" if not settings.is_production else None,
        debug=settings.app.debug,
    )

    app.state.settings = settings
    app.state.status_service = None

    setup_exception_handlers(app)
    _setup_middleware(app, settings)
    _setup_routers(app, settings)

    return app


def _setup_middleware(app: FastAPI, settings: Settings) -> None:
    """Configure middleware stack.

    Middleware runs in reverse order of addition, so on a request the
    request ID is assigned first, then the request is logged, then the
    response is compressed and CORS headers are applied.
    """
    if settings.api.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.api.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
            expose_headers=[REQUEST_ID_HEADER],
        )

    app.add_middleware(GZipMiddleware, minimum_size=1000)

    app.add_middleware(
        LoggingMiddleware,
        exclude_paths={
            f"{settings.api.v1_prefix}/health",
            f"{settings.api.v1_prefix}/ready",
            "/favicon.ico",
        },
    )

    app.add_middleware(RequestIDMiddleware)


def _setup_routers(app: FastAPI, settings: Settings) -> None:
    """Mount API routers."""
    app.include_router(v1_router, prefix=settings.api.v1_prefix)

    @app.get("/", include_in_schema=False)
    async def root() -> dict[str, str]:
        """Root endpoint returning basic service info."""
        return {
            "service": settings.app.name,
            "version": settings.app.version,
            "docs": "/docs" if not settings.is_production else "disabled",
        }
