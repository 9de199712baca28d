"""Application lifespan event handlers.

Startup configures logging, opens the database pool and builds the status
service; shutdown closes the pool. The database is optional at startup:
without it status lookups degrade to their fallbacks.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import asyncpg

from recyclehub.core.config import Settings, get_settings
from recyclehub.database.connection import close_database_pool, init_database_pool
from recyclehub.observability.logging import get_logger, setup_logging
from recyclehub.services.status.service import StatusService


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from fastapi import FastAPI

logger = get_logger(__name__)


async def _startup(app: FastAPI, settings: Settings) -> None:
    """Initialize all application services during startup."""
    setup_logging(settings.logging, is_development=settings.is_development)

    logger.info(
        "Starting application",
        app_name=settings.app.name,
        environment=settings.APP_ENV,
        debug=settings.app.debug,
    )

    await _init_database(settings)

    app.state.status_service = StatusService()
    logger.info("Application startup complete")


async def _init_database(settings: Settings) -> None:
    """Open the database pool, continuing without it on failure."""
    try:
        await init_database_pool(settings)
    except (asyncpg.PostgresError, OSError):
        logger.exception("Failed to initialize database - status lookups degraded")


async def _shutdown(app: FastAPI) -> None:
    """Shutdown all application services."""
    logger.info("Shutting down application")
    app.state.status_service = None
    await close_database_pool()
    logger.info("Application shutdown complete")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application lifespan events.

    Args:
        app: The FastAPI application instance.

    Yields:
        None - control returns to the application to handle requests.
    """
    settings = get_settings()
    await _startup(app, settings)
    yield
    await _shutdown(app)
