"""asyncpg pool backing the status tables.

The lifespan opens one pool per process and repositories borrow
connections from it. Every connection starts with ``search_path`` set to
the configured schema, so queries name ``order_statuses`` and
``payment_statuses`` unqualified.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Final

import asyncpg

from recyclehub.core.config import get_settings
from recyclehub.observability.logging import get_logger


if TYPE_CHECKING:
    from collections.abc import Iterable

    from asyncpg import Pool

    from recyclehub.core.config import Settings

logger = get_logger(__name__)

_pool: Pool | None = None

# Tables from the given list that do not exist on the search_path
_MISSING_TABLES_QUERY: Final[str] = (
    "SELECT name FROM unnest($1::text[]) AS name WHERE to_regclass(name) IS NULL"
)


class DatabaseNotInitializedError(RuntimeError):
    """Raised when the pool is used before startup opened it."""


def _pool_options(settings: Settings) -> dict[str, Any]:
    """Translate the ``database`` settings section into create_pool arguments."""
    db = settings.database
    return {
        "host": db.host,
        "port": db.port,
        "database": db.name,
        "user": db.user,
        "password": settings.DATABASE_PASSWORD or None,
        "min_size": db.min_pool_size,
        "max_size": db.max_pool_size,
        "command_timeout": db.command_timeout,
        "ssl": "require" if db.ssl else None,
        "server_settings": {
            "search_path": db.db_schema,
            "application_name": settings.app.name,
        },
    }


async def init_database_pool(settings: Settings | None = None) -> None:
    """Open the pool and make sure the server answers.

    Raises:
        asyncpg.PostgresError, OSError: If the server cannot be reached. The
            half-opened pool is closed before re-raising.
    """
    global _pool  # noqa: PLW0603

    settings = settings or get_settings()
    options = _pool_options(settings)

    logger.info(
        "Opening status database pool",
        host=options["host"],
        database=options["database"],
        schema=settings.database.db_schema,
        pool_size=f"{options['min_size']}-{options['max_size']}",
    )

    pool = await asyncpg.create_pool(**options)
    try:
        async with pool.acquire() as conn:
            await conn.fetchval("SELECT 1")
    except (asyncpg.PostgresError, OSError):
        logger.exception("Status database did not answer")
        await pool.close()
        raise

    _pool = pool


async def close_database_pool() -> None:
    """Close the pool if it is open. Safe to call more than once."""
    global _pool  # noqa: PLW0603

    pool, _pool = _pool, None
    if pool is not None:
        await pool.close()
        logger.info("Status database pool closed")


def get_database_pool() -> Pool:
    """Return the open pool.

    Raises:
        DatabaseNotInitializedError: Before ``init_database_pool`` succeeded.
    """
    if _pool is None:
        msg = "Database pool not initialized; the database was unreachable at startup"
        raise DatabaseNotInitializedError(msg)
    return _pool


async def check_database_health(required_tables: Iterable[str] = ()) -> dict[str, str]:
    """Readiness probe for the database.

    Reports ``healthy`` only when the server answers and every table in
    ``required_tables`` exists, ``missing_tables`` when the server answers
    but some table is absent, ``unhealthy`` when the query fails and
    ``not_initialized`` when startup never opened the pool.
    """
    if _pool is None:
        return {"database": "not_initialized"}

    try:
        async with _pool.acquire() as conn:
            missing = await conn.fetch(_MISSING_TABLES_QUERY, list(required_tables))
    except (asyncpg.PostgresError, OSError):
        logger.warning("Database health check failed")
        return {"database": "unhealthy"}

    if missing:
        logger.warning(
            "Status tables missing",
            tables=[row["name"] for row in missing],
        )
        return {"database": "missing_tables"}

    return {"database": "healthy"}
