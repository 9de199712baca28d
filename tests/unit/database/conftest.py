"""Database unit test fixtures."""

from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import AsyncMock, MagicMock

import pytest

import recyclehub.database.connection as db_module


if TYPE_CHECKING:
    from collections.abc import Generator

pytestmark = pytest.mark.unit


@pytest.fixture(autouse=True)
def reset_database_globals() -> Generator[None]:
    """Reset database global state before and after each test."""
    db_module._pool = None
    yield
    db_module._pool = None


@pytest.fixture
def mock_conn() -> AsyncMock:
    """Create a mock asyncpg connection."""
    conn = AsyncMock()
    conn.fetchval = AsyncMock(return_value=1)
    conn.fetchrow = AsyncMock(return_value=None)
    conn.fetch = AsyncMock(return_value=[])
    return conn


@pytest.fixture
def mock_pool(mock_conn: AsyncMock) -> MagicMock:
    """Create a mock asyncpg pool handing out ``mock_conn``."""
    pool = MagicMock()
    pool.close = AsyncMock()

    pool.acquire = MagicMock(return_value=AsyncMock())
    pool.acquire.return_value.__aenter__ = AsyncMock(return_value=mock_conn)
    pool.acquire.return_value.__aexit__ = AsyncMock(return_value=None)

    return pool


@pytest.fixture
def mock_db_settings() -> MagicMock:
    """Create mock settings with a database section."""
    mock_settings = MagicMock()
    mock_settings.database.host = "localhost"
    mock_settings.database.port = 5432
    mock_settings.database.name = "test"
    mock_settings.database.db_schema = "recyclehub"
    mock_settings.database.user = "postgres"
    mock_settings.database.min_pool_size = 1
    mock_settings.database.max_pool_size = 5
    mock_settings.database.command_timeout = 30.0
    mock_settings.database.ssl = False
    mock_settings.app.name = "recyclehub-service"
    mock_settings.DATABASE_PASSWORD = ""
    return mock_settings
