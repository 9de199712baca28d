"""Unit tests for database connection module.

Tests cover:
- Connection pool initialization
- Connection pool closing
- Pool getter
- Health checks
"""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import asyncpg
import pytest

import recyclehub.database.connection as db_module
from recyclehub.database.connection import (
    DatabaseNotInitializedError,
    check_database_health,
    close_database_pool,
    get_database_pool,
    init_database_pool,
)


pytestmark = pytest.mark.unit


class TestGetDatabasePool:
    """Tests for get_database_pool function."""

    def test_raises_when_not_initialized(self) -> None:
        """Should raise DatabaseNotInitializedError when pool not initialized."""
        with pytest.raises(DatabaseNotInitializedError, match="not initialized"):
            get_database_pool()

    def test_returns_pool_when_initialized(self) -> None:
        """Should return pool when initialized."""
        mock_pool = MagicMock()
        db_module._pool = mock_pool

        result = get_database_pool()

        assert result is mock_pool


class TestInitDatabasePool:
    """Tests for init_database_pool function."""

    async def test_initializes_pool(
        self,
        mock_pool: MagicMock,
        mock_db_settings: MagicMock,
    ) -> None:
        """Should initialize the database pool on the configured schema."""
        with (
            patch(
                "recyclehub.database.connection.get_settings",
                return_value=mock_db_settings,
            ),
            patch(
                "recyclehub.database.connection.asyncpg.create_pool",
                new_callable=AsyncMock,
                return_value=mock_pool,
            ) as mock_create,
        ):
            await init_database_pool()

        assert db_module._pool is mock_pool
        kwargs = mock_create.call_args.kwargs
        assert kwargs["server_settings"] == {
            "search_path": "recyclehub",
            "application_name": "recyclehub-service",
        }
        assert kwargs["password"] is None
        assert kwargs["ssl"] is None

    async def test_uses_explicit_settings_and_ssl(
        self,
        mock_pool: MagicMock,
        mock_db_settings: MagicMock,
    ) -> None:
        """Should prefer passed settings over the cached ones."""
        mock_db_settings.database.ssl = True
        mock_db_settings.DATABASE_PASSWORD = "secret"

        with (
            patch("recyclehub.database.connection.get_settings") as mock_get,
            patch(
                "recyclehub.database.connection.asyncpg.create_pool",
                new_callable=AsyncMock,
                return_value=mock_pool,
            ) as mock_create,
        ):
            await init_database_pool(mock_db_settings)

        mock_get.assert_not_called()
        kwargs = mock_create.call_args.kwargs
        assert kwargs["ssl"] == "require"
        assert kwargs["password"] == "secret"

    async def test_verifies_connection(
        self,
        mock_pool: MagicMock,
        mock_conn: AsyncMock,
        mock_db_settings: MagicMock,
    ) -> None:
        """Should verify connection with SELECT 1."""
        with (
            patch(
                "recyclehub.database.connection.get_settings",
                return_value=mock_db_settings,
            ),
            patch(
                "recyclehub.database.connection.asyncpg.create_pool",
                new_callable=AsyncMock,
                return_value=mock_pool,
            ),
        ):
            await init_database_pool()

        mock_conn.fetchval.assert_called_once_with("SELECT 1")

    async def test_reraises_connection_failure(
        self,
        mock_pool: MagicMock,
        mock_conn: AsyncMock,
        mock_db_settings: MagicMock,
    ) -> None:
        """Should propagate a failing connection check."""
        mock_conn.fetchval.side_effect = asyncpg.PostgresError("boom")

        with (
            patch(
                "recyclehub.database.connection.get_settings",
                return_value=mock_db_settings,
            ),
            patch(
                "recyclehub.database.connection.asyncpg.create_pool",
                new_callable=AsyncMock,
                return_value=mock_pool,
            ),
            pytest.raises(asyncpg.PostgresError),
        ):
            await init_database_pool()

        mock_pool.close.assert_awaited_once()
        assert db_module._pool is None


class TestCloseDatabasePool:
    """Tests for close_database_pool function."""

    async def test_closes_pool(self) -> None:
        """Should close the database pool."""
        mock_pool = AsyncMock()
        db_module._pool = mock_pool

        await close_database_pool()

        mock_pool.close.assert_called_once()
        assert db_module._pool is None

    async def test_handles_none_pool(self) -> None:
        """Should handle None pool gracefully."""
        await close_database_pool()  # Should not raise


class TestCheckDatabaseHealth:
    """Tests for check_database_health function."""

    async def test_returns_healthy_when_connected(self, mock_pool: MagicMock) -> None:
        """Should return healthy status when pool responds."""
        db_module._pool = mock_pool

        result = await check_database_health()

        assert result["database"] == "healthy"

    async def test_returns_not_initialized_when_no_pool(self) -> None:
        """Should return not_initialized when pool is None."""
        result = await check_database_health()

        assert result["database"] == "not_initialized"

    async def test_returns_unhealthy_on_error(self, mock_pool: MagicMock) -> None:
        """Should return unhealthy when the connection fails."""
        mock_pool.acquire.return_value.__aenter__ = AsyncMock(
            side_effect=OSError("Connection refused")
        )
        db_module._pool = mock_pool

        result = await check_database_health()

        assert result["database"] == "unhealthy"

    async def test_passes_required_tables(
        self,
        mock_pool: MagicMock,
        mock_conn: AsyncMock,
    ) -> None:
        """Should ask the server which of the required tables are missing."""
        db_module._pool = mock_pool

        result = await check_database_health(
            iter(("order_statuses", "payment_statuses"))
        )

        assert result["database"] == "healthy"
        assert mock_conn.fetch.call_args.args[1] == [
            "order_statuses",
            "payment_statuses",
        ]

    async def test_reports_missing_tables(
        self,
        mock_pool: MagicMock,
        mock_conn: AsyncMock,
    ) -> None:
        """Should report missing_tables when a status table does not exist."""
        mock_conn.fetch.return_value = [{"name": "payment_statuses"}]
        db_module._pool = mock_pool

        result = await check_database_health(["order_statuses", "payment_statuses"])

        assert result["database"] == "missing_tables"
