"""Order and payment status repository.

Provides data access for the status lookup tables. Both kinds share one
layout, so a single repository serves them, keyed by ``StatusKind``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from pydantic import BaseModel

from recyclehub.database.connection import get_database_pool
from recyclehub.observability.logging import get_logger
from recyclehub.schemas.status import DEFAULT_STATUS_COLOR, StatusKind


if TYPE_CHECKING:
    from asyncpg import Pool, Record

logger = get_logger(__name__)


# =============================================================================
# Data Transfer Objects
# =============================================================================


class StatusRecord(BaseModel):
    """Data transfer object for a stored status."""

    name: str
    label: str
    description: str | None = None
    color: str = DEFAULT_STATUS_COLOR
    email_message: str | None = None
    next_steps: str | None = None
    display_order: int = 0
    is_active: bool = True
    is_default: bool = False


# =============================================================================
# Repository
# =============================================================================


STATUS_TABLES: Final[dict[StatusKind, str]] = {
    StatusKind.ORDER: "order_statuses",
    StatusKind.PAYMENT: "payment_statuses",
}

_STATUS_COLUMNS = """
    name,
    label,
    description,
    color,
    email_message,
    next_steps,
    display_order,
    is_active,
    is_default
"""


class StatusRepository:
    """Repository for order and payment status lookups.

    Uses raw asyncpg queries; only active statuses are ever returned.
    """

    def __init__(self, pool: Pool | None = None) -> None:
        """Initialize repository with optional connection pool.

        Args:
            pool: asyncpg connection pool. If None, uses global pool.
        """
        self._pool = pool

    @property
    def pool(self) -> Pool:
        """Get the database connection pool."""
        if self._pool is not None:
            return self._pool
        return get_database_pool()

    @staticmethod
    def _table(kind: StatusKind) -> str:
        return STATUS_TABLES[StatusKind(kind)]

    async def get_active_by_name(
        self,
        kind: StatusKind,
        name: str,
    ) -> StatusRecord | None:
        """Get an active status by name.

        Args:
            kind: Status family to search.
            name: Status name (case-insensitive, stored lowercase).

        Returns:
            StatusRecord or None if no active status has that name.
        """
        query = (
            f"SELECT {_STATUS_COLUMNS} FROM {self._table(kind)} "  # noqa: S608
            "WHERE name = $1 AND is_active"
        )

        async with self.pool.acquire() as conn:
            row = await conn.fetchrow(query, name.strip().lower())

        if row is None:
            return None
        return self._row_to_status(row)

    async def list_active(self, kind: StatusKind) -> list[StatusRecord]:
        """List active statuses ordered by display order, then name."""
        query = (
            f"SELECT {_STATUS_COLUMNS} FROM {self._table(kind)} "  # noqa: S608
            "WHERE is_active ORDER BY display_order, name"
        )

        async with self.pool.acquire() as conn:
            rows = await conn.fetch(query)

        return [self._row_to_status(row) for row in rows]

    async def get_default(self, kind: StatusKind) -> StatusRecord | None:
        """Get the active status flagged as default for new records."""
        query = (
            f"SELECT {_STATUS_COLUMNS} FROM {self._table(kind)} "  # noqa: S608
            "WHERE is_default AND is_active ORDER BY display_order, name LIMIT 1"
        )

        async with self.pool.acquire() as conn:
            row = await conn.fetchrow(query)

        if row is None:
            logger.debug("No default status configured", kind=str(kind))
            return None
        return self._row_to_status(row)

    def _row_to_status(self, row: Record) -> StatusRecord:
        """Convert database row to StatusRecord."""
        return StatusRecord(
            name=row["name"],
            label=row["label"],
            description=row["description"],
            color=row["color"] or DEFAULT_STATUS_COLOR,
            email_message=row["email_message"],
            next_steps=row["next_steps"],
            display_order=row["display_order"] or 0,
            is_active=row["is_active"],
            is_default=row["is_default"],
        )
