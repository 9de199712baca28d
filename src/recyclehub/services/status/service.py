"""Status service for order and payment status lookups.

Statuses are configured by administrators in the database; the service
resolves names to records and builds display payloads for the UI. Store
failures are logged and degrade to "not found" so a broken lookup never
breaks the page rendering the status.
"""

from __future__ import annotations

import asyncpg

from recyclehub.database.connection import DatabaseNotInitializedError
from recyclehub.database.repositories.status import StatusRecord, StatusRepository
from recyclehub.observability.logging import get_logger
from recyclehub.schemas.status import DEFAULT_STATUS_COLOR, StatusDisplay, StatusKind


logger = get_logger(__name__)

# Failures that mean "the store is unavailable" rather than a programming error
_STORE_ERRORS = (
    asyncpg.PostgresError,
    asyncpg.InterfaceError,
    OSError,
    DatabaseNotInitializedError,
)


class StatusService:
    """Service for looking up and displaying order and payment statuses."""

    def __init__(self, repository: StatusRepository | None = None) -> None:
        """Initialize the status service.

        Args:
            repository: Status repository. Defaults to one on the global pool.
        """
        self._repository = repository or StatusRepository()

    async def get_status(self, kind: StatusKind, name: str) -> StatusRecord | None:
        """Get an active status by name, or None if unknown or unavailable."""
        try:
            return await self._repository.get_active_by_name(kind, name)
        except _STORE_ERRORS:
            logger.exception("Status lookup failed", kind=str(kind), status_name=name)
            return None

    async def list_statuses(self, kind: StatusKind) -> list[StatusRecord]:
        """List active statuses in display order."""
        try:
            return await self._repository.list_active(kind)
        except _STORE_ERRORS:
            logger.exception("Status listing failed", kind=str(kind))
            return []

    async def get_default_status(self, kind: StatusKind) -> StatusRecord | None:
        """Get the default status assigned to new orders or payments."""
        try:
            return await self._repository.get_default(kind)
        except _STORE_ERRORS:
            logger.exception("Default status lookup failed", kind=str(kind))
            return None

    async def validate_status(self, kind: StatusKind, name: str) -> bool:
        """Check that ``name`` is an active status of the given kind."""
        return await self.get_status(kind, name) is not None

    async def get_status_for_display(
        self,
        kind: StatusKind,
        name: str,
    ) -> StatusDisplay:
        """Build the display payload for a status.

        Unknown names are echoed back as their own label with the neutral
        grey colour, so callers can always render something.
        """
        status = await self.get_status(kind, name)
        if status is None:
            return StatusDisplay(name=name, label=name, color=DEFAULT_STATUS_COLOR)

        return StatusDisplay(
            name=status.name,
            label=status.label,
            color=status.color,
            description=status.description,
        )

    # -------------------------------------------------------------------------
    # Order / payment shortcuts
    # -------------------------------------------------------------------------

    async def get_order_status(self, name: str) -> StatusRecord | None:
        return await self.get_status(StatusKind.ORDER, name)

    async def get_payment_status(self, name: str) -> StatusRecord | None:
        return await self.get_status(StatusKind.PAYMENT, name)

    async def get_all_order_statuses(self) -> list[StatusRecord]:
        return await self.list_statuses(StatusKind.ORDER)

    async def get_all_payment_statuses(self) -> list[StatusRecord]:
        return await self.list_statuses(StatusKind.PAYMENT)

    async def get_default_order_status(self) -> StatusRecord | None:
        return await self.get_default_status(StatusKind.ORDER)

    async def get_default_payment_status(self) -> StatusRecord | None:
        return await self.get_default_status(StatusKind.PAYMENT)

    async def validate_order_status(self, name: str) -> bool:
        return await self.validate_status(StatusKind.ORDER, name)

    async def validate_payment_status(self, name: str) -> bool:
        return await self.validate_status(StatusKind.PAYMENT, name)

    async def get_order_status_for_display(self, name: str) -> StatusDisplay:
        return await self.get_status_for_display(StatusKind.ORDER, name)

    async def get_payment_status_for_display(self, name: str) -> StatusDisplay:
        return await self.get_status_for_display(StatusKind.PAYMENT, name)
