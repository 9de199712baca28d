"""Standard JSON response envelope.

Every endpoint answers with the same outer shape::

    {"success": true, "message": "Success", "data": ..., "timestamp": "..."}

Listing endpoints add a ``pagination`` object; failures set ``success`` to
false and carry an ``error`` code instead of ``data``.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Generic, Literal, TypeVar

from pydantic import Field

from recyclehub.schemas.base import APIResponse
from recyclehub.schemas.pagination import PaginationMeta


T = TypeVar("T")


def _utcnow() -> datetime:
    return datetime.now(UTC)


class SuccessResponse(APIResponse, Generic[T]):
    """Successful response carrying a payload."""

    success: Literal[True] = True
    message: str = "Success"
    data: T
    timestamp: datetime = Field(default_factory=_utcnow)


class PaginatedResponse(APIResponse, Generic[T]):
    """Successful response carrying one page of a collection."""

    success: Literal[True] = True
    message: str = "Success"
    data: list[T]
    pagination: PaginationMeta
    timestamp: datetime = Field(default_factory=_utcnow)


class ErrorDetail(APIResponse):
    """Structured error detail, typically one per invalid field."""

    code: str
    message: str
    field: str | None = None


class ErrorResponse(APIResponse):
    """Failed response."""

    success: Literal[False] = False
    error: str
    message: str
    details: list[ErrorDetail] | None = None
    request_id: str | None = None
    timestamp: datetime = Field(default_factory=_utcnow)
