"""Order and payment status schemas."""

from __future__ import annotations

from enum import StrEnum

from pydantic import Field

from recyclehub.schemas.base import APIResponse


DEFAULT_STATUS_COLOR = "#6B7280"


class StatusKind(StrEnum):
    """Families of statuses tracked by the marketplace."""

    ORDER = "order"
    PAYMENT = "payment"


class StatusDisplay(APIResponse):
    """Presentation payload for rendering a status badge."""

    name: str = Field(..., description="Status name", examples=["device_received"])
    label: str = Field(..., description="Human readable label")
    color: str = Field(default=DEFAULT_STATUS_COLOR, description="Badge colour")
    description: str | None = None


class StatusSummary(APIResponse):
    """Status as exposed by listing endpoints."""

    name: str
    label: str
    description: str | None = None
    color: str = DEFAULT_STATUS_COLOR
    email_message: str | None = None
    next_steps: str | None = None
    display_order: int = 0
    is_default: bool = False
