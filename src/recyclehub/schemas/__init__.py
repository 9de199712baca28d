"""Pydantic schemas for request/response validation."""

from recyclehub.schemas.base import APIRequest, APIResponse
from recyclehub.schemas.pagination import (
    CursorPaginationMeta,
    PaginationLinks,
    PaginationMeta,
    PaginationParams,
)
from recyclehub.schemas.response import (
    ErrorDetail,
    ErrorResponse,
    PaginatedResponse,
    SuccessResponse,
)
from recyclehub.schemas.status import StatusDisplay, StatusKind, StatusSummary


__all__ = [
    "APIRequest",
    "APIResponse",
    "CursorPaginationMeta",
    "ErrorDetail",
    "ErrorResponse",
    "PaginatedResponse",
    "PaginationLinks",
    "PaginationMeta",
    "PaginationParams",
    "StatusDisplay",
    "StatusKind",
    "StatusSummary",
    "SuccessResponse",
]
