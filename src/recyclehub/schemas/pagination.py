"""Pagination schemas shared by listing endpoints."""

from __future__ import annotations

from pydantic import Field

from recyclehub.schemas.base import APIResponse


class PaginationParams(APIResponse):
    """Resolved page/limit pair plus the number of rows to skip."""

    page: int = Field(..., ge=1)
    limit: int = Field(..., ge=1)
    skip: int = Field(..., ge=0)


class PaginationMeta(APIResponse):
    """Pagination metadata returned alongside a page of results."""

    total: int = Field(..., ge=0, description="Total number of items")
    page: int = Field(..., description="Current page number")
    limit: int = Field(..., description="Items per page")
    total_pages: int = Field(..., description="Number of pages")
    has_next_page: bool
    has_prev_page: bool
    next_page: int | None = None
    prev_page: int | None = None


class PaginationLinks(APIResponse):
    """Navigation links for a paginated resource."""

    self_: str = Field(..., alias="self")
    first: str
    last: str
    next: str | None = None
    prev: str | None = None


class CursorPaginationMeta(APIResponse):
    """Cursor-based pagination metadata for large collections."""

    cursor: str | None = None
    next_cursor: str | None = None
    has_more: bool
    limit: int
