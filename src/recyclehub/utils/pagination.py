"""Pagination helpers for listing endpoints.

Pure functions over page numbers, limits and totals. Defaults and the
maximum page size come from the ``pagination`` settings section.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Any, TypeVar
from urllib.parse import urlencode

from recyclehub.core.config import get_settings
from recyclehub.schemas.pagination import (
    CursorPaginationMeta,
    PaginationLinks,
    PaginationMeta,
    PaginationParams,
)


if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence


T = TypeVar("T")

ELLIPSIS_MARKER = "..."


def _to_positive_int(value: Any) -> int | None:
    """Parse a raw query value, returning None when it is not a positive int."""
    if value is None or isinstance(value, bool):
        return None
    try:
        parsed = int(str(value).strip())
    except ValueError:
        return None
    return parsed if parsed > 0 else None


def get_pagination_params(page: Any = None, limit: Any = None) -> PaginationParams:
    """Resolve raw ``page``/``limit`` query values.

    Missing, unparsable or non-positive values fall back to the configured
    defaults, and ``limit`` is capped at the configured maximum.
    """
    config = get_settings().pagination
    resolved_page = _to_positive_int(page) or config.default_page
    resolved_limit = min(
        _to_positive_int(limit) or config.default_limit,
        config.max_limit,
    )
    return PaginationParams(
        page=resolved_page,
        limit=resolved_limit,
        skip=calculate_offset(resolved_page, resolved_limit),
    )


def calculate_offset(page: int, limit: int) -> int:
    """Number of rows to skip to reach ``page``."""
    return (page - 1) * limit


def create_pagination_meta(total: int, page: int, limit: int) -> PaginationMeta:
    """Build pagination metadata for a page of ``limit`` items out of ``total``."""
    total_pages = math.ceil(total / limit) if limit > 0 else 0
    has_next_page = page < total_pages
    has_prev_page = page > 1

    return PaginationMeta(
        total=total,
        page=page,
        limit=limit,
        total_pages=total_pages,
        has_next_page=has_next_page,
        has_prev_page=has_prev_page,
        next_page=page + 1 if has_next_page else None,
        prev_page=page - 1 if has_prev_page else None,
    )


def paginate_results(
    data: Sequence[T],
    total: int,
    page: int,
    limit: int,
) -> dict[str, Any]:
    """Pair a page of data with its pagination metadata."""
    return {
        "data": list(data),
        "pagination": create_pagination_meta(total, page, limit),
    }


def get_pagination_links(
    base_url: str,
    meta: PaginationMeta,
    query: Mapping[str, Any] | None = None,
) -> PaginationLinks:
    """Build self/first/last (and next/prev when they exist) links.

    Extra query parameters are preserved; ``page`` and ``limit`` are always
    overwritten with the values of the target page.
    """
    base_query = {k: v for k, v in (query or {}).items() if k not in ("page", "limit")}

    def build_url(target_page: int) -> str:
        params = {**base_query, "page": target_page, "limit": meta.limit}
        return f"{base_url}?{urlencode(params)}"

    return PaginationLinks(
        self_=build_url(meta.page),
        first=build_url(1),
        last=build_url(max(meta.total_pages, 1)),
        next=build_url(meta.next_page) if meta.next_page else None,
        prev=build_url(meta.prev_page) if meta.prev_page else None,
    )


def get_page_range(
    current_page: int,
    total_pages: int,
    delta: int = 2,
) -> list[int | str]:
    """Page numbers to render in a pager, with "..." for skipped runs.

    The first and last pages are always shown, plus ``delta`` pages either
    side of the current one. A gap of exactly one page shows that page
    instead of an ellipsis.

    >>> get_page_range(6, 10)
    [1, '...', 4, 5, 6, 7, 8, 9, 10]
    """
    visible = [
        i
        for i in range(1, total_pages + 1)
        if i in (1, total_pages) or current_page - delta <= i <= current_page + delta
    ]

    result: list[int | str] = []
    previous: int | None = None
    for page in visible:
        if previous is not None:
            if page - previous == 2:
                result.append(previous + 1)
            elif page - previous != 1:
                result.append(ELLIPSIS_MARKER)
        result.append(page)
        previous = page

    return result


def validate_pagination_params(page: int, limit: int) -> tuple[bool, list[str]]:
    """Check explicit page/limit values.

    Returns:
        Tuple of (is_valid, error messages).
    """
    max_limit = get_settings().pagination.max_limit
    errors: list[str] = []

    if page < 1:
        errors.append("Page must be greater than 0")
    if limit < 1:
        errors.append("Limit must be greater than 0")
    if limit > max_limit:
        errors.append(f"Limit cannot exceed {max_limit}")

    return not errors, errors


def create_cursor_pagination(
    items: Sequence[Mapping[str, Any]],
    cursor: str | None,
    limit: int,
    cursor_field: str = "id",
) -> dict[str, Any]:
    """Cursor pagination over a result fetched with ``limit + 1`` rows.

    The extra row only signals that another page exists and is not returned.
    """
    has_more = len(items) > limit
    results = list(items[:limit]) if has_more else list(items)
    next_cursor = str(results[-1][cursor_field]) if has_more and results else None

    return {
        "data": results,
        "pagination": CursorPaginationMeta(
            cursor=cursor,
            next_cursor=next_cursor,
            has_more=has_more,
            limit=limit,
        ),
    }
