"""Unit tests for pagination helpers."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from recyclehub.core.config.settings import PaginationSettings
from recyclehub.utils.pagination import (
    calculate_offset,
    create_cursor_pagination,
    create_pagination_meta,
    get_page_range,
    get_pagination_links,
    get_pagination_params,
    paginate_results,
    validate_pagination_params,
)


pytestmark = pytest.mark.unit


@pytest.fixture
def pagination_settings():
    """Patch settings with known pagination defaults."""
    mock_settings = MagicMock()
    mock_settings.pagination = PaginationSettings(
        default_page=1,
        default_limit=10,
        max_limit=100,
    )
    with patch(
        "recyclehub.utils.pagination.get_settings",
        return_value=mock_settings,
    ):
        yield mock_settings.pagination


class TestGetPaginationParams:
    """Tests for get_pagination_params."""

    def test_defaults(self, pagination_settings) -> None:
        """Should use configured defaults when nothing is given."""
        params = get_pagination_params()

        assert params.page == 1
        assert params.limit == 10
        assert params.skip == 0

    def test_parses_strings(self, pagination_settings) -> None:
        """Should parse query string values."""
        params = get_pagination_params(" 3 ", "25")

        assert params.page == 3
        assert params.limit == 25
        assert params.skip == 50

    @pytest.mark.parametrize("raw", ["abc", "0", "-4", "1.5", True])
    def test_invalid_values_fall_back(self, pagination_settings, raw) -> None:
        """Should fall back to defaults for unusable values."""
        params = get_pagination_params(raw, raw)

        assert params.page == 1
        assert params.limit == 10

    def test_caps_limit(self, pagination_settings) -> None:
        """Should cap the limit at the configured maximum."""
        params = get_pagination_params(2, 1000)

        assert params.limit == 100
        assert params.skip == 100


class TestCalculateOffset:
    """Tests for calculate_offset."""

    @pytest.mark.parametrize(
        ("page", "limit", "expected"),
        [(1, 10, 0), (2, 10, 10), (5, 20, 80)],
    )
    def test_offset(self, page: int, limit: int, expected: int) -> None:
        """Should skip the rows of all previous pages."""
        assert calculate_offset(page, limit) == expected


class TestCreatePaginationMeta:
    """Tests for create_pagination_meta."""

    def test_middle_page(self) -> None:
        """Should report both neighbours on a middle page."""
        meta = create_pagination_meta(total=45, page=2, limit=10)

        assert meta.total_pages == 5
        assert meta.has_next_page is True
        assert meta.has_prev_page is True
        assert meta.next_page == 3
        assert meta.prev_page == 1

    def test_last_page(self) -> None:
        """Should report no next page on the last page."""
        meta = create_pagination_meta(total=45, page=5, limit=10)

        assert meta.has_next_page is False
        assert meta.next_page is None

    def test_empty_collection(self) -> None:
        """Should report zero pages for an empty collection."""
        meta = create_pagination_meta(total=0, page=1, limit=10)

        assert meta.total_pages == 0
        assert meta.has_next_page is False
        assert meta.has_prev_page is False

    def test_serializes_camel_case(self) -> None:
        """Should serialize with camelCase keys."""
        data = create_pagination_meta(total=5, page=1, limit=2).model_dump()

        assert data["totalPages"] == 3
        assert data["hasNextPage"] is True
        assert data["nextPage"] == 2


class TestPaginateResults:
    """Tests for paginate_results."""

    def test_pairs_data_and_meta(self) -> None:
        """Should return the data with its metadata."""
        result = paginate_results(("a", "b"), total=4, page=1, limit=2)

        assert result["data"] == ["a", "b"]
        assert result["pagination"].total_pages == 2


class TestGetPaginationLinks:
    """Tests for get_pagination_links."""

    def test_middle_page_links(self) -> None:
        """Should build all five links on a middle page."""
        meta = create_pagination_meta(total=30, page=2, limit=10)

        links = get_pagination_links("/api/v1/statuses/order", meta)

        assert links.self_ == "/api/v1/statuses/order?page=2&limit=10"
        assert links.first == "/api/v1/statuses/order?page=1&limit=10"
        assert links.last == "/api/v1/statuses/order?page=3&limit=10"
        assert links.next == "/api/v1/statuses/order?page=3&limit=10"
        assert links.prev == "/api/v1/statuses/order?page=1&limit=10"

    def test_preserves_other_query_params(self) -> None:
        """Should keep extra query params and override page/limit."""
        meta = create_pagination_meta(total=5, page=1, limit=5)

        links = get_pagination_links("/items", meta, {"q": "phone", "page": 9})

        assert links.self_ == "/items?q=phone&page=1&limit=5"
        assert links.next is None
        assert links.prev is None

    def test_empty_collection_last_is_first(self) -> None:
        """Should point last at page 1 when there are no pages."""
        meta = create_pagination_meta(total=0, page=1, limit=10)

        links = get_pagination_links("/items", meta)

        assert links.last == links.first

    def test_serializes_self_key(self) -> None:
        """Should expose the self link under the 'self' key."""
        meta = create_pagination_meta(total=1, page=1, limit=1)

        data = get_pagination_links("/items", meta).model_dump()

        assert "self" in data


class TestGetPageRange:
    """Tests for get_page_range."""

    def test_small_total(self) -> None:
        """Should list every page when they all fit."""
        assert get_page_range(1, 3) == [1, 2, 3]

    def test_ellipsis_on_left(self) -> None:
        """Should elide the skipped run before the window."""
        assert get_page_range(6, 10) == [1, "...", 4, 5, 6, 7, 8, 9, 10]

    def test_ellipsis_on_both_sides(self) -> None:
        """Should elide runs on both sides of the window."""
        assert get_page_range(10, 20) == [1, "...", 8, 9, 10, 11, 12, "...", 20]

    def test_single_gap_shows_page(self) -> None:
        """Should show a lone skipped page instead of an ellipsis."""
        assert get_page_range(5, 10) == [1, 2, 3, 4, 5, 6, 7, "...", 10]

    def test_no_pages(self) -> None:
        """Should return an empty range for zero pages."""
        assert get_page_range(1, 0) == []


class TestValidatePaginationParams:
    """Tests for validate_pagination_params."""

    def test_valid(self, pagination_settings) -> None:
        """Should accept values in range."""
        assert validate_pagination_params(1, 10) == (True, [])

    def test_collects_errors(self, pagination_settings) -> None:
        """Should report every problem found."""
        is_valid, errors = validate_pagination_params(0, 0)

        assert is_valid is False
        assert errors == [
            "Page must be greater than 0",
            "Limit must be greater than 0",
        ]

    def test_limit_too_large(self, pagination_settings) -> None:
        """Should reject a limit above the maximum."""
        is_valid, errors = validate_pagination_params(1, 101)

        assert is_valid is False
        assert errors == ["Limit cannot exceed 100"]


class TestCreateCursorPagination:
    """Tests for create_cursor_pagination."""

    def test_has_more(self) -> None:
        """Should drop the look-ahead row and expose the next cursor."""
        items = [{"id": 1}, {"id": 2}, {"id": 3}]

        result = create_cursor_pagination(items, cursor=None, limit=2)

        assert result["data"] == [{"id": 1}, {"id": 2}]
        assert result["pagination"].has_more is True
        assert result["pagination"].next_cursor == "2"

    def test_last_page(self) -> None:
        """Should report no further pages when the look-ahead is missing."""
        items = [{"slug": "a"}, {"slug": "b"}]

        result = create_cursor_pagination(items, "x", 2, cursor_field="slug")

        assert result["data"] == items
        assert result["pagination"].has_more is False
        assert result["pagination"].next_cursor is None
        assert result["pagination"].cursor == "x"
