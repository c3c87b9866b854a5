"""Tests for page/limit derivation and the pagination controller."""

import pytest

from mockbank.application.cache import transactions_key
from mockbank.application.pagination import (
    DEFAULT_LIMIT,
    PageParams,
    PaginationController,
    derive,
)


class TestDerive:
    """Tests for reading navigation parameters."""

    def test_defaults(self):
        assert derive({}) == PageParams(page=1, limit=20)

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("3", 3), (" 4 ", 4), ("0", 1), ("-2", 1), ("abc", 1), ("2.5", 1), (7, 7)],
    )
    def test_page_values(self, raw, expected):
        assert derive({"page": raw}).page == expected

    @pytest.mark.parametrize("raw", ["9999", "0", "-1", "ten", "101"])
    def test_out_of_range_limit_falls_back(self, raw):
        """Test that an invalid page size uses the default, not a clamp."""
        assert derive({"limit": raw}).limit == DEFAULT_LIMIT

    @pytest.mark.parametrize("raw", ["1", "50", "100"])
    def test_valid_limits(self, raw):
        assert derive({"limit": raw}).limit == int(raw)

    def test_as_query(self):
        assert PageParams(2, 50).as_query() == {"page": 2, "limit": 50}


class TestPaginationController:
    """Tests for explicit page and page-size changes."""

    def test_set_limit_resets_page(self):
        """Test that changing the page size goes back to page one."""
        state = {"page": "4", "limit": "20"}
        controller = PaginationController(state)

        params = controller.set_limit(50)

        assert params == PageParams(page=1, limit=50)
        assert state == {"page": "1", "limit": "50"}

    def test_set_page_writes_navigation_state(self):
        state = {}
        controller = PaginationController(state)

        controller.set_page(3)

        assert state["page"] == "3"
        assert controller.page == 3

    def test_invalid_changes_rejected(self):
        controller = PaginationController()

        with pytest.raises(ValueError):
            controller.set_page(0)
        with pytest.raises(ValueError):
            controller.set_limit(101)

    def test_display_page_clamps_without_writing(self):
        """Test that page 5 of 3 displays as 3 and the state keeps 5."""
        state = {"page": "5", "limit": "20"}
        controller = PaginationController(state)

        assert controller.display_page(3) == 3
        assert state["page"] == "5"
        assert controller.page == 5

    def test_display_page_with_no_pages(self):
        controller = PaginationController({"page": "2"})

        assert controller.display_page(1) == 1

    def test_next_and_previous(self):
        controller = PaginationController()

        controller.next_page()
        controller.next_page()
        assert controller.page == 3
        assert controller.has_previous()
        assert not controller.has_next(3)

        controller.previous_page()
        assert controller.page == 2
        assert controller.has_next(3)

    def test_previous_stops_at_first_page(self):
        controller = PaginationController()

        controller.previous_page()

        assert controller.page == 1
        assert not controller.has_previous()

    def test_key_follows_navigation_state(self):
        controller = PaginationController({"page": "2", "limit": "10"})

        assert controller.key("acc-1") == transactions_key("acc-1", page=2, limit=10)
