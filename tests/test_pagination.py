"""
Tests for Pagination Arithmetic

paginate() is pure, so these tests need no database.
"""

import math

import pytest

from app.services.pagination import paginate


class TestPaginate:
    """Tests for paginate(total_count, page_size, requested_page)."""

    @pytest.mark.parametrize("page_size,requested_page", [(1, 1), (10, 1), (10, 7), (500, 3)])
    def test_no_results_is_page_zero_of_zero(self, page_size, requested_page):
        """Nothing matched: there is no page at all."""
        assert paginate(0, page_size, requested_page) == (0, 0)

    def test_middle_page(self):
        """pageSize=2, currentPage=2, total=5 -> page 2 of 3."""
        assert paginate(5, 2, 2) == (2, 3)

    def test_clamps_past_the_end(self):
        """pageSize=10, currentPage=5, total=3 -> page 1 of 1."""
        assert paginate(3, 10, 5) == (1, 1)

    def test_exact_multiple(self):
        assert paginate(10, 5, 2) == (2, 2)

    def test_last_page(self):
        assert paginate(11, 5, 3) == (3, 3)

    def test_page_size_has_no_upper_bound(self):
        assert paginate(3, 1_000_000, 1) == (1, 1)

    @pytest.mark.parametrize(
        "total_count,page_size,requested_page",
        [
            (1, 1, 1),
            (7, 3, 1),
            (7, 3, 3),
            (7, 3, 4),
            (99, 10, 10),
            (100, 10, 11),
            (1, 50, 2),
        ],
    )
    def test_general_rule(self, total_count, page_size, requested_page):
        """total_pages = ceil(total/size); actual = min(requested, total_pages)."""
        actual_page, total_pages = paginate(total_count, page_size, requested_page)

        assert total_pages == math.ceil(total_count / page_size)
        assert actual_page == min(requested_page, total_pages)
