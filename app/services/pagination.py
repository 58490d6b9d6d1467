"""
Pagination Arithmetic

Pure functions, no database access.
"""

import math


def paginate(total_count: int, page_size: int, requested_page: int) -> tuple[int, int]:
    """
    Compute the page to serve and the number of pages.

    A request past the last page is clamped down to the last page
    rather than rejected. When nothing matched there is no page at
    all, which is reported as page 0 of 0.

    Args:
        total_count: Number of matching items (>= 0)
        page_size: Items per page (>= 1)
        requested_page: 1-indexed page asked for (>= 1)

    Returns:
        (actual_page, total_pages)

    Examples:
        >>> paginate(5, 2, 2)
        (2, 3)
        >>> paginate(3, 10, 5)
        (1, 1)
        >>> paginate(0, 10, 1)
        (0, 0)
    """
    if total_count == 0:
        return 0, 0
    total_pages = math.ceil(total_count / page_size)
    return min(requested_page, total_pages), total_pages
