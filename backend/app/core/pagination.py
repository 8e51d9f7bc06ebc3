"""Pagination — page arithmetic and the page-number strip shown under the invoice table.

Invariants:
    - PAGE_SIZE (6) is the single source of truth for paginated reads
    - Pages are 1-based; page_offset(1) == 0
    - A page whose offset exceeds MAX_ROW_OFFSET is past any data: it is empty, never queried
    - total_pages(n) * PAGE_SIZE >= n and (total_pages(n) - 1) * PAGE_SIZE < n
    - generate_pagination never returns more than 7 entries

Design Decisions:
    - Ellipsis marker is the literal string "..." so the strip serializes to JSON as-is
"""

import math

PAGE_SIZE: int = 6
ELLIPSIS: str = "..."
_FULL_STRIP_MAX: int = 7

# No table holds this many rows; keeps LIMIT + OFFSET inside a signed 64-bit integer
MAX_ROW_OFFSET: int = 2**62


def page_offset(page: int) -> int:
    """Row offset of a 1-based page."""
    return (page - 1) * PAGE_SIZE


def total_pages(row_count: int) -> int:
    """Number of pages needed to show row_count rows."""
    return math.ceil(row_count / PAGE_SIZE)


def generate_pagination(current_page: int, page_count: int) -> list[int | str]:
    """Page numbers to render, with ellipses collapsing long ranges.

    - 7 pages or fewer: every page.
    - Current page among the first 3: first 3, ellipsis, last 2.
    - Current page among the last 3: first 2, ellipsis, last 3.
    - Otherwise: first page, ellipsis, current and its neighbours, ellipsis, last page.
    """
    if page_count <= _FULL_STRIP_MAX:
        return list(range(1, page_count + 1))

    if current_page <= 3:
        return [1, 2, 3, ELLIPSIS, page_count - 1, page_count]

    if current_page >= page_count - 2:
        return [1, 2, ELLIPSIS, page_count - 2, page_count - 1, page_count]

    return [
        1, ELLIPSIS,
        current_page - 1, current_page, current_page + 1,
        ELLIPSIS, page_count,
    ]
