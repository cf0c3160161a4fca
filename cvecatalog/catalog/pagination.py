"""Page arithmetic shared by the list endpoint and its callers."""

from __future__ import annotations

from dataclasses import dataclass

PAGE_SIZE = 20


def normalize_page(page: int | None) -> int:
    """Floor missing or non-positive page numbers to the first page."""
    if page is None or page < 1:
        return 1
    return page


def page_offset(page: int, page_size: int = PAGE_SIZE) -> int:
    return (normalize_page(page) - 1) * page_size


@dataclass(frozen=True)
class PageInfo:
    current_page: int
    total_pages: int
    total_count: int
    has_next_page: bool
    has_prev_page: bool

    @classmethod
    def compute(cls, page: int, total_count: int, page_size: int = PAGE_SIZE) -> "PageInfo":
        page = normalize_page(page)
        total_pages = -(-total_count // page_size)
        return cls(
            current_page=page,
            total_pages=total_pages,
            total_count=total_count,
            has_next_page=page < total_pages,
            has_prev_page=page > 1,
        )
