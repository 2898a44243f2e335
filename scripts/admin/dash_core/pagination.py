"""Pagination control: page-range derivation and navigation rules.

The control never owns the current page. Parents keep ``current_page`` and
receive navigation requests through ``on_page_change``; requests that are out
of range, point at the current page, or arrive while disabled are dropped.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Union

from dash_core.errors import ConfigurationError
from dash_core.models import PaginationMeta

ELLIPSIS = "ellipsis"
DISPLAY_TYPES = ("numbers", "arrows", "both")

PageItem = Union[int, str]


def resolve_total_pages(
    total_pages: int | None = None,
    total_items: int | None = None,
    items_per_page: int | None = None,
) -> int:
    if total_pages is not None:
        return int(total_pages)
    if total_items is not None and items_per_page:
        return math.ceil(total_items / items_per_page)
    return 0


def page_range(current_page: int, total_pages: int, sibling_count: int = 1, boundary_count: int = 1) -> list[PageItem]:
    if total_pages <= 0:
        return []

    start = max(1, current_page - sibling_count)
    end = min(total_pages, current_page + sibling_count)
    pages: list[PageItem] = []

    for page in range(1, min(boundary_count, start - 1) + 1):
        pages.append(page)

    if start > boundary_count + 1:
        pages.append(ELLIPSIS)

    pages.extend(range(start, end + 1))

    if end < total_pages - boundary_count:
        pages.append(ELLIPSIS)

    for page in range(max(end + 1, total_pages - boundary_count + 1), total_pages + 1):
        pages.append(page)

    return pages


def clamp_page(page: int, total_pages: int) -> int:
    if total_pages <= 0:
        return 1
    return min(max(1, int(page)), total_pages)


def items_window(current_page: int, items_per_page: int | None, total_items: int | None) -> tuple[int, int, int] | None:
    if not total_items or not items_per_page:
        return None
    start = (current_page - 1) * items_per_page + 1
    end = min(current_page * items_per_page, total_items)
    return start, end, total_items


def synthesize_meta(page: int, limit: int, returned: int, total: int | None = None) -> PaginationMeta:
    """Build pagination metadata for a backend that did not send any.

    With a known ``total`` the numbers are exact. Without one, ``has_next`` is
    guessed from whether the page came back full, which over-counts by one page
    when the last page is exactly full.
    """

    page = max(1, int(page))
    limit = max(0, int(limit))
    if total is not None:
        total = max(0, int(total))
        total_pages = math.ceil(total / limit) if limit else (1 if total else 0)
        return PaginationMeta(
            page=page,
            limit=limit,
            total=total,
            total_pages=total_pages,
            has_next=page * limit < total,
            has_prev=page > 1,
        )

    has_next = limit > 0 and returned >= limit
    seen = (page - 1) * limit + returned
    return PaginationMeta(
        page=page,
        limit=limit,
        total=seen,
        total_pages=page + 1 if has_next else page,
        has_next=has_next,
        has_prev=page > 1,
    )


@dataclass
class Pagination:
    current_page: int
    on_page_change: Callable[[int], None]
    total_pages: int | None = None
    total_items: int | None = None
    items_per_page: int | None = None
    sibling_count: int = 1
    boundary_count: int = 1
    display_type: str = "both"
    show_first_last: bool = True
    show_prev_next: bool = True
    hide_on_single_page: bool = True
    hide_on_empty: bool = True
    disabled: bool = False
    show_page_info: bool = False
    show_items_info: bool = False
    first_text: str = "First"
    last_text: str = "Last"
    prev_text: str = "Previous"
    next_text: str = "Next"
    page_info_template: str = "Page {current} of {total}"
    items_info_template: str = "Showing {start}-{end} of {total} items"
    on_first_page: Callable[[], None] | None = None
    on_last_page: Callable[[], None] | None = None
    on_prev_page: Callable[[], None] | None = None
    on_next_page: Callable[[], None] | None = None

    def __post_init__(self) -> None:
        if self.display_type not in DISPLAY_TYPES:
            raise ConfigurationError(f"unknown pagination display type: {self.display_type}")

    @property
    def page_count(self) -> int:
        return resolve_total_pages(self.total_pages, self.total_items, self.items_per_page)

    @property
    def is_visible(self) -> bool:
        pages = self.page_count
        if self.hide_on_single_page and pages <= 1:
            return False
        if self.hide_on_empty and pages <= 0:
            return False
        return True

    def pages(self) -> list[PageItem]:
        return page_range(self.current_page, self.page_count, self.sibling_count, self.boundary_count)

    def items_info(self) -> tuple[int, int, int] | None:
        return items_window(self.current_page, self.items_per_page, self.total_items)

    @property
    def page_info_text(self) -> str:
        return self.page_info_template.format(current=self.current_page, total=self.page_count)

    @property
    def items_info_text(self) -> str | None:
        info = self.items_info()
        if info is None:
            return None
        start, end, total = info
        return self.items_info_template.format(start=start, end=end, total=total)

    @property
    def can_go_prev(self) -> bool:
        return not self.disabled and self.current_page > 1

    @property
    def can_go_next(self) -> bool:
        return not self.disabled and self.current_page < self.page_count

    def go_to(self, page: int) -> bool:
        if self.disabled or page < 1 or page > self.page_count or page == self.current_page:
            return False
        self.on_page_change(page)
        return True

    def first(self) -> bool:
        if self.disabled or self.current_page == 1:
            return False
        if self.on_first_page is not None:
            self.on_first_page()
            return True
        return self.go_to(1)

    def last(self) -> bool:
        if self.disabled or self.current_page == self.page_count:
            return False
        if self.on_last_page is not None:
            self.on_last_page()
            return True
        return self.go_to(self.page_count)

    def prev(self) -> bool:
        if not self.can_go_prev:
            return False
        if self.on_prev_page is not None:
            self.on_prev_page()
            return True
        return self.go_to(self.current_page - 1)

    def next(self) -> bool:
        if not self.can_go_next:
            return False
        if self.on_next_page is not None:
            self.on_next_page()
            return True
        return self.go_to(self.current_page + 1)
