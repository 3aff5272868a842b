"""Page arithmetic for the favorites listing and the catalog search.

Two schemes meet here. Favorites are sliced locally by offset, so a page
window is computed from the collection size. Catalog results are paged by
the provider, which reports its total as text, so the next-page decision is
derived from that text and the number of pages already fetched.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from movieshelf.services.validation import validate_page, validate_page_size

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PageWindow:
    current_page: int
    page_size: int
    total_items: int
    total_pages: int

    @property
    def start(self) -> int:
        return min((self.current_page - 1) * self.page_size, self.total_items)

    @property
    def end(self) -> int:
        return min(self.current_page * self.page_size, self.total_items)

    @property
    def has_next_page(self) -> bool:
        return self.current_page < self.total_pages


def total_pages(total_items: int, page_size: int) -> int:
    if total_items <= 0:
        return 0
    return math.ceil(total_items / page_size)


def favorites_page_window(total_items: int, page: int, page_size: int) -> PageWindow:
    validate_page(page)
    validate_page_size(page_size)
    total_items = max(0, total_items)
    return PageWindow(
        current_page=page,
        page_size=page_size,
        total_items=total_items,
        total_pages=total_pages(total_items, page_size),
    )


def page_bounds(total_items: int, page: int, page_size: int) -> tuple[int, int]:
    window = favorites_page_window(total_items, page, page_size)
    return window.start, window.end


def parse_total_results(total_results_text: str | int | None) -> int:
    if total_results_text is None:
        return 0
    if isinstance(total_results_text, int) and not isinstance(total_results_text, bool):
        return max(0, total_results_text)
    text = str(total_results_text).strip()
    try:
        value = int(text)
    except ValueError:
        logger.warning("Provider total result count is not numeric: %r; treating as 0", total_results_text)
        return 0
    return max(0, value)


def catalog_has_next_page(total_results_text: str | int | None, page_size: int, pages_fetched_so_far: int) -> bool:
    validate_page_size(page_size)
    total = parse_total_results(total_results_text)
    return pages_fetched_so_far < total_pages(total, page_size)
