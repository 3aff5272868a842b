from __future__ import annotations

import logging
from dataclasses import dataclass

from movieshelf.schemas import SearchResultItem
from movieshelf.services.catalog import CatalogClient
from movieshelf.services.errors import ServiceError, wrap_unexpected
from movieshelf.services.favorites import FavoritesStore
from movieshelf.services.pagination import catalog_has_next_page, total_pages

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchResults:
    items: list[SearchResultItem]
    total_results: int
    current_page: int
    total_pages: int
    has_next_page: bool

    @property
    def count(self) -> int:
        return len(self.items)


class SearchAggregator:
    """Catalog search results tagged with the caller's favorites."""

    def __init__(self, catalog: CatalogClient, store: FavoritesStore, *, page_size: int = 10) -> None:
        self._catalog = catalog
        self._store = store
        self._page_size = page_size

    def search_with_favorites(self, query: str, page: int = 1) -> SearchResults:
        try:
            catalog_page = self._catalog.search(query, page)
            favorite_ids = self._store.membership_set()
        except ServiceError as exc:
            logger.warning("Search failed q=%r page=%s kind=%s: %s", query, page, exc.kind.value, exc.message)
            raise
        except Exception as exc:
            logger.exception("Unexpected search failure q=%r page=%s", query, page)
            raise wrap_unexpected(exc, "Failed to search movies. Please try again later.") from exc

        items = [
            SearchResultItem(
                title=item.title,
                external_id=item.external_id,
                year=item.year,
                poster_url=item.poster_url,
                is_favorite=item.external_id in favorite_ids,
            )
            for item in catalog_page.items
        ]
        return SearchResults(
            items=items,
            total_results=catalog_page.total_results,
            current_page=page,
            total_pages=total_pages(catalog_page.total_results, self._page_size),
            has_next_page=catalog_has_next_page(catalog_page.total_results, self._page_size, page),
        )
