import logging

from movieshelf.config import Settings
from movieshelf.services.catalog import CatalogClient
from movieshelf.services.favorites import FavoritesStore
from movieshelf.services.search import SearchAggregator


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def build_favorites_store(settings: Settings) -> FavoritesStore:
    store = FavoritesStore(settings.favorites_path)
    store.initialize()
    return store


def build_catalog_client(settings: Settings) -> CatalogClient:
    return CatalogClient(
        api_key=settings.omdb_api_key,
        base_url=settings.omdb_base_url,
        timeout=settings.omdb_timeout_seconds,
    )


def build_search_aggregator(settings: Settings, catalog: CatalogClient, store: FavoritesStore) -> SearchAggregator:
    return SearchAggregator(catalog, store, page_size=settings.catalog_page_size)
