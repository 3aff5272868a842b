from fastapi import Depends, Request

from movieshelf.config import Settings, get_settings
from movieshelf.runtime import build_search_aggregator
from movieshelf.services.catalog import CatalogClient
from movieshelf.services.favorites import FavoritesStore
from movieshelf.services.search import SearchAggregator


def get_favorites_store(request: Request) -> FavoritesStore:
    return request.app.state.favorites_store


def get_catalog_client(request: Request) -> CatalogClient:
    return request.app.state.catalog_client


def get_search_aggregator(
    catalog: CatalogClient = Depends(get_catalog_client),
    store: FavoritesStore = Depends(get_favorites_store),
    settings: Settings = Depends(get_settings),
) -> SearchAggregator:
    return build_search_aggregator(settings, catalog, store)
