import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from movieshelf.api.deps import get_favorites_store, get_search_aggregator
from movieshelf.config import Settings, get_settings
from movieshelf.constants import ADDED_MESSAGE, REMOVED_MESSAGE
from movieshelf.schemas import (
    FavoriteRecord,
    FavoritesPayload,
    FavoritesResponse,
    MessagePayload,
    MessageResponse,
    SearchPayload,
    SearchResponse,
)
from movieshelf.services.errors import ServiceError, http_status_for, wrap_unexpected
from movieshelf.services.favorites import FavoritesStore
from movieshelf.services.search import SearchAggregator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/movies", tags=["movies"])


def _http_error(exc: Exception) -> HTTPException:
    error = wrap_unexpected(exc)
    if error is not exc:
        logger.exception("Unhandled error in movies route")
    return HTTPException(status_code=http_status_for(error), detail=error.to_detail())


@router.get("/search", response_model=SearchResponse)
def search(
    q: str = Query(min_length=1, description="Search query"),
    page: int = Query(default=1, ge=1),
    aggregator: SearchAggregator = Depends(get_search_aggregator),
) -> SearchResponse:
    try:
        results = aggregator.search_with_favorites(q, page)
    except ServiceError as exc:
        raise _http_error(exc) from exc
    return SearchResponse(
        data=SearchPayload(
            movies=results.items,
            count=results.count,
            total_results=str(results.total_results),
            current_page=results.current_page,
            total_pages=results.total_pages,
            has_next_page=results.has_next_page,
        )
    )


@router.post("/favorites", response_model=MessageResponse)
def add_favorite(
    record: FavoriteRecord,
    store: FavoritesStore = Depends(get_favorites_store),
) -> MessageResponse:
    try:
        store.add(record)
    except Exception as exc:
        raise _http_error(exc) from exc
    return MessageResponse(data=MessagePayload(message=ADDED_MESSAGE))


@router.delete("/favorites/{imdb_id}", response_model=MessageResponse)
def remove_favorite(
    imdb_id: str,
    store: FavoritesStore = Depends(get_favorites_store),
) -> MessageResponse:
    try:
        store.remove(imdb_id)
    except Exception as exc:
        raise _http_error(exc) from exc
    return MessageResponse(data=MessagePayload(message=REMOVED_MESSAGE))


@router.get("/favorites/list", response_model=FavoritesResponse)
def list_favorites(
    page: int = Query(default=1, ge=1),
    page_size: int | None = Query(default=None, ge=1),
    store: FavoritesStore = Depends(get_favorites_store),
    settings: Settings = Depends(get_settings),
) -> FavoritesResponse:
    size = page_size or settings.favorites_page_size
    if size > settings.max_page_size:
        raise HTTPException(
            status_code=400,
            detail={"kind": "invalid_argument", "message": f"Page size must be at most {settings.max_page_size}"},
        )
    try:
        result = store.list(page, size)
    except Exception as exc:
        raise _http_error(exc) from exc
    return FavoritesResponse(
        data=FavoritesPayload(
            favorites=result.items,
            count=result.count,
            total_results=str(result.window.total_items),
            current_page=result.window.current_page,
            total_pages=result.window.total_pages,
        )
    )
