import os

from fastapi import APIRouter, Depends

from movieshelf.api.deps import get_favorites_store
from movieshelf.config import Settings, get_settings
from movieshelf.constants import SERVICE_VERSION
from movieshelf.schemas import HealthResponse, ReadinessResponse
from movieshelf.services.favorites import FavoritesStore
from movieshelf.services.utils import now_utc, uptime_seconds

router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
def health(settings: Settings = Depends(get_settings)) -> HealthResponse:
    return HealthResponse(
        status="ok",
        timestamp=now_utc(),
        uptime_seconds=uptime_seconds(),
        environment=settings.environment,
        version=SERVICE_VERSION,
    )


@router.get("/ready", response_model=ReadinessResponse)
def ready(store: FavoritesStore = Depends(get_favorites_store)) -> ReadinessResponse:
    directory = store.path.parent
    checks = {
        "data_directory": "ok" if directory.is_dir() and os.access(directory, os.W_OK) else "unavailable",
        "favorites_file": "ok" if store.path.is_file() and os.access(store.path, os.R_OK) else "unavailable",
    }
    status = "ready" if all(value == "ok" for value in checks.values()) else "not_ready"
    return ReadinessResponse(status=status, timestamp=now_utc(), checks=checks)


@router.get("/live", response_model=ReadinessResponse)
def live() -> ReadinessResponse:
    return ReadinessResponse(status="alive", timestamp=now_utc(), checks={})
