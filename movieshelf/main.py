import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from movieshelf.api.routes import health, movies
from movieshelf.config import get_settings
from movieshelf.constants import SERVICE_NAME, SERVICE_VERSION
from movieshelf.runtime import build_catalog_client, build_favorites_store, configure_logging
from movieshelf.services.utils import now_utc

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    configure_logging(settings)
    app.state.favorites_store = build_favorites_store(settings)
    app.state.catalog_client = build_catalog_client(settings)
    logger.info(
        "%s %s ready: favorites=%s (%s records), cors=%s",
        SERVICE_NAME,
        SERVICE_VERSION,
        settings.favorites_path,
        len(app.state.favorites_store),
        ", ".join(settings.cors_origin_list),
    )
    yield


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(
        title="Movie Search API",
        version=SERVICE_VERSION,
        description="Search the OMDb catalog and keep a list of favorite movies.",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_methods=["GET", "HEAD", "PUT", "PATCH", "POST", "DELETE"],
        allow_headers=["*"],
        allow_credentials=True,
    )

    app.include_router(health.router)
    app.include_router(movies.router)

    @app.get("/meta")
    def meta() -> dict:
        settings = get_settings()
        return {
            "service": SERVICE_NAME,
            "version": SERVICE_VERSION,
            "environment": settings.environment,
            "timestamp": now_utc().isoformat(),
        }

    return app


app = create_app()
