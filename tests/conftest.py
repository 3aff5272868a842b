import os
import tempfile

import pytest
from fastapi.testclient import TestClient

os.environ.setdefault("OMDB_API_KEY", "test-key")
os.environ.setdefault("DATA_DIR", tempfile.gettempdir())
os.environ.setdefault("LOG_LEVEL", "DEBUG")

from movieshelf.api.deps import get_catalog_client  # noqa: E402
from movieshelf.config import get_settings  # noqa: E402
from movieshelf.main import create_app  # noqa: E402
from movieshelf.services.catalog import CatalogClient  # noqa: E402
from movieshelf.services.favorites import FavoritesStore  # noqa: E402
from tests.helpers import FakeOpener, omdb_payload  # noqa: E402


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    monkeypatch.setenv("DATA_DIR", str(tmp_path / "data"))
    get_settings.cache_clear()
    yield get_settings()
    get_settings.cache_clear()


@pytest.fixture()
def favorites_path(tmp_path):
    return tmp_path / "data" / "favorites.json"


@pytest.fixture()
def store(favorites_path):
    favorites = FavoritesStore(favorites_path)
    favorites.initialize()
    return favorites


@pytest.fixture()
def catalog_opener():
    return FakeOpener(payload=omdb_payload())


@pytest.fixture()
def catalog(catalog_opener):
    return CatalogClient(api_key="test-key", base_url="https://omdb.test/", timeout=10, opener=catalog_opener)


@pytest.fixture()
def client(catalog):
    app = create_app()
    app.dependency_overrides[get_catalog_client] = lambda: catalog
    with TestClient(app) as test_client:
        yield test_client
