import json
from urllib.parse import parse_qs, urlsplit

from movieshelf.schemas import FavoriteRecord


class FakeResponse:
    def __init__(self, body: bytes) -> None:
        self._body = body

    def read(self) -> bytes:
        return self._body

    def __enter__(self) -> "FakeResponse":
        return self

    def __exit__(self, *_exc) -> None:
        return None


class FakeOpener:
    """Stands in for ``urlopen``: returns ``payload`` as JSON or raises ``error``."""

    def __init__(self, payload=None, *, body: bytes | None = None, error: BaseException | None = None) -> None:
        self.payload = payload
        self.body = body
        self.error = error
        self.calls: list[tuple[str, float]] = []

    def __call__(self, request, timeout=None):
        self.calls.append((request.full_url, timeout))
        if self.error is not None:
            raise self.error
        if self.body is not None:
            return FakeResponse(self.body)
        return FakeResponse(json.dumps(self.payload).encode("utf-8"))

    @property
    def last_url(self) -> str:
        return self.calls[-1][0]

    @property
    def last_params(self) -> dict[str, list[str]]:
        return parse_qs(urlsplit(self.last_url).query)


def omdb_movie(imdb_id: str, title: str = "The Matrix", year: str = "1999", poster: str = "N/A") -> dict:
    return {"Title": title, "Year": year, "imdbID": imdb_id, "Type": "movie", "Poster": poster}


def omdb_payload(*movies: dict, total: str | None = None) -> dict:
    return {
        "Search": list(movies),
        "totalResults": total if total is not None else str(len(movies)),
        "Response": "True",
    }


def omdb_not_found(message: str = "Movie not found!") -> dict:
    return {"Response": "False", "Error": message}


def make_record(index: int = 1, *, title: str | None = None, year: int = 2000) -> FavoriteRecord:
    return FavoriteRecord(
        title=title or f"Movie {index}",
        external_id=f"tt{index:07d}",
        year=year,
        poster_url=f"https://img.test/{index}.jpg",
    )


def record_payload(record: FavoriteRecord) -> dict:
    return record.to_json()
