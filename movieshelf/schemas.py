from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from movieshelf.constants import IMDB_ID_PATTERN, MAX_RELEASE_YEAR, MIN_RELEASE_YEAR


class FavoriteRecord(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    title: str = Field(min_length=1)
    external_id: str = Field(alias="imdbID", pattern=IMDB_ID_PATTERN)
    year: int = Field(ge=MIN_RELEASE_YEAR, le=MAX_RELEASE_YEAR)
    poster_url: str = Field(alias="poster", min_length=1)

    @field_validator("title", "poster_url")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    def to_json(self) -> dict:
        return self.model_dump(by_alias=True)


class SearchResultItem(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str
    external_id: str = Field(alias="imdbID")
    year: str
    poster_url: str = Field(alias="poster")
    is_favorite: bool = Field(alias="isFavorite")


class SearchPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    movies: list[SearchResultItem]
    count: int
    total_results: str = Field(alias="totalResults")
    current_page: int = Field(alias="currentPage")
    total_pages: int = Field(alias="totalPages")
    has_next_page: bool = Field(alias="hasNextPage")


class SearchResponse(BaseModel):
    data: SearchPayload


class FavoritesPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    favorites: list[FavoriteRecord]
    count: int
    total_results: str = Field(alias="totalResults")
    current_page: int = Field(alias="currentPage")
    total_pages: int = Field(alias="totalPages")


class FavoritesResponse(BaseModel):
    data: FavoritesPayload


class MessagePayload(BaseModel):
    message: str


class MessageResponse(BaseModel):
    data: MessagePayload


class HealthResponse(BaseModel):
    status: str
    timestamp: datetime
    uptime_seconds: float
    environment: str
    version: str


class ReadinessResponse(BaseModel):
    status: str
    timestamp: datetime
    checks: dict[str, str]
