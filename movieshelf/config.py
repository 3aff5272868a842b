from functools import lru_cache
from pathlib import Path

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    omdb_api_key: str = Field(alias="OMDB_API_KEY")
    omdb_base_url: str = Field(default="https://www.omdbapi.com/", alias="OMDB_BASE_URL")
    omdb_timeout_seconds: float = Field(default=10, alias="OMDB_TIMEOUT_SECONDS")
    catalog_page_size: int = Field(default=10, alias="CATALOG_PAGE_SIZE")

    data_dir: Path = Field(default=Path("./data"), alias="DATA_DIR")
    favorites_filename: str = Field(default="favorites.json", alias="FAVORITES_FILENAME")
    favorites_page_size: int = Field(default=10, alias="FAVORITES_PAGE_SIZE")
    max_page_size: int = Field(default=100, alias="MAX_PAGE_SIZE")

    cors_origins: str = Field(default="http://localhost:3000", alias="CORS_ORIGINS")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    environment: str = Field(default="development", alias="ENVIRONMENT")

    @model_validator(mode="after")
    def validate_required_runtime(self) -> "Settings":
        if not self.omdb_api_key.strip():
            raise ValueError("OMDB_API_KEY is required")
        if not self.omdb_base_url.strip():
            raise ValueError("OMDB_BASE_URL is required")
        if self.omdb_timeout_seconds < 1:
            raise ValueError("OMDB_TIMEOUT_SECONDS must be >= 1")
        if self.catalog_page_size < 1:
            raise ValueError("CATALOG_PAGE_SIZE must be >= 1")
        if not self.favorites_filename.strip() or Path(self.favorites_filename).name != self.favorites_filename:
            raise ValueError("FAVORITES_FILENAME must be a plain file name")
        if self.favorites_page_size < 1:
            raise ValueError("FAVORITES_PAGE_SIZE must be >= 1")
        if self.max_page_size < self.favorites_page_size:
            raise ValueError("MAX_PAGE_SIZE must be >= FAVORITES_PAGE_SIZE")
        return self

    @property
    def favorites_path(self) -> Path:
        return self.data_dir / self.favorites_filename

    @property
    def cors_origin_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    settings = Settings()
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    return settings
