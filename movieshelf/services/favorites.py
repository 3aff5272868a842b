"""File-backed favorites collection.

:class:`FavoritesStore` owns the in-memory list of :class:`FavoriteRecord`
and the JSON file behind it. Listing and every mutation re-read the file
first so that edits made by another process are picked up. Within one
process a lock spans reload, mutation and write, and each write goes through
a temporary file that is renamed over the target, so a reader never sees a
half written file. Separate processes are not coordinated.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from dataclasses import dataclass
from pathlib import Path

from pydantic import ValidationError as PydanticValidationError

from movieshelf.schemas import FavoriteRecord
from movieshelf.services.errors import AlreadyExistsError, IOFailureError, NotFoundError
from movieshelf.services.pagination import PageWindow, favorites_page_window
from movieshelf.services.validation import require, validate_external_id, validate_page, validate_page_size

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FavoritesPage:
    items: list[FavoriteRecord]
    window: PageWindow

    @property
    def count(self) -> int:
        return len(self.items)


class FavoritesStore:
    def __init__(self, path: Path) -> None:
        self._path = Path(path)
        self._favorites: list[FavoriteRecord] = []
        self._lock = threading.RLock()

    @property
    def path(self) -> Path:
        return self._path

    def initialize(self) -> None:
        """Create the data directory and an empty file if needed, then load."""
        with self._lock:
            directory = self._path.parent
            if not directory.exists():
                try:
                    directory.mkdir(parents=True, exist_ok=True)
                except OSError as exc:
                    raise IOFailureError(f"Failed to initialize data directory {directory}", cause=exc) from exc
                logger.info("Created data directory %s", directory)
            if not self._path.exists():
                self._favorites = []
                self._persist()
                logger.info("Created new favorites file %s", self._path)
                return
            self.reload()

    def reload(self) -> None:
        with self._lock:
            self._favorites = self._read()

    def list(self, page: int = 1, page_size: int = 10) -> FavoritesPage:
        validate_page(page)
        validate_page_size(page_size)
        with self._lock:
            self.reload()
            window = favorites_page_window(len(self._favorites), page, page_size)
            items = self._favorites[window.start : window.end]
        return FavoritesPage(items=items, window=window)

    def add(self, record: FavoriteRecord) -> FavoriteRecord:
        require(record is not None and bool(record.external_id and record.external_id.strip()), "Invalid movie data")
        with self._lock:
            self.reload()
            if any(existing.external_id == record.external_id for existing in self._favorites):
                raise AlreadyExistsError(f"Movie already in favorites: {record.external_id}")
            self._favorites.append(record)
            self._persist()
        logger.info("Added favorite %s (%s)", record.external_id, record.title)
        return record

    def remove(self, external_id: str) -> FavoriteRecord:
        validate_external_id(external_id)
        with self._lock:
            self.reload()
            index = next(
                (position for position, existing in enumerate(self._favorites) if existing.external_id == external_id),
                None,
            )
            if index is None:
                raise NotFoundError(f"Movie not found in favorites: {external_id}")
            removed = self._favorites.pop(index)
            self._persist()
        logger.info("Removed favorite %s", external_id)
        return removed

    def exists(self, external_id: str) -> bool:
        with self._lock:
            return any(existing.external_id == external_id for existing in self._favorites)

    def membership_set(self) -> set[str]:
        with self._lock:
            return {existing.external_id for existing in self._favorites}

    def __len__(self) -> int:
        with self._lock:
            return len(self._favorites)

    def _read(self) -> list[FavoriteRecord]:
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.warning("Favorites file %s is missing; treating collection as empty", self._path)
            return []
        except OSError as exc:
            logger.warning("Could not read favorites file %s: %s; treating collection as empty", self._path, exc)
            return []
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as exc:
            logger.warning("Favorites file %s is not valid JSON (%s); treating collection as empty", self._path, exc)
            return []
        if not isinstance(payload, list):
            logger.warning("Favorites file %s does not hold a JSON array; treating collection as empty", self._path)
            return []
        records: list[FavoriteRecord] = []
        for position, item in enumerate(payload):
            try:
                records.append(FavoriteRecord.model_validate(item))
            except PydanticValidationError as exc:
                logger.warning(
                    "Skipped invalid record %s in favorites file %s (%s error(s))",
                    position,
                    self._path,
                    exc.error_count(),
                )
        logger.debug("Loaded %s favorites from %s", len(records), self._path)
        return records

    def _persist(self) -> None:
        content = json.dumps([record.to_json() for record in self._favorites], indent=2, ensure_ascii=False)
        temp_name: str | None = None
        try:
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self._path.parent,
                prefix=f".{self._path.name}.",
                suffix=".tmp",
                delete=False,
            ) as handle:
                temp_name = handle.name
                handle.write(content)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(temp_name, self._path)
        except OSError as exc:
            logger.error("Failed to save favorites to %s: %s", self._path, exc)
            if temp_name is not None:
                Path(temp_name).unlink(missing_ok=True)
            raise IOFailureError("Failed to save favorites", cause=exc) from exc
        logger.debug("Saved %s favorites to %s", len(self._favorites), self._path)
