import json
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional

from pydantic import ValidationError
from sqlalchemy.orm import Session

from cinefind.core.config import Settings, get_settings
from cinefind.db import SessionLocal
from cinefind.repositories.storage_repository import StorageEntryRepository
from cinefind.schemas.movie import WatchlistEntry

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "watchlist"

class WatchlistRepository(ABC):
    """Persists the whole watchlist as one document under a fixed key

    ``save`` always overwrites the stored document with the complete list.
    """

    def __init__(self, storage_key: str = DEFAULT_STORAGE_KEY):
        self.storage_key = storage_key

    @abstractmethod
    def load(self) -> List[WatchlistEntry]:
        pass

    @abstractmethod
    def save(self, entries: List[WatchlistEntry]) -> None:
        pass

    @staticmethod
    def encode(entries: List[WatchlistEntry]) -> str:
        return json.dumps([entry.to_storage() for entry in entries], ensure_ascii=False)

    def decode(self, raw: Optional[str]) -> List[WatchlistEntry]:
        """Parse a stored document, treating missing or corrupt data as empty"""
        if raw is None:
            return []
        try:
            items = json.loads(raw)
        except ValueError as e:
            logger.warning(f"Corrupt watchlist under '{self.storage_key}', starting empty: {str(e)}")
            return []
        return self.decode_items(items)

    def decode_items(self, items: Any) -> List[WatchlistEntry]:
        if items is None:
            return []
        if not isinstance(items, list):
            logger.warning(f"Watchlist under '{self.storage_key}' is not a list, starting empty")
            return []

        entries = []
        for item in items:
            try:
                entries.append(WatchlistEntry.model_validate(item))
            except ValidationError as e:
                logger.warning(f"Skipping invalid watchlist entry {item!r}: {e.error_count()} error(s)")
        return entries

class InMemoryWatchlistRepository(WatchlistRepository):
    """Keeps the serialized document in memory"""

    def __init__(self, storage_key: str = DEFAULT_STORAGE_KEY, raw: Optional[str] = None):
        super().__init__(storage_key)
        self.raw = raw
        self.save_count = 0

    def load(self) -> List[WatchlistEntry]:
        return self.decode(self.raw)

    def save(self, entries: List[WatchlistEntry]) -> None:
        self.raw = self.encode(entries)
        self.save_count += 1

class JsonFileWatchlistRepository(WatchlistRepository):
    """Stores the watchlist inside a JSON key-value document on disk

    Other keys in the document are preserved on save. Writes go through a
    temporary file and ``os.replace`` so readers never see a partial file.
    """

    def __init__(self, path: str, storage_key: str = DEFAULT_STORAGE_KEY):
        super().__init__(storage_key)
        self.path = path

    def load(self) -> List[WatchlistEntry]:
        return self.decode_items(self._read_document().get(self.storage_key))

    def save(self, entries: List[WatchlistEntry]) -> None:
        document = self._read_document()
        document[self.storage_key] = [entry.to_storage() for entry in entries]
        self._write_document(document)

    def _read_document(self) -> Dict[str, Any]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                document = json.load(f)
        except ValueError as e:
            logger.warning(f"Corrupt storage file {self.path}, starting empty: {str(e)}")
            return {}
        if not isinstance(document, dict):
            logger.warning(f"Storage file {self.path} is not a JSON object, starting empty")
            return {}
        return document

    def _write_document(self, document: Dict[str, Any]) -> None:
        dirpath = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(dirpath, exist_ok=True)

        temp_name = None
        try:
            with tempfile.NamedTemporaryFile("w", encoding="utf-8", delete=False, dir=dirpath) as tf:
                json.dump(document, tf, ensure_ascii=False, indent=2)
                temp_name = tf.name
            os.replace(temp_name, self.path)
        finally:
            if temp_name and os.path.exists(temp_name):
                os.remove(temp_name)

class SqlWatchlistRepository(WatchlistRepository):
    """Stores the watchlist document in the storage_entries table"""

    def __init__(self, session_factory: Callable[[], Session] = SessionLocal,
                 storage_key: str = DEFAULT_STORAGE_KEY):
        super().__init__(storage_key)
        self.session_factory = session_factory

    def load(self) -> List[WatchlistEntry]:
        db = self.session_factory()
        try:
            return self.decode(StorageEntryRepository(db).get_value(self.storage_key))
        finally:
            db.close()

    def save(self, entries: List[WatchlistEntry]) -> None:
        db = self.session_factory()
        try:
            StorageEntryRepository(db).set_value(self.storage_key, self.encode(entries))
        finally:
            db.close()

def create_watchlist_repository(settings: Optional[Settings] = None) -> WatchlistRepository:
    """Build the repository selected by WATCHLIST_BACKEND"""
    settings = settings or get_settings()
    backend = settings.WATCHLIST_BACKEND.lower()
    if backend == "file":
        return JsonFileWatchlistRepository(settings.WATCHLIST_PATH, settings.WATCHLIST_STORAGE_KEY)
    if backend == "sql":
        return SqlWatchlistRepository(storage_key=settings.WATCHLIST_STORAGE_KEY)
    if backend == "memory":
        return InMemoryWatchlistRepository(settings.WATCHLIST_STORAGE_KEY)
    raise ValueError(f"Unknown watchlist backend: {settings.WATCHLIST_BACKEND}")
