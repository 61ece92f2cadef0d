from .base_repository import BaseRepository
from .storage_repository import StorageEntryRepository
from .watchlist_repository import (
    WatchlistRepository,
    InMemoryWatchlistRepository,
    JsonFileWatchlistRepository,
    SqlWatchlistRepository,
    create_watchlist_repository,
)

__all__ = [
    "BaseRepository",
    "StorageEntryRepository",
    "WatchlistRepository",
    "InMemoryWatchlistRepository",
    "JsonFileWatchlistRepository",
    "SqlWatchlistRepository",
    "create_watchlist_repository",
]
