from typing import Optional
from sqlalchemy.orm import Session
from cinefind.repositories.base_repository import BaseRepository
from cinefind.models.storage import StorageEntry

class StorageEntryRepository(BaseRepository[StorageEntry]):
    """Repository for key-value storage entries"""

    def __init__(self, db: Session):
        super().__init__(StorageEntry, db)

    def get_value(self, key: str) -> Optional[str]:
        """Get the raw document stored under key"""
        entry = self.get(key)
        return entry.value if entry else None

    def set_value(self, key: str, value: str) -> StorageEntry:
        """Create or overwrite the document stored under key"""
        existing = self.get(key)
        if existing:
            return self.update(existing, {"value": value})
        return self.create({"key": key, "value": value})
