from cinefind.db import Base
from .storage import StorageEntry

__all__ = [
    'StorageEntry'
]
