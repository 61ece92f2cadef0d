from typing import List

from cinefind.repositories.watchlist_repository import WatchlistRepository
from cinefind.schemas.movie import MovieSummary, WatchlistEntry

class WatchlistStore:
    """Set of watchlisted movies keyed by id, persisted on every mutation"""

    def __init__(self, repository: WatchlistRepository):
        self.repository = repository
        self._entries = self._dedupe(repository.load())

    def is_member(self, movie_id: str) -> bool:
        return any(entry.id == movie_id for entry in self._entries)

    def toggle(self, movie: MovieSummary) -> bool:
        """Add the movie if absent, remove it if present; returns new membership"""
        if self.is_member(movie.id):
            self._entries = [entry for entry in self._entries if entry.id != movie.id]
            added = False
        else:
            self._entries = self._entries + [WatchlistEntry.from_movie(movie)]
            added = True

        self.repository.save(list(self._entries))
        return added

    def count(self) -> int:
        return len(self._entries)

    def entries(self) -> List[WatchlistEntry]:
        return list(self._entries)

    @staticmethod
    def _dedupe(entries: List[WatchlistEntry]) -> List[WatchlistEntry]:
        seen = set()
        unique = []
        for entry in entries:
            if entry.id not in seen:
                seen.add(entry.id)
                unique.append(entry)
        return unique
