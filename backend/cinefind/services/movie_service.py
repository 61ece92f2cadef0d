import logging
from typing import Any, Callable, Dict, Optional
from cinefind.core.exceptions import (
    InvalidRequestException, UpstreamErrorException, UpstreamNotFoundException
)
from cinefind.core.interfaces import MovieServiceInterface, OMDBError, OMDBResponse
from cinefind.core.omdb_service import OMDBServiceFactory

logger = logging.getLogger(__name__)

class MovieService:
    """Service for movie lookups proxied to OMDb

    Every operation makes exactly one upstream call and either returns the
    upstream payload untouched or raises one of the application exceptions.
    """

    def __init__(self, omdb_movie_service: Optional[MovieServiceInterface] = None):
        self.omdb_movie_service = omdb_movie_service or OMDBServiceFactory.create_movie_service()

    def search_movies(self, query: Optional[str], page: int = 1) -> Dict[str, Any]:
        """Search movies by title"""
        if not query or not query.strip():
            raise InvalidRequestException("Search query is required")
        query = query.strip()

        response = self._fetch(
            lambda: self.omdb_movie_service.search_movies(query, page),
            failure="Search failed",
            log_label="Search error",
        )
        self._ensure_found(response, "No movies found")
        logger.info(f'Found {response.result_count} movies for: "{query}"')
        return response.data

    def get_movie_detail(self, imdb_id: str) -> Dict[str, Any]:
        """Get full movie details"""
        if not imdb_id or not imdb_id.strip():
            raise InvalidRequestException("Movie id is required")

        response = self._fetch(
            lambda: self.omdb_movie_service.get_movie_details(imdb_id.strip()),
            failure="Failed to fetch movie details",
            log_label="Error fetching movie details",
        )
        self._ensure_found(response, "Movie not found")
        return response.data

    def get_popular_movies(self, page: int = 1) -> Dict[str, Any]:
        """Get the popular movie listing"""
        response = self._fetch(
            lambda: self.omdb_movie_service.get_popular_movies(page),
            failure="Failed to fetch popular movies",
            log_label="Error fetching popular movies",
        )
        self._ensure_found(response, "No popular movies found")
        logger.info(f"Fetched {response.result_count} popular movies (page {page})")
        return response.data

    def get_movies_by_year(self, year: int) -> Dict[str, Any]:
        """Get movies released in a given year"""
        response = self._fetch(
            lambda: self.omdb_movie_service.get_movies_by_year(year),
            failure="Failed to fetch movies by year",
            log_label="Year filter error",
        )
        self._ensure_found(response, "No movies found for this year")
        logger.info(f"Found {response.result_count} movies for year {year}")
        return response.data

    def get_filtered_movies(self, page: int = 1, year: Optional[int] = None,
                            media_type: Optional[str] = None) -> Dict[str, Any]:
        """Get movies by optional year and type filters"""
        response = self._fetch(
            lambda: self.omdb_movie_service.get_filtered_movies(page=page, year=year, media_type=media_type),
            failure="Failed to apply filters",
            log_label="Filter error",
        )
        self._ensure_found(response, "No movies found with these filters")
        logger.info(
            f"Found {response.result_count} movies with filters - "
            f"Year: {year or 'Any'}, Type: {media_type or 'Any'}"
        )
        return response.data

    @staticmethod
    def _fetch(action: Callable[[], OMDBResponse], failure: str, log_label: str) -> OMDBResponse:
        try:
            return action()
        except OMDBError as e:
            logger.error(f"{log_label}: {e.message}")
            raise UpstreamErrorException(failure, details=e.message)

    @staticmethod
    def _ensure_found(response: OMDBResponse, message: str) -> None:
        if not response.success:
            raise UpstreamNotFoundException(message, upstream_message=response.error)
