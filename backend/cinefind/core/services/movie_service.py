import logging
import random
from typing import Dict, Iterable, Optional
from ..enums import MediaType
from ..interfaces import (
    KeywordSourceInterface, MovieServiceInterface, OMDBClientInterface, OMDBResponse
)

logger = logging.getLogger(__name__)

# OMDb has no trending endpoint; popular listings search one of these instead.
POPULAR_KEYWORDS = [
    "love", "hero", "war", "future", "king",
    "world", "space", "dragon", "night", "mission",
    "family", "adventure", "crime", "dream",
]

# Year listings search this generic term with a year constraint.
GENERIC_QUERY = "movie"

class RandomKeywordSource(KeywordSourceInterface):
    """Picks a keyword pseudo-randomly from a fixed vocabulary"""

    def __init__(self, keywords: Optional[Iterable[str]] = None, rng: Optional[random.Random] = None):
        self.keywords = list(POPULAR_KEYWORDS if keywords is None else keywords)
        if not self.keywords:
            raise ValueError("keyword vocabulary must not be empty")
        self.rng = rng or random.Random()

    def pick(self) -> str:
        return self.rng.choice(self.keywords)

class MovieService(MovieServiceInterface):
    """Service class for movie-related operations"""

    def __init__(self, client: OMDBClientInterface, keyword_source: Optional[KeywordSourceInterface] = None):
        self.client = client
        self.keyword_source = keyword_source or RandomKeywordSource()

    def search_movies(self, query: str, page: int = 1) -> OMDBResponse:
        """Search movies by title"""
        params = {"s": query, "page": page, "type": MediaType.MOVIE.value}
        return self.client.make_request(params)

    def get_movie_details(self, imdb_id: str) -> OMDBResponse:
        """Get full movie details by IMDb ID"""
        params = {"i": imdb_id, "plot": "full"}
        return self.client.make_request(params)

    def get_popular_movies(self, page: int = 1) -> OMDBResponse:
        """Get a stand-in popular listing by searching a keyword"""
        keyword = self.keyword_source.pick()
        logger.info(f"Fetching popular movies using keyword: {keyword}")
        return self.search_movies(keyword, page)

    def get_movies_by_year(self, year: int) -> OMDBResponse:
        """Get movies released in a given year"""
        params = {"s": GENERIC_QUERY, "y": year, "type": MediaType.MOVIE.value}
        return self.client.make_request(params)

    def get_filtered_movies(self, page: int = 1, year: Optional[int] = None,
                            media_type: Optional[str] = None) -> OMDBResponse:
        """Get movies matching optional year and type filters"""
        params: Dict = {"s": GENERIC_QUERY, "page": page}
        if year:
            params["y"] = year
        if media_type:
            params["type"] = media_type
        return self.client.make_request(params)
