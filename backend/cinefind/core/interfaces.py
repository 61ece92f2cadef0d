from abc import ABC, abstractmethod
from typing import Dict, Optional
from dataclasses import dataclass

@dataclass
class OMDBConfig:
    """Configuration class for OMDb API"""
    api_key: str
    base_url: str = "http://www.omdbapi.com/"
    timeout: int = 10

class OMDBResponse:
    """Response wrapper for OMDb API calls

    OMDb answers HTTP 200 for lookups that found nothing and signals the
    outcome through the ``Response`` discriminator; ``success`` mirrors it.
    """
    def __init__(self, data: Dict, status_code: int, success: bool):
        self.data = data
        self.status_code = status_code
        self.success = success

    @property
    def error(self) -> Optional[str]:
        return self.data.get("Error")

    @property
    def result_count(self) -> int:
        return len(self.data.get("Search") or [])

class OMDBError(Exception):
    """Custom exception for OMDb transport and payload errors"""
    def __init__(self, message: str, status_code: int = None):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)

class OMDBClientInterface(ABC):
    """Abstract interface for OMDb client"""

    @abstractmethod
    def make_request(self, params: Dict = None) -> OMDBResponse:
        pass

class KeywordSourceInterface(ABC):
    """Supplies the search keyword behind the popular listing"""

    @abstractmethod
    def pick(self) -> str:
        pass

class MovieServiceInterface(ABC):
    """Abstract interface for movie service"""

    @abstractmethod
    def search_movies(self, query: str, page: int = 1) -> OMDBResponse:
        pass

    @abstractmethod
    def get_movie_details(self, imdb_id: str) -> OMDBResponse:
        pass

    @abstractmethod
    def get_popular_movies(self, page: int = 1) -> OMDBResponse:
        pass

    @abstractmethod
    def get_movies_by_year(self, year: int) -> OMDBResponse:
        pass

    @abstractmethod
    def get_filtered_movies(self, page: int = 1, year: Optional[int] = None,
                            media_type: Optional[str] = None) -> OMDBResponse:
        pass
