import logging
from typing import Optional
from .config import get_settings
from .interfaces import KeywordSourceInterface, OMDBConfig
from .omdb_client import OMDBClient
from .services import MovieService

# Configure logging
logging.basicConfig(level=get_settings().LOG_LEVEL)
logger = logging.getLogger(__name__)

class OMDBServiceFactory:
    """Factory class for creating OMDb services"""

    @staticmethod
    def create_movie_service(api_key: str = None, base_url: str = None, timeout: int = None,
                             keyword_source: Optional[KeywordSourceInterface] = None) -> MovieService:
        """Create a new movie service instance, filling gaps from settings"""
        settings = get_settings()
        if api_key is None:
            api_key = settings.OMDB_API_KEY
        if not api_key:
            logger.warning("OMDB_API_KEY is not configured; upstream requests will be rejected")

        config = OMDBConfig(
            api_key=api_key,
            base_url=base_url or settings.OMDB_BASE_URL,
            timeout=timeout or settings.OMDB_TIMEOUT,
        )
        client = OMDBClient(config)
        return MovieService(client, keyword_source)
