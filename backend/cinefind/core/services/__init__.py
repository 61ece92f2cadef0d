from .movie_service import MovieService, RandomKeywordSource, POPULAR_KEYWORDS

__all__ = [
    "MovieService",
    "RandomKeywordSource",
    "POPULAR_KEYWORDS",
]
