from fastapi import APIRouter, Depends, Path, Query
from typing import Any, Dict, Optional

from cinefind.core.enums import MediaType
from cinefind.schemas.movie import ErrorResponse
from cinefind.services.movie_service import MovieService

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Missing or malformed parameters"},
    404: {"model": ErrorResponse, "description": "OMDb returned no results"},
    500: {"model": ErrorResponse, "description": "OMDb request failed"},
}

router = APIRouter(prefix="/api", tags=["movies"], responses=ERROR_RESPONSES)

_movie_service: Optional[MovieService] = None

def get_movie_service() -> MovieService:
    """Dependency returning the shared movie service"""
    global _movie_service
    if _movie_service is None:
        _movie_service = MovieService()
    return _movie_service

# OMDb Movie Operations
@router.get("/movies/search")
def search_movies(
    q: Optional[str] = Query(None, description="Search query"),
    page: int = Query(1, ge=1, description="Page number"),
    movie_service: MovieService = Depends(get_movie_service)
) -> Dict[str, Any]:
    return movie_service.search_movies(q, page)

@router.get("/movies/popular")
def get_popular_movies(
    page: int = Query(1, ge=1, description="Page number"),
    movie_service: MovieService = Depends(get_movie_service)
) -> Dict[str, Any]:
    return movie_service.get_popular_movies(page)

@router.get("/movies/filtered")
def get_filtered_movies(
    year: Optional[int] = Query(None, ge=1, description="Release year"),
    media_type: Optional[MediaType] = Query(None, alias="type", description="'movie', 'series' or 'episode'"),
    page: int = Query(1, ge=1, description="Page number"),
    movie_service: MovieService = Depends(get_movie_service)
) -> Dict[str, Any]:
    return movie_service.get_filtered_movies(
        page=page,
        year=year,
        media_type=media_type.value if media_type else None,
    )

@router.get("/movies/year/{year}")
def get_movies_by_year(
    year: int = Path(..., ge=1, description="Release year"),
    movie_service: MovieService = Depends(get_movie_service)
) -> Dict[str, Any]:
    return movie_service.get_movies_by_year(year)

@router.get("/movie/{imdb_id}")
def get_movie_detail(
    imdb_id: str = Path(..., description="IMDb ID, e.g. tt0111161"),
    movie_service: MovieService = Depends(get_movie_service)
) -> Dict[str, Any]:
    return movie_service.get_movie_detail(imdb_id)
