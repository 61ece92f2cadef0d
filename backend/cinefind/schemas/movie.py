from pydantic import BaseModel, Field, field_validator
from typing import Optional, List, Dict, Any
from cinefind.core.enums import MediaType

# OMDb fills unknown fields with this sentinel
NOT_AVAILABLE = "N/A"

def _available(value: Any) -> Optional[Any]:
    if value is None or value == "" or value == NOT_AVAILABLE:
        return None
    return value

def _split_names(value: Any) -> List[str]:
    value = _available(value)
    if value is None:
        return []
    if isinstance(value, list):
        return [str(v).strip() for v in value if str(v).strip()]
    return [part.strip() for part in str(value).split(", ") if part.strip()]

# OMDb Response Schemas
class MovieSummary(BaseModel):
    """Search result item as returned by OMDb"""
    id: str = Field(..., alias="imdbID", min_length=1)
    title: str = Field(..., alias="Title")
    year: Optional[str] = Field(None, alias="Year")
    poster_url: Optional[str] = Field(None, alias="Poster")
    media_type: str = Field(MediaType.MOVIE.value, alias="Type")

    class Config:
        populate_by_name = True
        frozen = True

    @field_validator("poster_url", mode="before")
    @classmethod
    def _normalize_poster(cls, value):
        return _available(value)

    @field_validator("media_type", mode="before")
    @classmethod
    def _default_media_type(cls, value):
        return value or MediaType.MOVIE.value

class MovieDetail(MovieSummary):
    """Full record from an OMDb ``i=`` lookup"""
    plot: Optional[str] = Field(None, alias="Plot")
    runtime: Optional[str] = Field(None, alias="Runtime")
    rating: Optional[str] = Field(None, alias="imdbRating")
    genres: List[str] = Field(default_factory=list, alias="Genre")
    director: Optional[str] = Field(None, alias="Director")
    cast: List[str] = Field(default_factory=list, alias="Actors")

    @field_validator("plot", "runtime", "rating", "director", mode="before")
    @classmethod
    def _normalize_optional(cls, value):
        return _available(value)

    @field_validator("genres", "cast", mode="before")
    @classmethod
    def _split_lists(cls, value):
        return _split_names(value)

class SearchPage(BaseModel):
    """Success payload of an OMDb ``s=`` search"""
    search: List[MovieSummary] = Field(default_factory=list, alias="Search")
    total_results: Optional[int] = Field(None, alias="totalResults")
    response: Optional[str] = Field(None, alias="Response")
    error: Optional[str] = Field(None, alias="Error")

    class Config:
        populate_by_name = True

    @field_validator("search", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return value or []

    @property
    def has_results(self) -> bool:
        return self.response != "False" and len(self.search) > 0

# Watchlist Schemas
class WatchlistEntry(BaseModel):
    """Reduced projection of a movie kept in the watchlist

    Serialized with OMDb field names so stored documents keep the upstream
    key shape.
    """
    id: str = Field(..., alias="imdbID", min_length=1)
    title: str = Field(..., alias="Title")
    year: Optional[str] = Field(None, alias="Year")
    poster_url: Optional[str] = Field(None, alias="Poster")
    media_type: str = Field(MediaType.MOVIE.value, alias="Type")

    class Config:
        populate_by_name = True
        frozen = True

    @field_validator("poster_url", mode="before")
    @classmethod
    def _normalize_poster(cls, value):
        return _available(value)

    @field_validator("media_type", mode="before")
    @classmethod
    def _default_media_type(cls, value):
        return value or MediaType.MOVIE.value

    @classmethod
    def from_movie(cls, movie: MovieSummary) -> "WatchlistEntry":
        return cls(
            id=movie.id,
            title=movie.title,
            year=movie.year,
            poster_url=movie.poster_url,
            media_type=movie.media_type,
        )

    def to_summary(self) -> MovieSummary:
        return MovieSummary(
            id=self.id,
            title=self.title,
            year=self.year,
            poster_url=self.poster_url,
            media_type=self.media_type,
        )

    def to_storage(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)

# Envelope Schemas
class ErrorResponse(BaseModel):
    """Error envelope returned for every failed request"""
    error: str
    message: Optional[str] = None
    details: Optional[Any] = None

class HealthResponse(BaseModel):
    status: str
    timestamp: str
    service: str
