from enum import Enum

class MediaType(str, Enum):
    """OMDb result types - http://www.omdbapi.com/#parameters"""
    MOVIE = "movie"
    SERIES = "series"
    EPISODE = "episode"

class FilterMode(str, Enum):
    """Source of the paginated result list"""
    POPULAR = "popular"
    SEARCH = "search"

class ViewStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    EMPTY = "empty"
    ERRORED = "errored"

class ViewPanel(str, Enum):
    """Which main panel the page shows"""
    IDLE = "idle"
    SKELETON = "skeleton"
    GRID = "grid"
    NO_RESULTS = "no_results"
    ERROR = "error"

class NotificationLevel(str, Enum):
    SUCCESS = "success"
    WARNING = "warning"
    INFO = "info"
    ERROR = "error"

class NavTarget(str, Enum):
    POPULAR = "popular"
    SEARCH = "search"
