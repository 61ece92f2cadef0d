"""View state and the pure functions that move it between states.

Every function takes a ViewState and returns a new one; nothing here does
I/O. The controller feeds network results in and renders what comes out.
"""
from dataclasses import dataclass, field, replace
from typing import Optional, Sequence, Tuple

from cinefind.core.enums import FilterMode, NotificationLevel, ViewStatus
from cinefind.schemas.movie import MovieDetail, MovieSummary, WatchlistEntry

LOAD_MORE_FAILED = "Failed to load more movies"

@dataclass(frozen=True)
class PaginationState:
    page: int = 1
    filter_mode: FilterMode = FilterMode.POPULAR
    search_term: str = ""

    def __post_init__(self):
        if self.page < 1:
            raise ValueError("page must be >= 1")

@dataclass(frozen=True)
class Notification:
    message: str
    level: NotificationLevel = NotificationLevel.INFO

@dataclass(frozen=True)
class ViewState:
    status: ViewStatus = ViewStatus.IDLE
    pagination: PaginationState = field(default_factory=PaginationState)
    movies: Tuple[MovieSummary, ...] = ()
    load_more_visible: bool = False
    load_more_in_flight: bool = False
    error_message: Optional[str] = None
    detail: Optional[MovieDetail] = None
    search_focused: bool = False
    notification: Optional[Notification] = None
    generation: int = 0

# Loading

def begin_search(state: ViewState, term: str) -> ViewState:
    return _begin_fresh_load(state, PaginationState(1, FilterMode.SEARCH, term))

def begin_popular(state: ViewState) -> ViewState:
    return _begin_fresh_load(state, PaginationState(1, FilterMode.POPULAR, ""))

def _begin_fresh_load(state: ViewState, pagination: PaginationState) -> ViewState:
    return replace(
        state,
        generation=state.generation + 1,
        status=ViewStatus.LOADING,
        pagination=pagination,
        load_more_visible=False,
        error_message=None,
        search_focused=False,
    )

def begin_load_more(state: ViewState) -> ViewState:
    """Mark a load-more as in flight; unchanged if one already is"""
    if state.load_more_in_flight:
        return state
    return replace(state, status=ViewStatus.LOADING, load_more_in_flight=True, error_message=None)

def next_page(state: ViewState) -> int:
    return state.pagination.page + 1

# Results

def apply_page(state: ViewState, movies: Sequence[MovieSummary]) -> ViewState:
    """Replace the visible movies with a freshly loaded first page"""
    if not movies:
        return apply_no_results(state)
    return replace(
        state,
        status=ViewStatus.LOADED,
        movies=tuple(movies),
        load_more_visible=True,
        error_message=None,
    )

def apply_no_results(state: ViewState) -> ViewState:
    return replace(
        state,
        status=ViewStatus.EMPTY,
        movies=(),
        load_more_visible=False,
        error_message=None,
    )

def apply_error(state: ViewState, message: str) -> ViewState:
    return replace(
        state,
        status=ViewStatus.ERRORED,
        load_more_visible=False,
        error_message=message,
    )

def apply_load_more_page(state: ViewState, movies: Sequence[MovieSummary]) -> ViewState:
    """Append the next page; an empty page only hides the load-more button"""
    state = replace(state, load_more_in_flight=False, status=ViewStatus.LOADED, error_message=None)
    if not movies:
        return replace(state, load_more_visible=False)
    return replace(
        state,
        pagination=replace(state.pagination, page=next_page(state)),
        movies=state.movies + tuple(movies),
        load_more_visible=True,
    )

def apply_load_more_error(state: ViewState, message: str = LOAD_MORE_FAILED) -> ViewState:
    return replace(apply_error(state, message), load_more_in_flight=False)

def drop_load_more(state: ViewState) -> ViewState:
    """Release the load-more guard without touching the visible results"""
    return replace(state, load_more_in_flight=False)

# Watchlist and detail views

def show_watchlist(state: ViewState, entries: Sequence[WatchlistEntry]) -> ViewState:
    return replace(
        state,
        generation=state.generation + 1,
        status=ViewStatus.LOADED,
        movies=tuple(entry.to_summary() for entry in entries),
        load_more_visible=False,
        error_message=None,
    )

def open_detail(state: ViewState, detail: MovieDetail) -> ViewState:
    return replace(state, detail=detail)

def close_detail(state: ViewState) -> ViewState:
    return replace(state, detail=None)

def focus_search(state: ViewState) -> ViewState:
    return replace(state, search_focused=True)

def notify(state: ViewState, message: str, level: NotificationLevel = NotificationLevel.INFO) -> ViewState:
    return replace(state, notification=Notification(message, level))
