from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Tuple

from cinefind.client.state import Notification, ViewState
from cinefind.client.watchlist import WatchlistStore
from cinefind.core.enums import ViewPanel, ViewStatus
from cinefind.schemas.movie import MovieDetail

SKELETON_CARD_COUNT = 8
EARLIEST_FILTER_YEAR = 1950

@dataclass(frozen=True)
class MovieCard:
    id: str
    title: str
    year: Optional[str]
    poster_url: Optional[str]
    media_type: str
    in_watchlist: bool

@dataclass(frozen=True)
class DetailView:
    movie: MovieDetail
    in_watchlist: bool

    @property
    def watchlist_label(self) -> str:
        return "Remove from Watchlist" if self.in_watchlist else "Add to Watchlist"

@dataclass(frozen=True)
class ViewModel:
    panel: ViewPanel
    cards: Tuple[MovieCard, ...]
    skeleton_cards: int
    load_more_visible: bool
    load_more_busy: bool
    error_text: Optional[str]
    watchlist_count: int
    detail: Optional[DetailView]
    notification: Optional[Notification]
    search_focused: bool

def _panel_for(state: ViewState) -> ViewPanel:
    if state.status == ViewStatus.LOADING:
        # A load-more keeps the grid on screen while the next page arrives
        return ViewPanel.GRID if state.load_more_in_flight and state.load_more_visible else ViewPanel.SKELETON
    return {
        ViewStatus.IDLE: ViewPanel.IDLE,
        ViewStatus.LOADED: ViewPanel.GRID,
        ViewStatus.EMPTY: ViewPanel.NO_RESULTS,
        ViewStatus.ERRORED: ViewPanel.ERROR,
    }[state.status]

def render(state: ViewState, store: WatchlistStore) -> ViewModel:
    """Project the view state onto what the page shows"""
    panel = _panel_for(state)
    cards = tuple(
        MovieCard(
            id=movie.id,
            title=movie.title,
            year=movie.year,
            poster_url=movie.poster_url,
            media_type=movie.media_type,
            in_watchlist=store.is_member(movie.id),
        )
        for movie in state.movies
    ) if panel == ViewPanel.GRID else ()

    detail = None
    if state.detail is not None:
        detail = DetailView(movie=state.detail, in_watchlist=store.is_member(state.detail.id))

    return ViewModel(
        panel=panel,
        cards=cards,
        skeleton_cards=SKELETON_CARD_COUNT if panel == ViewPanel.SKELETON else 0,
        load_more_visible=panel == ViewPanel.GRID and (state.load_more_visible or state.load_more_in_flight),
        load_more_busy=state.load_more_in_flight,
        error_text=state.error_message if panel == ViewPanel.ERROR else None,
        watchlist_count=store.count(),
        detail=detail,
        notification=state.notification,
        search_focused=state.search_focused,
    )

def year_filter_options(current_year: Optional[int] = None, earliest: int = EARLIEST_FILTER_YEAR) -> List[int]:
    """Years offered by the year filter, newest first"""
    current_year = current_year or date.today().year
    return list(range(current_year, earliest - 1, -1))
