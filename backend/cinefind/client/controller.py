import asyncio
import logging
from functools import partial
from typing import Callable, Optional

from pydantic import ValidationError

from cinefind.client import state as view
from cinefind.client.api_client import FetchResult, ProxyClient
from cinefind.client.render import ViewModel, render
from cinefind.client.state import ViewState
from cinefind.client.watchlist import WatchlistStore
from cinefind.core.config import Settings, get_settings
from cinefind.core.enums import FilterMode, NavTarget, NotificationLevel
from cinefind.repositories.watchlist_repository import create_watchlist_repository
from cinefind.schemas.movie import MovieDetail, MovieSummary, SearchPage

logger = logging.getLogger(__name__)

DETAILS_FAILED = "Failed to load movie details"

class ViewController:
    """Drives the view state from user actions and proxy responses

    Fresh loads (search, popular) never wait for each other: whichever
    response lands last decides the visible state. Load-more is skipped
    while another load-more is still in flight.
    """

    def __init__(self, client: ProxyClient, store: WatchlistStore, state: Optional[ViewState] = None):
        self.client = client
        self.store = store
        self.state = state or ViewState()

    def view(self) -> ViewModel:
        return render(self.state, self.store)

    async def start(self) -> ViewState:
        """Initial page: the popular listing"""
        return await self.load_popular()

    async def search(self, term: str) -> ViewState:
        term = (term or "").strip()
        if not term:
            return self.state

        self.state = view.begin_search(self.state, term)
        result = await self._fetch(self.client.search_movies, term, 1)
        self.state = self._apply_fresh(self.state, result)
        return self.state

    async def load_popular(self) -> ViewState:
        self.state = view.begin_popular(self.state)
        result = await self._fetch(self.client.get_popular_movies, 1)
        self.state = self._apply_fresh(self.state, result)
        return self.state

    async def load_more(self) -> ViewState:
        if self.state.load_more_in_flight or not self.state.load_more_visible:
            return self.state

        self.state = view.begin_load_more(self.state)
        pagination = self.state.pagination
        generation = self.state.generation
        page = view.next_page(self.state)
        if pagination.filter_mode == FilterMode.SEARCH:
            result = await self._fetch(self.client.search_movies, pagination.search_term, page)
        else:
            result = await self._fetch(self.client.get_popular_movies, page)

        # a search or popular load started meanwhile; this page belongs to the old query
        if self.state.generation != generation:
            logger.info(f"Dropping page {page} of a superseded {pagination.filter_mode.value} listing")
            self.state = view.drop_load_more(self.state)
            return self.state

        if result.ok:
            page_data = self._parse_page(result)
            if page_data is None:
                self.state = view.apply_load_more_error(self.state)
            else:
                movies = page_data.search if page_data.has_results else []
                self.state = view.apply_load_more_page(self.state, movies)
        elif result.not_found:
            self.state = view.apply_load_more_page(self.state, [])
        else:
            self.state = view.apply_load_more_error(self.state)
        return self.state

    async def show_details(self, movie_id: str) -> ViewState:
        result = await self._fetch(self.client.get_movie_detail, movie_id)
        if not result.ok:
            self.state = view.apply_error(self.state, DETAILS_FAILED)
            return self.state

        try:
            detail = MovieDetail.model_validate(result.data)
        except ValidationError as e:
            logger.error(f"Malformed movie details for {movie_id}: {e.error_count()} error(s)")
            self.state = view.apply_error(self.state, DETAILS_FAILED)
            return self.state

        self.state = view.open_detail(self.state, detail)
        return self.state

    def close_details(self) -> ViewState:
        self.state = view.close_detail(self.state)
        return self.state

    def toggle_watchlist(self, movie: MovieSummary) -> bool:
        added = self.store.toggle(movie)
        if added:
            self.state = view.notify(self.state, "Added to watchlist!", NotificationLevel.SUCCESS)
        else:
            self.state = view.notify(self.state, "Removed from watchlist", NotificationLevel.WARNING)
        return added

    def show_watchlist(self) -> ViewState:
        entries = self.store.entries()
        if not entries:
            self.state = view.notify(self.state, "Your watchlist is empty!")
            return self.state

        self.state = view.show_watchlist(self.state, entries)
        self.state = view.notify(self.state, f"Showing {len(entries)} movies in your watchlist")
        return self.state

    async def navigate(self, target: str) -> ViewState:
        if target == NavTarget.POPULAR.value:
            return await self.load_popular()
        if target == NavTarget.SEARCH.value:
            self.state = view.focus_search(self.state)
        return self.state

    async def _fetch(self, func: Callable[..., FetchResult], *args) -> FetchResult:
        loop = asyncio.get_running_loop()
        try:
            return await loop.run_in_executor(None, partial(func, *args))
        except Exception as e:
            logger.error(f"Proxy call {getattr(func, '__name__', func)} failed: {str(e)}")
            return FetchResult.failure(str(e))

    def _apply_fresh(self, state: ViewState, result: FetchResult) -> ViewState:
        if not result.ok:
            if result.not_found:
                return view.apply_no_results(state)
            return view.apply_error(state, result.error or "Request failed")

        page_data = self._parse_page(result)
        if page_data is None:
            return view.apply_error(state, "Malformed response")
        if not page_data.has_results:
            return view.apply_no_results(state)
        return view.apply_page(state, page_data.search)

    @staticmethod
    def _parse_page(result: FetchResult) -> Optional[SearchPage]:
        try:
            return SearchPage.model_validate(result.data)
        except ValidationError as e:
            logger.error(f"Malformed search payload: {e.error_count()} error(s)")
            return None

def create_view_controller(settings: Optional[Settings] = None) -> ViewController:
    """Wire a controller from settings: proxy client plus persisted watchlist"""
    settings = settings or get_settings()
    client = ProxyClient(base_url=settings.PROXY_BASE_URL, timeout=settings.PROXY_TIMEOUT)
    store = WatchlistStore(create_watchlist_repository(settings))
    return ViewController(client, store)
