import asyncio
import threading
from typing import Dict, List, Tuple
from unittest.mock import Mock

import pytest
import requests

from cinefind.client.api_client import FetchResult, ProxyClient
from cinefind.client.controller import ViewController
from cinefind.client.state import PaginationState
from cinefind.client.watchlist import WatchlistStore
from cinefind.core.enums import FilterMode, NotificationLevel, ViewPanel, ViewStatus
from cinefind.repositories.watchlist_repository import InMemoryWatchlistRepository
from cinefind.schemas.movie import MovieSummary


class FakeProxyClient:
    """Returns scripted FetchResults per method and records each call"""

    def __init__(self):
        self.calls: List[Tuple] = []
        self.results: Dict[str, List[FetchResult]] = {"search": [], "popular": [], "detail": []}
        self.gate = None
        self.gated = ("search", "popular", "detail")

    def _next(self, kind: str) -> FetchResult:
        if self.gate is not None and kind in self.gated:
            self.gate.wait(timeout=5)
        queue = self.results[kind]
        return queue.pop(0) if queue else FetchResult.failure("No movies found", 404)

    def search_movies(self, query, page=1):
        self.calls.append(("search", query, page))
        return self._next("search")

    def get_popular_movies(self, page=1):
        self.calls.append(("popular", page))
        return self._next("popular")

    def get_movie_detail(self, movie_id):
        self.calls.append(("detail", movie_id))
        return self._next("detail")


@pytest.fixture
def proxy():
    return FakeProxyClient()


@pytest.fixture
def controller(proxy):
    return ViewController(proxy, WatchlistStore(InMemoryWatchlistRepository()))


def test_batman_search_then_load_more(controller, proxy, search_payload):
    proxy.results["search"] += [
        FetchResult.success(search_payload(10)),
        FetchResult.success(search_payload(7, start=10)),
    ]

    asyncio.run(controller.search("batman"))
    first = controller.view()

    assert controller.state.status == ViewStatus.LOADED
    assert first.panel == ViewPanel.GRID
    assert len(first.cards) == 10
    assert first.load_more_visible
    assert controller.state.pagination.page == 1

    asyncio.run(controller.load_more())
    second = controller.view()

    assert controller.state.pagination.page == 2
    assert len(second.cards) == 17
    assert [card.id for card in second.cards[:10]] == [card.id for card in first.cards]
    assert proxy.calls == [("search", "batman", 1), ("search", "batman", 2)]


def test_empty_search_term_is_ignored(controller, proxy):
    before = controller.state

    asyncio.run(controller.search("   "))

    assert controller.state is before
    assert proxy.calls == []


def test_not_found_response_shows_no_results(controller, proxy):
    asyncio.run(controller.search("qwertyuiop"))

    assert controller.state.status == ViewStatus.EMPTY
    assert controller.view().panel == ViewPanel.NO_RESULTS
    assert not controller.view().load_more_visible


def test_false_discriminator_in_ok_payload_shows_no_results(controller, proxy):
    proxy.results["popular"].append(FetchResult.success({"Response": "False", "Error": "Too many results."}))

    asyncio.run(controller.load_popular())

    assert controller.state.status == ViewStatus.EMPTY


def test_proxy_error_message_is_shown_verbatim(controller, proxy):
    proxy.results["search"].append(FetchResult.failure("Search failed", 500))

    asyncio.run(controller.search("batman"))
    model = controller.view()

    assert controller.state.status == ViewStatus.ERRORED
    assert model.panel == ViewPanel.ERROR
    assert model.error_text == "Search failed"


def test_malformed_payload_is_an_error(controller, proxy):
    proxy.results["search"].append(FetchResult.success({"Search": [{"Title": "No id"}], "Response": "True"}))

    asyncio.run(controller.search("batman"))

    assert controller.state.status == ViewStatus.ERRORED
    assert controller.state.error_message == "Malformed response"


def test_client_exception_degrades_to_error(controller, proxy):
    proxy.search_movies = Mock(side_effect=RuntimeError("socket closed"))

    asyncio.run(controller.search("batman"))

    assert controller.state.status == ViewStatus.ERRORED
    assert controller.state.error_message == "socket closed"


def test_concurrent_load_more_issues_one_request(controller, proxy, search_payload):
    proxy.results["popular"] += [
        FetchResult.success(search_payload(10)),
        FetchResult.success(search_payload(10, start=10)),
    ]
    asyncio.run(controller.start())
    proxy.calls.clear()
    proxy.gate = threading.Event()

    async def click_twice():
        first = asyncio.ensure_future(controller.load_more())
        await asyncio.sleep(0)
        assert controller.state.load_more_in_flight
        await controller.load_more()
        proxy.gate.set()
        await first

    asyncio.run(click_twice())

    assert proxy.calls == [("popular", 2)]
    assert controller.state.pagination.page == 2
    assert len(controller.state.movies) == 20
    assert not controller.state.load_more_in_flight


def _start_with_gated_load_more(controller, proxy, search_payload):
    proxy.results["popular"] += [
        FetchResult.success(search_payload(10)),
        FetchResult.success(search_payload(10, start=10)),
    ]
    asyncio.run(controller.start())
    proxy.calls.clear()
    proxy.gate = threading.Event()
    proxy.gated = ("popular",)


def test_failed_details_keep_load_more_guard(controller, proxy, search_payload):
    _start_with_gated_load_more(controller, proxy, search_payload)

    async def scenario():
        pending = asyncio.ensure_future(controller.load_more())
        await asyncio.sleep(0)
        await controller.show_details("tt0000000")
        assert controller.state.error_message == "Failed to load movie details"
        assert controller.state.load_more_in_flight
        await controller.load_more()
        proxy.gate.set()
        await pending

    asyncio.run(scenario())

    assert proxy.calls.count(("popular", 2)) == 1
    assert ("detail", "tt0000000") in proxy.calls
    assert controller.state.pagination.page == 2
    assert len(controller.state.movies) == 20
    assert not controller.state.load_more_in_flight


def test_page_from_superseded_listing_is_dropped(controller, proxy, search_payload):
    _start_with_gated_load_more(controller, proxy, search_payload)
    proxy.results["search"].append(FetchResult.failure("Search failed", 500))

    async def scenario():
        pending = asyncio.ensure_future(controller.load_more())
        await asyncio.sleep(0)
        await controller.search("batman")
        assert controller.state.status == ViewStatus.ERRORED
        assert controller.state.load_more_in_flight
        await controller.load_more()
        proxy.gate.set()
        await pending

    asyncio.run(scenario())

    assert proxy.calls.count(("popular", 2)) == 1
    assert controller.state.status == ViewStatus.ERRORED
    assert controller.state.error_message == "Search failed"
    assert controller.state.pagination == PaginationState(1, FilterMode.SEARCH, "batman")
    assert len(controller.state.movies) == 10
    assert not controller.state.load_more_in_flight


def test_load_more_requires_visible_button(controller, proxy):
    asyncio.run(controller.search("qwertyuiop"))
    asyncio.run(controller.load_more())

    assert proxy.calls == [("search", "qwertyuiop", 1)]

    controller.toggle_watchlist(MovieSummary(id="tt0111161", title="The Shawshank Redemption", year="1994"))
    controller.show_watchlist()
    asyncio.run(controller.load_more())

    assert proxy.calls == [("search", "qwertyuiop", 1)]
    assert [movie.id for movie in controller.state.movies] == ["tt0111161"]


def test_load_more_without_more_results_keeps_movies(controller, proxy, search_payload):
    proxy.results["search"].append(FetchResult.success(search_payload(10)))
    asyncio.run(controller.search("batman"))

    asyncio.run(controller.load_more())

    assert controller.state.status == ViewStatus.LOADED
    assert len(controller.view().cards) == 10
    assert controller.state.pagination.page == 1
    assert not controller.view().load_more_visible


def test_load_more_failure(controller, proxy, search_payload):
    proxy.results["search"] += [
        FetchResult.success(search_payload(10)),
        FetchResult.failure("connection reset"),
    ]
    asyncio.run(controller.search("batman"))

    asyncio.run(controller.load_more())

    assert controller.state.status == ViewStatus.ERRORED
    assert controller.state.error_message == "Failed to load more movies"
    assert not controller.state.load_more_in_flight


def test_new_search_resets_pagination(controller, proxy, search_payload):
    proxy.results["search"] += [
        FetchResult.success(search_payload(10)),
        FetchResult.success(search_payload(10, start=10)),
        FetchResult.success(search_payload(3, title="Alien")),
    ]
    asyncio.run(controller.search("batman"))
    asyncio.run(controller.load_more())

    asyncio.run(controller.search("alien"))

    assert controller.state.pagination.page == 1
    assert controller.state.pagination.search_term == "alien"
    assert len(controller.state.movies) == 3
    assert proxy.calls[-1] == ("search", "alien", 1)


def test_navigate(controller, proxy, search_payload):
    proxy.results["popular"].append(FetchResult.success(search_payload(10)))

    asyncio.run(controller.navigate("popular"))
    assert controller.state.pagination.filter_mode == FilterMode.POPULAR
    assert proxy.calls == [("popular", 1)]

    asyncio.run(controller.navigate("search"))
    assert controller.view().search_focused
    assert len(proxy.calls) == 1


def test_show_details(controller, proxy):
    proxy.results["detail"].append(FetchResult.success({
        "imdbID": "tt0111161",
        "Title": "The Shawshank Redemption",
        "Year": "1994",
        "Runtime": "142 min",
        "imdbRating": "9.3",
        "Genre": "Drama",
        "Director": "Frank Darabont",
        "Actors": "Tim Robbins, Morgan Freeman, Bob Gunton",
        "Plot": "N/A",
        "Response": "True",
    }))

    asyncio.run(controller.show_details("tt0111161"))
    detail = controller.view().detail

    assert detail.movie.cast == ["Tim Robbins", "Morgan Freeman", "Bob Gunton"]
    assert detail.movie.plot is None
    assert detail.watchlist_label == "Add to Watchlist"

    controller.toggle_watchlist(detail.movie)
    assert controller.view().detail.watchlist_label == "Remove from Watchlist"

    controller.close_details()
    assert controller.view().detail is None


def test_show_details_failure(controller, proxy):
    asyncio.run(controller.show_details("tt0000000"))

    assert controller.state.status == ViewStatus.ERRORED
    assert controller.state.error_message == "Failed to load movie details"


def test_toggle_watchlist_updates_badge_and_cards(controller, proxy, search_payload):
    proxy.results["search"].append(FetchResult.success(search_payload(3)))
    asyncio.run(controller.search("batman"))
    movie = controller.state.movies[0]

    assert controller.toggle_watchlist(movie) is True
    model = controller.view()
    assert model.watchlist_count == 1
    assert model.cards[0].in_watchlist
    assert model.notification.message == "Added to watchlist!"
    assert model.notification.level == NotificationLevel.SUCCESS

    assert controller.toggle_watchlist(movie) is False
    model = controller.view()
    assert model.watchlist_count == 0
    assert model.notification.level == NotificationLevel.WARNING


def test_show_watchlist(controller):
    controller.show_watchlist()
    assert controller.state.notification.message == "Your watchlist is empty!"
    assert controller.state.status == ViewStatus.IDLE

    controller.toggle_watchlist(MovieSummary(id="tt0111161", title="The Shawshank Redemption", year="1994"))
    controller.show_watchlist()
    model = controller.view()

    assert [card.id for card in model.cards] == ["tt0111161"]
    assert all(card.in_watchlist for card in model.cards)
    assert not model.load_more_visible
    assert model.notification.message == "Showing 1 movies in your watchlist"


def _proxy_client(status_code=200, payload=None, json_error=None, get_error=None):
    session = Mock()
    session.headers = {}
    response = Mock(status_code=status_code)
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = payload
    if get_error is not None:
        session.get.side_effect = get_error
    else:
        session.get.return_value = response
    return ProxyClient(base_url="http://proxy.test/", session=session), session


def test_proxy_client_success():
    client, session = _proxy_client(payload={"Search": [], "Response": "True"})

    result = client.search_movies("batman", 2)

    assert result.ok
    session.get.assert_called_once_with(
        "http://proxy.test/api/movies/search",
        params={"q": "batman", "page": 2},
        timeout=30,
    )


def test_proxy_client_error_envelope():
    client, _ = _proxy_client(status_code=404, payload={"error": "No movies found", "message": "Movie not found!"})

    result = client.get_popular_movies()

    assert not result.ok
    assert result.not_found
    assert result.error == "No movies found"


def test_proxy_client_transport_and_parse_failures():
    client, _ = _proxy_client(get_error=requests.exceptions.ConnectionError("refused"))
    result = client.get_movie_detail("tt0111161")
    assert not result.ok and result.status_code is None and "refused" in result.error

    client, _ = _proxy_client(status_code=502, json_error=ValueError("Expecting value"))
    result = client.get_movie_detail("tt0111161")
    assert not result.ok and not result.not_found


def test_create_view_controller_wires_settings():
    from cinefind.client.controller import create_view_controller
    from cinefind.core.config import Settings

    controller = create_view_controller(Settings(
        WATCHLIST_BACKEND="memory",
        PROXY_BASE_URL="http://proxy.test:3000/",
        PROXY_TIMEOUT=5,
    ))

    assert controller.client.base_url == "http://proxy.test:3000"
    assert controller.client.timeout == 5
    assert isinstance(controller.store.repository, InMemoryWatchlistRepository)
    assert controller.state.status == ViewStatus.IDLE
