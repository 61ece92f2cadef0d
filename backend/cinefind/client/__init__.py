from .api_client import FetchResult, ProxyClient
from .controller import ViewController, create_view_controller
from .render import ViewModel, render, year_filter_options
from .state import PaginationState, ViewState
from .watchlist import WatchlistStore

__all__ = [
    "FetchResult",
    "ProxyClient",
    "ViewController",
    "create_view_controller",
    "ViewModel",
    "render",
    "year_filter_options",
    "PaginationState",
    "ViewState",
    "WatchlistStore",
]
