import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional
from urllib.parse import quote

import requests

from cinefind.core.config import get_settings

logger = logging.getLogger(__name__)

@dataclass
class FetchResult:
    """Outcome of one proxy call: either a payload or an error message"""
    ok: bool
    data: Dict[str, Any] = field(default_factory=dict)
    error: Optional[str] = None
    status_code: Optional[int] = None

    @property
    def not_found(self) -> bool:
        return not self.ok and self.status_code == 404

    @classmethod
    def success(cls, data: Dict[str, Any], status_code: int = 200) -> "FetchResult":
        return cls(ok=True, data=data, status_code=status_code)

    @classmethod
    def failure(cls, error: str, status_code: Optional[int] = None,
                data: Optional[Dict[str, Any]] = None) -> "FetchResult":
        return cls(ok=False, data=data or {}, error=error, status_code=status_code)

class ProxyClient:
    """HTTP client for the CineFind proxy

    Never raises for transport or HTTP failures; every call returns a
    FetchResult.
    """

    def __init__(self, base_url: str = None, timeout: int = None, session: requests.Session = None):
        settings = get_settings()
        self.base_url = (base_url or settings.PROXY_BASE_URL).rstrip("/")
        self.timeout = timeout or settings.PROXY_TIMEOUT
        self.session = session or requests.Session()
        self.session.headers.update({
            "accept": "application/json"
        })

    def search_movies(self, query: str, page: int = 1) -> FetchResult:
        return self._get("/api/movies/search", {"q": query, "page": page}, "Search failed")

    def get_popular_movies(self, page: int = 1) -> FetchResult:
        return self._get("/api/movies/popular", {"page": page}, "Failed to load movies")

    def get_movie_detail(self, movie_id: str) -> FetchResult:
        return self._get(f"/api/movie/{quote(movie_id, safe='')}", None, "Failed to load movie details")

    def _get(self, path: str, params: Optional[Dict[str, Any]], fallback_error: str) -> FetchResult:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.error(f"Request to {path} failed: {str(e)}")
            return FetchResult.failure(str(e))

        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"Invalid JSON from {path}: {str(e)}")
            return FetchResult.failure(f"Malformed response: {str(e)}", response.status_code)

        if not isinstance(data, dict):
            logger.error(f"Unexpected payload from {path}: {type(data).__name__}")
            return FetchResult.failure("Malformed response", response.status_code)

        if not 200 <= response.status_code < 300:
            logger.error(f"{path} answered {response.status_code}: {data.get('error')}")
            return FetchResult.failure(data.get("error") or fallback_error, response.status_code, data)

        return FetchResult.success(data, response.status_code)
