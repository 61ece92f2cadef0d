from typing import Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from cinefind.core.interfaces import (
    KeywordSourceInterface, OMDBClientInterface, OMDBResponse
)
from cinefind.core.services.movie_service import MovieService as OMDBMovieService
from cinefind.main import app
from cinefind.routers.movies import get_movie_service
from cinefind.services.movie_service import MovieService

NOT_FOUND = {"Response": "False", "Error": "Movie not found!"}


class FakeOMDBClient(OMDBClientInterface):
    """Scripted OMDb client that records every query it receives"""

    def __init__(self):
        self.calls: List[Dict] = []
        self.responses: List[Dict] = []
        self.error: Optional[Exception] = None

    def make_request(self, params: Dict = None) -> OMDBResponse:
        self.calls.append(dict(params or {}))
        if self.error is not None:
            raise self.error
        data = self.responses.pop(0) if self.responses else NOT_FOUND
        return OMDBResponse(data, 200, data.get("Response") == "True")


class FixedKeywordSource(KeywordSourceInterface):
    def __init__(self, keyword: str):
        self.keyword = keyword

    def pick(self) -> str:
        return self.keyword


def make_search_payload(count: int = 10, start: int = 0, title: str = "Batman") -> Dict:
    return {
        "Search": [
            {
                "Title": f"{title} {i}",
                "Year": str(1990 + i),
                "imdbID": f"tt{1000000 + i}",
                "Type": "movie",
                "Poster": "N/A" if i % 2 else f"https://img.example/{i}.jpg",
            }
            for i in range(start, start + count)
        ],
        "totalResults": str(count * 3),
        "Response": "True",
    }


@pytest.fixture
def search_payload():
    return make_search_payload


@pytest.fixture
def omdb_client():
    return FakeOMDBClient()


@pytest.fixture
def api_client(omdb_client):
    service = MovieService(OMDBMovieService(omdb_client, FixedKeywordSource("space")))
    app.dependency_overrides[get_movie_service] = lambda: service
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
