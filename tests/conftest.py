"""Shared fixtures: TMDb-shaped payloads and an in-memory metadata client."""

from __future__ import annotations

import copy
from typing import Any

import pytest

from movie_list.domain.errors import MalformedPayload, UpstreamUnavailable
from movie_list.domain.models import Locale, SearchMatch


def make_detail(movie_id: int, title: str, **overrides: Any) -> dict[str, Any]:
    detail: dict[str, Any] = {
        "id": movie_id,
        "title": title,
        "overview": f"Overview of {title}.",
        "release_date": "2010-07-16",
        "vote_average": 8.4,
        "runtime": 148,
        "poster_path": f"/{movie_id}.jpg",
        "genres": [{"id": 28, "name": "Action"}, {"id": 878, "name": "Science Fiction"}],
        "credits": {
            "cast": [{"id": i, "name": f"Actor {i}"} for i in range(1, 8)],
            "crew": [
                {"id": 100, "name": "Some Producer", "job": "Producer"},
                {"id": 101, "name": "Christopher Nolan", "job": "Director"},
                {"id": 102, "name": "Second Director", "job": "Director"},
            ],
        },
        "videos": {
            "results": [
                {"id": "a", "key": "teaser1", "site": "YouTube", "type": "Teaser"},
                {"id": "b", "key": "vimeo1", "site": "Vimeo", "type": "Trailer"},
                {"id": "c", "key": "YoHD9XEInc0", "site": "YouTube", "type": "Trailer"},
            ]
        },
    }
    detail.update(overrides)
    return detail


class FakeClient:
    """In-memory stand-in for TMDBClient.

    ``catalog`` maps a query to its search hits; ``details`` maps an id to a
    detail payload. Entries set to an exception instance are raised instead.
    """

    def __init__(
        self,
        catalog: dict[str, Any] | None = None,
        details: dict[int, Any] | None = None,
        locales: list[Locale] | None = None,
        default_locale: str = "en-US",
    ) -> None:
        self.catalog = catalog or {}
        self.details = details or {}
        self.locales = locales or []
        self.default_locale = default_locale
        self.calls: list[tuple[str, Any, str | None]] = []

    def search(self, query: str, locale: str | None = None) -> list[SearchMatch]:
        self.calls.append(("search", query, locale))
        hits = self.catalog.get(query, [])
        if isinstance(hits, Exception):
            raise hits
        return list(hits)

    def fetch_detail(self, movie_id: int, locale: str | None = None) -> dict[str, Any]:
        self.calls.append(("fetch_detail", movie_id, locale))
        detail = self.details.get(movie_id)
        if detail is None:
            raise UpstreamUnavailable(f"TMDb answered 404 for /movie/{movie_id}.")
        if isinstance(detail, Exception):
            raise detail
        return copy.deepcopy(detail)

    def list_locales(self) -> list[Locale]:
        return list(self.locales)


@pytest.fixture
def fake_client() -> FakeClient:
    return FakeClient(
        catalog={
            "Inception": [
                SearchMatch(27205, "Inception", "2010-07-15"),
                SearchMatch(64956, "Inception: The Cobol Job", "2010-12-07"),
            ],
            "The Matrix": [SearchMatch(603, "The Matrix", "1999-03-30")],
            "Heat": [SearchMatch(949, "Heat", "1995-12-15")],
            "Broken": MalformedPayload("Unexpected search payload for 'Broken'."),
            "Offline": UpstreamUnavailable("TMDb request to /search/movie failed"),
        },
        details={
            27205: make_detail(27205, "Inception"),
            603: make_detail(
                603,
                "The Matrix",
                genres=[{"id": 28, "name": "Action"}],
                release_date="1999-03-30",
            ),
            949: make_detail(
                949,
                "Heat",
                genres=[{"id": 80, "name": "Crime"}, {"id": 18, "name": "Drama"}],
            ),
        },
        locales=[Locale("de", "German"), Locale("en", "English")],
    )
