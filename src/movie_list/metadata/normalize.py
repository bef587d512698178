# movie_list/metadata/normalize.py

"""Map a raw TMDb detail payload onto a flat MovieRecord."""

from __future__ import annotations

import math
from collections.abc import Iterable
from typing import Any

from movie_list.domain.errors import MalformedPayload
from movie_list.domain.models import MovieRecord

POSTER_BASE_URL = "https://image.tmdb.org/t/p/w500"
YOUTUBE_WATCH_URL = "https://www.youtube.com/watch?v="
MAX_ACTORS = 5


def _entries(container: Any, key: str, limit: int | None = None) -> list[dict[str, Any]]:
    """Return ``container[key]`` as a list of dicts, tolerating missing data.

    ``limit`` cuts the raw list before anything is filtered out.
    """
    if not isinstance(container, dict):
        return []
    values = container.get(key)
    if not isinstance(values, list):
        return []
    return [v for v in values[:limit] if isinstance(v, dict)]


def _text(value: Any) -> str | None:
    """Non-empty strings pass, everything else is treated as missing."""
    if isinstance(value, str) and value:
        return value
    return None


def _names(entries: Iterable[dict[str, Any]]) -> list[str]:
    return [name for e in entries if (name := _text(e.get("name"))) is not None]


def extract_director(detail: dict[str, Any]) -> str | None:
    """First crew member whose job is exactly "Director"."""
    for person in _entries(detail.get("credits"), "crew"):
        if person.get("job") == "Director":
            return _text(person.get("name"))
    return None


def extract_trailer_url(detail: dict[str, Any]) -> str | None:
    """Watch URL of the first YouTube trailer, if any."""
    for video in _entries(detail.get("videos"), "results"):
        if video.get("site") == "YouTube" and video.get("type") == "Trailer":
            key = _text(video.get("key"))
            if key:
                return f"{YOUTUBE_WATCH_URL}{key}"
    return None


def extract_actors(detail: dict[str, Any], limit: int = MAX_ACTORS) -> list[str]:
    return _names(_entries(detail.get("credits"), "cast", limit))


def extract_genres(detail: dict[str, Any]) -> list[str]:
    return _names(_entries(detail, "genres"))


def runtime_minutes(runtime: Any) -> int:
    """Runtime as whole minutes; anything but a finite positive number is 0."""
    if isinstance(runtime, bool) or not isinstance(runtime, (int, float)):
        return 0
    if not math.isfinite(runtime) or runtime <= 0:
        return 0
    return int(runtime)


def build_poster_url(poster_path: Any) -> str | None:
    if _text(poster_path) is None:
        return None
    return f"{POSTER_BASE_URL}{poster_path}"


def normalize_detail(detail: dict[str, Any]) -> MovieRecord:
    """Build a MovieRecord from a detail payload. Pure: no I/O, no mutation.

    Missing optional fields degrade to empty values. Only a payload without an
    integer ``id`` is rejected, so no partial record can be produced.
    """
    if not isinstance(detail, dict):
        msg = "Detail payload must be a JSON object."
        raise MalformedPayload(msg)

    movie_id = detail.get("id")
    if not isinstance(movie_id, int) or isinstance(movie_id, bool):
        msg = f"Detail payload has no integer id: {movie_id!r}"
        raise MalformedPayload(msg)

    return MovieRecord(
        id=movie_id,
        title=_text(detail.get("title")) or "",
        overview=_text(detail.get("overview")) or "",
        release_date=_text(detail.get("release_date")) or "",
        rating=detail.get("vote_average") or 0.0,
        duration_minutes=runtime_minutes(detail.get("runtime")),
        genres=extract_genres(detail),
        actors=extract_actors(detail),
        director=extract_director(detail),
        poster_url=build_poster_url(detail.get("poster_path")),
        trailer_url=extract_trailer_url(detail),
    )
