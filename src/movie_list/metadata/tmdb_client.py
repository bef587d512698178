# movie_list/metadata/tmdb_client.py

"""
Thin wrapper around The Movie Database (TMDb) v3 API.

Three reads are exposed: fuzzy title search, detail lookup (with credits and
videos appended) and the list of supported languages. Every failure is raised
as one of the catchable errors from movie_list.domain.errors so callers can
skip a single title and carry on.

You *must* provide an API key (TMDB_API_KEY) before using this module.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from movie_list.config import (
    DEFAULT_BASE_URL,
    DEFAULT_LOCALE,
    DEFAULT_TIMEOUT,
    Settings,
    load_settings,
)
from movie_list.domain.errors import (
    ConfigError,
    MalformedPayload,
    ResolutionError,
    UpstreamUnavailable,
)
from movie_list.domain.models import Locale, SearchMatch

logger = logging.getLogger(__name__)

DETAIL_APPENDS = "credits,videos"


class TMDBClient:
    """HTTP client for the TMDb endpoints the resolution pipeline needs."""

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = DEFAULT_BASE_URL,
        default_locale: str = DEFAULT_LOCALE,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        if not api_key:
            msg = "A TMDb API key is required."
            raise ConfigError(msg)

        self._api_key = api_key
        self.default_locale = default_locale

        self._client = httpx.Client(
            base_url=base_url,
            headers={"Accept": "application/json"},
            timeout=timeout,
            follow_redirects=True,
            transport=transport,
        )

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> "TMDBClient":
        settings = settings or load_settings()
        return cls(
            settings.require_api_key(),
            base_url=settings.base_url,
            default_locale=settings.default_locale,
            timeout=settings.timeout,
            transport=transport,
        )

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._client.close()

    def __enter__(self) -> "TMDBClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # type: ignore[override]
        self.close()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def search(self, query: str, locale: str | None = None) -> list[SearchMatch]:
        """Search movies by free-text title. No match is an empty list, not an error."""
        data = self._get(
            "/search/movie",
            {
                "query": query,
                "include_adult": "false",
                "language": locale or self.default_locale,
            },
        )
        if not isinstance(data, dict) or not isinstance(data.get("results", []), list):
            msg = f"Unexpected search payload for {query!r}."
            raise MalformedPayload(msg)

        matches: list[SearchMatch] = []
        for raw in data.get("results", []):
            match = _match_from_raw(raw)
            if match is None:
                logger.debug("Ignoring search hit without id for %r: %r", query, raw)
                continue
            matches.append(match)

        logger.debug("Search %r (locale=%s) -> %d hits", query, locale, len(matches))
        return matches

    def fetch_detail(self, movie_id: int, locale: str | None = None) -> dict[str, Any]:
        """Fetch a movie's details, credits and videos.

        If the localized overview is empty and ``locale`` is not the default
        locale, the same movie is fetched again in the default locale and its
        overview is used instead. All other fields stay localized.
        """
        locale = locale or self.default_locale
        detail = self._get_detail(movie_id, locale)

        if detail.get("overview") or locale == self.default_locale:
            return detail

        try:
            fallback = self._get_detail(movie_id, self.default_locale)
        except ResolutionError as exc:
            logger.warning(
                "Overview fallback to %s failed for movie id=%s: %s",
                self.default_locale,
                movie_id,
                exc,
            )
            return detail

        logger.debug(
            "Using %s overview for movie id=%s (empty in %s)",
            self.default_locale,
            movie_id,
            locale,
        )
        return {
            **detail,
            "overview": fallback.get("overview") or detail.get("overview"),
        }

    def list_locales(self) -> list[Locale]:
        """Return the languages TMDb supports, or an empty list on any failure."""
        try:
            data = self._get("/configuration/languages", {})
        except ResolutionError as exc:
            logger.warning("Fetching TMDb languages failed: %s", exc)
            return []

        if not isinstance(data, list):
            logger.warning("Unexpected languages payload: %r", type(data).__name__)
            return []

        locales: list[Locale] = []
        for raw in data:
            if not isinstance(raw, dict):
                continue
            code = raw.get("iso_639_1")
            if not code:
                continue
            locales.append(
                Locale(code=code, display_name=raw.get("english_name") or code)
            )
        return locales

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _get_detail(self, movie_id: int, locale: str) -> dict[str, Any]:
        data = self._get(
            f"/movie/{movie_id}",
            {"append_to_response": DETAIL_APPENDS, "language": locale},
        )
        if not isinstance(data, dict):
            msg = f"Unexpected detail payload for movie id={movie_id}."
            raise MalformedPayload(msg)
        return data

    def _get(self, path: str, params: dict[str, Any]) -> Any:
        try:
            response = self._client.get(
                path,
                params={**params, "api_key": self._api_key},
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            msg = f"TMDb answered {status} for {path}."
            raise UpstreamUnavailable(msg) from exc
        except httpx.RequestError as exc:
            msg = f"TMDb request to {path} failed: {exc}"
            raise UpstreamUnavailable(msg) from exc

        try:
            return response.json()
        except ValueError as exc:
            msg = f"TMDb returned invalid JSON for {path}."
            raise MalformedPayload(msg) from exc


def _match_from_raw(raw: Any) -> SearchMatch | None:
    if not isinstance(raw, dict):
        return None
    movie_id = raw.get("id")
    if not isinstance(movie_id, int) or isinstance(movie_id, bool):
        return None
    return SearchMatch(
        id=movie_id,
        title=str(raw.get("title") or ""),
        release_date=raw.get("release_date") or None,
    )
