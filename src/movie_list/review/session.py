# movie_list/review/session.py

"""Single-writer state object that front ends bind user actions to."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from movie_list.domain.errors import ResolutionError
from movie_list.domain.models import ExportPayload, Locale, MovieRecord, SearchMatch
from movie_list.io.lines import parse_candidate_titles
from movie_list.pipeline.resolution import (
    MetadataClient,
    ResolutionPipeline,
    ResolutionReport,
)
from movie_list.review.review_list import ALL_GENRES, ReviewList, apply_edits

logger = logging.getLogger(__name__)

MIN_SUGGEST_QUERY_LENGTH = 3


class CurationSession:
    """Owns the candidates, the review list, the locale and the genre filter."""

    def __init__(self, client: MetadataClient, locale: str | None = None) -> None:
        self.client = client
        self.locale = locale or client.default_locale
        self.genre_filter = ALL_GENRES
        self.pipeline = ResolutionPipeline(client)
        self.review_list = ReviewList()
        self.locales: list[Locale] = []

    def choose_default_locale(self) -> list[Locale]:
        """Load the available locales and preselect English if TMDb offers it."""
        self.locales = self.client.list_locales()
        english = next((loc for loc in self.locales if loc.display_name == "English"), None)
        if english is not None:
            default = self.client.default_locale
            # Keep the full tag (en-US) when it belongs to the English entry.
            self.locale = default if default.split("-")[0] == english.code else english.code
        return self.locales

    def upload(self, text: str) -> list[str]:
        """Load a new list. Clears previous results."""
        titles = parse_candidate_titles(text)
        self.pipeline.load(titles)
        self.review_list.clear()
        self.genre_filter = ALL_GENRES
        logger.info("Loaded %d candidate titles", len(titles))
        return titles

    def toggle(self, index: int) -> bool:
        return self.pipeline.toggle(index)

    def resolve(self) -> ResolutionReport:
        return self.pipeline.run(self.review_list, self.locale)

    def suggest(self, query: str) -> list[SearchMatch]:
        """Search suggestions for the manual add box."""
        query = query.strip()
        if len(query) < MIN_SUGGEST_QUERY_LENGTH:
            return []
        try:
            return self.client.search(query, self.locale)
        except ResolutionError as exc:
            logger.warning("Suggestion search for %r failed: %s", query, exc)
            return []

    def add(self, match: SearchMatch) -> MovieRecord | None:
        return self.pipeline.add_match(self.review_list, match, self.locale)

    def edit(self, record_id: int, changes: Mapping[str, Any]) -> MovieRecord:
        current = self.review_list.get(record_id)
        if current is None:
            raise KeyError(record_id)
        edited = apply_edits(current, changes)
        self.review_list.replace_by_id(record_id, edited)
        self._sync_genre_filter()
        return edited

    def remove(self, record_id: int) -> None:
        self.review_list.remove_by_id(record_id)
        self._sync_genre_filter()

    def move(self, record_id: int, over_id: int) -> None:
        self.review_list.move_by_id(record_id, over_id)

    def set_genre_filter(self, genre: str) -> None:
        self.genre_filter = genre
        self._sync_genre_filter()

    def visible(self) -> list[MovieRecord]:
        self._sync_genre_filter()
        return self.review_list.filter_by_genre(self.genre_filter)

    def genres(self) -> list[str]:
        return self.review_list.distinct_genres()

    def export(self) -> ExportPayload:
        records = self.review_list.records
        return ExportPayload(
            records=records,
            locale=self.locale,
            order=[r.id for r in records],
        )

    def save(self) -> ExportPayload:
        """Produce the save payload, then reset for the next upload."""
        payload = self.export()
        logger.info("Saving %d movies (locale=%s)", len(payload.records), payload.locale)
        self.pipeline.load([])
        self.review_list.clear()
        self.genre_filter = ALL_GENRES
        return payload

    def _sync_genre_filter(self) -> None:
        """Fall back to "all" once no record carries the selected genre."""
        if self.genre_filter == ALL_GENRES:
            return
        if self.genre_filter not in self.review_list.distinct_genres():
            logger.info("Genre %r no longer in the list; showing all.", self.genre_filter)
            self.genre_filter = ALL_GENRES
