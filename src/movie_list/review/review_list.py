# movie_list/review/review_list.py

"""Ordered, id-keyed collection of movie records the user curates."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import replace
from typing import Any

from movie_list.domain.errors import DuplicateRecordError, InvalidEditError
from movie_list.domain.models import MovieRecord

logger = logging.getLogger(__name__)

ALL_GENRES = "all"

_LIST_FIELDS = {"genres", "actors"}
_EDITABLE_FIELDS = {
    "title",
    "overview",
    "release_date",
    "rating",
    "duration_minutes",
    "genres",
    "actors",
    "director",
    "poster_url",
    "trailer_url",
}


class ReviewList:
    """The user's working list. Order is significant and user-controlled."""

    def __init__(self, records: Iterable[MovieRecord] = ()) -> None:
        self._records: list[MovieRecord] = []
        self.reset(records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[MovieRecord]:
        return iter(list(self._records))

    def __contains__(self, record_id: object) -> bool:
        return self._index_of(record_id) is not None

    @property
    def records(self) -> list[MovieRecord]:
        """A copy of the records in display order."""
        return list(self._records)

    def ids(self) -> list[int]:
        return [r.id for r in self._records]

    def get(self, record_id: int) -> MovieRecord | None:
        index = self._index_of(record_id)
        return None if index is None else self._records[index]

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def reset(self, records: Iterable[MovieRecord]) -> None:
        """Replace the whole content. Later duplicates of an id are dropped."""
        seen: set[int] = set()
        kept: list[MovieRecord] = []
        for record in records:
            if record.id in seen:
                logger.info(
                    "Dropping duplicate movie id=%s (%s)", record.id, record.title
                )
                continue
            seen.add(record.id)
            kept.append(record)
        self._records = kept

    def clear(self) -> None:
        self._records = []

    def append(self, record: MovieRecord) -> None:
        """Add a record at the end. Raises DuplicateRecordError if the id exists."""
        if record.id in self:
            raise DuplicateRecordError(record.id)
        self._records.append(record)

    def remove_by_id(self, record_id: int) -> None:
        """Delete the record with this id. No-op if absent."""
        self._records = [r for r in self._records if r.id != record_id]

    def replace_by_id(self, record_id: int, record: MovieRecord) -> None:
        """Swap in an edited record. Edits never change identity."""
        if record.id != record_id:
            msg = f"Edited record id {record.id} does not match {record_id}."
            raise ValueError(msg)
        index = self._index_of(record_id)
        if index is None:
            raise KeyError(record_id)
        self._records[index] = record

    def move_by_id(self, record_id: int, over_id: int) -> None:
        """Move ``record_id`` into the position currently held by ``over_id``.

        This is the drop half of a drag gesture: everything between the two
        positions shifts by one, all other relative orderings are kept.
        """
        if record_id == over_id:
            return
        target = self._index_of(over_id)
        if target is None:
            raise KeyError(over_id)
        self.move_to_index(record_id, target)

    def move_to_index(self, record_id: int, index: int) -> None:
        source = self._index_of(record_id)
        if source is None:
            raise KeyError(record_id)
        index = max(0, min(index, len(self._records) - 1))
        record = self._records.pop(source)
        self._records.insert(index, record)

    # ------------------------------------------------------------------
    # Read-side projections
    # ------------------------------------------------------------------

    def filter_by_genre(self, genre: str = ALL_GENRES) -> list[MovieRecord]:
        """Records whose genres include ``genre``; everything for "all"."""
        if genre == ALL_GENRES:
            return list(self._records)
        return [r for r in self._records if genre in r.genres]

    def distinct_genres(self) -> list[str]:
        return sorted({g for r in self._records for g in r.genres})

    def _index_of(self, record_id: object) -> int | None:
        for index, record in enumerate(self._records):
            if record.id == record_id:
                return index
        return None


def _split_csv(value: Any) -> list[str]:
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    return [str(v).strip() for v in value if str(v).strip()]


def _coerce_duration(value: Any) -> int:
    if value in (None, ""):
        return 0
    try:
        minutes = float(value)
    except (TypeError, ValueError):
        minutes = math.nan
    if not math.isfinite(minutes):
        msg = f"Duration must be a number of minutes, got {value!r}."
        raise InvalidEditError(msg)
    return max(0, int(minutes))


def _coerce_rating(value: Any) -> Any:
    try:
        return float(value)
    except (TypeError, ValueError):
        return value


def apply_edits(record: MovieRecord, changes: Mapping[str, Any]) -> MovieRecord:
    """Return a copy of ``record`` with form values applied.

    Comma-separated ``genres``/``actors`` are split and trimmed. A numeric
    ``rating`` becomes a float; anything else is kept so it renders as N/A.
    """
    if "id" in changes and changes["id"] != record.id:
        msg = "The movie id cannot be edited."
        raise InvalidEditError(msg)

    unknown = set(changes) - _EDITABLE_FIELDS - {"id"}
    if unknown:
        msg = f"Unknown fields: {', '.join(sorted(unknown))}"
        raise InvalidEditError(msg)

    updates: dict[str, Any] = {}
    for name, value in changes.items():
        if name == "id":
            continue
        if name in _LIST_FIELDS:
            value = _split_csv(value)
        elif name == "rating":
            value = _coerce_rating(value)
        elif name == "duration_minutes":
            value = _coerce_duration(value)
        updates[name] = value

    return replace(record, **updates)
