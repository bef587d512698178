# movie_list/io/records_jsonl.py

"""Read and write curated movie records (JSONL) and the save payload (JSON)."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Any

from movie_list.domain.models import ExportPayload, MovieRecord

logger = logging.getLogger(__name__)


def _string_list(raw: dict[str, Any], key: str) -> list[str]:
    values = raw.get(key) or []
    if not isinstance(values, list) or not all(isinstance(v, str) for v in values):
        msg = f"'{key}' must be a list of strings."
        raise ValueError(msg)
    return list(values)


def _optional_str(raw: dict[str, Any], key: str) -> str | None:
    value = raw.get(key)
    if value is not None and not isinstance(value, str):
        msg = f"'{key}' must be a string or null."
        raise ValueError(msg)
    return value


def record_from_raw(raw: dict[str, Any]) -> MovieRecord:
    """Convert a raw JSON dict into a MovieRecord instance.

    Raises KeyError/ValueError when the dict is not a valid record.
    """
    record_id = raw["id"]
    if not isinstance(record_id, int) or isinstance(record_id, bool):
        msg = f"'id' must be an integer, got {record_id!r}."
        raise ValueError(msg)

    title = raw["title"]
    if not isinstance(title, str):
        msg = f"'title' must be a string, got {title!r}."
        raise ValueError(msg)

    duration = raw.get("duration_minutes") or 0
    if not isinstance(duration, int) or isinstance(duration, bool) or duration < 0:
        msg = f"'duration_minutes' must be a non-negative integer, got {duration!r}."
        raise ValueError(msg)

    return MovieRecord(
        id=record_id,
        title=title,
        overview=_optional_str(raw, "overview") or "",
        release_date=_optional_str(raw, "release_date") or "",
        rating=raw.get("rating", 0.0),
        duration_minutes=duration,
        genres=_string_list(raw, "genres"),
        actors=_string_list(raw, "actors"),
        director=_optional_str(raw, "director"),
        poster_url=_optional_str(raw, "poster_url"),
        trailer_url=_optional_str(raw, "trailer_url"),
    )


def record_to_raw(record: MovieRecord) -> dict[str, Any]:
    """Convert a MovieRecord instance into a JSON-serialisable dict."""
    return {
        "id": record.id,
        "title": record.title,
        "overview": record.overview,
        "release_date": record.release_date,
        "rating": record.rating,
        "duration_minutes": record.duration_minutes,
        "genres": list(record.genres),
        "actors": list(record.actors),
        "director": record.director,
        "poster_url": record.poster_url,
        "trailer_url": record.trailer_url,
    }


def iter_records(path: Path) -> Iterator[MovieRecord]:
    """Iterate over records, one JSON object per line.

    Empty lines, invalid JSON and objects that are not valid records are
    skipped with a warning.
    """
    if not path.exists():
        return

    with path.open("r", encoding="utf-8") as f:
        for line_number, line in enumerate(f, start=1):
            line = line.strip()
            if not line:
                continue

            try:
                obj = json.loads(line)
            except json.JSONDecodeError as exc:
                logger.warning(
                    "Skipping invalid JSON line %d in %s: %s",
                    line_number,
                    path,
                    exc,
                )
                continue

            if not isinstance(obj, dict):
                logger.warning("Skipping non-object line %d in %s", line_number, path)
                continue

            try:
                yield record_from_raw(obj)
            except (KeyError, ValueError) as exc:
                logger.warning(
                    "Skipping invalid record on line %d in %s: %s",
                    line_number,
                    path,
                    exc,
                )


def load_records_from_jsonl(path: Path) -> list[MovieRecord]:
    return list(iter_records(path))


def write_records_to_jsonl(path: Path, records: Iterable[MovieRecord]) -> None:
    """Write records to a JSONL file, one per line, replacing its content."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        for record in records:
            f.write(json.dumps(record_to_raw(record), ensure_ascii=False) + "\n")


def write_export(path: Path, payload: ExportPayload) -> None:
    """Persist a save payload as a single JSON document."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(payload.to_dict(), f, ensure_ascii=False, indent=2)
        f.write("\n")
    logger.info("Saved %d movies (locale=%s) to %s", len(payload.records), payload.locale, path)
