from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from pathlib import Path

from movie_list.domain.models import MovieRecord
from movie_list.io.records_jsonl import load_records_from_jsonl


def _count_field_values(
    records: Iterable[MovieRecord],
    field: str,
) -> Counter[str]:
    """Generic helper: count values of a list field (genres, actors) or a single string field."""
    counter: Counter[str] = Counter()

    for record in records:
        values = getattr(record, field, None)
        if not values:
            continue

        if isinstance(values, str):
            counter[values] += 1
            continue

        for value in values:
            if not value:
                continue
            counter[str(value)] += 1

    return counter


def get_genre_counts(records: Iterable[MovieRecord]) -> list[tuple[str, int]]:
    """Return a sorted list of (genre, count).

    Sorted by:
    - descending count
    - then alphabetically by genre
    """
    counter = _count_field_values(records, "genres")
    return sorted(counter.items(), key=lambda x: (-x[1], x[0]))


def get_director_counts(records: Iterable[MovieRecord]) -> list[tuple[str, int]]:
    counter = _count_field_values(records, "director")
    return sorted(counter.items(), key=lambda x: (-x[1], x[0]))


def _print_counts(counts: list[tuple[str, int]], top_n: int | None) -> None:
    for value, count in counts[: top_n or len(counts)]:
        print(f"{value}: {count}")


def print_genre_counts(records_path: Path, top_n: int | None = None) -> None:
    """Load saved records and print genres with counts to stdout."""
    _print_counts(get_genre_counts(load_records_from_jsonl(records_path)), top_n)


def print_director_counts(records_path: Path, top_n: int | None = None) -> None:
    """Load saved records and print directors with counts to stdout."""
    _print_counts(get_director_counts(load_records_from_jsonl(records_path)), top_n)
