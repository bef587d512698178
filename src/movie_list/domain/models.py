# movie_list/domain/models.py

"""Core domain models for search hits, locales and curated movie records."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class SearchMatch:
    """A single TMDb search hit."""

    id: int
    title: str
    release_date: str | None = None

    @property
    def label(self) -> str:
        """Title with release year, as shown in suggestion lists."""
        if self.release_date:
            return f"{self.title} ({self.release_date[:4]})"
        return self.title


@dataclass(frozen=True, slots=True)
class Locale:
    """A language TMDb can localize metadata into."""

    code: str
    display_name: str


@dataclass(frozen=True, slots=True)
class MovieRecord:
    """A normalized movie, the unit stored in the review list."""

    id: int
    title: str
    overview: str = ""
    release_date: str = ""
    rating: Any = 0.0  # float from TMDb; edits may leave free text
    duration_minutes: int = 0
    genres: list[str] = field(default_factory=list)
    actors: list[str] = field(default_factory=list)
    director: str | None = None
    poster_url: str | None = None
    trailer_url: str | None = None


@dataclass(slots=True)
class ExportPayload:
    """Value produced by the save action."""

    records: list[MovieRecord]
    locale: str
    order: list[int]

    def to_dict(self) -> dict[str, Any]:
        return {
            "records": [asdict(r) for r in self.records],
            "locale": self.locale,
            "order": list(self.order),
        }


def format_rating(value: Any) -> str:
    """Render a rating as "7.3", or "N/A" when it is not numeric."""
    if isinstance(value, bool):
        return "N/A"
    try:
        number = float(value)
    except (TypeError, ValueError):
        return "N/A"
    if number != number:  # NaN
        return "N/A"
    return f"{number:.1f}"
