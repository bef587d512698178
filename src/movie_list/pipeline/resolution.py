# movie_list/pipeline/resolution.py

"""Resolve an uploaded list of titles into normalized movie records."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Protocol

from movie_list.domain.errors import (
    DuplicateRecordError,
    NoMatch,
    PipelineBusyError,
    ResolutionError,
)
from movie_list.domain.models import Locale, MovieRecord, SearchMatch
from movie_list.metadata.normalize import normalize_detail
from movie_list.review.review_list import ReviewList

logger = logging.getLogger(__name__)


class MetadataClient(Protocol):
    """What the pipeline needs from a metadata source (see TMDBClient)."""

    default_locale: str

    def search(self, query: str, locale: str | None = None) -> list[SearchMatch]: ...

    def fetch_detail(self, movie_id: int, locale: str | None = None) -> dict[str, Any]: ...

    def list_locales(self) -> list[Locale]: ...


class PipelineState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    DONE = "done"


@dataclass(slots=True)
class CandidateTitle:
    """One line of the uploaded list plus the user's include flag."""

    title: str
    include: bool = True


@dataclass(slots=True)
class SkippedTitle:
    title: str
    reason: str


@dataclass(slots=True)
class ResolutionReport:
    """Outcome of one bulk run."""

    resolved: list[MovieRecord] = field(default_factory=list)
    skipped: list[SkippedTitle] = field(default_factory=list)
    excluded: int = 0


class ResolutionPipeline:
    """Drives candidate titles through search, detail lookup and normalization.

    Candidates are processed strictly one after another. A failure for one
    title is logged and the title is skipped; the run itself never aborts.
    """

    def __init__(self, client: MetadataClient) -> None:
        self._client = client
        self.state = PipelineState.IDLE
        self.candidates: list[CandidateTitle] = []

    def load(self, titles: list[str]) -> None:
        """Start over with new candidate titles, all included."""
        self._ensure_not_running()
        self.candidates = [CandidateTitle(title=t) for t in titles]
        self.state = PipelineState.IDLE

    def set_included(self, index: int, include: bool) -> None:
        self._ensure_not_running()
        self._candidate_at(index).include = include

    def toggle(self, index: int) -> bool:
        self._ensure_not_running()
        candidate = self._candidate_at(index)
        candidate.include = not candidate.include
        return candidate.include

    def run(self, review_list: ReviewList, locale: str | None = None) -> ResolutionReport:
        """Resolve every included candidate and replace the review list with the results.

        Without loaded candidates nothing runs and the review list is left alone.
        """
        self._ensure_not_running()
        if not self.candidates:
            logger.info("No candidate titles loaded; nothing to resolve.")
            return ResolutionReport()

        self.state = PipelineState.RUNNING
        report = ResolutionReport()

        try:
            for candidate in self.candidates:
                if not candidate.include:
                    report.excluded += 1
                    continue

                try:
                    record = self.resolve_title(candidate.title, locale)
                except NoMatch as exc:
                    logger.info("No match for %r; skipping.", candidate.title)
                    report.skipped.append(SkippedTitle(candidate.title, str(exc)))
                    continue
                except ResolutionError as exc:
                    logger.warning(
                        "Error processing movie %r: %s", candidate.title, exc
                    )
                    report.skipped.append(SkippedTitle(candidate.title, str(exc)))
                    continue

                report.resolved.append(record)
                logger.debug("Resolved %r -> id=%s", candidate.title, record.id)
        finally:
            self.state = PipelineState.DONE

        review_list.reset(report.resolved)
        logger.info(
            "Resolution done. Resolved=%d, skipped=%d, excluded=%d",
            len(report.resolved),
            len(report.skipped),
            report.excluded,
        )
        return report

    def resolve_title(self, title: str, locale: str | None = None) -> MovieRecord:
        """Search ``title``, take the top hit and build its record."""
        matches = self._client.search(title, locale)
        if not matches:
            msg = f"No search results for {title!r}."
            raise NoMatch(msg)
        return self.resolve_match(matches[0], locale)

    def resolve_match(self, match: SearchMatch, locale: str | None = None) -> MovieRecord:
        detail = self._client.fetch_detail(match.id, locale)
        return normalize_detail(detail)

    def add_match(
        self,
        review_list: ReviewList,
        match: SearchMatch,
        locale: str | None = None,
    ) -> MovieRecord | None:
        """Manual single add: append one movie without touching other entries.

        Returns the appended record, or None if nothing was added.
        """
        if match.id in review_list:
            logger.info("Movie %r (id=%s) is already in the list.", match.title, match.id)
            return None

        try:
            record = self.resolve_match(match, locale)
            review_list.append(record)
        except (ResolutionError, DuplicateRecordError) as exc:
            logger.warning("Error adding movie %r: %s", match.title, exc)
            return None

        logger.info("Added %r (id=%s)", record.title, record.id)
        return record

    def _candidate_at(self, index: int) -> CandidateTitle:
        if not 0 <= index < len(self.candidates):
            msg = f"Candidate index {index} is out of range (0..{len(self.candidates) - 1})."
            raise IndexError(msg)
        return self.candidates[index]

    def _ensure_not_running(self) -> None:
        if self.state is PipelineState.RUNNING:
            msg = "A resolution run is already in progress."
            raise PipelineBusyError(msg)
