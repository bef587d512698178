# movie_list/domain/errors.py

"""Exception hierarchy shared by the client, pipeline and review list."""

from __future__ import annotations


class MovieListError(Exception):
    """Base class for all errors raised by movie_list."""


class ResolutionError(MovieListError):
    """A single title could not be resolved to a movie record."""


class UpstreamUnavailable(ResolutionError):
    """TMDb could not be reached or answered with a non-2xx status."""


class NoMatch(ResolutionError):
    """A search returned no results."""


class MalformedPayload(ResolutionError):
    """TMDb answered, but the JSON did not have the expected shape."""


class DuplicateRecordError(MovieListError, ValueError):
    """A record with the same id is already in the review list."""

    def __init__(self, record_id: int) -> None:
        self.record_id = record_id
        super().__init__(f"Movie id {record_id} is already in the list.")


class PipelineBusyError(MovieListError, RuntimeError):
    """The resolution pipeline is already running."""


class ConfigError(MovieListError, RuntimeError):
    """Required configuration is missing or invalid."""


class InvalidEditError(MovieListError, ValueError):
    """Form input that cannot be applied to a movie record."""


class InvalidSelectionError(MovieListError, ValueError):
    """A candidate number that does not point into the uploaded list."""
