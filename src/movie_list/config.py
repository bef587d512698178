# movie_list/config.py

"""Shared configuration and environment setup."""

from __future__ import annotations

from dataclasses import dataclass
from os import getenv

from dotenv import load_dotenv

from movie_list.domain.errors import ConfigError

load_dotenv(override=True)

DEFAULT_BASE_URL = "https://api.themoviedb.org/3"
DEFAULT_LOCALE = "en-US"
DEFAULT_TIMEOUT = 10.0


@dataclass(frozen=True, slots=True)
class Settings:
    """TMDb connection settings resolved from the environment."""

    api_key: str | None
    base_url: str = DEFAULT_BASE_URL
    default_locale: str = DEFAULT_LOCALE
    timeout: float = DEFAULT_TIMEOUT

    def require_api_key(self) -> str:
        if not self.api_key:
            msg = "TMDB_API_KEY environment variable is not set."
            raise ConfigError(msg)
        return self.api_key


def load_settings() -> Settings:
    """Read settings from the environment (after .env has been loaded)."""
    raw_timeout = getenv("TMDB_TIMEOUT", str(DEFAULT_TIMEOUT))
    try:
        timeout = float(raw_timeout)
    except ValueError as exc:
        msg = f"TMDB_TIMEOUT must be a number, got {raw_timeout!r}."
        raise ConfigError(msg) from exc

    return Settings(
        api_key=getenv("TMDB_API_KEY") or None,
        base_url=getenv("TMDB_BASE_URL", DEFAULT_BASE_URL).rstrip("/"),
        default_locale=getenv("TMDB_DEFAULT_LOCALE", DEFAULT_LOCALE),
        timeout=timeout,
    )
