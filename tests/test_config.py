"""Tests for environment-driven settings."""

from __future__ import annotations

import pytest

from movie_list.config import Settings, load_settings
from movie_list.domain.errors import ConfigError


def test_load_settings_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("TMDB_API_KEY", "TMDB_BASE_URL", "TMDB_DEFAULT_LOCALE", "TMDB_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)

    settings = load_settings()
    assert settings == Settings(api_key=None)
    with pytest.raises(ConfigError):
        settings.require_api_key()


def test_load_settings_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TMDB_API_KEY", "abc")
    monkeypatch.setenv("TMDB_BASE_URL", "https://proxy.example.test/3/")
    monkeypatch.setenv("TMDB_DEFAULT_LOCALE", "de-DE")
    monkeypatch.setenv("TMDB_TIMEOUT", "2.5")

    settings = load_settings()
    assert settings.require_api_key() == "abc"
    assert settings.base_url == "https://proxy.example.test/3"
    assert settings.default_locale == "de-DE"
    assert settings.timeout == 2.5


def test_invalid_timeout(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TMDB_TIMEOUT", "soon")
    with pytest.raises(ConfigError):
        load_settings()
