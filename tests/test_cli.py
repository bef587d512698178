"""Tests for the command-line front end with TMDb mocked out."""

from __future__ import annotations

import json
from pathlib import Path

import httpx
import pytest

from conftest import make_detail
from movie_list import cli
from movie_list.metadata.tmdb_client import TMDBClient


def _handler(request: httpx.Request) -> httpx.Response:
    path = request.url.path
    if path.endswith("/search/movie"):
        query = request.url.params["query"]
        if query == "Heat":
            return httpx.Response(200, json={"results": [{"id": 949, "title": "Heat"}]})
        if query == "Inception":
            return httpx.Response(200, json={"results": [{"id": 27205, "title": "Inception"}]})
        return httpx.Response(200, json={"results": []})
    if path.endswith("/movie/949"):
        return httpx.Response(
            200,
            json=make_detail(949, "Heat", genres=[{"id": 80, "name": "Crime"}]),
        )
    if path.endswith("/movie/27205"):
        return httpx.Response(200, json=make_detail(27205, "Inception"))
    if path.endswith("/configuration/languages"):
        return httpx.Response(200, json=[{"iso_639_1": "en", "english_name": "English"}])
    return httpx.Response(404)


@pytest.fixture(autouse=True)
def mocked_tmdb(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TMDB_API_KEY", "test-key")
    monkeypatch.setenv("TMDB_DEFAULT_LOCALE", "en-US")
    original = TMDBClient.from_settings.__func__

    def from_settings(cls, settings=None, *, transport=None):
        return original(cls, settings, transport=httpx.MockTransport(_handler))

    monkeypatch.setattr(TMDBClient, "from_settings", classmethod(from_settings))


def test_resolve_writes_save_payload(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    source = tmp_path / "movies.txt"
    source.write_text("Heat\n\nUnknown Movie\nInception\n", encoding="utf-8")
    output = tmp_path / "saved.json"
    records = tmp_path / "records.jsonl"

    cli.main(
        [
            "resolve",
            "--input",
            str(source),
            "--output",
            str(output),
            "--records",
            str(records),
        ]
    )

    captured = capsys.readouterr()
    assert "Heat" in captured.out
    assert "skipped: Unknown Movie" in captured.err

    data = json.loads(output.read_text(encoding="utf-8"))
    assert data["order"] == [949, 27205]
    assert data["locale"] == "en-US"
    assert len(records.read_text(encoding="utf-8").splitlines()) == 2


def test_resolve_with_exclude_and_genre(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    source = tmp_path / "movies.txt"
    source.write_text("Heat\nInception\n", encoding="utf-8")

    cli.main(["resolve", "--input", str(source), "--exclude", "1", "--genre", "Action"])

    out = capsys.readouterr().out
    assert "Inception" in out
    assert "Heat" not in out


def test_search_and_locales(capsys: pytest.CaptureFixture[str]) -> None:
    cli.main(["search", "Heat"])
    cli.main(["locales"])
    out = capsys.readouterr().out.splitlines()
    assert out == ["949\tHeat", "en\tEnglish"]


def test_missing_api_key_exits(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TMDB_API_KEY", "")
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["locales"])
    assert excinfo.value.code == 2


def test_exclude_out_of_range_exits(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    source = tmp_path / "movies.txt"
    source.write_text("Heat\nInception\n", encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["resolve", "--input", str(source), "--exclude", "5"])

    assert excinfo.value.code == 2
    assert capsys.readouterr().out == ""


def test_directors_counts_saved_records(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    source = tmp_path / "movies.txt"
    source.write_text("Heat\nInception\n", encoding="utf-8")
    records = tmp_path / "records.jsonl"
    cli.main(["resolve", "--input", str(source), "--records", str(records)])
    capsys.readouterr()

    cli.main(["directors", "--input", str(records)])

    assert capsys.readouterr().out.splitlines() == ["Christopher Nolan: 2"]
