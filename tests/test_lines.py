"""Tests for turning uploaded text into candidate titles."""

from __future__ import annotations

from pathlib import Path

from movie_list.io.lines import parse_candidate_titles, read_candidate_titles


def test_blank_lines_are_dropped() -> None:
    text = "\n".join(["Inception", "", "  ", "The Matrix"])
    assert parse_candidate_titles(text) == ["Inception", "The Matrix"]


def test_order_and_duplicates_are_kept() -> None:
    text = "Heat\nAlien\nHeat\n"
    assert parse_candidate_titles(text) == ["Heat", "Alien", "Heat"]


def test_windows_line_endings_and_padding() -> None:
    text = "  Amélie \r\n\t\r\nOldboy\r\n"
    titles = parse_candidate_titles(text)
    assert titles == ["Amélie", "Oldboy"]
    assert all(t and not t.isspace() for t in titles)


def test_count_matches_non_blank_lines() -> None:
    lines = ["A", " ", "B", "", "C", "\t"]
    text = "\n".join(lines)
    assert len(parse_candidate_titles(text)) == sum(1 for line in lines if line.strip())


def test_empty_text() -> None:
    assert parse_candidate_titles("") == []
    assert parse_candidate_titles("\n\n   \n") == []


def test_read_candidate_titles(tmp_path: Path) -> None:
    path = tmp_path / "movies.txt"
    path.write_text("Inception\n\nThe Matrix\n", encoding="utf-8")
    assert read_candidate_titles(path) == ["Inception", "The Matrix"]
