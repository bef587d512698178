# movie_list/io/lines.py

"""Turn an uploaded plain-text movie list into candidate titles."""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def parse_candidate_titles(text: str) -> list[str]:
    """Split raw text into non-blank, stripped lines. Order is kept, no dedup."""
    return [line.strip() for line in text.split("\n") if line.strip()]


def read_candidate_titles(path: Path) -> list[str]:
    """Read a UTF-8 text file and return its candidate titles."""
    text = path.read_text(encoding="utf-8")
    titles = parse_candidate_titles(text)
    logger.info("Read %d candidate titles from %s", len(titles), path)
    return titles
