# src/movie_list/cli.py

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from movie_list.analysis.genre_stats import print_director_counts, print_genre_counts
from movie_list.config import load_settings
from movie_list.domain.errors import InvalidSelectionError, MovieListError
from movie_list.domain.models import MovieRecord, format_rating
from movie_list.io.records_jsonl import write_export, write_records_to_jsonl
from movie_list.metadata.tmdb_client import TMDBClient
from movie_list.review.review_list import ALL_GENRES
from movie_list.review.session import CurationSession

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> None:
    """Entry point for the movie-list CLI."""
    args = _build_arg_parser().parse_args(argv)

    _configure_logging(verbose=args.verbose)

    try:
        if args.command == "genres":
            print_genre_counts(Path(args.input), top_n=args.top)
            return
        if args.command == "directors":
            print_director_counts(Path(args.input), top_n=args.top)
            return

        settings = load_settings()
        with TMDBClient.from_settings(settings) as client:
            session = CurationSession(client, locale=args.locale)

            if args.command == "locales":
                _cmd_locales(session)
            elif args.command == "search":
                _cmd_search(session, query=" ".join(args.query))
            else:
                _cmd_resolve(
                    session,
                    input_path=Path(args.input),
                    exclude=args.exclude,
                    genre=args.genre,
                    output_path=Path(args.output) if args.output else None,
                    records_path=Path(args.records) if args.records else None,
                )
    except MovieListError as exc:
        logger.error("%s", exc)
        sys.exit(2)
    except KeyboardInterrupt:
        logger.warning("Interrupted by user. Exiting.")
        sys.exit(1)


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="movie-list",
        description="Resolve a plain-text movie list against TMDb and curate the result.",
    )

    parser.add_argument(
        "--locale",
        default=None,
        help="Locale for titles and overviews, e.g. de-DE (default: TMDB_DEFAULT_LOCALE).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging.",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
        help="Sub-command to run.",
    )

    subparsers.add_parser(
        "locales",
        help="List the languages TMDb can localize metadata into.",
    )

    search_parser = subparsers.add_parser(
        "search",
        help="Show search suggestions for a title.",
    )
    search_parser.add_argument("query", nargs="+", help="Title to search for.")

    resolve_parser = subparsers.add_parser(
        "resolve",
        help="Resolve every line of a text file to a movie record.",
    )
    resolve_parser.add_argument(
        "--input",
        required=True,
        help="Text file with one movie title per line.",
    )
    resolve_parser.add_argument(
        "--exclude",
        type=int,
        nargs="*",
        default=[],
        help="1-based line numbers (of non-blank lines) to leave out.",
    )
    resolve_parser.add_argument(
        "--genre",
        default=ALL_GENRES,
        help="Only print movies of this genre (default: %(default)s).",
    )
    resolve_parser.add_argument(
        "--output",
        default=None,
        help="Write the save payload (records, locale, order) as JSON.",
    )
    resolve_parser.add_argument(
        "--records",
        default=None,
        help="Also write the resolved records as JSONL.",
    )

    genres_parser = subparsers.add_parser(
        "genres",
        help="Print genre counts for a records JSONL file.",
    )
    genres_parser.add_argument("--input", required=True, help="Records JSONL file.")
    genres_parser.add_argument(
        "--top",
        type=int,
        default=None,
        help="Only print the N most frequent genres.",
    )

    directors_parser = subparsers.add_parser(
        "directors",
        help="Print director counts for a records JSONL file.",
    )
    directors_parser.add_argument("--input", required=True, help="Records JSONL file.")
    directors_parser.add_argument(
        "--top",
        type=int,
        default=None,
        help="Only print the N most frequent directors.",
    )

    return parser


def _configure_logging(*, verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def _format_record(position: int, record: MovieRecord) -> str:
    year = record.release_date[:4] if record.release_date else "????"
    parts = [
        f"{position:>3}. {record.title} ({year}) [id={record.id}]",
        f"     Rating: {format_rating(record.rating)}/10  Duration: {record.duration_minutes} min",
    ]
    if record.director:
        parts.append(f"     Director: {record.director}")
    if record.genres:
        parts.append(f"     Genres: {', '.join(record.genres)}")
    if record.actors:
        parts.append(f"     Actors: {', '.join(record.actors)}")
    return "\n".join(parts)


def _cmd_locales(session: CurationSession) -> None:
    locales = session.choose_default_locale()
    if not locales:
        logger.warning("No locales returned by TMDb.")
        return
    for locale in sorted(locales, key=lambda loc: loc.display_name):
        print(f"{locale.code}\t{locale.display_name}")


def _cmd_search(session: CurationSession, *, query: str) -> None:
    matches = session.suggest(query)
    if not matches:
        print("(no matches)")
        return
    for match in matches:
        print(f"{match.id}\t{match.label}")


def _cmd_resolve(
    session: CurationSession,
    *,
    input_path: Path,
    exclude: list[int],
    genre: str,
    output_path: Path | None,
    records_path: Path | None,
) -> None:
    titles = session.upload(input_path.read_text(encoding="utf-8"))
    for number in exclude:
        if not 1 <= number <= len(titles):
            msg = f"--exclude {number} is out of range (1..{len(titles)})."
            raise InvalidSelectionError(msg)
        session.pipeline.set_included(number - 1, False)

    report = session.resolve()
    for skipped in report.skipped:
        print(f"skipped: {skipped.title} ({skipped.reason})", file=sys.stderr)

    session.set_genre_filter(genre)
    for position, record in enumerate(session.visible(), start=1):
        print(_format_record(position, record))

    if records_path is not None:
        write_records_to_jsonl(records_path, session.review_list)

    if output_path is not None:
        write_export(output_path, session.save())


if __name__ == "__main__":
    # python -m movie_list.cli --locale de-DE resolve --input movies.txt --output saved.json
    main()
