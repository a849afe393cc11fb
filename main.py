"""CLI entrypoint for exporting Google Scholar references."""

from __future__ import annotations

import argparse
import itertools
import logging
import os
import sys
from collections.abc import Iterator

from dotenv import load_dotenv

from cookie_jar import save_cookies
from models import QueryArgs, ReferenceFormat, SortBy
from reference_sink import write_references
from scholar_client import ScholarClient
from scholar_errors import ScholarError

_FORMATS = {fmt.name.lower(): fmt for fmt in ReferenceFormat}
_SORT_MODES = {mode.name.lower(): mode for mode in SortBy}


def _non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {number}")
    return number


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line flags."""
    parser = argparse.ArgumentParser(description="Search Google Scholar and export references")
    parser.add_argument("query", help="Free-text search query")
    parser.add_argument("--format", choices=sorted(_FORMATS), default="bibtex", help="Reference export format")
    parser.add_argument("--limit", type=int, default=None, help="Number of search results to request")
    parser.add_argument("--offset", type=int, default=None, help="Index of the first search result")
    parser.add_argument("--from-year", type=int, default=None, help="Earliest publication year")
    parser.add_argument("--to-year", type=int, default=None, help="Latest publication year")
    parser.add_argument("--sort", choices=sorted(_SORT_MODES), default=None, help="Result ordering")
    parser.add_argument("--lang", default=None, help="Interface language, e.g. 'en'")
    parser.add_argument("--take", type=_non_negative_int, default=None, help="Stop after this many references")
    parser.add_argument(
        "--output",
        default=os.getenv("REFERENCE_OUTPUT_PATH"),
        help="Append references to this file instead of stdout (default: $REFERENCE_OUTPUT_PATH)",
    )
    parser.add_argument(
        "--ids-only",
        action="store_true",
        help="Only print the citation ids found by the search",
    )
    return parser.parse_args(argv)


def build_query_args(args: argparse.Namespace) -> QueryArgs | None:
    """Return structured query args, or None when no search option was given."""
    options = {
        "from_year": args.from_year,
        "to_year": args.to_year,
        "sort_by": _SORT_MODES[args.sort] if args.sort else None,
        "lang": args.lang,
        "limit": args.limit,
        "offset": args.offset,
    }
    if all(value is None for value in options.values()):
        return None
    return QueryArgs(query=args.query, **options)


def run(client: ScholarClient, args: argparse.Namespace) -> int:
    """Execute one search and return the number of ids or references emitted."""
    query_args = build_query_args(args)

    if args.ids_only:
        citation_ids = client.get_citation_ids(query_args or args.query)
        for citation_id in citation_ids:
            print(citation_id)
        return len(citation_ids)

    fmt = _FORMATS[args.format]
    if query_args is not None:
        references = client.get_references_with_query(query_args, fmt)
    else:
        references = client.get_references(args.query, fmt)

    if args.take is not None:
        references = itertools.islice(references, args.take)

    if args.output:
        return write_references(references, args.output)

    return _print_references(references)


def _print_references(references: Iterator[str]) -> int:
    count = 0
    for reference in references:
        print(reference.strip())
        print()
        count += 1
    return count


def main(argv: list[str] | None = None) -> int:
    """Initialize config and execute one search."""
    load_dotenv()
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(message)s",
        stream=sys.stderr,
    )
    args = parse_args(argv)
    client = ScholarClient.from_env()

    try:
        count = run(client, args)
    except ScholarError as exc:
        logging.error("Scholar export failed: %s", exc)
        return 1
    finally:
        cookies_path = os.getenv("SCHOLAR_COOKIES_PATH")
        if cookies_path:
            save_cookies(client.session.cookies, cookies_path)

    logging.info("Run complete. emitted=%s", count)
    return 0


if __name__ == "__main__":
    sys.exit(main())
