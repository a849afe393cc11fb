"""Request URL builders for the Scholar search and citation pages."""

from __future__ import annotations

from urllib.parse import urlencode, urlsplit

from models import CitationId, QueryArgs
from scholar_errors import EmptyQueryError, UrlParseError

SCHOLAR_SEARCH_URL = "https://scholar.google.com/scholar"


def build_search_url(args: QueryArgs) -> str:
    """Build the search URL for structured query arguments.

    Parameters whose value is ``None`` are left out; the rest keep a fixed
    order so equal arguments always produce the same URL.

    Raises:
        EmptyQueryError: if ``args.query`` is empty.
        UrlParseError: if the composed URL is not a valid absolute URL.
    """
    if not args.query:
        raise EmptyQueryError()

    params = [
        ("q", args.query),
        ("cites", args.cite_id),
        ("as_ylo", _as_param(args.from_year)),
        ("as_yhi", _as_param(args.to_year)),
        ("scisbd", _as_param(None if args.sort_by is None else int(args.sort_by))),
        ("cluster", args.cluster_id),
        ("hl", args.lang),
        ("lr", None if args.lang_limit is None else "|".join(args.lang_limit)),
        ("num", _as_param(args.limit)),
        ("start", _as_param(args.offset)),
        ("safe", _as_flag(args.adult_filtering, "active", "off")),
        ("filter", _as_flag(args.include_similar_results, "1", "0")),
        ("as_vis", _as_flag(args.include_citations, "1", "0")),
    ]
    return _compose(SCHOLAR_SEARCH_URL, [(key, value) for key, value in params if value is not None])


def build_simple_search_url(query: str) -> str:
    """Build the search URL for a bare free-text query with default options."""
    if not query:
        raise EmptyQueryError()

    return _compose(
        SCHOLAR_SEARCH_URL,
        [("hl", "en"), ("as_sdt", "0,5"), ("q", query), ("btnG", "")],
    )


def build_cite_url(citation_id: CitationId) -> str:
    """Build the URL of the citation export page for one result."""
    return _compose(
        SCHOLAR_SEARCH_URL,
        [
            ("hl", "en"),
            ("q", f"info:{citation_id}:scholar.google.com/"),
            ("output", "cite"),
            ("scirp", "0"),
        ],
    )


def ensure_absolute_url(url: str) -> str:
    """Return ``url`` unchanged if it is an absolute http(s) URL.

    Raises:
        UrlParseError: otherwise.
    """
    try:
        parts = urlsplit(url)
    except ValueError as exc:
        raise UrlParseError(f"Invalid URL {url!r}: {exc}") from exc
    if parts.scheme not in ("http", "https") or not parts.netloc:
        raise UrlParseError(f"Invalid URL {url!r}: expected an absolute http(s) URL")
    return url


def _compose(base_url: str, params: list[tuple[str, str]]) -> str:
    return ensure_absolute_url(f"{base_url}?{urlencode(params)}")


def _as_param(value: int | None) -> str | None:
    return None if value is None else str(value)


def _as_flag(value: bool | None, on: str, off: str) -> str | None:
    if value is None:
        return None
    return on if value else off
