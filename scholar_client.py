"""Google Scholar client that streams exported citation references."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterator
from typing import TypeVar

import requests

from cookie_jar import load_cookies
from models import CitationId, QueryArgs, ReferenceFormat
from scholar_errors import RequestError
from scholar_query import build_cite_url, build_search_url, build_simple_search_url, ensure_absolute_url
from scholar_scrape import extract_citation_ids, extract_citation_link, parse_html

DEFAULT_HEADERS = {"Referer": "https://www.google.com/"}
REQUEST_TIMEOUT_SECONDS = 30.0

LOGGER = logging.getLogger(__name__)

_Query = TypeVar("_Query", str, QueryArgs)


class ScholarClient:
    """Fetch references for Scholar searches.

    The client only issues GET requests through its session and keeps no
    per-query state, so one instance can serve many searches.
    """

    def __init__(
        self,
        session: requests.Session | None = None,
        timeout: float | None = REQUEST_TIMEOUT_SECONDS,
    ) -> None:
        if session is None:
            session = requests.Session()
            session.headers.update(DEFAULT_HEADERS)
        self._session = session
        self._timeout = timeout

    @classmethod
    def from_env(cls) -> ScholarClient:
        """Build a client configured from the SCHOLAR_* environment variables."""
        session = requests.Session()
        session.headers.update(DEFAULT_HEADERS)
        user_agent = os.getenv("SCHOLAR_USER_AGENT")
        if user_agent:
            session.headers["User-Agent"] = user_agent
        cookies_path = os.getenv("SCHOLAR_COOKIES_PATH")
        if cookies_path:
            session.cookies.update(load_cookies(cookies_path))
        timeout = float(os.getenv("SCHOLAR_REQUEST_TIMEOUT", str(REQUEST_TIMEOUT_SECONDS)))
        return cls(session=session, timeout=timeout)

    @property
    def session(self) -> requests.Session:
        return self._session

    def get_references(self, query: str, fmt: ReferenceFormat) -> Iterator[str]:
        """Stream references for a free-text query using default search options.

        The query is validated immediately; requests start on the first ``next()``.

        Raises:
            EmptyQueryError: if ``query`` is empty.
        """
        return self._references(build_simple_search_url, query, fmt)

    def get_references_with_query(self, args: QueryArgs, fmt: ReferenceFormat) -> Iterator[str]:
        """Stream references for a structured query.

        Raises:
            EmptyQueryError: if ``args.query`` is empty.
        """
        return self._references(build_search_url, args, fmt)

    def get_citation_ids(self, query: str | QueryArgs) -> list[CitationId]:
        """Run only the search stage and return the citation ids found."""
        if isinstance(query, QueryArgs):
            return self._search(build_search_url(query))
        return self._search(build_simple_search_url(query))

    def _references(
        self,
        build_url: Callable[[_Query], str],
        query: _Query,
        fmt: ReferenceFormat,
    ) -> Iterator[str]:
        search_url = build_url(query)
        return self._iter_references(search_url, fmt)

    def _iter_references(self, search_url: str, fmt: ReferenceFormat) -> Iterator[str]:
        citation_ids = self._search(search_url)
        for index, citation_id in enumerate(citation_ids, start=1):
            reference = self._fetch_reference(citation_id, fmt)
            LOGGER.info(
                "Fetched %s reference %s/%s for citation_id=%s",
                fmt.value,
                index,
                len(citation_ids),
                citation_id,
            )
            yield reference

    def _search(self, search_url: str) -> list[CitationId]:
        LOGGER.info("Searching Scholar: %s", search_url)
        document = parse_html(self._get_text(search_url))
        citation_ids = extract_citation_ids(document)
        LOGGER.info("Search returned %s citation ids", len(citation_ids))
        return citation_ids

    def _fetch_reference(self, citation_id: CitationId, fmt: ReferenceFormat) -> str:
        cite_page = parse_html(self._get_text(build_cite_url(citation_id)))
        export_url = ensure_absolute_url(extract_citation_link(cite_page, fmt))
        return self._get_text(export_url)

    def _get_text(self, url: str) -> str:
        LOGGER.debug("GET %s", url)
        try:
            response = self._session.get(url, timeout=self._timeout)
            response.raise_for_status()
            if "charset" not in response.headers.get("Content-Type", "").lower():
                response.encoding = "utf-8"
            return response.text
        except requests.RequestException as exc:
            raise RequestError(f"Request to {url} failed: {exc}") from exc
