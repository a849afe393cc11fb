"""HTML scraping helpers for Scholar result and citation pages.

Both extractors assume the current Scholar page layout:

- result page: ``div.gs_ri`` blocks, each titled by an ``h3`` wrapping an
  anchor whose ``id`` is the citation id;
- citation page: a ``div#gs_citi`` container with one anchor per export
  format, labelled ``BibTeX``, ``EndNote``, ``RefMan`` and ``RefWorks``.
"""

from __future__ import annotations

import logging

from bs4 import BeautifulSoup

from models import CitationId, ReferenceFormat
from scholar_errors import CitationLinkNotFoundError

LOGGER = logging.getLogger(__name__)

RESULT_BLOCK_SELECTOR = "div.gs_ri"
RESULT_TITLE_SELECTOR = "h3"
LINK_SELECTOR = "a"
CITATION_EXPORT_SELECTOR = "div#gs_citi"


def parse_html(text: str) -> BeautifulSoup:
    """Parse a page permissively; malformed markup yields a best-effort tree."""
    return BeautifulSoup(text, "html.parser")


def extract_citation_ids(soup: BeautifulSoup) -> list[CitationId]:
    """Return the citation ids of all results, in page order.

    Blocks without a title anchor carrying an ``id`` attribute are skipped.
    Duplicates and empty ids are kept.
    """
    ids: list[CitationId] = []
    for block in soup.select(RESULT_BLOCK_SELECTOR):
        found = 0
        for title in block.select(RESULT_TITLE_SELECTOR):
            for link in title.select(LINK_SELECTOR):
                citation_id = link.get("id")
                if citation_id is not None:
                    ids.append(citation_id)
                    found += 1
        if not found:
            LOGGER.debug("Skipping result block without a citation id")
    return ids


def extract_citation_link(soup: BeautifulSoup, fmt: ReferenceFormat) -> str:
    """Return the export URL for ``fmt`` from a citation page.

    Raises:
        CitationLinkNotFoundError: if no export anchor is labelled ``fmt.value``.
    """
    links = (
        link
        for container in soup.select(CITATION_EXPORT_SELECTOR)
        for link in container.select(LINK_SELECTOR)
    )
    match = next((link for link in links if link.decode_contents() == fmt.value), None)
    href = match.get("href") if match is not None else None
    if not href:
        raise CitationLinkNotFoundError(fmt)
    return href
