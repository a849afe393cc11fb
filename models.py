"""Shared typed models for Scholar queries and reference exports."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum

# Opaque token scraped from a result anchor; only ever fed into the cite page URL.
CitationId = str


class SortBy(IntEnum):
    """Result ordering, sent verbatim as the ``scisbd`` code."""

    RELEVANCE = 0
    ABSTRACTS = 1
    EVERYTHING = 2


class ReferenceFormat(Enum):
    """Reference export formats offered on the citation page.

    Each value must match the export anchor text exactly.
    """

    BIBTEX = "BibTeX"
    ENDNOTE = "EndNote"
    REFMAN = "RefMan"
    REFWORKS = "RefWorks"


@dataclass(frozen=True, slots=True)
class QueryArgs:
    """Structured search parameters for one Scholar query.

    Optional fields left as ``None`` are omitted from the request.
    """

    query: str
    cite_id: str | None = None
    from_year: int | None = None
    to_year: int | None = None
    sort_by: SortBy | None = None
    cluster_id: str | None = None
    lang: str | None = None
    lang_limit: tuple[str, ...] | None = None
    limit: int | None = None
    offset: int | None = None
    adult_filtering: bool | None = None
    include_similar_results: bool | None = None
    include_citations: bool | None = None
