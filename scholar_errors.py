"""Error types raised by the Scholar citation client."""

from __future__ import annotations

from models import ReferenceFormat


class ScholarError(Exception):
    """Base class for any Scholar client error."""


class EmptyQueryError(ScholarError):
    """The search query was empty; raised before any request is made."""

    def __init__(self) -> None:
        super().__init__("Search query must not be empty")


class UrlParseError(ScholarError):
    """A request URL could not be composed into a valid absolute URL."""


class RequestError(ScholarError):
    """An HTTP request failed or returned an error status."""


class CitationLinkNotFoundError(ScholarError):
    """The citation page has no export link for the requested format."""

    def __init__(self, fmt: ReferenceFormat) -> None:
        super().__init__(f"No {fmt.value} export link found on citation page")
        self.format = fmt
