from __future__ import annotations

from urllib.parse import parse_qsl, urlsplit

import pytest

from models import QueryArgs, SortBy
from scholar_errors import EmptyQueryError, UrlParseError
from scholar_query import build_cite_url, build_search_url, build_simple_search_url, ensure_absolute_url


def test_simple_search_url_exact() -> None:
    assert build_simple_search_url("security assurance") == (
        "https://scholar.google.com/scholar?hl=en&as_sdt=0%2C5&q=security+assurance&btnG="
    )


def test_simple_search_url_encodes_reserved_characters() -> None:
    url = build_simple_search_url('"deep learning" & C++/CUDA')
    assert url == (
        "https://scholar.google.com/scholar?hl=en&as_sdt=0%2C5"
        "&q=%22deep+learning%22+%26+C%2B%2B%2FCUDA&btnG="
    )


@pytest.mark.parametrize("build", [
    build_simple_search_url,
    lambda query: build_search_url(QueryArgs(query=query)),
])
def test_empty_query_rejected(build) -> None:
    with pytest.raises(EmptyQueryError):
        build("")


def test_structured_query_only_required_field() -> None:
    assert build_search_url(QueryArgs(query="graph neural networks")) == (
        "https://scholar.google.com/scholar?q=graph+neural+networks"
    )


def test_structured_query_limit_offset_sort() -> None:
    url = build_search_url(QueryArgs(query="assurance", limit=5, offset=0, sort_by=SortBy.RELEVANCE))

    assert url == "https://scholar.google.com/scholar?q=assurance&scisbd=0&num=5&start=0"
    assert "num=5&start=0" in url
    assert "scisbd=0" in url


def test_structured_query_all_fields_in_fixed_order() -> None:
    args = QueryArgs(
        query="bibtex export",
        cite_id="1234",
        from_year=2015,
        to_year=2020,
        sort_by=SortBy.EVERYTHING,
        cluster_id="9876",
        lang="en",
        lang_limit=("lang_en", "lang_it"),
        limit=20,
        offset=40,
        adult_filtering=True,
        include_similar_results=False,
        include_citations=True,
    )

    pairs = parse_qsl(urlsplit(build_search_url(args)).query, keep_blank_values=True)

    assert pairs == [
        ("q", "bibtex export"),
        ("cites", "1234"),
        ("as_ylo", "2015"),
        ("as_yhi", "2020"),
        ("scisbd", "2"),
        ("cluster", "9876"),
        ("hl", "en"),
        ("lr", "lang_en|lang_it"),
        ("num", "20"),
        ("start", "40"),
        ("safe", "active"),
        ("filter", "0"),
        ("as_vis", "1"),
    ]


def test_structured_query_false_flags() -> None:
    url = build_search_url(
        QueryArgs(query="x", adult_filtering=False, include_similar_results=True, include_citations=False)
    )
    assert url.endswith("?q=x&safe=off&filter=1&as_vis=0")


def test_sort_codes() -> None:
    assert [int(mode) for mode in SortBy] == [0, 1, 2]
    assert "scisbd=1" in build_search_url(QueryArgs(query="x", sort_by=SortBy.ABSTRACTS))


def test_search_url_is_deterministic() -> None:
    args = QueryArgs(query="reproducibility", from_year=2018, lang_limit=("lang_de",), limit=10)
    assert build_search_url(args) == build_search_url(args)
    assert build_search_url(args) == build_search_url(
        QueryArgs(query="reproducibility", from_year=2018, lang_limit=("lang_de",), limit=10)
    )


def test_cite_url_exact() -> None:
    assert build_cite_url("oRnsanDfyFAJ") == (
        "https://scholar.google.com/scholar?hl=en&q=info%3AoRnsanDfyFAJ%3Ascholar.google.com%2F"
        "&output=cite&scirp=0"
    )


@pytest.mark.parametrize("url", [
    "/scholar.bib?q=info:abc",
    "scholar.googleusercontent.com/scholar.bib",
    "ftp://scholar.googleusercontent.com/scholar.bib",
    "http://[::1",
])
def test_ensure_absolute_url_rejects_invalid(url: str) -> None:
    with pytest.raises(UrlParseError):
        ensure_absolute_url(url)


def test_ensure_absolute_url_passes_through() -> None:
    url = "https://scholar.googleusercontent.com/scholar.bib?q=info:abc:scholar.google.com/&output=citation"
    assert ensure_absolute_url(url) == url
