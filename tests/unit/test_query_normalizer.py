"""Search query normalization: text validation, pagination clamping and filter parsing."""

from datetime import UTC, datetime

import pytest

from app.application.dtos.search import RawSearchParams
from app.application.services.query_normalizer import (
    normalize_limit,
    normalize_page,
    normalize_search_query,
    normalize_sort,
    normalize_suggestion_query,
    normalize_type,
    parse_date_range,
    parse_only_published,
    parse_tag_ids,
    validate_query_text,
)
from app.domain.enums import SearchSort, SearchType
from app.domain.exceptions import ValidationException


def test_query_text_is_trimmed() -> None:
    assert validate_query_text("  react  ") == "react"


@pytest.mark.parametrize("text", ["", "   ", None])
def test_empty_query_text_raises(text) -> None:
    """Empty or whitespace-only q is rejected with field=q."""
    with pytest.raises(ValidationException) as exc_info:
        validate_query_text(text)
    assert exc_info.value.error_code == "VALIDATION_ERROR"
    assert exc_info.value.details["field"] == "q"


def test_query_text_length_bounds() -> None:
    """100 characters pass; 101 fail with max_length in details."""
    assert validate_query_text("a" * 100) == "a" * 100
    with pytest.raises(ValidationException) as exc_info:
        validate_query_text("a" * 101)
    assert exc_info.value.details["max_length"] == 100


@pytest.mark.parametrize("text", ["a;b", "x -- y", "/* c", "c */", "drop;"])
def test_banned_sequences_raise(text: str) -> None:
    with pytest.raises(ValidationException) as exc_info:
        validate_query_text(text)
    assert "pattern" in exc_info.value.details


def test_single_hyphen_and_slash_are_allowed() -> None:
    assert validate_query_text("e-mail a/b") == "e-mail a/b"


@pytest.mark.parametrize("text", ["re\x00act", "\x1bnull", "react\x7f", "a\x0bb"])
def test_control_characters_raise(text: str) -> None:
    with pytest.raises(ValidationException) as exc_info:
        validate_query_text(text)
    assert exc_info.value.details == {"field": "q"}


def test_tabs_inside_query_are_allowed() -> None:
    assert validate_query_text("react\thooks") == "react\thooks"


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (None, 10),
        (0, 1),
        (-3, 1),
        (5, 5),
        (10, 10),
        (11, 10),
        (1000, 10),
        (3.9, 3),
        ("7", 7),
        ("abc", 10),
        ("", 10),
        (float("nan"), 10),
        (float("inf"), 10),
    ],
)
def test_normalize_limit(value, expected: int) -> None:
    assert normalize_limit(value) == expected


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (None, 1),
        (0, 1),
        (-1, 1),
        (0.5, 1),
        (2, 2),
        (2.7, 2),
        ("3", 3),
        ("x", 1),
        (float("nan"), 1),
        (float("-inf"), 1),
        (100_000, 100_000),
        (100_001, 100_000),
        ("1e18", 100_000),
        ("99999999999999999999", 100_000),
        (1e300, 100_000),
    ],
)
def test_normalize_page(value, expected: int) -> None:
    assert normalize_page(value) == expected


def test_unknown_type_and_sort_fall_back_to_defaults() -> None:
    assert normalize_type("bogus") is SearchType.ALL
    assert normalize_type(None) is SearchType.ALL
    assert normalize_type(" Posts ") is SearchType.POSTS
    assert normalize_sort("oldest") is SearchSort.RELEVANCE
    assert normalize_sort("latest") is SearchSort.LATEST


def test_parse_tag_ids_splits_dedupes_and_caps() -> None:
    assert parse_tag_ids("a, b,,a") == ("a", "b")
    assert parse_tag_ids(["a,b", "c"]) == ("a", "b", "c")
    assert parse_tag_ids(None) == ()
    assert parse_tag_ids("x" * 65) == ()
    assert len(parse_tag_ids(",".join(f"t{i}" for i in range(20)))) == 10


def test_date_only_bounds_cover_whole_days() -> None:
    start, end = parse_date_range("2026-01-01", "2026-01-31")
    assert start == datetime(2026, 1, 1, tzinfo=UTC)
    assert end == datetime(2026, 1, 31, 23, 59, 59, 999999, tzinfo=UTC)


def test_reversed_date_range_is_swapped() -> None:
    start, end = parse_date_range("2026-02-10", "2026-02-01")
    assert start == datetime(2026, 2, 1, tzinfo=UTC)
    assert end == datetime(2026, 2, 10, 23, 59, 59, 999999, tzinfo=UTC)


def test_invalid_dates_are_ignored() -> None:
    assert parse_date_range("not-a-date", "") == (None, None)


def test_full_timestamps_are_converted_to_utc() -> None:
    start, _ = parse_date_range("2026-01-01T10:00:00+02:00", None)
    assert start == datetime(2026, 1, 1, 8, 0, tzinfo=UTC)


@pytest.mark.parametrize(
    ("value", "expected"),
    [(None, True), (True, True), (False, False), ("false", False), ("0", False), ("yes", True)],
)
def test_parse_only_published(value, expected: bool) -> None:
    assert parse_only_published(value) is expected


def test_normalize_search_query_builds_offset() -> None:
    """page=3, limit=5 starts at row 10; blank author_id becomes None."""
    query = normalize_search_query(
        RawSearchParams(q=" react ", type="users", page="3", limit="5", author_id="  ")
    )
    assert query.text == "react"
    assert query.type is SearchType.USERS
    assert query.offset == 10
    assert query.author_id is None
    assert query.only_published is True


def test_normalize_search_query_is_idempotent() -> None:
    raw = RawSearchParams(q="react", page=2, limit=50, tag_ids="b,a")
    assert normalize_search_query(raw) == normalize_search_query(raw)


def test_huge_page_keeps_offset_bounded() -> None:
    query = normalize_search_query(RawSearchParams(q="react", page="1e18", limit=10))
    assert query.page == 100_000
    assert query.offset == 999_990
    assert query.offset < 2**63


def test_suggestion_query_defaults() -> None:
    """Posts only, first page, relevance order, five results unless limit is given."""
    query = normalize_suggestion_query(RawSearchParams(q=" react ", page="4", sort="latest"))
    assert query.text == "react"
    assert query.type is SearchType.POSTS
    assert (query.page, query.limit, query.offset) == (1, 5, 0)
    assert query.sort is SearchSort.RELEVANCE
    assert normalize_suggestion_query(RawSearchParams(q="react", limit="50")).limit == 10
