"""Search query normalization: validate text, clamp pagination, parse filters.

Raw values arrive from the query string (strings), from JSON bodies or tests
(ints, floats) and are turned into a SearchQuery. Text problems raise
ValidationException before any datastore access; every other field falls
back to its default instead of failing.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from datetime import date, datetime

from app.application.dtos.search import RawSearchParams, SearchQuery
from app.core.constants import (
    SEARCH_BANNED_QUERY_PATTERN,
    SEARCH_CONTROL_CHAR_PATTERN,
    SEARCH_DEFAULT_LIMIT,
    SEARCH_DEFAULT_PAGE,
    SEARCH_MAX_LIMIT,
    SEARCH_MAX_PAGE,
    SEARCH_MAX_TAG_ID_LENGTH,
    SEARCH_MAX_TAG_IDS,
    SEARCH_MIN_LIMIT,
    SEARCH_QUERY_MAX_LENGTH,
    SEARCH_QUERY_MIN_LENGTH,
    SEARCH_SUGGESTION_DEFAULT_LIMIT,
)
from app.domain.enums import SearchSort, SearchType
from app.domain.exceptions import ValidationException
from app.shared.utils.datetime import end_of_day_utc, ensure_utc, start_of_day_utc

_FALSE_STRINGS = frozenset({"false", "0", "no", "off"})


def _to_finite_number(value: int | float | str | None) -> float | None:
    """Coerce value to a finite float; None when missing or not a number."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
        try:
            number = float(value)
        except ValueError:
            return None
    else:
        number = float(value)
    if not math.isfinite(number):
        return None
    return number


def normalize_limit(value: int | float | str | None, default: int = SEARCH_DEFAULT_LIMIT) -> int:
    """Truncate toward zero and clamp into [1, 10]; missing or non-numeric gives default."""
    number = _to_finite_number(value)
    if number is None:
        return default
    return max(SEARCH_MIN_LIMIT, min(SEARCH_MAX_LIMIT, math.trunc(number)))


def normalize_page(value: int | float | str | None) -> int:
    """Truncate toward zero and clamp into [1, SEARCH_MAX_PAGE].

    Missing, non-finite or sub-1 values become 1; huge values such as "1e18"
    stop at SEARCH_MAX_PAGE so the computed OFFSET stays a valid bigint.
    """
    number = _to_finite_number(value)
    if number is None or number < 1:
        return SEARCH_DEFAULT_PAGE
    if number >= SEARCH_MAX_PAGE:
        return SEARCH_MAX_PAGE
    return max(SEARCH_DEFAULT_PAGE, math.trunc(number))


def normalize_type(value: SearchType | str | None) -> SearchType:
    if isinstance(value, SearchType):
        return value
    if isinstance(value, str) and value.strip().lower() in SearchType.values():
        return SearchType(value.strip().lower())
    return SearchType.ALL


def normalize_sort(value: SearchSort | str | None) -> SearchSort:
    if isinstance(value, SearchSort):
        return value
    if isinstance(value, str) and value.strip().lower() in SearchSort.values():
        return SearchSort(value.strip().lower())
    return SearchSort.RELEVANCE


def validate_query_text(value: str | None) -> str:
    """Trim query text and reject bad lengths or comment/terminator sequences.

    Raises:
        ValidationException: Text is empty, longer than the maximum, contains
            control characters or one of the banned sequences.
    """
    text = (value or "").strip()
    if len(text) < SEARCH_QUERY_MIN_LENGTH:
        raise ValidationException("Search query must not be empty", field="q")
    if len(text) > SEARCH_QUERY_MAX_LENGTH:
        raise ValidationException(
            f"Search query must be at most {SEARCH_QUERY_MAX_LENGTH} characters",
            field="q",
            max_length=SEARCH_QUERY_MAX_LENGTH,
        )
    if SEARCH_CONTROL_CHAR_PATTERN.search(text):
        raise ValidationException("Search query contains control characters", field="q")
    if SEARCH_BANNED_QUERY_PATTERN.search(text):
        raise ValidationException(
            "Search query contains forbidden characters",
            field="q",
            pattern=SEARCH_BANNED_QUERY_PATTERN.pattern,
        )
    return text


def parse_tag_ids(value: Iterable[str] | str | None) -> tuple[str, ...]:
    """Split comma-separated tag ids; drop blanks and oversized ids, dedupe, cap."""
    if value is None:
        return ()
    chunks = [value] if isinstance(value, str) else list(value)
    seen: dict[str, None] = {}
    for chunk in chunks:
        for token in str(chunk).split(","):
            token = token.strip()
            if not token or len(token) > SEARCH_MAX_TAG_ID_LENGTH:
                continue
            seen.setdefault(token, None)
    return tuple(seen)[:SEARCH_MAX_TAG_IDS]


def _parse_date_bound(value: datetime | date | str | None, *, end_of_day: bool) -> datetime | None:
    """Parse a date bound to an aware UTC datetime; date-only values cover the whole day."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return ensure_utc(value)
    if isinstance(value, date):
        day = value
    else:
        raw = value.strip()
        if not raw:
            return None
        try:
            if len(raw) == 10:
                day = date.fromisoformat(raw)
            else:
                return ensure_utc(datetime.fromisoformat(raw.replace("Z", "+00:00")))
        except ValueError:
            return None
    return end_of_day_utc(day) if end_of_day else start_of_day_utc(day)


def parse_date_range(
    date_from: datetime | date | str | None,
    date_to: datetime | date | str | None,
) -> tuple[datetime | None, datetime | None]:
    """Return (from, to) as UTC datetimes, swapping a reversed range."""
    start = _parse_date_bound(date_from, end_of_day=False)
    end = _parse_date_bound(date_to, end_of_day=True)
    if start and end and start > end:
        # Swapping a date-only range keeps the original day boundaries.
        start, end = (
            _parse_date_bound(date_to, end_of_day=False),
            _parse_date_bound(date_from, end_of_day=True),
        )
    return start, end


def parse_only_published(value: bool | str | None) -> bool:
    if value is None:
        return True
    if isinstance(value, bool):
        return value
    return value.strip().lower() not in _FALSE_STRINGS


def normalize_search_query(raw: RawSearchParams) -> SearchQuery:
    """Validate and clamp raw search input into a SearchQuery.

    Args:
        raw: Unvalidated parameters from the route layer.

    Returns:
        Normalized query ready for the aggregator.

    Raises:
        ValidationException: Query text is empty, too long or contains banned sequences.
    """
    text = validate_query_text(raw.q)
    date_from, date_to = parse_date_range(raw.date_from, raw.date_to)
    author_id = (raw.author_id or "").strip() or None
    return SearchQuery(
        text=text,
        type=normalize_type(raw.type),
        page=normalize_page(raw.page),
        limit=normalize_limit(raw.limit),
        sort=normalize_sort(raw.sort),
        author_id=author_id,
        tag_ids=parse_tag_ids(raw.tag_ids),
        date_from=date_from,
        date_to=date_to,
        only_published=parse_only_published(raw.only_published),
    )


def normalize_suggestion_query(raw: RawSearchParams) -> SearchQuery:
    """Normalize typeahead input: posts only, first page, relevance order, default limit 5.

    Raises:
        ValidationException: Same text rules as normalize_search_query.
    """
    text = validate_query_text(raw.q)
    return SearchQuery(
        text=text,
        type=SearchType.POSTS,
        page=SEARCH_DEFAULT_PAGE,
        limit=normalize_limit(raw.limit, default=SEARCH_SUGGESTION_DEFAULT_LIMIT),
        sort=SearchSort.RELEVANCE,
        only_published=parse_only_published(raw.only_published),
    )
