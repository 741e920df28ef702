"""
UTC datetime utilities for consistent timezone handling.

All datetime values in the system should be timezone-aware UTC. Search
date filters are compared against timestamptz columns, so every bound is
normalized here before it reaches a query.
"""

from datetime import UTC, date, datetime, time, timedelta


def utc_now() -> datetime:
    """Return the current UTC datetime with timezone info."""
    return datetime.now(UTC)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """
    Ensure a datetime is UTC-aware.

    - If None, returns None
    - If naive, assumes UTC and attaches timezone
    - If aware, converts to UTC

    Args:
        dt: A datetime that may be naive or aware

    Returns:
        UTC-aware datetime or None
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)

    return dt.astimezone(UTC)


def start_of_day_utc(day: date) -> datetime:
    """First instant of day in UTC."""
    return datetime.combine(day, time.min, tzinfo=UTC)


def end_of_day_utc(day: date) -> datetime:
    """Last representable instant of day in UTC (inclusive upper bound)."""
    return start_of_day_utc(day) + timedelta(days=1) - timedelta(microseconds=1)
