"""Shared utilities: datetime and id generators."""

from app.shared.utils.datetime import (
    end_of_day_utc,
    ensure_utc,
    start_of_day_utc,
    utc_now,
)
from app.shared.utils.generators import generate_cuid

__all__ = [
    "generate_cuid",
    "utc_now",
    "ensure_utc",
    "start_of_day_utc",
    "end_of_day_utc",
]
