"""Shared utilities: telemetry and cross-cutting helpers.

Used by domain, application, and infrastructure. No business logic.
"""

from app.shared.utils import (
    end_of_day_utc,
    ensure_utc,
    generate_cuid,
    start_of_day_utc,
    utc_now,
)

__all__ = [
    "generate_cuid",
    "utc_now",
    "ensure_utc",
    "start_of_day_utc",
    "end_of_day_utc",
]
