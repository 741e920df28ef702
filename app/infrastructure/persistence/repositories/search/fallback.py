"""Primary/fallback degradation for entity search modes."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from app.application.dtos.search import EntitySearchParams, SearchPage
from app.shared.telemetry.metrics import record_search_fallback

logger = logging.getLogger(__name__)

T = TypeVar("T")

SearchFn = Callable[[EntitySearchParams], Awaitable[SearchPage[T]]]


def with_fallback(primary: SearchFn[T], fallback: SearchFn[T], context: str) -> SearchFn[T]:
    """Wrap primary so that any error runs fallback once with the same params.

    Each trigger logs a warning and increments search.fallback.triggered
    tagged with context, whether or not the fallback then succeeds. Errors
    from fallback propagate unchanged; primary is never retried.
    Cancellation is a BaseException and passes straight through.

    Args:
        primary: Preferred search mode (e.g. full-text or trigram).
        fallback: Substring mode used when primary raises.
        context: Entity name used as metric tag and in the log message.

    Returns:
        Async callable with the same signature as primary.
    """

    async def search(params: EntitySearchParams) -> SearchPage[T]:
        try:
            return await primary(params)
        except Exception as e:
            logger.warning(
                "Search primary mode failed for %s, using fallback: %s (params=%s)",
                context,
                e,
                params.as_log_context(),
            )
            record_search_fallback(context)
        return await fallback(params)

    return search
