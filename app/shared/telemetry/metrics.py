"""Search counters on the OpenTelemetry metrics API.

Instruments come from the global meter; before TelemetryConfig installs a
meter provider they are no-ops, so recording is always safe.
"""

from opentelemetry import metrics

_meter = metrics.get_meter("app.search")

_fallback_counter = _meter.create_counter(
    "search.fallback.triggered",
    unit="1",
    description="Entity searches whose primary mode failed and ran the fallback",
)
_slow_query_counter = _meter.create_counter(
    "search.slow_query",
    unit="1",
    description="Entity search queries slower than the configured threshold",
)


def record_search_fallback(entity: str) -> None:
    """Count one fallback trigger for the entity (posts, activities, users)."""
    _fallback_counter.add(1, {"entity": entity})


def record_slow_query(entity: str, mode: str) -> None:
    _slow_query_counter.add(1, {"entity": entity, "mode": mode})
