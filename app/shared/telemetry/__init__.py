"""Shared telemetry: logging setup, OpenTelemetry config, tracing and search metrics."""

from app.shared.telemetry.logging import setup_logging
from app.shared.telemetry.metrics import record_search_fallback, record_slow_query
from app.shared.telemetry.telemetry import (
    TelemetryConfig,
    get_telemetry,
    set_telemetry,
)
from app.shared.telemetry.tracing import add_span_attributes, traced

__all__ = [
    "setup_logging",
    "TelemetryConfig",
    "get_telemetry",
    "set_telemetry",
    "traced",
    "add_span_attributes",
    "record_search_fallback",
    "record_slow_query",
]
