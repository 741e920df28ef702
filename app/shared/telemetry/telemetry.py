"""OpenTelemetry tracing and metrics configuration.

Uses OTLP exporters (gRPC) or the console exporters for development.
The meter provider backs the search counters in app.shared.telemetry.metrics;
instruments created before setup bind to it once it is installed.
"""

import logging
import threading
from collections.abc import Callable

from fastapi import FastAPI
from opentelemetry import metrics, trace
from opentelemetry.exporter.otlp.proto.grpc.metric_exporter import OTLPMetricExporter
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.logging import LoggingInstrumentor
from opentelemetry.instrumentation.redis import RedisInstrumentor
from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import (
    ConsoleMetricExporter,
    MetricExporter,
    PeriodicExportingMetricReader,
)
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SpanExporter,
)
from opentelemetry.sdk.trace.sampling import TraceIdRatioBased
from sqlalchemy.ext.asyncio import AsyncEngine

logger = logging.getLogger(__name__)


class TelemetryConfig:
    """OpenTelemetry configuration for distributed tracing and metrics.

    Supports FastAPI, SQLAlchemy, Redis, and logging instrumentation.
    Exporters: console, otlp, or none.
    """

    def __init__(
        self,
        service_name: str,
        service_version: str,
        enabled: bool = True,
        environment: str = "development",
    ) -> None:
        """Initialize telemetry config.

        Args:
            service_name: Service name for resource attributes.
            service_version: Version for resource attributes.
            enabled: Whether telemetry is enabled.
            environment: Deployment environment (e.g. development, staging, production).
        """
        self.service_name = service_name
        self.service_version = service_version
        self.enabled = enabled
        self.environment = environment
        self.tracer_provider: TracerProvider | None = None
        self.meter_provider: MeterProvider | None = None

    def _exporters(
        self, exporter_type: str, otlp_endpoint: str | None
    ) -> tuple[SpanExporter, MetricExporter] | None:
        """Return (span, metric) exporters for the type, or None for 'none'."""
        if exporter_type == "none":
            return None
        if exporter_type == "otlp" and otlp_endpoint:
            use_insecure = otlp_endpoint.startswith("http://")
            logger.info("Using OTLP exporters: %s", otlp_endpoint)
            return (
                OTLPSpanExporter(endpoint=otlp_endpoint, insecure=use_insecure),
                OTLPMetricExporter(endpoint=otlp_endpoint, insecure=use_insecure),
            )
        if exporter_type != "console":
            logger.warning("Unknown exporter type '%s', using console", exporter_type)
        else:
            logger.info("Using console exporters (development mode)")
        return ConsoleSpanExporter(), ConsoleMetricExporter()

    def setup_telemetry(
        self,
        exporter_type: str = "console",
        otlp_endpoint: str | None = None,
        sample_rate: float = 1.0,
    ) -> TracerProvider | None:
        """Initialize OpenTelemetry and set the global tracer and meter providers.

        Args:
            exporter_type: "console", "otlp", or "none".
            otlp_endpoint: OTLP gRPC endpoint (e.g. http://localhost:4317).
            sample_rate: Sampling rate 0.0–1.0.

        Returns:
            TracerProvider or None if disabled.
        """
        if not self.enabled:
            logger.info("Telemetry disabled")
            return None
        try:
            resource = Resource(
                attributes={
                    SERVICE_NAME: self.service_name,
                    SERVICE_VERSION: self.service_version,
                    "deployment.environment": self.environment,
                }
            )
            sampler = TraceIdRatioBased(sample_rate)
            self.tracer_provider = TracerProvider(resource=resource, sampler=sampler)

            exporters = self._exporters(exporter_type, otlp_endpoint)
            if exporters is None:
                logger.info("Telemetry enabled but no exporter configured")
                self.meter_provider = MeterProvider(resource=resource)
            else:
                span_exporter, metric_exporter = exporters
                self.tracer_provider.add_span_processor(BatchSpanProcessor(span_exporter))
                self.meter_provider = MeterProvider(
                    resource=resource,
                    metric_readers=[PeriodicExportingMetricReader(metric_exporter)],
                )
            trace.set_tracer_provider(self.tracer_provider)
            metrics.set_meter_provider(self.meter_provider)
            logger.info(
                "OpenTelemetry initialized: service=%s, version=%s, exporter=%s",
                self.service_name,
                self.service_version,
                exporter_type,
            )
            return self.tracer_provider
        except Exception as e:
            logger.exception("Failed to initialize telemetry: %s", e)
            return None

    def _instrument(self, name: str, instrument: Callable[[TracerProvider], None]) -> None:
        """Run one instrumentor against our tracer provider; failures are logged, not raised."""
        if not self.enabled or self.tracer_provider is None:
            return
        try:
            instrument(self.tracer_provider)
        except Exception as e:
            logger.exception("Failed to instrument %s: %s", name, e)
            return
        logger.info("%s instrumentation enabled", name)

    def instrument_fastapi(self, app: FastAPI) -> None:
        """Trace requests; health probes are excluded so they do not flood exporters."""
        self._instrument(
            "FastAPI",
            lambda provider: FastAPIInstrumentor.instrument_app(
                app, tracer_provider=provider, excluded_urls="/api/v1/health"
            ),
        )

    def instrument_sqlalchemy(self, engine: AsyncEngine) -> None:
        """Trace entity search statements (one span per executed query)."""
        self._instrument(
            "SQLAlchemy",
            lambda provider: SQLAlchemyInstrumentor().instrument(
                engine=engine.sync_engine, tracer_provider=provider, enable_commenter=True
            ),
        )

    def instrument_redis(self) -> None:
        self._instrument(
            "Redis", lambda provider: RedisInstrumentor().instrument(tracer_provider=provider)
        )

    def instrument_logging(self) -> None:
        """Inject trace_id/span_id into log records."""
        self._instrument(
            "logging",
            lambda provider: LoggingInstrumentor().instrument(
                tracer_provider=provider, set_logging_format=True
            ),
        )

    def shutdown(self) -> None:
        """Shutdown providers and flush remaining spans and metrics."""
        for provider in (self.tracer_provider, self.meter_provider):
            if provider is None:
                continue
            try:
                provider.shutdown()
            except Exception as e:
                logger.exception("Error during telemetry shutdown: %s", e)
        logger.info("Telemetry shutdown complete")


_telemetry: TelemetryConfig | None = None
_telemetry_lock = threading.RLock()


def get_telemetry() -> TelemetryConfig | None:
    """Return the global telemetry instance (set at startup)."""
    with _telemetry_lock:
        return _telemetry


def set_telemetry(telemetry: TelemetryConfig) -> None:
    """Set the global telemetry instance. Called once at startup."""
    global _telemetry
    with _telemetry_lock:
        _telemetry = telemetry
