"""
Telemetry bootstrap: providers, exporters and OpenAI instrumentation.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from opentelemetry.instrumentation.openai_v2 import OpenAIInstrumentor
from opentelemetry.sdk._events import EventLoggerProvider
from opentelemetry.sdk._logs import LoggerProvider
from opentelemetry.sdk._logs.export import LogExporter
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import MetricReader
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SpanExporter

from ..core.config import TelemetrySettings
from .events import configure_events
from .metrics import configure_metrics
from .tracing import configure_tracing

logger = logging.getLogger(__name__)


def build_resource(settings: TelemetrySettings) -> Resource:
    """Resource for this process; OTEL_RESOURCE_ATTRIBUTES is merged in by the SDK."""
    return Resource.create({SERVICE_NAME: settings.service_name})


def instrument_openai(**providers) -> None:
    """
    Patch the OpenAI SDK so chat completions emit spans, events and metrics.

    Recognised keyword arguments: tracer_provider, meter_provider,
    logger_provider, event_logger_provider. Missing ones fall back to the
    global providers.
    """
    OpenAIInstrumentor().instrument(**providers)


def uninstrument_openai() -> None:
    OpenAIInstrumentor().uninstrument()


@dataclass
class Telemetry:
    """Handle on the configured providers; `shutdown()` flushes everything."""

    tracer_provider: Optional[TracerProvider] = None
    logger_provider: Optional[LoggerProvider] = None
    event_logger_provider: Optional[EventLoggerProvider] = None
    meter_provider: Optional[MeterProvider] = None
    instrumented: bool = False
    _closed: bool = False

    @property
    def enabled(self) -> bool:
        return self.tracer_provider is not None

    def shutdown(self) -> None:
        """Uninstrument, then flush and shut down every provider. Safe to call twice."""
        if self._closed:
            return
        self._closed = True

        if self.instrumented:
            uninstrument_openai()
            self.instrumented = False

        # Spans first: events and metrics refer to the chat span
        if self.tracer_provider is not None:
            self.tracer_provider.force_flush()
            self.tracer_provider.shutdown()
        if self.logger_provider is not None:
            self.logger_provider.force_flush()
            self.logger_provider.shutdown()
        if self.meter_provider is not None:
            self.meter_provider.shutdown()
        logger.debug("Telemetry shut down")


def setup_telemetry(
    settings: TelemetrySettings,
    *,
    span_exporter: Optional[SpanExporter] = None,
    log_exporter: Optional[LogExporter] = None,
    metric_reader: Optional[MetricReader] = None,
    install_global: bool = True,
) -> Telemetry:
    """
    Configure tracing, events and metrics, then instrument the OpenAI SDK.

    Returns a disabled handle when OTEL_SDK_DISABLED is set. Explicit
    exporters/readers replace the ones chosen from settings.
    """
    if settings.sdk_disabled:
        logger.info("Telemetry disabled (OTEL_SDK_DISABLED)")
        return Telemetry()

    resource = build_resource(settings)
    tracer_provider = configure_tracing(
        settings, resource, exporter=span_exporter, install_global=install_global
    )
    logger_provider, event_logger_provider = configure_events(
        settings, resource, exporter=log_exporter, install_global=install_global
    )
    meter_provider = configure_metrics(
        settings, resource, reader=metric_reader, install_global=install_global
    )

    instrument_openai(
        tracer_provider=tracer_provider,
        logger_provider=logger_provider,
        event_logger_provider=event_logger_provider,
        meter_provider=meter_provider,
    )
    logger.info(
        f"Telemetry configured: service={settings.service_name} "
        f"endpoint={settings.exporter_otlp_endpoint or 'default'}"
    )
    return Telemetry(
        tracer_provider=tracer_provider,
        logger_provider=logger_provider,
        event_logger_provider=event_logger_provider,
        meter_provider=meter_provider,
        instrumented=True,
    )
