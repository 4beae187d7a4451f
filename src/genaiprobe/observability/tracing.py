"""
OpenTelemetry tracing configuration for genaiprobe.

Builds the tracer provider the OpenAI instrumentation reports the
`chat <model>` client span to, and provides small span helpers.
"""
import logging
import sys
from contextlib import contextmanager
from typing import Any, Optional

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter, SpanExporter
from opentelemetry.trace import Status, StatusCode

from ..core.config import TelemetrySettings

logger = logging.getLogger(__name__)


def build_span_exporter(settings: TelemetrySettings) -> Optional[SpanExporter]:
    """Span exporter selected by OTEL_TRACES_EXPORTER, or None for "none"."""
    if settings.traces_exporter == "otlp":
        endpoint = settings.signal_endpoint("traces")
        return OTLPSpanExporter(endpoint=endpoint) if endpoint else OTLPSpanExporter()
    if settings.traces_exporter == "console":
        return ConsoleSpanExporter(out=sys.stderr)
    return None


def configure_tracing(
    settings: TelemetrySettings,
    resource: Resource,
    exporter: Optional[SpanExporter] = None,
    install_global: bool = True,
) -> TracerProvider:
    """
    Create a tracer provider exporting through a batch span processor.

    Args:
        settings: Telemetry settings (exporter choice and endpoint)
        resource: Resource describing this process
        exporter: Explicit exporter, overrides the one chosen by settings
        install_global: Register the provider as the global tracer provider
    """
    provider = TracerProvider(resource=resource)
    exporter = exporter or build_span_exporter(settings)
    if exporter is not None:
        provider.add_span_processor(BatchSpanProcessor(exporter))
    if install_global:
        trace.set_tracer_provider(provider)
    logger.debug(f"Tracer provider configured (exporter={settings.traces_exporter})")
    return provider


@contextmanager
def trace_operation(operation_name: str, attributes: Optional[dict] = None, tracer_provider=None):
    """
    Context manager for creating custom tracing spans.

    Args:
        operation_name: Name of the operation being traced
        attributes: Optional dictionary of attributes to add to the span
        tracer_provider: Provider to use instead of the global one

    Example:
        with trace_operation("probe.startup", {"service": "genaiprobe"}):
            ...
    """
    tracer = trace.get_tracer(__name__, tracer_provider=tracer_provider)
    with tracer.start_as_current_span(operation_name) as span:
        for key, value in (attributes or {}).items():
            add_span_attribute(span, key, value)
        yield span


def set_span_status(span, success: bool, error_message: Optional[str] = None):
    """
    Set the status of a tracing span.

    Args:
        span: OpenTelemetry span object
        success: Whether the operation succeeded
        error_message: Optional error message if operation failed
    """
    if not span:
        return

    try:
        if success:
            span.set_status(Status(StatusCode.OK))
        else:
            span.set_status(Status(StatusCode.ERROR, error_message or "Operation failed"))
    except Exception as e:
        logger.warning(f"Failed to set span status: {e}")


def add_span_attribute(span, key: str, value: Any):
    """
    Add an attribute to a tracing span.

    Args:
        span: OpenTelemetry span object
        key: Attribute key
        value: Attribute value (will be converted to string)
    """
    if not span:
        return

    try:
        span.set_attribute(key, str(value))
    except Exception as e:
        logger.warning(f"Failed to add span attribute {key}: {e}")
