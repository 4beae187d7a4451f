"""
Observability module for tracing, GenAI events and metrics.

Provides:
- OpenTelemetry providers exporting over OTLP/HTTP (or console)
- OpenAI SDK instrumentation (chat spans, gen_ai.* events, token metrics)
- Small helpers for custom spans
"""

from .tracing import (
    trace_operation,
    set_span_status,
    add_span_attribute,
)

from .telemetry import (
    Telemetry,
    build_resource,
    setup_telemetry,
    instrument_openai,
    uninstrument_openai,
)

__all__ = [
    # Tracing
    "trace_operation",
    "set_span_status",
    "add_span_attribute",
    # Bootstrap
    "Telemetry",
    "build_resource",
    "setup_telemetry",
    "instrument_openai",
    "uninstrument_openai",
]
