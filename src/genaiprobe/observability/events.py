"""
OpenTelemetry log and event pipeline.

The OpenAI instrumentation emits `gen_ai.user.message` and `gen_ai.choice`
as events: log records correlated with the chat span. Older releases of the
instrumentation go through the event logger provider, newer ones through the
logger provider directly, so both are built here.
"""
import logging
import sys
from typing import Optional, Tuple

from opentelemetry._events import set_event_logger_provider
from opentelemetry._logs import set_logger_provider
from opentelemetry.exporter.otlp.proto.http._log_exporter import OTLPLogExporter
from opentelemetry.sdk._events import EventLoggerProvider
from opentelemetry.sdk._logs import LoggerProvider
from opentelemetry.sdk._logs.export import BatchLogRecordProcessor, ConsoleLogExporter, LogExporter
from opentelemetry.sdk.resources import Resource

from ..core.config import TelemetrySettings

logger = logging.getLogger(__name__)


def build_log_exporter(settings: TelemetrySettings) -> Optional[LogExporter]:
    """Log exporter selected by OTEL_LOGS_EXPORTER, or None for "none"."""
    if settings.logs_exporter == "otlp":
        endpoint = settings.signal_endpoint("logs")
        return OTLPLogExporter(endpoint=endpoint) if endpoint else OTLPLogExporter()
    if settings.logs_exporter == "console":
        return ConsoleLogExporter(out=sys.stderr)
    return None


def configure_events(
    settings: TelemetrySettings,
    resource: Resource,
    exporter: Optional[LogExporter] = None,
    install_global: bool = True,
) -> Tuple[LoggerProvider, EventLoggerProvider]:
    """Create the logger provider and the event logger provider layered on it."""
    logger_provider = LoggerProvider(resource=resource)
    exporter = exporter or build_log_exporter(settings)
    if exporter is not None:
        logger_provider.add_log_record_processor(BatchLogRecordProcessor(exporter))
    event_logger_provider = EventLoggerProvider(logger_provider=logger_provider)

    if install_global:
        set_logger_provider(logger_provider)
        set_event_logger_provider(event_logger_provider)

    logger.debug(
        f"Event pipeline configured (exporter={settings.logs_exporter}, "
        f"capture_content={settings.instrumentation_genai_capture_message_content})"
    )
    return logger_provider, event_logger_provider
