"""
OpenTelemetry metrics configuration for genaiprobe.

The OpenAI instrumentation records `gen_ai.client.operation.duration` and
`gen_ai.client.token.usage` histograms through the meter provider built here.
"""
import logging
import sys
from typing import Optional

from opentelemetry import metrics
from opentelemetry.exporter.otlp.proto.http.metric_exporter import OTLPMetricExporter
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import (
    ConsoleMetricExporter,
    MetricExporter,
    MetricReader,
    PeriodicExportingMetricReader,
)
from opentelemetry.sdk.resources import Resource

from ..core.config import TelemetrySettings

logger = logging.getLogger(__name__)


def build_metric_exporter(settings: TelemetrySettings) -> Optional[MetricExporter]:
    """Metric exporter selected by OTEL_METRICS_EXPORTER, or None for "none"."""
    if settings.metrics_exporter == "otlp":
        endpoint = settings.signal_endpoint("metrics")
        return OTLPMetricExporter(endpoint=endpoint) if endpoint else OTLPMetricExporter()
    if settings.metrics_exporter == "console":
        return ConsoleMetricExporter(out=sys.stderr)
    return None


def configure_metrics(
    settings: TelemetrySettings,
    resource: Resource,
    reader: Optional[MetricReader] = None,
    install_global: bool = True,
) -> MeterProvider:
    """
    Create a meter provider.

    A single-shot process never reaches the periodic export interval, so the
    data points leave on MeterProvider.shutdown().
    """
    readers = []
    if reader is not None:
        readers.append(reader)
    else:
        exporter = build_metric_exporter(settings)
        if exporter is not None:
            readers.append(PeriodicExportingMetricReader(exporter))

    provider = MeterProvider(resource=resource, metric_readers=readers)
    if install_global:
        metrics.set_meter_provider(provider)
    logger.debug(f"Meter provider configured (exporter={settings.metrics_exporter})")
    return provider
