"""Telemetry configuration for apivalidator.

OpenTelemetry providers are owned by this module rather than installed as
the process-wide providers, so embedding applications keep control of their
own telemetry setup. Span context still propagates through the global
OpenTelemetry context.
"""

import logging
from collections.abc import Sequence
from typing import Any

from opentelemetry.exporter.otlp.proto.http.metric_exporter import OTLPMetricExporter
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import MetricReader, PeriodicExportingMetricReader
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SimpleSpanProcessor,
    SpanExporter,
)

from .models import TelemetryConfigModel

logger = logging.getLogger(__name__)

_telemetry_enabled = False
_tracer_provider: TracerProvider | None = None
_meter_provider: MeterProvider | None = None


def configure_telemetry(
    config: TelemetryConfigModel | None = None,
    *,
    span_exporters: Sequence[SpanExporter] = (),
    metric_readers: Sequence[MetricReader] = (),
    **kwargs: Any,
) -> None:
    """Configure tracing and metrics.

    Args:
        config: TelemetryConfigModel object
        span_exporters: Extra span exporters, exported synchronously
        metric_readers: Extra metric readers
        **kwargs: Alternative to config, pass individual settings

    Examples:
        configure_telemetry(TelemetryConfigModel(enabled=True, console_export=True))
        configure_telemetry(enabled=True, endpoint="http://localhost:4318")
    """
    global _telemetry_enabled, _tracer_provider, _meter_provider

    if config is None:
        config = TelemetryConfigModel.model_validate(kwargs)

    shutdown_telemetry()

    if not config.enabled:
        logger.info("Telemetry disabled")
        return

    logger.info(f"Configuring telemetry (endpoint={config.endpoint})")

    resource_attrs: dict[str, Any] = {
        "service.name": config.service_name,
        "service.version": config.service_version,
        "deployment.environment": config.environment,
    }
    if config.resource_attributes:
        resource_attrs.update(config.resource_attributes)
    resource = Resource.create(resource_attrs)

    tracer_provider = TracerProvider(resource=resource)
    if config.console_export:
        tracer_provider.add_span_processor(SimpleSpanProcessor(ConsoleSpanExporter()))
        logger.info("Added console span exporter")
    for exporter in span_exporters:
        tracer_provider.add_span_processor(SimpleSpanProcessor(exporter))

    readers: list[MetricReader] = list(metric_readers)
    if config.endpoint:
        endpoint = config.endpoint.rstrip("/")
        tracer_provider.add_span_processor(
            BatchSpanProcessor(
                OTLPSpanExporter(endpoint=f"{endpoint}/v1/traces", headers=config.headers or {})
            )
        )
        readers.append(
            PeriodicExportingMetricReader(
                exporter=OTLPMetricExporter(
                    endpoint=f"{endpoint}/v1/metrics", headers=config.headers or {}
                ),
                export_interval_millis=config.metrics_export_interval * 1000,
            )
        )
        logger.info(f"Added OTLP exporters for {endpoint}")

    _tracer_provider = tracer_provider
    _meter_provider = MeterProvider(resource=resource, metric_readers=readers) if readers else None
    _telemetry_enabled = True

    # Import here to avoid circular dependency
    from .metrics import _reset_metrics_manager

    _reset_metrics_manager(_meter_provider)
    logger.info("Telemetry configuration complete")


def shutdown_telemetry() -> None:
    """Flush pending spans and metrics, then disable telemetry."""
    global _telemetry_enabled, _tracer_provider, _meter_provider

    if _tracer_provider is not None:
        _tracer_provider.shutdown()
    if _meter_provider is not None:
        _meter_provider.shutdown()

    _telemetry_enabled = False
    _tracer_provider = None
    _meter_provider = None

    from .metrics import _reset_metrics_manager

    _reset_metrics_manager(None)


def is_telemetry_enabled() -> bool:
    """Check if telemetry is currently enabled."""
    return _telemetry_enabled


def get_tracer_provider() -> TracerProvider | None:
    return _tracer_provider
