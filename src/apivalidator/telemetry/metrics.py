"""Metrics support for apivalidator using OpenTelemetry."""

import logging
from typing import Any

from opentelemetry.metrics import Counter, Histogram, Meter
from opentelemetry.sdk.metrics import MeterProvider

from apivalidator.version import PACKAGE_NAME, PACKAGE_VERSION

from . import config

logger = logging.getLogger(__name__)

_metrics_manager: "MetricsManager | None" = None


class MetricsManager:
    """Creates and caches OpenTelemetry instruments."""

    def __init__(self, meter: Meter) -> None:
        self._meter = meter
        self._metrics: dict[str, Any] = {}

    def get_counter(self, name: str, description: str = "", unit: str = "") -> Counter:
        """Get or create a counter metric.

        Args:
            name: Metric name (e.g., "apivalidator.validations")
            description: Human-readable description
            unit: Unit of measurement

        Returns:
            Counter instance
        """
        if name not in self._metrics:
            self._metrics[name] = self._meter.create_counter(
                name, description=description, unit=unit
            )
        return self._metrics[name]  # type: ignore[no-any-return]

    def get_histogram(self, name: str, description: str = "", unit: str = "") -> Histogram:
        if name not in self._metrics:
            self._metrics[name] = self._meter.create_histogram(
                name, description=description, unit=unit
            )
        return self._metrics[name]  # type: ignore[no-any-return]


def _reset_metrics_manager(provider: MeterProvider | None) -> None:
    global _metrics_manager
    if provider is None:
        _metrics_manager = None
    else:
        _metrics_manager = MetricsManager(provider.get_meter(PACKAGE_NAME, PACKAGE_VERSION))


def get_metrics_manager() -> MetricsManager | None:
    """Get the metrics manager, or None if metrics are disabled."""
    return _metrics_manager


def record_counter(
    name: str,
    value: int = 1,
    attributes: dict[str, Any] | None = None,
    description: str = "",
    unit: str = "1",
) -> None:
    """Record a counter metric.

    Args:
        name: Metric name
        value: Value to add (default: 1)
        attributes: Metric attributes/labels
        description: Metric description
        unit: Unit of measurement
    """
    if not _metrics_manager or not config.is_telemetry_enabled():
        return

    try:
        counter = _metrics_manager.get_counter(name, description, unit)
        counter.add(value, attributes=attributes or {})
    except Exception as e:
        logger.debug(f"Failed to record counter {name}: {e}")


def record_histogram(
    name: str,
    value: float,
    attributes: dict[str, Any] | None = None,
    description: str = "",
    unit: str = "s",
) -> None:
    """Record a histogram metric."""
    if not _metrics_manager or not config.is_telemetry_enabled():
        return

    try:
        histogram = _metrics_manager.get_histogram(name, description, unit)
        histogram.record(value, attributes=attributes or {})
    except Exception as e:
        logger.debug(f"Failed to record histogram {name}: {e}")
