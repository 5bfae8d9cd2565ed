"""Tracing functionality for apivalidator.

This module wraps OpenTelemetry's tracer behind the small `Span` protocol.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from opentelemetry import trace
from opentelemetry.trace import Status as OTelStatus
from opentelemetry.trace import StatusCode as OTelStatusCode

from apivalidator.version import PACKAGE_NAME, PACKAGE_VERSION

from . import config
from .models import Span, Status, StatusCode

logger = logging.getLogger(__name__)

__all__ = ["traced_operation", "get_current_trace_id"]

_STATUS_CODE_MAP = {
    StatusCode.UNSET: OTelStatusCode.UNSET,
    StatusCode.OK: OTelStatusCode.OK,
    StatusCode.ERROR: OTelStatusCode.ERROR,
}


class NoOpSpan:
    """No-op span for when telemetry is disabled."""

    def set_attribute(self, key: str, value: Any) -> None:
        pass

    def set_status(self, status: Status) -> None:
        pass

    def record_exception(self, exception: Exception) -> None:
        pass

    def is_recording(self) -> bool:
        return False


class SpanWrapper:
    """Wraps an OpenTelemetry span to implement our Span protocol."""

    def __init__(self, otel_span: Any) -> None:
        self._span = otel_span

    def set_attribute(self, key: str, value: Any) -> None:
        """Set an attribute, converting values OpenTelemetry can't store."""
        if not self._span.is_recording() or value is None:
            return
        if isinstance(value, str | int | float | bool):
            self._span.set_attribute(key, value)
        elif isinstance(value, list | tuple) and all(
            isinstance(v, str | int | float | bool) for v in value
        ):
            self._span.set_attribute(key, list(value))
        else:
            self._span.set_attribute(key, str(value))

    def set_status(self, status: Status) -> None:
        if self._span.is_recording():
            otel_code = _STATUS_CODE_MAP.get(status.status_code, OTelStatusCode.UNSET)
            self._span.set_status(OTelStatus(otel_code, status.description))

    def record_exception(self, exception: Exception) -> None:
        if self._span.is_recording():
            self._span.record_exception(exception)

    def is_recording(self) -> bool:
        return bool(self._span.is_recording())


@contextmanager
def traced_operation(name: str, attributes: dict[str, Any] | None = None) -> Iterator[Span]:
    """Context manager for tracing operations.

    Args:
        name: Operation name (e.g., "apivalidator.validate")
        attributes: Initial span attributes

    Yields:
        A span, or a no-op span when telemetry is disabled

    Example:
        ```python
        with traced_operation("my.operation", {"route": "createUser"}) as span:
            span.set_attribute("result.valid", True)
        ```
    """
    provider = config.get_tracer_provider()
    if provider is None or not config.is_telemetry_enabled():
        yield NoOpSpan()
        return

    tracer = provider.get_tracer(PACKAGE_NAME, PACKAGE_VERSION)
    with tracer.start_as_current_span(
        name, record_exception=False, set_status_on_exception=False
    ) as otel_span:
        span = SpanWrapper(otel_span)
        for key, value in (attributes or {}).items():
            span.set_attribute(key, value)

        try:
            yield span
        except Exception as e:
            span.record_exception(e)
            span.set_status(Status(StatusCode.ERROR, str(e)))
            raise


def get_current_trace_id() -> str | None:
    """Get the current trace ID as a hex string, or None outside a trace."""
    span = trace.get_current_span()
    if span.is_recording():
        return format(span.get_span_context().trace_id, "032x")
    return None
