"""apivalidator telemetry - OpenTelemetry wrapper for observability.

Validations are traced and counted through this module so callers can
correlate validation failures with the requests that caused them, without
depending on OpenTelemetry APIs directly.

Telemetry is disabled until configured; every call below is then a no-op.

Quick Start:
    ```python
    from apivalidator.telemetry import configure_telemetry, traced_operation

    configure_telemetry(enabled=True, endpoint="http://localhost:4318")

    with traced_operation("my.operation", {"key": "value"}) as span:
        span.set_attribute("result", "success")
    ```
"""

from .config import configure_telemetry, is_telemetry_enabled, shutdown_telemetry
from .metrics import get_metrics_manager, record_counter, record_histogram
from .models import Span, Status, StatusCode, TelemetryConfigModel
from .tracer import get_current_trace_id, traced_operation

__all__ = [
    # Configuration
    "configure_telemetry",
    "shutdown_telemetry",
    "is_telemetry_enabled",
    "TelemetryConfigModel",
    # Tracing
    "traced_operation",
    "get_current_trace_id",
    # Metrics
    "get_metrics_manager",
    "record_counter",
    "record_histogram",
    # Types
    "Span",
    "Status",
    "StatusCode",
]
