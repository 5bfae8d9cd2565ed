"""Pydantic models and types for apivalidator telemetry."""

from enum import Enum
from typing import Any, Protocol

from pydantic import Field

from apivalidator.models import FrozenBaseModel
from apivalidator.version import PACKAGE_NAME, PACKAGE_VERSION


class StatusCode(Enum):
    """Span status codes.

    - UNSET: Status not explicitly set
    - OK: Operation completed successfully
    - ERROR: Operation failed with an error
    """

    UNSET = 0
    OK = 1
    ERROR = 2


class Status:
    """Span status.

    Attributes:
        status_code: The status code indicating success, error, or unset
        description: Optional human-readable description of the status
    """

    def __init__(self, status_code: StatusCode, description: str | None = None):
        self.status_code = status_code
        self.description = description


class Span(Protocol):
    """Minimal interface of the spans yielded by `traced_operation`."""

    def set_attribute(self, key: str, value: Any) -> None: ...

    def set_status(self, status: Status) -> None: ...

    def record_exception(self, exception: Exception) -> None: ...

    def is_recording(self) -> bool: ...


class TelemetryConfigModel(FrozenBaseModel):
    """Configuration for traces and metrics.

    Attributes:
        enabled: Global enable/disable for all telemetry
        endpoint: OTLP/HTTP endpoint URL (e.g., http://localhost:4318)
        headers: Additional headers for OTLP requests
        service_name: Name of the service for identification
        service_version: Version of the service
        environment: Deployment environment
        console_export: Print spans to the console (for debugging)
        metrics_export_interval: How often to export metrics in seconds

    Example:
        >>> config = TelemetryConfigModel(enabled=True, console_export=True)
    """

    enabled: bool = False
    endpoint: str | None = None
    headers: dict[str, str] | None = None

    service_name: str = PACKAGE_NAME
    service_version: str = PACKAGE_VERSION
    environment: str = "development"

    resource_attributes: dict[str, Any] | None = None

    console_export: bool = False
    metrics_export_interval: int = Field(default=60, ge=1)
