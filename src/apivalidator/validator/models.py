"""Pydantic models for the apivalidator validation pipeline.

This module contains the data passed into and out of the orchestrator:
the exchange being validated, the per-route resource specification returned
by the schema registry, and the per-field outcomes collected in a
`ValidationResult`.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Annotated, Any, Literal

from pydantic import ConfigDict, Field

from apivalidator.models import FrozenBaseModel

FieldKind = Literal["header", "parameter", "body"]

# Fixed validation order
FIELD_KINDS: tuple[FieldKind, ...] = ("header", "parameter", "body")


class Direction(Enum):
    """Which side of an exchange is being validated."""

    REQUEST = "request"
    RESPONSE = "response"


class ExchangeTargetModel(FrozenBaseModel):
    """The material to validate for one request or response.

    Attributes:
        header: Header name to value (or list of values) mapping.
        parameter: Query/body parameters, either already parsed into a mapping
            or as a raw ``a=1&b=2`` string.
        body: Raw payload.
        content_type: Content-Type of the payload, parameters included.
        status_code: Response status code, ignored for requests.

    Example:
        >>> target = ExchangeTargetModel.model_validate(
        ...     {"body": '{"name": "a"}', "contentType": "application/json"}
        ... )
        >>> target.content_type
        'application/json'
    """

    # Transports may hand over their whole exchange map
    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    header: dict[str, Any] | None = None
    parameter: dict[str, Any] | str | bytes | None = None
    body: str | bytes | None = None
    content_type: str | None = Field(default=None, alias="contentType")
    status_code: int | None = Field(default=None, alias="statusCode")

    def field(self, kind: FieldKind) -> Any:
        """Return the raw value for a field-kind."""
        return getattr(self, kind)

    def present_fields(self) -> list[FieldKind]:
        """Field-kinds with a non-empty value, in validation order."""
        return [kind for kind in FIELD_KINDS if self.field(kind)]


class FieldSpecModel(FrozenBaseModel):
    """Structural definition for one field-kind of a route.

    Attributes:
        title: Resource title, used in mismatch messages.
        definition: Definition object handed to the validator engine.
    """

    title: str
    definition: dict[str, Any]


class ByContentType(FrozenBaseModel):
    """Negotiate the body decode method from the request content-type."""

    kind: Literal["by_content_type"] = "by_content_type"
    table: dict[str, str]


class Forced(FrozenBaseModel):
    """Always decode the body with one method, whatever the content-type."""

    kind: Literal["forced"] = "forced"
    method: str


EncodingSpec = Annotated[ByContentType | Forced, Field(discriminator="kind")]


def encoding_spec_from(raw: Any) -> ByContentType | Forced | None:
    """Build an encoding spec from its schema-file form.

    A mapping is a content-type table, a string pins a single decode method.

    Raises:
        TypeError: If ``raw`` is neither
    """
    if raw is None or isinstance(raw, ByContentType | Forced):
        return raw
    if isinstance(raw, Mapping):
        return ByContentType(table=dict(raw))
    if isinstance(raw, str):
        return Forced(method=raw)
    raise TypeError(f"Encoding must be a mapping or a method name, got {type(raw).__name__}")


class ResourceSpecModel(FrozenBaseModel):
    """Per field-kind definitions of one route for one direction.

    A missing field-kind means the route does not constrain it.

    Attributes:
        header: Header definition.
        parameter: Parameter definition.
        body: Body definition.
        encoding: How to pick the body decode method.
    """

    header: FieldSpecModel | None = None
    parameter: FieldSpecModel | None = None
    body: FieldSpecModel | None = None
    encoding: EncodingSpec | None = None

    def get(self, kind: FieldKind) -> FieldSpecModel | None:
        return getattr(self, kind)

    def defines(self, kind: FieldKind) -> bool:
        return self.get(kind) is not None


class EngineErrorModel(FrozenBaseModel):
    """Primary mismatch reported by a structural validator engine.

    Attributes:
        attribute: Location inside the validated value (e.g. ``$.name``).
        position: Location inside the definition (e.g. ``/properties/name/type``).
        reason: Engine-specific description of the mismatch.
    """

    attribute: str | None = None
    position: str | None = None
    reason: str | None = None


class ErrorDetailModel(FrozenBaseModel):
    """Why a field failed validation.

    Attributes:
        message: Human-readable summary.
        attribute: Location of a structural mismatch inside the decoded value.
        position: Location of the mismatch inside the definition.
        encoding: Decode method applied to the field.
        content_type: Content-type involved in a failed negotiation.
        method: Decode method involved in a failed negotiation.
        reason: Engine-specific description of a structural mismatch.
    """

    message: str
    attribute: str | None = None
    position: str | None = None
    encoding: str | None = None
    content_type: str | None = None
    method: str | None = None
    reason: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


class FieldOutcomeModel(FrozenBaseModel):
    """Outcome for one field-kind: valid, or invalid with a detail."""

    valid: bool
    error: ErrorDetailModel | None = None

    @classmethod
    def ok(cls) -> FieldOutcomeModel:
        return cls(valid=True)

    @classmethod
    def invalid(cls, error: ErrorDetailModel) -> FieldOutcomeModel:
        return cls(valid=False, error=error)
