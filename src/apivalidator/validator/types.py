"""Collaborator protocols consumed by the validation orchestrator.

The orchestrator only relies on these narrow interfaces. The reference
registry in `apivalidator.schema` implements `SchemaRegistry` and `Route`,
and `apivalidator.validator.engines` provides a `StructuralValidator`.
"""

from collections.abc import Callable, Sequence
from typing import Any, Protocol, runtime_checkable

from .models import Direction, EngineErrorModel, FieldKind, ResourceSpecModel


@runtime_checkable
class Route(Protocol):
    """A named endpoint able to describe its request and response resources."""

    def resource_spec_for(
        self,
        direction: Direction,
        resource_root: Any,
        status_codes: Sequence[int],
        field_kinds: Sequence[FieldKind],
    ) -> ResourceSpecModel: ...


@runtime_checkable
class SchemaRegistry(Protocol):
    """Looks up routes and the root that resource definitions refer to."""

    def find_route(self, name: str) -> Route | None: ...

    def get_resource_root(self) -> Any: ...


@runtime_checkable
class StructuralValidator(Protocol):
    """Checks a decoded value against one definition."""

    def validate(self, value: Any) -> tuple[bool, EngineErrorModel | None]: ...


# Builds a validator from a definition object
EngineFactory = Callable[[dict[str, Any]], StructuralValidator]
