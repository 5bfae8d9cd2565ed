"""Pydantic models for the reference schema registry.

A schema names reusable resources (JSON Schema definitions) and lists
routes. Each route says which resource constrains the header, parameter and
body of its request and of its responses, per status code.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from pydantic import Field, field_validator, model_validator

from apivalidator.models import FrozenBaseModel
from apivalidator.validator.models import (
    FIELD_KINDS,
    Direction,
    FieldKind,
    FieldSpecModel,
    ResourceSpecModel,
    encoding_spec_from,
)

DEFAULT_RESPONSE = "default"


def resource_ref(name: str) -> dict[str, Any]:
    """A definition pointing at a named resource of the schema."""
    return {"$ref": f"#/resource/{name}"}


class ResourceRefsModel(FrozenBaseModel):
    """Resources constraining one request or response.

    Each field is either the name of a schema resource or an inline
    definition.

    Attributes:
        header: Header resource.
        parameter: Parameter resource.
        body: Body resource.
        encoding: Content-type to decode method table, or a single method
            name used whatever the content-type.
    """

    header: str | dict[str, Any] | None = None
    parameter: str | dict[str, Any] | None = None
    body: str | dict[str, Any] | None = None
    encoding: dict[str, str] | str | None = None

    def resource_names(self) -> list[str]:
        return [ref for kind in FIELD_KINDS if isinstance(ref := getattr(self, kind), str)]


class RouteModel(FrozenBaseModel):
    """A named endpoint definition.

    Attributes:
        name: Route name used for lookups.
        route: URL path template, informational.
        method: HTTP method, informational.
        description: Optional description.
        request: Request resources.
        responses: Response resources by status code, with an optional
            ``default`` entry.

    Example:
        >>> route = RouteModel(
        ...     name="createUser",
        ...     route="/users",
        ...     method="POST",
        ...     request=ResourceRefsModel(body="user"),
        ...     responses={201: ResourceRefsModel(body="user")},
        ... )
    """

    name: str
    route: str | None = None
    method: str | None = None
    description: str | None = None
    request: ResourceRefsModel = Field(default_factory=ResourceRefsModel)
    responses: dict[int | str, ResourceRefsModel] = Field(default_factory=dict)

    @field_validator("responses", mode="before")
    @classmethod
    def normalize_status_codes(cls, value: Any) -> Any:
        """YAML gives integer keys, JSON gives strings: normalize to int."""
        if isinstance(value, dict):
            return {
                int(code) if isinstance(code, str) and code.isdigit() else code: refs
                for code, refs in value.items()
            }
        return value

    @field_validator("responses")
    @classmethod
    def check_status_codes(
        cls, value: dict[int | str, ResourceRefsModel]
    ) -> dict[int | str, ResourceRefsModel]:
        for code in value:
            if isinstance(code, str) and code != DEFAULT_RESPONSE:
                raise ValueError(f"Invalid response status code: {code}")
        return value

    def response_refs(self, status_codes: Sequence[int]) -> ResourceRefsModel:
        """Resources of the first listed status code the route declares.

        Falls back to the ``default`` entry, then to no resources at all.
        """
        for code in status_codes:
            if code in self.responses:
                return self.responses[code]
        return self.responses.get(DEFAULT_RESPONSE, ResourceRefsModel())

    def resource_spec_for(
        self,
        direction: Direction,
        resource_root: dict[str, Any],
        status_codes: Sequence[int],
        field_kinds: Sequence[FieldKind],
    ) -> ResourceSpecModel:
        """Resolve the resources of the requested field-kinds.

        Definitions carry the resource root so ``#/resource/...`` references
        resolve inside them.
        """
        refs = self.request if direction is Direction.REQUEST else self.response_refs(status_codes)

        fields: dict[str, FieldSpecModel] = {}
        for kind in field_kinds:
            ref = getattr(refs, kind)
            if ref is None:
                continue
            if isinstance(ref, str):
                title, definition = ref, resource_ref(ref)
            else:
                title, definition = ref.get("title") or f"{self.name}.{kind}", dict(ref)
            fields[kind] = FieldSpecModel(title=title, definition={**resource_root, **definition})

        return ResourceSpecModel(**fields, encoding=encoding_spec_from(refs.encoding))


class SchemaModel(FrozenBaseModel):
    """A schema registry: named resources and the routes using them.

    Attributes:
        title: Schema title.
        description: Optional description.
        resources: JSON Schema definitions by resource name.
        routes: Route definitions, names unique.
    """

    title: str | None = None
    description: str | None = None
    resources: dict[str, dict[str, Any]] = Field(default_factory=dict)
    routes: list[RouteModel] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_references(self) -> SchemaModel:
        seen: set[str] = set()
        for route in self.routes:
            if route.name in seen:
                raise ValueError(f"Duplicate route name: {route.name}")
            seen.add(route.name)

            for refs in [route.request, *route.responses.values()]:
                for name in refs.resource_names():
                    if name not in self.resources:
                        raise ValueError(
                            f"Route '{route.name}' references unknown resource '{name}'"
                        )
        return self

    def find_route(self, name: str) -> RouteModel | None:
        return next((route for route in self.routes if route.name == name), None)

    def get_resource_root(self) -> dict[str, Any]:
        return {"resource": dict(self.resources)}
