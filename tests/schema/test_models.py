"""Tests for apivalidator.schema.models module."""

import pytest
from pydantic import ValidationError

from apivalidator.schema import ResourceRefsModel, RouteModel, SchemaModel, resource_ref
from apivalidator.validator import (
    ByContentType,
    Direction,
    Forced,
    Route,
    SchemaRegistry,
)

ROOT = {"resource": {"user": {"type": "object"}}}


class TestRouteModel:
    """Test resource resolution of a route."""

    def test_named_resource(self):
        route = RouteModel(name="createUser", request=ResourceRefsModel(body="user"))
        spec = route.resource_spec_for(Direction.REQUEST, ROOT, [], ["body"])

        assert spec.body.title == "user"
        assert spec.body.definition == {"resource": ROOT["resource"], "$ref": "#/resource/user"}
        assert spec.encoding is None

    def test_inline_definition(self):
        route = RouteModel(
            name="ping",
            request=ResourceRefsModel(parameter={"type": "object", "required": ["q"]}),
        )
        spec = route.resource_spec_for(Direction.REQUEST, ROOT, [], ["parameter"])

        assert spec.parameter.title == "ping.parameter"
        assert spec.parameter.definition["required"] == ["q"]
        assert spec.parameter.definition["resource"] == ROOT["resource"]

    def test_inline_definition_title(self):
        route = RouteModel(
            name="ping", request=ResourceRefsModel(body={"title": "Ping", "type": "object"})
        )
        spec = route.resource_spec_for(Direction.REQUEST, ROOT, [], ["body"])
        assert spec.body.title == "Ping"

    def test_only_requested_field_kinds(self):
        route = RouteModel(
            name="createUser", request=ResourceRefsModel(header="user", body="user")
        )
        spec = route.resource_spec_for(Direction.REQUEST, ROOT, [], ["body"])

        assert spec.header is None
        assert spec.defines("body")
        assert not spec.defines("header")

    def test_encoding_shapes(self):
        table = RouteModel(
            name="a", request=ResourceRefsModel(body="user", encoding={"text/json": "json"})
        )
        forced = RouteModel(name="b", request=ResourceRefsModel(body="user", encoding="json"))

        assert table.resource_spec_for(Direction.REQUEST, ROOT, [], ["body"]).encoding == (
            ByContentType(table={"text/json": "json"})
        )
        assert forced.resource_spec_for(Direction.REQUEST, ROOT, [], ["body"]).encoding == (
            Forced(method="json")
        )

    def test_response_by_status_code(self):
        route = RouteModel(
            name="getUser",
            responses={
                "200": ResourceRefsModel(body="user"),
                404: ResourceRefsModel(body={"type": "null"}),
                "default": ResourceRefsModel(header="user"),
            },
        )

        assert set(route.responses) == {200, 404, "default"}
        assert route.resource_spec_for(Direction.RESPONSE, ROOT, [200], ["body"]).body.title == "user"
        assert route.resource_spec_for(Direction.RESPONSE, ROOT, [404], ["body"]).body.title == (
            "getUser.body"
        )

    def test_response_falls_back_to_default(self):
        route = RouteModel(
            name="getUser",
            responses={200: ResourceRefsModel(body="user"), "default": ResourceRefsModel(header="user")},
        )
        spec = route.resource_spec_for(Direction.RESPONSE, ROOT, [500], ["header", "body"])

        assert spec.header is not None
        assert spec.body is None

    def test_response_first_listed_code_wins(self):
        route = RouteModel(
            name="getUser",
            responses={200: ResourceRefsModel(body="user"), 201: ResourceRefsModel(header="user")},
        )
        assert route.response_refs([201, 200]) == ResourceRefsModel(header="user")

    def test_response_without_resources(self):
        route = RouteModel(name="getUser")
        assert route.response_refs([200]) == ResourceRefsModel()

    def test_invalid_status_code(self):
        with pytest.raises(ValidationError, match="Invalid response status code: 2xx"):
            RouteModel(name="getUser", responses={"2xx": {"body": "user"}})

    def test_implements_protocol(self):
        assert isinstance(RouteModel(name="a"), Route)


class TestSchemaModel:
    """Test the reference registry."""

    def test_find_route(self):
        schema = SchemaModel(
            resources={"user": {"type": "object"}},
            routes=[RouteModel(name="createUser", request=ResourceRefsModel(body="user"))],
        )

        assert schema.find_route("createUser").name == "createUser"
        assert schema.find_route("missing") is None

    def test_resource_root(self):
        schema = SchemaModel(resources={"user": {"type": "object"}})
        assert schema.get_resource_root() == {"resource": {"user": {"type": "object"}}}

    def test_duplicate_route_names(self):
        with pytest.raises(ValidationError, match="Duplicate route name: a"):
            SchemaModel(routes=[RouteModel(name="a"), RouteModel(name="a")])

    def test_unknown_resource_reference(self):
        with pytest.raises(ValidationError, match="references unknown resource 'ghost'"):
            SchemaModel(
                routes=[RouteModel(name="a", responses={200: ResourceRefsModel(body="ghost")})]
            )

    def test_implements_protocol(self):
        assert isinstance(SchemaModel(), SchemaRegistry)


def test_resource_ref():
    assert resource_ref("user") == {"$ref": "#/resource/user"}
