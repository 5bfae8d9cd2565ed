"""Tests for apivalidator.schema.loaders module."""

import json

import pytest

from apivalidator.schema import load_schema, load_schema_from_file
from apivalidator.validator import Direction


class TestLoadSchema:
    """Test loading schemas from strings."""

    def test_yaml(self, users_schema):
        assert users_schema.title == "Users API"
        assert [route.name for route in users_schema.routes] == [
            "createUser",
            "searchUsers",
            "importUsers",
            "updateUser",
            "uploadAvatar",
        ]
        assert set(users_schema.find_route("createUser").responses) == {201, "default"}

    def test_json(self):
        schema = load_schema(
            json.dumps(
                {
                    "resources": {"user": {"type": "object"}},
                    "routes": [{"name": "getUser", "responses": {"200": {"body": "user"}}}],
                }
            ),
            format="json",
        )

        spec = schema.find_route("getUser").resource_spec_for(
            Direction.RESPONSE, schema.get_resource_root(), [200], ["body"]
        )
        assert spec.body.title == "user"

    def test_unsupported_format(self):
        with pytest.raises(ValueError, match="Unsupported format: toml"):
            load_schema("", format="toml")

    def test_malformed_yaml(self):
        with pytest.raises(ValueError, match="Failed to parse YAML"):
            load_schema("routes: [unclosed")

    def test_malformed_json(self):
        with pytest.raises(ValueError, match="Failed to parse JSON"):
            load_schema("{", format="json")

    def test_not_a_mapping(self):
        with pytest.raises(ValueError, match="Schema must be a mapping"):
            load_schema("- a\n- b\n")

    def test_invalid_schema(self):
        with pytest.raises(ValueError, match="Invalid schema"):
            load_schema("routes:\n  - route: /users\n")


class TestLoadSchemaFromFile:
    """Test loading schemas from files."""

    def test_yaml_file(self, tmp_path):
        path = tmp_path / "api.yml"
        path.write_text("title: Files\nroutes:\n  - name: ping\n")
        assert load_schema_from_file(path).find_route("ping") is not None

    def test_json_file(self, tmp_path):
        path = tmp_path / "api.json"
        path.write_text(json.dumps({"title": "Files"}))
        assert load_schema_from_file(str(path)).title == "Files"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="Schema file not found"):
            load_schema_from_file(tmp_path / "missing.yaml")

    def test_unsupported_extension(self, tmp_path):
        path = tmp_path / "api.toml"
        path.write_text("")
        with pytest.raises(ValueError, match="Unsupported file extension: .toml"):
            load_schema_from_file(path)
