"""Tests for apivalidator.validator.result module."""

from apivalidator.validator import ErrorDetailModel, FieldOutcomeModel, ValidationResult, merge


def _error(message: str = "bad") -> ErrorDetailModel:
    return ErrorDetailModel(message=message, attribute="$.name", position="/properties/name/type")


class TestValidationResult:
    """Test result construction and queries."""

    def test_empty_is_valid(self):
        result = ValidationResult.empty()
        assert result.is_valid()
        assert result.errors() == {}

    def test_all_valid(self):
        result = ValidationResult.all_valid(["header", "body"])
        assert result.is_valid()
        assert set(result.outcomes) == {"header", "body"}
        assert result.errors() == {}

    def test_all_valid_without_fields(self):
        assert ValidationResult.all_valid([]) == ValidationResult.empty()

    def test_single_error(self):
        result = ValidationResult.single_error("body", _error())
        assert not result.is_valid()
        assert result.errors() == {"body": _error()}

    def test_errors_only_lists_invalid_fields(self):
        result = ValidationResult(
            outcomes={
                "header": FieldOutcomeModel.ok(),
                "body": FieldOutcomeModel.invalid(_error()),
            }
        )
        assert list(result.errors()) == ["body"]

    def test_to_dict(self):
        result = ValidationResult.all_valid(["header"]).merge(
            ValidationResult.single_error("body", _error())
        )
        assert result.to_dict() == {
            "valid": False,
            "errors": {
                "body": {
                    "message": "bad",
                    "attribute": "$.name",
                    "position": "/properties/name/type",
                }
            },
        }


class TestMerge:
    """Test merging of partial results."""

    def test_disjoint_keys_in_either_order(self):
        valid_header = ValidationResult.all_valid(["header"])
        invalid_body = ValidationResult.single_error("body", _error())

        for merged in (valid_header.merge(invalid_body), invalid_body.merge(valid_header)):
            assert merged.outcomes["header"] == FieldOutcomeModel.ok()
            assert merged.outcomes["body"] == FieldOutcomeModel.invalid(_error())
            assert not merged.is_valid()

        assert valid_header.merge(invalid_body) == invalid_body.merge(valid_header)

    def test_incoming_result_wins_on_collision(self):
        invalid = ValidationResult.single_error("body", _error())
        valid = ValidationResult.all_valid(["body"])

        assert valid.merge(invalid).errors() == {"body": _error()}
        assert invalid.merge(valid).is_valid()

    def test_merge_does_not_modify_operands(self):
        first = ValidationResult.all_valid(["header"])
        second = ValidationResult.all_valid(["body"])
        first.merge(second)

        assert set(first.outcomes) == {"header"}
        assert set(second.outcomes) == {"body"}

    def test_merge_is_associative(self):
        a = ValidationResult.all_valid(["header"])
        b = ValidationResult.all_valid(["parameter"])
        c = ValidationResult.single_error("body", _error())

        assert a.merge(b).merge(c) == a.merge(b.merge(c))

    def test_merge_function(self):
        merged = merge(
            ValidationResult.all_valid(["header"]),
            ValidationResult.all_valid(["parameter"]),
            ValidationResult.single_error("body", _error("last")),
        )
        assert set(merged.outcomes) == {"header", "parameter", "body"}
        assert merged.errors()["body"].message == "last"

    def test_merge_nothing(self):
        assert merge() == ValidationResult.empty()
