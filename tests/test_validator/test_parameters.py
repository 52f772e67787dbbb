"""Tests for specloader.validator.rules.validate_parameters."""

from __future__ import annotations

from specloader.document import MediaType, Parameter, Schema
from specloader.validator import ValidationResult, validate_parameters


def _param(**data) -> Parameter:
    return Parameter.model_validate(data)


class TestValidateParameters:
    def test_missing_schema_and_content(self) -> None:
        result = ValidationResult()
        validate_parameters("/pets", [_param(name="limit", **{"in": "query"})], result)
        assert result.codes() == ["PARAMETER_MISSING_SCHEMA_OR_CONTENT"]
        issue = result.errors[0]
        assert "/pets" in issue.context
        assert "limit" in issue.context
        assert issue.context == "path:/pets,parameter:limit"

    def test_schema_without_type(self) -> None:
        result = ValidationResult()
        param = _param(name="q", schema={"description": "untyped"}, content={"text/plain": {}})
        validate_parameters("/search", [param], result)
        assert result.codes() == ["PARAMETER_SCHEMA_TYPE_MISSING"]

    def test_untyped_schema_without_content_yields_both(self) -> None:
        result = ValidationResult()
        validate_parameters("/search", [_param(name="q", schema={})], result)
        assert result.codes() == [
            "PARAMETER_MISSING_SCHEMA_OR_CONTENT",
            "PARAMETER_SCHEMA_TYPE_MISSING",
        ]

    def test_bare_reference_is_skipped(self) -> None:
        result = ValidationResult()
        validate_parameters("/pets", [_param(**{"$ref": "#/components/parameters/Limit"})], result)
        assert result.is_valid
        assert len(result) == 0

    def test_typed_schema_is_clean(self) -> None:
        result = ValidationResult()
        param = Parameter(name="id", in_="path", schema_=Schema(type="integer"))
        validate_parameters("/pets/{id}", [param], result)
        assert len(result) == 0

    def test_content_only_is_clean(self) -> None:
        result = ValidationResult()
        param = Parameter(name="filter", content={"application/json": MediaType()})
        validate_parameters("/pets", [param], result)
        assert len(result) == 0

    def test_empty_content_counts_as_missing(self) -> None:
        result = ValidationResult()
        validate_parameters("/pets", [_param(name="f", content={})], result)
        assert result.codes() == ["PARAMETER_MISSING_SCHEMA_OR_CONTENT"]

    def test_unnamed_parameter_uses_placeholder(self) -> None:
        result = ValidationResult()
        validate_parameters("/pets", [_param()], result)
        assert result.errors[0].context == "path:/pets,parameter:<no name>"

    def test_bad_parameter_does_not_stop_the_rest(self) -> None:
        result = ValidationResult()
        params = [_param(name="a"), _param(name="b", schema={"type": "string"}), _param(name="c")]
        validate_parameters("/x", params, result)
        assert [i.context for i in result.errors] == [
            "path:/x,parameter:a",
            "path:/x,parameter:c",
        ]

    def test_none_and_empty_are_noops(self) -> None:
        result = ValidationResult()
        validate_parameters("/x", None, result)
        validate_parameters("/x", [], result)
        assert len(result) == 0

    def test_appends_to_existing_result(self) -> None:
        result = ValidationResult()
        result.add_warning("EXISTING", "kept")
        validate_parameters("/x", [_param(name="a")], result)
        assert result.error_count == 1
        assert result.warning_count == 1


class TestValidationResult:
    def test_issue_str(self) -> None:
        result = ValidationResult()
        issue = result.add_error("CODE", "Something broke", "path:/x")
        assert str(issue) == "[CODE] Something broke (path:/x)"

    def test_errors_then_warnings(self) -> None:
        result = ValidationResult()
        result.add_warning("W1", "w")
        result.add_error("E1", "e")
        assert result.codes() == ["E1", "W1"]
        assert not result.is_valid

    def test_extend_and_clear(self) -> None:
        first, second = ValidationResult(), ValidationResult()
        first.add_error("E1", "e")
        second.add_error("E2", "e")
        second.add_warning("W1", "w")
        first.extend(second)
        assert first.codes() == ["E1", "E2", "W1"]
        first.clear()
        assert first.is_valid and len(first) == 0

    def test_accessors_return_copies(self) -> None:
        result = ValidationResult()
        result.add_error("E1", "e")
        result.errors.clear()
        assert result.error_count == 1
