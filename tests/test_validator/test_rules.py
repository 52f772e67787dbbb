"""Tests for specloader.validator.rules and SpecValidator."""

from __future__ import annotations

from specloader.document import OpenAPI
from specloader.validator import (
    ExtensionRule,
    OperationRule,
    ParameterRule,
    PathRule,
    RequestBodyRule,
    ResponseRule,
    SchemaRule,
    ServerRule,
    SpecValidator,
    ValidationResult,
)
from specloader.validator.rules import Rule


def _doc(data: dict) -> OpenAPI:
    return OpenAPI.model_validate(data)


class TestPathRule:
    def test_no_paths(self) -> None:
        assert PathRule().validate(_doc({})).codes() == ["PATH_NONE_DEFINED"]

    def test_prefix_and_empty_items(self, broken_doc: OpenAPI) -> None:
        result = PathRule().validate(broken_doc)
        assert result.codes() == ["PATH_INVALID_PREFIX", "PATH_NO_OPERATIONS"]
        assert [i.context for i in result.errors] == ["path:pets", "path:/empty"]

    def test_clean_document(self, petstore_doc: OpenAPI) -> None:
        assert PathRule().validate(petstore_doc).is_valid


class TestOperationRule:
    def test_broken_operation(self, broken_doc: OpenAPI) -> None:
        result = OperationRule().validate(broken_doc)
        assert [i.code for i in result.errors] == [
            "OPERATION_MISSING_ID",
            "OPERATION_MISSING_RESPONSES",
            "OPERATION_PARAMETER_MISSING_IN",
            "OPERATION_PARAMETER_MISSING_NAME",
        ]
        assert [i.code for i in result.warnings] == [
            "OPERATION_MISSING_SUMMARY",
            "OPERATION_MISSING_TAGS",
            "OPERATION_PARAMETER_MISSING_DESCRIPTION",
            "OPERATION_PARAMETER_MISSING_DESCRIPTION",
            "OPERATION_PARAMETER_INVALID_REFERENCE",
            "OPERATION_MISSING_REQUEST_BODY",
        ]
        assert result.errors[2].context == "path:pets,method:get,parameter:0"
        assert result.warnings[4].context == "path:pets,method:get,parameter:3"

    def test_parameter_reference_prefix(self) -> None:
        doc = _doc({
            "paths": {
                "/a": {
                    "get": {
                        "operationId": "a",
                        "summary": "a",
                        "tags": ["a"],
                        "responses": {"200": {"description": "ok"}},
                        "parameters": [
                            {"$ref": "#/components/parameters/Limit"},
                            {"$ref": "#/components/schemas/Limit"},
                            {"name": "q", "in": "query", "description": "   "},
                        ],
                    }
                }
            }
        })
        result = OperationRule().validate(doc)
        assert result.is_valid
        assert result.codes() == [
            "OPERATION_PARAMETER_INVALID_REFERENCE",
            "OPERATION_PARAMETER_MISSING_DESCRIPTION",
        ]
        assert [i.context for i in result.warnings] == [
            "path:/a,method:get,parameter:1",
            "path:/a,method:get,parameter:2",
        ]

    def test_clean_document(self, petstore_doc: OpenAPI) -> None:
        result = OperationRule().validate(petstore_doc)
        assert len(result) == 0


class TestParameterRule:
    def test_covers_path_and_operation_parameters(self) -> None:
        doc = _doc({
            "paths": {
                "/a/{id}": {
                    "parameters": [{"name": "id", "in": "path"}],
                    "get": {"parameters": [{"name": "q", "in": "query", "schema": {}}]},
                }
            }
        })
        result = ParameterRule().validate(doc)
        assert result.codes() == [
            "PARAMETER_MISSING_SCHEMA_OR_CONTENT",
            "PARAMETER_MISSING_SCHEMA_OR_CONTENT",
            "PARAMETER_SCHEMA_TYPE_MISSING",
        ]
        assert result.errors[0].context == "path:/a/{id},parameter:id"
        assert result.errors[1].context == "path:/a/{id},parameter:q"

    def test_broken_document(self, broken_doc: OpenAPI) -> None:
        result = ParameterRule().validate(broken_doc)
        assert [i.context for i in result.errors] == [
            "path:pets,parameter:q",
            "path:pets,parameter:<no name>",
            "path:pets,parameter:<no name>",
        ]


class TestSchemaRule:
    def test_broken_schemas(self, broken_doc: OpenAPI) -> None:
        result = SchemaRule().validate(broken_doc)
        assert result.codes() == [
            "SCHEMA_MISSING_TYPE",
            "SCHEMA_REQUIRED_PROPERTY_MISSING",
            "SCHEMA_INVALID_EMAIL_FORMAT",
            "SCHEMA_INVALID_REFERENCE",
        ]
        assert result.errors[1].context == "schema:Order"

    def test_date_time_example_code(self) -> None:
        doc = _doc({
            "components": {
                "schemas": {
                    "Stamp": {"type": "string", "format": "date-time", "example": "yesterday"},
                    "Ok": {"type": "string", "format": "date", "example": "2024-01-01"},
                    "Custom": {"type": "string", "format": "slug", "example": "?!"},
                }
            }
        })
        assert SchemaRule().validate(doc).codes() == ["SCHEMA_INVALID_DATETIME_FORMAT"]

    def test_no_components(self) -> None:
        assert len(SchemaRule().validate(_doc({}))) == 0


class TestComponentRules:
    def test_response_rule(self, broken_doc: OpenAPI) -> None:
        result = ResponseRule().validate(broken_doc)
        assert result.codes() == ["RESPONSE_MISSING_DESCRIPTION"]
        assert result.errors[0].context == "response:NotFound"

    def test_response_without_content(self) -> None:
        doc = _doc({"components": {"responses": {"Empty": {"description": "nothing"}}}})
        assert ResponseRule().validate(doc).codes() == ["RESPONSE_MISSING_CONTENT"]

    def test_request_body_rule(self, broken_doc: OpenAPI) -> None:
        result = RequestBodyRule().validate(broken_doc)
        assert result.is_valid
        assert result.codes() == ["REQUEST_BODY_MISSING_REQUIRED"]

    def test_request_body_missing_everything(self) -> None:
        doc = _doc({"components": {"requestBodies": {"Body": {}}}})
        assert RequestBodyRule().validate(doc).codes() == [
            "REQUEST_BODY_MISSING_DESCRIPTION",
            "REQUEST_BODY_MISSING_CONTENT",
            "REQUEST_BODY_MISSING_REQUIRED",
        ]


class TestServerRule:
    def test_no_servers_is_a_warning(self, broken_doc: OpenAPI) -> None:
        result = ServerRule().validate(broken_doc)
        assert result.is_valid
        assert result.codes() == ["SERVER_NONE_DEFINED"]

    def test_server_without_url(self) -> None:
        doc = _doc({"servers": [{"url": "https://ok"}, {"description": "no url"}]})
        result = ServerRule().validate(doc)
        assert result.codes() == ["SERVER_MISSING_URL"]
        assert result.errors[0].context == "server:1"


class TestExtensionRule:
    def test_unknown_info_key(self, broken_doc: OpenAPI) -> None:
        result = ExtensionRule().validate(broken_doc)
        assert result.codes() == ["EXTENSION_INVALID_NAME"]
        assert result.warnings[0].context == "info:license-note"

    def test_x_keys_are_accepted(self, petstore_doc: OpenAPI) -> None:
        assert petstore_doc.info.extensions == {"x-audience": "internal"}
        assert len(ExtensionRule().validate(petstore_doc)) == 0


class TestSpecValidator:
    def test_petstore_is_valid(self, petstore_doc: OpenAPI) -> None:
        result = SpecValidator().validate(petstore_doc)
        assert result.is_valid, [str(i) for i in result.errors]
        assert result.warning_count == 0

    def test_broken_document_collects_every_rule(self, broken_doc: OpenAPI) -> None:
        result = SpecValidator().validate(broken_doc)
        codes = set(result.codes())
        assert {
            "PATH_INVALID_PREFIX",
            "SCHEMA_MISSING_TYPE",
            "REQUEST_BODY_MISSING_REQUIRED",
            "RESPONSE_MISSING_DESCRIPTION",
            "OPERATION_MISSING_ID",
            "SERVER_NONE_DEFINED",
            "PARAMETER_MISSING_SCHEMA_OR_CONTENT",
            "EXTENSION_INVALID_NAME",
        } <= codes
        assert not result.is_valid

    def test_results_follow_rule_order(self, broken_doc: OpenAPI) -> None:
        result = SpecValidator(rules=[ServerRule(), PathRule()]).validate(broken_doc)
        assert [i.code for i in result.errors] == ["PATH_INVALID_PREFIX", "PATH_NO_OPERATIONS"]
        assert [i.code for i in result.warnings] == ["SERVER_NONE_DEFINED"]

    def test_custom_rule(self, petstore_doc: OpenAPI) -> None:
        class TitleRule(Rule):
            name = "title"

            def validate(self, document: OpenAPI) -> ValidationResult:
                result = ValidationResult()
                if document.info and document.info.title != "Expected":
                    result.add_error("TITLE", "unexpected title", "info")
                return result

        assert SpecValidator(rules=[TitleRule()]).validate(petstore_doc).codes() == ["TITLE"]
