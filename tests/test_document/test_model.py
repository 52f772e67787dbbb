"""Tests for specloader.document.model navigation and specloader.codec."""

from __future__ import annotations

import json
import textwrap

import pytest
import yaml

from specloader import codec
from specloader.document import OpenAPI, PathItem
from specloader.models import HTTPMethod


class TestNavigation:
    def test_path_item_lookup(self, petstore_doc: OpenAPI) -> None:
        assert petstore_doc.path_item("/pets") is not None
        assert petstore_doc.path_item("/missing") is None
        assert OpenAPI().path_item("/pets") is None

    def test_operation_by_token(self, petstore_doc: OpenAPI) -> None:
        item = petstore_doc.path_item("/pets")
        assert item.operation("GET").operation_id == "listPets"
        assert item.operation(HTTPMethod.POST).operation_id == "createPet"
        assert item.operation("patch") is None
        assert item.operation("fetch") is None

    def test_operations_in_canonical_order(self) -> None:
        item = PathItem.model_validate({
            "delete": {"operationId": "d"},
            "post": {"operationId": "p"},
            "get": {"operationId": "g"},
        })
        assert [m for m, _ in item.operations()] == [
            HTTPMethod.GET, HTTPMethod.POST, HTTPMethod.DELETE,
        ]

    def test_wire_aliases(self, petstore_doc: OpenAPI) -> None:
        param = petstore_doc.path_item("/pets").get.parameters[0]
        assert param.in_ == "query"
        assert param.schema_.format == "int32"
        assert petstore_doc.path_item("/pets").post.request_body.required is True

    def test_yaml_status_codes_become_strings(self) -> None:
        doc = codec.decode_yaml(textwrap.dedent("""\
            paths:
              /x:
                get:
                  responses:
                    200:
                      description: ok
        """))
        assert list(doc.path_item("/x").get.responses) == ["200"]


class TestCodec:
    def test_decode_rejects_non_mapping(self) -> None:
        with pytest.raises(TypeError):
            codec.decode_json("[1, 2]")
        with pytest.raises(TypeError):
            codec.decode_yaml("")

    def test_encode_json_uses_wire_names(self, petstore_doc: OpenAPI) -> None:
        data = json.loads(codec.encode_json(petstore_doc))
        param = data["paths"]["/pets"]["get"]["parameters"][0]
        assert param["in"] == "query"
        assert "in_" not in param
        assert data["paths"]["/pets"]["get"]["operationId"] == "listPets"
        assert data["paths"]["/pets"]["get"]["responses"]["200"]["content"][
            "application/json"
        ]["schema"]["items"] == {"$ref": "#/components/schemas/Pet"}

    def test_encode_omits_unset_fields(self, petstore_doc: OpenAPI) -> None:
        data = json.loads(codec.encode_json(petstore_doc))
        assert "webhooks" not in data
        assert "deprecated" not in data["paths"]["/pets"]["get"]

    def test_extensions_survive_round_trip(self, petstore_doc: OpenAPI) -> None:
        again = codec.decode_yaml(codec.encode_yaml(petstore_doc))
        assert again.info.extensions == {"x-audience": "internal"}
        assert again.info.title == petstore_doc.info.title

    def test_encode_yaml_keeps_field_order(self, petstore_doc: OpenAPI) -> None:
        data = yaml.safe_load(codec.encode_yaml(petstore_doc))
        assert list(data)[:2] == ["openapi", "info"]
        assert list(data["paths"]) == ["/pets", "/pets/{petId}"]
