"""Resolve the schema behind an operation and project it into a plain tree.

:class:`SchemaResolver` navigates one decoded document read-only. Probing a
path, method or response that does not exist is normal usage, so every
lookup returns ``None`` on absence (logged at warning level) instead of
raising.

The output of :func:`convert_to_json_node` is a *SchemaNode*: a fresh,
insertion-ordered ``dict`` holding only JSON-compatible values, with these
keys when present on the schema:

``$ref``
    A referencing schema is emitted as ``{"$ref": ...}`` and nothing else.
``type``, ``format``, ``description``, ``default``
    Copied as-is.
``enum``
    A list in declaration order; scalars keep their native types.
``properties``
    A dict of nested SchemaNodes in declaration order.
``items``
    The item SchemaNode of an array schema.
``additionalProperties``
    ``True``/``False`` or a nested SchemaNode.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from pydantic import TypeAdapter

from specloader.document import ApiResponse, MediaType, OpenAPI, Operation, Schema

logger = logging.getLogger(__name__)

SUCCESS_STATUS = "200"
DEFAULT_RESPONSE = "default"

_JSON_VALUE = TypeAdapter(Any)


def _jsonable(value: Any) -> Any:
    # date, UUID, Decimal and bytes produced by schema casts become text.
    return _JSON_VALUE.dump_python(value, mode="json")


def convert_to_json_node(schema: Optional[Schema]) -> Optional[dict[str, Any]]:
    """Project *schema* into a SchemaNode. ``None`` converts to ``None``."""
    if schema is None:
        return None
    if schema.ref is not None:
        return {"$ref": schema.ref}

    node: dict[str, Any] = {}
    for key in ("type", "format", "description", "default"):
        value = getattr(schema, key)
        if value is not None:
            node[key] = _jsonable(value)
    if schema.enum is not None:
        node["enum"] = [_jsonable(v) for v in schema.enum]
    if schema.properties:
        node["properties"] = {
            name: convert_to_json_node(child) for name, child in schema.properties.items()
        }
    if schema.items is not None:
        node["items"] = convert_to_json_node(schema.items)
    extra = schema.additional_properties
    if isinstance(extra, bool):
        node["additionalProperties"] = extra
    elif extra is not None:
        node["additionalProperties"] = convert_to_json_node(extra)
    return node


def select_response(responses: Optional[dict[str, ApiResponse]]) -> Optional[ApiResponse]:
    """Pick ``"200"``, else ``"default"``, else the first declared response."""
    if not responses:
        return None
    if SUCCESS_STATUS in responses:
        return responses[SUCCESS_STATUS]
    if DEFAULT_RESPONSE in responses:
        return responses[DEFAULT_RESPONSE]
    return next(iter(responses.values()))


def _first_schema(content: Optional[dict[str, MediaType]]) -> Optional[Schema]:
    if not content:
        return None
    media = next(iter(content.values()))
    return media.schema_ if media is not None else None


class SchemaResolver:
    """Read-only schema lookups over one :class:`~specloader.document.OpenAPI`.

    Example::

        resolver = SchemaResolver(document)
        node = resolver.resolve_schema_from_path("/pets/{petId}", "GET")
        node["type"]  # "object"
    """

    def __init__(self, document: OpenAPI) -> None:
        self._document = document

    @property
    def document(self) -> OpenAPI:
        return self._document

    def _operation(self, path: str, method: str) -> Optional[Operation]:
        item = self._document.path_item(path)
        if item is None:
            logger.warning("No path item for %s", path)
            return None
        operation = item.operation(method)
        if operation is None:
            logger.warning("No %s operation for %s", method.upper(), path)
        return operation

    def resolve_schema_from_path(self, path: str, method: str) -> Optional[dict[str, Any]]:
        """Return the SchemaNode of the selected response of ``method path``.

        The response is chosen by :func:`select_response`; its first media
        type supplies the schema.
        """
        operation = self._operation(path, method)
        if operation is None:
            return None
        response = select_response(operation.responses)
        if response is None:
            logger.warning("No responses for %s %s", method.upper(), path)
            return None
        schema = _first_schema(response.content)
        if schema is None:
            logger.warning("No response schema for %s %s", method.upper(), path)
            return None
        return convert_to_json_node(schema)

    def resolve_request_schema(self, path: str, method: str) -> Optional[dict[str, Any]]:
        """Return the SchemaNode of the first request-body media type, if any."""
        operation = self._operation(path, method)
        if operation is None or operation.request_body is None:
            return None
        schema = _first_schema(operation.request_body.content)
        if schema is None:
            logger.warning("No request schema for %s %s", method.upper(), path)
            return None
        return convert_to_json_node(schema)

    def resolve_schema(self, name: str) -> Optional[Schema]:
        """Return ``components.schemas[name]``, or ``None``."""
        components = self._document.components
        if components is None or not components.schemas:
            return None
        schema = components.schemas.get(name)
        if schema is None:
            logger.warning("No component schema named %s", name)
        return schema

    def convert_to_json_node(self, schema: Optional[Schema]) -> Optional[dict[str, Any]]:
        return convert_to_json_node(schema)
