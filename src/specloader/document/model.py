"""Pydantic models for the OpenAPI 3.x document graph.

These classes are deliberately thin: they carry the fields the loader,
resolver and validator navigate, and keep everything else. Every node
accepts unknown keys (``extra="allow"``), so vendor extensions and fields
this module does not model survive a decode/encode round trip. Wire names
in camel case are mapped with aliases (``operationId`` ->
``operation_id``); ``schema``, ``in`` and ``$ref`` become ``schema_``,
``in_`` and ``ref``.

Navigation helpers:

* :meth:`OpenAPI.path_item` -- look up a :class:`PathItem` by path.
* :meth:`PathItem.operation` -- look up an :class:`Operation` by method token.
* :meth:`PathItem.operations` -- iterate ``(HTTPMethod, Operation)`` pairs.

Example values attached to a :class:`MediaType` follow the schema cast
contract described in :meth:`MediaType.set_example`.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator, model_validator

from specloader.document.variants import SchemaVariant
from specloader.models import HTTPMethod

logger = logging.getLogger(__name__)

EXTENSION_PREFIX = "x-"


class Node(BaseModel):
    """Common base for every document node."""

    # Unquoted YAML scalars such as ``version: 1.0`` arrive as numbers.
    model_config = ConfigDict(
        extra="allow", populate_by_name=True, coerce_numbers_to_str=True
    )

    @property
    def extra_fields(self) -> dict[str, Any]:
        """Keys present on the wire but not modelled by this class."""
        return dict(self.model_extra or {})

    @property
    def extensions(self) -> dict[str, Any]:
        """Vendor extensions (``x-`` keys) of this node."""
        return {
            key: value
            for key, value in (self.model_extra or {}).items()
            if key.startswith(EXTENSION_PREFIX)
        }


# --- Schema ---


class Schema(Node):
    """An OpenAPI *Schema Object*.

    A schema decoded from a document casts values as identity. A schema
    built with :meth:`from_variant` carries a
    :class:`~specloader.document.variants.SchemaVariant` and converts
    values through it.
    """

    ref: Optional[str] = Field(default=None, alias="$ref")
    type: Optional[Union[str, list[str]]] = None
    format: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    default: Any = None
    enum: Optional[list[Any]] = None
    example: Any = None
    nullable: Optional[bool] = None
    read_only: Optional[bool] = Field(default=None, alias="readOnly")
    write_only: Optional[bool] = Field(default=None, alias="writeOnly")
    required: Optional[list[str]] = None
    properties: Optional[dict[str, Schema]] = None
    items: Optional[Schema] = None
    additional_properties: Optional[Union[bool, Schema]] = Field(
        default=None, alias="additionalProperties"
    )
    all_of: Optional[list[Schema]] = Field(default=None, alias="allOf")
    one_of: Optional[list[Schema]] = Field(default=None, alias="oneOf")
    any_of: Optional[list[Schema]] = Field(default=None, alias="anyOf")

    _variant: Optional[SchemaVariant] = PrivateAttr(default=None)

    @classmethod
    def from_variant(cls, variant: SchemaVariant, **fields: Any) -> "Schema":
        """Build a schema bound to *variant*.

        ``type`` and ``format`` come from the variant. A ``default`` or
        ``example`` passed in *fields* goes through the variant's cast.

        Example::

            from specloader.document import variants

            schema = Schema.from_variant(variants.DATE, description="Birthday")
            schema.cast("2024-02-29")  # datetime.date(2024, 2, 29)
        """
        default = fields.pop("default", None)
        example = fields.pop("example", None)
        schema = cls(type=variant.type, format=variant.format, **fields)
        schema._variant = variant
        if default is not None:
            schema.default = schema.cast(default)
        if example is not None:
            schema.set_example(example)
        return schema

    @property
    def variant(self) -> Optional[SchemaVariant]:
        """The bound variant, or ``None`` for schemas decoded from a document."""
        return self._variant

    def cast(self, value: Any) -> Any:
        """Convert *value* through the bound variant.

        Never raises: a cast that fails returns ``None``. Without a bound
        variant the value is returned unchanged.
        """
        if self._variant is None:
            return value
        try:
            return self._variant.cast(value)
        except (ValueError, TypeError, ArithmeticError) as exc:
            logger.debug("Cast to %s failed for %r: %s", self._variant.name, value, exc)
            return None

    def set_example(self, value: Any) -> None:
        """Store *value* as the schema's example after casting it."""
        self.example = self.cast(value)


# --- Content ---


class MediaType(Node):
    """An OpenAPI *Media Type Object* (one entry of a ``content`` map).

    :attr:`example_set_flag` records whether :attr:`example` holds a value
    that was explicitly and successfully set; see :meth:`set_example`.
    """

    schema_: Optional[Schema] = Field(default=None, alias="schema")
    example: Any = None
    examples: Optional[dict[str, Any]] = None
    encoding: Optional[dict[str, Any]] = None

    _example_set: bool = PrivateAttr(default=False)

    @model_validator(mode="after")
    def cast_decoded_example(self) -> "MediaType":
        if "example" in self.model_fields_set:
            self.set_example(self.example)
        return self

    @property
    def example_set_flag(self) -> bool:
        return self._example_set

    def set_example(self, value: Any) -> None:
        """Attach an example value, casting it through the schema.

        * No schema: the value is stored as-is and the flag is set.
        * With a schema: the cast result is stored and the flag is set,
          unless the cast produced nothing for a non-null value. In that
          case the original value is kept and the flag stays unset, so a
          malformed example never looks well-typed.
        """
        if self.schema_ is None:
            self.example = value
            self._example_set = True
            return
        casted = self.schema_.cast(value)
        if value is not None and casted is None:
            self.example = value
            self._example_set = False
            return
        self.example = casted
        self._example_set = True


class Header(Node):
    """An OpenAPI *Header Object*."""

    ref: Optional[str] = Field(default=None, alias="$ref")
    description: Optional[str] = None
    required: Optional[bool] = None
    deprecated: Optional[bool] = None
    schema_: Optional[Schema] = Field(default=None, alias="schema")
    example: Any = None
    content: Optional[dict[str, MediaType]] = None


# --- Operations ---


class Parameter(Node):
    """An OpenAPI *Parameter Object*, or a bare ``$ref`` to one."""

    ref: Optional[str] = Field(default=None, alias="$ref")
    name: Optional[str] = None
    in_: Optional[str] = Field(default=None, alias="in")
    description: Optional[str] = None
    required: Optional[bool] = None
    deprecated: Optional[bool] = None
    allow_empty_value: Optional[bool] = Field(default=None, alias="allowEmptyValue")
    style: Optional[str] = None
    explode: Optional[bool] = None
    schema_: Optional[Schema] = Field(default=None, alias="schema")
    example: Any = None
    examples: Optional[dict[str, Any]] = None
    content: Optional[dict[str, MediaType]] = None


class RequestBody(Node):
    """An OpenAPI *Request Body Object*."""

    ref: Optional[str] = Field(default=None, alias="$ref")
    description: Optional[str] = None
    content: Optional[dict[str, MediaType]] = None
    required: Optional[bool] = None


class ApiResponse(Node):
    """An OpenAPI *Response Object*."""

    ref: Optional[str] = Field(default=None, alias="$ref")
    description: Optional[str] = None
    headers: Optional[dict[str, Header]] = None
    content: Optional[dict[str, MediaType]] = None
    links: Optional[dict[str, Any]] = None


def _stringify_keys(value: Any) -> Any:
    # YAML reads an unquoted ``200:`` as an int.
    if isinstance(value, dict):
        return {str(key): item for key, item in value.items()}
    return value


class Operation(Node):
    """An OpenAPI *Operation Object*.

    ``responses`` keeps declaration order; status-code keys are always
    strings.
    """

    tags: Optional[list[str]] = None
    summary: Optional[str] = None
    description: Optional[str] = None
    operation_id: Optional[str] = Field(default=None, alias="operationId")
    parameters: Optional[list[Parameter]] = None
    request_body: Optional[RequestBody] = Field(default=None, alias="requestBody")
    responses: Optional[dict[str, ApiResponse]] = None
    deprecated: Optional[bool] = None
    security: Optional[list[dict[str, list[str]]]] = None
    servers: Optional[list[Server]] = None
    callbacks: Optional[dict[str, Any]] = None

    @field_validator("responses", mode="before")
    @classmethod
    def normalise_response_keys(cls, value: Any) -> Any:
        return _stringify_keys(value)


class PathItem(Node):
    """An OpenAPI *Path Item Object*."""

    ref: Optional[str] = Field(default=None, alias="$ref")
    summary: Optional[str] = None
    description: Optional[str] = None
    get: Optional[Operation] = None
    put: Optional[Operation] = None
    post: Optional[Operation] = None
    delete: Optional[Operation] = None
    options: Optional[Operation] = None
    head: Optional[Operation] = None
    patch: Optional[Operation] = None
    trace: Optional[Operation] = None
    servers: Optional[list[Server]] = None
    parameters: Optional[list[Parameter]] = None

    def operation(self, method: Union[str, HTTPMethod]) -> Optional[Operation]:
        """Return the operation for *method* (case-insensitive), or ``None``.

        Unrecognised method tokens also yield ``None``.
        """
        resolved = method if isinstance(method, HTTPMethod) else HTTPMethod.parse(method)
        if resolved is None:
            return None
        return getattr(self, resolved.value)

    def operations(self) -> list[tuple[HTTPMethod, Operation]]:
        """Return the declared operations in canonical method order."""
        return [
            (method, op)
            for method in HTTPMethod
            if (op := getattr(self, method.value)) is not None
        ]


# --- Top level ---


class Contact(Node):
    name: Optional[str] = None
    url: Optional[str] = None
    email: Optional[str] = None


class License(Node):
    name: Optional[str] = None
    url: Optional[str] = None
    identifier: Optional[str] = None


class Info(Node):
    """An OpenAPI *Info Object*."""

    title: Optional[str] = None
    version: Optional[str] = None
    summary: Optional[str] = None
    description: Optional[str] = None
    terms_of_service: Optional[str] = Field(default=None, alias="termsOfService")
    contact: Optional[Contact] = None
    license: Optional[License] = None


class Server(Node):
    url: Optional[str] = None
    description: Optional[str] = None
    variables: Optional[dict[str, Any]] = None


class Tag(Node):
    name: Optional[str] = None
    description: Optional[str] = None


class Components(Node):
    """An OpenAPI *Components Object*."""

    schemas: Optional[dict[str, Schema]] = None
    responses: Optional[dict[str, ApiResponse]] = None
    parameters: Optional[dict[str, Parameter]] = None
    examples: Optional[dict[str, Any]] = None
    request_bodies: Optional[dict[str, RequestBody]] = Field(default=None, alias="requestBodies")
    headers: Optional[dict[str, Header]] = None
    security_schemes: Optional[dict[str, Any]] = Field(default=None, alias="securitySchemes")
    links: Optional[dict[str, Any]] = None
    callbacks: Optional[dict[str, Any]] = None


class OpenAPI(Node):
    """Root of an OpenAPI 3.x document."""

    openapi: str = "3.0.1"
    info: Optional[Info] = None
    json_schema_dialect: Optional[str] = Field(default=None, alias="jsonSchemaDialect")
    servers: Optional[list[Server]] = None
    paths: Optional[dict[str, PathItem]] = None
    webhooks: Optional[dict[str, PathItem]] = None
    components: Optional[Components] = None
    security: Optional[list[dict[str, list[str]]]] = None
    tags: Optional[list[Tag]] = None
    external_docs: Optional[dict[str, Any]] = Field(default=None, alias="externalDocs")

    def path_item(self, path: str) -> Optional[PathItem]:
        """Return the :class:`PathItem` declared for *path*, or ``None``."""
        if not self.paths:
            return None
        return self.paths.get(path)


for _model in (Schema, Operation, PathItem, OpenAPI):
    _model.model_rebuild()
