"""In-memory OpenAPI document graph.

:mod:`~specloader.document.model` holds the Pydantic node classes;
:mod:`~specloader.document.variants` holds the schema presets whose cast
functions convert example values into native Python types.

Typical usage::

    from specloader.document import MediaType, Schema, variants

    media = MediaType(schema=Schema.from_variant(variants.DATE))
    media.set_example("2025-01-31")
    media.example            # datetime.date(2025, 1, 31)
    media.example_set_flag   # True
"""

from specloader.document import variants
from specloader.document.model import (
    ApiResponse,
    Components,
    Contact,
    Header,
    Info,
    License,
    MediaType,
    Node,
    OpenAPI,
    Operation,
    Parameter,
    PathItem,
    RequestBody,
    Schema,
    Server,
    Tag,
)
from specloader.document.variants import SchemaVariant

__all__ = [
    "ApiResponse",
    "Components",
    "Contact",
    "Header",
    "Info",
    "License",
    "MediaType",
    "Node",
    "OpenAPI",
    "Operation",
    "Parameter",
    "PathItem",
    "RequestBody",
    "Schema",
    "SchemaVariant",
    "Server",
    "Tag",
    "variants",
]
