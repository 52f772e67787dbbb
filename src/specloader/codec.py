"""JSON and YAML conversion between text and the OpenAPI document model.

Decoding is a two-step affair: the text is parsed into plain Python data
(``json.loads`` or ``yaml.safe_load``), then validated into an
:class:`~specloader.document.OpenAPI` with Pydantic. Encoding dumps the
model in JSON mode with wire aliases and without unset (``None``) fields,
so casted natives such as :class:`datetime.date` come out as text.

The functions here raise the underlying library errors unchanged
(:class:`json.JSONDecodeError`, :class:`yaml.YAMLError`,
:class:`pydantic.ValidationError`, or :class:`TypeError` for a payload that
is not a mapping). Wrapping them into
:class:`~specloader.exceptions.DecodeError` is the caller's job; see
:mod:`specloader.loader.sniffer` and :mod:`specloader.cache.store`.
"""

from __future__ import annotations

import json
from typing import Any

import yaml

from specloader.document import OpenAPI


def _to_document(data: Any, fmt: str) -> OpenAPI:
    if not isinstance(data, dict):
        got = type(data).__name__ if data is not None else "empty document"
        raise TypeError(f"{fmt} document must be an object (got {got})")
    return OpenAPI.model_validate(data)


def decode_json(text: str | bytes) -> OpenAPI:
    """Parse JSON text into an :class:`~specloader.document.OpenAPI`."""
    return _to_document(json.loads(text), "JSON")


def decode_yaml(text: str | bytes) -> OpenAPI:
    """Parse YAML text into an :class:`~specloader.document.OpenAPI`."""
    return _to_document(yaml.safe_load(text), "YAML")


def to_data(document: OpenAPI) -> dict[str, Any]:
    """Return *document* as JSON-compatible plain data using wire names."""
    return document.model_dump(mode="json", by_alias=True, exclude_none=True)


def encode_json(document: OpenAPI, indent: int | None = 2) -> bytes:
    """Serialise *document* as UTF-8 JSON (pretty-printed by default)."""
    text = json.dumps(to_data(document), indent=indent, ensure_ascii=False)
    return (text + "\n").encode("utf-8")


def encode_yaml(document: OpenAPI) -> bytes:
    """Serialise *document* as UTF-8 YAML, keeping field order."""
    text = yaml.safe_dump(to_data(document), sort_keys=False, allow_unicode=True)
    return text.encode("utf-8")
