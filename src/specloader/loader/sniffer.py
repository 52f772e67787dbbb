"""Detect whether raw bytes hold JSON or YAML and decode them into a document.

The rule is deliberately simple: after skipping leading whitespace, a
payload whose first character is ``{`` is JSON; everything else (including
an empty payload) is YAML. File extensions and content types are not
consulted.
"""

from __future__ import annotations

import json
import logging
from typing import Literal

import yaml
from pydantic import ValidationError

from specloader import codec
from specloader.document import OpenAPI
from specloader.exceptions import DecodeError

logger = logging.getLogger(__name__)

Format = Literal["json", "yaml"]


def _as_text(data: bytes | str) -> str:
    if isinstance(data, str):
        return data
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise DecodeError(f"Document is not valid UTF-8: {exc}") from exc


def sniff_format(data: bytes | str) -> Format:
    """Return ``"json"`` if the first non-whitespace character is ``{``, else ``"yaml"``."""
    text = _as_text(data).lstrip()
    return "json" if text.startswith("{") else "yaml"


def parse(data: bytes | str) -> OpenAPI:
    """Decode *data* with the codec chosen by :func:`sniff_format`.

    Raises:
        DecodeError: If the payload is not well-formed for the detected
            format, is not a mapping, or does not fit the document model.
    """
    text = _as_text(data)
    fmt = sniff_format(text)
    logger.debug("Sniffed %s payload (%d chars)", fmt, len(text))
    try:
        if fmt == "json":
            return codec.decode_json(text)
        return codec.decode_yaml(text)
    except json.JSONDecodeError as exc:
        raise DecodeError(f"Invalid JSON: {exc}") from exc
    except yaml.YAMLError as exc:
        raise DecodeError(f"Invalid YAML: {exc}") from exc
    except ValidationError as exc:
        raise DecodeError(
            f"Document does not match the OpenAPI model ({exc.error_count()} error(s)):\n{exc}"
        ) from exc
    except TypeError as exc:
        raise DecodeError(str(exc)) from exc
