"""Schema variants: ``type``/``format`` presets with an attached cast function.

A :class:`SchemaVariant` is a value, not a subclass. Binding one to a
:class:`~specloader.document.Schema` (via
:meth:`~specloader.document.Schema.from_variant`) fixes the schema's
``type``/``format`` pair and gives it a cast that converts raw example or
default values into a native Python representation, e.g. the ``DATE``
preset turns ``"2025-01-31"`` into :class:`datetime.date`.

Cast functions may raise or return ``None`` on bad input;
:meth:`~specloader.document.Schema.cast` is the total wrapper that callers
use.

Binary strings are decoded as UTF-8 by default. Setting the environment
variable ``SPECLOADER_BINARY_STRING_CONVERSION=BASE64`` switches the
``BINARY`` preset to base64 decoding.
"""

from __future__ import annotations

import base64
import datetime as dt
import decimal
import os
import re
import uuid
from dataclasses import dataclass
from typing import Any, Callable, Optional

BINARY_STRING_CONVERSION_ENV = "SPECLOADER_BINARY_STRING_CONVERSION"

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_INTEGER_RE = re.compile(r"^[+-]?\d+$")


@dataclass(frozen=True)
class SchemaVariant:
    """A named ``type``/``format`` preset with a cast capability."""

    name: str
    type: Optional[str]
    format: Optional[str] = None
    cast: Callable[[Any], Any] = lambda value: value


def _identity(value: Any) -> Any:
    return value


def _to_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


def _to_date(value: Any) -> Optional[dt.date]:
    if value is None:
        return None
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    if isinstance(value, str) and _DATE_RE.match(value):
        return dt.date.fromisoformat(value)
    return None


def _to_datetime(value: Any) -> Optional[dt.datetime]:
    if value is None:
        return None
    if isinstance(value, dt.datetime):
        return value if value.tzinfo else value.replace(tzinfo=dt.timezone.utc)
    if isinstance(value, dt.date):
        return dt.datetime(value.year, value.month, value.day, tzinfo=dt.timezone.utc)
    if isinstance(value, str):
        text = value[:-1] + "+00:00" if value.endswith(("Z", "z")) else value
        parsed = dt.datetime.fromisoformat(text)
        # An offset is mandatory for date-time values.
        return parsed if parsed.tzinfo else None
    return None


def _to_uuid(value: Any) -> Optional[uuid.UUID]:
    if value is None:
        return None
    if isinstance(value, uuid.UUID):
        return value
    return uuid.UUID(str(value))


def _to_int(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    text = str(value).strip()
    if not _INTEGER_RE.match(text):
        return None
    return int(text)


def _to_decimal(value: Any) -> Optional[decimal.Decimal]:
    if value is None or isinstance(value, bool):
        return None
    result = decimal.Decimal(str(value))
    return result if result.is_finite() else None


def _to_bool(value: Any) -> Optional[bool]:
    if value is None:
        return None
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() == "true"


def _to_bytes(value: Any) -> Optional[bytes]:
    if value is None:
        return None
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    text = str(value)
    mode = os.environ.get(BINARY_STRING_CONVERSION_ENV, "")
    if mode.upper() == "BASE64":
        return base64.b64decode(text, validate=True)
    return text.encode("utf-8")


STRING = SchemaVariant("string", "string", None, _to_str)
OBJECT = SchemaVariant("object", "object", None, _identity)
MAP = SchemaVariant("map", "object", None, _identity)
ARRAY = SchemaVariant("array", "array", None, _identity)
FILE = SchemaVariant("file", "string", "binary", _to_str)
BINARY = SchemaVariant("binary", "string", "binary", _to_bytes)
DATE = SchemaVariant("date", "string", "date", _to_date)
DATE_TIME = SchemaVariant("date-time", "string", "date-time", _to_datetime)
UUID = SchemaVariant("uuid", "string", "uuid", _to_uuid)
EMAIL = SchemaVariant("email", "string", "email", _to_str)
INTEGER = SchemaVariant("integer", "integer", "int32", _to_int)
NUMBER = SchemaVariant("number", "number", None, _to_decimal)
BOOLEAN = SchemaVariant("boolean", "boolean", None, _to_bool)

PRESETS: dict[str, SchemaVariant] = {
    v.name: v
    for v in (
        STRING, OBJECT, MAP, ARRAY, FILE, BINARY, DATE,
        DATE_TIME, UUID, EMAIL, INTEGER, NUMBER, BOOLEAN,
    )
}
"""All presets keyed by :attr:`SchemaVariant.name`."""
