"""Pure predicates for the string formats OpenAPI schemas declare.

Every predicate takes any value and returns a ``bool``; none of them raise.
Non-string input is simply invalid. :data:`FORMAT_PREDICATES` maps
``format`` names to predicates so callers can check a value against a
schema's declared format.
"""

from __future__ import annotations

import datetime as dt
import ipaddress
import re
import uuid
from typing import Any, Callable
from urllib.parse import urlsplit

from specloader.document.model import EXTENSION_PREFIX

_EMAIL_RE = re.compile(
    r"[A-Za-z0-9!#$%&'*+/=?^_`{|}~-]+(?:\.[A-Za-z0-9!#$%&'*+/=?^_`{|}~-]+)*"
    r"@(?:[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?\.)+[A-Za-z]{2,63}"
)
_URI_SCHEME_RE = re.compile(r"[A-Za-z][A-Za-z0-9+.-]*")
_UUID_RE = re.compile(
    r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}"
)
_DATE_RE = re.compile(r"([0-9]{4})-([0-9]{2})-([0-9]{2})")
_DATE_TIME_RE = re.compile(
    r"([0-9]{4})-([0-9]{2})-([0-9]{2})[Tt ]([0-9]{2}):([0-9]{2}):([0-9]{2})(\.[0-9]+)?"
    r"([Zz]|[+-]([0-9]{2}):([0-9]{2}))"
)
_IPV4_RE = re.compile(r"([0-9]{1,3})\.([0-9]{1,3})\.([0-9]{1,3})\.([0-9]{1,3})")
_HEX_GROUP_RE = re.compile(r"[0-9a-fA-F]{1,4}")
_HOST_LABEL_RE = re.compile(r"[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?")
_WHITESPACE_RE = re.compile(r"\s")


def is_valid_email(value: Any) -> bool:
    return isinstance(value, str) and len(value) <= 254 and bool(_EMAIL_RE.fullmatch(value))


def is_valid_uri(value: Any) -> bool:
    """Absolute URI: a scheme followed by ``:`` and no whitespace."""
    if not isinstance(value, str) or not value or _WHITESPACE_RE.search(value):
        return False
    try:
        parts = urlsplit(value)
    except ValueError:
        return False
    if not parts.scheme or not _URI_SCHEME_RE.fullmatch(parts.scheme):
        return False
    return bool(parts.netloc or parts.path)


def is_valid_uuid(value: Any) -> bool:
    if not isinstance(value, str) or not _UUID_RE.fullmatch(value):
        return False
    try:
        uuid.UUID(value)
    except ValueError:
        return False
    return True


def _is_calendar_date(year: str, month: str, day: str) -> bool:
    try:
        dt.date(int(year), int(month), int(day))
    except ValueError:
        return False
    return True


def is_valid_date(value: Any) -> bool:
    """``YYYY-MM-DD`` naming a real calendar day (``2023-02-29`` is invalid)."""
    if not isinstance(value, str):
        return False
    match = _DATE_RE.fullmatch(value)
    return bool(match) and _is_calendar_date(*match.groups())


def is_valid_date_time(value: Any) -> bool:
    """RFC 3339 ``date-time``: full date, time, optional fraction and a mandatory offset."""
    if not isinstance(value, str):
        return False
    match = _DATE_TIME_RE.fullmatch(value)
    if not match:
        return False
    year, month, day, hour, minute, second = match.groups()[:6]
    if not _is_calendar_date(year, month, day):
        return False
    # Second 60 is a leap second.
    if int(hour) > 23 or int(minute) > 59 or int(second) > 60:
        return False
    off_hour, off_minute = match.group(9), match.group(10)
    if off_hour is not None and (int(off_hour) > 23 or int(off_minute) > 59):
        return False
    return True


def is_valid_ipv4(value: Any) -> bool:
    """Dotted quad with every octet in 0-255."""
    if not isinstance(value, str):
        return False
    match = _IPV4_RE.fullmatch(value)
    return bool(match) and all(int(octet) <= 255 for octet in match.groups())


def is_valid_ipv6(value: Any) -> bool:
    """Colon-separated hex groups; ``::`` may compress one run of zeros."""
    if not isinstance(value, str) or "%" in value or not value:
        return False
    if not all(_HEX_GROUP_RE.fullmatch(g) or g == "" or "." in g for g in value.split(":")):
        return False
    try:
        ipaddress.IPv6Address(value)
    except ValueError:
        return False
    return True


def is_valid_hostname(value: Any) -> bool:
    """RFC 1123 host name: dot-separated labels of letters, digits and inner hyphens."""
    if not isinstance(value, str) or not value:
        return False
    host = value[:-1] if value.endswith(".") else value
    if not host or len(host) > 253:
        return False
    return all(_HOST_LABEL_RE.fullmatch(label) for label in host.split("."))


def is_valid_extension_name(value: Any) -> bool:
    """Vendor extension keys must start with ``x-``."""
    return isinstance(value, str) and value.startswith(EXTENSION_PREFIX)


FORMAT_PREDICATES: dict[str, Callable[[Any], bool]] = {
    "email": is_valid_email,
    "uri": is_valid_uri,
    "url": is_valid_uri,
    "uuid": is_valid_uuid,
    "date": is_valid_date,
    "date-time": is_valid_date_time,
    "ipv4": is_valid_ipv4,
    "ipv6": is_valid_ipv6,
    "hostname": is_valid_hostname,
}
"""Format name -> predicate, for formats that have one."""
