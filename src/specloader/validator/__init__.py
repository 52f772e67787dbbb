"""Structural validation of OpenAPI documents.

* :func:`validate_parameters` -- parameter schema/content checks for one path.
* :mod:`~specloader.validator.formats` -- pure string-format predicates.
* :mod:`~specloader.validator.rules` -- per-area rule classes.
* :class:`SpecValidator` -- runs all rules and merges their results.
"""

from specloader.validator import formats
from specloader.validator.formats import (
    FORMAT_PREDICATES,
    is_valid_date,
    is_valid_date_time,
    is_valid_email,
    is_valid_extension_name,
    is_valid_hostname,
    is_valid_ipv4,
    is_valid_ipv6,
    is_valid_uri,
    is_valid_uuid,
)
from specloader.validator.result import ValidationIssue, ValidationResult
from specloader.validator.rules import (
    DEFAULT_RULES,
    ExtensionRule,
    OperationRule,
    ParameterRule,
    PathRule,
    RequestBodyRule,
    ResponseRule,
    Rule,
    SchemaRule,
    ServerRule,
    validate_parameters,
)
from specloader.validator.spec_validator import SpecValidator

__all__ = [
    "DEFAULT_RULES",
    "ExtensionRule",
    "FORMAT_PREDICATES",
    "OperationRule",
    "ParameterRule",
    "PathRule",
    "RequestBodyRule",
    "ResponseRule",
    "Rule",
    "SchemaRule",
    "ServerRule",
    "SpecValidator",
    "ValidationIssue",
    "ValidationResult",
    "formats",
    "is_valid_date",
    "is_valid_date_time",
    "is_valid_email",
    "is_valid_extension_name",
    "is_valid_hostname",
    "is_valid_ipv4",
    "is_valid_ipv6",
    "is_valid_uri",
    "is_valid_uuid",
    "validate_parameters",
]
