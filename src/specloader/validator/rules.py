"""Structural validation rules for decoded OpenAPI documents.

Each rule is a :class:`Rule` subclass whose :meth:`Rule.validate` reads a
document and returns a fresh :class:`~specloader.validator.result.ValidationResult`.
Rules never raise for shape problems and never stop at the first issue: a
malformed parameter does not prevent the remaining parameters, operations
or paths from being checked.

Issue codes by rule:

========================  ==================================================
Rule                      Codes
========================  ==================================================
:class:`PathRule`         ``PATH_NONE_DEFINED``, ``PATH_INVALID_PREFIX``,
                          ``PATH_NO_OPERATIONS``
:class:`OperationRule`    ``OPERATION_MISSING_ID``,
                          ``OPERATION_MISSING_SUMMARY`` (w),
                          ``OPERATION_MISSING_TAGS`` (w),
                          ``OPERATION_MISSING_RESPONSES``,
                          ``OPERATION_PARAMETER_MISSING_NAME``,
                          ``OPERATION_PARAMETER_MISSING_IN``,
                          ``OPERATION_PARAMETER_MISSING_DESCRIPTION`` (w),
                          ``OPERATION_PARAMETER_INVALID_REFERENCE`` (w),
                          ``OPERATION_MISSING_REQUEST_BODY`` (w)
:class:`ParameterRule`    ``PARAMETER_MISSING_SCHEMA_OR_CONTENT``,
                          ``PARAMETER_SCHEMA_TYPE_MISSING``
:class:`SchemaRule`       ``SCHEMA_MISSING_TYPE``,
                          ``SCHEMA_REQUIRED_PROPERTY_MISSING``,
                          ``SCHEMA_INVALID_REFERENCE``,
                          ``SCHEMA_INVALID_<FORMAT>_FORMAT``
:class:`ResponseRule`     ``RESPONSE_MISSING_DESCRIPTION``,
                          ``RESPONSE_MISSING_CONTENT``
:class:`RequestBodyRule`  ``REQUEST_BODY_MISSING_DESCRIPTION``,
                          ``REQUEST_BODY_MISSING_CONTENT``,
                          ``REQUEST_BODY_MISSING_REQUIRED`` (w)
:class:`ServerRule`       ``SERVER_NONE_DEFINED`` (w), ``SERVER_MISSING_URL``
:class:`ExtensionRule`    ``EXTENSION_INVALID_NAME`` (w)
========================  ==================================================

(w) marks warnings; everything else is an error.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Iterable, Optional

from specloader.document import Node, OpenAPI, Parameter, Schema
from specloader.models import HTTPMethod
from specloader.validator.formats import FORMAT_PREDICATES, is_valid_extension_name
from specloader.validator.result import ValidationResult

logger = logging.getLogger(__name__)

NO_NAME = "<no name>"
SCHEMA_REF_PREFIX = "#/components/schemas/"
PARAMETER_REF_PREFIX = "#/components/parameters/"


def _blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def validate_parameters(
    path: str,
    parameters: Optional[Iterable[Parameter]],
    result: ValidationResult,
) -> None:
    """Append parameter issues for *path* to *result*.

    For every parameter that is not a bare ``$ref``:

    * no typed schema and no non-empty ``content`` ->
      ``PARAMETER_MISSING_SCHEMA_OR_CONTENT``
    * a schema without ``type`` -> ``PARAMETER_SCHEMA_TYPE_MISSING``

    Both checks apply independently, so one parameter can yield both.
    The context is ``"path:<path>,parameter:<name>"``.
    """
    if not parameters:
        return
    for param in parameters:
        if param.ref is not None:
            continue
        name = param.name if param.name is not None else NO_NAME
        context = f"path:{path},parameter:{name}"
        has_schema = param.schema_ is not None and param.schema_.type is not None
        has_content = bool(param.content)
        if not has_schema and not has_content:
            result.add_error(
                "PARAMETER_MISSING_SCHEMA_OR_CONTENT",
                f"Parameter '{name}' must define a typed 'schema' or a 'content' map",
                context,
            )
        if param.schema_ is not None and param.schema_.type is None:
            result.add_error(
                "PARAMETER_SCHEMA_TYPE_MISSING",
                f"Schema of parameter '{name}' does not define a type",
                context,
            )


class Rule(ABC):
    """Base class for document validation rules."""

    name: str = "rule"

    @abstractmethod
    def validate(self, document: OpenAPI) -> ValidationResult:
        """Return the issues this rule finds in *document*."""


class PathRule(Rule):
    """Paths must exist, start with ``/`` and declare at least one operation."""

    name = "paths"

    def validate(self, document: OpenAPI) -> ValidationResult:
        result = ValidationResult()
        if not document.paths:
            result.add_error("PATH_NONE_DEFINED", "No paths are defined", "paths")
            return result
        for path, item in document.paths.items():
            context = f"path:{path}"
            if not path.startswith("/"):
                result.add_error("PATH_INVALID_PREFIX", "Path must start with '/'", context)
            if item is None or not item.operations():
                result.add_error("PATH_NO_OPERATIONS", "Path declares no operations", context)
        return result


class OperationRule(Rule):
    name = "operations"

    def validate(self, document: OpenAPI) -> ValidationResult:
        result = ValidationResult()
        for path, item in (document.paths or {}).items():
            if item is None:
                continue
            for method, op in item.operations():
                context = f"path:{path},method:{method.value}"
                if _blank(op.operation_id):
                    result.add_error("OPERATION_MISSING_ID", "Missing or empty operationId", context)
                if _blank(op.summary):
                    result.add_warning(
                        "OPERATION_MISSING_SUMMARY", "Missing or empty summary", context
                    )
                if not op.tags:
                    result.add_warning(
                        "OPERATION_MISSING_TAGS", "Operation should declare at least one tag", context
                    )
                if not op.responses:
                    result.add_error(
                        "OPERATION_MISSING_RESPONSES",
                        "Operation must declare at least one response",
                        context,
                    )
                for index, param in enumerate(op.parameters or []):
                    param_context = f"{context},parameter:{index}"
                    if param.ref is not None:
                        if not param.ref.startswith(PARAMETER_REF_PREFIX):
                            result.add_warning(
                                "OPERATION_PARAMETER_INVALID_REFERENCE",
                                f"Parameter $ref should point under {PARAMETER_REF_PREFIX}",
                                param_context,
                            )
                        continue
                    if _blank(param.name):
                        result.add_error(
                            "OPERATION_PARAMETER_MISSING_NAME", "Parameter has no name", param_context
                        )
                    if _blank(param.in_):
                        result.add_error(
                            "OPERATION_PARAMETER_MISSING_IN",
                            "Parameter has no 'in' location (path, query, header or cookie)",
                            param_context,
                        )
                    if _blank(param.description):
                        result.add_warning(
                            "OPERATION_PARAMETER_MISSING_DESCRIPTION",
                            "Parameter has no description",
                            param_context,
                        )
                if method in (HTTPMethod.POST, HTTPMethod.PUT) and op.request_body is None:
                    result.add_warning(
                        "OPERATION_MISSING_REQUEST_BODY",
                        "POST and PUT operations should declare a requestBody",
                        context,
                    )
        return result


class ParameterRule(Rule):
    """Runs :func:`validate_parameters` over path-level and operation parameters."""

    name = "parameters"

    def validate(self, document: OpenAPI) -> ValidationResult:
        result = ValidationResult()
        for path, item in (document.paths or {}).items():
            if item is None:
                continue
            validate_parameters(path, item.parameters, result)
            for _, op in item.operations():
                validate_parameters(path, op.parameters, result)
        return result


class SchemaRule(Rule):
    """Checks ``components.schemas``: type, required names, refs and example formats."""

    name = "schemas"

    def validate(self, document: OpenAPI) -> ValidationResult:
        result = ValidationResult()
        components = document.components
        if components is None or not components.schemas:
            return result
        for name, schema in components.schemas.items():
            self._check(name, schema, result)
        return result

    def _check(self, name: str, schema: Schema, result: ValidationResult) -> None:
        context = f"schema:{name}"
        if schema.ref is not None:
            if not schema.ref.startswith(SCHEMA_REF_PREFIX):
                result.add_error(
                    "SCHEMA_INVALID_REFERENCE",
                    f"Reference '{schema.ref}' must start with '{SCHEMA_REF_PREFIX}'",
                    context,
                )
            return
        if not schema.type:
            result.add_error("SCHEMA_MISSING_TYPE", f"Schema '{name}' does not define a type", context)
        declared = schema.properties or {}
        for prop in schema.required or []:
            if prop not in declared:
                result.add_error(
                    "SCHEMA_REQUIRED_PROPERTY_MISSING",
                    f"Required property '{prop}' is not declared in schema '{name}'",
                    context,
                )
        if schema.format is not None and schema.example is not None:
            predicate = FORMAT_PREDICATES.get(schema.format)
            if predicate is not None and not predicate(str(schema.example)):
                code = "SCHEMA_INVALID_{}_FORMAT".format(
                    schema.format.upper().replace("-", "")
                )
                result.add_error(
                    code,
                    f"Example of schema '{name}' is not a valid {schema.format}",
                    context,
                )


class ResponseRule(Rule):
    """Reusable responses under ``components.responses`` need a description and content."""

    name = "responses"

    def validate(self, document: OpenAPI) -> ValidationResult:
        result = ValidationResult()
        components = document.components
        for key, response in ((components.responses if components else None) or {}).items():
            context = f"response:{key}"
            if response.ref is not None:
                continue
            if _blank(response.description):
                result.add_error(
                    "RESPONSE_MISSING_DESCRIPTION", "Response description is missing", context
                )
            if response.content is None:
                result.add_error("RESPONSE_MISSING_CONTENT", "Response content is missing", context)
        return result


class RequestBodyRule(Rule):
    """Reusable request bodies need a description and content, and should state ``required``."""

    name = "request-bodies"

    def validate(self, document: OpenAPI) -> ValidationResult:
        result = ValidationResult()
        components = document.components
        bodies = (components.request_bodies if components else None) or {}
        for key, body in bodies.items():
            context = f"requestBody:{key}"
            if body.ref is not None:
                continue
            if _blank(body.description):
                result.add_error(
                    "REQUEST_BODY_MISSING_DESCRIPTION", "Request body description is missing", context
                )
            if body.content is None:
                result.add_error(
                    "REQUEST_BODY_MISSING_CONTENT", "Request body content is missing", context
                )
            if body.required is None:
                result.add_warning(
                    "REQUEST_BODY_MISSING_REQUIRED", "Request body 'required' flag is not set", context
                )
        return result


class ServerRule(Rule):
    name = "servers"

    def validate(self, document: OpenAPI) -> ValidationResult:
        result = ValidationResult()
        if not document.servers:
            result.add_warning("SERVER_NONE_DEFINED", "No servers are defined", "servers")
            return result
        for index, server in enumerate(document.servers):
            if _blank(server.url):
                result.add_error("SERVER_MISSING_URL", "Server URL is missing", f"server:{index}")
        return result


class ExtensionRule(Rule):
    """Unmodelled keys on the root and ``info`` objects must be ``x-`` extensions."""

    name = "extensions"

    def validate(self, document: OpenAPI) -> ValidationResult:
        result = ValidationResult()
        nodes: list[tuple[str, Optional[Node]]] = [("root", document), ("info", document.info)]
        for where, node in nodes:
            if node is None:
                continue
            for key in node.extra_fields:
                if not is_valid_extension_name(key):
                    logger.debug("Rejected extension key %r on %s", key, where)
                    result.add_warning(
                        "EXTENSION_INVALID_NAME",
                        f"Unknown field '{key}' is not a valid extension (must start with 'x-')",
                        f"{where}:{key}",
                    )
        return result


DEFAULT_RULES: tuple[type[Rule], ...] = (
    PathRule,
    SchemaRule,
    RequestBodyRule,
    ResponseRule,
    OperationRule,
    ServerRule,
    ParameterRule,
    ExtensionRule,
)
"""Rule classes run by :class:`~specloader.validator.SpecValidator`, in order."""
