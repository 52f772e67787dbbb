"""Resolve command -- print the schema tree behind an operation."""

from __future__ import annotations

from typing import Optional

import typer

from specloader.commands._common import KIND_HELP, fail, load_document
from specloader.exceptions import InvalidUsageError
from specloader.exit_codes import EXIT_NOT_FOUND
from specloader.models import HTTPMethod, SourceKind
from specloader.output import error, print_json, suggest
from specloader.resolver import SchemaResolver


def resolve_command(
    ctx: typer.Context,
    location: str = typer.Argument(..., help="URL, file path or bundled resource name."),
    path: str = typer.Argument(..., help="Path template, e.g. /pets/{petId}."),
    method: str = typer.Argument(..., help="HTTP method, e.g. get."),
    kind: Optional[SourceKind] = typer.Option(
        None, "--kind", "-k", case_sensitive=False, help=KIND_HELP
    ),
    request: bool = typer.Option(
        False, "--request", help="Resolve the request body schema instead of the response."
    ),
) -> None:
    """Print the response (or request) schema of an operation as JSON.

    The response is the ``200`` entry, else ``default``, else the first
    declared one. Exits with code 2 for an unknown method and 4 when
    nothing resolves.

    Example::

        specloader resolve petstore.yaml /pets/{petId} get --kind bundled
    """
    if HTTPMethod.parse(method) is None:
        allowed = ", ".join(m.value for m in HTTPMethod)
        fail(InvalidUsageError(f"Unknown HTTP method '{method}'; expected one of: {allowed}"))

    document = load_document(ctx, location, kind)
    resolver = SchemaResolver(document)
    if request:
        node = resolver.resolve_request_schema(path, method)
    else:
        node = resolver.resolve_schema_from_path(path, method)

    if node is None:
        what = "request" if request else "response"
        error(f"No {what} schema for {method.upper()} {path}")
        suggest(f"List the document's paths with: specloader validate {location}")
        raise typer.Exit(code=EXIT_NOT_FOUND)

    print_json(node)
