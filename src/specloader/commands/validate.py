"""Validate command -- run every structural rule and report the issues."""

from __future__ import annotations

from typing import Optional

import typer

from specloader.commands._common import KIND_HELP, fail, load_document
from specloader.exceptions import ValidationFailed
from specloader.models import SourceKind
from specloader.output import get_output, success
from specloader.validator import SpecValidator


def validate_command(
    ctx: typer.Context,
    location: str = typer.Argument(..., help="URL, file path or bundled resource name."),
    kind: Optional[SourceKind] = typer.Option(
        None, "--kind", "-k", case_sensitive=False, help=KIND_HELP
    ),
    strict: bool = typer.Option(
        False, "--strict", help="Fail on warnings as well as errors."
    ),
) -> None:
    """Validate a document and print a table of errors and warnings.

    Exits with code 8 when errors were found (or warnings, with ``--strict``).

    Example::

        specloader validate ./openapi.yaml
        specloader --json validate ./openapi.yaml
    """
    document = load_document(ctx, location, kind)
    result = SpecValidator().validate(document)

    rows = [["error", i.code, i.message, i.context] for i in result.errors]
    rows += [["warning", i.code, i.message, i.context] for i in result.warnings]
    if rows:
        get_output().print_table(
            ["Severity", "Code", "Message", "Context"],
            rows,
            title=f"{location} -- {result.error_count} error(s), {result.warning_count} warning(s)",
        )

    if not result.is_valid:
        fail(ValidationFailed(f"{result.error_count} error(s), {result.warning_count} warning(s)"))
    if strict and result.warning_count:
        fail(ValidationFailed(f"{result.warning_count} warning(s) (--strict)"))
    success(f"Valid ({result.warning_count} warning(s))")
