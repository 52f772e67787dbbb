"""Load command -- fetch, decode and summarise a document.

``specloader load LOCATION`` goes through the same
:class:`~specloader.loader.DocumentLoader` the library uses, so a
successful run also refreshes the persistent cache (unless
``--no-cache`` is given).
"""

from __future__ import annotations

from typing import Optional

import typer

from specloader.commands._common import KIND_HELP, load_document
from specloader.models import SourceKind
from specloader.output import get_output, success


def load_command(
    ctx: typer.Context,
    location: str = typer.Argument(..., help="URL, file path or bundled resource name."),
    kind: Optional[SourceKind] = typer.Option(
        None, "--kind", "-k", case_sensitive=False, help=KIND_HELP
    ),
    no_cache: bool = typer.Option(
        False, "--no-cache", help="Do not read or write the persistent cache."
    ),
) -> None:
    """Load a document and print its title, version and size.

    Example::

        specloader load https://petstore3.swagger.io/api/v3/openapi.json
        specloader load petstore.yaml --kind bundled
    """
    document = load_document(ctx, location, kind, no_cache=no_cache)

    paths = document.paths or {}
    operations = sum(len(item.operations()) for item in paths.values() if item is not None)
    schemas = (document.components.schemas or {}) if document.components else {}
    info = document.info

    get_output().print_record({
        "title": (info.title if info else None) or "-",
        "version": (info.version if info else None) or "-",
        "openapi": document.openapi,
        "paths": len(paths),
        "operations": operations,
        "schemas": len(schemas),
    })
    success(f"Loaded {location}")
