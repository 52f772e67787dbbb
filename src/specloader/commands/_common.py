"""Helpers shared by the CLI sub-commands."""

from __future__ import annotations

from typing import NoReturn, Optional

import typer

from specloader.config import resolve_config
from specloader.document import OpenAPI
from specloader.exceptions import SpecloaderError
from specloader.loader import DocumentLoader
from specloader.models import LoaderConfig, PersistentMode, SourceKind
from specloader.output import debug, error

KIND_HELP = "Source kind: url, file or bundled (default: url for http(s)://, else file)."


def guess_kind(location: str) -> SourceKind:
    """URL for ``http://``/``https://`` locations, FILE otherwise."""
    if location.startswith(("http://", "https://")):
        return SourceKind.URL
    return SourceKind.FILE


def fail(exc: SpecloaderError) -> NoReturn:
    """Print *exc* on stderr and exit with its code."""
    error(str(exc))
    raise typer.Exit(code=exc.exit_code)


def loader_config(ctx: typer.Context) -> LoaderConfig:
    """Resolve the effective loader settings from the root callback's flags."""
    obj = ctx.obj or {}
    try:
        _, cfg = resolve_config(
            cli_cache_dir=obj.get("cache_dir"),
            cli_persistent_mode=obj.get("persistent"),
            cli_namespace=obj.get("namespace"),
        )
    except SpecloaderError as exc:
        fail(exc)
    return cfg


def load_document(
    ctx: typer.Context,
    location: str,
    kind: Optional[SourceKind],
    no_cache: bool = False,
) -> OpenAPI:
    """Load *location* through a :class:`DocumentLoader` built from config."""
    cfg = loader_config(ctx)
    if no_cache:
        cfg.persistent_mode = PersistentMode.DISABLED
    resolved = kind or guess_kind(location)
    debug(f"Loading {resolved.value}:{location} (persistent={cfg.persistent_mode.value})")
    loader = DocumentLoader.from_config(cfg)
    try:
        return loader.load(location, resolved)
    except SpecloaderError as exc:
        fail(exc)
