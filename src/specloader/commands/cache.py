"""Cache commands -- inspect and clear the persistent document cache.

Provides the ``specloader cache`` sub-command group. The directory comes
from the same precedence chain as the loader (``--cache-dir`` flag,
``SPECLOADER_CACHE_DIR``, global config, XDG default).
"""

from __future__ import annotations

from datetime import datetime

import typer

from specloader.cache import CacheStore
from specloader.commands._common import loader_config
from specloader.output import get_output, info, print_data, success

cache_app = typer.Typer(no_args_is_help=True)


def _store(ctx: typer.Context) -> CacheStore:
    cfg = loader_config(ctx)
    return CacheStore(cfg.cache_dir, namespace=cfg.namespace)


@cache_app.command("list")
def cache_list(ctx: typer.Context) -> None:
    """List cached documents with their size and modification time."""
    store = _store(ctx)
    names = store.keys()
    if not names:
        info(f"No cached documents in {store.directory}")
        return
    rows: list[list[str]] = []
    for name in names:
        stat = (store.directory / name).stat()
        modified = datetime.fromtimestamp(stat.st_mtime).strftime("%Y-%m-%d %H:%M:%S")
        rows.append([name, str(stat.st_size), modified])
    get_output().print_table(
        ["File", "Bytes", "Modified"], rows, title=f"Cached documents ({len(rows)})"
    )


@cache_app.command("clear")
def cache_clear(ctx: typer.Context) -> None:
    """Delete every cached document."""
    store = _store(ctx)
    removed = store.clear()
    success(f"Removed {removed} cached document(s) from {store.directory}")


@cache_app.command("path")
def cache_path(ctx: typer.Context) -> None:
    """Print the cache directory."""
    print_data(str(_store(ctx).directory))
