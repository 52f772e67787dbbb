"""Typer application and CLI entry point for specloader.

This module builds the top-level Typer application and registers the
built-in sub-commands (``load``, ``resolve``, ``validate``, ``cache``).

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. It installs a SIGINT handler and invokes the Typer app.
:class:`~specloader.exceptions.SpecloaderError` escaping a command exits
with the error's code; anything else is written to a crash log under the
data directory.

See Also:
    :mod:`specloader.config`: Loader configuration resolution.
    :mod:`specloader.output`: Output formatting initialised in :func:`main_callback`.
"""

from __future__ import annotations

import signal
import sys
import traceback
from datetime import datetime
from typing import Any, Optional

import typer

from specloader import __version__
from specloader.commands.cache import cache_app
from specloader.commands.load import load_command
from specloader.commands.resolve import resolve_command
from specloader.commands.validate import validate_command
from specloader.exit_codes import EXIT_GENERIC_FAILURE


app = typer.Typer(
    name="specloader",
    help="Load, cache, resolve and validate OpenAPI 3.x documents.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

app.command("load")(load_command)
app.command("resolve")(resolve_command)
app.command("validate")(validate_command)
app.add_typer(cache_app, name="cache", help="Persistent document cache management.")


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"specloader {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    json_output: bool = typer.Option(False, "--json", help="JSON output format."),
    plain_output: bool = typer.Option(False, "--plain", help="Plain text output."),
    no_color: bool = typer.Option(False, "--no-color", help="Disable color output."),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output and library logs."
    ),
    cache_dir: Optional[str] = typer.Option(
        None, "--cache-dir", help="Directory of the persistent document cache."
    ),
    persistent: Optional[str] = typer.Option(
        None, "--persistent", help="Persistent cache mode: disabled, fallback or prefer."
    ),
    namespace: Optional[str] = typer.Option(
        None, "--namespace", help="Prefix separating persistent cache entries."
    ),
) -> None:
    """Root callback executed before every sub-command.

    Installs the global :class:`~specloader.output.OutputManager`, wires
    library logging to stderr, and stores the loader overrides in
    ``ctx.obj`` for :func:`~specloader.commands._common.loader_config`.
    """
    from specloader.output import OutputFormat, OutputManager, configure_logging, set_output

    fmt = OutputFormat.AUTO
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN

    output = OutputManager(format=fmt, no_color=no_color, quiet=quiet, verbose=verbose)
    set_output(output)
    configure_logging(verbose, no_color=output.no_color)

    ctx.ensure_object(dict)
    ctx.obj["cache_dir"] = cache_dir
    ctx.obj["persistent"] = persistent
    ctx.obj["namespace"] = namespace


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log(exc: Exception) -> str:
    """Write the current traceback to ``<data dir>/logs`` and return its path."""
    from specloader.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = logs_dir / f"crash-{timestamp}.log"
    log_path.write_text(f"{type(exc).__name__}: {exc}\n\n{traceback.format_exc()}")
    return str(log_path)


def main() -> None:
    """CLI entry point invoked by the ``specloader`` console script.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except Exception as exc:
        from specloader.exceptions import SpecloaderError
        from specloader.output import error

        if isinstance(exc, SpecloaderError):
            error(str(exc))
            sys.exit(exc.exit_code)
        else:
            log_path = _write_crash_log(exc)
            error(f"Unexpected error. Debug log: {log_path}")
            sys.exit(EXIT_GENERIC_FAILURE)
