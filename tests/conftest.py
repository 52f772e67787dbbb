"""Shared test fixtures for specloader.

Provides reusable fixtures for loading document fixtures, creating isolated
config environments, managing output state, and running CLI commands.
These fixtures are automatically discovered by pytest and available to
all test modules without explicit imports.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from specloader.document import OpenAPI
from specloader.loader import parse
from specloader.output import OutputFormat, OutputManager, reset_output, set_output


FIXTURES_DIR = Path(__file__).parent / "fixtures"


# ---------------------------------------------------------------------------
# Auto-reset global state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager and library log level after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time; CliRunner swaps those streams per invocation.
    """
    yield
    reset_output()
    logger = logging.getLogger("specloader")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


# ---------------------------------------------------------------------------
# Document fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def petstore_json_path() -> Path:
    return FIXTURES_DIR / "petstore_3.0.json"


@pytest.fixture
def petstore_yaml_path() -> Path:
    return FIXTURES_DIR / "petstore.yaml"


@pytest.fixture
def broken_yaml_path() -> Path:
    return FIXTURES_DIR / "broken.yaml"


@pytest.fixture
def petstore_doc(petstore_json_path: Path) -> OpenAPI:
    """Decoded petstore 3.0 JSON fixture."""
    return parse(petstore_json_path.read_bytes())


@pytest.fixture
def broken_doc(broken_yaml_path: Path) -> OpenAPI:
    """A document that violates most structural rules."""
    return parse(broken_yaml_path.read_bytes())


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Sets XDG_CONFIG_HOME, XDG_CACHE_HOME, and XDG_DATA_HOME to
    subdirectories of tmp_path so that tests never touch real user
    config. Clears all SPECLOADER_* environment variables and changes
    the working directory to tmp_path.

    Returns:
        The tmp_path root directory for additional file creation.
    """
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "cache"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    # Non-XDG platforms fall back to ~/.specloader.
    monkeypatch.setenv("HOME", str(tmp_path / "home"))

    for var in [
        "SPECLOADER_CACHE_DIR",
        "SPECLOADER_PERSISTENT_MODE",
        "SPECLOADER_NAMESPACE",
        "SPECLOADER_BINARY_STRING_CONVERSION",
    ]:
        monkeypatch.delenv(var, raising=False)

    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a PLAIN-format, quiet OutputManager for the test."""
    output = OutputManager(format=OutputFormat.PLAIN, quiet=True)
    set_output(output)
    yield output
    reset_output()


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
