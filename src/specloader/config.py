"""Configuration management with XDG paths, atomic writes, and precedence resolution.

This module handles all persistent configuration for specloader:

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.specloader/`` on macOS and Windows. See :func:`get_config_dir`,
  :func:`get_cache_dir`, :func:`get_data_dir`, :func:`get_documents_cache_dir`.
* **Global config** -- A single :class:`~specloader.models.GlobalConfig`
  JSON file storing defaults (output format, loader settings).
* **Precedence resolution** -- :func:`resolve_config` merges CLI flags,
  environment variables and the global config into the effective
  :class:`~specloader.models.LoaderConfig`.

All file writes use an atomic temp-file-then-rename strategy
(:func:`atomic_write`) so that a reader never observes a half-written file.
The persistent document cache relies on the same helper.
"""

from __future__ import annotations

import json
import os
import platform
import tempfile
from pathlib import Path
from typing import Optional

from specloader.exceptions import ConfigError
from specloader.models import GlobalConfig, LoaderConfig, PersistentMode

_APP_NAME = "specloader"
_CONFIG_FILENAME = "config.json"
_DOCUMENTS_DIRNAME = "documents"

ENV_CACHE_DIR = "SPECLOADER_CACHE_DIR"
ENV_PERSISTENT_MODE = "SPECLOADER_PERSISTENT_MODE"
ENV_NAMESPACE = "SPECLOADER_NAMESPACE"


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform supports XDG Base Directory spec (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def _fallback_base_dir() -> Path:
    """Fallback base directory for non-XDG platforms (macOS, Windows)."""
    return Path.home() / f".{_APP_NAME}"


def _xdg_base(env_var: str, default_segments: tuple[str, ...]) -> Path:
    """Resolve an XDG base directory from an env var with fallback segments under $HOME."""
    env_value = os.environ.get(env_var, "")
    if env_value:
        return Path(env_value)
    base = Path.home()
    for seg in default_segments:
        base = base / seg
    return base


def get_config_dir() -> Path:
    """Return the configuration directory, creating it if necessary.

    On Linux/BSD: ``$XDG_CONFIG_HOME/specloader/`` (default ``~/.config/specloader/``).
    On macOS/Windows: ``~/.specloader/``.
    """
    if _is_xdg_platform():
        base = _xdg_base("XDG_CONFIG_HOME", (".config",))
        path = base / _APP_NAME
    else:
        path = _fallback_base_dir()
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_cache_dir() -> Path:
    """Return the cache directory, creating it if necessary.

    Cached documents can be safely deleted at any time.

    On Linux/BSD: ``$XDG_CACHE_HOME/specloader/`` (default ``~/.cache/specloader/``).
    On macOS/Windows: ``~/.specloader/cache/``.
    """
    if _is_xdg_platform():
        base = _xdg_base("XDG_CACHE_HOME", (".cache",))
        path = base / _APP_NAME
    else:
        path = _fallback_base_dir() / "cache"
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_data_dir() -> Path:
    """Return the data directory (crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/specloader/`` (default ``~/.local/share/specloader/``).
    On macOS/Windows: ``~/.specloader/logs/``.
    """
    if _is_xdg_platform():
        base = _xdg_base("XDG_DATA_HOME", (".local", "share"))
        path = base / _APP_NAME
    else:
        path = _fallback_base_dir() / "logs"
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_documents_cache_dir() -> Path:
    """Return the persistent document cache directory (``<cache_dir>/documents/``).

    Unlike the other helpers this does not create the directory; the
    :class:`~specloader.cache.CacheStore` creates it on first write.
    """
    return get_cache_dir() / _DOCUMENTS_DIRNAME


# --- Atomic file writes ---


def atomic_write(path: Path, data: str | bytes) -> None:
    """Write data to file atomically using temp file + rename.

    The temporary file is created in the same directory as *path* so that
    ``os.replace`` is guaranteed to be an atomic rename on POSIX systems.
    On success the temp file is renamed over *path*; on any failure the temp
    file is cleaned up.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    binary = isinstance(data, bytes)
    fd = None
    tmp_path: Optional[str] = None
    try:
        fd = tempfile.NamedTemporaryFile(
            mode="wb" if binary else "w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding=None if binary else "utf-8",
        )
        tmp_path = fd.name
        fd.write(data)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None  # prevent double-close in finally
        os.replace(tmp_path, path)
    except BaseException:
        # Clean up the temp file on any error (including KeyboardInterrupt).
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        raise


# --- Global config ---


def _global_config_path() -> Path:
    """Path to the global config file."""
    return get_config_dir() / _CONFIG_FILENAME


def load_global_config() -> GlobalConfig:
    """Load the global configuration from the XDG config directory.

    Returns:
        The deserialised :class:`~specloader.models.GlobalConfig`. If the
        file does not exist, a default instance is returned.

    Raises:
        ConfigError: If the file exists but contains invalid JSON or fails
            Pydantic validation.
    """
    path = _global_config_path()
    if not path.is_file():
        return GlobalConfig()
    try:
        text = path.read_text(encoding="utf-8")
        data = json.loads(text)
        return GlobalConfig.model_validate(data)
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid global config at {path}: {exc}") from exc


def save_global_config(config: GlobalConfig) -> None:
    """Persist the global configuration atomically to disk."""
    data = config.model_dump(mode="json")
    atomic_write(_global_config_path(), json.dumps(data, indent=2) + "\n")


# --- Precedence resolution ---


def _parse_persistent_mode(value: str, source: str) -> PersistentMode:
    try:
        return PersistentMode(value.strip().lower())
    except ValueError:
        allowed = ", ".join(m.value for m in PersistentMode)
        raise ConfigError(
            f"Unknown persistent mode '{value}' (from {source}); expected one of: {allowed}"
        ) from None


def resolve_config(
    cli_cache_dir: Optional[str] = None,
    cli_persistent_mode: Optional[str] = None,
    cli_namespace: Optional[str] = None,
) -> tuple[GlobalConfig, LoaderConfig]:
    """Resolve the effective loader configuration.

    Precedence (high to low):
        1. CLI flags (``cli_cache_dir``, ``cli_persistent_mode``, ``cli_namespace``)
        2. Environment variables (``SPECLOADER_CACHE_DIR``,
           ``SPECLOADER_PERSISTENT_MODE``, ``SPECLOADER_NAMESPACE``)
        3. User config (``~/.config/specloader/config.json``)
        4. Defaults

    Returns:
        A tuple of ``(global_config, effective_loader_config)``. The loader
        config is a copy; the global config is returned unmodified.

    Raises:
        ConfigError: If the config file is invalid or a persistent mode
            value is not recognised.
    """
    global_cfg = load_global_config()
    loader_cfg = global_cfg.loader.model_copy(deep=True)

    env_cache_dir = os.environ.get(ENV_CACHE_DIR)
    if env_cache_dir:
        loader_cfg.cache_dir = env_cache_dir
    if cli_cache_dir is not None:
        loader_cfg.cache_dir = cli_cache_dir

    env_mode = os.environ.get(ENV_PERSISTENT_MODE)
    if env_mode:
        loader_cfg.persistent_mode = _parse_persistent_mode(env_mode, ENV_PERSISTENT_MODE)
    if cli_persistent_mode is not None:
        loader_cfg.persistent_mode = _parse_persistent_mode(cli_persistent_mode, "--persistent")

    env_namespace = os.environ.get(ENV_NAMESPACE)
    if env_namespace is not None:
        loader_cfg.namespace = env_namespace
    if cli_namespace is not None:
        loader_cfg.namespace = cli_namespace

    return global_cfg, loader_cfg
