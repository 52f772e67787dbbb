"""Canonical Pydantic models shared across specloader modules.

The models fall into two groups:

**Configuration models** -- serialised as JSON in the user's config directory:
    :class:`OutputConfig`, :class:`LoaderConfig`, and :class:`GlobalConfig`.

**Loader models** -- the small value types passed between the loader, the
cache tiers and the CLI:
    :class:`SourceKind`, :class:`PersistentMode`, :class:`HTTPMethod`, and
    :class:`Location`.

The OpenAPI document graph itself lives in :mod:`specloader.document`.
"""

from __future__ import annotations

import enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# --- Loader value types ---


class SourceKind(str, enum.Enum):
    """Where the raw bytes of a document come from.

    ``BUNDLED`` names a resource shipped inside an installed package (see
    :attr:`LoaderConfig.resource_packages`).
    """

    URL = "url"
    FILE = "file"
    BUNDLED = "bundled"


class PersistentMode(str, enum.Enum):
    """How :class:`~specloader.loader.DocumentLoader` uses the on-disk cache tier.

    * ``DISABLED`` -- never read or write the persistent store.
    * ``FALLBACK`` -- write every freshly parsed document through to the
      store, and read it back only when the source cannot be acquired or
      decoded.
    * ``PREFER`` -- read the store first and go to the source on a miss.
    """

    DISABLED = "disabled"
    FALLBACK = "fallback"
    PREFER = "prefer"


class HTTPMethod(str, enum.Enum):
    """HTTP methods recognised by OpenAPI 3.x path-item objects.

    Declaration order is the canonical order used when iterating the
    operations of a :class:`~specloader.document.PathItem`.
    """

    GET = "get"
    PUT = "put"
    POST = "post"
    DELETE = "delete"
    OPTIONS = "options"
    HEAD = "head"
    PATCH = "patch"
    TRACE = "trace"

    @classmethod
    def parse(cls, token: str) -> Optional["HTTPMethod"]:
        """Return the method for a case-insensitive *token*, or ``None``."""
        try:
            return cls(token.strip().lower())
        except ValueError:
            return None


class Location(BaseModel):
    """An immutable (location, kind) pair identifying one document source.

    Example::

        loc = Location(location="/tmp/petstore.yaml", kind=SourceKind.FILE)
        loc.cache_key  # "FILE:/tmp/petstore.yaml"
    """

    model_config = ConfigDict(frozen=True)

    location: str
    kind: SourceKind

    @property
    def cache_key(self) -> str:
        """Deterministic key shared by both cache tiers."""
        return f"{self.kind.name}:{self.location}"


# --- Configuration ---


class OutputConfig(BaseModel):
    """Default output format preferences stored in :class:`GlobalConfig`."""

    format: str = Field(
        default="auto", description="Output format: auto, json, plain, rich"
    )


class LoaderConfig(BaseModel):
    """Document loader settings stored in :class:`GlobalConfig`.

    Environment variables (``SPECLOADER_CACHE_DIR``,
    ``SPECLOADER_PERSISTENT_MODE``, ``SPECLOADER_NAMESPACE``) override the
    stored values; see :func:`~specloader.config.resolve_config`.
    """

    timeout: float = Field(default=30.0, description="URL fetch timeout in seconds")
    persistent_mode: PersistentMode = Field(
        default=PersistentMode.FALLBACK,
        description="How the on-disk cache tier is used: disabled, fallback, prefer",
    )
    namespace: str = Field(
        default="",
        description="Prefix separating persistent cache entries (e.g. 'TEST')",
    )
    cache_dir: Optional[str] = Field(
        default=None,
        description="Directory for persisted documents (default: XDG cache dir)",
    )
    resource_packages: list[str] = Field(
        default_factory=lambda: ["specloader.resources"],
        description="Packages searched, in order, for BUNDLED resources",
    )


class GlobalConfig(BaseModel):
    """User-wide configuration persisted at ``~/.config/specloader/config.json``.

    Loaded and saved by :func:`~specloader.config.load_global_config` and
    :func:`~specloader.config.save_global_config`. Fields here have the
    lowest precedence and can be overridden by environment variables or CLI
    flags. See :func:`~specloader.config.resolve_config`.
    """

    output: OutputConfig = Field(default_factory=OutputConfig)
    loader: LoaderConfig = Field(default_factory=LoaderConfig)
