"""File-backed persistent tier for decoded OpenAPI documents.

Each cache key maps to one JSON file in the store directory. The file name
is derived from the key: characters outside ``[A-Za-z0-9._-]`` are replaced
with ``_`` so keys such as ``"FILE:/tmp/api.yaml"`` are safe to embed in a
path, and a short SHA-256 suffix of the namespaced key keeps two keys that
sanitise to the same text from sharing a file.

A non-empty namespace adds a ``<namespace>-<digest>@`` prefix. Sanitised
keys never contain ``@``, so :meth:`CacheStore.keys` and
:meth:`CacheStore.clear` only ever see the entries of their own namespace.

Documents are written with :func:`~specloader.config.atomic_write`, so a
concurrent :meth:`CacheStore.load` sees either the previous file or the new
one, never a partial write.
"""

from __future__ import annotations

import hashlib
import logging
import re
from pathlib import Path
from typing import Optional

from specloader import codec
from specloader.config import atomic_write, get_documents_cache_dir
from specloader.document import OpenAPI
from specloader.exceptions import DecodeError, IOError_

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]")
_MAX_STEM = 120
_DIGEST_LEN = 16
_MAX_NAMESPACE = 40
_NAMESPACE_DIGEST_LEN = 8
_NAMESPACE_SEP = "@"
_SUFFIX = ".json"


def _sha256(text: str, length: int) -> str:
    return hashlib.sha256(text.encode("utf-8")).hexdigest()[:length]


def namespace_prefix(namespace: str) -> str:
    """Return the file-name prefix of *namespace* (empty for no namespace)."""
    if not namespace:
        return ""
    safe = _UNSAFE_CHARS.sub("_", namespace)[:_MAX_NAMESPACE]
    return f"{safe}-{_sha256(namespace, _NAMESPACE_DIGEST_LEN)}{_NAMESPACE_SEP}"


def file_name_for(key: str, namespace: str = "") -> str:
    """Return the file name used to persist *key* in *namespace*.

    Example::

        file_name_for("FILE:/tmp/api.yaml")
        # "FILE__tmp_api.yaml-<16 hex digits>.json"
        file_name_for("FILE:/tmp/api.yaml", "TEST")
        # "TEST-<8 hex digits>@FILE__tmp_api.yaml-<16 hex digits>.json"
    """
    qualified = f"{namespace}:{key}" if namespace else key
    stem = _UNSAFE_CHARS.sub("_", key)[:_MAX_STEM]
    digest = _sha256(qualified, _DIGEST_LEN)
    return f"{namespace_prefix(namespace)}{stem}-{digest}{_SUFFIX}"


class CacheStore:
    """Durable key -> :class:`~specloader.document.OpenAPI` store.

    Args:
        cache_dir: Directory holding the cached files. Defaults to
            :func:`~specloader.config.get_documents_cache_dir`. It is created
            on first write.
        namespace: Optional prefix that separates entries, e.g. ``"TEST"``.
            Entries of other namespaces in the same directory are invisible
            to :meth:`keys` and :meth:`clear`.

    Example::

        store = CacheStore("/tmp/specs", namespace="TEST")
        store.save("FILE:/tmp/api.yaml", document)
        store.load("FILE:/tmp/api.yaml").info.title
    """

    def __init__(self, cache_dir: str | Path | None = None, namespace: str = "") -> None:
        self._dir = Path(cache_dir) if cache_dir is not None else get_documents_cache_dir()
        self._namespace = namespace

    @property
    def directory(self) -> Path:
        return self._dir

    @property
    def namespace(self) -> str:
        return self._namespace

    def path_for(self, key: str) -> Path:
        """Return the file that does (or would) hold *key*."""
        return self._dir / file_name_for(key, self._namespace)

    def save(self, key: str, document: OpenAPI) -> None:
        """Persist *document* under *key*, replacing any previous entry.

        Raises:
            IOError_: If the directory or file cannot be written.
        """
        path = self.path_for(key)
        try:
            atomic_write(path, codec.encode_json(document))
        except OSError as exc:
            raise IOError_(f"Failed to write cached document {path}: {exc}") from exc
        logger.debug("Saved %s to %s", key, path)

    def load(self, key: str) -> Optional[OpenAPI]:
        """Return the document stored under *key*, or ``None`` when absent.

        Raises:
            DecodeError: If the cached file exists but cannot be decoded.
            IOError_: If the file exists but cannot be read.
        """
        path = self.path_for(key)
        try:
            data = path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise IOError_(f"Failed to read cached document {path}: {exc}") from exc
        try:
            document = codec.decode_json(data)
        except (ValueError, TypeError) as exc:
            raise DecodeError(f"Corrupt cached document {path}: {exc}") from exc
        logger.debug("Loaded %s from %s", key, path)
        return document

    def delete(self, key: str) -> bool:
        """Remove the entry for *key*. Returns ``True`` if a file was deleted."""
        try:
            self.path_for(key).unlink()
        except FileNotFoundError:
            return False
        return True

    def _owns(self, name: str) -> bool:
        if self._namespace:
            return name.startswith(namespace_prefix(self._namespace))
        return _NAMESPACE_SEP not in name

    def keys(self) -> list[str]:
        """Return the sorted file names of this namespace's entries."""
        if not self._dir.is_dir():
            return []
        return sorted(
            p.name for p in self._dir.glob(f"*{_SUFFIX}") if p.is_file() and self._owns(p.name)
        )

    def clear(self) -> int:
        """Delete every entry of this namespace and return how many were removed."""
        removed = 0
        for name in self.keys():
            try:
                (self._dir / name).unlink()
            except FileNotFoundError:
                continue
            removed += 1
        logger.debug("Cleared %d cached document(s) from %s", removed, self._dir)
        return removed
