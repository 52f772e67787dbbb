"""The document loader: the single entry point for obtaining an OpenAPI document.

:meth:`DocumentLoader.load` resolves a ``(location, kind)`` pair to a decoded
:class:`~specloader.document.OpenAPI`:

1. The cache key ``"<KIND>:<location>"`` is looked up in the in-process
   :class:`~specloader.loader.memory.DocumentCache`. A hit returns the very
   same instance as the earlier call.
2. On a miss, exactly one caller per key acquires the bytes with the
   :class:`~specloader.loader.source.SourceAcquirer` and decodes them with
   :func:`~specloader.loader.sniffer.parse`. The persistent
   :class:`~specloader.cache.CacheStore` takes part according to the
   configured :class:`~specloader.models.PersistentMode`.
3. The result is stored in the in-process cache and returned.

Any failure surfaces as :class:`~specloader.exceptions.LoadError` with the
root exception in :attr:`~specloader.exceptions.LoadError.cause`.

Example::

    from specloader.loader import DocumentLoader
    from specloader.models import SourceKind

    loader = DocumentLoader()
    doc = loader.load("petstore.yaml", SourceKind.BUNDLED)
    assert loader.load("petstore.yaml", SourceKind.BUNDLED) is doc
"""

from __future__ import annotations

import logging
from typing import Optional

from specloader.cache import CacheStore
from specloader.document import OpenAPI
from specloader.exceptions import IOError_, LoadError, SpecloaderError
from specloader.loader import sniffer
from specloader.loader.memory import DocumentCache
from specloader.loader.source import SourceAcquirer
from specloader.models import LoaderConfig, Location, PersistentMode, SourceKind

logger = logging.getLogger(__name__)


class DocumentLoader:
    """Load documents through the in-process and persistent cache tiers.

    Args:
        acquirer: Byte source. Defaults to a :class:`SourceAcquirer` built
            from *config*.
        cache: In-process tier. Defaults to a fresh :class:`DocumentCache`.
        store: Persistent tier. ``None`` disables it regardless of mode.
        config: Loader settings; only ``persistent_mode``, ``timeout`` and
            ``resource_packages`` are read here.
    """

    def __init__(
        self,
        acquirer: Optional[SourceAcquirer] = None,
        cache: Optional[DocumentCache] = None,
        store: Optional[CacheStore] = None,
        config: Optional[LoaderConfig] = None,
    ) -> None:
        self._config = config or LoaderConfig()
        self._acquirer = acquirer or SourceAcquirer(
            timeout=self._config.timeout,
            resource_packages=self._config.resource_packages,
        )
        self._cache = cache if cache is not None else DocumentCache()
        self._store = store

    @classmethod
    def from_config(cls, config: LoaderConfig) -> "DocumentLoader":
        """Build a loader whose persistent tier lives where *config* says."""
        store = None
        if config.persistent_mode is not PersistentMode.DISABLED:
            store = CacheStore(config.cache_dir, namespace=config.namespace)
        return cls(store=store, config=config)

    @property
    def cache(self) -> DocumentCache:
        return self._cache

    @property
    def store(self) -> Optional[CacheStore]:
        return self._store

    @property
    def persistent_mode(self) -> PersistentMode:
        if self._store is None:
            return PersistentMode.DISABLED
        return self._config.persistent_mode

    def load(self, location: str, kind: SourceKind) -> OpenAPI:
        """Return the document at *location*.

        Raises:
            LoadError: If the document cannot be acquired, decoded, or
                reconstructed from the persistent tier.
        """
        loc = Location(location=location, kind=kind)
        return self._cache.get_or_load(loc.cache_key, lambda: self._load_uncached(loc))

    def invalidate(self, location: str, kind: SourceKind) -> bool:
        """Forget the in-process entry for ``(location, kind)``."""
        return self._cache.invalidate(Location(location=location, kind=kind).cache_key)

    def clear(self) -> None:
        """Forget every in-process entry. The persistent tier is untouched."""
        self._cache.clear()

    # -- internals --

    def _load_uncached(self, loc: Location) -> OpenAPI:
        key = loc.cache_key
        mode = self.persistent_mode

        if mode is PersistentMode.PREFER:
            try:
                stored = self._store.load(key)
            except SpecloaderError as exc:
                raise LoadError(f"Failed to load cached document for {key}: {exc}", cause=exc) from exc
            if stored is not None:
                logger.debug("Using persisted document for %s", key)
                return stored

        try:
            document = self._acquire_and_parse(loc)
        except SpecloaderError as exc:
            if mode is PersistentMode.FALLBACK:
                stored = self._fallback(key, exc)
                if stored is not None:
                    return stored
            raise LoadError(f"Failed to load {loc.location}: {exc}", cause=exc) from exc

        if mode is not PersistentMode.DISABLED:
            self._write_through(key, document)
        return document

    def _acquire_and_parse(self, loc: Location) -> OpenAPI:
        with self._acquirer.open(loc.location, loc.kind) as stream:
            try:
                data = stream.read()
            except OSError as exc:
                raise IOError_(f"Failed to read {loc.location}: {exc}") from exc
        return sniffer.parse(data)

    def _fallback(self, key: str, error: SpecloaderError) -> Optional[OpenAPI]:
        try:
            stored = self._store.load(key)
        except SpecloaderError as exc:
            logger.warning("Persisted copy of %s is unusable: %s", key, exc)
            return None
        if stored is not None:
            logger.warning("Source for %s unavailable (%s); using persisted copy", key, error)
        return stored

    def _write_through(self, key: str, document: OpenAPI) -> None:
        try:
            self._store.save(key, document)
        except SpecloaderError as exc:
            logger.warning("Could not persist %s: %s", key, exc)
