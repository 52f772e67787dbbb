"""Persistent (on-disk) document cache for specloader.

This package provides :class:`CacheStore`, the durable tier behind
:class:`~specloader.loader.DocumentLoader`. Documents are stored as JSON,
one file per cache key, in the user's cache directory (see
:func:`~specloader.config.get_documents_cache_dir`).
"""

from specloader.cache.store import CacheStore, file_name_for, namespace_prefix

__all__ = ["CacheStore", "file_name_for", "namespace_prefix"]
