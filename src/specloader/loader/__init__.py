"""Acquire, decode and cache OpenAPI documents.

* :class:`DocumentLoader` -- the entry point; see :mod:`specloader.loader.loader`.
* :class:`SourceAcquirer` -- raw bytes from a URL, a file, or a bundled resource.
* :func:`sniff_format` / :func:`parse` -- JSON-or-YAML detection and decoding.
* :class:`DocumentCache` -- the in-process, single-flight cache tier.
"""

from specloader.loader.loader import DocumentLoader
from specloader.loader.memory import DocumentCache
from specloader.loader.sniffer import parse, sniff_format
from specloader.loader.source import SourceAcquirer

__all__ = [
    "DocumentCache",
    "DocumentLoader",
    "SourceAcquirer",
    "parse",
    "sniff_format",
]
