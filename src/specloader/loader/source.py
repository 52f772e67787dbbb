"""Acquire raw document bytes from a URL, a local file, or a bundled resource.

:class:`SourceAcquirer` is the only part of specloader that talks to the
network or opens user files. It does no parsing: :meth:`SourceAcquirer.open`
hands back a readable binary stream and the caller owns (and closes) it.

Failures are classified so callers can react without parsing messages:

* :class:`~specloader.exceptions.NotFoundError` -- missing file, missing
  bundled resource, or HTTP 404.
* :class:`~specloader.exceptions.IOError_` -- any other HTTP status error,
  transport failure, or filesystem error.

There are no retries.
"""

from __future__ import annotations

import io
import logging
from importlib import resources
from pathlib import Path
from typing import BinaryIO, Optional, Sequence

import httpx

from specloader.exceptions import IOError_, NotFoundError
from specloader.models import SourceKind

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0
DEFAULT_RESOURCE_PACKAGES = ("specloader.resources",)


class SourceAcquirer:
    """Open byte streams for the three :class:`~specloader.models.SourceKind` values.

    Args:
        timeout: Timeout in seconds for URL fetches.
        resource_packages: Importable packages searched, in order, for
            ``BUNDLED`` resource names.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        resource_packages: Optional[Sequence[str]] = None,
    ) -> None:
        self.timeout = timeout
        self.resource_packages = tuple(resource_packages or DEFAULT_RESOURCE_PACKAGES)

    def open(self, location: str, kind: SourceKind) -> BinaryIO:
        """Return a readable binary stream for *location*.

        Raises:
            NotFoundError: If nothing exists at *location*.
            IOError_: On any other transport or filesystem failure.
        """
        kind = SourceKind(kind)
        if kind is SourceKind.URL:
            return self._open_url(location)
        if kind is SourceKind.FILE:
            return self._open_file(location)
        return self._open_bundled(location)

    def _open_url(self, url: str) -> BinaryIO:
        logger.debug("Fetching %s", url)
        try:
            response = httpx.get(url, timeout=self.timeout, follow_redirects=True)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            if status == 404:
                raise NotFoundError(f"Document not found at {url} (HTTP 404)") from exc
            raise IOError_(f"HTTP {status} fetching document from {url}") from exc
        except httpx.HTTPError as exc:
            raise IOError_(f"Failed to fetch document from {url}: {exc}") from exc
        return io.BytesIO(response.content)

    def _open_file(self, location: str) -> BinaryIO:
        path = Path(location).expanduser()
        logger.debug("Opening %s", path)
        try:
            return path.open("rb")
        except FileNotFoundError as exc:
            raise NotFoundError(f"Document file not found: {location}") from exc
        except OSError as exc:
            raise IOError_(f"Failed to open document file {location}: {exc}") from exc

    def _open_bundled(self, name: str) -> BinaryIO:
        relative = name.lstrip("/")
        for package in self.resource_packages:
            try:
                resource = resources.files(package).joinpath(relative)
                if resource.is_file():
                    logger.debug("Opening bundled resource %s from %s", relative, package)
                    return resource.open("rb")
            except ModuleNotFoundError:
                logger.debug("Resource package %s is not importable", package)
                continue
            except OSError as exc:
                raise IOError_(f"Failed to open bundled resource {name}: {exc}") from exc
        raise NotFoundError(f"Resource not found in bundled resources: {name}")
