"""Exception hierarchy for specloader.

All exceptions inherit from :class:`SpecloaderError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`specloader.exit_codes`.
The top-level error handler in :func:`specloader.app.main` catches
``SpecloaderError`` and exits with the appropriate code, while unexpected
exceptions produce a crash log and exit with :data:`EXIT_GENERIC_FAILURE`.

Library callers pattern-match on the concrete type rather than on message
text: a missing location is a :class:`NotFoundError`, a transport or disk
failure an :class:`IOError_`, a malformed payload a :class:`DecodeError`.
:class:`LoadError` is what :class:`~specloader.loader.DocumentLoader`
raises, with the original failure kept in :attr:`LoadError.cause`.

Subclass hierarchy::

    SpecloaderError (exit 1)
    +-- InvalidUsageError   (exit 2)
    +-- NotFoundError       (exit 4)
    +-- IOError_            (exit 6)
    +-- DecodeError         (exit 7)
    +-- ValidationFailed    (exit 8)
    +-- LoadError           (exit 9)
    +-- ConfigError         (exit 1)
"""

from __future__ import annotations

from typing import Optional

from specloader.exit_codes import (
    EXIT_DECODE_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_IO_ERROR,
    EXIT_LOAD_ERROR,
    EXIT_NOT_FOUND,
    EXIT_VALIDATION_FAILED,
)


class SpecloaderError(Exception):
    """Base exception for all specloader errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`specloader.exit_codes`. The entry point catches
    this exception type and calls ``sys.exit(exc.exit_code)``.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(SpecloaderError):
    """Raised for invalid CLI arguments or unsupported option values."""

    exit_code = EXIT_INVALID_USAGE


class NotFoundError(SpecloaderError):
    """Raised when a location does not exist (missing file, bundled resource, HTTP 404)."""

    exit_code = EXIT_NOT_FOUND


class IOError_(SpecloaderError):
    """Raised on network-level or filesystem failures.

    Named with a trailing underscore to avoid shadowing the built-in
    ``IOError`` alias of :class:`OSError`.
    """

    exit_code = EXIT_IO_ERROR


class DecodeError(SpecloaderError):
    """Raised when a payload is not valid JSON/YAML or does not fit the document model."""

    exit_code = EXIT_DECODE_ERROR


class ValidationFailed(SpecloaderError):
    """Raised by the CLI when structural validation reported errors."""

    exit_code = EXIT_VALIDATION_FAILED


class LoadError(SpecloaderError):
    """Raised when :meth:`~specloader.loader.DocumentLoader.load` cannot produce a document.

    Args:
        message: Human-readable description, normally embedding the cause.
        cause: The root failure (acquisition, decoding, or cache I/O).
    """

    exit_code = EXIT_LOAD_ERROR

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class ConfigError(SpecloaderError):
    """Raised for configuration problems (invalid JSON, unknown persistent mode)."""

    exit_code = EXIT_GENERIC_FAILURE
