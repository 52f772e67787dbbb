"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~specloader.exceptions.SpecloaderError` subclass.
External tooling (CI scripts, shell wrappers) can inspect the exit code to
determine the failure class without parsing stderr.

Example::

    $ specloader validate petstore.yaml
    $ echo $?
    8   # EXIT_VALIDATION_FAILED -- the document has structural errors
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or missing required parameters."""

EXIT_NOT_FOUND = 4
"""The requested document, file, resource, or schema was not found."""

EXIT_IO_ERROR = 6
"""A network or filesystem error occurred while acquiring or caching a document."""

EXIT_DECODE_ERROR = 7
"""The document (or a cached copy of it) could not be decoded as JSON/YAML."""

EXIT_VALIDATION_FAILED = 8
"""Structural validation reported at least one error."""

EXIT_LOAD_ERROR = 9
"""The document loader gave up; the underlying cause is reported alongside."""
