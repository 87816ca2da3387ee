"""Exception hierarchy for reqsnip.

All exceptions inherit from :class:`ReqsnipError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`reqsnip.exit_codes`.
The top-level error handler in :func:`reqsnip.app.main` catches
``ReqsnipError`` and exits with the appropriate code, while unexpected
exceptions produce a crash log and exit with :data:`EXIT_GENERIC_FAILURE`.

The rendering core never raises these itself: malformed example data
surfaces as the plain Python error it causes.

Subclass hierarchy::

    ReqsnipError (exit 1)
    +-- InvalidUsageError       (exit 2)
    +-- OperationNotFoundError  (exit 4)
    +-- SpecParseError          (exit 7)
    +-- ConfigError             (exit 1)
"""

from __future__ import annotations

from reqsnip.exit_codes import (
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_NOT_FOUND,
    EXIT_SPEC_PARSE_ERROR,
)


class ReqsnipError(Exception):
    """Base exception for all reqsnip errors.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(ReqsnipError):
    """Raised for invalid CLI arguments (unknown target, malformed ``NAME=VALUE``)."""

    exit_code = EXIT_INVALID_USAGE


class OperationNotFoundError(ReqsnipError):
    """Raised when no operation matches the requested method and path."""

    exit_code = EXIT_NOT_FOUND


class SpecParseError(ReqsnipError):
    """Raised when the OpenAPI spec cannot be parsed or fails validation."""

    exit_code = EXIT_SPEC_PARSE_ERROR


class ConfigError(ReqsnipError):
    """Raised for configuration problems (invalid JSON, bad credential sources)."""

    exit_code = EXIT_GENERIC_FAILURE
