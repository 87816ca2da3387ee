"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~reqsnip.exceptions.ReqsnipError` subclass.

Example::

    $ reqsnip render petstore.yaml get /nope
    $ echo $?
    4   # EXIT_NOT_FOUND -- no such operation in the spec
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments."""

EXIT_NOT_FOUND = 4
"""The requested operation does not exist in the spec."""

EXIT_SPEC_PARSE_ERROR = 7
"""The OpenAPI document could not be parsed or validated."""
