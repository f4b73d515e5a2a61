"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~catalogcli.exceptions.CatalogError` subclass.
Shell wrappers can inspect the exit code to tell a missing product from an
unreachable API without parsing stderr.

Example::

    $ catalogcli products show 99999
    $ echo $?
    4   # EXIT_NOT_FOUND -- the API answered 404
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments (blank query, bad id, ...)."""

EXIT_NOT_FOUND = 4
"""The requested resource was not found (HTTP 404)."""

EXIT_SERVER_ERROR = 5
"""The remote API returned an HTTP 5xx server error."""

EXIT_CONNECTION_ERROR = 6
"""A network-level error occurred (timeout, DNS failure, connection refused)."""

EXIT_CLIENT_ERROR = 7
"""The remote API rejected the request with a 4xx status other than 404."""

EXIT_INTERRUPTED = 130
"""The user pressed Ctrl-C."""
