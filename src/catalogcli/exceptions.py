"""Exception hierarchy for catalogcli.

All exceptions inherit from :class:`CatalogError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`catalogcli.exit_codes`.
The top-level error handler in :func:`catalogcli.app.main` catches
``CatalogError`` and exits with the appropriate code.

:class:`NetworkFailure` is the only error kind the read-through core knows
about. The repository catches it at the network call and converts it into
a :class:`~catalogcli.result.Error`; it never escapes past that boundary.

Subclass hierarchy::

    CatalogError (exit 1)
    +-- InvalidUsageError      (exit 2)
    +-- ConfigError            (exit 1)
    +-- NetworkFailure         (exit 6)
        +-- NotFoundError      (exit 4)
        +-- ServerError        (exit 5)
        +-- ClientError        (exit 7)
        +-- ConnectionError_   (exit 6)
"""

from __future__ import annotations

from typing import Optional

from catalogcli.exit_codes import (
    EXIT_CLIENT_ERROR,
    EXIT_CONNECTION_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_NOT_FOUND,
    EXIT_SERVER_ERROR,
)


class CatalogError(Exception):
    """Base exception for all catalogcli errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`catalogcli.exit_codes`.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        self.message = message
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(CatalogError):
    """Raised for invalid CLI arguments or values rejected by input validation."""

    exit_code = EXIT_INVALID_USAGE


class ConfigError(CatalogError):
    """Raised for configuration problems (invalid JSON, failed validation)."""

    exit_code = EXIT_GENERIC_FAILURE


class NetworkFailure(CatalogError):
    """A request to the catalog API did not produce a usable payload.

    Covers non-2xx responses, transport errors, timeouts and bodies that
    cannot be decoded into the expected schema.

    Args:
        message: Human-readable description of the failure.
        status_code: HTTP status code when the server answered.
        cause: The underlying exception, when there is one.
    """

    exit_code = EXIT_CONNECTION_ERROR

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.cause = cause


class NotFoundError(NetworkFailure):
    """Raised when the API returns HTTP 404 (unknown product id or category)."""

    exit_code = EXIT_NOT_FOUND


class ServerError(NetworkFailure):
    """Raised when the API returns an HTTP 5xx server error."""

    exit_code = EXIT_SERVER_ERROR


class ClientError(NetworkFailure):
    """Raised when the API rejects the request with a 4xx other than 404."""

    exit_code = EXIT_CLIENT_ERROR


class ConnectionError_(NetworkFailure):
    """Raised on network-level failures (timeout, DNS resolution, connection refused).

    Named with a trailing underscore to avoid shadowing the built-in
    ``ConnectionError``.
    """

    exit_code = EXIT_CONNECTION_ERROR


def exit_code_for_status(status_code: int) -> int:
    """Map an HTTP error status to a process exit code."""
    if status_code == 404:
        return EXIT_NOT_FOUND
    if status_code >= 500:
        return EXIT_SERVER_ERROR
    if status_code >= 400:
        return EXIT_CLIENT_ERROR
    return EXIT_GENERIC_FAILURE
