"""Uniform outcome wrapper returned by the repository and use cases.

A :data:`Result` is exactly one of three immutable variants:

* :class:`Success` -- the call produced ``data``.
* :class:`Error` -- the call failed; carries a message, the HTTP status when
  the server answered, and the underlying exception when there is one.
* :class:`Loading` -- a transient marker emitted only by the stream entry
  points (:meth:`~catalogcli.repository.ProductRepository.get_products_flow`
  and friends) before their terminal value. Direct calls never return it.

Consumers are expected to handle all three variants::

    if isinstance(result, Success):
        render(result.data)
    elif isinstance(result, Error):
        show_error(result.message)
    elif isinstance(result, Loading):
        show_spinner()
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, Optional, TypeVar, Union

from catalogcli.exceptions import NetworkFailure

T = TypeVar("T")
R = TypeVar("R")


@dataclass(frozen=True)
class Success(Generic[T]):
    """A completed call and its payload."""

    data: T


@dataclass(frozen=True)
class Error:
    """A failed call.

    Attributes:
        message: Human-readable description, suitable for display.
        code: HTTP status code when the API answered with an error status.
        cause: The exception that produced this error, if any.
    """

    message: str
    code: Optional[int] = None
    cause: Optional[BaseException] = None

    @classmethod
    def from_failure(cls, failure: NetworkFailure) -> Error:
        """Build an :class:`Error` from a :class:`~catalogcli.exceptions.NetworkFailure`."""
        return cls(message=failure.message, code=failure.status_code, cause=failure)


@dataclass(frozen=True)
class Loading:
    """In-flight marker for stream entry points."""


LOADING = Loading()

Result = Union[Success[T], Error, Loading]


def map_result(result: Result[T], transform: Callable[[T], R]) -> Result[R]:
    """Apply *transform* to the payload of a :class:`Success`; pass other variants through."""
    if isinstance(result, Success):
        return Success(transform(result.data))
    return result


def get_or_none(result: Result[T]) -> Optional[T]:
    """Return the payload of a :class:`Success`, or ``None`` for any other variant."""
    if isinstance(result, Success):
        return result.data
    return None


def on_success(result: Result[T], action: Callable[[T], object]) -> Result[T]:
    """Call *action* with the payload when *result* is a :class:`Success`; return *result*."""
    if isinstance(result, Success):
        action(result.data)
    return result


def on_error(
    result: Result[T],
    action: Callable[[str, Optional[int], Optional[BaseException]], object],
) -> Result[T]:
    """Call *action* with ``(message, code, cause)`` when *result* is an :class:`Error`."""
    if isinstance(result, Error):
        action(result.message, result.code, result.cause)
    return result
