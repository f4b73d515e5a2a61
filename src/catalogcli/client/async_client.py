"""Asynchronous HTTP client for the catalog API.

This module provides :class:`AsyncClient`, a thin wrapper around
:class:`httpx.AsyncClient` that adds:

- **Timeouts** -- connect and read/write/pool limits from
  :class:`~catalogcli.models.RequestConfig` (30 s each by default).
- **Retry with backoff** -- optional retries on 5xx and network errors with
  exponential delay (1 s, 2 s, 4 s, ...). Disabled by default.
- **Error mapping** -- every non-2xx status and every transport error is
  raised as a :class:`~catalogcli.exceptions.NetworkFailure` subclass, so
  callers deal with exactly one failure type.

See Also:
    :class:`~catalogcli.client.products_api.ProductsApi` for the typed
    endpoint calls built on top of this client.
"""

from __future__ import annotations

import asyncio
from typing import Any, Optional

import httpx

from catalogcli.exceptions import (
    ClientError,
    ConnectionError_,
    NetworkFailure,
    NotFoundError,
    ServerError,
)
from catalogcli.models import RequestConfig
from catalogcli.output import debug


class AsyncClient:
    """Asynchronous HTTP client for catalog API calls.

    Must be used as an async context manager so that the underlying
    connection pool is opened and closed properly.

    Args:
        base_url: API root; relative request paths are resolved against it.
        request: Timeout, SSL and retry settings. Defaults apply when ``None``.
        transport: Optional transport override, e.g.
            :class:`httpx.MockTransport` in tests.

    Example::

        async with AsyncClient("https://dummyjson.com/") as client:
            response = await client.get("products", params={"limit": 5})
    """

    def __init__(
        self,
        base_url: str,
        request: Optional[RequestConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._base_url = base_url
        self._config = request or RequestConfig()
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    # ------------------------------------------------------------------ #
    # Async context manager
    # ------------------------------------------------------------------ #

    async def __aenter__(self) -> AsyncClient:
        config = self._config
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=httpx.Timeout(config.timeout, connect=config.connect_timeout),
            verify=config.verify_ssl,
            follow_redirects=True,
            headers={"Accept": "application/json"},
            transport=self._transport,
        )
        return self

    async def __aexit__(self, *args: object) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    # ------------------------------------------------------------------ #
    # Public request methods
    # ------------------------------------------------------------------ #

    async def get(
        self,
        path: str,
        params: Optional[dict[str, Any]] = None,
    ) -> httpx.Response:
        """Send a GET request and return the successful response.

        Args:
            path: URL path relative to ``base_url`` (e.g. ``products/1``).
            params: Query parameters. ``None`` values are dropped.

        Returns:
            The 2xx :class:`httpx.Response`.

        Raises:
            NotFoundError: On 404.
            ClientError: On any other 4xx.
            ServerError: On 5xx after all retries are exhausted.
            ConnectionError_: On network / timeout errors after all retries.
        """
        query = {k: v for k, v in (params or {}).items() if v is not None}
        response = await self._execute_with_retry("GET", path, query)
        self._map_response_error(response)
        return response

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    async def _execute_with_retry(
        self,
        method: str,
        path: str,
        params: dict[str, Any],
    ) -> httpx.Response:
        """Send the request; 5xx answers and transport errors are retried.

        The last 5xx response is returned as-is so that
        :meth:`_map_response_error` reports it. Transport errors that
        survive every attempt become :class:`ConnectionError_`.
        """
        assert self._client is not None, "Client not initialised -- use as async context manager"

        attempts = self._config.max_retries + 1
        for attempt in range(1, attempts + 1):
            debug(f"{method} {path} {params or ''}".rstrip())
            try:
                response = await self._client.request(method, path, params=params)
            except (httpx.TimeoutException, httpx.NetworkError) as exc:
                if attempt == attempts:
                    kind = "timed out" if isinstance(exc, httpx.TimeoutException) else "failed"
                    raise ConnectionError_(
                        f"Request to {path} {kind} after {attempts} attempt(s): {exc}",
                        cause=exc,
                    ) from exc
                await self._backoff(attempt, f"Connection error: {exc}")
                continue
            except httpx.HTTPError as exc:
                raise NetworkFailure(f"Request to {path} failed: {exc}", cause=exc) from exc

            if response.status_code < 500 or attempt == attempts:
                return response
            await self._backoff(attempt, f"Server error {response.status_code}")

        raise AssertionError("unreachable")  # pragma: no cover

    async def _backoff(self, attempt: int, reason: str) -> None:
        delay = 2 ** (attempt - 1)
        debug(f"{reason}, retrying in {delay}s (attempt {attempt}/{self._config.max_retries})")
        await asyncio.sleep(delay)

    @staticmethod
    def _map_response_error(response: httpx.Response) -> None:
        """Raise the :class:`NetworkFailure` subclass matching a non-2xx status."""
        status = response.status_code
        if 200 <= status < 300:
            return

        message = f"HTTP {status}"
        detail = _error_detail(response)
        if detail:
            message = f"{message}: {detail}"

        if status == 404:
            raise NotFoundError(message, status_code=status)
        if status >= 500:
            raise ServerError(message, status_code=status)
        if status >= 400:
            raise ClientError(message, status_code=status)
        raise NetworkFailure(f"Unexpected response: {message}", status_code=status)


def _error_detail(response: httpx.Response) -> str:
    """Best-effort reason from an error body (DummyJSON sends ``{"message": ...}``)."""
    try:
        body = response.json()
    except ValueError:
        return response.text[:200]
    if isinstance(body, dict):
        return str(body.get("message") or body.get("error") or body.get("detail") or "")
    return str(body)
