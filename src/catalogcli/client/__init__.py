"""HTTP client module for catalogcli.

Classes:
    :class:`AsyncClient` -- non-blocking client backed by :class:`httpx.AsyncClient`
    with timeouts, optional retry and status-to-exception mapping.
    :class:`ProductsApi` -- typed calls for the DummyJSON product endpoints,
    returning the wire models from :mod:`catalogcli.models`.

Example::

    from catalogcli.client import AsyncClient, ProductsApi

    async with AsyncClient("https://dummyjson.com/") as client:
        page = await ProductsApi(client).get_products(limit=10)
"""

from catalogcli.client.async_client import AsyncClient
from catalogcli.client.products_api import ProductsApi

__all__ = ["AsyncClient", "ProductsApi"]
