"""Typed calls for the five DummyJSON product endpoints.

Each method issues one GET through :class:`~catalogcli.client.async_client.AsyncClient`
and validates the body into the wire models from :mod:`catalogcli.models`.
A body that is not JSON, or JSON that does not match the schema, is raised
as :class:`~catalogcli.exceptions.NetworkFailure` just like an HTTP error,
so the repository has a single failure type to convert.
"""

from __future__ import annotations

from typing import Any, Optional, TypeVar
from urllib.parse import quote

from pydantic import TypeAdapter, ValidationError

from catalogcli.client.async_client import AsyncClient
from catalogcli.exceptions import NetworkFailure
from catalogcli.models import ProductDto, ProductListResponseDto

PRODUCTS = "products"
PRODUCTS_SEARCH = "products/search"
CATEGORIES = "products/category-list"
PRODUCTS_BY_CATEGORY = "products/category/{category}"

DEFAULT_PAGE_SIZE = 20

T = TypeVar("T")

_CATEGORY_LIST = TypeAdapter(list[str])


class ProductsApi:
    """Network collaborator consumed by :class:`~catalogcli.repository.ProductRepository`.

    Args:
        client: An entered :class:`AsyncClient`. The API does not own it;
            whoever opened the client closes it.
    """

    def __init__(self, client: AsyncClient) -> None:
        self._client = client

    async def get_products(
        self,
        limit: int = DEFAULT_PAGE_SIZE,
        skip: int = 0,
        sort_by: Optional[str] = None,
        order: Optional[str] = None,
    ) -> ProductListResponseDto:
        """``GET products?limit&skip&sortBy&order`` (sorting params omitted when ``None``)."""
        params = {"limit": limit, "skip": skip, "sortBy": sort_by, "order": order}
        return await self._fetch(PRODUCTS, params, ProductListResponseDto)

    async def search_products(
        self,
        query: str,
        limit: int = DEFAULT_PAGE_SIZE,
        skip: int = 0,
    ) -> ProductListResponseDto:
        """``GET products/search?q&limit&skip``."""
        params = {"q": query, "limit": limit, "skip": skip}
        return await self._fetch(PRODUCTS_SEARCH, params, ProductListResponseDto)

    async def get_product(self, product_id: int) -> ProductDto:
        """``GET products/{id}``."""
        return await self._fetch(f"{PRODUCTS}/{product_id}", None, ProductDto)

    async def get_categories(self) -> list[str]:
        """``GET products/category-list``; the API answers with a JSON array of slugs."""
        response = await self._client.get(CATEGORIES)
        try:
            return _CATEGORY_LIST.validate_python(response.json())
        except (ValueError, ValidationError) as exc:
            raise NetworkFailure(
                f"Malformed response from {CATEGORIES}: {exc}",
                cause=exc,
            ) from exc

    async def get_products_by_category(
        self,
        category: str,
        limit: int = DEFAULT_PAGE_SIZE,
        skip: int = 0,
    ) -> ProductListResponseDto:
        """``GET products/category/{category}?limit&skip``."""
        path = PRODUCTS_BY_CATEGORY.format(category=quote(category, safe=""))
        params = {"limit": limit, "skip": skip}
        return await self._fetch(path, params, ProductListResponseDto)

    async def _fetch(
        self,
        path: str,
        params: Optional[dict[str, Any]],
        model: type[T],
    ) -> T:
        response = await self._client.get(path, params=params)
        try:
            return model.model_validate(response.json())  # type: ignore[attr-defined]
        except (ValueError, ValidationError) as exc:
            raise NetworkFailure(
                f"Malformed response from {path}: {exc}",
                cause=exc,
            ) from exc
