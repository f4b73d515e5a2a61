"""Input validation in front of the repository.

Each use case is a small callable object wrapping one repository query. It
normalises and checks the caller's input and, when the input is unusable,
returns an :class:`~catalogcli.result.Error` without consulting the cache
or the network. Valid input is passed on unchanged apart from trimming, so
the repository builds its cache keys from the trimmed values.
"""

from __future__ import annotations

from typing import AsyncIterator, Optional

from catalogcli.client.products_api import DEFAULT_PAGE_SIZE
from catalogcli.models import Category, ProductDetails, ProductListResponse
from catalogcli.repository import ProductRepository
from catalogcli.result import Error, Result


class GetProductsUseCase:
    def __init__(self, repository: ProductRepository) -> None:
        self._repository = repository

    async def __call__(
        self,
        limit: int = DEFAULT_PAGE_SIZE,
        skip: int = 0,
        sort_by: Optional[str] = None,
        order: Optional[str] = None,
    ) -> Result[ProductListResponse]:
        return await self._repository.get_products(limit, skip, sort_by, order)

    def as_flow(
        self,
        limit: int = DEFAULT_PAGE_SIZE,
        skip: int = 0,
        sort_by: Optional[str] = None,
        order: Optional[str] = None,
    ) -> AsyncIterator[Result[ProductListResponse]]:
        return self._repository.get_products_flow(limit, skip, sort_by, order)


class SearchProductsUseCase:
    """Full-text search. Blank queries are rejected; others are trimmed."""

    def __init__(self, repository: ProductRepository) -> None:
        self._repository = repository

    async def __call__(
        self,
        query: str,
        limit: int = DEFAULT_PAGE_SIZE,
        skip: int = 0,
    ) -> Result[ProductListResponse]:
        if not query.strip():
            return Error("Search query cannot be empty")
        return await self._repository.search_products(query.strip(), limit, skip)

    async def as_flow(
        self,
        query: str,
        limit: int = DEFAULT_PAGE_SIZE,
        skip: int = 0,
    ) -> AsyncIterator[Result[ProductListResponse]]:
        # A blank query still gets its terminal Error, but no Loading first:
        # nothing is being loaded.
        if not query.strip():
            yield Error("Search query cannot be empty")
            return
        async for result in self._repository.search_products_flow(query.strip(), limit, skip):
            yield result


class GetProductDetailsUseCase:
    def __init__(self, repository: ProductRepository) -> None:
        self._repository = repository

    async def __call__(self, product_id: int) -> Result[ProductDetails]:
        if product_id <= 0:
            return Error("Invalid product ID")
        return await self._repository.get_product_details(product_id)


class GetProductsByCategoryUseCase:
    def __init__(self, repository: ProductRepository) -> None:
        self._repository = repository

    async def __call__(
        self,
        category: str,
        limit: int = DEFAULT_PAGE_SIZE,
        skip: int = 0,
    ) -> Result[ProductListResponse]:
        if not category.strip():
            return Error("Category cannot be empty")
        return await self._repository.get_products_by_category(category.strip(), limit, skip)


class GetCategoriesUseCase:
    def __init__(self, repository: ProductRepository) -> None:
        self._repository = repository

    async def __call__(self) -> Result[tuple[Category, ...]]:
        return await self._repository.get_categories()
