"""Read-through product repository.

:class:`ProductRepository` sits between callers (use cases, CLI commands)
and the network collaborator. Every query follows the same steps:

1. derive a cache key from the call's parameters;
2. on a cache hit, return ``Success(cached)`` without touching the network;
3. on a miss, await the network call; on success map the payload to a
   domain model, store it with the query's TTL and return ``Success``;
4. on a :class:`~catalogcli.exceptions.NetworkFailure`, return ``Error``
   and leave the cache alone.

The repository keeps three independent caches: product pages (listing,
search and by-category pages, keyed by parameter tuples), product details
(keyed by id) and the category list (one constant key, long TTL). Each
cache has its own lock, and nothing orders operations across caches, so
:meth:`ProductRepository.clear_cache` can be observed half-done by a
concurrent reader.

No retries happen here. A failed call is reported once and the caller
decides whether to try again.
"""

from __future__ import annotations

import time
from typing import (
    AsyncIterator,
    Awaitable,
    Callable,
    Hashable,
    Optional,
    Protocol,
    TypeVar,
)

from catalogcli.cache import DEFAULT_TTL, LONG_TTL, InMemoryCache
from catalogcli.client.products_api import DEFAULT_PAGE_SIZE
from catalogcli.exceptions import NetworkFailure
from catalogcli.mapper import (
    category_from_slug,
    product_details_from_dto,
    product_list_from_dto,
)
from catalogcli.models import (
    Category,
    ProductDetails,
    ProductDto,
    ProductListResponse,
    ProductListResponseDto,
)
from catalogcli.output import debug
from catalogcli.result import LOADING, Error, Result, Success

D = TypeVar("D")
K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

CATEGORIES_KEY = "categories"

ProductsKey = tuple[str, int, int, Optional[str], Optional[str]]
PageKey = tuple[str, str, int, int]


class ProductsSource(Protocol):
    """What the repository needs from the network side.

    :class:`~catalogcli.client.products_api.ProductsApi` is the production
    implementation; tests pass stubs that count calls.
    """

    async def get_products(
        self, limit: int, skip: int, sort_by: Optional[str], order: Optional[str]
    ) -> ProductListResponseDto: ...

    async def search_products(self, query: str, limit: int, skip: int) -> ProductListResponseDto: ...

    async def get_product(self, product_id: int) -> ProductDto: ...

    async def get_categories(self) -> list[str]: ...

    async def get_products_by_category(
        self, category: str, limit: int, skip: int
    ) -> ProductListResponseDto: ...


def products_key(
    limit: int, skip: int, sort_by: Optional[str], order: Optional[str]
) -> ProductsKey:
    """Key for a listing page. ``None`` and ``""`` stay distinct."""
    return ("products", limit, skip, sort_by, order)


def search_key(query: str, limit: int, skip: int) -> PageKey:
    return ("search", query, limit, skip)


def category_key(category: str, limit: int, skip: int) -> PageKey:
    return ("category", category, limit, skip)


class ProductRepository:
    """Cache-backed access to the product catalog.

    Args:
        api: The network collaborator. Shared, not owned: the repository
            never opens or closes it.
        default_ttl: Seconds a product page or detail record stays fresh.
        long_ttl: Seconds the category list stays fresh.
        clock: Monotonic time source handed to the three caches.
    """

    def __init__(
        self,
        api: ProductsSource,
        default_ttl: float = DEFAULT_TTL,
        long_ttl: float = LONG_TTL,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._api = api
        self._default_ttl = default_ttl
        self._long_ttl = long_ttl
        self._products: InMemoryCache[Hashable, ProductListResponse] = InMemoryCache(clock)
        self._details: InMemoryCache[int, ProductDetails] = InMemoryCache(clock)
        self._categories: InMemoryCache[str, tuple[Category, ...]] = InMemoryCache(clock)

    @property
    def products_cache(self) -> InMemoryCache[Hashable, ProductListResponse]:
        return self._products

    @property
    def details_cache(self) -> InMemoryCache[int, ProductDetails]:
        return self._details

    @property
    def categories_cache(self) -> InMemoryCache[str, tuple[Category, ...]]:
        return self._categories

    # ------------------------------------------------------------------ #
    # Queries
    # ------------------------------------------------------------------ #

    async def get_products(
        self,
        limit: int = DEFAULT_PAGE_SIZE,
        skip: int = 0,
        sort_by: Optional[str] = None,
        order: Optional[str] = None,
    ) -> Result[ProductListResponse]:
        """One page of the full catalog, optionally sorted."""
        return await self._read_through(
            self._products,
            products_key(limit, skip, sort_by, order),
            lambda: self._api.get_products(limit, skip, sort_by, order),
            product_list_from_dto,
            self._default_ttl,
        )

    async def search_products(
        self,
        query: str,
        limit: int = DEFAULT_PAGE_SIZE,
        skip: int = 0,
    ) -> Result[ProductListResponse]:
        """One page of full-text search results.

        *query* is used verbatim in the cache key; trimming is the caller's
        job (see :class:`~catalogcli.usecases.SearchProductsUseCase`).
        """
        return await self._read_through(
            self._products,
            search_key(query, limit, skip),
            lambda: self._api.search_products(query, limit, skip),
            product_list_from_dto,
            self._default_ttl,
        )

    async def get_product_details(self, product_id: int) -> Result[ProductDetails]:
        return await self._read_through(
            self._details,
            product_id,
            lambda: self._api.get_product(product_id),
            product_details_from_dto,
            self._default_ttl,
        )

    async def get_products_by_category(
        self,
        category: str,
        limit: int = DEFAULT_PAGE_SIZE,
        skip: int = 0,
    ) -> Result[ProductListResponse]:
        return await self._read_through(
            self._products,
            category_key(category, limit, skip),
            lambda: self._api.get_products_by_category(category, limit, skip),
            product_list_from_dto,
            self._default_ttl,
        )

    async def get_categories(self) -> Result[tuple[Category, ...]]:
        """All categories, cached for the long TTL."""
        return await self._read_through(
            self._categories,
            CATEGORIES_KEY,
            self._api.get_categories,
            lambda slugs: tuple(category_from_slug(s) for s in slugs),
            self._long_ttl,
        )

    # ------------------------------------------------------------------ #
    # Stream variants
    # ------------------------------------------------------------------ #

    async def get_products_flow(
        self,
        limit: int = DEFAULT_PAGE_SIZE,
        skip: int = 0,
        sort_by: Optional[str] = None,
        order: Optional[str] = None,
    ) -> AsyncIterator[Result[ProductListResponse]]:
        """Yield ``Loading`` and then the result of :meth:`get_products`.

        Nothing runs until the generator is iterated; each call returns a
        fresh generator.
        """
        yield LOADING
        yield await self.get_products(limit, skip, sort_by, order)

    async def search_products_flow(
        self,
        query: str,
        limit: int = DEFAULT_PAGE_SIZE,
        skip: int = 0,
    ) -> AsyncIterator[Result[ProductListResponse]]:
        """Yield ``Loading`` and then the result of :meth:`search_products`."""
        yield LOADING
        yield await self.search_products(query, limit, skip)

    # ------------------------------------------------------------------ #
    # Invalidation
    # ------------------------------------------------------------------ #

    async def refresh_products(
        self,
        limit: int = DEFAULT_PAGE_SIZE,
        skip: int = 0,
        sort_by: Optional[str] = None,
        order: Optional[str] = None,
    ) -> Result[ProductListResponse]:
        """Drop every cached product page, then fetch the requested page from the API."""
        await self._products.clear()
        return await self.get_products(limit, skip, sort_by, order)

    async def refresh_product_details(self, product_id: int) -> Result[ProductDetails]:
        await self._details.remove(product_id)
        return await self.get_product_details(product_id)

    async def refresh_categories(self) -> Result[tuple[Category, ...]]:
        await self._categories.remove(CATEGORIES_KEY)
        return await self.get_categories()

    async def clear_cache(self) -> None:
        """Empty all three caches, one after another."""
        await self._products.clear()
        await self._details.clear()
        await self._categories.clear()

    async def cache_sizes(self) -> dict[str, int]:
        """Entry counts per cache. Stale entries not yet read are included."""
        return {
            "products": await self._products.size(),
            "details": await self._details.size(),
            "categories": await self._categories.size(),
        }

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    async def _read_through(
        self,
        cache: InMemoryCache[K, V],
        key: K,
        fetch: Callable[[], Awaitable[D]],
        transform: Callable[[D], V],
        ttl: float,
    ) -> Result[V]:
        cached = await cache.get(key)
        if cached is not None:
            debug(f"Cache hit: {key!r}")
            return Success(cached)

        debug(f"Cache miss: {key!r}")
        try:
            payload = await fetch()
        except NetworkFailure as exc:
            debug(f"Fetch for {key!r} failed: {exc.message}")
            return Error.from_failure(exc)

        value = transform(payload)
        await cache.put(key, value, ttl)
        return Success(value)
