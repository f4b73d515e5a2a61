"""Product commands -- one-shot catalog queries.

Provides the ``catalogcli products`` sub-command group (``list``,
``search``, ``show``, ``category``) and the top-level ``categories``
command. Each invocation opens its own client and repository, so the
cache only lives for that one call; use ``catalogcli shell`` to keep it
warm across queries.
"""

from __future__ import annotations

import asyncio
from typing import Any, Optional

import typer

from catalogcli.commands.common import (
    open_repository,
    show_categories,
    show_details,
    show_page,
    unwrap,
)
from catalogcli.exit_codes import EXIT_INVALID_USAGE
from catalogcli.models import GlobalConfig
from catalogcli.output import error
from catalogcli.usecases import (
    GetCategoriesUseCase,
    GetProductDetailsUseCase,
    GetProductsByCategoryUseCase,
    GetProductsUseCase,
    SearchProductsUseCase,
)

products_app = typer.Typer(no_args_is_help=True)

SORT_ORDERS = ("asc", "desc")


def _context(ctx: typer.Context) -> tuple[GlobalConfig, Any]:
    """Return the resolved config and the optional transport override from ``ctx.obj``."""
    obj = ctx.obj or {}
    config = obj.get("config") or GlobalConfig()
    return config, obj.get("transport")


def _page_size(config: GlobalConfig, limit: Optional[int]) -> int:
    return limit if limit is not None else config.request.page_size


@products_app.command("list")
def list_products(
    ctx: typer.Context,
    limit: Optional[int] = typer.Option(None, "--limit", "-l", min=1, help="Page size."),
    skip: int = typer.Option(0, "--skip", "-s", min=0, help="Products to skip."),
    sort_by: Optional[str] = typer.Option(None, "--sort-by", help="Field to sort on (e.g. title, price)."),
    order: Optional[str] = typer.Option(None, "--order", help="Sort order: asc or desc."),
) -> None:
    """List one page of the catalog.

    Example::

        catalogcli products list --limit 10 --sort-by price --order desc
    """
    if order is not None and order not in SORT_ORDERS:
        error(f"Invalid sort order: {order} (expected asc or desc)")
        raise typer.Exit(code=EXIT_INVALID_USAGE)

    config, transport = _context(ctx)
    size = _page_size(config, limit)

    async def run():
        async with open_repository(config, transport) as repository:
            return await GetProductsUseCase(repository)(size, skip, sort_by, order)

    show_page(unwrap(asyncio.run(run())), "Products")


@products_app.command("search")
def search_products(
    ctx: typer.Context,
    query: str = typer.Argument(help="Search text."),
    limit: Optional[int] = typer.Option(None, "--limit", "-l", min=1, help="Page size."),
    skip: int = typer.Option(0, "--skip", "-s", min=0, help="Results to skip."),
) -> None:
    """Search products by free text.

    Example::

        catalogcli products search phone --limit 5
    """
    config, transport = _context(ctx)
    size = _page_size(config, limit)

    async def run():
        async with open_repository(config, transport) as repository:
            return await SearchProductsUseCase(repository)(query, size, skip)

    show_page(unwrap(asyncio.run(run())), f"Search: {query.strip()}")


@products_app.command("show")
def show_product(
    ctx: typer.Context,
    product_id: int = typer.Argument(help="Product id."),
) -> None:
    """Show the full record of one product."""
    config, transport = _context(ctx)

    async def run():
        async with open_repository(config, transport) as repository:
            return await GetProductDetailsUseCase(repository)(product_id)

    show_details(unwrap(asyncio.run(run())))


@products_app.command("category")
def products_in_category(
    ctx: typer.Context,
    category: str = typer.Argument(help="Category slug (see `catalogcli categories`)."),
    limit: Optional[int] = typer.Option(None, "--limit", "-l", min=1, help="Page size."),
    skip: int = typer.Option(0, "--skip", "-s", min=0, help="Products to skip."),
) -> None:
    """List products in one category."""
    config, transport = _context(ctx)
    size = _page_size(config, limit)

    async def run():
        async with open_repository(config, transport) as repository:
            return await GetProductsByCategoryUseCase(repository)(category, size, skip)

    show_page(unwrap(asyncio.run(run())), f"Category: {category.strip()}")


def list_categories(ctx: typer.Context) -> None:
    """List all product categories."""
    config, transport = _context(ctx)

    async def run():
        async with open_repository(config, transport) as repository:
            return await GetCategoriesUseCase(repository)()

    show_categories(unwrap(asyncio.run(run())))
