"""Helpers shared by the CLI commands and the interactive shell.

Opens a repository for the resolved configuration, turns domain models
into tables and records for :mod:`catalogcli.output`, and turns
:class:`~catalogcli.result.Error` values into stderr messages and process
exit codes.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional, TypeVar

import httpx
import typer

from catalogcli.client import AsyncClient, ProductsApi
from catalogcli.exceptions import CatalogError, exit_code_for_status
from catalogcli.exit_codes import EXIT_INVALID_USAGE
from catalogcli.models import Category, GlobalConfig, ProductDetails, ProductListResponse
from catalogcli.output import OutputFormat, error, format_response, get_output, print_record, print_table
from catalogcli.repository import ProductRepository
from catalogcli.result import Error, Loading, Result, Success

T = TypeVar("T")

PRODUCT_HEADERS = ["ID", "Title", "Category", "Price", "Discount", "Rating", "Stock"]


@asynccontextmanager
async def open_repository(
    config: GlobalConfig,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> AsyncIterator[ProductRepository]:
    """Open an HTTP client for *config* and yield a repository bound to it."""
    async with AsyncClient(config.base_url, config.request, transport=transport) as client:
        yield ProductRepository(
            ProductsApi(client),
            default_ttl=config.cache.default_ttl_seconds,
            long_ttl=config.cache.long_ttl_seconds,
        )


def format_price(value: float) -> str:
    return f"${value:.2f}"


def format_rating(value: float) -> str:
    return f"★ {value:.1f}"


def exit_code_for(result: Error) -> int:
    """Exit code for a failed result.

    Network failures carry their own code; an HTTP status without a cause is
    mapped by status; anything else was rejected by input validation.
    """
    if isinstance(result.cause, CatalogError):
        return result.cause.exit_code
    if result.code is not None:
        return exit_code_for_status(result.code)
    return EXIT_INVALID_USAGE


def unwrap(result: Result[T]) -> T:
    """Return the payload of a :class:`Success` or report the error and exit."""
    if isinstance(result, Success):
        return result.data
    if isinstance(result, Error):
        error(result.message)
        raise typer.Exit(code=exit_code_for(result))
    if isinstance(result, Loading):
        raise RuntimeError("Loading is only emitted by stream entry points")
    raise TypeError(f"Not a result: {result!r}")


def show_page(page: ProductListResponse, title: str) -> None:
    """Print one page of products with its page indicator."""
    if get_output().format == OutputFormat.JSON:
        format_response(page.model_dump(mode="json"))
        return

    rows = [
        [
            str(p.id),
            p.title,
            p.category,
            format_price(p.price),
            f"{p.discount_percentage:.1f}%",
            format_rating(p.rating),
            str(p.stock),
        ]
        for p in page.products
    ]
    caption = f"Page {page.current_page}/{page.total_pages} ({page.total} products)"
    print_table(PRODUCT_HEADERS, rows, title=title, caption=caption)


def show_details(details: ProductDetails) -> None:
    if get_output().format == OutputFormat.JSON:
        format_response(details.model_dump(mode="json"))
        return

    dims = details.dimensions
    fields = {
        "ID": details.id,
        "Title": details.title,
        "Brand": details.brand,
        "Category": details.category,
        "Price": format_price(details.price),
        "Discount": f"{details.discount_percentage:.1f}%",
        "Rating": format_rating(details.rating),
        "Stock": details.stock,
        "Availability": details.availability_status,
        "SKU": details.sku,
        "Weight": details.weight,
        "Dimensions": f"{dims.width} x {dims.height} x {dims.depth}" if dims else None,
        "Tags": list(details.tags) or None,
        "Warranty": details.warranty_information,
        "Shipping": details.shipping_information,
        "Returns": details.return_policy,
        "Minimum order": details.minimum_order_quantity,
        "Reviews": len(details.reviews),
        "Description": details.description,
    }
    print_record(details.title, fields)


def show_categories(categories: tuple[Category, ...]) -> None:
    if get_output().format == OutputFormat.JSON:
        format_response([{"name": c.name, "slug": c.slug} for c in categories])
        return
    rows = [[c.slug, c.display_name] for c in categories]
    print_table(["Slug", "Name"], rows, title="Categories")
