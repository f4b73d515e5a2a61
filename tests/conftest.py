"""Shared test fixtures for catalogcli.

Provides DummyJSON-shaped payload factories, a fake monotonic clock, a
call-counting stand-in for the products API, isolated config environments
and output management. These fixtures are automatically discovered by
pytest and available to all test modules without explicit imports.
"""

from __future__ import annotations

from collections import Counter
from pathlib import Path
from typing import Any, Callable, Optional

import pytest

from catalogcli.exceptions import NetworkFailure
from catalogcli.models import ProductDto, ProductListResponseDto
from catalogcli.output import OutputFormat, OutputManager, reset_output, set_output


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time.  When Typer's CliRunner redirects those streams during
    a test and the test finishes, the cached references become stale
    ("I/O operation on closed file").  Resetting forces a fresh manager
    to be created on next use.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Payload factories (plain dicts shaped like DummyJSON responses)
# ---------------------------------------------------------------------------


def _product(product_id: int = 1, **overrides: Any) -> dict[str, Any]:
    data: dict[str, Any] = {
        "id": product_id,
        "title": f"Product {product_id}",
        "description": f"Description of product {product_id}",
        "category": "smartphones",
        "price": 9.99 + product_id,
        "discountPercentage": 12.5,
        "rating": 4.25,
        "stock": 30 + product_id,
        "tags": ["phone", "mobile"],
        "brand": "Acme",
        "sku": f"SKU-{product_id:04d}",
        "weight": 2.0,
        "dimensions": {"width": 10.5, "height": 20.0, "depth": 1.2},
        "warrantyInformation": "1 year warranty",
        "shippingInformation": "Ships in 2 days",
        "availabilityStatus": "In Stock",
        "reviews": [
            {
                "rating": 5,
                "comment": "Great!",
                "date": "2024-05-23T08:56:21.618Z",
                "reviewerName": "Sam Lee",
                "reviewerEmail": "sam.lee@x.dummyjson.com",
            }
        ],
        "returnPolicy": "30 days return policy",
        "minimumOrderQuantity": 2,
        "meta": {
            "createdAt": "2024-05-23T08:56:21.618Z",
            "updatedAt": "2024-05-23T08:56:21.618Z",
            "barcode": "9164035109868",
            "qrCode": "https://assets.dummyjson.com/public/qr-code.png",
        },
        "images": [f"https://cdn.dummyjson.com/products/{product_id}/1.png"],
        "thumbnail": f"https://cdn.dummyjson.com/products/{product_id}/thumbnail.png",
    }
    data.update(overrides)
    return data


def _page(
    ids: Optional[list[int]] = None,
    total: int = 100,
    skip: int = 0,
    limit: int = 20,
) -> dict[str, Any]:
    ids = ids if ids is not None else [skip + 1, skip + 2]
    return {
        "products": [_product(i) for i in ids],
        "total": total,
        "skip": skip,
        "limit": limit,
    }


@pytest.fixture
def product_payload() -> Callable[..., dict[str, Any]]:
    """Factory for a single ``GET products/{id}`` body."""
    return _product


@pytest.fixture
def page_payload() -> Callable[..., dict[str, Any]]:
    """Factory for a paginated listing body (``products``, ``total``, ``skip``, ``limit``)."""
    return _page


# ---------------------------------------------------------------------------
# Fake clock and products source
# ---------------------------------------------------------------------------


class FakeClock:
    """Monotonic clock that only moves when a test advances it."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class StubSource:
    """In-memory stand-in for :class:`~catalogcli.client.ProductsApi`.

    Counts calls per method and records their arguments. Assign an
    exception to ``failures[<method name>]`` to make that method raise it.
    """

    def __init__(self) -> None:
        self.calls: Counter[str] = Counter()
        self.args: list[tuple[str, tuple[Any, ...]]] = []
        self.failures: dict[str, Exception] = {}
        self.categories = ["beauty", "smartphones", "home decoration"]
        self.total = 100

    def _record(self, name: str, *args: Any) -> None:
        self.calls[name] += 1
        self.args.append((name, args))
        failure = self.failures.get(name)
        if failure is not None:
            raise failure

    async def get_products(
        self, limit: int, skip: int, sort_by: Optional[str], order: Optional[str]
    ) -> ProductListResponseDto:
        self._record("get_products", limit, skip, sort_by, order)
        return ProductListResponseDto.model_validate(_page(total=self.total, skip=skip, limit=limit))

    async def search_products(self, query: str, limit: int, skip: int) -> ProductListResponseDto:
        self._record("search_products", query, limit, skip)
        return ProductListResponseDto.model_validate(
            _page(ids=[7], total=1, skip=skip, limit=limit)
        )

    async def get_product(self, product_id: int) -> ProductDto:
        self._record("get_product", product_id)
        return ProductDto.model_validate(_product(product_id))

    async def get_categories(self) -> list[str]:
        self._record("get_categories")
        return list(self.categories)

    async def get_products_by_category(
        self, category: str, limit: int, skip: int
    ) -> ProductListResponseDto:
        self._record("get_products_by_category", category, limit, skip)
        return ProductListResponseDto.model_validate(
            _page(ids=[3, 4, 5], total=3, skip=skip, limit=limit)
        )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def source() -> StubSource:
    return StubSource()


@pytest.fixture
def network_failure() -> NetworkFailure:
    return NetworkFailure("Request to products timed out after 1 attempt(s)")


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Sets XDG_CONFIG_HOME and XDG_DATA_HOME to subdirectories of tmp_path
    so that tests never touch real user config, clears
    ``CATALOGCLI_BASE_URL`` and changes the working directory to tmp_path.

    Returns:
        The tmp_path root directory for additional file creation.
    """
    monkeypatch.setattr("catalogcli.config._is_xdg_platform", lambda: True)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.delenv("CATALOGCLI_BASE_URL", raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a PLAIN-format, quiet OutputManager as the global output."""
    output = OutputManager(format=OutputFormat.PLAIN, quiet=True)
    set_output(output)
    yield output
    reset_output()


@pytest.fixture
def json_output() -> OutputManager:
    """Install a JSON-format OutputManager as the global output."""
    output = OutputManager(format=OutputFormat.JSON)
    set_output(output)
    yield output
    reset_output()


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
