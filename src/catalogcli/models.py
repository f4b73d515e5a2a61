"""Canonical Pydantic models shared across all catalogcli modules.

This is the single source of truth for data shapes in the project. The
models fall into three groups:

**Configuration models** -- serialised as JSON in the user's config directory:
    :class:`RequestConfig`, :class:`CacheConfig`, :class:`OutputConfig` and
    :class:`GlobalConfig`.

**Wire models** -- the DummyJSON payloads exactly as the API sends them
(camelCase keys, unknown keys ignored):
    :class:`DimensionsDto`, :class:`ReviewDto`, :class:`MetaDto`,
    :class:`ProductDto` and :class:`ProductListResponseDto`.

**Domain models** -- what the repository caches and hands to callers:
    :class:`Product`, :class:`ProductDetails`, :class:`Dimensions`,
    :class:`Review`, :class:`ProductListResponse` and :class:`Category`.

Domain models are frozen. A cached value is handed to every caller that
hits its key, so nobody may mutate it after it leaves the mapper.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_BASE_URL = "https://dummyjson.com/"


# --- Config ---


class RequestConfig(BaseModel):
    """HTTP settings applied to every call made by the API client."""

    timeout: float = Field(default=30.0, description="Read/write/pool timeout in seconds")
    connect_timeout: float = Field(default=30.0, description="Connect timeout in seconds")
    verify_ssl: bool = Field(default=True, description="Verify SSL certificates")
    max_retries: int = Field(
        default=0, ge=0, description="Retries on 5xx and transport errors"
    )
    page_size: int = Field(default=20, gt=0, description="Default page size for listings")


class CacheConfig(BaseModel):
    """Read-through cache TTLs stored in :class:`GlobalConfig`."""

    default_ttl_seconds: float = Field(
        default=300.0, gt=0, description="TTL for product listings and details"
    )
    long_ttl_seconds: float = Field(
        default=1800.0, gt=0, description="TTL for the category list"
    )


class OutputConfig(BaseModel):
    """Default output format preferences stored in :class:`GlobalConfig`."""

    format: str = Field(
        default="auto", description="Output format: auto, json, plain, rich"
    )


class GlobalConfig(BaseModel):
    """User-wide configuration persisted at ``~/.config/catalogcli/config.json``.

    Loaded and saved by :func:`~catalogcli.config.load_global_config` and
    :func:`~catalogcli.config.save_global_config`. See
    :func:`~catalogcli.config.resolve_config` for the precedence chain.
    """

    base_url: str = Field(default=DEFAULT_BASE_URL, description="Catalog API root")
    request: RequestConfig = Field(default_factory=RequestConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)


# --- Wire models ---


class _Wire(BaseModel):
    """Base for API payloads: accept camelCase aliases, ignore extra keys."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class DimensionsDto(_Wire):
    width: float
    height: float
    depth: float


class ReviewDto(_Wire):
    rating: int
    comment: str
    date: str
    reviewer_name: str = Field(alias="reviewerName")
    reviewer_email: str = Field(alias="reviewerEmail")


class MetaDto(_Wire):
    created_at: Optional[str] = Field(default=None, alias="createdAt")
    updated_at: Optional[str] = Field(default=None, alias="updatedAt")
    barcode: Optional[str] = None
    qr_code: Optional[str] = Field(default=None, alias="qrCode")


class ProductDto(_Wire):
    """One product record as returned by ``GET products/{id}`` and in listings."""

    id: int
    title: str
    description: str
    category: str
    price: float
    discount_percentage: float = Field(alias="discountPercentage")
    rating: float
    stock: int
    tags: list[str] = Field(default_factory=list)
    brand: Optional[str] = None
    sku: Optional[str] = None
    weight: Optional[float] = None
    dimensions: Optional[DimensionsDto] = None
    warranty_information: Optional[str] = Field(default=None, alias="warrantyInformation")
    shipping_information: Optional[str] = Field(default=None, alias="shippingInformation")
    availability_status: Optional[str] = Field(default=None, alias="availabilityStatus")
    reviews: list[ReviewDto] = Field(default_factory=list)
    return_policy: Optional[str] = Field(default=None, alias="returnPolicy")
    minimum_order_quantity: Optional[int] = Field(default=None, alias="minimumOrderQuantity")
    meta: Optional[MetaDto] = None
    images: list[str] = Field(default_factory=list)
    thumbnail: str


class ProductListResponseDto(_Wire):
    """Paginated envelope returned by the listing and search endpoints."""

    products: list[ProductDto]
    total: int
    skip: int
    limit: int


# --- Domain models ---


class _Domain(BaseModel):
    model_config = ConfigDict(frozen=True)


class Product(_Domain):
    """Listing view of a product (the fields a results table needs)."""

    id: int
    title: str
    description: str
    category: str
    price: float
    discount_percentage: float
    rating: float
    stock: int
    brand: Optional[str] = None
    thumbnail: str
    images: tuple[str, ...] = ()


class Dimensions(_Domain):
    width: float
    height: float
    depth: float


class Review(_Domain):
    rating: int
    comment: str
    date: str
    reviewer_name: str
    reviewer_email: str


class ProductDetails(_Domain):
    """Complete product record shown by the detail view."""

    id: int
    title: str
    description: str
    category: str
    price: float
    discount_percentage: float
    rating: float
    stock: int
    tags: tuple[str, ...] = ()
    brand: Optional[str] = None
    sku: Optional[str] = None
    weight: Optional[float] = None
    dimensions: Optional[Dimensions] = None
    warranty_information: Optional[str] = None
    shipping_information: Optional[str] = None
    availability_status: Optional[str] = None
    reviews: tuple[Review, ...] = ()
    return_policy: Optional[str] = None
    minimum_order_quantity: Optional[int] = None
    images: tuple[str, ...] = ()
    thumbnail: str


class ProductListResponse(_Domain):
    """One page of products plus the pagination figures the API reported."""

    products: tuple[Product, ...]
    total: int
    skip: int
    limit: int

    @property
    def has_next_page(self) -> bool:
        return self.skip + self.limit < self.total

    @property
    def current_page(self) -> int:
        return self.skip // self.limit + 1 if self.limit > 0 else 1

    @property
    def total_pages(self) -> int:
        return (self.total + self.limit - 1) // self.limit if self.limit > 0 else 1


class Category(_Domain):
    """A product category.

    ``slug`` is the path segment accepted by ``GET products/category/{slug}``.
    """

    name: str
    slug: str

    @property
    def display_name(self) -> str:
        return self.name[:1].upper() + self.name[1:]
