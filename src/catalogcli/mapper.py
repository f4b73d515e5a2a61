"""Pure functions turning wire models into domain models.

Nothing here performs I/O or keeps state. Lists become tuples so that the
resulting (frozen) domain objects can be shared by every cache hit.
"""

from __future__ import annotations

from catalogcli.models import (
    Category,
    Dimensions,
    DimensionsDto,
    Product,
    ProductDetails,
    ProductDto,
    ProductListResponse,
    ProductListResponseDto,
    Review,
    ReviewDto,
)


def product_from_dto(dto: ProductDto) -> Product:
    return Product(
        id=dto.id,
        title=dto.title,
        description=dto.description,
        category=dto.category,
        price=dto.price,
        discount_percentage=dto.discount_percentage,
        rating=dto.rating,
        stock=dto.stock,
        brand=dto.brand,
        thumbnail=dto.thumbnail,
        images=tuple(dto.images),
    )


def dimensions_from_dto(dto: DimensionsDto) -> Dimensions:
    return Dimensions(width=dto.width, height=dto.height, depth=dto.depth)


def review_from_dto(dto: ReviewDto) -> Review:
    return Review(
        rating=dto.rating,
        comment=dto.comment,
        date=dto.date,
        reviewer_name=dto.reviewer_name,
        reviewer_email=dto.reviewer_email,
    )


def product_details_from_dto(dto: ProductDto) -> ProductDetails:
    """Map the full product record, including reviews and dimensions."""
    return ProductDetails(
        id=dto.id,
        title=dto.title,
        description=dto.description,
        category=dto.category,
        price=dto.price,
        discount_percentage=dto.discount_percentage,
        rating=dto.rating,
        stock=dto.stock,
        tags=tuple(dto.tags),
        brand=dto.brand,
        sku=dto.sku,
        weight=dto.weight,
        dimensions=dimensions_from_dto(dto.dimensions) if dto.dimensions else None,
        warranty_information=dto.warranty_information,
        shipping_information=dto.shipping_information,
        availability_status=dto.availability_status,
        reviews=tuple(review_from_dto(r) for r in dto.reviews),
        return_policy=dto.return_policy,
        minimum_order_quantity=dto.minimum_order_quantity,
        images=tuple(dto.images),
        thumbnail=dto.thumbnail,
    )


def product_list_from_dto(dto: ProductListResponseDto) -> ProductListResponse:
    return ProductListResponse(
        products=tuple(product_from_dto(p) for p in dto.products),
        total=dto.total,
        skip=dto.skip,
        limit=dto.limit,
    )


def category_from_slug(raw: str) -> Category:
    """Build a :class:`Category` from one entry of ``GET products/category-list``.

    The slug is the lower-cased name with spaces turned into hyphens, which
    is what the by-category endpoint expects.
    """
    return Category(name=raw, slug=raw.lower().replace(" ", "-"))
