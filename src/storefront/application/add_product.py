"""Application service: Add Product use case."""

from __future__ import annotations

import logging

from storefront.application.dto import ProductDTO, ProductSpec, VariantSpec, product_to_dto
from storefront.domain.model.product import Product, Size, Variant
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


def build_variants(
    product_repo: ProductRepository,
    specs: list[VariantSpec],
) -> list[Variant]:
    """Turn variant specs into domain variants, minting missing IDs."""
    return [
        Variant(
            id=spec.id or product_repo.next_id(),
            color=spec.color,
            color_hex=spec.color_hex or None,
            is_default=spec.is_default,
            sizes=[
                Size(id=size.id or product_repo.next_id(), name=size.name, stock=size.stock)
                for size in spec.sizes
            ],
        )
        for spec in specs
    ]


class AddProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, spec: ProductSpec) -> ProductDTO:
        """Add a new product to the catalog."""
        product = Product.create(
            name=spec.name,
            description=spec.description,
            base_price=Money.of(spec.base_price),
            main_category=spec.main_category,
            categories=spec.categories,
            brand=spec.brand,
            discount_percentage=spec.discount_percentage,
            discount_end_date=spec.discount_end_date,
            variants=build_variants(self._product_repo, spec.variants),
            stock=spec.stock,
        )
        self._product_repo.save(product)
        logger.info("Product %s '%s' added", product.id, product.name)
        return product_to_dto(product)
