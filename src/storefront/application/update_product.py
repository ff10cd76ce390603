"""Application service: Update Product use case."""

from __future__ import annotations

from storefront.application.add_product import build_variants
from storefront.application.dto import ProductChanges, ProductDTO, product_to_dto
from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import ProductRepository


class UpdateProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, product_id: str, changes: ProductChanges) -> ProductDTO:
        """Apply a partial update and re-check catalog rules before saving.

        Replacing the variants replaces their stock too; the aggregate
        stock follows on save. A product with variants takes no direct
        stock value. An explicit clear removes the discount end date.
        """
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with id {product_id} not found")

        if changes.name is not None:
            product.name = changes.name.strip()
        if changes.description is not None:
            product.description = changes.description.strip()
        if changes.base_price is not None:
            product.base_price = Money.of(changes.base_price)
        if changes.main_category is not None:
            product.main_category = changes.main_category.strip()
        if changes.categories is not None:
            product.categories = list(changes.categories)
        if changes.brand is not None:
            product.brand = changes.brand.strip() or None
        if changes.discount_percentage is not None:
            product.discount_percentage = changes.discount_percentage
        if changes.clear_discount_end_date:
            product.discount_end_date = None
        elif changes.discount_end_date is not None:
            product.discount_end_date = changes.discount_end_date
        if changes.variants is not None:
            product.variants = build_variants(self._product_repo, changes.variants)
        if changes.stock is not None:
            if product.variants:
                raise ValidationError(
                    "Stock is derived from variant sizes; adjust the sizes instead"
                )
            product.stock = changes.stock

        product.validate()
        self._product_repo.save(product)
        return product_to_dto(product)
