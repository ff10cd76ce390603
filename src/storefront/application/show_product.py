"""Application service: Show Product use case (query)."""

from __future__ import annotations

from datetime import datetime

from storefront.application.dto import ProductDTO, product_to_dto
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.repository.product_repository import ProductRepository


class ShowProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, product_id: str, now: datetime | None = None) -> ProductDTO:
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with id {product_id} not found")
        return product_to_dto(product, now)


class VariantStockHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, product_id: str, color_id: str, size_id: str) -> int:
        """Units held by one size of one variant; 0 if either id is unknown."""
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with id {product_id} not found")
        return product.check_variant_stock(color_id, size_id)
