"""Application service: Adjust Stock use case.

Deducts units from one size of one color variant, e.g. after a sale at
the counter, and persists the product.
"""

from __future__ import annotations

import logging

from storefront.application.dto import ProductDTO, product_to_dto
from storefront.domain.exceptions import EntityNotFoundError, StockError
from storefront.domain.model.value_objects import Quantity
from storefront.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class AdjustStockHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        product_id: str,
        color_id: str,
        size_id: str,
        quantity: int,
    ) -> ProductDTO:
        qty = Quantity(quantity).value

        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with id {product_id} not found")

        if not product.adjust_stock(color_id, size_id, qty):
            raise StockError(
                "Unable to update stock. Check variant/size IDs or available quantity",
                product_name=product.name,
            )

        self._product_repo.save(product)
        logger.info(
            "Stock of %s (%s/%s) lowered by %d, %d left in total",
            product.id, color_id, size_id, qty, product.stock,
        )
        return product_to_dto(product)
