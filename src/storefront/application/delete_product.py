"""Application service: Delete Product use case."""

from __future__ import annotations

import logging

from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class DeleteProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, product_id: str) -> None:
        """Remove a product; its variants and sizes go with it."""
        if not self._product_repo.delete(product_id):
            raise EntityNotFoundError(f"Product with id {product_id} not found")
        logger.info("Product %s removed", product_id)
