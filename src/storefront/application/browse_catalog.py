"""Application services: catalog browsing queries.

Discounted products, products related to a given one, and the distinct
category and brand values used across the whole catalog.
"""

from __future__ import annotations

from datetime import datetime, timezone

from storefront.application.dto import ProductDTO, product_to_dto
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.repository.product_repository import ProductRepository

DEFAULT_DISCOUNTED_LIMIT = 10
DEFAULT_RELATED_LIMIT = 5


class DiscountedProductsHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        limit: int = DEFAULT_DISCOUNTED_LIMIT,
        now: datetime | None = None,
    ) -> list[ProductDTO]:
        now = now or datetime.now(timezone.utc)
        products = self._product_repo.find_on_sale(now, limit)
        return [product_to_dto(p, now) for p in products]


class RelatedProductsHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, product_id: str, limit: int = DEFAULT_RELATED_LIMIT) -> list[ProductDTO]:
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with id {product_id} not found")
        now = datetime.now(timezone.utc)
        related = self._product_repo.find_related(product, limit)
        return [product_to_dto(p, now) for p in related]


class CatalogValuesHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def categories(self) -> list[str]:
        return self._product_repo.distinct_categories()

    def brands(self) -> list[str]:
        return self._product_repo.distinct_brands()
