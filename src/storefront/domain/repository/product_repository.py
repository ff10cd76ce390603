"""Abstract repository for the Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations live in the infrastructure layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from storefront.domain.model.product import Product
from storefront.domain.service.catalog_query import CatalogFacets, QueryPlan


class ProductRepository(ABC):

    @abstractmethod
    def next_id(self) -> str:
        """Generate a fresh unique ID for a product, variant or size."""

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if absent or malformed."""

    @abstractmethod
    def save(self, product: Product) -> None:
        """Persist a new or updated product.

        Implementations recompute the aggregate stock from the variants
        before writing, and assign an ID to new products.
        """

    @abstractmethod
    def delete(self, product_id: str) -> bool:
        """Remove a product with its variants. False if it did not exist."""

    @abstractmethod
    def decrement_stock(self, product_id: str, quantity: int) -> bool:
        """Atomically lower aggregate stock if at least ``quantity`` remains.

        Returns False, leaving the product untouched, when stock is short.
        """

    @abstractmethod
    def increment_stock(self, product_id: str, quantity: int) -> None:
        """Give back aggregate stock taken by ``decrement_stock``."""

    @abstractmethod
    def find(self, plan: QueryPlan) -> list[Product]:
        """Return one page of matching products in plan order."""

    @abstractmethod
    def count(self, plan: QueryPlan) -> int:
        """Count every product matching the plan, ignoring pagination."""

    @abstractmethod
    def facets(self, plan: QueryPlan) -> CatalogFacets:
        """Brands, categories and price range over the matching products."""

    @abstractmethod
    def find_on_sale(self, now: datetime, limit: int) -> list[Product]:
        """Products with an active discount, biggest discount first."""

    @abstractmethod
    def find_related(self, product: Product, limit: int) -> list[Product]:
        """Other products sharing the product's main category."""

    @abstractmethod
    def distinct_categories(self) -> list[str]:
        """Every category used anywhere in the catalog."""

    @abstractmethod
    def distinct_brands(self) -> list[str]:
        """Every brand used anywhere in the catalog."""
