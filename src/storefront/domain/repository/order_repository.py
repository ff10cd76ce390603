"""Abstract repository for the Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.order import Order


class OrderRepository(ABC):

    @abstractmethod
    def get_by_id(self, order_id: str) -> Order | None:
        """Return an order by its document ID, or None if not found."""

    @abstractmethod
    def get_by_order_id(self, order_number: int) -> Order | None:
        """Return an order by its human-facing order number."""

    @abstractmethod
    def list_page(self, skip: int, limit: int) -> list[Order]:
        """Return a slice of all orders."""

    @abstractmethod
    def count(self) -> int:
        """Return the number of stored orders."""

    @abstractmethod
    def save(self, order: Order) -> None:
        """Persist a new or updated order.

        Raises ConflictError when another order already uses the same
        order number.
        """
