"""Application service: Show Order use case (query)."""

from __future__ import annotations

from storefront.application.dto import OrderDTO, order_to_dto
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.repository.order_repository import OrderRepository


class ShowOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: str) -> OrderDTO:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError("Order not found!")
        return order_to_dto(order)

    def handle_number(self, order_number: int) -> OrderDTO:
        """Look an order up by the number printed on the customer's receipt."""
        order = self._order_repo.get_by_order_id(order_number)
        if order is None:
            raise EntityNotFoundError("Order not found!")
        return order_to_dto(order)
