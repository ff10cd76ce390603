"""Application service: Update Order Status use case."""

from __future__ import annotations

import logging

from storefront.application.dto import OrderDTO, order_to_dto
from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from storefront.domain.model.order import OrderStatus
from storefront.domain.repository.order_repository import OrderRepository

logger = logging.getLogger(__name__)


class UpdateOrderStatusHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: str, status: str) -> OrderDTO:
        try:
            new_status = OrderStatus(status)
        except ValueError:
            raise ValidationError(f"Unknown order status: {status!r}")

        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError("Order not found")

        previous = order.status
        order.update_status(new_status)
        self._order_repo.save(order)
        logger.info(
            "Order #%s moved from %s to %s",
            order.order_id, previous.value, new_status.value,
        )
        return order_to_dto(order)
