"""Application service: Place Order use case.

Steps, in order:
1. Validate the request structure (no mutation on failure).
2. Take aggregate stock for every line via the reservation service.
3. Persist the new order.
4. Back-link the order onto its customer and, for pickups, its branch.

Only steps 1 to 3 can abort. With rollback enabled, stock taken in step 2
is handed back when step 3 loses a race for the order number. A customer
or branch that cannot be found in step 4 is logged and skipped; the order
itself stands.
"""

from __future__ import annotations

import logging

from storefront.application.dto import (
    OrderDTO,
    PlaceOrderRequest,
    order_to_dto,
)
from storefront.domain.exceptions import ConflictError, ValidationError
from storefront.domain.model.order import (
    DeliveryDetails,
    Order,
    OrderLine,
    OrderStatus,
    OrderType,
    PickupDetails,
)
from storefront.domain.model.value_objects import Quantity
from storefront.domain.repository.branch_repository import BranchRepository
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.repository.user_repository import UserRepository
from storefront.domain.service.stock_reservation_service import (
    StockReservationService,
)

logger = logging.getLogger(__name__)


class PlaceOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
        user_repo: UserRepository,
        branch_repo: BranchRepository,
        rollback_partial_reservations: bool = False,
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo
        self._user_repo = user_repo
        self._branch_repo = branch_repo
        self._rollback = rollback_partial_reservations

    def handle(self, request: PlaceOrderRequest) -> OrderDTO:
        order, lines = self._validate(request)

        if self._order_repo.get_by_order_id(order.order_id) is not None:
            raise ConflictError(f"Order #{order.order_id} already exists")

        svc = StockReservationService(
            self._product_repo, rollback_on_failure=self._rollback
        )
        svc.reserve_lines(lines)

        try:
            self._order_repo.save(order)
        except ConflictError:
            # Another request took the order number after the check above.
            if self._rollback:
                svc.release_lines(lines)
            raise
        logger.info(
            "Order #%s placed by %s (%s, %d line(s))",
            order.order_id, order.customer_id, order.order_type.value, len(lines),
        )

        self._link_customer(order)
        if order.order_type == OrderType.PICKUP:
            self._link_branch(order)

        return order_to_dto(order)

    # --- Validation -----------------------------------------------------------

    @staticmethod
    def _validate(request: PlaceOrderRequest) -> tuple[Order, list[OrderLine]]:
        if (
            not request.customer
            or request.products is None
            or not request.status
            or not request.order_id
            or not request.total_price
            or not request.amount
            or not request.order_type
        ):
            raise ValidationError("All fields are required!")

        if not request.products:
            raise ValidationError("Products must be a non-empty array!")

        if _not_number(request.total_price) or request.total_price <= 0:
            raise ValidationError("Total price must be a positive number!")
        if _not_number(request.amount) or request.amount <= 0:
            raise ValidationError("amount must be a positive number!")
        if not isinstance(request.amount, int):
            raise ValidationError("amount must be a whole number!")

        try:
            order_type = OrderType(request.order_type)
        except ValueError:
            raise ValidationError(f"Unknown order type: {request.order_type!r}")
        try:
            status = OrderStatus(request.status)
        except ValueError:
            raise ValidationError(f"Unknown order status: {request.status!r}")

        details: PickupDetails | DeliveryDetails
        if order_type == OrderType.PICKUP:
            pickup = request.pickup_details
            if pickup is None or not pickup.store_id:
                raise ValidationError("Pickup store ID is required for pickup orders!")
            details = PickupDetails(store_id=pickup.store_id)
        else:
            delivery = request.delivery_details
            if (
                delivery is None
                or not delivery.address
                or not delivery.city
                or not delivery.postal_code
                or not delivery.phone_number
            ):
                raise ValidationError(
                    "Complete delivery details are required for delivery orders!"
                )
            details = DeliveryDetails(
                address=delivery.address,
                city=delivery.city,
                phone_number=delivery.phone_number,
                postal_code=delivery.postal_code,
            )

        lines: list[OrderLine] = []
        for spec in request.products:
            if not spec.product_id:
                raise ValidationError("Every product needs a productId")
            lines.append(
                OrderLine(product_id=spec.product_id, quantity=Quantity(spec.quantity))
            )

        order = Order.create(
            order_id=request.order_id,
            customer_id=request.customer,
            product_ids=[line.product_id for line in lines],
            total_price=request.total_price,
            amount=request.amount,
            order_type=order_type,
            details=details,
            status=status,
        )
        return order, lines

    # --- Back-links -----------------------------------------------------------

    def _link_customer(self, order: Order) -> None:
        if not self._user_repo.add_order(order.customer_id, order.id):  # type: ignore[arg-type]
            logger.warning(
                "Order #%s: customer %s not found, back-link skipped",
                order.order_id, order.customer_id,
            )

    def _link_branch(self, order: Order) -> None:
        if not self._branch_repo.add_order(order.store_id, order.id):  # type: ignore[arg-type]
            logger.warning(
                "Order #%s: branch %s not found, back-link skipped",
                order.order_id, order.store_id,
            )


def _not_number(value: object) -> bool:
    return isinstance(value, bool) or not isinstance(value, (int, float))
