"""Order aggregate.

An Order references its customer, the ordered products and, depending on
``order_type``, either a pickup branch or a delivery address. Orders do not
own any of the entities they reference.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import Quantity


class OrderStatus(Enum):
    PENDING = "Pending"
    CONFIRMED = "Confirmed"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"


class OrderType(Enum):
    PICKUP = "Pickup"
    DELIVERY = "Delivery"


TERMINAL_STATUSES = (OrderStatus.DELIVERED, OrderStatus.CANCELLED)


@dataclass(frozen=True)
class PickupDetails:
    store_id: str


@dataclass(frozen=True)
class DeliveryDetails:
    address: str
    city: str
    phone_number: str
    postal_code: str | None = None


@dataclass(frozen=True)
class OrderLine:
    """One requested product and how many units of it to reserve."""

    product_id: str
    quantity: Quantity


@dataclass
class Order:
    """Aggregate root for customer orders.

    ``Order.create()`` enforces the rules for new orders; ``__init__`` is
    left plain so repositories can rebuild stored orders as they are.
    """

    id: str | None
    order_id: int
    customer_id: str
    product_ids: list[str]
    total_price: float
    amount: int
    order_type: OrderType
    status: OrderStatus = OrderStatus.PENDING
    pickup_details: PickupDetails | None = None
    delivery_details: DeliveryDetails | None = None
    order_date: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        order_id: int,
        customer_id: str,
        product_ids: list[str],
        total_price: float,
        amount: int,
        order_type: OrderType,
        details: PickupDetails | DeliveryDetails,
        status: OrderStatus = OrderStatus.PENDING,
    ) -> Order:
        if not customer_id:
            raise ValidationError("Customer is required")
        if not product_ids:
            raise ValidationError("Products must be a non-empty array!")
        if total_price <= 0:
            raise ValidationError("Total price must be a positive number!")
        if amount <= 0:
            raise ValidationError("amount must be a positive number!")

        if order_type == OrderType.PICKUP:
            if not isinstance(details, PickupDetails):
                raise ValidationError(
                    "Pickup store ID is required for pickup orders!"
                )
            return Order(
                id=None, order_id=order_id, customer_id=customer_id,
                product_ids=list(product_ids), total_price=total_price,
                amount=amount, order_type=order_type, status=status,
                pickup_details=details,
            )

        if not isinstance(details, DeliveryDetails):
            raise ValidationError(
                "Complete delivery details are required for delivery orders!"
            )
        return Order(
            id=None, order_id=order_id, customer_id=customer_id,
            product_ids=list(product_ids), total_price=total_price,
            amount=amount, order_type=order_type, status=status,
            delivery_details=details,
        )

    # --- State transitions ----------------------------------------------------

    def update_status(self, new_status: OrderStatus) -> None:
        if self.status in TERMINAL_STATUSES and new_status != self.status:
            raise ValidationError(
                f"Cannot change status of a {self.status.value} order"
            )
        self.status = new_status

    @property
    def store_id(self) -> str | None:
        return self.pickup_details.store_id if self.pickup_details else None
