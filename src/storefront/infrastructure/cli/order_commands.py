"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from storefront.application.dto import (
    DeliverySpec,
    OrderDTO,
    OrderLineSpec,
    PickupSpec,
    PlaceOrderRequest,
)
from storefront.application.place_order import PlaceOrderHandler
from storefront.application.show_order import ShowOrderHandler
from storefront.application.update_order_status import UpdateOrderStatusHandler
from storefront.domain.exceptions import DomainException
from storefront.domain.model.order import OrderStatus, OrderType
from storefront.infrastructure.bootstrap import build_container


def _display_order(dto: OrderDTO) -> None:
    click.echo(f"Order #{dto.order_id}  (status={dto.status})")
    click.echo(f"Customer: {dto.customer}")
    click.echo(f"Placed:   {dto.order_date}")
    click.echo(f"Type:     {dto.order_type}")
    if dto.pickup_details:
        click.echo(f"Store:    {dto.pickup_details['storeId']}")
    if dto.delivery_details:
        d = dto.delivery_details
        click.echo(f"Deliver:  {d['address']}, {d['city']} {d['postalCode'] or ''}")
    click.echo()
    for product_id in dto.products:
        click.echo(f"  {product_id}")
    click.echo(f"  {'Total':<20} {dto.total_price:>10.2f}  ({dto.amount} item(s))")


@click.command("show")
@click.option("--number", "order_number", required=True, type=int, help="Order number.")
def order_show(order_number: int) -> None:
    """Show details of an existing order."""
    handler = ShowOrderHandler(order_repo=build_container().orders)

    try:
        dto = handler.handle_number(order_number)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("status")
@click.option("--id", "order_id", required=True, help="Order document ID.")
@click.option(
    "--set", "status", required=True,
    type=click.Choice([s.value for s in OrderStatus]),
    help="New status.",
)
def order_status(order_id: str, status: str) -> None:
    """Move an order to a new status."""
    handler = UpdateOrderStatusHandler(order_repo=build_container().orders)

    try:
        dto = handler.handle(order_id, status)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{dto.order_id} is now {dto.status}.")


def _parse_item(raw: str) -> OrderLineSpec:
    product_id, sep, quantity = raw.rpartition(":")
    if not sep or not product_id:
        raise click.BadParameter(f"expected PRODUCT_ID:QTY, got {raw!r}", param_hint="--item")
    try:
        return OrderLineSpec(product_id=product_id, quantity=int(quantity))
    except ValueError:
        raise click.BadParameter(f"quantity must be a whole number in {raw!r}", param_hint="--item")


@click.command("place")
@click.option("--customer", required=True, help="Customer user ID.")
@click.option("--number", "order_number", required=True, type=int, help="Order number.")
@click.option("--item", "items", multiple=True, required=True, help="PRODUCT_ID:QTY (repeatable).")
@click.option("--total", "total_price", required=True, type=float, help="Total price.")
@click.option("--amount", default=None, type=int, help="Item count (defaults to the sum of quantities).")
@click.option(
    "--status", default=OrderStatus.PENDING.value,
    type=click.Choice([s.value for s in OrderStatus]),
    help="Initial status.",
)
@click.option("--pickup", "store_id", default=None, help="Branch ID for a pickup order.")
@click.option("--address", default=None, help="Delivery address.")
@click.option("--city", default=None, help="Delivery city.")
@click.option("--postal-code", default=None, help="Delivery postal code.")
@click.option("--phone", default=None, help="Delivery contact phone.")
def order_place(
    customer: str,
    order_number: int,
    items: tuple[str, ...],
    total_price: float,
    amount: int | None,
    status: str,
    store_id: str | None,
    address: str | None,
    city: str | None,
    postal_code: str | None,
    phone: str | None,
) -> None:
    """Place an order for pickup (--pickup) or delivery (--address ...)."""
    lines = [_parse_item(raw) for raw in items]
    delivery = address or city or postal_code or phone
    if store_id and delivery:
        raise click.UsageError("Use either --pickup or the delivery options, not both.")

    request = PlaceOrderRequest(
        customer=customer,
        products=lines,
        status=status,
        order_id=order_number,
        total_price=total_price,
        amount=amount if amount is not None else sum(line.quantity or 0 for line in lines),
        order_type=OrderType.DELIVERY.value if delivery else OrderType.PICKUP.value,
        pickup_details=None if delivery else PickupSpec(store_id=store_id),
        delivery_details=(
            DeliverySpec(address=address, city=city, postal_code=postal_code, phone_number=phone)
            if delivery else None
        ),
    )

    container = build_container()
    handler = PlaceOrderHandler(
        order_repo=container.orders,
        product_repo=container.products,
        user_repo=container.users,
        branch_repo=container.branches,
        rollback_partial_reservations=container.settings.rollback_partial_reservations,
    )
    try:
        dto = handler.handle(request)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order placed ({dto.id}).")
    _display_order(dto)
