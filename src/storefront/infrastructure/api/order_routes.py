"""Order routes: placement, lookup and status changes."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query

from storefront.application.list_orders import ListOrdersHandler
from storefront.application.place_order import PlaceOrderHandler
from storefront.application.show_order import ShowOrderHandler
from storefront.application.update_order_status import UpdateOrderStatusHandler
from storefront.infrastructure.api.deps import get_container
from storefront.infrastructure.api.schemas import OrderIn, OrderOut, OrderStatusIn, dump
from storefront.infrastructure.bootstrap import Container

router = APIRouter(prefix="/order", tags=["order"])


@router.post("", status_code=201)
def new_order(body: OrderIn, container: Container = Depends(get_container)):
    handler = PlaceOrderHandler(
        order_repo=container.orders,
        product_repo=container.products,
        user_repo=container.users,
        branch_repo=container.branches,
        rollback_partial_reservations=container.settings.rollback_partial_reservations,
    )
    order = handler.handle(body.to_request())
    return {"data": dump(OrderOut, order)}


@router.get("")
def all_orders(
    page_num: Optional[str] = Query(None, alias="pageNum"),
    page_size: Optional[str] = Query(None, alias="pageSize"),
    container: Container = Depends(get_container),
):
    result = ListOrdersHandler(container.orders).handle(page_num, page_size)
    return {"total": result.total, "data": [dump(OrderOut, o) for o in result.orders]}


@router.get("/number/{order_number}")
def order_by_number(order_number: int, container: Container = Depends(get_container)):
    order = ShowOrderHandler(container.orders).handle_number(order_number)
    return {"data": dump(OrderOut, order)}


@router.get("/{order_id}")
def order_by_id(order_id: str, container: Container = Depends(get_container)):
    order = ShowOrderHandler(container.orders).handle(order_id)
    return {"data": dump(OrderOut, order)}


@router.patch("/{order_id}/status")
def update_order_status(
    order_id: str,
    body: OrderStatusIn,
    container: Container = Depends(get_container),
):
    order = UpdateOrderStatusHandler(container.orders).handle(order_id, body.status)
    return {"message": "Order updated successfully", "data": dump(OrderOut, order)}
