"""Domain service: Stock Reservation.

Takes aggregate product stock for every line of an incoming order, in the
order the lines were supplied. Each product is committed as soon as its
own line succeeds. If a later line fails, earlier lines stay committed
unless the service was built with ``rollback_on_failure``, in which case
the stock taken so far is handed back before the error propagates.
"""

from __future__ import annotations

from storefront.domain.exceptions import EntityNotFoundError, StockError
from storefront.domain.model.order import OrderLine
from storefront.domain.repository.product_repository import ProductRepository


class StockReservationService:

    def __init__(
        self,
        product_repo: ProductRepository,
        rollback_on_failure: bool = False,
    ) -> None:
        self._product_repo = product_repo
        self._rollback_on_failure = rollback_on_failure

    def reserve_lines(self, lines: list[OrderLine]) -> None:
        """Decrement aggregate stock for every line.

        Raises EntityNotFoundError for an unknown product and StockError
        naming the product when it cannot cover the requested quantity.
        """
        taken: list[OrderLine] = []
        try:
            for line in lines:
                self._reserve_line(line)
                taken.append(line)
        except (EntityNotFoundError, StockError):
            if self._rollback_on_failure:
                self.release_lines(taken)
            raise

    def release_lines(self, lines: list[OrderLine]) -> None:
        for line in reversed(lines):
            self._product_repo.increment_stock(line.product_id, line.quantity.value)

    def _reserve_line(self, line: OrderLine) -> None:
        product = self._product_repo.get_by_id(line.product_id)
        if product is None:
            raise EntityNotFoundError(
                f"Product with ID {line.product_id} not found!"
            )

        qty = line.quantity.value
        if product.stock < qty:
            raise StockError(
                f"Insufficient stock for product {product.name}!",
                product_name=product.name,
            )

        # Guarded write: loses only to a concurrent order that got there first.
        if not self._product_repo.decrement_stock(line.product_id, qty):
            raise StockError(
                f"Insufficient stock for product {product.name}!",
                product_name=product.name,
            )
