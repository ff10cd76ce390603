"""Application service: List Orders use case (query)."""

from __future__ import annotations

from storefront.application.dto import OrderPageDTO, order_to_dto
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.service.catalog_query import parse_pagination


class ListOrdersHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(
        self,
        page: str | int | None = None,
        page_size: str | int | None = None,
    ) -> OrderPageDTO:
        page_num, size = parse_pagination(page, page_size)
        orders = self._order_repo.list_page(skip=(page_num - 1) * size, limit=size)
        return OrderPageDTO(
            total=self._order_repo.count(),
            orders=[order_to_dto(o) for o in orders],
        )
