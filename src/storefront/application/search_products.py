"""Application service: full-text product search."""

from __future__ import annotations

from datetime import datetime, timezone

from storefront.application.dto import SearchPageDTO, product_to_dto
from storefront.domain.exceptions import ValidationError
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service.catalog_query import (
    ProductFilters,
    SortKey,
    build_query_plan,
    page_count,
    parse_pagination,
    parse_price,
)

SEARCH_PAGE_SIZE = 20


def build_search_filters(
    query: str | None,
    categories: list[str] | None = None,
    price_min: str | None = None,
    price_max: str | None = None,
    sort: str | None = None,
    page: str | int | None = None,
    limit: str | int | None = None,
) -> ProductFilters:
    """Search text is required; categories narrow by main category.

    Unlike the catalog listing, an unknown sort falls back to relevance.
    """
    if not query or not query.strip():
        raise ValidationError("Please provide a search query")
    try:
        sort_key = SortKey(sort)
    except ValueError:
        sort_key = SortKey.RELEVANCE
    parsed_page, parsed_size = parse_pagination(page, limit, default_size=SEARCH_PAGE_SIZE)
    return ProductFilters(
        search=query.strip(),
        main_categories=tuple(
            c.strip() for raw in categories or [] for c in raw.split(",") if c.strip()
        ),
        min_price=parse_price(price_min),
        max_price=parse_price(price_max),
        sort=sort_key,
        page=parsed_page,
        page_size=parsed_size,
    )


class SearchProductsHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, filters: ProductFilters, now: datetime | None = None) -> SearchPageDTO:
        now = now or datetime.now(timezone.utc)
        plan = build_query_plan(filters, now)
        products = self._product_repo.find(plan)
        total = self._product_repo.count(plan)
        return SearchPageDTO(
            products=[product_to_dto(p, now) for p in products],
            total_products=total,
            num_of_pages=page_count(total, filters.page_size),
            current_page=filters.page,
        )
