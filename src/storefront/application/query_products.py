"""Application service: Query Products use case (catalog listing)."""

from __future__ import annotations

from datetime import datetime, timezone

from storefront.application.dto import CatalogPageDTO, product_to_dto
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service.catalog_query import (
    ProductFilters,
    SortKey,
    build_query_plan,
    page_count,
    parse_pagination,
    parse_price,
)


def build_filters(
    search: str | None = None,
    categories: list[str] | None = None,
    brands: list[str] | None = None,
    min_price: str | None = None,
    max_price: str | None = None,
    in_stock: bool = False,
    on_sale: bool = False,
    sort: str | None = None,
    page: str | int | None = None,
    page_size: str | int | None = None,
) -> ProductFilters:
    """Collect raw request parameters into validated filters."""
    parsed_page, parsed_size = parse_pagination(page, page_size)
    return ProductFilters(
        search=search.strip() if search and search.strip() else None,
        categories=tuple(c for c in categories or [] if c),
        brands=tuple(b for b in brands or [] if b),
        min_price=parse_price(min_price),
        max_price=parse_price(max_price),
        in_stock=in_stock,
        on_sale=on_sale,
        sort=SortKey.parse(sort),
        page=parsed_page,
        page_size=parsed_size,
    )


class QueryProductsHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        filters: ProductFilters,
        now: datetime | None = None,
    ) -> CatalogPageDTO:
        """Return one page of the catalog plus facets for refinement.

        Facets (brands, categories, price range) describe everything the
        filters matched, not just the returned page.
        """
        now = now or datetime.now(timezone.utc)
        plan = build_query_plan(filters, now)

        products = self._product_repo.find(plan)
        total = self._product_repo.count(plan)
        facets = self._product_repo.facets(plan)

        return CatalogPageDTO(
            products=[product_to_dto(p, now) for p in products],
            total_products=total,
            num_of_pages=page_count(total, filters.page_size),
            current_page=filters.page,
            brands=facets.brands,
            categories=facets.categories,
            min_price=float(facets.min_price),
            max_price=float(facets.max_price),
        )
