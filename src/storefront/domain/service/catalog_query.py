"""Domain service: catalog filtering, sorting and pagination.

Request parameters are first collected into a ``ProductFilters`` object,
then ``build_query_plan`` turns them into a ``QueryPlan``. The plan is a
plain description of the query; it can be evaluated against in-memory
products or translated by a repository into its own query language.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from enum import Enum

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.product import Product, as_utc

DEFAULT_PAGE_SIZE = 10
_WORD = re.compile(r"\w+")


class SortKey(Enum):
    PRICE_ASC = "price_asc"
    PRICE_DESC = "price_desc"
    NEWEST = "newest"
    BESTSELLING = "bestselling"
    RATING = "rating"
    RELEVANCE = "relevance"

    @staticmethod
    def parse(raw: str | None) -> SortKey:
        """Unknown or missing sort values sort newest first."""
        try:
            return SortKey(raw)
        except ValueError:
            return SortKey.NEWEST


@dataclass(frozen=True)
class ProductFilters:
    """Every supported catalog filter, each one optional."""

    search: str | None = None
    categories: tuple[str, ...] = ()
    main_categories: tuple[str, ...] = ()
    brands: tuple[str, ...] = ()
    min_price: Decimal | None = None
    max_price: Decimal | None = None
    in_stock: bool = False
    on_sale: bool = False
    sort: SortKey = SortKey.NEWEST
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE


@dataclass(frozen=True)
class CatalogFacets:
    brands: list[str]
    categories: list[str]
    min_price: Decimal
    max_price: Decimal

    @staticmethod
    def of(products: list[Product]) -> CatalogFacets:
        brands: list[str] = []
        categories: list[str] = []
        for product in products:
            if product.brand and product.brand not in brands:
                brands.append(product.brand)
            for category in product.categories:
                if category not in categories:
                    categories.append(category)
        prices = [p.base_price.amount for p in products]
        return CatalogFacets(
            brands=sorted(brands),
            categories=sorted(categories),
            min_price=min(prices) if prices else Decimal("0"),
            max_price=max(prices) if prices else Decimal("0"),
        )


@dataclass(frozen=True)
class QueryPlan:
    """A resolved catalog query.

    ``on_sale_at`` holds the instant against which discount end dates are
    compared, or None when the on-sale filter is off. ``sort`` is the
    effective ordering: relevance without search text is already newest.
    """

    search_terms: tuple[str, ...]
    categories: tuple[str, ...]
    main_categories: tuple[str, ...]
    brands: tuple[str, ...]
    min_price: Decimal | None
    max_price: Decimal | None
    in_stock: bool
    on_sale_at: datetime | None
    sort: SortKey
    skip: int
    limit: int

    @property
    def search(self) -> str | None:
        return " ".join(self.search_terms) or None

    # --- In-memory evaluation -------------------------------------------------

    def matches(self, product: Product) -> bool:
        if self.search_terms and self.relevance(product) == 0:
            return False
        if self.categories and not set(self.categories) & set(product.categories):
            return False
        if self.main_categories and product.main_category not in self.main_categories:
            return False
        if self.brands and product.brand not in self.brands:
            return False
        price = product.base_price.amount
        if self.min_price is not None and price < self.min_price:
            return False
        if self.max_price is not None and price > self.max_price:
            return False
        if self.in_stock and product.stock <= 0:
            return False
        if self.on_sale_at is not None and not product.is_on_sale(self.on_sale_at):
            return False
        return True

    def relevance(self, product: Product) -> int:
        words = _WORD.findall(f"{product.name} {product.description}".lower())
        return sum(words.count(term) for term in self.search_terms)

    def sort_products(self, products: list[Product]) -> list[Product]:
        # Ties keep their incoming order, so repeated queries agree.
        if self.sort == SortKey.PRICE_ASC:
            return sorted(products, key=lambda p: p.base_price.amount)
        if self.sort == SortKey.PRICE_DESC:
            return sorted(products, key=lambda p: p.base_price.amount, reverse=True)
        if self.sort == SortKey.BESTSELLING:
            return sorted(products, key=lambda p: p.sold, reverse=True)
        if self.sort == SortKey.RATING:
            return sorted(products, key=lambda p: p.average_rating, reverse=True)
        if self.sort == SortKey.RELEVANCE:
            return sorted(products, key=self.relevance, reverse=True)
        return sorted(products, key=lambda p: as_utc(p.created_at), reverse=True)

    def page_of(self, products: list[Product]) -> list[Product]:
        return products[self.skip:self.skip + self.limit]


# ---------------------------------------------------------------------------
# Building
# ---------------------------------------------------------------------------


def build_query_plan(filters: ProductFilters, now: datetime | None = None) -> QueryPlan:
    """Translate filters into a query plan. Pure: no I/O, no mutation."""
    terms = tuple(_WORD.findall((filters.search or "").lower()))

    sort = filters.sort
    if sort == SortKey.RELEVANCE and not terms:
        sort = SortKey.NEWEST

    on_sale_at = None
    if filters.on_sale:
        on_sale_at = as_utc(now or datetime.now(timezone.utc))

    return QueryPlan(
        search_terms=terms,
        categories=tuple(filters.categories),
        main_categories=tuple(filters.main_categories),
        brands=tuple(filters.brands),
        min_price=filters.min_price,
        max_price=filters.max_price,
        in_stock=filters.in_stock,
        on_sale_at=on_sale_at,
        sort=sort,
        skip=(filters.page - 1) * filters.page_size,
        limit=filters.page_size,
    )


def page_count(total: int, page_size: int) -> int:
    return math.ceil(total / page_size)


# ---------------------------------------------------------------------------
# Parameter parsing
# ---------------------------------------------------------------------------


def parse_pagination(
    page: str | int | None,
    page_size: str | int | None,
    default_size: int = DEFAULT_PAGE_SIZE,
) -> tuple[int, int]:
    """Parse page and page size, rejecting non-numeric or non-positive values."""
    parsed_page = _parse_positive_int(page, default=1)
    parsed_size = _parse_positive_int(page_size, default=default_size)
    if parsed_page is None or parsed_size is None:
        raise ValidationError("Invalid pagination parameters")
    return parsed_page, parsed_size


def parse_price(raw: str | float | int | None) -> Decimal | None:
    if raw is None or raw == "":
        return None
    try:
        value = Decimal(str(raw))
    except InvalidOperation as exc:
        raise ValidationError(f"Invalid price: {raw!r}") from exc
    if not value.is_finite():
        raise ValidationError(f"Invalid price: {raw!r}")
    return value


def _parse_positive_int(raw: str | int | None, default: int) -> int | None:
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return None
    return value if value >= 1 else None
