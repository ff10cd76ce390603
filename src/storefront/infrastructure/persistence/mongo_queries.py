"""Translate catalog query plans into MongoDB filters and sort specs."""

from __future__ import annotations

from pymongo import ASCENDING, DESCENDING

from storefront.domain.service.catalog_query import QueryPlan, SortKey

TEXT_SCORE = {"$meta": "textScore"}

_SORTS: dict[SortKey, list[tuple[str, int]]] = {
    SortKey.PRICE_ASC: [("basePrice", ASCENDING)],
    SortKey.PRICE_DESC: [("basePrice", DESCENDING)],
    SortKey.NEWEST: [("createdAt", DESCENDING)],
    SortKey.BESTSELLING: [("sold", DESCENDING)],
    SortKey.RATING: [("averageRating", DESCENDING)],
}


def to_mongo_filter(plan: QueryPlan) -> dict:
    conditions: list[tuple[str, object]] = []
    if plan.search:
        conditions.append(("$text", {"$search": plan.search}))
    if plan.categories:
        conditions.append(("categories", {"$in": list(plan.categories)}))
    if plan.main_categories:
        conditions.append(("mainCategory", {"$in": list(plan.main_categories)}))
    if plan.brands:
        conditions.append(("brand", {"$in": list(plan.brands)}))

    price_bounds = {
        op: float(bound)
        for op, bound in (("$gte", plan.min_price), ("$lte", plan.max_price))
        if bound is not None
    }
    if price_bounds:
        conditions.append(("basePrice", price_bounds))

    if plan.in_stock:
        conditions.append(("stock", {"$gt": 0}))
    if plan.on_sale_at is not None:
        conditions.append(("discountPercentage", {"$gt": 0}))
        # A null end date matches both missing and explicitly empty fields.
        conditions.append((
            "$or",
            [{"discountEndDate": None}, {"discountEndDate": {"$gt": plan.on_sale_at}}],
        ))
    return dict(conditions)


def to_mongo_sort(plan: QueryPlan) -> list[tuple[str, object]]:
    """Sort spec with ``_id`` as tie-breaker so paging is stable."""
    if plan.sort == SortKey.RELEVANCE:
        return [("score", TEXT_SCORE), ("_id", ASCENDING)]
    return [*_SORTS[plan.sort], ("_id", ASCENDING)]


def projection_for(plan: QueryPlan) -> dict | None:
    if plan.sort == SortKey.RELEVANCE:
        return {"score": TEXT_SCORE}
    return None
