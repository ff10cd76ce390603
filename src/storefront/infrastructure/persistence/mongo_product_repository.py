"""MongoDB-backed implementation of ProductRepository."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

from bson import ObjectId
from pymongo import ASCENDING, DESCENDING, TEXT
from pymongo.collection import Collection

from storefront.domain.model.product import Product, Size, Variant
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service.catalog_query import CatalogFacets, QueryPlan
from storefront.infrastructure.persistence.mongo_queries import (
    projection_for,
    to_mongo_filter,
    to_mongo_sort,
)
from storefront.infrastructure.persistence.object_ids import (
    id_str,
    stored_id,
    to_object_id,
)


class MongoProductRepository(ProductRepository):

    def __init__(self, collection: Collection) -> None:
        self._collection = collection

    def ensure_indexes(self) -> None:
        self._collection.create_index(
            [("name", TEXT), ("description", TEXT)], name="product_text"
        )
        self._collection.create_index([("createdAt", DESCENDING)])
        self._collection.create_index([("basePrice", ASCENDING)])
        self._collection.create_index([("discountPercentage", ASCENDING)])
        self._collection.create_index([("stock", ASCENDING)])
        self._collection.create_index([("mainCategory", ASCENDING)])

    # --- ProductRepository interface ------------------------------------------

    def next_id(self) -> str:
        return str(ObjectId())

    def get_by_id(self, product_id: str) -> Product | None:
        oid = to_object_id(product_id)
        if oid is None:
            return None
        doc = self._collection.find_one({"_id": oid})
        return self._to_domain(doc) if doc else None

    def save(self, product: Product) -> None:
        product.recompute_stock()
        if product.id is None:
            product.id = self.next_id()
        doc = self._to_document(product)
        self._collection.replace_one({"_id": doc["_id"]}, doc, upsert=True)

    def delete(self, product_id: str) -> bool:
        oid = to_object_id(product_id)
        if oid is None:
            return False
        return self._collection.delete_one({"_id": oid}).deleted_count == 1

    def decrement_stock(self, product_id: str, quantity: int) -> bool:
        oid = to_object_id(product_id)
        if oid is None:
            return False
        result = self._collection.update_one(
            {"_id": oid, "stock": {"$gte": quantity}},
            {"$inc": {"stock": -quantity}, "$set": {"updatedAt": _now()}},
        )
        return result.modified_count == 1

    def increment_stock(self, product_id: str, quantity: int) -> None:
        oid = to_object_id(product_id)
        if oid is None:
            return
        self._collection.update_one(
            {"_id": oid},
            {"$inc": {"stock": quantity}, "$set": {"updatedAt": _now()}},
        )

    def find(self, plan: QueryPlan) -> list[Product]:
        cursor = (
            self._collection.find(to_mongo_filter(plan), projection_for(plan))
            .sort(to_mongo_sort(plan))
            .skip(plan.skip)
            .limit(plan.limit)
        )
        return [self._to_domain(doc) for doc in cursor]

    def count(self, plan: QueryPlan) -> int:
        return self._collection.count_documents(to_mongo_filter(plan))

    def facets(self, plan: QueryPlan) -> CatalogFacets:
        query = to_mongo_filter(plan)
        brands = [b for b in self._collection.distinct("brand", query) if b]
        categories = [c for c in self._collection.distinct("categories", query) if c]
        price_range = list(self._collection.aggregate([
            {"$match": query},
            {
                "$group": {
                    "_id": None,
                    "minPrice": {"$min": "$basePrice"},
                    "maxPrice": {"$max": "$basePrice"},
                }
            },
        ]))
        low, high = Decimal("0"), Decimal("0")
        if price_range:
            low = Decimal(str(price_range[0]["minPrice"]))
            high = Decimal(str(price_range[0]["maxPrice"]))
        return CatalogFacets(
            brands=sorted(brands),
            categories=sorted(categories),
            min_price=low,
            max_price=high,
        )

    def find_on_sale(self, now: datetime, limit: int) -> list[Product]:
        cursor = (
            self._collection.find({
                "discountPercentage": {"$gt": 0},
                "$or": [{"discountEndDate": None}, {"discountEndDate": {"$gt": now}}],
            })
            .sort([("discountPercentage", DESCENDING), ("_id", ASCENDING)])
            .limit(limit)
        )
        return [self._to_domain(doc) for doc in cursor]

    def find_related(self, product: Product, limit: int) -> list[Product]:
        cursor = self._collection.find({
            "_id": {"$ne": stored_id(product.id)},  # type: ignore[arg-type]
            "mainCategory": product.main_category,
        }).limit(limit)
        return [self._to_domain(doc) for doc in cursor]

    def distinct_categories(self) -> list[str]:
        return sorted(c for c in self._collection.distinct("categories") if c)

    def distinct_brands(self) -> list[str]:
        return sorted(b for b in self._collection.distinct("brand") if b)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_document(product: Product) -> dict:
        return {
            "_id": stored_id(product.id),  # type: ignore[arg-type]
            "name": product.name,
            "description": product.description,
            "basePrice": float(product.base_price),
            "discountPercentage": product.discount_percentage,
            "discountEndDate": product.discount_end_date,
            "categories": list(product.categories),
            "mainCategory": product.main_category,
            "brand": product.brand,
            "variants": [
                {
                    "_id": stored_id(variant.id),
                    "color": variant.color,
                    "colorHex": variant.color_hex,
                    "isDefault": variant.is_default,
                    "sizes": [
                        {"_id": stored_id(size.id), "name": size.name, "stock": size.stock}
                        for size in variant.sizes
                    ],
                }
                for variant in product.variants
            ],
            "stock": product.stock,
            "sold": product.sold,
            "averageRating": product.average_rating,
            "createdAt": product.created_at,
            "updatedAt": _now(),
        }

    @staticmethod
    def _to_domain(doc: dict) -> Product:
        return Product(
            id=id_str(doc["_id"]),
            name=doc["name"],
            description=doc.get("description", ""),
            base_price=Money.of(doc["basePrice"]),
            main_category=doc.get("mainCategory", ""),
            categories=list(doc.get("categories", [])),
            brand=doc.get("brand"),
            discount_percentage=doc.get("discountPercentage", 0),
            discount_end_date=doc.get("discountEndDate"),
            variants=[
                Variant(
                    id=id_str(v["_id"]),
                    color=v["color"],
                    color_hex=v.get("colorHex"),
                    is_default=v.get("isDefault", False),
                    sizes=[
                        Size(id=id_str(s["_id"]), name=s["name"], stock=s.get("stock", 0))
                        for s in v.get("sizes", [])
                    ],
                )
                for v in doc.get("variants", [])
            ],
            stock=doc.get("stock", 0),
            sold=doc.get("sold", 0),
            average_rating=doc.get("averageRating", 0),
            created_at=doc.get("createdAt") or _now(),
        )


def _now() -> datetime:
    return datetime.now(timezone.utc)
