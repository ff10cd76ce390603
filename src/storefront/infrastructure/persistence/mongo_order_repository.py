"""MongoDB-backed implementation of OrderRepository."""

from __future__ import annotations

from bson import ObjectId
from pymongo import ASCENDING
from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError

from storefront.domain.exceptions import ConflictError
from storefront.domain.model.order import (
    DeliveryDetails,
    Order,
    OrderStatus,
    OrderType,
    PickupDetails,
)
from storefront.domain.repository.order_repository import OrderRepository
from storefront.infrastructure.persistence.object_ids import (
    id_str,
    stored_id,
    stored_ids,
    to_object_id,
)


class MongoOrderRepository(OrderRepository):

    def __init__(self, collection: Collection) -> None:
        self._collection = collection

    def ensure_indexes(self) -> None:
        self._collection.create_index([("orderId", ASCENDING)], unique=True)

    # --- OrderRepository interface --------------------------------------------

    def get_by_id(self, order_id: str) -> Order | None:
        oid = to_object_id(order_id)
        if oid is None:
            return None
        doc = self._collection.find_one({"_id": oid})
        return self._to_domain(doc) if doc else None

    def get_by_order_id(self, order_number: int) -> Order | None:
        doc = self._collection.find_one({"orderId": order_number})
        return self._to_domain(doc) if doc else None

    def list_page(self, skip: int, limit: int) -> list[Order]:
        cursor = self._collection.find().sort("_id", ASCENDING).skip(skip).limit(limit)
        return [self._to_domain(doc) for doc in cursor]

    def count(self) -> int:
        return self._collection.count_documents({})

    def save(self, order: Order) -> None:
        if order.id is None:
            doc = self._to_document(order)
            doc["_id"] = ObjectId()
            try:
                self._collection.insert_one(doc)
            except DuplicateKeyError as exc:
                raise ConflictError(f"Order #{order.order_id} already exists") from exc
            order.id = id_str(doc["_id"])
            return

        doc = self._to_document(order)
        doc["_id"] = stored_id(order.id)
        try:
            self._collection.replace_one({"_id": doc["_id"]}, doc, upsert=True)
        except DuplicateKeyError as exc:
            raise ConflictError(f"Order #{order.order_id} already exists") from exc

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_document(order: Order) -> dict:
        doc = {
            "orderId": order.order_id,
            "customer": stored_id(order.customer_id),
            "products": stored_ids(order.product_ids),
            "status": order.status.value,
            "totalPrice": order.total_price,
            "amount": order.amount,
            "orderType": order.order_type.value,
            "orderDate": order.order_date,
        }
        if order.pickup_details is not None:
            doc["pickupDetails"] = {"storeId": stored_id(order.pickup_details.store_id)}
        if order.delivery_details is not None:
            details = order.delivery_details
            doc["deliveryDetails"] = {
                "address": details.address,
                "city": details.city,
                "phoneNumber": details.phone_number,
                "postalCode": details.postal_code,
            }
        return doc

    @staticmethod
    def _to_domain(doc: dict) -> Order:
        pickup = None
        if doc.get("pickupDetails", {}).get("storeId") is not None:
            pickup = PickupDetails(store_id=id_str(doc["pickupDetails"]["storeId"]))
        delivery = None
        if doc.get("deliveryDetails", {}).get("address") is not None:
            raw = doc["deliveryDetails"]
            delivery = DeliveryDetails(
                address=raw["address"],
                city=raw["city"],
                phone_number=raw["phoneNumber"],
                postal_code=raw.get("postalCode"),
            )
        return Order(
            id=id_str(doc["_id"]),
            order_id=doc["orderId"],
            customer_id=id_str(doc["customer"]),
            product_ids=[id_str(p) for p in doc.get("products", [])],
            total_price=doc["totalPrice"],
            amount=doc.get("amount", 1),
            order_type=OrderType(doc["orderType"]),
            status=OrderStatus(doc.get("status", OrderStatus.PENDING.value)),
            pickup_details=pickup,
            delivery_details=delivery,
            order_date=doc["orderDate"],
        )
