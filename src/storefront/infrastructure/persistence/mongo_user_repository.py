"""MongoDB-backed implementation of UserRepository."""

from __future__ import annotations

import re

from bson import ObjectId
from pymongo import ASCENDING
from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError

from storefront.domain.exceptions import ConflictError
from storefront.domain.model.user import Role, User
from storefront.domain.repository.user_repository import UserRepository
from storefront.infrastructure.persistence.object_ids import (
    id_str,
    stored_id,
    stored_ids,
    to_object_id,
)


class MongoUserRepository(UserRepository):

    def __init__(self, collection: Collection) -> None:
        self._collection = collection

    def ensure_indexes(self) -> None:
        self._collection.create_index([("phoneNumber", ASCENDING)], unique=True)

    # --- UserRepository interface ---------------------------------------------

    def get_by_id(self, user_id: str) -> User | None:
        oid = to_object_id(user_id)
        if oid is None:
            return None
        doc = self._collection.find_one({"_id": oid})
        return self._to_domain(doc) if doc else None

    def get_by_phone(self, phone_number: str) -> User | None:
        doc = self._collection.find_one({"phoneNumber": phone_number})
        return self._to_domain(doc) if doc else None

    def find_by_role(self, role: Role) -> list[User]:
        return [self._to_domain(doc) for doc in self._collection.find({"role": role.value})]

    def search_by_phone(self, fragment: str) -> list[User]:
        pattern = {"$regex": re.escape(fragment), "$options": "i"}
        return [self._to_domain(doc) for doc in self._collection.find({"phoneNumber": pattern})]

    def save(self, user: User) -> None:
        if user.id is None:
            user.id = str(ObjectId())
        doc = self._to_document(user)
        oid = doc.pop("_id")
        # Order links are only ever appended through add_order.
        orders = doc.pop("orders")
        try:
            self._collection.update_one(
                {"_id": oid},
                {"$set": doc, "$setOnInsert": {"orders": orders}},
                upsert=True,
            )
        except DuplicateKeyError as exc:
            raise ConflictError(
                f"Phone number {user.phone_number} is already registered"
            ) from exc

    def delete(self, user_id: str) -> bool:
        oid = to_object_id(user_id)
        if oid is None:
            return False
        return self._collection.delete_one({"_id": oid}).deleted_count == 1

    def add_order(self, user_id: str, order_id: str) -> bool:
        oid = to_object_id(user_id)
        if oid is None:
            return False
        result = self._collection.update_one(
            {"_id": oid}, {"$push": {"orders": stored_id(order_id)}}
        )
        return result.matched_count == 1

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_document(user: User) -> dict:
        return {
            "_id": stored_id(user.id),  # type: ignore[arg-type]
            "phoneNumber": user.phone_number,
            "firstName": user.first_name,
            "lastName": user.last_name,
            "password": user.password_hash,
            "role": user.role.value,
            "orders": stored_ids(user.order_ids),
            "avatar": user.avatar,
        }

    @staticmethod
    def _to_domain(doc: dict) -> User:
        return User(
            id=id_str(doc["_id"]),
            phone_number=doc["phoneNumber"],
            first_name=doc["firstName"],
            last_name=doc["lastName"],
            password_hash=doc["password"],
            role=Role(doc["role"]),
            order_ids=[id_str(o) for o in doc.get("orders", [])],
            avatar=doc.get("avatar"),
        )
