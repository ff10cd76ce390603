"""MongoDB-backed implementation of BranchRepository."""

from __future__ import annotations

from bson import ObjectId
from pymongo import ASCENDING
from pymongo.collection import Collection

from storefront.domain.model.branch import Branch, WorkTime
from storefront.domain.repository.branch_repository import BranchRepository
from storefront.infrastructure.persistence.object_ids import (
    id_str,
    stored_id,
    stored_ids,
    to_object_id,
)


class MongoBranchRepository(BranchRepository):

    def __init__(self, collection: Collection) -> None:
        self._collection = collection

    # --- BranchRepository interface -------------------------------------------

    def get_by_id(self, branch_id: str) -> Branch | None:
        oid = to_object_id(branch_id)
        if oid is None:
            return None
        doc = self._collection.find_one({"_id": oid})
        return self._to_domain(doc) if doc else None

    def find_by_staff(self, user_id: str) -> Branch | None:
        doc = self._collection.find_one({"staffs": stored_id(user_id)})
        return self._to_domain(doc) if doc else None

    def list_page(self, skip: int, limit: int) -> list[Branch]:
        cursor = self._collection.find().sort("_id", ASCENDING).skip(skip).limit(limit)
        return [self._to_domain(doc) for doc in cursor]

    def count(self) -> int:
        return self._collection.count_documents({})

    def save(self, branch: Branch) -> None:
        if branch.id is None:
            branch.id = str(ObjectId())
        doc = self._to_document(branch)
        oid = doc.pop("_id")
        # Order links are only ever appended through add_order.
        orders = doc.pop("orders")
        self._collection.update_one(
            {"_id": oid},
            {"$set": doc, "$setOnInsert": {"orders": orders}},
            upsert=True,
        )

    def delete(self, branch_id: str) -> bool:
        oid = to_object_id(branch_id)
        if oid is None:
            return False
        return self._collection.delete_one({"_id": oid}).deleted_count == 1

    def add_order(self, branch_id: str, order_id: str) -> bool:
        oid = to_object_id(branch_id)
        if oid is None:
            return False
        result = self._collection.update_one(
            {"_id": oid}, {"$push": {"orders": stored_id(order_id)}}
        )
        return result.matched_count == 1

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_document(branch: Branch) -> dict:
        return {
            "_id": stored_id(branch.id),  # type: ignore[arg-type]
            "name": branch.name,
            "address": branch.address,
            "location": branch.location,
            "phoneNumber": branch.phone_number,
            "worktime": {"from": branch.worktime.opens, "to": branch.worktime.closes},
            "staffs": stored_ids(branch.staff_ids),
            "orders": stored_ids(branch.order_ids),
        }

    @staticmethod
    def _to_domain(doc: dict) -> Branch:
        return Branch(
            id=id_str(doc["_id"]),
            name=doc.get("name", ""),
            address=doc["address"],
            location=doc.get("location", ""),
            phone_number=doc.get("phoneNumber", ""),
            worktime=WorkTime(
                opens=doc["worktime"]["from"],
                closes=doc["worktime"]["to"],
            ),
            staff_ids=[id_str(s) for s in doc.get("staffs", [])],
            order_ids=[id_str(o) for o in doc.get("orders", [])],
        )
