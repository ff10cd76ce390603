"""Conversions between string IDs used by the domain and BSON ObjectIds."""

from __future__ import annotations

from bson import ObjectId


def to_object_id(raw: str | None) -> ObjectId | None:
    """Return the ObjectId for ``raw``, or None if it is not a valid one."""
    if raw is None or not ObjectId.is_valid(raw):
        return None
    return ObjectId(raw)


def stored_id(raw: str) -> ObjectId | str:
    """Store valid ObjectId strings as ObjectIds and anything else as is."""
    oid = to_object_id(raw)
    return oid if oid is not None else raw


def stored_ids(raw_ids: list[str]) -> list[ObjectId | str]:
    return [stored_id(raw) for raw in raw_ids]


def id_str(value: ObjectId | str) -> str:
    return str(value)
