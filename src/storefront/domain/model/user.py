"""User aggregate: admins, staff members and clients."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from storefront.domain.exceptions import ValidationError


class Role(Enum):
    ADMIN = "admin"
    STAFF = "staff"
    CLIENT = "client"


@dataclass
class User:
    id: str | None
    phone_number: str
    first_name: str
    last_name: str
    password_hash: str
    role: Role = Role.CLIENT
    order_ids: list[str] = field(default_factory=list)
    avatar: str | None = None

    @staticmethod
    def create(
        phone_number: str,
        first_name: str,
        last_name: str,
        password_hash: str,
        role: Role,
        avatar: str | None = None,
    ) -> User:
        if not phone_number or not phone_number.strip():
            raise ValidationError("Phone number is required")
        if not first_name or not last_name:
            raise ValidationError("First and last name are required")
        return User(
            id=None,
            phone_number=phone_number.strip(),
            first_name=first_name.strip(),
            last_name=last_name.strip(),
            password_hash=password_hash,
            role=role,
            avatar=avatar,
        )
