"""Branch aggregate.

A branch is a physical store. It keeps references to the staff members
working there and to the pickup orders addressed to it.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from storefront.domain.exceptions import (
    ConflictError,
    EntityNotFoundError,
    ValidationError,
)


@dataclass(frozen=True)
class WorkTime:
    opens: str
    closes: str


@dataclass
class Branch:
    id: str | None
    name: str
    address: str
    location: str
    phone_number: str
    worktime: WorkTime
    staff_ids: list[str] = field(default_factory=list)
    order_ids: list[str] = field(default_factory=list)

    @staticmethod
    def create(
        name: str,
        address: str,
        location: str,
        phone_number: str,
        worktime: WorkTime,
    ) -> Branch:
        if not address or not worktime.opens or not worktime.closes:
            raise ValidationError("Fields should be filled")
        if not name or not location or not phone_number:
            raise ValidationError("Fields should be filled")
        return Branch(
            id=None,
            name=name,
            address=address,
            location=location,
            phone_number=phone_number,
            worktime=worktime,
        )

    def has_staff(self, user_id: str) -> bool:
        return user_id in self.staff_ids

    def add_staff(self, user_id: str) -> None:
        if self.has_staff(user_id):
            raise ConflictError("The user has already been added to this branch")
        self.staff_ids.append(user_id)

    def remove_staff(self, user_id: str) -> None:
        if not self.has_staff(user_id):
            raise EntityNotFoundError("Staff not found")
        self.staff_ids.remove(user_id)
