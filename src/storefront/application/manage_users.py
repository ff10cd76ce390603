"""Application services: look up, update and delete users.

None of these ever hand out a password hash; a replacement password is
hashed by the injected hasher before it reaches the repository.
"""

from __future__ import annotations

import logging
from typing import Callable

from storefront.application.dto import UserChanges, UserDTO, user_to_dto
from storefront.application.register_user import PHONE_EXISTS
from storefront.domain.exceptions import (
    ConflictError,
    EntityNotFoundError,
    ValidationError,
)
from storefront.domain.model.user import Role
from storefront.domain.repository.user_repository import UserRepository

logger = logging.getLogger(__name__)

USER_NOT_FOUND = "User not found"


class FindUsersHandler:

    def __init__(self, user_repo: UserRepository) -> None:
        self._user_repo = user_repo

    def by_role(self, role: str | None) -> list[UserDTO]:
        if not role:
            raise ValidationError("Role is required")
        try:
            parsed = Role(role)
        except ValueError:
            raise ValidationError(f"Unknown role: {role!r}")
        return [user_to_dto(u) for u in self._user_repo.find_by_role(parsed)]

    def by_phone(self, fragment: str | None) -> list[UserDTO]:
        """Users whose phone number contains ``fragment``.

        Raises EntityNotFoundError rather than returning an empty list.
        """
        if not fragment or not fragment.strip():
            raise ValidationError("Phone number is required")
        users = self._user_repo.search_by_phone(fragment.strip())
        if not users:
            raise EntityNotFoundError(USER_NOT_FOUND)
        return [user_to_dto(u) for u in users]


class ShowUserHandler:

    def __init__(self, user_repo: UserRepository) -> None:
        self._user_repo = user_repo

    def handle(self, user_id: str) -> UserDTO:
        user = self._user_repo.get_by_id(user_id)
        if user is None:
            raise EntityNotFoundError(USER_NOT_FOUND)
        return user_to_dto(user)


class UpdateUserHandler:

    def __init__(
        self,
        user_repo: UserRepository,
        hash_password: Callable[[str], str],
    ) -> None:
        self._user_repo = user_repo
        self._hash_password = hash_password

    def handle(self, user_id: str, changes: UserChanges) -> UserDTO:
        """Apply the given fields; nothing is touched unless all of them pass."""
        user = self._user_repo.get_by_id(user_id)
        if user is None:
            raise EntityNotFoundError(USER_NOT_FOUND)

        role = user.role
        if changes.role is not None:
            try:
                role = Role(changes.role)
            except ValueError:
                raise ValidationError(f"Unknown role: {changes.role!r}")
        for name in (changes.first_name, changes.last_name):
            if name is not None and not name.strip():
                raise ValidationError("First and last name are required")

        phone = user.phone_number
        if changes.phone_number is not None:
            phone = changes.phone_number.strip()
            if not phone:
                raise ValidationError("Phone number is required")
            holder = self._user_repo.get_by_phone(phone)
            if holder is not None and holder.id != user.id:
                raise ConflictError(PHONE_EXISTS)

        user.phone_number = phone
        user.role = role
        if changes.first_name is not None:
            user.first_name = changes.first_name.strip()
        if changes.last_name is not None:
            user.last_name = changes.last_name.strip()
        if changes.password:
            user.password_hash = self._hash_password(changes.password)

        self._user_repo.save(user)
        return user_to_dto(user)


class DeleteUserHandler:

    def __init__(self, user_repo: UserRepository) -> None:
        self._user_repo = user_repo

    def handle(self, user_id: str) -> None:
        if not self._user_repo.delete(user_id):
            raise EntityNotFoundError(USER_NOT_FOUND)
        logger.info("User %s deleted", user_id)
