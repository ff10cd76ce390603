"""Application service: Register User use case.

Password hashing is delegated to whatever hasher the caller injects;
this handler only guarantees the plain password is never stored.
"""

from __future__ import annotations

from typing import Callable

from storefront.application.dto import UserDTO, user_to_dto
from storefront.domain.exceptions import ConflictError, ValidationError
from storefront.domain.model.user import Role, User
from storefront.domain.repository.user_repository import UserRepository

PHONE_EXISTS = (
    "A user with this phone number already exists. "
    "Please use a different number."
)


class RegisterUserHandler:

    def __init__(
        self,
        user_repo: UserRepository,
        hash_password: Callable[[str], str],
    ) -> None:
        self._user_repo = user_repo
        self._hash_password = hash_password

    def handle(
        self,
        phone_number: str,
        first_name: str,
        last_name: str,
        password: str,
        role: str = Role.CLIENT.value,
        avatar: str | None = None,
    ) -> UserDTO:
        if not password:
            raise ValidationError("Password is required")
        try:
            parsed_role = Role(role)
        except ValueError:
            raise ValidationError(f"Unknown role: {role!r}")

        if self._user_repo.get_by_phone(phone_number.strip()) is not None:
            raise ConflictError(PHONE_EXISTS)

        user = User.create(
            phone_number=phone_number,
            first_name=first_name,
            last_name=last_name,
            password_hash=self._hash_password(password),
            role=parsed_role,
            avatar=avatar,
        )
        self._user_repo.save(user)
        return user_to_dto(user)
