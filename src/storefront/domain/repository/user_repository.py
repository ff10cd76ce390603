"""Abstract repository for the User aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.user import Role, User


class UserRepository(ABC):

    @abstractmethod
    def get_by_id(self, user_id: str) -> User | None:
        """Return a user by ID, or None if not found."""

    @abstractmethod
    def get_by_phone(self, phone_number: str) -> User | None:
        """Return the user registered with this phone number, or None."""

    @abstractmethod
    def find_by_role(self, role: Role) -> list[User]:
        """Return every user holding ``role``."""

    @abstractmethod
    def search_by_phone(self, fragment: str) -> list[User]:
        """Users whose phone number contains ``fragment``, ignoring case."""

    @abstractmethod
    def save(self, user: User) -> None:
        """Persist a new or updated user.

        Raises ConflictError when the phone number is already taken.
        """

    @abstractmethod
    def delete(self, user_id: str) -> bool:
        """Remove a user. False if it did not exist."""

    @abstractmethod
    def add_order(self, user_id: str, order_id: str) -> bool:
        """Append an order back-link without rewriting the rest of the user.

        Returns False when the user does not exist.
        """
