"""Abstract repository for the Branch aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.branch import Branch


class BranchRepository(ABC):

    @abstractmethod
    def get_by_id(self, branch_id: str) -> Branch | None:
        """Return a branch by ID, or None if not found."""

    @abstractmethod
    def find_by_staff(self, user_id: str) -> Branch | None:
        """Return the branch employing this user, if any."""

    @abstractmethod
    def list_page(self, skip: int, limit: int) -> list[Branch]:
        """Return a slice of all branches."""

    @abstractmethod
    def count(self) -> int:
        """Return the number of stored branches."""

    @abstractmethod
    def save(self, branch: Branch) -> None:
        """Persist a new or updated branch."""

    @abstractmethod
    def delete(self, branch_id: str) -> bool:
        """Remove a branch. False if it did not exist."""

    @abstractmethod
    def add_order(self, branch_id: str, order_id: str) -> bool:
        """Append a pickup order back-link. False when the branch is missing."""
