"""Application services: assign staff to and remove staff from a branch.

A staff member works at one branch at a time; assigning someone who is
already on another branch's roster is a conflict.
"""

from __future__ import annotations

import logging

from storefront.application.dto import BranchDTO, branch_to_dto
from storefront.domain.exceptions import (
    ConflictError,
    EntityNotFoundError,
    ValidationError,
)
from storefront.domain.model.user import Role
from storefront.domain.repository.branch_repository import BranchRepository
from storefront.domain.repository.user_repository import UserRepository

logger = logging.getLogger(__name__)


class AssignStaffHandler:

    def __init__(
        self,
        branch_repo: BranchRepository,
        user_repo: UserRepository,
    ) -> None:
        self._branch_repo = branch_repo
        self._user_repo = user_repo

    def handle(self, branch_id: str, user_id: str) -> BranchDTO:
        branch = self._branch_repo.get_by_id(branch_id)
        if branch is None:
            raise EntityNotFoundError("Branch not found")

        user = self._user_repo.get_by_id(user_id)
        if user is None:
            raise EntityNotFoundError("User not found")
        if user.role != Role.STAFF:
            raise ValidationError("Only staff members can be assigned to a branch")

        current = self._branch_repo.find_by_staff(user_id)
        if current is not None and current.id != branch.id:
            raise ConflictError("The user is already assigned to another branch")

        branch.add_staff(user_id)
        self._branch_repo.save(branch)
        logger.info("Staff %s assigned to branch %s", user_id, branch.id)
        return branch_to_dto(branch)


class RemoveStaffHandler:

    def __init__(self, branch_repo: BranchRepository) -> None:
        self._branch_repo = branch_repo

    def handle(self, branch_id: str, user_id: str) -> BranchDTO:
        branch = self._branch_repo.get_by_id(branch_id)
        if branch is None:
            raise EntityNotFoundError("Branch not found")

        branch.remove_staff(user_id)
        self._branch_repo.save(branch)
        return branch_to_dto(branch)
