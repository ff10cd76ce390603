"""Application services: list, show, update and delete branches."""

from __future__ import annotations

import logging
from dataclasses import replace

from storefront.application.dto import (
    BranchChanges,
    BranchDTO,
    BranchPageDTO,
    branch_to_dto,
)
from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from storefront.domain.repository.branch_repository import BranchRepository
from storefront.domain.service.catalog_query import page_count, parse_pagination

logger = logging.getLogger(__name__)

BRANCH_NOT_FOUND = "Branch not found"


class ListBranchesHandler:

    def __init__(self, branch_repo: BranchRepository) -> None:
        self._branch_repo = branch_repo

    def handle(
        self,
        page: str | int | None = None,
        page_size: str | int | None = None,
    ) -> BranchPageDTO:
        page_num, size = parse_pagination(page, page_size)
        branches = self._branch_repo.list_page(skip=(page_num - 1) * size, limit=size)
        total = self._branch_repo.count()
        return BranchPageDTO(
            total=total,
            total_pages=page_count(total, size),
            branches=[branch_to_dto(b) for b in branches],
        )


class ShowBranchHandler:

    def __init__(self, branch_repo: BranchRepository) -> None:
        self._branch_repo = branch_repo

    def handle(self, branch_id: str) -> BranchDTO:
        branch = self._branch_repo.get_by_id(branch_id)
        if branch is None:
            raise EntityNotFoundError(BRANCH_NOT_FOUND)
        return branch_to_dto(branch)


class UpdateBranchHandler:

    def __init__(self, branch_repo: BranchRepository) -> None:
        self._branch_repo = branch_repo

    def handle(self, branch_id: str, changes: BranchChanges) -> BranchDTO:
        """Overwrite the fields that were given; a given field may not be blank.

        Staff roster and order links are left alone.
        """
        branch = self._branch_repo.get_by_id(branch_id)
        if branch is None:
            raise EntityNotFoundError(BRANCH_NOT_FOUND)

        given = {
            name: value for name, value in vars(changes).items() if value is not None
        }
        if any(not str(value).strip() for value in given.values()):
            raise ValidationError("Fields should be filled")

        for name in ("name", "address", "location", "phone_number"):
            if name in given:
                setattr(branch, name, given[name].strip())
        if "opens" in given:
            branch.worktime = replace(branch.worktime, opens=given["opens"].strip())
        if "closes" in given:
            branch.worktime = replace(branch.worktime, closes=given["closes"].strip())

        self._branch_repo.save(branch)
        return branch_to_dto(branch)


class DeleteBranchHandler:

    def __init__(self, branch_repo: BranchRepository) -> None:
        self._branch_repo = branch_repo

    def handle(self, branch_id: str) -> None:
        if not self._branch_repo.delete(branch_id):
            raise EntityNotFoundError(BRANCH_NOT_FOUND)
        logger.info("Branch %s deleted", branch_id)
