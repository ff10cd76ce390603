"""Application service: Create Branch use case."""

from __future__ import annotations

from storefront.application.dto import BranchDTO, branch_to_dto
from storefront.domain.model.branch import Branch, WorkTime
from storefront.domain.repository.branch_repository import BranchRepository


class CreateBranchHandler:

    def __init__(self, branch_repo: BranchRepository) -> None:
        self._branch_repo = branch_repo

    def handle(
        self,
        name: str,
        address: str,
        location: str,
        phone_number: str,
        opens: str,
        closes: str,
    ) -> BranchDTO:
        branch = Branch.create(
            name=name,
            address=address,
            location=location,
            phone_number=phone_number,
            worktime=WorkTime(opens=opens, closes=closes),
        )
        self._branch_repo.save(branch)
        return branch_to_dto(branch)
