"""Branch routes: listing, CRUD and staff roster."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query

from storefront.application.assign_staff import AssignStaffHandler, RemoveStaffHandler
from storefront.application.create_branch import CreateBranchHandler
from storefront.application.manage_branches import (
    DeleteBranchHandler,
    ListBranchesHandler,
    ShowBranchHandler,
    UpdateBranchHandler,
)
from storefront.infrastructure.api.deps import get_container
from storefront.infrastructure.api.schemas import (
    BranchIn,
    BranchOut,
    BranchUpdateIn,
    StaffIn,
    dump,
)
from storefront.infrastructure.bootstrap import Container

router = APIRouter(prefix="/branch", tags=["branch"])


@router.get("")
def list_branches(
    page_num: Optional[str] = Query(None, alias="pageNum"),
    page_size: Optional[str] = Query(None, alias="pageSize"),
    container: Container = Depends(get_container),
):
    result = ListBranchesHandler(container.branches).handle(page_num, page_size)
    return {
        "total": result.total,
        "totalPages": result.total_pages,
        "branches": [dump(BranchOut, b) for b in result.branches],
    }


@router.get("/{branch_id}")
def get_branch(branch_id: str, container: Container = Depends(get_container)):
    branch = ShowBranchHandler(container.branches).handle(branch_id)
    return {"data": dump(BranchOut, branch)}


@router.post("", status_code=201)
def create_branch(body: BranchIn, container: Container = Depends(get_container)):
    branch = CreateBranchHandler(container.branches).handle(
        name=body.name,
        address=body.address,
        location=body.location,
        phone_number=body.phone_number,
        opens=body.worktime.opens,
        closes=body.worktime.closes,
    )
    return {"message": "New Branch has been created successfully", "data": dump(BranchOut, branch)}


@router.put("/{branch_id}")
def update_branch(
    branch_id: str,
    body: BranchUpdateIn,
    container: Container = Depends(get_container),
):
    branch = UpdateBranchHandler(container.branches).handle(branch_id, body.to_changes())
    return {"message": "Branch updated successfully", "data": dump(BranchOut, branch)}


@router.delete("/{branch_id}")
def delete_branch(branch_id: str, container: Container = Depends(get_container)):
    DeleteBranchHandler(container.branches).handle(branch_id)
    return {"message": "Branch deleted successfully"}


@router.post("/{branch_id}/staff")
def add_staff(branch_id: str, body: StaffIn, container: Container = Depends(get_container)):
    branch = AssignStaffHandler(container.branches, container.users).handle(
        branch_id, body.user_id
    )
    return {"message": "Staff has been added successfully", "data": dump(BranchOut, branch)}


@router.delete("/{branch_id}/staff/{user_id}")
def remove_staff(branch_id: str, user_id: str, container: Container = Depends(get_container)):
    branch = RemoveStaffHandler(container.branches).handle(branch_id, user_id)
    return {"message": "Staff has been removed successfully", "data": dump(BranchOut, branch)}
