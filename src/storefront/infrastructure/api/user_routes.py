"""User routes: registration, lookups, update and delete."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query

from storefront.application.manage_users import (
    DeleteUserHandler,
    FindUsersHandler,
    ShowUserHandler,
    UpdateUserHandler,
)
from storefront.application.register_user import RegisterUserHandler
from storefront.infrastructure.api.deps import get_container
from storefront.infrastructure.api.schemas import UserIn, UserOut, UserUpdateIn, dump
from storefront.infrastructure.bootstrap import Container

router = APIRouter(prefix="/user", tags=["user"])


@router.post("", status_code=201)
def create_user(body: UserIn, container: Container = Depends(get_container)):
    handler = RegisterUserHandler(container.users, container.hash_password)
    user = handler.handle(
        phone_number=body.phone_number,
        first_name=body.first_name,
        last_name=body.last_name,
        password=body.password,
        role=body.role,
        avatar=body.avatar,
    )
    return {"data": dump(UserOut, user)}


@router.get("/role")
def users_by_role(role: Optional[str] = None, container: Container = Depends(get_container)):
    users = FindUsersHandler(container.users).by_role(role)
    return {"data": [dump(UserOut, u) for u in users]}


@router.get("/phone")
def users_by_phone(
    phone_number: Optional[str] = Query(None, alias="phoneNumber"),
    container: Container = Depends(get_container),
):
    users = FindUsersHandler(container.users).by_phone(phone_number)
    return {"data": [dump(UserOut, u) for u in users]}


@router.get("/{user_id}")
def get_user(user_id: str, container: Container = Depends(get_container)):
    return {"data": dump(UserOut, ShowUserHandler(container.users).handle(user_id))}


@router.put("/{user_id}")
def update_user(
    user_id: str,
    body: UserUpdateIn,
    container: Container = Depends(get_container),
):
    handler = UpdateUserHandler(container.users, container.hash_password)
    return {"data": dump(UserOut, handler.handle(user_id, body.to_changes()))}


@router.delete("/{user_id}")
def delete_user(user_id: str, container: Container = Depends(get_container)):
    DeleteUserHandler(container.users).handle(user_id)
    return {"message": "User deleted successfully"}
