"""User Management — customers, suppliers and admins (list, create, edit, delete).

Invariants:
    - Customers/suppliers go through /admin/users (role in the create payload);
      admins through /admin
    - Edit sends name and email only; create requires a password of 6+ characters
    - An admin can never delete their own account
"""

import logging
from dataclasses import dataclass
from typing import Annotated

from fastapi import APIRouter, Form, HTTPException, Request, status

from binhub.api.deps import AdminUser, Api
from binhub.api.flash import push_error
from binhub.api.rendering import render
from binhub.api.routes.page_helpers import finish, records_or_toast, see_other
from binhub.core.domain_types import Role
from binhub.schemas.forms import UserCreateForm, UserUpdateForm
from binhub.schemas.records import User
from binhub.services import users as users_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/dashboard/users", tags=["users"])


@dataclass(frozen=True)
class UserGroup:
    slug: str
    role: str
    label: str      # singular, used in toasts
    title: str


GROUPS = {
    "customers": UserGroup("customers", Role.CUSTOMER.value, "Customer", "Customers"),
    "suppliers": UserGroup("suppliers", Role.SUPPLIER.value, "Supplier", "Suppliers"),
    "admins": UserGroup("admins", Role.ADMIN.value, "Admin", "Admins"),
}


def _group_or_404(slug: str) -> UserGroup:
    group = GROUPS.get(slug)
    if group is None:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail=f"Unknown user group '{slug}'")
    return group


def _url(group: UserGroup) -> str:
    return f"/dashboard/users/{group.slug}"


@router.get("")
async def users_index():
    return see_other("/dashboard/users/customers")


@router.get("/{slug}")
async def list_users(
    request: Request, slug: str, api: Api, user: AdminUser, edit: int | None = None,
):
    group = _group_or_404(slug)
    if group.role == Role.ADMIN.value:
        result = await users_service.list_admins(api, user.token)
        key = "admins"
    else:
        result = await users_service.list_by_role(api, user.token, group.role)
        key = "users"
    members = records_or_toast(
        request, result, User, key, f"Failed to fetch {group.title.lower()}",
    )
    editing = next((m for m in members if m.id == edit), None)
    return render(
        request, "admin/users.html",
        group=group, members=members, editing=editing, current_user_id=user.id,
    )


@router.post("/{slug}")
async def create_user(
    request: Request,
    slug: str,
    form: Annotated[UserCreateForm, Form()],
    api: Api,
    user: AdminUser,
):
    group = _group_or_404(slug)
    payload = form.to_payload()
    if group.role == Role.ADMIN.value:
        result = await users_service.create_admin(api, user.token, payload)
    else:
        result = await users_service.create_user(api, user.token, group.role, payload)
    return finish(
        request, result,
        f"{group.label} created successfully",
        f"Failed to create {group.label.lower()}",
        _url(group),
    )


@router.post("/{slug}/{user_id}/edit")
async def update_user(
    request: Request,
    slug: str,
    user_id: int,
    form: Annotated[UserUpdateForm, Form()],
    api: Api,
    user: AdminUser,
):
    group = _group_or_404(slug)
    payload = {"name": form.name, "email": form.email}
    if group.role == Role.ADMIN.value:
        result = await users_service.update_admin(api, user.token, user_id, payload)
    else:
        result = await users_service.update_user(api, user.token, user_id, payload)
    return finish(
        request, result,
        f"{group.label} updated successfully",
        f"Failed to update {group.label.lower()}",
        _url(group),
    )


@router.post("/{slug}/{user_id}/delete")
async def delete_user(
    request: Request, slug: str, user_id: int, api: Api, user: AdminUser,
):
    group = _group_or_404(slug)
    if group.role == Role.ADMIN.value:
        if user_id == user.id:
            push_error(request, "You cannot delete your own account")
            return see_other(_url(group))
        result = await users_service.delete_admin(api, user.token, user_id)
    else:
        result = await users_service.delete_user(api, user.token, user_id)
    return finish(
        request, result,
        f"{group.label} deleted successfully",
        f"Failed to delete {group.label.lower()}",
        _url(group),
    )
