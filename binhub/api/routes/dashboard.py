"""Admin Dashboard — landing page; customers and suppliers are sent to their mobile homes."""

import logging

from fastapi import APIRouter, Request

from binhub.api.deps import Api, AnyUser, home_url
from binhub.api.rendering import render
from binhub.api.routes.page_helpers import records_or_toast, see_other
from binhub.core.domain_types import Role
from binhub.schemas.records import User
from binhub.services import users as users_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("")
async def dashboard(request: Request, api: Api, user: AnyUser):
    if user.role != Role.ADMIN.value:
        return see_other(home_url(user.role))
    result = await users_service.list_all(api, user.token)
    users = records_or_toast(request, result, User, "users", "Failed to load stats")
    return render(request, "admin/dashboard.html", total_users=len(users))
