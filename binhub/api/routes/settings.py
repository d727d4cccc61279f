"""System Settings — grouped by category, edited one key at a time."""

import logging
from typing import Annotated

from fastapi import APIRouter, Form, Request

from binhub.api.deps import AdminUser, Api
from binhub.api.rendering import render
from binhub.api.routes.page_helpers import finish, records_or_toast
from binhub.core import summaries
from binhub.schemas.forms import SettingUpdateForm
from binhub.schemas.records import SystemSetting
from binhub.services import settings as settings_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/dashboard/settings", tags=["settings"])


@router.get("")
async def settings_page(request: Request, api: Api, user: AdminUser, edit: str | None = None):
    result = await settings_service.list_settings(api, user.token)
    settings = records_or_toast(
        request, result, SystemSetting, "settings", "Failed to fetch settings",
    )
    return render(
        request, "admin/settings.html",
        groups=summaries.group_settings(settings),
        editing=edit,
    )


@router.post("/{key}")
async def update_setting(
    request: Request,
    key: str,
    form: Annotated[SettingUpdateForm, Form()],
    api: Api,
    user: AdminUser,
):
    result = await settings_service.update_setting(
        api, user.token, key, form.to_payload(),
    )
    return finish(
        request, result, "Setting updated successfully",
        "Failed to update setting", "/dashboard/settings",
    )
