"""Request Dependencies — API client, push hub, signed-in user, role guards.

Invariants:
    - The session holds the API token and a cached user dict; nothing else about identity
    - A session with a token but no cached user is restored from GET /auth/me
    - require_role() raises RoleForbiddenError, never renders a page for the wrong role
"""

import logging
from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Request

from binhub.config import Settings
from binhub.core.domain_types import Role
from binhub.core.errors import NotAuthenticatedError, RoleForbiddenError
from binhub.infrastructure.api_client import MarketplaceApiClient
from binhub.infrastructure.push_listener import NotificationHub
from binhub.schemas.records import User, parse_record
from binhub.services import auth as auth_service

logger = logging.getLogger(__name__)

TOKEN_KEY = "token"
USER_KEY = "user"

HOME_URLS = {
    Role.ADMIN.value: "/dashboard",
    Role.CUSTOMER.value: "/mobile/customer/dashboard",
    Role.SUPPLIER.value: "/mobile/supplier/dashboard",
}


@dataclass(frozen=True)
class CurrentUser:
    token: str
    user: User

    @property
    def role(self) -> str:
        return self.user.role

    @property
    def id(self) -> int:
        return self.user.id


def home_url(role: str | None) -> str:
    return HOME_URLS.get(role or "", "/login")


def get_api_client(request: Request) -> MarketplaceApiClient:
    return request.app.state.api_client


def get_push_hub(request: Request) -> NotificationHub:
    return request.app.state.push_hub


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def sign_in(request: Request, token: str, user: dict):
    request.session[TOKEN_KEY] = token
    request.session[USER_KEY] = user


def sign_out(request: Request):
    request.session.pop(TOKEN_KEY, None)
    request.session.pop(USER_KEY, None)


def session_user(request: Request) -> User | None:
    """Cached user from the session without touching the API."""
    if not request.session.get(TOKEN_KEY):
        return None
    return parse_record(User, request.session.get(USER_KEY))


async def current_user(
    request: Request,
    api: Annotated[MarketplaceApiClient, Depends(get_api_client)],
) -> CurrentUser:
    token = request.session.get(TOKEN_KEY)
    if not token:
        raise NotAuthenticatedError()
    user = parse_record(User, request.session.get(USER_KEY))
    if user is None:
        result = await auth_service.me(api, token)
        user = parse_record(User, result.get("user")) if result.success else None
        if user is None:
            sign_out(request)
            raise NotAuthenticatedError()
        request.session[USER_KEY] = user.model_dump(mode="json")
        logger.info("Restored session user from API", extra={"role": user.role})
    return CurrentUser(token=token, user=user)


def require_role(*roles: str):
    """Dependency factory: the signed-in user must have one of roles."""

    async def guard(
        user: Annotated[CurrentUser, Depends(current_user)],
    ) -> CurrentUser:
        if user.role not in roles:
            raise RoleForbiddenError(user.role, tuple(roles))
        return user

    return guard


Api = Annotated[MarketplaceApiClient, Depends(get_api_client)]
Hub = Annotated[NotificationHub, Depends(get_push_hub)]
AppSettings = Annotated[Settings, Depends(get_app_settings)]
AnyUser = Annotated[CurrentUser, Depends(current_user)]
AdminUser = Annotated[CurrentUser, Depends(require_role(Role.ADMIN.value))]
CustomerUser = Annotated[CurrentUser, Depends(require_role(Role.CUSTOMER.value))]
SupplierUser = Annotated[CurrentUser, Depends(require_role(Role.SUPPLIER.value))]
