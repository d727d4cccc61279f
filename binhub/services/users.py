"""User administration endpoints.

Customers and suppliers live under /admin/users; admins under /admin.
"""

from binhub.infrastructure.api_client import ApiResult, MarketplaceApiClient


async def list_all(api: MarketplaceApiClient, token: str) -> ApiResult:
    return await api.get("/users", token=token)


async def list_by_role(api: MarketplaceApiClient, token: str, role: str) -> ApiResult:
    """role: customer | supplier. Response key: users."""
    return await api.get(f"/admin/users/{role}", token=token)


async def create_user(api: MarketplaceApiClient, token: str, role: str, payload: dict) -> ApiResult:
    return await api.post("/admin/users", token=token, json={**payload, "role": role})


async def update_user(api: MarketplaceApiClient, token: str, user_id: int, payload: dict) -> ApiResult:
    return await api.put(f"/admin/users/{user_id}", token=token, json=payload)


async def delete_user(api: MarketplaceApiClient, token: str, user_id: int) -> ApiResult:
    return await api.delete(f"/admin/users/{user_id}", token=token)


async def list_admins(api: MarketplaceApiClient, token: str) -> ApiResult:
    """Response key: admins."""
    return await api.get("/admin", token=token)


async def create_admin(api: MarketplaceApiClient, token: str, payload: dict) -> ApiResult:
    return await api.post("/admin", token=token, json=payload)


async def update_admin(api: MarketplaceApiClient, token: str, admin_id: int, payload: dict) -> ApiResult:
    return await api.put(f"/admin/{admin_id}", token=token, json=payload)


async def delete_admin(api: MarketplaceApiClient, token: str, admin_id: int) -> ApiResult:
    return await api.delete(f"/admin/{admin_id}", token=token)
