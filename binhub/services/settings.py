"""System settings endpoints. Response key: settings."""

from binhub.infrastructure.api_client import ApiResult, MarketplaceApiClient


async def list_settings(api: MarketplaceApiClient, token: str) -> ApiResult:
    return await api.get("/settings", token=token)


async def update_setting(api: MarketplaceApiClient, token: str, key: str, payload: dict) -> ApiResult:
    return await api.put(f"/settings/{key}", token=token, json=payload)
