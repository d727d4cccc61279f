"""Quote endpoints. Response key: quotes."""

from binhub.infrastructure.api_client import ApiResult, MarketplaceApiClient


async def list_all(api: MarketplaceApiClient, token: str, status: str | None = None) -> ApiResult:
    if status == "all":
        status = None
    return await api.get("/quotes/admin/all", token=token, params={"status": status})


async def for_request(api: MarketplaceApiClient, token: str, request_id: str) -> ApiResult:
    """request_id is the public request code (REQ-...)."""
    return await api.get(f"/quotes/request/{request_id}", token=token)


async def submit(api: MarketplaceApiClient, token: str, payload: dict) -> ApiResult:
    return await api.post("/quotes", token=token, json=payload)


async def accept(api: MarketplaceApiClient, token: str, quote_id: int) -> ApiResult:
    return await api.post(f"/quotes/{quote_id}/accept", token=token)
