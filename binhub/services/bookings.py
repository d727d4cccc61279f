"""Service request (booking) endpoints.

Response keys: requests, request, orderItems.
"""

from binhub.infrastructure.api_client import ApiResult, MarketplaceApiClient


def _status_param(status: str | None) -> dict:
    return {"status": None if status in (None, "", "all") else status}


async def list_all(api: MarketplaceApiClient, token: str, status: str | None = None) -> ApiResult:
    return await api.get("/bookings/admin/all", token=token, params=_status_param(status))


async def list_mine(api: MarketplaceApiClient, token: str) -> ApiResult:
    return await api.get("/bookings/my-requests", token=token)


async def list_supplier(
    api: MarketplaceApiClient, token: str, status: str | None = None,
) -> ApiResult:
    return await api.get(
        "/bookings/supplier/requests", token=token, params=_status_param(status),
    )


async def list_supplier_pending(api: MarketplaceApiClient, token: str) -> ApiResult:
    return await api.get("/bookings/supplier/pending", token=token)


async def get_request(api: MarketplaceApiClient, token: str, request_id: int | str) -> ApiResult:
    return await api.get(f"/bookings/{request_id}", token=token)


async def order_items(api: MarketplaceApiClient, token: str, request_id: int) -> ApiResult:
    return await api.get(f"/bookings/{request_id}/order-items", token=token)


async def create(api: MarketplaceApiClient, token: str, payload: dict) -> ApiResult:
    return await api.post("/bookings", token=token, json=payload)


async def accept(api: MarketplaceApiClient, token: str, request_id: int) -> ApiResult:
    return await api.post(f"/bookings/{request_id}/accept", token=token)


async def update_status(
    api: MarketplaceApiClient,
    token: str,
    request_id: int,
    status: str,
    bin_codes: list[str] | None = None,
) -> ApiResult:
    payload: dict = {"status": status}
    if bin_codes is not None:
        payload["bin_codes"] = bin_codes
    return await api.put(f"/bookings/{request_id}/status", token=token, json=payload)
