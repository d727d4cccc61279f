"""Bin catalogue (types, sizes) and physical inventory endpoints.

Response keys: binTypes, binSizes, bins (top level for /bins/physical).
"""

from binhub.infrastructure.api_client import ApiResult, MarketplaceApiClient


def _inactive_flag(include_inactive: bool) -> str | None:
    return "true" if include_inactive else None


async def list_types(
    api: MarketplaceApiClient, token: str, include_inactive: bool = False,
) -> ApiResult:
    return await api.get(
        "/bins/types", token=token,
        params={"includeInactive": _inactive_flag(include_inactive)},
    )


async def create_type(api: MarketplaceApiClient, token: str, payload: dict) -> ApiResult:
    return await api.post("/bins/types", token=token, json=payload)


async def update_type(api: MarketplaceApiClient, token: str, type_id: int, payload: dict) -> ApiResult:
    return await api.put(f"/bins/types/{type_id}", token=token, json=payload)


async def delete_type(api: MarketplaceApiClient, token: str, type_id: int) -> ApiResult:
    return await api.delete(f"/bins/types/{type_id}", token=token)


async def list_sizes(
    api: MarketplaceApiClient,
    token: str,
    bin_type_id: int | None = None,
    include_inactive: bool = False,
) -> ApiResult:
    return await api.get(
        "/bins/sizes", token=token,
        params={
            "binTypeId": bin_type_id,
            "includeInactive": _inactive_flag(include_inactive),
        },
    )


async def create_size(api: MarketplaceApiClient, token: str, payload: dict) -> ApiResult:
    return await api.post("/bins/sizes", token=token, json=payload)


async def update_size(api: MarketplaceApiClient, token: str, size_id: int, payload: dict) -> ApiResult:
    return await api.put(f"/bins/sizes/{size_id}", token=token, json=payload)


async def delete_size(api: MarketplaceApiClient, token: str, size_id: int) -> ApiResult:
    return await api.delete(f"/bins/sizes/{size_id}", token=token)


async def list_physical(
    api: MarketplaceApiClient,
    token: str,
    status: str | None = None,
    supplier_id: int | None = None,
) -> ApiResult:
    if status == "all":
        status = None
    return await api.get(
        "/bins/physical", token=token,
        params={"status": status, "supplier_id": supplier_id},
    )


async def create_physical(api: MarketplaceApiClient, token: str, payload: dict) -> ApiResult:
    return await api.post("/bins/physical", token=token, json=payload)


async def update_physical_status(
    api: MarketplaceApiClient, token: str, bin_id: int, status: str,
) -> ApiResult:
    return await api.put(f"/bins/physical/{bin_id}", token=token, json={"status": status})


async def assign_physical(
    api: MarketplaceApiClient, token: str, bin_id: int, supplier_id: int | None,
) -> ApiResult:
    return await api.put(
        f"/bins/physical/{bin_id}/assign", token=token, json={"supplier_id": supplier_id},
    )
