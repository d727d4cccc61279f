"""Supplier wallet and payout endpoints.

Response keys: wallet, transactions, payouts, wallets, stats.
"""

from binhub.infrastructure.api_client import ApiResult, MarketplaceApiClient


async def my_wallet(api: MarketplaceApiClient, token: str) -> ApiResult:
    return await api.get("/wallet", token=token)


async def my_transactions(api: MarketplaceApiClient, token: str) -> ApiResult:
    return await api.get("/wallet/transactions", token=token)


async def my_payouts(api: MarketplaceApiClient, token: str) -> ApiResult:
    return await api.get("/wallet/payouts", token=token)


async def request_payout(api: MarketplaceApiClient, token: str, payload: dict) -> ApiResult:
    return await api.post("/wallet/payout", token=token, json=payload)


async def list_wallets(api: MarketplaceApiClient, token: str) -> ApiResult:
    return await api.get("/wallet/admin/wallets", token=token)


async def list_payouts(api: MarketplaceApiClient, token: str, status: str | None = None) -> ApiResult:
    if status == "all":
        status = None
    return await api.get("/wallet/admin/payouts", token=token, params={"status": status})


async def decide_payout(
    api: MarketplaceApiClient, token: str, payout_id: int, payload: dict,
) -> ApiResult:
    return await api.put(f"/wallet/admin/payouts/{payout_id}/status", token=token, json=payload)
