"""Invoices, bills and transactions.

Response keys: invoices/invoice, bills/bill, transactions, stats.
"""

from binhub.infrastructure.api_client import ApiResult, MarketplaceApiClient


def _filter(value: str | None) -> str | None:
    return None if value in (None, "", "all") else value


async def list_invoices(
    api: MarketplaceApiClient,
    token: str,
    payment_status: str | None = None,
    payment_method: str | None = None,
) -> ApiResult:
    return await api.get(
        "/invoices", token=token,
        params={
            "payment_status": _filter(payment_status),
            "payment_method": _filter(payment_method),
        },
    )


async def get_invoice(api: MarketplaceApiClient, token: str, invoice_id: str) -> ApiResult:
    return await api.get(f"/invoices/by-invoice/{invoice_id}", token=token)


async def list_bills(
    api: MarketplaceApiClient, token: str, payment_status: str | None = None,
) -> ApiResult:
    return await api.get(
        "/bills", token=token, params={"payment_status": _filter(payment_status)},
    )


async def get_bill(api: MarketplaceApiClient, token: str, bill_id: str) -> ApiResult:
    return await api.get(f"/bills/by-bill-id/{bill_id}", token=token)


async def list_transactions(
    api: MarketplaceApiClient, token: str, payment_status: str | None = None,
) -> ApiResult:
    return await api.get(
        "/transactions", token=token,
        params={"payment_status": _filter(payment_status)},
    )


async def transaction_stats(api: MarketplaceApiClient, token: str) -> ApiResult:
    return await api.get("/transactions/stats", token=token)


async def my_payments(api: MarketplaceApiClient, token: str) -> ApiResult:
    return await api.get(
        "/transactions/my", token=token, params={"transaction_type": "payment"},
    )
