"""Invoices, Bills & Transactions — admin financial lists.

Invariants:
    - A by-id lookup that fails shows "<Invoice|Bill> not found" and still renders the list
    - Transaction stats failing to load never blocks the transaction list
"""

import asyncio
import logging

from fastapi import APIRouter, Request

from binhub.api.deps import AdminUser, Api
from binhub.api.flash import push_error
from binhub.api.rendering import render
from binhub.api.routes.page_helpers import record_from, records_or_toast
from binhub.core import status_flow
from binhub.schemas.records import Bill, Invoice, Transaction, TransactionStats
from binhub.services import billing as billing_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/dashboard", tags=["billing"])


@router.get("/invoices")
async def invoices_page(
    request: Request,
    api: Api,
    user: AdminUser,
    payment_status: str = "all",
    payment_method: str = "all",
    invoice_id: str | None = None,
):
    result = await billing_service.list_invoices(
        api, user.token, payment_status, payment_method,
    )
    invoices = records_or_toast(request, result, Invoice, "invoices", "Failed to fetch invoices")
    selected = None
    if invoice_id:
        selected = record_from(
            await billing_service.get_invoice(api, user.token, invoice_id),
            Invoice, "invoice",
        )
        if selected is None:
            push_error(request, "Invoice not found")
    return render(
        request, "admin/invoices.html",
        invoices=invoices,
        selected=selected,
        payment_status=payment_status,
        payment_method=payment_method,
        status_filters=status_flow.PAYMENT_STATUS_FILTERS,
        method_filters=status_flow.PAYMENT_METHOD_FILTERS,
    )


@router.get("/bills")
async def bills_page(
    request: Request,
    api: Api,
    user: AdminUser,
    payment_status: str = "all",
    bill_id: str | None = None,
):
    result = await billing_service.list_bills(api, user.token, payment_status)
    bills = records_or_toast(request, result, Bill, "bills", "Failed to fetch bills")
    selected = None
    if bill_id:
        selected = record_from(
            await billing_service.get_bill(api, user.token, bill_id), Bill, "bill",
        )
        if selected is None:
            push_error(request, "Bill not found")
    return render(
        request, "admin/bills.html",
        bills=bills,
        selected=selected,
        payment_status=payment_status,
        status_filters=status_flow.PAYMENT_STATUS_FILTERS,
    )


@router.get("/transactions")
async def transactions_page(
    request: Request, api: Api, user: AdminUser, payment_status: str = "all",
):
    tx_res, stats_res = await asyncio.gather(
        billing_service.list_transactions(api, user.token, payment_status),
        billing_service.transaction_stats(api, user.token),
    )
    transactions = records_or_toast(
        request, tx_res, Transaction, "transactions", "Failed to fetch transactions",
    )
    stats = record_from(stats_res, TransactionStats, "stats")
    if stats is None and not stats_res.success:
        logger.warning(f"Transaction stats unavailable: {stats_res.message}")
    return render(
        request, "admin/transactions.html",
        transactions=transactions,
        stats=stats,
        payment_status=payment_status,
        status_filters=status_flow.TRANSACTION_FILTERS,
    )
