"""Customer Mobile Views — dashboard, ordering, orders, quotes, tracking, payments.

Invariants:
    - Every view works from GET /bookings/my-requests; the API scopes it to the caller
    - Order detail looks its request up by public code (REQ-...) among the caller's requests
    - Accepting a quote is a single POST; payment is processed server-side
    - Tracking shows only active requests (not completed/cancelled)
"""

import asyncio
import logging
from datetime import date
from typing import Annotated

from fastapi import APIRouter, Form, Request

from binhub.api.deps import Api, AppSettings, CustomerUser
from binhub.api.rendering import render
from binhub.api.routes.page_helpers import finish, records_or_toast, see_other
from binhub.core import status_flow, summaries
from binhub.schemas.forms import BookingForm
from binhub.schemas.records import BinSize, BinType, Quote, ServiceRequest, Transaction
from binhub.services import billing as billing_service
from binhub.services import bins as bins_service
from binhub.services import bookings as bookings_service
from binhub.services import quotes as quotes_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/mobile/customer", tags=["customer"])


async def _my_requests(request: Request, api: Api, token: str, failure: str) -> list[ServiceRequest]:
    result = await bookings_service.list_mine(api, token)
    return records_or_toast(request, result, ServiceRequest, "requests", failure)


@router.get("")
async def customer_root():
    return see_other("/mobile/customer/dashboard")


@router.get("/dashboard")
async def dashboard(request: Request, api: Api, settings: AppSettings, user: CustomerUser):
    requests = await _my_requests(request, api, user.token, "Failed to load dashboard data")
    return render(
        request, "customer/dashboard.html", page="customer_dashboard",
        summary=summaries.customer_dashboard(requests, settings.recent_requests_limit),
    )


@router.get("/order")
async def order_page(
    request: Request, api: Api, user: CustomerUser, bin_type_id: int | None = None,
):
    types_res = await bins_service.list_types(api, user.token)
    bin_types = records_or_toast(request, types_res, BinType, "binTypes", "Failed to load bin types")
    bin_sizes: list[BinSize] = []
    if bin_type_id is not None:
        sizes_res = await bins_service.list_sizes(api, user.token, bin_type_id=bin_type_id)
        bin_sizes = records_or_toast(
            request, sizes_res, BinSize, "binSizes", "Failed to load bin sizes",
        )
    return render(
        request, "customer/order.html",
        bin_types=bin_types, bin_sizes=bin_sizes, selected_type_id=bin_type_id,
        today=date.today().isoformat(),
    )


@router.post("/order")
async def place_order(
    request: Request, form: Annotated[BookingForm, Form()], api: Api, user: CustomerUser,
):
    result = await bookings_service.create(api, user.token, form.to_payload())
    if result.success:
        logger.info("Order placed", extra={"role": user.role})
        url = "/mobile/customer/orders"
    else:
        url = f"/mobile/customer/order?bin_type_id={form.bin_type_id}"
    return finish(
        request, result,
        "Order placed successfully! Waiting for supplier quotes...",
        "Failed to place order",
        url,
    )


@router.get("/orders")
async def orders_page(request: Request, api: Api, user: CustomerUser):
    requests = await _my_requests(request, api, user.token, "Failed to load orders")
    return render(request, "customer/orders.html", page="customer_orders", requests=requests)


@router.get("/orders/{request_id}")
async def order_detail(request: Request, request_id: str, api: Api, user: CustomerUser):
    requests_res, quotes_res = await asyncio.gather(
        bookings_service.list_mine(api, user.token),
        quotes_service.for_request(api, user.token, request_id),
    )
    requests = records_or_toast(
        request, requests_res, ServiceRequest, "requests", "Failed to load order details",
    )
    quotes = records_or_toast(request, quotes_res, Quote, "quotes", "Failed to load quotes")
    return render(
        request, "customer/order_detail.html",
        page="customer_order_detail",
        page_request_id=request_id,
        order=summaries.find_request(requests, request_id),
        request_id=request_id,
        quotes=quotes,
    )


@router.post("/orders/{request_id}/quotes/{quote_id}/accept")
async def accept_quote(
    request: Request, request_id: str, quote_id: int, api: Api, user: CustomerUser,
):
    result = await quotes_service.accept(api, user.token, quote_id)
    if result.success:
        logger.info(f"Quote {quote_id} accepted", extra={"role": user.role})
    return finish(
        request, result,
        "Quote accepted! Processing payment...",
        "Failed to accept quote",
        "/mobile/customer/orders" if result.success else f"/mobile/customer/orders/{request_id}",
    )


@router.get("/tracking")
async def tracking_page(
    request: Request, api: Api, user: CustomerUser, selected: int | None = None,
):
    requests = await _my_requests(request, api, user.token, "Failed to load tracking data")
    active = summaries.active_requests(requests)
    current = summaries.select_request(active, selected)
    return render(
        request, "customer/tracking.html", page="customer_tracking",
        active=active,
        current=current,
        timeline=status_flow.tracking_timeline(current.status) if current else [],
    )


@router.get("/payments")
async def payments_page(request: Request, api: Api, user: CustomerUser):
    result = await billing_service.my_payments(api, user.token)
    transactions = records_or_toast(
        request, result, Transaction, "transactions", "Failed to load payment history",
    )
    return render(
        request, "customer/payments.html",
        transactions=transactions,
        summary=summaries.payment_summary(transactions),
    )


@router.get("/account")
async def account_page(request: Request, user: CustomerUser):
    return render(request, "customer/account.html", account=user.user)
