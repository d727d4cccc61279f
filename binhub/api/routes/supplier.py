"""Supplier Mobile Views — dashboard, request inbox, quoting, jobs, fleet, availability, wallet.

Invariants:
    - Job actions only offer status_flow.next_status(); the API validates the transition
    - Moving a job to on_delivery goes through the bin-assignment form, which requires
      one physical bin per order item (bin_codes sent in order-item order)
    - Payout requests are checked client-side: 0 < amount <= available balance
    - Operating hours and service areas are kept in the browser session only
    - Opening the request inbox resets the unread new-request badge
"""

import asyncio
import logging
from typing import Annotated

from fastapi import APIRouter, Form, Request
from pydantic import ValidationError

from binhub.api.deps import Api, AppSettings, CurrentUser, Hub, SupplierUser
from binhub.api.flash import push_error, push_toast
from binhub.api.rendering import render
from binhub.api.routes.page_helpers import (
    finish, record_from, records_or_toast, see_other,
)
from binhub.core import status_flow, summaries
from binhub.core.domain_types import BinStatus, RequestStatus
from binhub.core.formatting import parse_amount
from binhub.infrastructure.api_client import MarketplaceApiClient
from binhub.schemas.forms import (
    BinStatusForm, JobStatusForm, OperatingHoursForm, PayoutRequestForm,
    PhysicalBinForm, QuoteForm, ServiceAreaForm, default_operating_hours,
)
from binhub.schemas.records import (
    BinSize, BinType, OrderItem, Payout, PhysicalBin, ServiceRequest, Wallet,
    WalletTransaction, parse_records,
)
from binhub.services import bins as bins_service
from binhub.services import bookings as bookings_service
from binhub.services import quotes as quotes_service
from binhub.services import wallets as wallets_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/mobile/supplier", tags=["supplier"])

HOURS_KEY = "operating_hours"
AREAS_KEY = "service_areas"
JOBS_URL = "/mobile/supplier/jobs"


@router.get("")
async def supplier_root():
    return see_other("/mobile/supplier/dashboard")


@router.get("/dashboard")
async def dashboard(request: Request, api: Api, settings: AppSettings, user: SupplierUser):
    requests_res, wallet_res, bins_res = await asyncio.gather(
        bookings_service.list_supplier(api, user.token),
        wallets_service.my_wallet(api, user.token),
        bins_service.list_physical(api, user.token),
    )
    failure = "Failed to load dashboard data"
    requests = records_or_toast(request, requests_res, ServiceRequest, "requests", failure)
    bins = records_or_toast(request, bins_res, PhysicalBin, "bins", failure)
    return render(
        request, "supplier/dashboard.html", page="supplier_dashboard",
        summary=summaries.supplier_dashboard(
            requests, bins, settings.recent_requests_limit,
        ),
        wallet=record_from(wallet_res, Wallet, "wallet"),
    )


# --- Request inbox & quoting -----------------------------------------------------

@router.get("/notifications")
async def notifications_page(request: Request, api: Api, hub: Hub, user: SupplierUser):
    hub.reset_unread(user.token)
    result = await bookings_service.list_supplier_pending(api, user.token)
    pending = records_or_toast(
        request, result, ServiceRequest, "requests", "Failed to load requests",
    )
    return render(
        request, "supplier/notifications.html", page="supplier_notifications",
        requests=pending,
    )


@router.post("/requests/{request_id}/accept")
async def accept_request(request: Request, request_id: int, api: Api, user: SupplierUser):
    result = await bookings_service.accept(api, user.token, request_id)
    if result.success:
        logger.info(f"Request {request_id} accepted", extra={"role": user.role})
    return finish(
        request, result,
        "Request accepted! Please submit your quote.",
        "Failed to accept request",
        f"/mobile/supplier/quote/{request_id}" if result.success
        else "/mobile/supplier/notifications",
    )


@router.get("/quote/{request_id}")
async def quote_page(request: Request, request_id: int, api: Api, user: SupplierUser):
    result = await bookings_service.get_request(api, user.token, request_id)
    service_request = record_from(result, ServiceRequest, "request")
    if service_request is None:
        push_error(request, "Request not found")
        return see_other("/mobile/supplier/notifications")
    return render(request, "supplier/quote.html", service_request=service_request)


@router.post("/quote/{request_id}")
async def submit_quote(
    request: Request,
    request_id: int,
    form: Annotated[QuoteForm, Form()],
    api: Api,
    user: SupplierUser,
):
    result = await quotes_service.submit(api, user.token, form.to_payload(request_id))
    return finish(
        request, result,
        "Quote submitted successfully!",
        "Failed to submit quote",
        JOBS_URL if result.success else f"/mobile/supplier/quote/{request_id}",
    )


# --- Jobs ---------------------------------------------------------------------

@router.get("/jobs")
async def jobs_page(request: Request, api: Api, user: SupplierUser, status: str = "all"):
    result = await bookings_service.list_supplier(api, user.token, status)
    jobs = records_or_toast(request, result, ServiceRequest, "requests", "Failed to load jobs")
    return render(
        request, "supplier/jobs.html", page="supplier_jobs",
        jobs=jobs,
        status=status,
        status_filters=status_flow.SUPPLIER_JOB_FILTERS,
        next_status=status_flow.next_status,
    )


@router.post("/jobs/{request_id}/status")
async def advance_job(
    request: Request,
    request_id: int,
    form: Annotated[JobStatusForm, Form()],
    api: Api,
    user: SupplierUser,
):
    if status_flow.requires_bin_assignment(form.status):
        return see_other(f"{JOBS_URL}/{request_id}/assign")
    result = await bookings_service.update_status(api, user.token, request_id, form.status)
    return finish(
        request, result, "Status updated successfully", "Failed to update status", JOBS_URL,
    )


async def _assignment_choices(
    api: MarketplaceApiClient, user: CurrentUser, request_id: int,
) -> tuple[list[OrderItem], list[summaries.BinChoice]] | None:
    items_res, bins_res = await asyncio.gather(
        bookings_service.order_items(api, user.token, request_id),
        bins_service.list_physical(
            api, user.token, status=BinStatus.AVAILABLE.value, supplier_id=user.id,
        ),
    )
    if not items_res.success:
        return None
    items = parse_records(OrderItem, items_res.get("orderItems", []))
    available = parse_records(PhysicalBin, bins_res.get("bins", [])) if bins_res.success else []
    return items, summaries.bin_choices(items, available)


@router.get("/jobs/{request_id}/assign")
async def assign_bins_page(request: Request, request_id: int, api: Api, user: SupplierUser):
    choices = await _assignment_choices(api, user, request_id)
    if choices is None:
        push_error(request, "Failed to load order items")
        return see_other(JOBS_URL)
    _, bin_choices = choices
    return render(
        request, "supplier/assign_bins.html",
        request_id=request_id, choices=bin_choices,
    )


@router.post("/jobs/{request_id}/assign")
async def assign_bins(request: Request, request_id: int, api: Api, user: SupplierUser):
    form = await request.form()
    choices = await _assignment_choices(api, user, request_id)
    if choices is None:
        push_error(request, "Failed to load order items")
        return see_other(JOBS_URL)
    items, _ = choices
    selection = {item.id: form.get(f"bin_{item.id}") for item in items}
    codes = summaries.selected_bin_codes(items, selection)
    if codes is None:
        push_error(request, "Please select a bin for all order items")
        return see_other(f"{JOBS_URL}/{request_id}/assign")
    result = await bookings_service.update_status(
        api, user.token, request_id, RequestStatus.ON_DELIVERY.value, bin_codes=codes,
    )
    return finish(
        request, result,
        "Bins assigned and status updated successfully",
        "Failed to assign bins",
        JOBS_URL if result.success else f"{JOBS_URL}/{request_id}/assign",
    )


# --- Fleet & availability ---------------------------------------------------------

@router.get("/fleet")
async def fleet_page(
    request: Request,
    api: Api,
    user: SupplierUser,
    status: str = "all",
    bin_type_id: int | None = None,
):
    bins_res, types_res = await asyncio.gather(
        bins_service.list_physical(api, user.token, status=status),
        bins_service.list_types(api, user.token),
    )
    failure = "Failed to load fleet data"
    bins = records_or_toast(request, bins_res, PhysicalBin, "bins", failure)
    bin_types = records_or_toast(request, types_res, BinType, "binTypes", failure)
    bin_sizes: list[BinSize] = []
    if bin_type_id is not None:
        sizes_res = await bins_service.list_sizes(api, user.token, bin_type_id=bin_type_id)
        bin_sizes = records_or_toast(request, sizes_res, BinSize, "binSizes", failure)
    return render(
        request, "supplier/fleet.html",
        bins=bins,
        bin_types=bin_types,
        bin_sizes=bin_sizes,
        selected_type_id=bin_type_id,
        status=status,
        status_filters=status_flow.BIN_STATUS_FILTERS,
    )


@router.post("/fleet")
async def add_bin(
    request: Request, form: Annotated[PhysicalBinForm, Form()], api: Api, user: SupplierUser,
):
    payload = {
        "bin_type_id": form.bin_type_id,
        "bin_size_id": form.bin_size_id,
    }
    if form.notes:
        payload["notes"] = form.notes
    result = await bins_service.create_physical(api, user.token, payload)
    return finish(
        request, result, "Bin added successfully!", "Failed to add bin", "/mobile/supplier/fleet",
    )


@router.post("/bins/{bin_id}/status")
async def update_bin_status(
    request: Request,
    bin_id: int,
    form: Annotated[BinStatusForm, Form()],
    api: Api,
    user: SupplierUser,
    back: str = "fleet",
):
    result = await bins_service.update_physical_status(api, user.token, bin_id, form.status)
    target = "availability" if back == "availability" else "fleet"
    return finish(
        request, result, "Bin status updated", "Failed to update status",
        f"/mobile/supplier/{target}",
    )


@router.get("/availability")
async def availability_page(request: Request, api: Api, user: SupplierUser):
    result = await bins_service.list_physical(api, user.token)
    bins = records_or_toast(request, result, PhysicalBin, "bins", "Failed to load bins")
    return render(
        request, "supplier/availability.html",
        bins=summaries.toggleable_bins(bins),
        hours=request.session.get(HOURS_KEY) or default_operating_hours(),
    )


@router.post("/availability/bulk")
async def bulk_availability(
    request: Request, form: Annotated[BinStatusForm, Form()], api: Api, user: SupplierUser,
):
    result = await bins_service.list_physical(api, user.token)
    bins = records_or_toast(request, result, PhysicalBin, "bins", "Failed to load bins")
    targets = summaries.toggleable_bins(bins)
    outcomes = await asyncio.gather(*(
        bins_service.update_physical_status(api, user.token, b.id, form.status)
        for b in targets
    ))
    if result.success and all(o.success for o in outcomes):
        push_toast(request, f"All bins marked as {form.status}")
    elif result.success:
        push_error(request, "Failed to update bin statuses")
    return see_other("/mobile/supplier/availability")


@router.post("/availability/hours")
async def save_operating_hours(
    request: Request, form: Annotated[OperatingHoursForm, Form()], user: SupplierUser,
):
    request.session[HOURS_KEY] = form.to_hours()
    push_toast(request, "Operating hours saved (demo only)")
    return see_other("/mobile/supplier/availability")


@router.get("/service-area")
async def service_area_page(request: Request, user: SupplierUser):
    return render(
        request, "supplier/service_area.html",
        areas=list(request.session.get(AREAS_KEY, [])),
    )


@router.post("/service-area")
async def add_service_area(
    request: Request, form: Annotated[ServiceAreaForm, Form()], user: SupplierUser,
):
    areas = list(request.session.get(AREAS_KEY, []))
    areas.append(form.area)
    request.session[AREAS_KEY] = areas
    push_toast(request, "Service area added (demo only)")
    return see_other("/mobile/supplier/service-area")


@router.post("/service-area/{index}/delete")
async def remove_service_area(request: Request, index: int, user: SupplierUser):
    areas = list(request.session.get(AREAS_KEY, []))
    if 0 <= index < len(areas):
        areas.pop(index)
        request.session[AREAS_KEY] = areas
        push_toast(request, "Service area removed (demo only)")
    return see_other("/mobile/supplier/service-area")


# --- Wallet & account ---------------------------------------------------------------

@router.get("/wallet")
async def wallet_page(request: Request, api: Api, user: SupplierUser):
    wallet_res, tx_res, payouts_res = await asyncio.gather(
        wallets_service.my_wallet(api, user.token),
        wallets_service.my_transactions(api, user.token),
        wallets_service.my_payouts(api, user.token),
    )
    failure = "Failed to load wallet data"
    wallet = record_from(wallet_res, Wallet, "wallet")
    if wallet is None:
        push_error(request, wallet_res.error_message(failure))
    return render(
        request, "supplier/wallet.html",
        wallet=wallet,
        transactions=records_or_toast(
            request, tx_res, WalletTransaction, "transactions", failure,
        ),
        payouts=records_or_toast(request, payouts_res, Payout, "payouts", failure),
    )


@router.post("/wallet/payout")
async def request_payout(
    request: Request,
    api: Api,
    user: SupplierUser,
    amount: Annotated[str, Form()] = "",
):
    try:
        form = PayoutRequestForm(amount=amount)
    except ValidationError:
        push_error(request, "Invalid amount")
        return see_other("/mobile/supplier/wallet")
    wallet = record_from(await wallets_service.my_wallet(api, user.token), Wallet, "wallet")
    balance = parse_amount(wallet.balance) if wallet else parse_amount(None)
    if form.amount <= 0 or form.amount > balance:
        push_error(request, "Invalid amount")
        return see_other("/mobile/supplier/wallet")
    result = await wallets_service.request_payout(api, user.token, form.to_payload())
    return finish(
        request, result,
        "Payout request submitted successfully",
        "Failed to request payout",
        "/mobile/supplier/wallet",
    )


@router.get("/account")
async def account_page(request: Request, user: SupplierUser):
    return render(request, "supplier/account.html", account=user.user)
