"""Wallets & Payouts — admin wallet overview and payout approval.

Invariants:
    - Wallet totals are summed in memory from the listed wallets
    - A payout decision sends {status, admin_notes|null}; the API moves the money
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Form, Request

from binhub.api.deps import AdminUser, Api
from binhub.api.rendering import render
from binhub.api.routes.page_helpers import finish, records_or_toast
from binhub.core import status_flow, summaries
from binhub.schemas.forms import PayoutDecisionForm
from binhub.schemas.records import Payout, Wallet
from binhub.services import wallets as wallets_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/dashboard", tags=["wallets"])


@router.get("/wallets")
async def wallets_page(request: Request, api: Api, user: AdminUser):
    result = await wallets_service.list_wallets(api, user.token)
    wallets = records_or_toast(request, result, Wallet, "wallets", "Failed to fetch wallets")
    stats = result.get("stats") if result.success else None
    commission = stats.get("total_commission", 0) if isinstance(stats, dict) else 0
    return render(
        request, "admin/wallets.html",
        wallets=wallets,
        totals=summaries.wallet_totals(wallets),
        total_commission=commission or 0,
    )


@router.get("/payouts")
async def payouts_page(
    request: Request,
    api: Api,
    user: AdminUser,
    status: str = "all",
    payout: int | None = None,
):
    result = await wallets_service.list_payouts(api, user.token, status)
    payouts = records_or_toast(request, result, Payout, "payouts", "Failed to fetch payouts")
    return render(
        request, "admin/payouts.html",
        payouts=payouts,
        selected=summaries.find_payout(payouts, payout),
        status=status,
        status_filters=status_flow.PAYOUT_FILTERS,
    )


@router.post("/payouts/{payout_id}/status")
async def decide_payout(
    request: Request,
    payout_id: int,
    form: Annotated[PayoutDecisionForm, Form()],
    api: Api,
    user: AdminUser,
):
    result = await wallets_service.decide_payout(api, user.token, payout_id, form.to_payload())
    if result.success:
        logger.info(f"Payout {payout_id} -> {form.status}", extra={"role": user.role})
    return finish(
        request, result,
        f"Payout {form.status} successfully",
        "Failed to update payout",
        "/dashboard/payouts",
    )
