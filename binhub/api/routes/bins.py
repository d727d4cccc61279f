"""Bin Management — bin types, bin sizes, physical inventory and supplier assignment.

Invariants:
    - The three tabs share one page; the active tab is a query parameter
    - Types/sizes are listed including inactive ones (admin view)
    - Physical bins are filtered in memory (code substring, status), never re-queried per filter
    - Assigning an empty supplier unassigns the bin (supplier_id null)
"""

import asyncio
import logging
from typing import Annotated, Literal

from fastapi import APIRouter, Form, Request

from binhub.api.deps import AdminUser, Api, AnyUser
from binhub.api.rendering import render
from binhub.api.routes.page_helpers import finish, records_or_toast, see_other
from binhub.core import status_flow, summaries
from binhub.core.domain_types import Role
from binhub.schemas.forms import AssignBinForm, BinSizeForm, BinTypeForm, PhysicalBinForm
from binhub.schemas.records import BinSize, BinType, PhysicalBin, User, parse_records
from binhub.services import bins as bins_service
from binhub.services import users as users_service

logger = logging.getLogger(__name__)
router = APIRouter(tags=["bins"])

BINS_URL = "/dashboard/bins"


def _tab_url(tab: str) -> str:
    return f"{BINS_URL}?tab={tab}"


@router.get("/dashboard/bins")
async def bins_page(
    request: Request,
    api: Api,
    user: AdminUser,
    tab: Literal["types", "sizes", "physical"] = "types",
    q: str | None = None,
    status: str = "all",
    edit_type: int | None = None,
    edit_size: int | None = None,
    assign: int | None = None,
    bin_type_id: int | None = None,
):
    types_res, sizes_res, bins_res, suppliers_res = await asyncio.gather(
        bins_service.list_types(api, user.token, include_inactive=True),
        bins_service.list_sizes(api, user.token, include_inactive=True),
        bins_service.list_physical(api, user.token),
        users_service.list_by_role(api, user.token, Role.SUPPLIER.value),
    )
    bin_types = records_or_toast(request, types_res, BinType, "binTypes", "Failed to fetch data")
    bin_sizes = records_or_toast(request, sizes_res, BinSize, "binSizes", "Failed to fetch data")
    physical = records_or_toast(request, bins_res, PhysicalBin, "bins", "Failed to fetch data")
    suppliers = records_or_toast(request, suppliers_res, User, "users", "Failed to fetch data")

    return render(
        request, "admin/bins.html",
        tab=tab,
        bin_types=bin_types,
        bin_sizes=bin_sizes,
        bins=summaries.filter_bins(physical, q, status),
        total_bins=len(physical),
        suppliers=suppliers,
        q=q or "",
        status=status,
        status_filters=status_flow.BIN_STATUS_FILTERS,
        editing_type=next((t for t in bin_types if t.id == edit_type), None),
        editing_size=next((s for s in bin_sizes if s.id == edit_size), None),
        assigning=next((b for b in physical if b.id == assign), None),
        selected_type_id=bin_type_id,
        sizes_for_type=[s for s in bin_sizes if s.bin_type_id == bin_type_id and s.is_active],
    )


@router.get("/dashboard/bin-management")
async def bin_management_redirect():
    return see_other(_tab_url("physical"))


# --- Bin types ----------------------------------------------------------------

@router.post("/dashboard/bins/types")
async def create_bin_type(
    request: Request, form: Annotated[BinTypeForm, Form()], api: Api, user: AdminUser,
):
    result = await bins_service.create_type(api, user.token, form.to_payload())
    return finish(
        request, result, "Bin type created successfully",
        "Failed to create bin type", _tab_url("types"),
    )


@router.post("/dashboard/bins/types/{type_id}/edit")
async def update_bin_type(
    request: Request, type_id: int, form: Annotated[BinTypeForm, Form()],
    api: Api, user: AdminUser,
):
    result = await bins_service.update_type(api, user.token, type_id, form.to_payload())
    return finish(
        request, result, "Bin type updated successfully",
        "Failed to update bin type", _tab_url("types"),
    )


@router.post("/dashboard/bins/types/{type_id}/delete")
async def delete_bin_type(request: Request, type_id: int, api: Api, user: AdminUser):
    result = await bins_service.delete_type(api, user.token, type_id)
    return finish(
        request, result, "Bin type deleted successfully",
        "Failed to delete bin type", _tab_url("types"),
    )


# --- Bin sizes ----------------------------------------------------------------

@router.post("/dashboard/bins/sizes")
async def create_bin_size(
    request: Request, form: Annotated[BinSizeForm, Form()], api: Api, user: AdminUser,
):
    result = await bins_service.create_size(api, user.token, form.to_payload())
    return finish(
        request, result, "Bin size created successfully",
        "Failed to create bin size", _tab_url("sizes"),
    )


@router.post("/dashboard/bins/sizes/{size_id}/edit")
async def update_bin_size(
    request: Request, size_id: int, form: Annotated[BinSizeForm, Form()],
    api: Api, user: AdminUser,
):
    result = await bins_service.update_size(api, user.token, size_id, form.to_payload())
    return finish(
        request, result, "Bin size updated successfully",
        "Failed to update bin size", _tab_url("sizes"),
    )


@router.post("/dashboard/bins/sizes/{size_id}/delete")
async def delete_bin_size(request: Request, size_id: int, api: Api, user: AdminUser):
    result = await bins_service.delete_size(api, user.token, size_id)
    return finish(
        request, result, "Bin size deleted successfully",
        "Failed to delete bin size", _tab_url("sizes"),
    )


# --- Physical bins ------------------------------------------------------------

@router.post("/dashboard/bins/physical")
async def create_physical_bin(
    request: Request, form: Annotated[PhysicalBinForm, Form()], api: Api, user: AdminUser,
):
    result = await bins_service.create_physical(api, user.token, form.to_payload())
    return finish(
        request, result, "Bin created successfully",
        "Failed to create bin", _tab_url("physical"),
    )


@router.post("/dashboard/bins/physical/{bin_id}/assign")
async def assign_physical_bin(
    request: Request, bin_id: int, form: Annotated[AssignBinForm, Form()],
    api: Api, user: AdminUser,
):
    result = await bins_service.assign_physical(api, user.token, bin_id, form.supplier_id)
    return finish(
        request, result, "Bin assigned successfully",
        "Failed to assign bin", _tab_url("physical"),
    )


# --- Catalogue lookups (dependent dropdowns) ------------------------------------

@router.get("/catalog/bin-sizes")
async def catalog_bin_sizes(api: Api, user: AnyUser, bin_type_id: int):
    """Active sizes of one bin type, for the type -> size dropdowns."""
    result = await bins_service.list_sizes(api, user.token, bin_type_id=bin_type_id)
    sizes = parse_records(BinSize, result.get("binSizes", [])) if result.success else []
    return {
        "success": result.success,
        "sizes": [
            {
                "id": s.id,
                "size": s.size,
                "capacity_cubic_meters": s.capacity_cubic_meters,
            }
            for s in sizes
            if s.is_active
        ],
    }
