"""Admin Bookings & Quotes — read-only lists with a status filter."""

import logging

from fastapi import APIRouter, Request

from binhub.api.deps import AdminUser, Api
from binhub.api.rendering import render
from binhub.api.routes.page_helpers import records_or_toast
from binhub.core import status_flow
from binhub.schemas.records import Quote, ServiceRequest
from binhub.services import bookings as bookings_service
from binhub.services import quotes as quotes_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/dashboard", tags=["bookings"])


@router.get("/bookings")
async def bookings_page(request: Request, api: Api, user: AdminUser, status: str = "all"):
    result = await bookings_service.list_all(api, user.token, status)
    bookings = records_or_toast(
        request, result, ServiceRequest, "requests", "Failed to fetch bookings",
    )
    return render(
        request, "admin/bookings.html",
        bookings=bookings, status=status, status_filters=status_flow.BOOKING_FILTERS,
    )


@router.get("/quotes")
async def quotes_page(request: Request, api: Api, user: AdminUser, status: str = "all"):
    result = await quotes_service.list_all(api, user.token, status)
    quotes = records_or_toast(request, result, Quote, "quotes", "Failed to fetch quotes")
    return render(
        request, "admin/quotes.html",
        quotes=quotes, status=status, status_filters=status_flow.QUOTE_FILTERS,
    )
