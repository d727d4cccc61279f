"""Rendering — Jinja2 templates, display filters and the shared page context.

Invariants:
    - Every page gets: user, toasts (popped), nav, unread badge, refresh events
    - Filters are thin adapters over core.formatting/core.status_flow (no logic here)
    - A page name decides which push events make it reload (core.notifications)
"""

from dataclasses import dataclass
from pathlib import Path

from fastapi import Request
from fastapi.templating import Jinja2Templates

from binhub.api.deps import TOKEN_KEY, home_url, session_user
from binhub.api.flash import pop_toasts
from binhub.core import formatting, status_flow

TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATE_DIR))


@dataclass(frozen=True)
class NavItem:
    label: str
    href: str
    icon: str = ""
    children: tuple["NavItem", ...] = ()


ADMIN_NAV = (
    NavItem("Dashboard", "/dashboard", "fa-gauge"),
    NavItem("User Management", "/dashboard/users", "fa-users", (
        NavItem("Customers", "/dashboard/users/customers", "fa-user"),
        NavItem("Suppliers", "/dashboard/users/suppliers", "fa-truck"),
        NavItem("Admins", "/dashboard/users/admins", "fa-user-shield"),
    )),
    NavItem("Bin Management", "/dashboard/bins", "fa-dumpster"),
    NavItem("Transactions", "/dashboard/transactions", "fa-receipt"),
    NavItem("Bookings", "/dashboard/bookings", "fa-calendar-check"),
    NavItem("Quotes", "/dashboard/quotes", "fa-file-invoice-dollar"),
    NavItem("Wallets", "/dashboard/wallets", "fa-wallet"),
    NavItem("Payouts", "/dashboard/payouts", "fa-money-bill-transfer"),
    NavItem("Invoices", "/dashboard/invoices", "fa-file-invoice"),
    NavItem("Bills", "/dashboard/bills", "fa-file-lines"),
    NavItem("System Settings", "/dashboard/settings", "fa-gear"),
)

CUSTOMER_NAV = (
    NavItem("Home", "/mobile/customer/dashboard", "fa-house"),
    NavItem("Order", "/mobile/customer/order", "fa-plus"),
    NavItem("Orders", "/mobile/customer/orders", "fa-list"),
    NavItem("Track", "/mobile/customer/tracking", "fa-location-dot"),
    NavItem("Account", "/mobile/customer/account", "fa-user"),
)

SUPPLIER_NAV = (
    NavItem("Home", "/mobile/supplier/dashboard", "fa-house"),
    NavItem("Requests", "/mobile/supplier/notifications", "fa-bell"),
    NavItem("Jobs", "/mobile/supplier/jobs", "fa-truck"),
    NavItem("Wallet", "/mobile/supplier/wallet", "fa-wallet"),
    NavItem("Account", "/mobile/supplier/account", "fa-user"),
)


def is_active(href: str, path: str) -> bool:
    """Exact match for section roots, prefix match for everything below them."""
    if href in ("/dashboard", "/mobile/customer/dashboard", "/mobile/supplier/dashboard"):
        return path == href
    return path == href or path.startswith(href + "/")


templates.env.filters["currency"] = formatting.format_currency
templates.env.filters["date"] = formatting.format_date
templates.env.filters["datetime"] = formatting.format_datetime
templates.env.filters["initials"] = formatting.initials
templates.env.filters["status_label"] = status_flow.format_status
templates.env.filters["request_color"] = status_flow.request_color
templates.env.filters["bin_color"] = status_flow.bin_color
templates.env.globals["badge_class"] = status_flow.badge_class
templates.env.globals["quote_total"] = formatting.quote_total
templates.env.globals["setting_value"] = formatting.format_setting_value
templates.env.globals["bank_details"] = formatting.parse_bank_details
templates.env.globals["is_active"] = is_active


def render(
    request: Request,
    template: str,
    *,
    page: str | None = None,
    status_code: int = 200,
    **context,
):
    """TemplateResponse with the shared layout context filled in."""
    user = session_user(request)
    hub = getattr(request.app.state, "push_hub", None)
    unread = hub.unread_count(request.session.get(TOKEN_KEY)) if hub else 0
    base = {
        "user": user,
        "home_url": home_url(user.role if user else None),
        "toasts": pop_toasts(request),
        "path": request.url.path,
        "page": page,
        "unread_count": unread,
        "admin_nav": ADMIN_NAV,
        "customer_nav": CUSTOMER_NAV,
        "supplier_nav": SUPPLIER_NAV,
    }
    base.update(context)
    return templates.TemplateResponse(request, template, base, status_code=status_code)
