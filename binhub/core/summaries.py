"""Summaries — in-memory filtering and counting behind the dashboard widgets.

Invariants:
    - Inputs are API records already fetched for the page (no IO, no DB)
    - Outputs are plain dataclasses/dicts ready for templates
    - Input ordering is preserved (the API decides sort order)

Design Decisions:
    - Pure functions, not methods on records: records are mirrors, summaries are presentation
"""

from dataclasses import dataclass, field
from decimal import Decimal

from binhub.core import status_flow
from binhub.core.domain_types import RequestStatus, TransactionStatus
from binhub.core.formatting import parse_amount
from binhub.schemas.records import (
    OrderItem, Payout, PhysicalBin, ServiceRequest, SystemSetting,
    Transaction, Wallet,
)


@dataclass
class CustomerDashboard:
    recent: list[ServiceRequest]
    active_bookings: int
    pending_quotes: int
    completed: int


@dataclass
class SupplierDashboard:
    recent: list[ServiceRequest]
    active_jobs: int
    pending_requests: int
    completed: int
    total_bins: int


@dataclass
class PaymentSummary:
    total_spent: Decimal
    total_transactions: int
    pending_payments: int


@dataclass
class WalletTotals:
    balance: Decimal
    pending: Decimal
    earned: Decimal


@dataclass
class BinChoice:
    """Available bins for one order item in the assignment form."""
    item: OrderItem
    bins: list[PhysicalBin] = field(default_factory=list)


def customer_dashboard(
    requests: list[ServiceRequest], recent_limit: int = 5,
) -> CustomerDashboard:
    return CustomerDashboard(
        recent=requests[:recent_limit],
        active_bookings=sum(
            1 for r in requests if r.status in status_flow.CUSTOMER_ACTIVE
        ),
        pending_quotes=sum(
            1 for r in requests if r.status in status_flow.CUSTOMER_AWAITING_QUOTES
        ),
        completed=sum(1 for r in requests if r.status == RequestStatus.COMPLETED.value),
    )


def supplier_dashboard(
    requests: list[ServiceRequest], bins: list[PhysicalBin], recent_limit: int = 5,
) -> SupplierDashboard:
    return SupplierDashboard(
        recent=requests[:recent_limit],
        active_jobs=sum(
            1 for r in requests if r.status in status_flow.SUPPLIER_ACTIVE
        ),
        pending_requests=sum(1 for r in requests if r.status == RequestStatus.PENDING.value),
        completed=sum(1 for r in requests if r.status == RequestStatus.COMPLETED.value),
        total_bins=len(bins),
    )


def payment_summary(transactions: list[Transaction]) -> PaymentSummary:
    """Customer payment history totals; only completed payments count as spent."""
    return PaymentSummary(
        total_spent=sum(
            (parse_amount(t.amount) for t in transactions
             if t.payment_status == TransactionStatus.COMPLETED.value),
            Decimal("0"),
        ),
        total_transactions=len(transactions),
        pending_payments=sum(
            1 for t in transactions if t.payment_status == TransactionStatus.PENDING.value
        ),
    )


def wallet_totals(wallets: list[Wallet]) -> WalletTotals:
    return WalletTotals(
        balance=sum((parse_amount(w.balance) for w in wallets), Decimal("0")),
        pending=sum((parse_amount(w.pending_balance) for w in wallets), Decimal("0")),
        earned=sum((parse_amount(w.total_earned) for w in wallets), Decimal("0")),
    )


def active_requests(requests: list[ServiceRequest]) -> list[ServiceRequest]:
    """Requests still moving through the workflow (tracking view)."""
    return [r for r in requests if r.status not in status_flow.CLOSED]


def select_request(
    requests: list[ServiceRequest], selected_id: int | None,
) -> ServiceRequest | None:
    """Explicitly selected request when present, else the first one."""
    if selected_id is not None:
        for r in requests:
            if r.id == selected_id:
                return r
    return requests[0] if requests else None


def find_request(
    requests: list[ServiceRequest], request_id: str,
) -> ServiceRequest | None:
    """Lookup by public request code (e.g. REQ-1001)."""
    for r in requests:
        if r.request_id == request_id:
            return r
    return None


def group_settings(settings: list[SystemSetting]) -> dict[str, list[SystemSetting]]:
    """Settings by category, categories in first-seen order."""
    groups: dict[str, list[SystemSetting]] = {}
    for s in settings:
        groups.setdefault(s.category, []).append(s)
    return groups


def filter_bins(
    bins: list[PhysicalBin], code_query: str | None = None, status: str | None = None,
) -> list[PhysicalBin]:
    """Case-insensitive bin code search plus exact status match ("all" = any)."""
    query = (code_query or "").strip().lower()
    result = []
    for b in bins:
        if query and query not in b.bin_code.lower():
            continue
        if status and status != "all" and b.status != status:
            continue
        result.append(b)
    return result


def toggleable_bins(bins: list[PhysicalBin]) -> list[PhysicalBin]:
    """Bins a supplier may flip between available and unavailable."""
    return [b for b in bins if b.status in status_flow.TOGGLEABLE_BIN_STATUSES]


def bin_choices(items: list[OrderItem], available: list[PhysicalBin]) -> list[BinChoice]:
    """Match available bins to each order item by bin type name and size."""
    return [
        BinChoice(
            item=item,
            bins=[
                b for b in available
                if b.bin_type_name == item.bin_type_name and b.bin_size == item.bin_size
            ],
        )
        for item in items
    ]


def selected_bin_codes(
    items: list[OrderItem], selection: dict[int, str | None],
) -> list[str] | None:
    """Bin codes in order-item order, None unless every item has a bin."""
    if not items:
        return None
    codes = []
    for item in items:
        code = (selection.get(item.id) or "").strip()
        if not code:
            return None
        codes.append(code)
    return codes


def find_payout(payouts: list[Payout], payout_id: int | None) -> Payout | None:
    if payout_id is None:
        return None
    for p in payouts:
        if p.id == payout_id:
            return p
    return None
