"""Status Flow — display projection of the server-owned request/bin status workflow.

Invariants:
    - The API is the only authority on status; nothing here decides a transition,
      it only labels the current status and names the next action to offer
    - TRACKING_STEPS order is the customer-visible timeline, first to last
    - next_status() returns None for terminal or unknown statuses
    - Unknown statuses always fall back to a neutral badge/colour, never raise

Design Decisions:
    - Plain dicts over a state-machine class: the flow is a fixed lookup table
    - Customer timeline and supplier action flow are kept separate because the API
      reports them with different vocabularies (picked_up vs pickup)
"""

from dataclasses import dataclass

from binhub.core.domain_types import (
    BinStatus, PaymentMethod, PaymentStatus, PayoutStatus, QuoteStatus,
    RequestStatus, TransactionStatus,
)

_R = RequestStatus


def _tabs(statuses) -> tuple[str, ...]:
    return ("all", *(s.value for s in statuses))


def _values(*statuses) -> frozenset[str]:
    return frozenset(s.value for s in statuses)


@dataclass(frozen=True)
class TrackingStep:
    key: str
    label: str


@dataclass(frozen=True)
class TimelineStep:
    key: str
    label: str
    state: str  # "done" | "current" | "upcoming"


TRACKING_STEPS: tuple[TrackingStep, ...] = tuple(
    TrackingStep(status.value, label) for status, label in (
        (_R.PENDING, "Pending"),
        (_R.QUOTED, "Quoted"),
        (_R.ACCEPTED, "Accepted"),
        (_R.CONFIRMED, "Confirmed"),
        (_R.IN_PROGRESS, "In Progress"),
        (_R.LOADED, "Loaded"),
        (_R.DELIVERED, "Delivered"),
        (_R.READY_TO_PICKUP, "Ready to Pickup"),
        (_R.PICKED_UP, "Picked Up"),
        (_R.COMPLETED, "Completed"),
    )
)

SUPPLIER_FLOW = (
    _R.CONFIRMED, _R.ON_DELIVERY, _R.DELIVERED, _R.READY_TO_PICKUP, _R.PICKUP, _R.COMPLETED,
)

SUPPLIER_NEXT_STATUS: dict[str, str] = {
    current.value: following.value
    for current, following in zip(SUPPLIER_FLOW, SUPPLIER_FLOW[1:])
}

# Filter tabs, in display order ("all" first)
SUPPLIER_JOB_FILTERS = _tabs(SUPPLIER_FLOW)
BOOKING_FILTERS = _tabs(s for s in RequestStatus if s not in (_R.ON_DELIVERY, _R.PICKUP))
QUOTE_FILTERS = _tabs(QuoteStatus)
PAYOUT_FILTERS = _tabs(PayoutStatus)
TRANSACTION_FILTERS = _tabs(TransactionStatus)
PAYMENT_STATUS_FILTERS = _tabs(PaymentStatus)
PAYMENT_METHOD_FILTERS = _tabs(PaymentMethod)
BIN_STATUS_FILTERS = _tabs(BinStatus)

CUSTOMER_ACTIVE = _values(
    _R.CONFIRMED, _R.LOADED, _R.DELIVERED, _R.READY_TO_PICKUP, _R.PICKED_UP, _R.IN_PROGRESS,
)
CUSTOMER_AWAITING_QUOTES = _values(_R.PENDING, _R.QUOTED)
SUPPLIER_ACTIVE = _values(*SUPPLIER_FLOW[:-1])
CLOSED = _values(_R.COMPLETED, _R.CANCELLED)
TOGGLEABLE_BIN_STATUSES = _values(BinStatus.AVAILABLE, BinStatus.UNAVAILABLE)


def step_index(status: str | None) -> int:
    """Position of status in the tracking timeline, -1 when not on it."""
    for i, step in enumerate(TRACKING_STEPS):
        if step.key == status:
            return i
    return -1


def tracking_timeline(status: str | None) -> list[TimelineStep]:
    """Timeline with every step marked done/current/upcoming for status."""
    current = step_index(status)
    timeline = []
    for i, step in enumerate(TRACKING_STEPS):
        if current < 0 or i > current:
            state = "upcoming"
        elif i == current:
            state = "current"
        else:
            state = "done"
        timeline.append(TimelineStep(step.key, step.label, state))
    return timeline


def next_status(status: str | None) -> str | None:
    """Next supplier action for a job, None at the end of the flow."""
    if status is None:
        return None
    return SUPPLIER_NEXT_STATUS.get(status)


def requires_bin_assignment(status: str | None) -> bool:
    """Moving a job to on_delivery needs one physical bin per order item."""
    return status == _R.ON_DELIVERY.value


def format_status(status: str | None) -> str:
    """ready_to_pickup -> Ready To Pickup."""
    if not status:
        return "-"
    return " ".join(word[:1].upper() + word[1:] for word in status.split("_"))


# ─── Badges & colours ────────────────────────────────────────────

_DEFAULT_BADGE = "badge"
_AMBER = "badge badge-supplier"
_BLUE = "badge badge-customer"
_GREEN = "badge badge-admin"


def _keyed(pairs) -> dict[str, str]:
    return {status.value: value for status, value in pairs}


BOOKING_BADGES = _keyed((
    (_R.PENDING, _AMBER),
    (_R.QUOTED, _BLUE),
    (_R.ACCEPTED, _BLUE),
    (_R.CONFIRMED, _GREEN),
    (_R.IN_PROGRESS, _BLUE),
    (_R.LOADED, _BLUE),
    (_R.DELIVERED, _BLUE),
    (_R.READY_TO_PICKUP, _BLUE),
    (_R.PICKED_UP, _BLUE),
    (_R.COMPLETED, _GREEN),
    (_R.CANCELLED, _AMBER),
))
QUOTE_BADGES = _keyed((
    (QuoteStatus.PENDING, _AMBER),
    (QuoteStatus.ACCEPTED, _GREEN),
    (QuoteStatus.REJECTED, _AMBER),
))
PAYMENT_BADGES = _keyed((
    (PaymentStatus.PAID, _BLUE),
    (PaymentStatus.UNPAID, _AMBER),
    (PaymentStatus.REFUNDED, _GREEN),
))
TRANSACTION_BADGES = _keyed((
    (TransactionStatus.COMPLETED, _BLUE),
    (TransactionStatus.PENDING, _AMBER),
    (TransactionStatus.FAILED, _GREEN),
    (TransactionStatus.REFUNDED, _AMBER),
))
PAYOUT_BADGES = _keyed((
    (PayoutStatus.PENDING, _AMBER),
    (PayoutStatus.APPROVED, _GREEN),
    (PayoutStatus.REJECTED, _AMBER),
))

_BADGE_TABLES = {
    "booking": BOOKING_BADGES,
    "quote": QUOTE_BADGES,
    "payment": PAYMENT_BADGES,
    "transaction": TRANSACTION_BADGES,
    "payout": PAYOUT_BADGES,
}

NEUTRAL_COLOR = "#6B7280"

REQUEST_COLORS = _keyed((
    (_R.PENDING, "#F59E0B"),
    (_R.QUOTED, "#3B82F6"),
    (_R.ACCEPTED, "#10B981"),
    (_R.CONFIRMED, "#10B981"),
    (_R.IN_PROGRESS, "#6366F1"),
    (_R.LOADED, "#6366F1"),
    (_R.ON_DELIVERY, "#6366F1"),
    (_R.DELIVERED, "#8B5CF6"),
    (_R.READY_TO_PICKUP, "#EC4899"),
    (_R.PICKUP, "#14B8A6"),
    (_R.PICKED_UP, "#14B8A6"),
    (_R.COMPLETED, "#059669"),
    (_R.CANCELLED, "#EF4444"),
))
BIN_COLORS = _keyed((
    (BinStatus.AVAILABLE, "#10B981"),
    (BinStatus.CONFIRMED, "#3B82F6"),
    (BinStatus.LOADED, "#6366F1"),
    (BinStatus.DELIVERED, "#8B5CF6"),
    (BinStatus.READY_TO_PICKUP, "#EC4899"),
    (BinStatus.PICKED_UP, "#14B8A6"),
    (BinStatus.UNAVAILABLE, "#EF4444"),
))


def badge_class(kind: str, status: str | None) -> str:
    """CSS badge class for a status in one of the admin lists."""
    table = _BADGE_TABLES.get(kind, {})
    return table.get(status or "", _DEFAULT_BADGE)


def request_color(status: str | None) -> str:
    return REQUEST_COLORS.get(status or "", NEUTRAL_COLOR)


def bin_color(status: str | None) -> str:
    return BIN_COLORS.get(status or "", NEUTRAL_COLOR)
