"""Notifications — push event to toast/refresh mapping.

Invariants:
    - A role only ever subscribes to the events in ROLE_EVENTS[role]
    - A page refreshes only for events listed in PAGE_REFRESH_EVENTS[page]
    - Per-request pages (order detail) refresh only when the event's
      request_id matches the page's request_id
    - build_notification never raises on odd payloads (missing keys -> None)
    - A toast shows when the page refreshes for the event; new requests toast everywhere

Design Decisions:
    - Pure mapping tables: the event stream decides refresh and toast per frame, the page
      script only obeys the flags it receives
    - The request descriptor is read from payload["request"] when present,
      else from the payload itself
"""

from dataclasses import dataclass
from typing import Any

from binhub.core.domain_types import PushEvent, Role

ROLE_EVENTS: dict[str, tuple[str, ...]] = {
    Role.CUSTOMER.value: (
        PushEvent.NEW_QUOTE.value,
        PushEvent.REQUEST_STATUS_UPDATED.value,
    ),
    Role.SUPPLIER.value: (
        PushEvent.NEW_REQUEST.value,
        PushEvent.REQUEST_ACCEPTED.value,
        PushEvent.QUOTE_ACCEPTED.value,
        PushEvent.PAYMENT_RECEIVED.value,
    ),
    Role.ADMIN.value: (),
}

PAGE_REFRESH_EVENTS: dict[str, tuple[str, ...]] = {
    "customer_dashboard": (PushEvent.NEW_QUOTE.value, PushEvent.REQUEST_STATUS_UPDATED.value),
    "customer_orders": (PushEvent.NEW_QUOTE.value, PushEvent.REQUEST_STATUS_UPDATED.value),
    "customer_order_detail": (PushEvent.NEW_QUOTE.value,),
    "customer_tracking": (PushEvent.REQUEST_STATUS_UPDATED.value,),
    "supplier_dashboard": (PushEvent.NEW_REQUEST.value, PushEvent.REQUEST_ACCEPTED.value),
    "supplier_notifications": (PushEvent.NEW_REQUEST.value,),
    "supplier_jobs": (PushEvent.REQUEST_ACCEPTED.value, PushEvent.PAYMENT_RECEIVED.value),
}

# Pages that only refresh for their own request
REQUEST_SCOPED_PAGES = frozenset({"customer_order_detail"})

# Toasted on every page, refresh or not
GLOBAL_TOAST_EVENTS = frozenset({PushEvent.NEW_REQUEST.value})

_FIXED_MESSAGES = {
    PushEvent.NEW_QUOTE.value: "New quote received!",
    PushEvent.REQUEST_STATUS_UPDATED.value: "Status updated!",
    PushEvent.REQUEST_ACCEPTED.value: "Request accepted and confirmed!",
    PushEvent.QUOTE_ACCEPTED.value: "Your quote was accepted!",
    PushEvent.PAYMENT_RECEIVED.value: "Payment received!",
}


@dataclass(frozen=True)
class Notification:
    event: str
    message: str
    request_id: str | None = None
    bin_type_name: str | None = None

    def to_sse_event(self, page: str | None = None, page_request_id: str | None = None) -> dict:
        """Frame for one browser page, carrying its refresh and toast flags."""
        refresh = should_refresh(page, self, page_request_id)
        return {
            "type": "notification",
            "data": {
                "event": self.event,
                "message": self.message,
                "request_id": self.request_id,
                "bin_type_name": self.bin_type_name,
                "refresh": refresh,
                "toast": refresh or self.event in GLOBAL_TOAST_EVENTS,
            },
        }


def events_for_role(role: str | None) -> tuple[str, ...]:
    return ROLE_EVENTS.get(role or "", ())


def refresh_events_for_page(page: str | None) -> tuple[str, ...]:
    return PAGE_REFRESH_EVENTS.get(page or "", ())


def _request_descriptor(payload: Any) -> dict:
    if not isinstance(payload, dict):
        return {}
    inner = payload.get("request")
    if isinstance(inner, dict):
        return inner
    return payload


def build_notification(event: str, payload: Any) -> Notification:
    """Toast text and routing keys for one push event."""
    descriptor = _request_descriptor(payload)
    request_id = descriptor.get("request_id")
    bin_type_name = descriptor.get("bin_type_name")
    if event == PushEvent.NEW_REQUEST.value:
        message = f"New {bin_type_name or 'order'} request received!"
    else:
        message = _FIXED_MESSAGES.get(event, "You have a new update")
    return Notification(
        event=event,
        message=message,
        request_id=str(request_id) if request_id is not None else None,
        bin_type_name=bin_type_name if isinstance(bin_type_name, str) else None,
    )


def should_refresh(
    page: str | None, notification: Notification, page_request_id: str | None = None,
) -> bool:
    """Whether the page showing page_request_id must re-fetch for notification."""
    if notification.event not in refresh_events_for_page(page):
        return False
    if page in REQUEST_SCOPED_PAGES:
        return page_request_id is not None and notification.request_id == page_request_id
    return True


def increments_badge(role: str | None, event: str) -> bool:
    """Supplier unread badge counts new requests only."""
    return role == Role.SUPPLIER.value and event == PushEvent.NEW_REQUEST.value
