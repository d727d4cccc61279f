"""Status Flow tests — tracking timeline, supplier next action, labels, badges, colours.

Tests cover:
    - tracking_timeline: done/current/upcoming marking, unknown status
    - next_status: supplier action chain and terminal states
    - format_status / badge_class / colours: neutral fallbacks for unknown input
"""

from binhub.core import status_flow


# -- tracking_timeline -------------------------------------------------------

def test_timeline_marks_steps_around_current():
    timeline = status_flow.tracking_timeline("confirmed")
    states = {step.key: step.state for step in timeline}
    assert states["pending"] == "done"
    assert states["accepted"] == "done"
    assert states["confirmed"] == "current"
    assert states["loaded"] == "upcoming"
    assert states["completed"] == "upcoming"


def test_timeline_keeps_step_order():
    keys = [step.key for step in status_flow.tracking_timeline("pending")]
    assert keys[0] == "pending"
    assert keys[-1] == "completed"
    assert len(keys) == len(status_flow.TRACKING_STEPS)


def test_timeline_unknown_status_is_all_upcoming():
    """on_delivery is a supplier-side status, not on the customer timeline."""
    timeline = status_flow.tracking_timeline("on_delivery")
    assert all(step.state == "upcoming" for step in timeline)


def test_step_index_unknown_is_negative():
    assert status_flow.step_index(None) == -1
    assert status_flow.step_index("picked_up") == 8


# -- next_status ---------------------------------------------------------------

def test_next_status_follows_supplier_chain():
    chain = ["confirmed"]
    while (nxt := status_flow.next_status(chain[-1])) is not None:
        chain.append(nxt)
    assert chain == [
        "confirmed", "on_delivery", "delivered", "ready_to_pickup", "pickup", "completed",
    ]


def test_next_status_none_for_terminal_and_unknown():
    assert status_flow.next_status("completed") is None
    assert status_flow.next_status("pending") is None
    assert status_flow.next_status(None) is None


def test_only_on_delivery_requires_bin_assignment():
    assert status_flow.requires_bin_assignment("on_delivery") is True
    assert status_flow.requires_bin_assignment("delivered") is False


# -- labels, badges, colours ------------------------------------------------------

def test_format_status_title_cases_words():
    assert status_flow.format_status("ready_to_pickup") == "Ready To Pickup"
    assert status_flow.format_status("pending") == "Pending"


def test_format_status_missing_is_dash():
    assert status_flow.format_status(None) == "-"
    assert status_flow.format_status("") == "-"


def test_badge_class_known_and_fallback():
    assert status_flow.badge_class("payout", "approved") == "badge badge-admin"
    assert status_flow.badge_class("payout", "exploded") == "badge"
    assert status_flow.badge_class("nonsense", "pending") == "badge"


def test_colours_fall_back_to_neutral():
    assert status_flow.request_color("cancelled") == "#EF4444"
    assert status_flow.request_color("mystery") == status_flow.NEUTRAL_COLOR
    assert status_flow.bin_color("available") == "#10B981"
    assert status_flow.bin_color(None) == status_flow.NEUTRAL_COLOR


def test_filters_start_with_all():
    for filters in (
        status_flow.BOOKING_FILTERS, status_flow.QUOTE_FILTERS,
        status_flow.PAYOUT_FILTERS, status_flow.SUPPLIER_JOB_FILTERS,
        status_flow.BIN_STATUS_FILTERS,
    ):
        assert filters[0] == "all"


def test_filters_follow_enum_order():
    assert status_flow.TRANSACTION_FILTERS == ("all", "completed", "pending", "failed", "refunded")
    assert status_flow.PAYMENT_METHOD_FILTERS == (
        "all", "cash", "online", "bank_transfer", "payout",
    )
    assert status_flow.SUPPLIER_JOB_FILTERS == (
        "all", "confirmed", "on_delivery", "delivered", "ready_to_pickup", "pickup", "completed",
    )
    assert "on_delivery" not in status_flow.BOOKING_FILTERS
    assert "pickup" not in status_flow.BOOKING_FILTERS
    assert status_flow.BOOKING_FILTERS[-1] == "cancelled"


def test_badges_keyed_by_wire_strings():
    assert status_flow.badge_class("payout", "approved") == "badge badge-admin"
    assert status_flow.badge_class("payment", "unpaid") == "badge badge-supplier"
    assert all(type(k) is str for k in status_flow.BOOKING_BADGES)
