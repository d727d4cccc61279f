"""Form schema tests — blank handling, cross-field rules, API payloads.

Tests cover:
    - BaseForm: blank strings become None, strings stripped
    - Signup: supplier_type required for suppliers, dropped for customers
    - Booking: end date on or after start date
    - Quote, payout, setting and operating-hours payloads
    - Enumerated fields: subset rules, values kept as plain strings
"""

from datetime import date
from decimal import Decimal

import pytest
from pydantic import ValidationError

from binhub.schemas.forms import (
    AssignBinForm, BinStatusForm, BinTypeForm, BookingForm, JobStatusForm, LoginForm,
    OperatingHoursForm,
    PayoutDecisionForm, PayoutRequestForm, QuoteForm, SettingUpdateForm,
    SignupForm, UserCreateForm, default_operating_hours,
)


def _messages(exc_info) -> list[str]:
    return [e["msg"] for e in exc_info.value.errors()]


# -- BaseForm ------------------------------------------------------------------

def test_blank_inputs_become_none_and_strings_are_stripped():
    form = UserCreateForm(name="  Cleo ", phone="0400", email="   ", password="secret1")
    assert form.name == "Cleo"
    assert form.email is None
    assert form.to_payload() == {"name": "Cleo", "phone": "0400", "password": "secret1"}


def test_login_requires_phone():
    with pytest.raises(ValidationError):
        LoginForm(phone="", password="x")


# -- Signup --------------------------------------------------------------------

def test_supplier_signup_needs_type():
    with pytest.raises(ValidationError) as exc_info:
        SignupForm(name="Sam", phone="0400", role="supplier", password="secret1")
    assert "Value error, Please select supplier type" in _messages(exc_info)


def test_customer_signup_drops_supplier_type():
    form = SignupForm(
        name="Cleo", phone="0400", role="customer",
        supplier_type="commercial", password="secret1",
    )
    assert form.supplier_type is None
    assert "supplier_type" not in form.to_payload()


def test_signup_short_password():
    with pytest.raises(ValidationError) as exc_info:
        SignupForm(name="Cleo", phone="0400", password="12345")
    assert "Value error, Password must be at least 6 characters" in _messages(exc_info)


def test_admin_user_create_requires_password():
    with pytest.raises(ValidationError) as exc_info:
        UserCreateForm(name="Cleo", phone="0400", password="")
    assert "Value error, Password must be at least 6 characters" in _messages(exc_info)


# -- Bins & bookings --------------------------------------------------------------

def test_bin_type_payload_defaults_description():
    form = BinTypeForm(name="Skip", is_active="true")
    assert form.to_payload() == {"name": "Skip", "description": "", "is_active": True}


def test_assign_blank_supplier_unassigns():
    assert AssignBinForm(supplier_id="").to_payload() == {"supplier_id": None}
    assert AssignBinForm(supplier_id="4").to_payload() == {"supplier_id": 4}


def test_booking_dates_in_order():
    with pytest.raises(ValidationError) as exc_info:
        BookingForm(
            bin_type_id=1, bin_size_id=2, location="1 Main St",
            start_date="2025-03-10", end_date="2025-03-01",
        )
    assert "Value error, End date must be on or after the start date" in _messages(exc_info)


def test_booking_payload():
    form = BookingForm(
        bin_type_id="1", bin_size_id="2", location="1 Main St",
        start_date="2025-03-01", end_date="2025-03-01",
    )
    assert form.start_date == date(2025, 3, 1)
    assert form.to_payload() == {
        "service_category": "residential",
        "bin_type_id": 1,
        "bin_size_id": 2,
        "location": "1 Main St",
        "start_date": "2025-03-01",
        "end_date": "2025-03-01",
    }


# -- Quotes & payouts -------------------------------------------------------------

def test_quote_payload_and_total():
    form = QuoteForm(total_price="250.00", additional_charges="", notes="")
    assert form.total == Decimal("250.00")
    assert form.to_payload(42) == {
        "service_request_id": 42,
        "total_price": 250.0,
        "additional_charges": 0.0,
    }


def test_quote_price_must_be_positive():
    with pytest.raises(ValidationError):
        QuoteForm(total_price="0")


def test_payout_request_payload():
    assert PayoutRequestForm(amount="75.5").to_payload() == {
        "amount": 75.5, "payment_method": "bank_transfer",
    }


def test_payout_request_rejects_garbage():
    with pytest.raises(ValidationError):
        PayoutRequestForm(amount="lots")


def test_payout_decision_sends_null_notes():
    assert PayoutDecisionForm(status="rejected", admin_notes="").to_payload() == {
        "status": "rejected", "admin_notes": None,
    }


def test_payout_decision_rejects_pending():
    with pytest.raises(ValidationError) as exc_info:
        PayoutDecisionForm(status="pending")
    assert "Choose approve or reject" in _messages(exc_info)[0]


def test_enum_fields_hold_plain_strings():
    form = PayoutDecisionForm(status="approved")
    assert type(form.status) is str
    assert f"Payout {form.status} successfully" == "Payout approved successfully"


@pytest.mark.parametrize("status", ["available", "unavailable"])
def test_bin_status_accepts_toggleable(status):
    assert BinStatusForm(status=status).status == status


def test_bin_status_rejects_workflow_status():
    with pytest.raises(ValidationError) as exc_info:
        BinStatusForm(status="loaded")
    assert "available or unavailable" in _messages(exc_info)[0]


def test_job_status_only_supplier_actions():
    assert JobStatusForm(status="pickup").status == "pickup"
    with pytest.raises(ValidationError):
        JobStatusForm(status="confirmed")
    with pytest.raises(ValidationError):
        JobStatusForm(status="bogus")


def test_signup_rejects_admin_role():
    with pytest.raises(ValidationError) as exc_info:
        SignupForm(name="Eve", phone="0400", role="admin", password="secret1")
    assert "Please choose customer or supplier" in _messages(exc_info)[0]


# -- Settings & hours --------------------------------------------------------------

@pytest.mark.parametrize("value, expected", [
    ("true", "true"), ("on", "true"), (None, "false"), ("", "false"),
])
def test_boolean_setting_encoding(value, expected):
    form = SettingUpdateForm(value=value, setting_type="boolean")
    assert form.to_payload() == {"value": expected}


def test_string_setting_passthrough():
    assert SettingUpdateForm(value="BinHub", setting_type="string").to_payload() == {
        "value": "BinHub",
    }


def test_operating_hours_roundtrip_defaults():
    hours = OperatingHoursForm(monday_enabled="true", monday_start="07:00").to_hours()
    assert hours["monday"] == {"enabled": True, "start": "07:00", "end": "17:00"}
    assert hours["sunday"]["enabled"] is False
    assert list(hours) == list(default_operating_hours())


def test_default_hours_weekends_closed():
    hours = default_operating_hours()
    assert hours["friday"]["enabled"] is True
    assert hours["saturday"]["enabled"] is False
