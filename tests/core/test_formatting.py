"""Formatting tests — amounts, currency, dates, bank details, setting values."""

from decimal import Decimal

import pytest

from binhub.core import formatting


@pytest.mark.parametrize("raw, expected", [
    ("12.50", Decimal("12.50")),
    (7, Decimal("7")),
    (3.25, Decimal("3.25")),
    (None, Decimal("0")),
    ("", Decimal("0")),
    ("abc", Decimal("0")),
    ("NaN", Decimal("0")),
    (True, Decimal("0")),
])
def test_parse_amount(raw, expected):
    assert formatting.parse_amount(raw) == expected


def test_format_currency_two_decimals_with_separators():
    assert formatting.format_currency("1234.5") == "$1,234.50"
    assert formatting.format_currency(None) == "$0.00"
    assert formatting.format_currency("-20") == "-$20.00"


def test_quote_total_adds_charges():
    assert formatting.quote_total("100.00", "15.50") == Decimal("115.50")
    assert formatting.quote_total("100", None) == Decimal("100")


def test_format_date_iso_with_z():
    assert formatting.format_date("2025-01-05T10:00:00Z") == "Jan 5, 2025"


def test_format_date_plain_date():
    assert formatting.format_date("2025-12-31") == "Dec 31, 2025"


def test_format_date_garbage_is_dash():
    assert formatting.format_date(None) == "-"
    assert formatting.format_date("not a date") == "-"


def test_format_datetime_includes_time():
    assert formatting.format_datetime("2025-01-05T14:30:00Z") == "Jan 5, 2025, 02:30 PM"


def test_parse_bank_details_from_json_string():
    raw = '{"account_name": "Sam", "bsb": "123-456"}'
    assert formatting.parse_bank_details(raw) == {"account_name": "Sam", "bsb": "123-456"}


def test_parse_bank_details_rejects_non_objects():
    assert formatting.parse_bank_details(None) is None
    assert formatting.parse_bank_details("[1, 2]") is None
    assert formatting.parse_bank_details("{broken") is None
    assert formatting.parse_bank_details({"bsb": "1"}) == {"bsb": "1"}


def test_setting_value_json_pretty_printed():
    assert formatting.format_setting_value('{"a":1}', "json") == '{\n  "a": 1\n}'
    assert formatting.format_setting_value({"a": 1}, "json") == '{\n  "a": 1\n}'


def test_setting_value_other_types_verbatim():
    assert formatting.format_setting_value(10, "number") == "10"
    assert formatting.format_setting_value("{bad", "json") == "{bad"
    assert formatting.format_setting_value(None, "string") == ""


def test_initials():
    assert formatting.initials("Sam Supplier Jones") == "SS"
    assert formatting.initials("cleo") == "C"
    assert formatting.initials(None) == "?"
    assert formatting.initials("   ") == "?"
