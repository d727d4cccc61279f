"""Formatting — money, dates and setting values as the views display them.

Invariants:
    - parse_amount never raises: None, blanks and garbage become Decimal("0")
    - format_date/format_datetime return "-" for missing or unparseable input
    - Money is formatted in USD with two decimals and thousands separators
"""

import json
from datetime import date, datetime
from decimal import Decimal, InvalidOperation

from binhub.core.domain_types import SettingType


def parse_amount(value) -> Decimal:
    """API amounts arrive as strings ("12.50"), numbers, or null."""
    if value is None or isinstance(value, bool):
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return Decimal("0")
    if not amount.is_finite():
        return Decimal("0")
    return amount


def format_currency(value) -> str:
    amount = parse_amount(value).quantize(Decimal("0.01"))
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.2f}"


def quote_total(total_price, additional_charges) -> Decimal:
    """Price shown to the customer: quoted price plus additional charges."""
    return parse_amount(total_price) + parse_amount(additional_charges)


def _parse_datetime(value) -> datetime | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def format_date(value) -> str:
    """2025-01-05T10:00:00Z -> Jan 5, 2025."""
    parsed = _parse_datetime(value)
    if parsed is None:
        return "-"
    return f"{parsed.strftime('%b')} {parsed.day}, {parsed.year}"


def format_datetime(value) -> str:
    """2025-01-05T14:30:00Z -> Jan 5, 2025, 02:30 PM."""
    parsed = _parse_datetime(value)
    if parsed is None:
        return "-"
    return f"{format_date(parsed)}, {parsed.strftime('%I:%M %p')}"


def parse_bank_details(raw) -> dict | None:
    """Payout bank details are stored by the API as a JSON string."""
    if not raw:
        return None
    if isinstance(raw, dict):
        return raw
    try:
        parsed = json.loads(raw)
    except (TypeError, ValueError):
        return None
    return parsed if isinstance(parsed, dict) else None


def format_setting_value(value, setting_type: str | None) -> str:
    """JSON settings are pretty-printed; everything else is shown verbatim."""
    if value is None:
        return ""
    if setting_type == SettingType.JSON.value:
        if isinstance(value, (dict, list)):
            return json.dumps(value, indent=2)
        try:
            return json.dumps(json.loads(value), indent=2)
        except (TypeError, ValueError):
            return str(value)
    return str(value)


def initials(name: str | None) -> str:
    """Avatar initials: first letter of the first two words."""
    if not name:
        return "?"
    parts = name.split()
    if not parts:
        return "?"
    return "".join(p[0] for p in parts[:2]).upper()
