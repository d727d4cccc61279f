"""API Records — flat pydantic mirrors of the marketplace API entities.

Invariants:
    - Records are read-only projections: built from API JSON, rendered, discarded
    - Unknown fields are kept (extra="allow"); missing optional fields default to None
    - Money fields keep the API's raw representation (str or number); arithmetic
      goes through core.formatting.parse_amount

Design Decisions:
    - One model per entity, no cross-entity references (the API owns integrity)
    - parse_records() skips malformed items with a warning instead of failing the page
"""

import logging
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError

logger = logging.getLogger(__name__)

Amount = str | int | float | None


class Record(BaseModel):
    """Base for all API records."""
    model_config = ConfigDict(extra="allow", frozen=True)


class User(Record):
    id: int
    name: str
    phone: str
    email: str | None = None
    role: str
    supplier_type: str | None = None
    created_at: str | None = None


class BinType(Record):
    id: int
    name: str
    description: str | None = None
    is_active: bool = True


class BinSize(Record):
    id: int
    bin_type_id: int
    bin_type_name: str | None = None
    size: str
    capacity_cubic_meters: float | None = None
    is_active: bool = True


class PhysicalBin(Record):
    id: int
    bin_code: str
    bin_type_name: str | None = None
    bin_size: str | None = None
    capacity_cubic_meters: float | None = None
    status: str
    supplier_id: int | None = None
    supplier_name: str | None = None
    supplier_phone: str | None = None
    customer_name: str | None = None
    customer_phone: str | None = None
    current_customer_name: str | None = None
    request_id: str | None = None
    current_location: str | None = None
    notes: str | None = None


class ServiceRequest(Record):
    id: int
    request_id: str
    service_category: str | None = None
    bin_type_name: str | None = None
    bin_size: str | None = None
    location: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    status: str
    payment_status: str | None = None
    estimated_price: Amount = None
    customer_id: int | None = None
    customer_name: str | None = None
    customer_phone: str | None = None
    supplier_id: int | None = None
    supplier_name: str | None = None
    supplier_phone: str | None = None
    bin_code: str | None = None
    order_items_count: int | None = None
    attachment_url: str | None = None
    created_at: str | None = None


class OrderItem(Record):
    id: int
    bin_type_id: int | None = None
    bin_size_id: int | None = None
    bin_type_name: str | None = None
    bin_size: str | None = None
    bin_code: str | None = None
    physical_bin_id: int | None = None
    status: str | None = None


class Quote(Record):
    id: int
    quote_id: str
    service_request_id: int | None = None
    request_id: str | None = None
    supplier_id: int | None = None
    supplier_name: str | None = None
    supplier_phone: str | None = None
    supplier_type: str | None = None
    customer_id: int | None = None
    customer_name: str | None = None
    total_price: Amount = None
    additional_charges: Amount = None
    notes: str | None = None
    status: str
    created_at: str | None = None


class Invoice(Record):
    id: int
    invoice_id: str
    payout_id: int | None = None
    payout_transaction_id: str | None = None
    supplier_id: int | None = None
    supplier_name: str | None = None
    supplier_phone: str | None = None
    supplier_email: str | None = None
    total_amount: Amount = None
    payment_method: str | None = None
    payment_status: str | None = None
    invoice_date: str | None = None
    paid_at: str | None = None
    created_at: str | None = None
    order_items: list[OrderItem] | None = None


class Bill(Record):
    id: int
    bill_id: str
    service_request_id: int | None = None
    service_request_code: str | None = None
    customer_id: int | None = None
    customer_name: str | None = None
    customer_email: str | None = None
    supplier_id: int | None = None
    supplier_name: str | None = None
    supplier_email: str | None = None
    total_amount: Amount = None
    payment_method: str | None = None
    payment_status: str | None = None
    bill_date: str | None = None
    paid_at: str | None = None
    created_at: str | None = None


class Transaction(Record):
    id: int
    transaction_id: str
    booking_id: str | None = None
    customer_id: int | None = None
    supplier_id: int | None = None
    amount: Amount = None
    commission_amount: Amount = None
    net_amount: Amount = None
    payment_method: str | None = None
    payment_status: str | None = None
    transaction_type: str | None = None
    description: str | None = None
    customer_name: str | None = None
    customer_phone: str | None = None
    supplier_name: str | None = None
    supplier_phone: str | None = None
    created_at: str | None = None


class TransactionStats(Record):
    total_transactions: Amount = 0
    completed_transactions: Amount = 0
    pending_transactions: Amount = 0
    failed_transactions: Amount = 0
    total_revenue: Amount = 0
    total_commission: Amount = 0


class Wallet(Record):
    id: int | None = None
    supplier_id: int | None = None
    balance: Amount = 0
    pending_balance: Amount = 0
    total_earned: Amount = 0
    supplier_name: str | None = None
    supplier_phone: str | None = None
    supplier_email: str | None = None
    created_at: str | None = None
    updated_at: str | None = None


class WalletTransaction(Record):
    id: int
    amount: Amount = None
    transaction_type: str | None = None
    description: str | None = None
    status: str | None = None
    created_at: str | None = None


class Payout(Record):
    id: int
    payout_id: str
    supplier_id: int | None = None
    wallet_id: int | None = None
    amount: Amount = None
    status: str
    payment_method: str | None = None
    bank_details: str | dict | None = None
    admin_notes: str | None = None
    supplier_name: str | None = None
    supplier_phone: str | None = None
    supplier_email: str | None = None
    created_at: str | None = None
    updated_at: str | None = None
    processed_at: str | None = None


class SystemSetting(Record):
    id: int | None = None
    key: str
    value: Any = None
    type: str = "string"
    description: str | None = None
    category: str = "general"
    is_public: bool = False


R = TypeVar("R", bound=Record)


def parse_record(model: type[R], raw: Any) -> R | None:
    """Build one record, None when raw is missing or malformed."""
    if not isinstance(raw, dict):
        return None
    try:
        return model.model_validate(raw)
    except ValidationError as e:
        logger.warning(
            f"Skipping malformed {model.__name__}: {e.error_count()} error(s)",
        )
        return None


def parse_records(model: type[R], raw: Any) -> list[R]:
    """Build a list of records, skipping malformed items."""
    if not isinstance(raw, list):
        return []
    records = []
    for item in raw:
        record = parse_record(model, item)
        if record is not None:
            records.append(record)
    return records
