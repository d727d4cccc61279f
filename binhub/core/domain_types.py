"""Domain Types — enums for every status and role string the API emits.

Invariants:
    - Enum values are exactly the wire strings used by the marketplace API
    - Supplier job statuses (on_delivery, pickup) and customer tracking statuses
      (in_progress, loaded, picked_up) are distinct members of RequestStatus

Design Decisions:
    - str Enums: compare equal to the raw JSON strings and render in templates as-is
"""

from enum import Enum


class Role(str, Enum):
    """Account roles — decides which view family a user lands on."""
    ADMIN = "admin"
    CUSTOMER = "customer"
    SUPPLIER = "supplier"


class RequestStatus(str, Enum):
    """Service request / booking statuses."""
    PENDING = "pending"
    QUOTED = "quoted"
    ACCEPTED = "accepted"
    CONFIRMED = "confirmed"
    IN_PROGRESS = "in_progress"
    LOADED = "loaded"
    ON_DELIVERY = "on_delivery"
    DELIVERED = "delivered"
    READY_TO_PICKUP = "ready_to_pickup"
    PICKUP = "pickup"
    PICKED_UP = "picked_up"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class BinStatus(str, Enum):
    """Physical bin statuses shown in inventory filters."""
    AVAILABLE = "available"
    CONFIRMED = "confirmed"
    LOADED = "loaded"
    DELIVERED = "delivered"
    READY_TO_PICKUP = "ready_to_pickup"
    PICKED_UP = "picked_up"
    UNAVAILABLE = "unavailable"


class QuoteStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class PaymentStatus(str, Enum):
    """Invoice and bill payment statuses."""
    PAID = "paid"
    UNPAID = "unpaid"
    REFUNDED = "refunded"


class PaymentMethod(str, Enum):
    CASH = "cash"
    ONLINE = "online"
    BANK_TRANSFER = "bank_transfer"
    PAYOUT = "payout"


class TransactionStatus(str, Enum):
    COMPLETED = "completed"
    PENDING = "pending"
    FAILED = "failed"
    REFUNDED = "refunded"


class PayoutStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class ServiceCategory(str, Enum):
    RESIDENTIAL = "residential"
    COMMERCIAL = "commercial"


class SupplierType(str, Enum):
    """Which customer segments a supplier serves."""
    COMMERCIAL = "commercial"
    RESIDENTIAL = "residential"
    COMMERCIAL_RESIDENTIAL = "commercial_residential"


class SettingType(str, Enum):
    """System setting value types — decides the edit widget."""
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    JSON = "json"


class PushEvent(str, Enum):
    """Events emitted by the marketplace push channel."""
    NEW_REQUEST = "new_request"
    NEW_QUOTE = "new_quote"
    REQUEST_ACCEPTED = "request_accepted"
    REQUEST_STATUS_UPDATED = "request_status_updated"
    QUOTE_ACCEPTED = "quote_accepted"
    PAYMENT_RECEIVED = "payment_received"


class ToastKind(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"
