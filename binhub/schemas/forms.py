"""Form Schemas — pydantic models for every HTML form the views submit.

Invariants:
    - Empty form inputs ("") are dropped before field validation (defaults apply)
    - Validation messages are user-facing: the first one becomes the error toast
    - to_payload() returns exactly the JSON body the API endpoint expects
      (None-valued optional keys omitted)

Design Decisions:
    - Enumerated inputs typed with the domain enums; use_enum_values keeps plain strings
      on the model, subset rules (signup roles, toggleable bin statuses) in field validators
    - Cross-field rules (supplier_type for suppliers, date order) in model_validator
"""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from binhub.core.domain_types import (
    BinStatus, PaymentMethod, PayoutStatus, RequestStatus, Role, ServiceCategory, SupplierType,
)
from binhub.core.status_flow import SUPPLIER_NEXT_STATUS, TOGGLEABLE_BIN_STATUSES

PASSWORD_MIN_LENGTH = 6


class BaseForm(BaseModel):
    """Shared form behaviour: strings stripped, blank inputs dropped so field defaults apply."""

    model_config = ConfigDict(use_enum_values=True)

    @model_validator(mode="before")
    @classmethod
    def drop_blanks(cls, data):
        if isinstance(data, dict):
            cleaned = {}
            for key, value in data.items():
                if isinstance(value, str):
                    value = value.strip()
                    if value == "":
                        continue
                cleaned[key] = value
            return cleaned
        return data

    def to_payload(self) -> dict:
        return self.model_dump(mode="json", exclude_none=True)


def _check_password(v: str | None) -> str | None:
    if v is not None and len(v) < PASSWORD_MIN_LENGTH:
        raise ValueError(
            f"Password must be at least {PASSWORD_MIN_LENGTH} characters",
        )
    return v


# --- Auth ---------------------------------------------------------------------

class LoginForm(BaseForm):
    phone: str = Field(min_length=1, max_length=32)
    password: str = Field(min_length=1)


class SignupForm(BaseForm):
    name: str = Field(min_length=1, max_length=120)
    phone: str = Field(min_length=1, max_length=32)
    email: str | None = Field(None, max_length=254)
    role: Role = Role.CUSTOMER.value
    supplier_type: SupplierType | None = None
    password: str

    @field_validator("role")
    @classmethod
    def self_service_role(cls, v: str) -> str:
        if v == Role.ADMIN.value:
            raise ValueError("Please choose customer or supplier")
        return v

    @field_validator("password")
    @classmethod
    def password_length(cls, v: str) -> str:
        return _check_password(v)

    @model_validator(mode="after")
    def supplier_needs_type(self):
        if self.role == Role.SUPPLIER.value and not self.supplier_type:
            raise ValueError("Please select supplier type")
        if self.role != Role.SUPPLIER.value:
            self.supplier_type = None
        return self


# --- Admin user management ----------------------------------------------------

class UserCreateForm(BaseForm):
    name: str = Field(min_length=1, max_length=120)
    phone: str = Field(min_length=1, max_length=32)
    email: str | None = Field(None, max_length=254)
    password: str | None = Field(None, validate_default=True)

    @field_validator("password")
    @classmethod
    def password_required(cls, v: str | None) -> str:
        if v is None:
            raise ValueError(
                f"Password must be at least {PASSWORD_MIN_LENGTH} characters",
            )
        return _check_password(v)


class UserUpdateForm(BaseForm):
    name: str = Field(min_length=1, max_length=120)
    email: str | None = Field(None, max_length=254)


# --- Bin catalogue & inventory ------------------------------------------------

class BinTypeForm(BaseForm):
    name: str = Field(min_length=1, max_length=120)
    description: str | None = Field(None, max_length=1000)
    is_active: bool = False

    def to_payload(self) -> dict:
        return {
            "name": self.name,
            "description": self.description or "",
            "is_active": self.is_active,
        }


class BinSizeForm(BaseForm):
    bin_type_id: int = Field(gt=0)
    size: str = Field(min_length=1, max_length=60)
    capacity_cubic_meters: float = Field(gt=0)
    is_active: bool = False

    def to_payload(self) -> dict:
        return {
            "bin_type_id": self.bin_type_id,
            "size": self.size,
            "capacity_cubic_meters": self.capacity_cubic_meters,
            "is_active": self.is_active,
        }


class PhysicalBinForm(BaseForm):
    """Admin bin creation; suppliers use the same form without supplier_id."""
    bin_code: str | None = Field(None, max_length=60)
    bin_type_id: int = Field(gt=0)
    bin_size_id: int = Field(gt=0)
    supplier_id: int | None = Field(None, gt=0)
    notes: str | None = Field(None, max_length=1000)


class AssignBinForm(BaseForm):
    """Empty supplier_id unassigns the bin."""
    supplier_id: int | None = Field(None, gt=0)

    def to_payload(self) -> dict:
        return {"supplier_id": self.supplier_id}


class BinStatusForm(BaseForm):
    status: BinStatus

    @field_validator("status")
    @classmethod
    def toggleable(cls, v: str) -> str:
        if v not in TOGGLEABLE_BIN_STATUSES:
            raise ValueError("Bins can only be marked available or unavailable")
        return v


# --- Bookings & quotes --------------------------------------------------------

class BookingForm(BaseForm):
    service_category: ServiceCategory = ServiceCategory.RESIDENTIAL.value
    bin_type_id: int = Field(gt=0)
    bin_size_id: int = Field(gt=0)
    location: str = Field(min_length=1, max_length=500)
    start_date: date
    end_date: date

    @model_validator(mode="after")
    def dates_in_order(self):
        if self.end_date < self.start_date:
            raise ValueError("End date must be on or after the start date")
        return self


class JobStatusForm(BaseForm):
    status: RequestStatus

    @field_validator("status")
    @classmethod
    def supplier_action(cls, v: str) -> str:
        if v not in SUPPLIER_NEXT_STATUS.values():
            raise ValueError("Unknown job status")
        return v


class QuoteForm(BaseForm):
    total_price: Decimal = Field(gt=0, max_digits=12, decimal_places=2)
    additional_charges: Decimal = Field(Decimal("0"), ge=0, max_digits=12, decimal_places=2)
    notes: str | None = Field(None, max_length=2000)

    def to_payload(self, service_request_id: int) -> dict:
        payload = {
            "service_request_id": service_request_id,
            "total_price": float(self.total_price),
            "additional_charges": float(self.additional_charges),
        }
        if self.notes:
            payload["notes"] = self.notes
        return payload

    @property
    def total(self) -> Decimal:
        return self.total_price + self.additional_charges


# --- Wallets & payouts --------------------------------------------------------

class PayoutRequestForm(BaseForm):
    amount: Decimal = Field(max_digits=12, decimal_places=2)

    def to_payload(self) -> dict:
        return {"amount": float(self.amount), "payment_method": PaymentMethod.BANK_TRANSFER.value}


class PayoutDecisionForm(BaseForm):
    status: PayoutStatus
    admin_notes: str | None = Field(None, max_length=2000)

    @field_validator("status")
    @classmethod
    def decided(cls, v: str) -> str:
        if v == PayoutStatus.PENDING.value:
            raise ValueError("Choose approve or reject")
        return v

    def to_payload(self) -> dict:
        return {"status": self.status, "admin_notes": self.admin_notes}


# --- Settings & supplier preferences -------------------------------------------

class SettingUpdateForm(BaseForm):
    """setting_type is echoed back by the edit form; it picks the value encoding."""
    value: str | None = None
    setting_type: str | None = None

    def to_payload(self) -> dict:
        if self.setting_type == "boolean":
            return {"value": "true" if self.value in ("true", "on", "1") else "false"}
        return {"value": self.value or ""}


class ServiceAreaForm(BaseForm):
    area: str = Field(min_length=1, max_length=120)


class OperatingHoursForm(BaseForm):
    """One row per weekday: <day>_enabled, <day>_start, <day>_end."""
    monday_enabled: bool = False
    monday_start: str = "09:00"
    monday_end: str = "17:00"
    tuesday_enabled: bool = False
    tuesday_start: str = "09:00"
    tuesday_end: str = "17:00"
    wednesday_enabled: bool = False
    wednesday_start: str = "09:00"
    wednesday_end: str = "17:00"
    thursday_enabled: bool = False
    thursday_start: str = "09:00"
    thursday_end: str = "17:00"
    friday_enabled: bool = False
    friday_start: str = "09:00"
    friday_end: str = "17:00"
    saturday_enabled: bool = False
    saturday_start: str = "09:00"
    saturday_end: str = "17:00"
    sunday_enabled: bool = False
    sunday_start: str = "09:00"
    sunday_end: str = "17:00"

    def to_hours(self) -> dict[str, dict]:
        hours = {}
        for day in WEEKDAYS:
            hours[day] = {
                "enabled": getattr(self, f"{day}_enabled"),
                "start": getattr(self, f"{day}_start"),
                "end": getattr(self, f"{day}_end"),
            }
        return hours


WEEKDAYS = (
    "monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday",
)


def default_operating_hours() -> dict[str, dict]:
    """Weekdays 09:00–17:00, weekends closed."""
    return {
        day: {"enabled": day not in ("saturday", "sunday"), "start": "09:00", "end": "17:00"}
        for day in WEEKDAYS
    }
