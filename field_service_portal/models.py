"""
Record models for service calls, customers and expense submissions
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger(__name__)


class ServiceCallStatus(str, Enum):
    ASSIGNED = "assigned"
    IN_PROGRESS = "in_progress"
    CLOSED = "closed"


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ServiceCallCategory(str, Enum):
    INSTALLATION = "installation"
    REPAIR = "repair"
    MAINTENANCE = "maintenance"
    INSPECTION = "inspection"
    OTHER = "other"


class ExpenseCategory(str, Enum):
    TRAVEL = "travel"
    MEALS = "meals"
    MATERIALS = "materials"
    FUEL = "fuel"
    ACCOMMODATION = "accommodation"
    OTHER = "other"


class ExpenseStatus(str, Enum):
    DRAFT = "draft"
    SUBMITTED = "submitted"
    UNDER_REVIEW = "under_review"
    APPROVED = "approved"
    REJECTED = "rejected"
    PAID = "paid"


def _warn_unknown(value: Any, enum_cls: type, field_name: str) -> Any:
    """Log values the store sent that are outside the known set, but keep them"""
    known = {member.value for member in enum_cls}
    raw = value.value if isinstance(value, Enum) else value
    if raw not in known:
        logger.warning(f"⚠️ Unknown {field_name} value from store: {raw!r}")
    return raw


class Customer(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    company: str = ""
    address: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ServiceCall(BaseModel):
    """A service call as delivered by the store, with its customer embedded"""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    ticket_number: str
    customer_id: Optional[str] = None
    assigned_engineer_id: Optional[str] = None
    title: str
    description: str = ""
    priority: str = Priority.MEDIUM.value
    status: str = ServiceCallStatus.ASSIGNED.value
    category: str = ServiceCallCategory.OTHER.value
    location: str = ""
    scheduled_date: Optional[datetime] = None
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    notes: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    customer: Optional[Customer] = None

    @field_validator("status", mode="before")
    @classmethod
    def check_status(cls, value: Any) -> Any:
        return _warn_unknown(value, ServiceCallStatus, "service call status")

    @field_validator("priority", mode="before")
    @classmethod
    def check_priority(cls, value: Any) -> Any:
        return _warn_unknown(value, Priority, "priority")

    @field_validator("category", mode="before")
    @classmethod
    def check_category(cls, value: Any) -> Any:
        return _warn_unknown(value, ServiceCallCategory, "service call category")

    @field_validator("description", "location", "notes", mode="before")
    @classmethod
    def none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class ExpenseSubmission(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    engineer_id: str
    expense_date: date
    category: str = ExpenseCategory.OTHER.value
    amount: Decimal = Field(..., gt=0)
    currency: str = "USD"
    description: str = ""
    receipt_url: str = ""
    service_call_id: Optional[str] = None
    status: str = ExpenseStatus.SUBMITTED.value
    submitted_at: Optional[datetime] = None
    reviewed_at: Optional[datetime] = None
    reviewed_by: Optional[str] = None
    review_notes: str = ""
    payment_date: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("amount", mode="before")
    @classmethod
    def amount_from_text(cls, value: Any) -> Any:
        # PostgREST sends numeric columns as JSON numbers
        if isinstance(value, float):
            return Decimal(str(value))
        return value

    @field_validator("status", mode="before")
    @classmethod
    def check_status(cls, value: Any) -> Any:
        return _warn_unknown(value, ExpenseStatus, "expense status")

    @field_validator("category", mode="before")
    @classmethod
    def check_category(cls, value: Any) -> Any:
        return _warn_unknown(value, ExpenseCategory, "expense category")

    @field_validator("currency", mode="before")
    @classmethod
    def default_currency(cls, value: Any) -> Any:
        return value or "USD"

    @field_validator("description", "receipt_url", "review_notes", mode="before")
    @classmethod
    def none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class EngineerIdentity(BaseModel):
    """The signed-in engineer, as reported by the auth session"""

    model_config = ConfigDict(frozen=True)

    id: str
    email: Optional[str] = None
