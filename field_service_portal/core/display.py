"""
Display helpers for call cards and expense rows

Every lookup has a fallback so a record with an unexpected category or
status still renders.
"""

from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Union

from ..models import (
    ExpenseCategory,
    ExpenseStatus,
    Priority,
    ServiceCallCategory,
)

DEFAULT_ICON = "📄"
NOT_SCHEDULED = "Not scheduled"

SERVICE_CALL_CATEGORY_ICONS = {
    ServiceCallCategory.INSTALLATION.value: "🔧",
    ServiceCallCategory.REPAIR.value: "🛠️",
    ServiceCallCategory.MAINTENANCE.value: "⚙️",
    ServiceCallCategory.INSPECTION.value: "🔍",
    ServiceCallCategory.OTHER.value: "📋",
}

EXPENSE_CATEGORY_ICONS = {
    ExpenseCategory.TRAVEL.value: "🚗",
    ExpenseCategory.MEALS.value: "🍽️",
    ExpenseCategory.MATERIALS.value: "🔧",
    ExpenseCategory.FUEL.value: "⛽",
    ExpenseCategory.ACCOMMODATION.value: "🏨",
    ExpenseCategory.OTHER.value: "📋",
}

# Badge colour per expense status
EXPENSE_STATUS_STYLES = {
    ExpenseStatus.DRAFT.value: "gray",
    ExpenseStatus.SUBMITTED.value: "blue",
    ExpenseStatus.UNDER_REVIEW.value: "yellow",
    ExpenseStatus.APPROVED.value: "green",
    ExpenseStatus.REJECTED.value: "red",
    ExpenseStatus.PAID.value: "emerald",
}
DEFAULT_STATUS_STYLE = "gray"

PRIORITY_STYLES = {
    Priority.LOW.value: "blue",
    Priority.MEDIUM.value: "yellow",
    Priority.HIGH.value: "orange",
    Priority.CRITICAL.value: "red",
}

CURRENCY_SYMBOLS = {"USD": "$", "EUR": "€", "GBP": "£"}

CENTS = Decimal("0.01")


def service_call_icon(category: str) -> str:
    return SERVICE_CALL_CATEGORY_ICONS.get(category, DEFAULT_ICON)


def expense_icon(category: str) -> str:
    return EXPENSE_CATEGORY_ICONS.get(category, DEFAULT_ICON)


def expense_status_style(status: str) -> str:
    return EXPENSE_STATUS_STYLES.get(status, DEFAULT_STATUS_STYLE)


def expense_status_label(status: str) -> str:
    """under_review -> "Under Review" """
    return status.replace("_", " ").title()


def priority_badge(priority: str) -> str:
    return priority.upper()


def priority_style(priority: str) -> str:
    return PRIORITY_STYLES.get(priority, DEFAULT_STATUS_STYLE)


def _hour_minute(value: datetime) -> str:
    hour = value.hour % 12 or 12
    suffix = "AM" if value.hour < 12 else "PM"
    return f"{hour}:{value.minute:02d} {suffix}"


def format_timestamp(value: Optional[datetime]) -> str:
    """Card timestamp, e.g. "Nov 3, 2:30 PM" """
    if value is None:
        return NOT_SCHEDULED
    return f"{value.strftime('%b')} {value.day}, {_hour_minute(value)}"


def format_expense_date(value: date) -> str:
    """Expense row date, e.g. "Nov 3, 2025" """
    return f"{value.strftime('%b')} {value.day}, {value.year}"


def format_currency(amount: Union[Decimal, int, str], currency: str = "USD") -> str:
    quantized = Decimal(amount).quantize(CENTS, rounding=ROUND_HALF_UP)
    sign = "-" if quantized < 0 else ""
    body = f"{abs(quantized):,.2f}"
    symbol = CURRENCY_SYMBOLS.get(currency.upper())
    if symbol:
        return f"{sign}{symbol}{body}"
    return f"{sign}{currency.upper()} {body}"
