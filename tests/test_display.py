import pytest
from datetime import date, datetime, timezone
from decimal import Decimal

from field_service_portal.core import display


class TestIconsAndStyles:

    def test_known_icons(self):
        assert display.service_call_icon("repair") == "🛠️"
        assert display.expense_icon("fuel") == "⛽"

    def test_unknown_values_fall_back(self):
        assert display.service_call_icon("demolition") == display.DEFAULT_ICON
        assert display.expense_icon("gifts") == display.DEFAULT_ICON
        assert display.expense_status_style("escalated") == display.DEFAULT_STATUS_STYLE
        assert display.priority_style("urgent") == display.DEFAULT_STATUS_STYLE

    def test_labels(self):
        assert display.expense_status_label("under_review") == "Under Review"
        assert display.priority_badge("critical") == "CRITICAL"
        assert display.expense_status_style("paid") == "emerald"


class TestFormatting:

    def test_missing_timestamp(self):
        assert display.format_timestamp(None) == "Not scheduled"

    @pytest.mark.parametrize("value,expected", [
        (datetime(2025, 11, 3, 14, 30, tzinfo=timezone.utc), "Nov 3, 2:30 PM"),
        (datetime(2025, 1, 12, 0, 5), "Jan 12, 12:05 AM"),
        (datetime(2025, 6, 30, 12, 0), "Jun 30, 12:00 PM"),
    ])
    def test_timestamp(self, value, expected):
        assert display.format_timestamp(value) == expected

    def test_expense_date(self):
        assert display.format_expense_date(date(2025, 11, 3)) == "Nov 3, 2025"

    @pytest.mark.parametrize("amount,currency,expected", [
        (Decimal("284.25"), "USD", "$284.25"),
        (Decimal("1234.5"), "usd", "$1,234.50"),
        (Decimal("0.005"), "EUR", "€0.01"),
        (42, "GBP", "£42.00"),
        (Decimal("15"), "CAD", "CAD 15.00"),
    ])
    def test_currency(self, amount, currency, expected):
        assert display.format_currency(amount, currency) == expected
