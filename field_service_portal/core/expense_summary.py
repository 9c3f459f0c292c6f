"""
Expense aggregation

Buckets expenses into calendar-month labels ("November 2025"), filters by
a selected month and sums amounts per approval state with exact decimals.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Dict, Iterable, List, Sequence, Tuple

from ..models import ExpenseStatus, ExpenseSubmission

logger = logging.getLogger(__name__)

ALL_MONTHS = "all"
# English names regardless of LC_TIME, matching the portal's en-US labels
MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

APPROVED_STATUSES = frozenset({ExpenseStatus.APPROVED.value, ExpenseStatus.PAID.value})
PENDING_STATUSES = frozenset({ExpenseStatus.SUBMITTED.value, ExpenseStatus.UNDER_REVIEW.value})

ZERO = Decimal("0")


@dataclass(frozen=True)
class ExpenseTotals:
    total: Decimal = ZERO
    approved: Decimal = ZERO
    pending: Decimal = ZERO

    def as_dict(self) -> Dict[str, Decimal]:
        return {"total": self.total, "approved": self.approved, "pending": self.pending}


@dataclass(frozen=True)
class ExpenseSummary:
    month_filter: str
    filtered: Tuple[ExpenseSubmission, ...] = ()
    totals: ExpenseTotals = field(default_factory=ExpenseTotals)


def month_label(expense_date: date) -> str:
    """Human month label for an expense date, e.g. "November 2025" """
    return f"{MONTH_NAMES[expense_date.month - 1]} {expense_date.year}"


def _month_key(label: str) -> Tuple[int, int]:
    name, year = label.rsplit(" ", 1)
    return int(year), MONTH_NAMES.index(name)


def available_months(expenses: Iterable[ExpenseSubmission]) -> List[str]:
    """Distinct month labels, newest month first"""
    labels = {month_label(expense.expense_date) for expense in expenses}
    return sorted(labels, key=_month_key, reverse=True)


def filter_by_month(expenses: Iterable[ExpenseSubmission],
                    month_filter: str = ALL_MONTHS) -> List[ExpenseSubmission]:
    if month_filter == ALL_MONTHS:
        return list(expenses)
    return [e for e in expenses if month_label(e.expense_date) == month_filter]


def calculate_totals(expenses: Iterable[ExpenseSubmission]) -> ExpenseTotals:
    total = approved = pending = ZERO

    for expense in expenses:
        total += expense.amount
        if expense.status in APPROVED_STATUSES:
            approved += expense.amount
        elif expense.status in PENDING_STATUSES:
            pending += expense.amount

    return ExpenseTotals(total=total, approved=approved, pending=pending)


def summarize(expenses: Sequence[ExpenseSubmission],
              month_filter: str = ALL_MONTHS) -> ExpenseSummary:
    """
    Filter expenses to a month and total them

    Args:
        expenses: Snapshot of the engineer's expenses
        month_filter: "all" or a label produced by month_label()

    Returns:
        ExpenseSummary with the filtered records and their totals; an
        empty selection totals to zero
    """
    filtered = filter_by_month(expenses, month_filter)
    totals = calculate_totals(filtered)
    logger.debug(f"Summarized {len(filtered)}/{len(expenses)} expenses for {month_filter}: {totals.total}")
    return ExpenseSummary(month_filter=month_filter, filtered=tuple(filtered), totals=totals)
