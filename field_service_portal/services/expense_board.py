"""
Expense board for one engineer
"""

import logging
from typing import List, Optional

from ..core.expense_summary import ALL_MONTHS, ExpenseSummary, available_months, summarize
from ..exceptions import FetchError
from ..models import ExpenseSubmission
from .invalidation import Invalidation
from .data_access import FieldServiceDataAccess
from .snapshot_store import SnapshotStore, VersionedSnapshot

logger = logging.getLogger(__name__)


class ExpenseBoard:
    """Read model of an engineer's expenses with a month selection"""

    def __init__(self, data_access: FieldServiceDataAccess, engineer_id: str):
        self.data_access = data_access
        self.engineer_id = engineer_id
        self.store: SnapshotStore[ExpenseSubmission] = SnapshotStore("expenses")
        self.last_error: Optional[Exception] = None
        self._selected_month = ALL_MONTHS

    @property
    def snapshot(self) -> VersionedSnapshot[ExpenseSubmission]:
        return self.store.current

    @property
    def selected_month(self) -> str:
        return self._selected_month

    @property
    def available_months(self) -> List[str]:
        return available_months(self.store.current.records)

    @property
    def summary(self) -> ExpenseSummary:
        return summarize(self.store.current.records, self._selected_month)

    def select_month(self, label: str) -> ExpenseSummary:
        """Select "all" or one of available_months and return its summary"""
        if label != ALL_MONTHS and label not in self.available_months:
            raise ValueError(f"No expenses recorded for {label!r}")
        self._selected_month = label
        return self.summary

    async def refresh(self, invalidation: Optional[Invalidation] = None) -> bool:
        """Re-fetch expenses; returns False on failure or when overtaken by a newer fetch"""
        invalidation = invalidation or Invalidation.manual()
        token = self.store.begin_fetch()
        logger.debug(f"Refreshing expenses #{token} for {self.engineer_id} ({invalidation.source})")

        try:
            expenses = await self.data_access.fetch_expenses(self.engineer_id)
        except FetchError as e:
            self.last_error = e
            logger.error(f"❌ Expense refresh #{token} failed, keeping snapshot #{self.snapshot.sequence}: {e}")
            return False

        if not self.store.apply(token, expenses):
            return False

        self.last_error = None
        if self._selected_month != ALL_MONTHS and self._selected_month not in self.available_months:
            logger.info(f"Month {self._selected_month} no longer has expenses, showing all")
            self._selected_month = ALL_MONTHS

        logger.info(f"✅ Loaded {len(expenses)} expenses for {self.engineer_id}")
        return True
