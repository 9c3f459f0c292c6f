import asyncio
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any, Dict, List, Optional

import pytest

from field_service_portal.exceptions import FetchError, ServiceCallUpdateError
from field_service_portal.models import EngineerIdentity, ExpenseSubmission, ServiceCall
from field_service_portal.services.data_access import FieldServiceDataAccess, Subscription

ENGINEER_ID = "eng-001"


def make_call(call_id: str, status: str = "assigned", **overrides: Any) -> ServiceCall:
    data: Dict[str, Any] = {
        "id": call_id,
        "ticket_number": f"SC-{call_id.upper()}",
        "customer_id": "cust-001",
        "assigned_engineer_id": ENGINEER_ID,
        "title": f"Call {call_id}",
        "status": status,
        "scheduled_date": "2025-11-03T14:30:00+00:00",
    }
    if status in ("in_progress", "closed"):
        data["started_at"] = "2025-11-03T14:35:00+00:00"
    if status == "closed":
        data["completed_at"] = "2025-11-03T16:00:00+00:00"
    data.update(overrides)
    return ServiceCall.model_validate(data)


def make_expense(expense_id: str, amount: Any, status: str = "submitted",
                 expense_date: str = "2025-11-05", **overrides: Any) -> ExpenseSubmission:
    data: Dict[str, Any] = {
        "id": expense_id,
        "engineer_id": ENGINEER_ID,
        "expense_date": expense_date,
        "category": "travel",
        "amount": amount,
        "description": f"Expense {expense_id}",
        "status": status,
    }
    data.update(overrides)
    return ExpenseSubmission.model_validate(data)


class InMemoryDataAccess(FieldServiceDataAccess):
    """Collaborator backed by lists, with hooks to fail or stall calls"""

    def __init__(self, calls: Optional[List[ServiceCall]] = None,
                 expenses: Optional[List[ExpenseSubmission]] = None):
        self.calls = list(calls or [])
        self.expenses = list(expenses or [])
        self.fail_fetch = False
        self.fail_update = False
        self.updates: List[tuple] = []
        self.subscriptions: List[Subscription] = []
        self.callbacks: Dict[str, Any] = {}
        self.signed_out = False
        self.fetch_gates: List[asyncio.Event] = []

    async def _maybe_wait(self) -> None:
        if self.fetch_gates:
            gate = self.fetch_gates.pop(0)
            await gate.wait()

    async def fetch_service_calls(self, engineer_id: str) -> List[ServiceCall]:
        snapshot = [c for c in self.calls if c.assigned_engineer_id == engineer_id]
        await self._maybe_wait()
        if self.fail_fetch:
            raise FetchError("store unavailable")
        return snapshot

    async def update_service_call(self, call_id: str, patch: Dict[str, Any]) -> ServiceCall:
        self.updates.append((call_id, patch))
        if self.fail_update:
            raise ServiceCallUpdateError(call_id, "row not updated")
        for index, call in enumerate(self.calls):
            if call.id == call_id:
                updated = call.model_copy(update={
                    key: (datetime.fromisoformat(value) if key.endswith("_at") else value)
                    for key, value in patch.items()
                })
                self.calls[index] = updated
                return updated
        raise ServiceCallUpdateError(call_id, "row not updated")

    async def fetch_expenses(self, engineer_id: str) -> List[ExpenseSubmission]:
        snapshot = [e for e in self.expenses if e.engineer_id == engineer_id]
        await self._maybe_wait()
        if self.fail_fetch:
            raise FetchError("store unavailable")
        return snapshot

    async def subscribe_to_changes(self, table, filter, callback) -> Subscription:
        subscription = Subscription(table=table, filter=filter, handle=object())
        self.subscriptions.append(subscription)
        self.callbacks[table] = callback
        return subscription

    async def unsubscribe(self, subscription: Subscription) -> None:
        self.subscriptions.remove(subscription)
        self.callbacks.pop(subscription.table, None)

    async def current_user(self) -> EngineerIdentity:
        return EngineerIdentity(id=ENGINEER_ID, email="engineer@example.com")

    async def sign_out(self) -> None:
        self.signed_out = True


@pytest.fixture
def fixed_now():
    return datetime(2025, 11, 3, 15, 0, tzinfo=timezone.utc)


@pytest.fixture
def data_access():
    return InMemoryDataAccess(
        calls=[
            make_call("c1", "assigned"),
            make_call("c2", "in_progress"),
            make_call("c3", "closed"),
            make_call("c4", "assigned"),
            make_call("other", "assigned", assigned_engineer_id="eng-999"),
        ],
        expenses=[
            make_expense("e1", "85.50", "approved", "2025-11-10"),
            make_expense("e2", "42.00", "submitted", "2025-11-02"),
            make_expense("e3", "156.75", "under_review", "2025-10-28"),
            make_expense("e4", "30.00", "rejected", "2025-09-15"),
            make_expense("other", "999.99", "approved", engineer_id="eng-999"),
        ],
    )
