"""
Data access collaborator for the portal
The boards only talk to the backing store through this interface
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Dict, List

from ..models import EngineerIdentity, ExpenseSubmission, ServiceCall

ChangeCallback = Callable[[Dict[str, Any]], None]


@dataclass
class Subscription:
    """Handle for an active change subscription"""
    table: str
    filter: str
    handle: Any = None


class FieldServiceDataAccess(ABC):
    """Abstract base class for portal data access backends"""

    @abstractmethod
    async def fetch_service_calls(self, engineer_id: str) -> List[ServiceCall]:
        """Calls assigned to the engineer, customer embedded, scheduled date ascending"""
        pass

    @abstractmethod
    async def update_service_call(self, call_id: str, patch: Dict[str, Any]) -> ServiceCall:
        """Apply a status patch to one call; raises ServiceCallUpdateError on failure"""
        pass

    @abstractmethod
    async def fetch_expenses(self, engineer_id: str) -> List[ExpenseSubmission]:
        """Expenses submitted by the engineer, expense date descending"""
        pass

    @abstractmethod
    async def subscribe_to_changes(self, table: str, filter: str,
                                   callback: ChangeCallback) -> Subscription:
        """Invoke callback on any insert/update/delete matching the filter"""
        pass

    @abstractmethod
    async def unsubscribe(self, subscription: Subscription) -> None:
        """Stop a subscription returned by subscribe_to_changes"""
        pass

    @abstractmethod
    async def current_user(self) -> EngineerIdentity:
        """Identity of the signed-in engineer"""
        pass

    @abstractmethod
    async def sign_out(self) -> None:
        """End the auth session"""
        pass
