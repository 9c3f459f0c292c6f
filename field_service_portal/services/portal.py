"""
Portal session for the signed-in engineer

Builds the service call and expense boards, performs their initial load
and keeps them current by routing store change notifications into their
refresh entry points.
"""

import logging
from typing import List, Optional

from ..config.settings import PortalSettings, get_settings
from ..logging_conf import configure_logging
from ..models import EngineerIdentity
from .data_access import FieldServiceDataAccess, Subscription
from .expense_board import ExpenseBoard
from .invalidation import Invalidation, InvalidationRouter
from .service_call_board import ServiceCallBoard

logger = logging.getLogger(__name__)


class FieldServicePortal:
    def __init__(self, data_access: FieldServiceDataAccess,
                 settings: Optional[PortalSettings] = None):
        self.data_access = data_access
        self.settings = settings or get_settings()
        self.engineer: Optional[EngineerIdentity] = None
        self.service_calls: Optional[ServiceCallBoard] = None
        self.expenses: Optional[ExpenseBoard] = None
        self.router: Optional[InvalidationRouter] = None
        self._subscriptions: List[Subscription] = []

    @classmethod
    async def from_settings(cls, settings: Optional[PortalSettings] = None) -> "FieldServicePortal":
        """Configure logging and build a portal backed by Supabase"""
        from .supabase_data_access import SupabaseDataAccess

        settings = settings or get_settings()
        configure_logging(settings.LOG_LEVEL, settings.LOG_JSON)
        data_access = await SupabaseDataAccess.connect(settings)
        return cls(data_access, settings)

    @property
    def is_started(self) -> bool:
        return self.engineer is not None

    async def start(self) -> EngineerIdentity:
        """Resolve the engineer, load both boards and subscribe to their tables"""
        if self.engineer is not None:
            return self.engineer

        engineer = await self.data_access.current_user()
        self.service_calls = ServiceCallBoard(self.data_access, engineer.id)
        self.expenses = ExpenseBoard(self.data_access, engineer.id)
        self.router = InvalidationRouter()

        await self.service_calls.refresh()
        await self.expenses.refresh()

        try:
            self._subscriptions.append(await self.data_access.subscribe_to_changes(
                self.settings.SERVICE_CALLS_TABLE,
                f"assigned_engineer_id=eq.{engineer.id}",
                self.router.callback_for(self.settings.SERVICE_CALLS_TABLE, self.service_calls.refresh),
            ))
            self._subscriptions.append(await self.data_access.subscribe_to_changes(
                self.settings.EXPENSES_TABLE,
                f"engineer_id=eq.{engineer.id}",
                self.router.callback_for(self.settings.EXPENSES_TABLE, self.expenses.refresh),
            ))
        except Exception as e:
            logger.error(f"❌ Failed to subscribe to changes for {engineer.id}: {e}")
            await self.stop()
            raise

        self.engineer = engineer
        logger.info(f"✅ Portal started for {engineer.email or engineer.id}")
        return engineer

    async def refresh_all(self) -> bool:
        """Manual refresh of both boards"""
        if not self.is_started:
            return False
        calls_ok = await self.service_calls.refresh(Invalidation.manual())
        expenses_ok = await self.expenses.refresh(Invalidation.manual())
        return calls_ok and expenses_ok

    async def stop(self) -> None:
        """Drop change subscriptions and pending notification refreshes"""
        while self._subscriptions:
            subscription = self._subscriptions.pop()
            try:
                await self.data_access.unsubscribe(subscription)
            except Exception as e:
                logger.warning(f"⚠️ Failed to unsubscribe from {subscription.table}: {e}")
        if self.router is not None:
            self.router.cancel_all()
        self.engineer = None

    async def sign_out(self) -> None:
        await self.stop()
        await self.data_access.sign_out()
