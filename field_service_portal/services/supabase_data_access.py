"""
Supabase data access for the portal
Reads service calls and expenses, writes status patches and wires realtime
change notifications through a single async Supabase client
"""

import logging
from typing import Any, Dict, List, Optional

import httpx
from postgrest.exceptions import APIError
from pydantic import ValidationError
from supabase import AsyncClient, acreate_client

from ..config.settings import PortalSettings, get_settings
from ..config.supabase_config import get_supabase_config
from ..exceptions import AuthSessionError, FetchError, ServiceCallUpdateError
from ..models import EngineerIdentity, ExpenseSubmission, ServiceCall
from .data_access import ChangeCallback, FieldServiceDataAccess, Subscription

logger = logging.getLogger(__name__)

STORE_ERRORS = (APIError, httpx.HTTPError)


class SupabaseDataAccess(FieldServiceDataAccess):
    """Supabase-backed collaborator; row-level security scopes every query to the engineer"""

    def __init__(self, client: AsyncClient, settings: Optional[PortalSettings] = None):
        self.client = client
        self.settings = settings or get_settings()

    @classmethod
    async def connect(cls, settings: Optional[PortalSettings] = None) -> "SupabaseDataAccess":
        """Create the async client from settings"""
        settings = settings or get_settings()
        config = get_supabase_config(settings)
        client = await acreate_client(config["url"], config["anon_key"])
        logger.info(f"✅ Supabase data access initialized: {config['url']}")
        return cls(client, settings)

    # ===== SERVICE CALLS =====

    async def fetch_service_calls(self, engineer_id: str) -> List[ServiceCall]:
        """Get the engineer's calls with customer embedded, earliest scheduled first"""
        try:
            result = await (
                self.client.table(self.settings.SERVICE_CALLS_TABLE)
                .select(f"*, customer:{self.settings.CUSTOMERS_TABLE}(*)")
                .eq("assigned_engineer_id", engineer_id)
                .order("scheduled_date", desc=False)
                .execute()
            )
            rows = result.data or []
            return [ServiceCall.model_validate(row) for row in rows]

        except STORE_ERRORS as e:
            logger.error(f"❌ Error fetching service calls for {engineer_id}: {e}")
            raise FetchError(f"Failed to fetch service calls: {e}", cause=e)
        except ValidationError as e:
            logger.error(f"❌ Malformed service call row for {engineer_id}: {e}")
            raise FetchError(f"Malformed service call data: {e}", cause=e)

    async def update_service_call(self, call_id: str, patch: Dict[str, Any]) -> ServiceCall:
        """Apply a status patch to one call"""
        try:
            result = await (
                self.client.table(self.settings.SERVICE_CALLS_TABLE)
                .update(patch)
                .eq("id", call_id)
                .execute()
            )
        except STORE_ERRORS as e:
            logger.error(f"❌ Error updating service call {call_id}: {e}")
            raise ServiceCallUpdateError(call_id, f"Failed to update service call: {e}", cause=e)

        if not result.data:
            # Reassigned, deleted, or hidden by row-level security
            logger.error(f"❌ Service call {call_id} was not updated (no matching row)")
            raise ServiceCallUpdateError(call_id, f"Service call {call_id} was not updated")

        logger.info(f"✅ Service call updated: {call_id} -> {patch.get('status')}")
        return ServiceCall.model_validate(result.data[0])

    # ===== EXPENSES =====

    async def fetch_expenses(self, engineer_id: str) -> List[ExpenseSubmission]:
        """Get the engineer's expenses, newest expense date first"""
        try:
            result = await (
                self.client.table(self.settings.EXPENSES_TABLE)
                .select("*")
                .eq("engineer_id", engineer_id)
                .order("expense_date", desc=True)
                .execute()
            )
            rows = result.data or []
            return [ExpenseSubmission.model_validate(row) for row in rows]

        except STORE_ERRORS as e:
            logger.error(f"❌ Error fetching expenses for {engineer_id}: {e}")
            raise FetchError(f"Failed to fetch expenses: {e}", cause=e)
        except ValidationError as e:
            logger.error(f"❌ Malformed expense row for {engineer_id}: {e}")
            raise FetchError(f"Malformed expense data: {e}", cause=e)

    # ===== CHANGE NOTIFICATIONS =====

    async def subscribe_to_changes(self, table: str, filter: str,
                                   callback: ChangeCallback) -> Subscription:
        """Listen for inserts, updates and deletes on `table` matching `filter`"""
        channel = self.client.channel(f"{table}_changes")
        channel.on_postgres_changes(
            "*",
            schema=self.settings.REALTIME_SCHEMA,
            table=table,
            filter=filter,
            callback=callback,
        )
        await channel.subscribe()
        logger.info(f"✅ Subscribed to {table} changes ({filter})")
        return Subscription(table=table, filter=filter, handle=channel)

    async def unsubscribe(self, subscription: Subscription) -> None:
        if subscription.handle is None:
            return
        await self.client.remove_channel(subscription.handle)
        subscription.handle = None
        logger.info(f"Unsubscribed from {subscription.table} changes")

    # ===== AUTH SESSION =====

    async def current_user(self) -> EngineerIdentity:
        try:
            response = await self.client.auth.get_user()
        except Exception as e:
            logger.error(f"❌ Error reading auth session: {e}")
            raise AuthSessionError(f"Failed to read auth session: {e}", cause=e)

        user = getattr(response, "user", None)
        if user is None:
            raise AuthSessionError("No engineer is signed in")
        return EngineerIdentity(id=str(user.id), email=user.email)

    async def sign_out(self) -> None:
        try:
            await self.client.auth.sign_out()
            logger.info("✅ Signed out")
        except Exception as e:
            logger.error(f"❌ Error signing out: {e}")
            raise AuthSessionError(f"Failed to sign out: {e}", cause=e)
