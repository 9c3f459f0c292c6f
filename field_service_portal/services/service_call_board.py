"""
Service call board for one engineer

Holds the latest fetched snapshot of the engineer's calls, exposes the
three status queues and runs status changes through the lifecycle rules.
The backing store stays authoritative: after every update attempt the
board re-fetches rather than patching its own copy.
"""

import logging
from typing import Any, Dict, Optional

from ..core.call_lifecycle import transition
from ..core.call_queue import CallQueues, partition
from ..exceptions import FetchError, ServiceCallNotFoundError, ServiceCallUpdateError
from ..models import ServiceCall
from .data_access import FieldServiceDataAccess
from .invalidation import STATUS_UPDATE, Invalidation
from .snapshot_store import SnapshotStore, VersionedSnapshot

logger = logging.getLogger(__name__)


class ServiceCallBoard:
    """Read model of an engineer's service calls"""

    def __init__(self, data_access: FieldServiceDataAccess, engineer_id: str):
        self.data_access = data_access
        self.engineer_id = engineer_id
        self.store: SnapshotStore[ServiceCall] = SnapshotStore("service_calls")
        self.last_error: Optional[Exception] = None

    @property
    def snapshot(self) -> VersionedSnapshot[ServiceCall]:
        return self.store.current

    @property
    def queues(self) -> CallQueues:
        return partition(self.store.current.records)

    @property
    def counts(self) -> Dict[str, int]:
        return self.queues.counts()

    def get_call(self, call_id: str) -> ServiceCall:
        for call in self.store.current.records:
            if call.id == call_id:
                return call
        raise ServiceCallNotFoundError(call_id)

    async def refresh(self, invalidation: Optional[Invalidation] = None) -> bool:
        """
        Re-fetch the engineer's calls

        Args:
            invalidation: Why the refresh was requested (manual when omitted)

        Returns:
            True if a new snapshot was installed; False if the fetch failed
            or was overtaken by a newer one. The previous snapshot is kept
            in both cases.
        """
        invalidation = invalidation or Invalidation.manual()
        token = self.store.begin_fetch()
        logger.debug(f"Refreshing service calls #{token} for {self.engineer_id} ({invalidation.source})")

        try:
            calls = await self.data_access.fetch_service_calls(self.engineer_id)
        except FetchError as e:
            self.last_error = e
            logger.error(f"❌ Service call refresh #{token} failed, keeping snapshot #{self.snapshot.sequence}: {e}")
            return False

        applied = self.store.apply(token, calls)
        if applied:
            self.last_error = None
            logger.info(f"✅ Loaded {len(calls)} service calls for {self.engineer_id}")
        return applied

    async def change_status(self, call_id: str, requested_status: Any) -> ServiceCall:
        """
        Move a call to its next status

        Args:
            call_id: Id of a call in the current snapshot
            requested_status: Target status offered by the call's action

        Returns:
            The call as held in the refreshed snapshot, or the row returned
            by the store when the re-fetch did not produce a newer snapshot

        Raises:
            ServiceCallNotFoundError: If the call is not in the current snapshot
            InvalidTransitionError: If the lifecycle does not allow the change
            ServiceCallUpdateError: If the store rejected the update
        """
        call = self.get_call(call_id)
        result = transition(call, requested_status)

        try:
            updated = await self.data_access.update_service_call(call_id, result.patch.to_payload())
        except ServiceCallUpdateError as e:
            self.last_error = e
            logger.error(f"❌ Status change {call.status} -> {result.status} failed for {call.ticket_number}: {e}")
            await self.refresh(Invalidation(source=STATUS_UPDATE, record_id=call_id))
            raise

        logger.info(f"✅ {call.ticket_number}: {call.status} -> {result.status}")
        sequence_before = self.snapshot.sequence
        refreshed = await self.refresh(Invalidation(source=STATUS_UPDATE, record_id=call_id))

        if not refreshed and self.snapshot.sequence <= sequence_before:
            # Snapshot still predates the update; the store's row is authoritative
            return updated

        try:
            return self.get_call(call_id)
        except ServiceCallNotFoundError:
            # The call left the engineer's queue in the meantime
            return updated
