"""
Invalidation messages

Store change notifications are turned into an Invalidation and passed to a
board's refresh entry point. Boards never apply notification payloads as
deltas; they always re-fetch.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Optional, Set

logger = logging.getLogger(__name__)

MANUAL = "manual"
CHANGE_FEED = "change_feed"
STATUS_UPDATE = "status_update"


@dataclass(frozen=True)
class Invalidation:
    """Tells a board its snapshot is out of date"""
    source: str = MANUAL
    table: Optional[str] = None
    event: Optional[str] = None
    record_id: Optional[str] = None

    @classmethod
    def manual(cls) -> "Invalidation":
        return cls(source=MANUAL)

    @classmethod
    def from_change_payload(cls, table: str, payload: Dict[str, Any]) -> "Invalidation":
        """Build from a realtime postgres_changes payload"""
        data = payload.get("data", payload) if isinstance(payload, dict) else {}
        event = data.get("type") or data.get("eventType")
        record = data.get("record") or data.get("new") or {}
        old_record = data.get("old_record") or data.get("old") or {}
        record_id = record.get("id") or old_record.get("id")
        return cls(
            source=CHANGE_FEED,
            table=data.get("table", table),
            event=str(event) if event else None,
            record_id=str(record_id) if record_id else None,
        )


RefreshHandler = Callable[[Invalidation], Awaitable[Any]]


class InvalidationRouter:
    """Routes change notifications for a table to an async refresh handler"""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop
        self._pending: Set["asyncio.Task[Any]"] = set()

    @property
    def pending(self) -> int:
        return len(self._pending)

    def callback_for(self, table: str, handler: RefreshHandler) -> Callable[[Dict[str, Any]], None]:
        """Build the synchronous callback handed to the change subscription"""
        loop = self._loop or asyncio.get_running_loop()

        def _on_change(payload: Dict[str, Any]) -> None:
            invalidation = Invalidation.from_change_payload(table, payload)
            logger.info(f"🔄 Change on {table} ({invalidation.event}), refreshing")
            task = loop.create_task(handler(invalidation))
            self._pending.add(task)
            task.add_done_callback(self._on_done)

        return _on_change

    def _on_done(self, task: "asyncio.Task[Any]") -> None:
        self._pending.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error(f"❌ Refresh after change notification failed: {error}")

    async def drain(self) -> None:
        """Wait for refreshes triggered by notifications to finish"""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    def cancel_all(self) -> None:
        for task in list(self._pending):
            task.cancel()
