import asyncio
import pytest
from unittest.mock import AsyncMock

from field_service_portal.services.invalidation import (
    CHANGE_FEED,
    MANUAL,
    Invalidation,
    InvalidationRouter,
)


class TestInvalidation:

    def test_manual(self):
        invalidation = Invalidation.manual()

        assert invalidation.source == MANUAL
        assert invalidation.table is None

    def test_from_realtime_payload(self):
        payload = {
            "data": {
                "type": "UPDATE",
                "table": "service_calls",
                "schema": "public",
                "record": {"id": "c1", "status": "closed"},
                "old_record": {"id": "c1"},
            },
            "ids": [1],
        }

        invalidation = Invalidation.from_change_payload("service_calls", payload)

        assert invalidation == Invalidation(
            source=CHANGE_FEED, table="service_calls", event="UPDATE", record_id="c1",
        )

    def test_delete_payload_uses_old_record(self):
        payload = {"eventType": "DELETE", "new": {}, "old": {"id": "e9"}}

        invalidation = Invalidation.from_change_payload("expense_submissions", payload)

        assert invalidation.event == "DELETE"
        assert invalidation.record_id == "e9"
        assert invalidation.table == "expense_submissions"

    def test_unexpected_payload_shape(self):
        invalidation = Invalidation.from_change_payload("service_calls", {})

        assert invalidation.source == CHANGE_FEED
        assert invalidation.record_id is None


class TestInvalidationRouter:

    @pytest.mark.asyncio
    async def test_callback_schedules_refresh(self):
        handler = AsyncMock(return_value=True)
        router = InvalidationRouter()
        callback = router.callback_for("service_calls", handler)

        callback({"data": {"type": "INSERT", "record": {"id": "c7"}}})
        assert router.pending == 1
        await router.drain()

        handler.assert_awaited_once()
        invalidation = handler.await_args.args[0]
        assert invalidation.record_id == "c7"
        assert router.pending == 0

    @pytest.mark.asyncio
    async def test_failed_refresh_is_logged(self, caplog):
        handler = AsyncMock(side_effect=RuntimeError("boom"))
        router = InvalidationRouter()

        router.callback_for("service_calls", handler)({})
        await router.drain()
        await asyncio.sleep(0)

        assert "boom" in caplog.text

    @pytest.mark.asyncio
    async def test_cancel_all(self):
        gate = asyncio.Event()

        async def handler(invalidation):
            await gate.wait()

        router = InvalidationRouter()
        router.callback_for("expense_submissions", handler)({})
        await asyncio.sleep(0)

        router.cancel_all()
        await router.drain()

        assert router.pending == 0
