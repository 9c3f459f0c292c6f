from field_service_portal.services.snapshot_store import SnapshotStore, VersionedSnapshot


class TestSnapshotStore:
    """Unit tests for sequence-gated snapshot replacement"""

    def test_initial_snapshot_is_empty(self):
        store = SnapshotStore("calls")

        assert store.current == VersionedSnapshot(sequence=0)
        assert not store.current.is_loaded

    def test_tokens_increase(self):
        store = SnapshotStore()

        assert [store.begin_fetch() for _ in range(3)] == [1, 2, 3]

    def test_apply_installs_newer_fetch(self):
        store = SnapshotStore()
        token = store.begin_fetch()

        assert store.apply(token, ["a", "b"])
        assert store.current.sequence == token
        assert store.current.records == ("a", "b")
        assert store.current.fetched_at is not None

    def test_stale_fetch_does_not_overwrite_newer(self):
        store = SnapshotStore()
        slow = store.begin_fetch()
        fast = store.begin_fetch()

        assert store.apply(fast, ["new"])
        assert not store.apply(slow, ["old"])
        assert store.current.records == ("new",)
        assert store.current.sequence == fast

    def test_older_fetch_finishing_first_is_replaced_later(self):
        store = SnapshotStore()
        first = store.begin_fetch()
        second = store.begin_fetch()

        assert store.apply(first, ["first"])
        assert store.apply(second, ["second"])
        assert store.current.records == ("second",)

    def test_same_token_applied_once(self):
        store = SnapshotStore()
        token = store.begin_fetch()

        assert store.apply(token, ["a"])
        assert not store.apply(token, ["b"])
