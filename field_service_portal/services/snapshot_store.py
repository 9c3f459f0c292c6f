"""
Versioned snapshot of the records currently on display

Every fetch takes a sequence token before it awaits the store. A finished
fetch is applied only when its token is newer than the snapshot held, so a
slow, superseded fetch can never overwrite a newer result.
"""

import itertools
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Generic, Optional, Sequence, Tuple, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class VersionedSnapshot(Generic[T]):
    sequence: int
    records: Tuple[T, ...] = ()
    fetched_at: Optional[datetime] = None

    @property
    def is_loaded(self) -> bool:
        return self.sequence > 0


class SnapshotStore(Generic[T]):
    """Owns the current snapshot and hands out fetch tokens"""

    def __init__(self, name: str = "snapshot"):
        self.name = name
        self._tokens = itertools.count(1)
        self._current: VersionedSnapshot[T] = VersionedSnapshot(sequence=0)

    @property
    def current(self) -> VersionedSnapshot[T]:
        return self._current

    def begin_fetch(self) -> int:
        """Reserve the sequence number for a fetch that is about to start"""
        return next(self._tokens)

    def apply(self, token: int, records: Sequence[T]) -> bool:
        """
        Install fetched records if the fetch is newer than what is held

        Returns:
            True if the snapshot was replaced, False if the result was stale
        """
        if token <= self._current.sequence:
            logger.debug(f"Discarding stale {self.name} fetch #{token} (holding #{self._current.sequence})")
            return False

        self._current = VersionedSnapshot(
            sequence=token,
            records=tuple(records),
            fetched_at=datetime.now(timezone.utc),
        )
        logger.debug(f"Applied {self.name} fetch #{token} with {len(records)} records")
        return True
