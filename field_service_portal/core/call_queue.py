import logging
from dataclasses import dataclass
from typing import Dict, Iterable, Tuple

from ..models import ServiceCall, ServiceCallStatus

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CallQueues:
    """An engineer's calls split into the three display columns"""
    assigned: Tuple[ServiceCall, ...] = ()
    in_progress: Tuple[ServiceCall, ...] = ()
    closed: Tuple[ServiceCall, ...] = ()

    @property
    def total(self) -> int:
        return len(self.assigned) + len(self.in_progress) + len(self.closed)

    def counts(self) -> Dict[str, int]:
        return {
            ServiceCallStatus.ASSIGNED.value: len(self.assigned),
            ServiceCallStatus.IN_PROGRESS.value: len(self.in_progress),
            ServiceCallStatus.CLOSED.value: len(self.closed),
        }


def partition(calls: Iterable[ServiceCall]) -> CallQueues:
    """
    Stable partition of a snapshot by status.

    Incoming order is kept inside each bucket. Calls with a status outside
    the lifecycle land in the assigned bucket.
    """
    assigned, in_progress, closed = [], [], []

    for call in calls:
        if call.status == ServiceCallStatus.IN_PROGRESS.value:
            in_progress.append(call)
        elif call.status == ServiceCallStatus.CLOSED.value:
            closed.append(call)
        else:
            if call.status != ServiceCallStatus.ASSIGNED.value:
                logger.warning(f"⚠️ Call {call.id} has unknown status {call.status!r}, showing as assigned")
            assigned.append(call)

    return CallQueues(
        assigned=tuple(assigned),
        in_progress=tuple(in_progress),
        closed=tuple(closed),
    )
