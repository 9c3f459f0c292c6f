"""
Service call status lifecycle

assigned -> in_progress -> closed, with the matching timestamp stamped
on each step. Nothing leaves closed.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from ..exceptions import InvalidTransitionError
from ..models import ServiceCall, ServiceCallStatus

logger = logging.getLogger(__name__)

ALLOWED_TRANSITIONS: Dict[str, str] = {
    ServiceCallStatus.ASSIGNED.value: ServiceCallStatus.IN_PROGRESS.value,
    ServiceCallStatus.IN_PROGRESS.value: ServiceCallStatus.CLOSED.value,
}

# Button label offered to the engineer for each non-terminal status
ACTION_LABELS: Dict[str, str] = {
    ServiceCallStatus.IN_PROGRESS.value: "Start Work",
    ServiceCallStatus.CLOSED.value: "Complete",
}


@dataclass(frozen=True)
class StatusPatch:
    """Fields written back to the store for one status change"""
    status: str
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"status": self.status}
        if self.started_at is not None:
            payload["started_at"] = self.started_at.isoformat()
        if self.completed_at is not None:
            payload["completed_at"] = self.completed_at.isoformat()
        return payload


@dataclass(frozen=True)
class TransitionResult:
    status: str
    patch: StatusPatch


@dataclass(frozen=True)
class StatusAction:
    label: str
    target_status: str


def _status_value(status: Any) -> str:
    return status.value if isinstance(status, ServiceCallStatus) else str(status)


def allowed_next_status(status: Any) -> Optional[str]:
    """Return the only status reachable from `status`, or None when terminal/unknown"""
    return ALLOWED_TRANSITIONS.get(_status_value(status))


def is_terminal(status: Any) -> bool:
    return _status_value(status) == ServiceCallStatus.CLOSED.value


def available_action(call: ServiceCall) -> Optional[StatusAction]:
    """Action the engineer may take on this call, if any"""
    target = allowed_next_status(call.status)
    if target is None:
        return None
    return StatusAction(label=ACTION_LABELS[target], target_status=target)


def transition(call: ServiceCall, requested_status: Any,
               now: Optional[datetime] = None) -> TransitionResult:
    """
    Compute the next state and the patch for a status change request

    Args:
        call: Current call record from the latest snapshot
        requested_status: Status the engineer asked for
        now: Timestamp to stamp; defaults to the current UTC time

    Returns:
        TransitionResult with the new status and the patch to apply

    Raises:
        InvalidTransitionError: If `requested_status` is not the forward step
            allowed from the call's current status
    """
    current = _status_value(call.status)
    requested = _status_value(requested_status)

    if ALLOWED_TRANSITIONS.get(current) != requested:
        logger.warning(f"Rejected transition for call {call.id}: {current} -> {requested}")
        raise InvalidTransitionError(current, requested)

    stamp = now or datetime.now(timezone.utc)
    if requested == ServiceCallStatus.IN_PROGRESS.value:
        patch = StatusPatch(status=requested, started_at=stamp)
    else:
        patch = StatusPatch(status=requested, completed_at=stamp)

    logger.debug(f"Transition for call {call.id}: {current} -> {requested}")
    return TransitionResult(status=requested, patch=patch)
