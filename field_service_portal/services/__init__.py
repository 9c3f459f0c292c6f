"""
Service layer modules for the portal.

This module contains service implementations for:
- The data access collaborator and its Supabase backend
- Versioned snapshots and invalidation messages
- Service call and expense boards
- The engineer's portal session

The Supabase backend is imported on-demand from supabase_data_access.
"""

from .data_access import FieldServiceDataAccess, Subscription
from .expense_board import ExpenseBoard
from .invalidation import Invalidation, InvalidationRouter
from .portal import FieldServicePortal
from .service_call_board import ServiceCallBoard
from .snapshot_store import SnapshotStore, VersionedSnapshot

__all__ = [
    'FieldServiceDataAccess',
    'Subscription',
    'ExpenseBoard',
    'Invalidation',
    'InvalidationRouter',
    'FieldServicePortal',
    'ServiceCallBoard',
    'SnapshotStore',
    'VersionedSnapshot'
]
