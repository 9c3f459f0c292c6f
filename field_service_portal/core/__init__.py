"""
Core workflow logic for the field service portal.

This module contains the pure rules for:
- Service call status transitions
- Call queue partitioning
- Expense month filtering and totals
- Display fallbacks and formatting
"""

from . import call_lifecycle
from . import call_queue
from . import expense_summary
from . import display

__all__ = [
    'call_lifecycle',
    'call_queue',
    'expense_summary',
    'display'
]
