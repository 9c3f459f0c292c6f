"""
Field Service Portal Package

Workflow engine behind the engineer portal:
- Service call status lifecycle and per-engineer call queues
- Expense submission filtering and monthly totals
- Supabase-backed data access and change notifications
"""

__version__ = "1.0.0"
__author__ = "Field Service Portal Team"

# Submodules are imported on-demand so the pure core works without
# the Supabase client installed
