"""
Configuration for the portal.

This module contains:
- Settings loaded from the environment and .env
- Supabase connection details
"""

from .settings import PortalSettings, get_settings
from .supabase_config import get_supabase_config

__all__ = [
    'PortalSettings',
    'get_settings',
    'get_supabase_config',
]
