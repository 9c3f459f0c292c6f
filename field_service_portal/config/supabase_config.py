"""
Supabase configuration for the portal
Resolves the project URL and anon key the engineer's session runs against
"""

from typing import Dict, Optional

from ..exceptions import ConfigurationError
from .settings import PortalSettings, get_settings


def get_supabase_config(settings: Optional[PortalSettings] = None) -> Dict[str, str]:
    """Get Supabase URL and anon key, failing loudly when either is missing"""
    settings = settings or get_settings()

    if not settings.SUPABASE_URL:
        raise ConfigurationError("SUPABASE_URL environment variable is required")
    if not settings.SUPABASE_ANON_KEY:
        raise ConfigurationError("SUPABASE_ANON_KEY environment variable is required")

    return {
        "url": settings.SUPABASE_URL,
        "anon_key": settings.SUPABASE_ANON_KEY,
    }
