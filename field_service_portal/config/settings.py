from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

# Ensure .env is read from repo root (if present)
load_dotenv()


class PortalSettings(BaseSettings):
    # Read .env by default (repo root). You can also export envs directly.
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Supabase project
    SUPABASE_URL: Optional[str] = None
    SUPABASE_ANON_KEY: Optional[str] = None

    # Tables and realtime schema
    SERVICE_CALLS_TABLE: str = "service_calls"
    CUSTOMERS_TABLE: str = "customers"
    EXPENSES_TABLE: str = "expense_submissions"
    REALTIME_SCHEMA: str = "public"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False


@lru_cache(maxsize=1)
def get_settings() -> PortalSettings:
    """Get the process-wide settings instance"""
    return PortalSettings()
