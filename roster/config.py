"""Application configuration loaded from the environment via pydantic-settings.

Values are not validated at startup; a missing URL or key shows up as a failed
call to the store or messaging API.
"""

from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings for the roster relay service."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Supabase (PostgREST) project
    supabase_url: str = ""
    supabase_anon_key: str = ""
    students_table: str = "students"

    # WhatsApp Cloud API
    whatsapp_api_url: str = ""
    whatsapp_api_token: str = ""

    # API
    api_prefix: str = "/api"
    cors_origins: List[str] = ["*"]
    host: str = "0.0.0.0"
    port: int = 8000

    log_level: str = "INFO"

    @property
    def store_rest_url(self) -> str:
        """Base URL of the PostgREST interface of the Supabase project."""
        return f"{self.supabase_url.rstrip('/')}/rest/v1"


@lru_cache
def get_settings() -> Settings:
    return Settings()
