"""
Application Configuration

Load settings from environment variables with validation.
"""

from functools import lru_cache
from pydantic import ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Feed cache settings from environment variables."""

    # Environment
    environment: str = "development"
    log_level: str = "INFO"

    # Supabase
    supabase_url: str = ""
    supabase_key: str = ""  # Anon key, sent as apikey on every request

    # Tables
    posts_table: str = "posts"
    profiles_relation: str = "profiles"

    # Feed Configuration
    posts_per_page: int = 10

    # HTTP
    request_timeout: float = 10.0

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )


@lru_cache()
def get_settings() -> Settings:
    """Cached settings instance."""
    return Settings()
