"""
Aggregated application settings.

Combines all configuration modules into a single settings object.
Uses lru_cache for singleton pattern to avoid repeated env parsing.

Dependencies: pydantic_settings, backoffice.configs.*
System role: Central configuration access point
"""

from functools import lru_cache

from backoffice.configs.auth import AuthSettings
from backoffice.configs.base import BaseSettings
from backoffice.configs.database import DatabaseSettings
from backoffice.configs.integrations import IntegrationSettings


class Settings(BaseSettings):
    """Aggregated application settings."""

    database: DatabaseSettings = DatabaseSettings()
    auth: AuthSettings = AuthSettings()
    integrations: IntegrationSettings = IntegrationSettings()


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.

    Returns:
        Settings: Singleton settings instance
    """
    return Settings()
