"""
External integration configuration settings.

Credential encryption key plus HTTP timeout and retry policy for
the external data fetcher.

Dependencies: pydantic, pydantic_settings
System role: Configuration for outbound integration calls
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from backoffice.configs.base import BaseSettings


class IntegrationSettings(BaseSettings):
    """External data source configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="INTEGRATIONS_",
        case_sensitive=False,
        extra="ignore",
    )

    encryption_key: str | None = Field(
        default=None,
        description="Secret used to derive the AES-256-GCM key for stored credentials",
    )
    request_timeout_seconds: float = Field(
        default=30.0, gt=0, description="Timeout for outbound API requests"
    )
    retry_attempts: int = Field(
        default=3, ge=1, description="Attempts per request before giving up"
    )
    retry_max_wait_seconds: float = Field(
        default=5.0, gt=0, description="Upper bound for exponential backoff between attempts"
    )
