"""
Authentication configuration settings.

JWT signing parameters and password hashing cost.

Dependencies: pydantic, pydantic_settings
System role: Token and password configuration for the auth layer
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from backoffice.configs.base import BaseSettings


class AuthSettings(BaseSettings):
    """JWT and bcrypt configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="JWT_",
        case_sensitive=False,
        extra="ignore",
    )

    secret: str = Field(
        default="change-me-in-production-this-is-a-32-char-dev-secret",
        min_length=32,
        description="HMAC secret used to sign access tokens (at least 32 characters)",
    )
    algorithm: str = Field(default="HS256", description="JWT signing algorithm")
    expires_minutes: int = Field(default=60, gt=0, description="Access token lifetime in minutes")
    bcrypt_rounds: int = Field(default=12, ge=4, le=31, description="bcrypt cost factor")
