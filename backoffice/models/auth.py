"""
Authentication and user schemas.

Dependencies: pydantic, email-validator
System role: Auth and user management API contracts
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, EmailStr, Field, field_validator

from backoffice.core.enums import UserRole


class RegisterRequest(BaseModel):
    """Request schema for registering a staff user."""

    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)
    role: UserRole | None = Field(None, description="Defaults to engineer; other roles need an admin token")

    @field_validator("first_name", "last_name")
    @classmethod
    def strip_names(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value


class LoginRequest(BaseModel):
    """Request schema for logging in."""

    email: EmailStr
    password: str = Field(..., min_length=1)


class UserResponse(BaseModel):
    """User profile (never includes the password hash)."""

    id: uuid.UUID
    first_name: str
    last_name: str
    email: str
    role: UserRole
    is_active: bool
    created_at: datetime
    updated_at: datetime


class TokenResponse(BaseModel):
    """Successful login response."""

    access_token: str
    token_type: str = "bearer"
    user: UserResponse


class UpdateUserRequest(BaseModel):
    """Admin update of a user's role or active flag."""

    role: UserRole | None = None
    is_active: bool | None = None
