"""
Common response models and utilities.

Generic response wrappers shared by all routers.

Dependencies: pydantic
System role: Common API response structures
"""

from typing import Generic, TypeVar
from pydantic import BaseModel, Field

T = TypeVar("T")


class PaginatedResponse(BaseModel, Generic[T]):
    """Generic paginated response wrapper."""

    items: list[T]
    total: int = Field(description="Total rows matching the filters")
    page: int = Field(description="1-based page number")
    limit: int = Field(description="Page size")
    total_pages: int = Field(description="ceil(total / limit)")


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    message: str


class ErrorResponse(BaseModel):
    """Error response schema."""

    detail: str | list | dict = Field(description="Error message or validation errors")
