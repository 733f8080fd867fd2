"""
Client domain schemas.

Request/response schemas for client operations.

Dependencies: pydantic, email-validator
System role: Client API contracts
"""

import uuid
from datetime import date, datetime

from pydantic import BaseModel, EmailStr, Field, HttpUrl, field_validator

from backoffice.core.enums import ClientSourceType, ClientStatus, SAFStatus


class CreateClientRequest(BaseModel):
    """Request schema for creating a client."""

    company_name: str = Field(..., min_length=2, max_length=255, description="Company name (unique)")
    contact_name: str = Field(..., min_length=2, max_length=100)
    contact_email: EmailStr = Field(..., max_length=255)
    contact_phone: str | None = Field(None, max_length=50)
    address: str | None = None
    industry: str | None = Field(None, max_length=100)
    website: HttpUrl | None = None
    notes: str | None = None
    status: ClientStatus = ClientStatus.PROSPECT
    client_source: ClientSourceType | None = None

    @field_validator("company_name", "contact_name")
    @classmethod
    def strip_text(cls, value: str) -> str:
        return value.strip()


class UpdateClientRequest(BaseModel):
    """Request schema for updating a client; omitted fields are unchanged."""

    company_name: str | None = Field(None, min_length=2, max_length=255)
    contact_name: str | None = Field(None, min_length=2, max_length=100)
    contact_email: EmailStr | None = Field(None, max_length=255)
    contact_phone: str | None = Field(None, max_length=50)
    address: str | None = None
    industry: str | None = Field(None, max_length=100)
    website: HttpUrl | None = None
    notes: str | None = None
    status: ClientStatus | None = None
    client_source: ClientSourceType | None = None


class ClientListParams(BaseModel):
    """Query parameters accepted by the client list and export endpoints."""

    search: str | None = None
    company_name: str | None = None
    contact_name: str | None = None
    contact_email: str | None = None
    industry: str | None = None
    status: ClientStatus | None = None
    created_from: date | None = None
    created_to: date | None = None
    sort_by: str = "created_at"
    sort_order: str = Field("desc", pattern="^(asc|desc|ASC|DESC)$")


class ClientResponse(BaseModel):
    """Response schema for client operations."""

    id: uuid.UUID
    company_name: str
    contact_name: str
    contact_email: str
    contact_phone: str | None
    address: str | None
    industry: str | None
    website: str | None
    notes: str | None
    status: ClientStatus
    client_source: ClientSourceType | None
    is_active: bool
    created_at: datetime
    updated_at: datetime


class ClientServiceScopeResponse(BaseModel):
    """Active service scope of a client with its service and contract names."""

    id: uuid.UUID
    contract_id: uuid.UUID
    contract_name: str
    service_id: uuid.UUID
    service_name: str
    price: float | None
    quantity: int | None
    unit: str | None
    total_value: float | None
    saf_status: SAFStatus
    saf_service_start_date: date | None
    saf_service_end_date: date | None
    scope_details: dict | None
    created_at: datetime
