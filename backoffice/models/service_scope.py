"""
Service scope schemas.

Dependencies: pydantic
System role: Contract line item API contracts
"""

import uuid
from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field, model_validator

from backoffice.core.enums import SAFStatus


class _SAFDatesModel(BaseModel):
    @model_validator(mode="after")
    def check_saf_dates(self) -> "_SAFDatesModel":
        start, end = self.saf_service_start_date, self.saf_service_end_date
        if start is not None and end is not None and end < start:
            raise ValueError("SAF service end date must not be before the start date")
        return self


class CreateServiceScopeRequest(_SAFDatesModel):
    """Request schema for adding a service to a contract."""

    service_id: uuid.UUID
    scope_details: dict | None = None
    price: Decimal | None = Field(None, gt=0, max_digits=12, decimal_places=2)
    quantity: int | None = Field(None, ge=1)
    unit: str | None = Field(None, max_length=50)
    notes: str | None = Field(None, max_length=2000)
    is_active: bool = True
    saf_document_link: str | None = Field(None, max_length=500)
    saf_service_start_date: date | None = None
    saf_service_end_date: date | None = None
    saf_status: SAFStatus = SAFStatus.NOT_INITIATED


class UpdateServiceScopeRequest(_SAFDatesModel):
    """Request schema for updating a service scope; omitted fields are unchanged."""

    service_id: uuid.UUID | None = None
    scope_details: dict | None = None
    price: Decimal | None = Field(None, gt=0, max_digits=12, decimal_places=2)
    quantity: int | None = Field(None, ge=1)
    unit: str | None = Field(None, max_length=50)
    notes: str | None = Field(None, max_length=2000)
    is_active: bool | None = None
    saf_document_link: str | None = Field(None, max_length=500)
    saf_service_start_date: date | None = None
    saf_service_end_date: date | None = None
    saf_status: SAFStatus | None = None


class ServiceScopeResponse(BaseModel):
    """Response schema for service scopes."""

    id: uuid.UUID
    contract_id: uuid.UUID
    contract_name: str | None
    client_id: uuid.UUID | None
    service_id: uuid.UUID
    service_name: str | None
    scope_details: dict | None
    price: float | None
    quantity: int | None
    unit: str | None
    total_value: float | None
    notes: str | None
    is_active: bool
    saf_document_link: str | None
    saf_service_start_date: date | None
    saf_service_end_date: date | None
    saf_status: SAFStatus
    is_saf_active: bool
    created_at: datetime
    updated_at: datetime
