"""
Hardware asset and assignment schemas.

Dependencies: pydantic
System role: Hardware inventory API contracts
"""

import uuid
from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field, model_validator

from backoffice.core.enums import HardwareAssetStatus, HardwareAssetType, HardwareAssignmentStatus


class CreateHardwareAssetRequest(BaseModel):
    """Request schema for registering a hardware asset."""

    asset_tag: str = Field(..., min_length=1, max_length=100)
    serial_number: str | None = Field(None, max_length=255)
    device_name: str | None = Field(None, max_length=255)
    manufacturer: str | None = Field(None, max_length=100)
    model: str | None = Field(None, max_length=100)
    asset_type: HardwareAssetType
    status: HardwareAssetStatus = HardwareAssetStatus.IN_STOCK
    purchase_date: date | None = None
    purchase_cost: Decimal | None = Field(None, ge=0, max_digits=12, decimal_places=2)
    warranty_expiry_date: date | None = None
    location: str | None = Field(None, max_length=255)
    notes: str | None = None


class UpdateHardwareAssetRequest(BaseModel):
    """Request schema for updating a hardware asset; omitted fields are unchanged."""

    asset_tag: str | None = Field(None, min_length=1, max_length=100)
    serial_number: str | None = Field(None, max_length=255)
    device_name: str | None = Field(None, max_length=255)
    manufacturer: str | None = Field(None, max_length=100)
    model: str | None = Field(None, max_length=100)
    asset_type: HardwareAssetType | None = None
    status: HardwareAssetStatus | None = None
    purchase_date: date | None = None
    purchase_cost: Decimal | None = Field(None, ge=0, max_digits=12, decimal_places=2)
    warranty_expiry_date: date | None = None
    location: str | None = Field(None, max_length=255)
    notes: str | None = None


class UpdateHardwareAssetStatusRequest(BaseModel):
    """Request schema for changing only the asset status."""

    status: HardwareAssetStatus


class HardwareAssetResponse(BaseModel):
    """Response schema for hardware assets."""

    id: uuid.UUID
    asset_tag: str
    serial_number: str | None
    device_name: str | None
    manufacturer: str | None
    model: str | None
    asset_type: HardwareAssetType
    status: HardwareAssetStatus
    purchase_date: date | None
    purchase_cost: float | None
    warranty_expiry_date: date | None
    location: str | None
    notes: str | None
    is_available: bool
    created_at: datetime
    updated_at: datetime


class CreateHardwareAssignmentRequest(BaseModel):
    """Request schema for assigning an asset to a client."""

    hardware_asset_id: uuid.UUID
    client_id: uuid.UUID
    service_scope_id: uuid.UUID | None = None
    assignment_date: date = Field(default_factory=date.today)
    notes: str | None = None


class UpdateHardwareAssignmentRequest(BaseModel):
    """Request schema for updating an assignment (e.g. recording a return)."""

    status: HardwareAssignmentStatus | None = None
    service_scope_id: uuid.UUID | None = None
    assignment_date: date | None = None
    return_date: date | None = None
    notes: str | None = None

    @model_validator(mode="after")
    def check_dates(self) -> "UpdateHardwareAssignmentRequest":
        if self.assignment_date and self.return_date and self.return_date < self.assignment_date:
            raise ValueError("Return date must not be before the assignment date")
        return self


class HardwareAssignmentResponse(BaseModel):
    """Response schema for hardware assignments."""

    id: uuid.UUID
    hardware_asset_id: uuid.UUID
    asset_tag: str | None
    asset_type: HardwareAssetType | None
    client_id: uuid.UUID
    client_name: str | None
    service_scope_id: uuid.UUID | None
    service_name: str | None
    assignment_date: date
    return_date: date | None
    status: HardwareAssignmentStatus
    notes: str | None
    created_at: datetime
    updated_at: datetime


class HardwareAssetDetailResponse(HardwareAssetResponse):
    """Hardware asset with its assignment history."""

    assignments: list[HardwareAssignmentResponse]
