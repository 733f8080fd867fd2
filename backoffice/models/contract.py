"""
Contract schemas.

Dependencies: pydantic
System role: Contract API contracts
"""

import uuid
from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from backoffice.core.enums import ContractStatus


class CreateContractRequest(BaseModel):
    """Request schema for creating a contract."""

    contract_name: str = Field(..., min_length=3, max_length=255)
    client_id: uuid.UUID
    start_date: date
    end_date: date
    renewal_date: date | None = None
    value: Decimal | None = Field(None, ge=0, le=Decimal("999999999999.99"), decimal_places=2)
    status: ContractStatus = ContractStatus.DRAFT
    document_link: str | None = Field(None, max_length=500)
    notes: str | None = Field(None, max_length=5000)
    previous_contract_id: uuid.UUID | None = None


class UpdateContractRequest(BaseModel):
    """Request schema for updating a contract; omitted fields are unchanged."""

    contract_name: str | None = Field(None, min_length=3, max_length=255)
    client_id: uuid.UUID | None = None
    start_date: date | None = None
    end_date: date | None = None
    renewal_date: date | None = None
    value: Decimal | None = Field(None, ge=0, le=Decimal("999999999999.99"), decimal_places=2)
    status: ContractStatus | None = None
    document_link: str | None = Field(None, max_length=500)
    notes: str | None = Field(None, max_length=5000)
    previous_contract_id: uuid.UUID | None = None


class ContractResponse(BaseModel):
    """Response schema for contracts, including derived fields."""

    id: uuid.UUID
    contract_name: str
    client_id: uuid.UUID
    client_name: str | None
    start_date: date
    end_date: date
    renewal_date: date | None
    value: float | None
    status: ContractStatus
    document_link: str | None
    notes: str | None
    previous_contract_id: uuid.UUID | None
    service_scope_count: int = 0
    is_active: bool
    is_expiring_soon: bool
    days_until_expiration: int
    duration_days: int
    is_renewal: bool
    created_at: datetime
    updated_at: datetime


class ContractStatisticsResponse(BaseModel):
    """Contract aggregates."""

    total: int
    by_status: dict[str, int]
    active_contracts: int
    expiring_contracts: int


class ContractTotalValueResponse(BaseModel):
    """Sum of active scope values of a contract."""

    contract_id: uuid.UUID
    total_value: float
