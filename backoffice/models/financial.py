"""
Financial transaction schemas.

Dependencies: pydantic
System role: Financial ledger API contracts
"""

import uuid
from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from backoffice.core.enums import FinancialTransactionStatus, FinancialTransactionType


class CreateFinancialTransactionRequest(BaseModel):
    """Request schema for recording a transaction."""

    type: FinancialTransactionType
    amount: Decimal = Field(..., ge=Decimal("0.01"), max_digits=15, decimal_places=2)
    currency: str = Field("SAR", pattern=r"^[A-Za-z]{3}$")
    transaction_date: date
    description: str = Field(..., min_length=1, max_length=1000)
    status: FinancialTransactionStatus
    reference_id: str | None = Field(None, max_length=100)
    notes: str | None = Field(None, max_length=2000)
    due_date: date | None = None
    client_id: uuid.UUID | None = None
    contract_id: uuid.UUID | None = None
    service_scope_id: uuid.UUID | None = None
    hardware_asset_id: uuid.UUID | None = None

    @field_validator("currency")
    @classmethod
    def upper_currency(cls, value: str) -> str:
        return value.upper()


class UpdateFinancialTransactionRequest(BaseModel):
    """Request schema for updating a transaction; omitted fields are unchanged."""

    type: FinancialTransactionType | None = None
    amount: Decimal | None = Field(None, ge=Decimal("0.01"), max_digits=15, decimal_places=2)
    currency: str | None = Field(None, pattern=r"^[A-Za-z]{3}$")
    transaction_date: date | None = None
    description: str | None = Field(None, min_length=1, max_length=1000)
    status: FinancialTransactionStatus | None = None
    reference_id: str | None = Field(None, max_length=100)
    notes: str | None = Field(None, max_length=2000)
    due_date: date | None = None
    client_id: uuid.UUID | None = None
    contract_id: uuid.UUID | None = None
    service_scope_id: uuid.UUID | None = None
    hardware_asset_id: uuid.UUID | None = None

    @field_validator("currency")
    @classmethod
    def upper_currency(cls, value: str | None) -> str | None:
        return value.upper() if value else value


class FinancialTransactionResponse(BaseModel):
    """Response schema for transactions."""

    id: uuid.UUID
    type: FinancialTransactionType
    amount: float
    currency: str
    transaction_date: date
    description: str
    status: FinancialTransactionStatus
    reference_id: str | None
    notes: str | None
    due_date: date | None
    client_id: uuid.UUID | None
    client_name: str | None
    contract_id: uuid.UUID | None
    contract_name: str | None
    service_scope_id: uuid.UUID | None
    hardware_asset_id: uuid.UUID | None
    recorded_by_user_id: uuid.UUID
    recorded_by_name: str | None
    is_revenue: bool
    is_cost: bool
    is_overdue: bool
    created_at: datetime
    updated_at: datetime


class FinancialSummaryResponse(BaseModel):
    """Revenue/cost totals over a filtered set of transactions."""

    total_revenue: float
    total_costs: float
    net_profit: float
    transaction_count: int
