"""
Dashboard schemas.

Client overview, expiration timeline and subscription metrics.

Dependencies: pydantic
System role: Dashboard API contracts
"""

import uuid
from datetime import date
from typing import Any, Literal

from pydantic import BaseModel

from backoffice.core.enums import (
    ClientAssignmentRole,
    ContractStatus,
    FinancialTransactionStatus,
    FinancialTransactionType,
    HardwareAssetType,
    HardwareAssignmentStatus,
    SAFStatus,
)
from backoffice.models.client import ClientResponse


class AccountManagerInfo(BaseModel):
    user_id: uuid.UUID
    name: str
    email: str


class ClientProfileResponse(ClientResponse):
    """Client profile with its active account manager."""

    account_manager: AccountManagerInfo | None = None


class OverviewContract(BaseModel):
    id: uuid.UUID
    contract_name: str
    status: ContractStatus
    start_date: date
    end_date: date
    value: float | None
    days_until_expiration: int
    is_expiring_soon: bool
    service_count: int


class OverviewService(BaseModel):
    id: uuid.UUID
    service_id: uuid.UUID
    service_name: str
    contract_id: uuid.UUID
    contract_name: str
    saf_status: SAFStatus
    saf_service_end_date: date | None
    total_value: float | None
    key_parameters: dict[str, Any]


class OverviewTransaction(BaseModel):
    id: uuid.UUID
    type: FinancialTransactionType
    amount: float
    currency: str
    status: FinancialTransactionStatus
    transaction_date: date
    description: str


class OverviewFinancials(BaseModel):
    total_contract_value: float
    total_paid: float
    total_pending: float
    last_payment_date: date | None
    next_payment_due: date | None
    recent_transactions: list[OverviewTransaction]


class OverviewAssignment(BaseModel):
    id: uuid.UUID
    hardware_asset_id: uuid.UUID
    asset_tag: str | None
    asset_type: HardwareAssetType | None
    status: HardwareAssignmentStatus
    assignment_date: date


class OverviewHardware(BaseModel):
    total_assigned: int
    active_count: int
    by_type: dict[str, int]
    recent_assignments: list[OverviewAssignment]


class OverviewTeamMember(BaseModel):
    assignment_id: uuid.UUID
    user_id: uuid.UUID
    name: str
    email: str
    assignment_role: ClientAssignmentRole
    priority: int
    assignment_date: date


class OverviewTeam(BaseModel):
    members: list[OverviewTeamMember]
    members_by_role: dict[str, int]


class OverviewSummary(BaseModel):
    active_contracts: int
    active_services: int
    total_contract_value: float
    health_status: Literal["good", "warning"]


class ClientOverviewResponse(BaseModel):
    """Everything the client dashboard shows, in one payload."""

    profile: ClientProfileResponse
    contracts: list[OverviewContract]
    services: list[OverviewService]
    financials: OverviewFinancials | None
    hardware: OverviewHardware
    team: OverviewTeam
    summary: OverviewSummary


class ExpiringServiceItem(BaseModel):
    id: uuid.UUID
    service_name: str
    contract_id: uuid.UUID
    contract_name: str
    client_id: uuid.UUID
    client_name: str
    saf_service_end_date: date
    days_until_expiration: int
    saf_status: SAFStatus


class ExpiringContractItem(BaseModel):
    id: uuid.UUID
    contract_name: str
    client_id: uuid.UUID
    client_name: str
    end_date: date
    days_until_expiration: int
    value: float | None
    status: ContractStatus


class ExpirationSummary(BaseModel):
    total_expiring_services: int
    total_expiring_contracts: int
    total_expiring_value: float
    clients_affected: int


class ExpirationsResponse(BaseModel):
    days: int
    services: list[ExpiringServiceItem]
    contracts: list[ExpiringContractItem]
    summary: ExpirationSummary


class SubscriptionMetricsResponse(BaseModel):
    active_clients: int
    active_contracts: int
    annual_recurring_revenue: float
    monthly_recurring_revenue: float
    average_contract_value: float
    clients_by_source: dict[str, int]
    revenue_by_service: dict[str, float]
