"""
Financial transaction API endpoints.

Routes:
- POST /financial-transactions - Record a transaction
- GET /financial-transactions - List transactions
- GET /financial-transactions/summary - Revenue and cost totals
- GET /financial-transactions/{transaction_id} - Get transaction
- PUT /financial-transactions/{transaction_id} - Update transaction
- DELETE /financial-transactions/{transaction_id} - Delete transaction

Dependencies: backoffice.application.services, backoffice.models
System role: Financial ledger HTTP API
"""

import logging
from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from backoffice.api.deps import FINANCE_READ_ROLES, FINANCE_ROLES, get_financial_service, require_roles
from backoffice.api.routers.router_utils import handle_domain_errors, update_fields, validate_date_range
from backoffice.application.services import FinancialService
from backoffice.boundary.db.CRUD import TransactionFilters
from backoffice.core.enums import FinancialTransactionStatus, FinancialTransactionType
from backoffice.core.security import TokenPayload
from backoffice.models.common import PaginatedResponse
from backoffice.models.financial import (
    CreateFinancialTransactionRequest,
    FinancialSummaryResponse,
    FinancialTransactionResponse,
    UpdateFinancialTransactionRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/financial-transactions", tags=["financials"])


@router.post("", response_model=FinancialTransactionResponse, status_code=201)
@handle_domain_errors
async def create_transaction(
    request: CreateFinancialTransactionRequest,
    financial_service: FinancialService = Depends(get_financial_service),
    user: TokenPayload = Depends(require_roles(*FINANCE_ROLES)),
) -> dict:
    """
    Record a financial transaction. The caller is stored as recorded_by.

    Raises:
        HTTPException(400): A referenced client, contract, scope or asset does not exist
    """
    logger.info(
        "Recording transaction",
        extra={"transaction_type": request.type.value, "user_id": str(user.user_id)},
    )
    return await financial_service.create_transaction(user.user_id, **request.model_dump())


@router.get("", response_model=PaginatedResponse[FinancialTransactionResponse])
@handle_domain_errors
async def list_transactions(
    type: FinancialTransactionType | None = None,
    status: FinancialTransactionStatus | None = None,
    client_id: UUID | None = None,
    contract_id: UUID | None = None,
    service_scope_id: UUID | None = None,
    hardware_asset_id: UUID | None = None,
    recorded_by_user_id: UUID | None = None,
    transaction_date_from: date | None = None,
    transaction_date_to: date | None = None,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    financial_service: FinancialService = Depends(get_financial_service),
    _: TokenPayload = Depends(require_roles(*FINANCE_READ_ROLES)),
) -> dict:
    """List transactions, latest transaction date first."""
    validate_date_range(transaction_date_from, transaction_date_to, "transaction_date_from", "transaction_date_to")
    filters = TransactionFilters(
        type=type,
        status=status,
        client_id=client_id,
        contract_id=contract_id,
        service_scope_id=service_scope_id,
        hardware_asset_id=hardware_asset_id,
        recorded_by_user_id=recorded_by_user_id,
        date_from=transaction_date_from,
        date_to=transaction_date_to,
    )
    return await financial_service.list_transactions(filters, page=page, limit=limit)


@router.get("/summary", response_model=FinancialSummaryResponse)
@handle_domain_errors
async def get_summary(
    client_id: UUID | None = None,
    contract_id: UUID | None = None,
    date_from: date | None = None,
    date_to: date | None = None,
    financial_service: FinancialService = Depends(get_financial_service),
    _: TokenPayload = Depends(require_roles(*FINANCE_READ_ROLES)),
) -> dict:
    """Revenue, costs and net profit. Cancelled, failed and refunded rows are left out."""
    validate_date_range(date_from, date_to, "date_from", "date_to")
    return await financial_service.get_summary(
        client_id=client_id,
        contract_id=contract_id,
        date_from=date_from,
        date_to=date_to,
    )


@router.get("/{transaction_id}", response_model=FinancialTransactionResponse)
@handle_domain_errors
async def get_transaction(
    transaction_id: UUID,
    financial_service: FinancialService = Depends(get_financial_service),
    _: TokenPayload = Depends(require_roles(*FINANCE_READ_ROLES)),
) -> dict:
    """Get a transaction by ID."""
    return await financial_service.get_transaction(transaction_id)


@router.put("/{transaction_id}", response_model=FinancialTransactionResponse)
@handle_domain_errors
async def update_transaction(
    transaction_id: UUID,
    request: UpdateFinancialTransactionRequest,
    financial_service: FinancialService = Depends(get_financial_service),
    user: TokenPayload = Depends(require_roles(*FINANCE_ROLES)),
) -> dict:
    """
    Update a transaction. Changed references are re-validated.

    Raises:
        HTTPException(400): No fields provided, or a reference does not exist
        HTTPException(404): Transaction not found
    """
    fields = update_fields(request)
    logger.info(
        "Updating transaction",
        extra={"transaction_id": str(transaction_id), "user_id": str(user.user_id), "fields": sorted(fields)},
    )
    return await financial_service.update_transaction(transaction_id, **fields)


@router.delete("/{transaction_id}", status_code=204)
@handle_domain_errors
async def delete_transaction(
    transaction_id: UUID,
    financial_service: FinancialService = Depends(get_financial_service),
    user: TokenPayload = Depends(require_roles(*FINANCE_ROLES)),
) -> None:
    """Delete a transaction."""
    await financial_service.delete_transaction(transaction_id)
    logger.info("Transaction deleted", extra={"transaction_id": str(transaction_id), "user_id": str(user.user_id)})
