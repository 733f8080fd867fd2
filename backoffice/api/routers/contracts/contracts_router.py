"""
Contract API endpoints.

Routes:
- POST /contracts - Create contract
- GET /contracts - List contracts
- GET /contracts/expiring - Contracts ending within N days
- GET /contracts/statistics - Contract statistics
- GET /contracts/{contract_id} - Get contract
- PUT /contracts/{contract_id} - Update contract
- DELETE /contracts/{contract_id} - Terminate contract
- GET /contracts/{contract_id}/total-value - Sum of active scope values
- POST /contracts/{contract_id}/service-scopes - Add a service scope
- GET /contracts/{contract_id}/service-scopes - Scopes of the contract

Dependencies: backoffice.application.services, backoffice.models
System role: Contract management HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from backoffice.api.deps import (
    ALL_ROLES,
    WRITE_ROLES,
    get_contract_service,
    get_service_scope_service,
    require_roles,
)
from backoffice.api.routers.router_utils import handle_domain_errors, update_fields
from backoffice.application.services import ContractService, ServiceScopeService
from backoffice.boundary.db.models.contract_model import EXPIRING_SOON_DAYS
from backoffice.core.enums import ContractStatus
from backoffice.core.security import TokenPayload
from backoffice.models.common import PaginatedResponse
from backoffice.models.contract import (
    ContractResponse,
    ContractStatisticsResponse,
    ContractTotalValueResponse,
    CreateContractRequest,
    UpdateContractRequest,
)
from backoffice.models.service_scope import CreateServiceScopeRequest, ServiceScopeResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/contracts", tags=["contracts"])


@router.post("", response_model=ContractResponse, status_code=201)
@handle_domain_errors
async def create_contract(
    request: CreateContractRequest,
    contract_service: ContractService = Depends(get_contract_service),
    user: TokenPayload = Depends(require_roles(*WRITE_ROLES)),
) -> dict:
    """
    Create a contract.

    Args:
        request: CreateContractRequest
        contract_service: Injected ContractService
        user: Authenticated user with a write role

    Returns:
        ContractResponse: Created contract

    Raises:
        HTTPException(400): end_date not after start_date
        HTTPException(404): Client or previous contract not found
        HTTPException(409): Contract name already used
    """
    logger.info(
        "Creating contract",
        extra={"client_id": str(request.client_id), "user_id": str(user.user_id)},
    )
    return await contract_service.create_contract(**request.model_dump())


@router.get("", response_model=PaginatedResponse[ContractResponse])
@handle_domain_errors
async def list_contracts(
    client_id: UUID | None = None,
    status: ContractStatus | None = None,
    search: str | None = None,
    expiring_soon_days: int | None = Query(None, ge=1, le=365),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    contract_service: ContractService = Depends(get_contract_service),
    _: TokenPayload = Depends(require_roles(*ALL_ROLES)),
) -> dict:
    """List contracts, newest first."""
    return await contract_service.list_contracts(
        client_id=client_id,
        status=status,
        search=search,
        expiring_soon_days=expiring_soon_days,
        page=page,
        limit=limit,
    )


@router.get("/expiring", response_model=list[ContractResponse])
@handle_domain_errors
async def list_expiring_contracts(
    days: int = Query(EXPIRING_SOON_DAYS, ge=1, le=365),
    contract_service: ContractService = Depends(get_contract_service),
    _: TokenPayload = Depends(require_roles(*ALL_ROLES)),
) -> list[dict]:
    """Active contracts ending within the next `days` days, soonest first."""
    return await contract_service.list_expiring(days=days)


@router.get("/statistics", response_model=ContractStatisticsResponse)
@handle_domain_errors
async def get_contract_statistics(
    contract_service: ContractService = Depends(get_contract_service),
    _: TokenPayload = Depends(require_roles(*ALL_ROLES)),
) -> dict:
    """Counts by status, active and expiring contracts."""
    return await contract_service.get_statistics()


@router.get("/{contract_id}", response_model=ContractResponse)
@handle_domain_errors
async def get_contract(
    contract_id: UUID,
    contract_service: ContractService = Depends(get_contract_service),
    _: TokenPayload = Depends(require_roles(*ALL_ROLES)),
) -> dict:
    """
    Get contract by ID.

    Raises:
        HTTPException(404): Contract not found
    """
    return await contract_service.get_contract(contract_id)


@router.put("/{contract_id}", response_model=ContractResponse)
@handle_domain_errors
async def update_contract(
    contract_id: UUID,
    request: UpdateContractRequest,
    contract_service: ContractService = Depends(get_contract_service),
    user: TokenPayload = Depends(require_roles(*WRITE_ROLES)),
) -> dict:
    """
    Update a contract. Dates, client and name are re-checked on the merged values.

    Raises:
        HTTPException(400): No fields provided, or invalid date range
        HTTPException(404): Contract, client or previous contract not found
        HTTPException(409): Contract name already used
    """
    fields = update_fields(request)
    logger.info(
        "Updating contract",
        extra={"contract_id": str(contract_id), "user_id": str(user.user_id), "fields": sorted(fields)},
    )
    return await contract_service.update_contract(contract_id, **fields)


@router.delete("/{contract_id}", response_model=ContractResponse)
@handle_domain_errors
async def terminate_contract(
    contract_id: UUID,
    contract_service: ContractService = Depends(get_contract_service),
    user: TokenPayload = Depends(require_roles(*WRITE_ROLES)),
) -> dict:
    """
    Terminate a contract. The row is kept with status terminated.

    Raises:
        HTTPException(400): Contract already terminated, cancelled or expired
        HTTPException(404): Contract not found
    """
    logger.info("Terminating contract", extra={"contract_id": str(contract_id), "user_id": str(user.user_id)})
    return await contract_service.terminate_contract(contract_id)


@router.get("/{contract_id}/total-value", response_model=ContractTotalValueResponse)
@handle_domain_errors
async def get_contract_total_value(
    contract_id: UUID,
    contract_service: ContractService = Depends(get_contract_service),
    _: TokenPayload = Depends(require_roles(*ALL_ROLES)),
) -> dict:
    """Sum of price x quantity over the contract's active, priced scopes."""
    return await contract_service.get_total_value(contract_id)


@router.post("/{contract_id}/service-scopes", response_model=ServiceScopeResponse, status_code=201)
@handle_domain_errors
async def create_service_scope(
    contract_id: UUID,
    request: CreateServiceScopeRequest,
    scope_service: ServiceScopeService = Depends(get_service_scope_service),
    user: TokenPayload = Depends(require_roles(*WRITE_ROLES)),
) -> dict:
    """
    Add a service to a contract.

    Raises:
        HTTPException(400): scope_details do not match the service template
        HTTPException(404): Contract or active service not found
        HTTPException(409): Service already on the contract
    """
    logger.info(
        "Adding service scope",
        extra={"contract_id": str(contract_id), "service_id": str(request.service_id), "user_id": str(user.user_id)},
    )
    return await scope_service.create_for_contract(contract_id, **request.model_dump())


@router.get("/{contract_id}/service-scopes", response_model=list[ServiceScopeResponse])
@handle_domain_errors
async def list_contract_service_scopes(
    contract_id: UUID,
    scope_service: ServiceScopeService = Depends(get_service_scope_service),
    _: TokenPayload = Depends(require_roles(*ALL_ROLES)),
) -> list[dict]:
    """
    Scopes of a contract.

    Raises:
        HTTPException(404): Contract not found
    """
    return await scope_service.list_for_contract(contract_id)
