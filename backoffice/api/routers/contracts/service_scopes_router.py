"""
Service scope API endpoints.

Routes:
- GET /service-scopes - List scopes across contracts
- GET /service-scopes/{scope_id} - Get scope
- PUT /service-scopes/{scope_id} - Update scope
- DELETE /service-scopes/{scope_id} - Deactivate scope
- DELETE /service-scopes/{scope_id}/hard - Delete scope (admin)

Creation lives under /contracts/{contract_id}/service-scopes.

Dependencies: backoffice.application.services, backoffice.models
System role: Service scope HTTP API
"""

import logging
from decimal import Decimal
from typing import Literal
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from backoffice.api.deps import ADMIN_ROLES, ALL_ROLES, WRITE_ROLES, get_service_scope_service, require_roles
from backoffice.api.routers.router_utils import handle_domain_errors, update_fields
from backoffice.application.services import ServiceScopeService
from backoffice.core.enums import SAFStatus
from backoffice.core.security import TokenPayload
from backoffice.models.common import PaginatedResponse
from backoffice.models.service_scope import ServiceScopeResponse, UpdateServiceScopeRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/service-scopes", tags=["service-scopes"])


@router.get("", response_model=PaginatedResponse[ServiceScopeResponse])
@handle_domain_errors
async def list_service_scopes(
    contract_id: UUID | None = None,
    service_id: UUID | None = None,
    saf_status: SAFStatus | None = None,
    is_active: bool | None = None,
    search: str | None = None,
    min_price: Decimal | None = Query(None, ge=0),
    max_price: Decimal | None = Query(None, ge=0),
    sort_by: str = "created_at",
    sort_order: Literal["asc", "desc"] = "desc",
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=100),
    scope_service: ServiceScopeService = Depends(get_service_scope_service),
    _: TokenPayload = Depends(require_roles(*ALL_ROLES)),
) -> dict:
    """
    List service scopes.

    Raises:
        HTTPException(400): min_price greater than max_price
    """
    if min_price is not None and max_price is not None and min_price > max_price:
        raise ValueError("min_price must not be greater than max_price")
    return await scope_service.list_scopes(
        contract_id=contract_id,
        service_id=service_id,
        saf_status=saf_status,
        is_active=is_active,
        search=search,
        min_price=min_price,
        max_price=max_price,
        sort_by=sort_by,
        sort_order=sort_order,
        page=page,
        limit=limit,
    )


@router.get("/{scope_id}", response_model=ServiceScopeResponse)
@handle_domain_errors
async def get_service_scope(
    scope_id: UUID,
    scope_service: ServiceScopeService = Depends(get_service_scope_service),
    _: TokenPayload = Depends(require_roles(*ALL_ROLES)),
) -> dict:
    """Get a service scope by ID."""
    return await scope_service.get_scope(scope_id)


@router.put("/{scope_id}", response_model=ServiceScopeResponse)
@handle_domain_errors
async def update_service_scope(
    scope_id: UUID,
    request: UpdateServiceScopeRequest,
    scope_service: ServiceScopeService = Depends(get_service_scope_service),
    user: TokenPayload = Depends(require_roles(*WRITE_ROLES)),
) -> dict:
    """
    Update a service scope.

    Raises:
        HTTPException(400): No fields, invalid SAF dates or scope_details
        HTTPException(404): Scope or active service not found
        HTTPException(409): New service already on the contract
    """
    fields = update_fields(request)
    logger.info(
        "Updating service scope",
        extra={"scope_id": str(scope_id), "user_id": str(user.user_id), "fields": sorted(fields)},
    )
    return await scope_service.update_scope(scope_id, **fields)


@router.delete("/{scope_id}", response_model=ServiceScopeResponse)
@handle_domain_errors
async def deactivate_service_scope(
    scope_id: UUID,
    scope_service: ServiceScopeService = Depends(get_service_scope_service),
    user: TokenPayload = Depends(require_roles(*WRITE_ROLES)),
) -> dict:
    """Soft-delete a service scope."""
    logger.info("Deactivating service scope", extra={"scope_id": str(scope_id), "user_id": str(user.user_id)})
    return await scope_service.deactivate_scope(scope_id)


@router.delete("/{scope_id}/hard", status_code=204)
@handle_domain_errors
async def hard_delete_service_scope(
    scope_id: UUID,
    scope_service: ServiceScopeService = Depends(get_service_scope_service),
    user: TokenPayload = Depends(require_roles(*ADMIN_ROLES)),
) -> None:
    """Permanently delete a service scope."""
    await scope_service.hard_delete_scope(scope_id)
    logger.info("Service scope deleted", extra={"scope_id": str(scope_id), "user_id": str(user.user_id)})
