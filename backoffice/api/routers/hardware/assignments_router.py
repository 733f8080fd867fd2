"""
Hardware assignment API endpoints.

Routes:
- POST /hardware-assignments - Assign an asset to a client
- GET /hardware-assignments - List assignments
- GET /hardware-assignments/client/{client_id}
- GET /hardware-assignments/asset/{asset_id}
- GET /hardware-assignments/service-scope/{scope_id}
- GET /hardware-assignments/{assignment_id}
- PUT /hardware-assignments/{assignment_id} - Update (returning frees the asset)
- DELETE /hardware-assignments/{assignment_id} - Delete assignment

Dependencies: backoffice.application.services, backoffice.models
System role: Hardware assignment HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from backoffice.api.deps import ALL_ROLES, WRITE_ROLES, get_hardware_assignment_service, require_roles
from backoffice.api.routers.router_utils import handle_domain_errors, update_fields
from backoffice.application.services import HardwareAssignmentService
from backoffice.core.enums import HardwareAssignmentStatus
from backoffice.core.security import TokenPayload
from backoffice.models.common import PaginatedResponse
from backoffice.models.hardware import (
    CreateHardwareAssignmentRequest,
    HardwareAssignmentResponse,
    UpdateHardwareAssignmentRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/hardware-assignments", tags=["hardware"])


@router.post("", response_model=HardwareAssignmentResponse, status_code=201)
@handle_domain_errors
async def assign_hardware(
    request: CreateHardwareAssignmentRequest,
    assignment_service: HardwareAssignmentService = Depends(get_hardware_assignment_service),
    user: TokenPayload = Depends(require_roles(*WRITE_ROLES)),
) -> dict:
    """
    Assign an available asset to a client.

    The asset moves to in_use in the same transaction.

    Raises:
        HTTPException(400): Asset not available, already assigned, or scope of another client
        HTTPException(404): Asset, client or service scope not found
    """
    logger.info(
        "Assigning hardware",
        extra={
            "hardware_asset_id": str(request.hardware_asset_id),
            "client_id": str(request.client_id),
            "user_id": str(user.user_id),
        },
    )
    return await assignment_service.assign(**request.model_dump())


@router.get("", response_model=PaginatedResponse[HardwareAssignmentResponse])
@handle_domain_errors
async def list_assignments(
    status: HardwareAssignmentStatus | None = None,
    client_id: UUID | None = None,
    hardware_asset_id: UUID | None = None,
    service_scope_id: UUID | None = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    assignment_service: HardwareAssignmentService = Depends(get_hardware_assignment_service),
    _: TokenPayload = Depends(require_roles(*ALL_ROLES)),
) -> dict:
    """List assignments, most recent assignment date first."""
    return await assignment_service.list_assignments(
        status=status,
        client_id=client_id,
        hardware_asset_id=hardware_asset_id,
        service_scope_id=service_scope_id,
        page=page,
        limit=limit,
    )


@router.get("/client/{client_id}", response_model=list[HardwareAssignmentResponse])
@handle_domain_errors
async def list_client_assignments(
    client_id: UUID,
    assignment_service: HardwareAssignmentService = Depends(get_hardware_assignment_service),
    _: TokenPayload = Depends(require_roles(*ALL_ROLES)),
) -> list[dict]:
    """All assignments of a client."""
    return await assignment_service.list_for_client(client_id)


@router.get("/asset/{asset_id}", response_model=list[HardwareAssignmentResponse])
@handle_domain_errors
async def list_asset_assignments(
    asset_id: UUID,
    assignment_service: HardwareAssignmentService = Depends(get_hardware_assignment_service),
    _: TokenPayload = Depends(require_roles(*ALL_ROLES)),
) -> list[dict]:
    """Assignment history of an asset."""
    return await assignment_service.list_for_asset(asset_id)


@router.get("/service-scope/{scope_id}", response_model=list[HardwareAssignmentResponse])
@handle_domain_errors
async def list_scope_assignments(
    scope_id: UUID,
    assignment_service: HardwareAssignmentService = Depends(get_hardware_assignment_service),
    _: TokenPayload = Depends(require_roles(*ALL_ROLES)),
) -> list[dict]:
    """Assignments attached to a service scope."""
    return await assignment_service.list_for_service_scope(scope_id)


@router.get("/{assignment_id}", response_model=HardwareAssignmentResponse)
@handle_domain_errors
async def get_assignment(
    assignment_id: UUID,
    assignment_service: HardwareAssignmentService = Depends(get_hardware_assignment_service),
    _: TokenPayload = Depends(require_roles(*ALL_ROLES)),
) -> dict:
    """Get an assignment by ID."""
    return await assignment_service.get_assignment(assignment_id)


@router.put("/{assignment_id}", response_model=HardwareAssignmentResponse)
@handle_domain_errors
async def update_assignment(
    assignment_id: UUID,
    request: UpdateHardwareAssignmentRequest,
    assignment_service: HardwareAssignmentService = Depends(get_hardware_assignment_service),
    user: TokenPayload = Depends(require_roles(*WRITE_ROLES)),
) -> dict:
    """
    Update an assignment.

    Moving an active assignment to returned or replaced puts the asset
    back in stock; return_date defaults to today.

    Raises:
        HTTPException(400): No fields, reopening a closed assignment, bad dates
        HTTPException(404): Assignment or service scope not found
    """
    fields = update_fields(request)
    logger.info(
        "Updating hardware assignment",
        extra={"assignment_id": str(assignment_id), "user_id": str(user.user_id), "fields": sorted(fields)},
    )
    return await assignment_service.update_assignment(assignment_id, **fields)


@router.delete("/{assignment_id}", status_code=204)
@handle_domain_errors
async def delete_assignment(
    assignment_id: UUID,
    assignment_service: HardwareAssignmentService = Depends(get_hardware_assignment_service),
    user: TokenPayload = Depends(require_roles(*WRITE_ROLES)),
) -> None:
    """Delete an assignment. An active one first returns its asset to stock."""
    await assignment_service.delete_assignment(assignment_id)
    logger.info(
        "Hardware assignment deleted",
        extra={"assignment_id": str(assignment_id), "user_id": str(user.user_id)},
    )
