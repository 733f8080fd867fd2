"""
Hardware asset API endpoints.

Routes:
- POST /hardware-assets - Create asset
- GET /hardware-assets - List assets
- GET /hardware-assets/available - Assets that can be assigned
- GET /hardware-assets/{asset_id} - Get asset with assignment history
- PUT /hardware-assets/{asset_id} - Update asset
- PATCH /hardware-assets/{asset_id}/status - Change status
- DELETE /hardware-assets/{asset_id} - Dispose asset

Dependencies: backoffice.application.services, backoffice.models
System role: Hardware inventory HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from backoffice.api.deps import ALL_ROLES, WRITE_ROLES, get_hardware_asset_service, require_roles
from backoffice.api.routers.router_utils import handle_domain_errors, update_fields
from backoffice.application.services import HardwareAssetService
from backoffice.core.enums import HardwareAssetStatus, HardwareAssetType
from backoffice.core.security import TokenPayload
from backoffice.models.common import PaginatedResponse
from backoffice.models.hardware import (
    CreateHardwareAssetRequest,
    HardwareAssetDetailResponse,
    HardwareAssetResponse,
    UpdateHardwareAssetRequest,
    UpdateHardwareAssetStatusRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/hardware-assets", tags=["hardware"])


@router.post("", response_model=HardwareAssetResponse, status_code=201)
@handle_domain_errors
async def create_asset(
    request: CreateHardwareAssetRequest,
    asset_service: HardwareAssetService = Depends(get_hardware_asset_service),
    user: TokenPayload = Depends(require_roles(*WRITE_ROLES)),
) -> dict:
    """
    Register a hardware asset.

    Raises:
        HTTPException(409): Asset tag or serial number already used
    """
    logger.info("Creating hardware asset", extra={"asset_tag": request.asset_tag, "user_id": str(user.user_id)})
    return await asset_service.create_asset(**request.model_dump())


@router.get("", response_model=PaginatedResponse[HardwareAssetResponse])
@handle_domain_errors
async def list_assets(
    asset_tag: str | None = None,
    serial_number: str | None = None,
    location: str | None = None,
    manufacturer: str | None = None,
    model: str | None = None,
    asset_type: HardwareAssetType | None = None,
    status: HardwareAssetStatus | None = None,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    asset_service: HardwareAssetService = Depends(get_hardware_asset_service),
    _: TokenPayload = Depends(require_roles(*ALL_ROLES)),
) -> dict:
    """List assets. Text filters match case-insensitive substrings."""
    return await asset_service.list_assets(
        asset_tag=asset_tag,
        serial_number=serial_number,
        location=location,
        manufacturer=manufacturer,
        model=model,
        asset_type=asset_type,
        status=status,
        page=page,
        limit=limit,
    )


@router.get("/available", response_model=list[HardwareAssetResponse])
@handle_domain_errors
async def list_available_assets(
    asset_service: HardwareAssetService = Depends(get_hardware_asset_service),
    _: TokenPayload = Depends(require_roles(*ALL_ROLES)),
) -> list[dict]:
    """Assets in stock or awaiting deployment, by asset tag."""
    return await asset_service.list_available()


@router.get("/{asset_id}", response_model=HardwareAssetDetailResponse)
@handle_domain_errors
async def get_asset(
    asset_id: UUID,
    asset_service: HardwareAssetService = Depends(get_hardware_asset_service),
    _: TokenPayload = Depends(require_roles(*ALL_ROLES)),
) -> dict:
    """
    Get an asset and its assignment history.

    Raises:
        HTTPException(404): Asset not found
    """
    return await asset_service.get_asset(asset_id)


@router.put("/{asset_id}", response_model=HardwareAssetResponse)
@handle_domain_errors
async def update_asset(
    asset_id: UUID,
    request: UpdateHardwareAssetRequest,
    asset_service: HardwareAssetService = Depends(get_hardware_asset_service),
    user: TokenPayload = Depends(require_roles(*WRITE_ROLES)),
) -> dict:
    """
    Update asset fields.

    Raises:
        HTTPException(400): No fields provided
        HTTPException(404): Asset not found
        HTTPException(409): Asset tag or serial number already used
    """
    fields = update_fields(request)
    logger.info(
        "Updating hardware asset",
        extra={"asset_id": str(asset_id), "user_id": str(user.user_id), "fields": sorted(fields)},
    )
    return await asset_service.update_asset(asset_id, **fields)


@router.patch("/{asset_id}/status", response_model=HardwareAssetResponse)
@handle_domain_errors
async def update_asset_status(
    asset_id: UUID,
    request: UpdateHardwareAssetStatusRequest,
    asset_service: HardwareAssetService = Depends(get_hardware_asset_service),
    _: TokenPayload = Depends(require_roles(*WRITE_ROLES)),
) -> dict:
    """Set an asset's inventory status."""
    return await asset_service.update_status(asset_id, request.status)


@router.delete("/{asset_id}", response_model=HardwareAssetResponse)
@handle_domain_errors
async def dispose_asset(
    asset_id: UUID,
    asset_service: HardwareAssetService = Depends(get_hardware_asset_service),
    user: TokenPayload = Depends(require_roles(*WRITE_ROLES)),
) -> dict:
    """
    Mark an asset disposed.

    Raises:
        HTTPException(400): Asset still has an active assignment
        HTTPException(404): Asset not found
    """
    logger.info("Disposing hardware asset", extra={"asset_id": str(asset_id), "user_id": str(user.user_id)})
    return await asset_service.dispose_asset(asset_id)
