"""
Service catalog API endpoints.

Routes:
- POST /services - Create service
- GET /services - List services
- GET /services/statistics - Catalog statistics
- GET /services/{service_id} - Get service
- PUT /services/{service_id} - Update service
- DELETE /services/{service_id} - Deactivate service
- POST /services/{service_id}/reactivate - Reactivate service
- GET /services/{service_id}/scope-template - Get scope template
- PUT /services/{service_id}/scope-template - Replace scope template
- DELETE /services/{service_id}/scope-template - Clear scope template

Dependencies: backoffice.application.services, backoffice.models
System role: Service catalog HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from backoffice.api.deps import ALL_ROLES, WRITE_ROLES, get_service_catalog_service, require_roles
from backoffice.api.routers.router_utils import handle_domain_errors, update_fields
from backoffice.application.services import ServiceCatalogService
from backoffice.core.enums import ServiceCategory, ServiceDeliveryModel
from backoffice.core.security import TokenPayload
from backoffice.models.common import PaginatedResponse
from backoffice.models.service_catalog import (
    CreateServiceRequest,
    ScopeDefinitionTemplate,
    ScopeTemplateResponse,
    ServiceResponse,
    ServiceStatisticsResponse,
    UpdateServiceRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/services", tags=["services"])


def template_to_dict(template: ScopeDefinitionTemplate | None) -> dict | None:
    """Stored form of a scope template: snake_case keys, no nulls."""
    if template is None:
        return None
    return template.model_dump(mode="json", exclude_none=True)


@router.post("", response_model=ServiceResponse, status_code=201)
@handle_domain_errors
async def create_service(
    request: CreateServiceRequest,
    catalog_service: ServiceCatalogService = Depends(get_service_catalog_service),
    user: TokenPayload = Depends(require_roles(*WRITE_ROLES)),
) -> dict:
    """
    Create a catalog service.

    Raises:
        HTTPException(409): Service name already exists
    """
    fields = request.model_dump(exclude={"scope_definition_template"})
    fields["scope_definition_template"] = template_to_dict(request.scope_definition_template)
    logger.info("Creating service", extra={"service_name": request.name, "user_id": str(user.user_id)})
    return await catalog_service.create_service(**fields)


@router.get("", response_model=PaginatedResponse[ServiceResponse])
@handle_domain_errors
async def list_services(
    is_active: bool | None = None,
    category: ServiceCategory | None = None,
    delivery_model: ServiceDeliveryModel | None = None,
    search: str | None = None,
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=100),
    catalog_service: ServiceCatalogService = Depends(get_service_catalog_service),
    _: TokenPayload = Depends(require_roles(*ALL_ROLES)),
) -> dict:
    """List catalog services ordered by name."""
    return await catalog_service.list_services(
        is_active=is_active,
        category=category,
        delivery_model=delivery_model,
        search=search,
        page=page,
        limit=limit,
    )


@router.get("/statistics", response_model=ServiceStatisticsResponse)
@handle_domain_errors
async def get_service_statistics(
    catalog_service: ServiceCatalogService = Depends(get_service_catalog_service),
    _: TokenPayload = Depends(require_roles(*ALL_ROLES)),
) -> dict:
    """Counts by active flag, category and delivery model."""
    return await catalog_service.get_statistics()


@router.get("/{service_id}", response_model=ServiceResponse)
@handle_domain_errors
async def get_service(
    service_id: UUID,
    catalog_service: ServiceCatalogService = Depends(get_service_catalog_service),
    _: TokenPayload = Depends(require_roles(*ALL_ROLES)),
) -> dict:
    """
    Get service by ID.

    Raises:
        HTTPException(404): Service not found
    """
    return await catalog_service.get_service(service_id)


@router.put("/{service_id}", response_model=ServiceResponse)
@handle_domain_errors
async def update_service(
    service_id: UUID,
    request: UpdateServiceRequest,
    catalog_service: ServiceCatalogService = Depends(get_service_catalog_service),
    user: TokenPayload = Depends(require_roles(*WRITE_ROLES)),
) -> dict:
    """
    Update service fields.

    Raises:
        HTTPException(400): No fields provided
        HTTPException(404): Service not found
        HTTPException(409): New name already used
    """
    fields = update_fields(request)
    if "scope_definition_template" in fields:
        fields["scope_definition_template"] = template_to_dict(request.scope_definition_template)
    logger.info(
        "Updating service",
        extra={"service_id": str(service_id), "user_id": str(user.user_id), "fields": sorted(fields)},
    )
    return await catalog_service.update_service(service_id, **fields)


@router.delete("/{service_id}", response_model=ServiceResponse)
@handle_domain_errors
async def deactivate_service(
    service_id: UUID,
    catalog_service: ServiceCatalogService = Depends(get_service_catalog_service),
    user: TokenPayload = Depends(require_roles(*WRITE_ROLES)),
) -> dict:
    """
    Deactivate a service. Existing scopes keep referencing it.

    Raises:
        HTTPException(404): Service not found
    """
    logger.info("Deactivating service", extra={"service_id": str(service_id), "user_id": str(user.user_id)})
    return await catalog_service.set_active(service_id, False)


@router.post("/{service_id}/reactivate", response_model=ServiceResponse)
@handle_domain_errors
async def reactivate_service(
    service_id: UUID,
    catalog_service: ServiceCatalogService = Depends(get_service_catalog_service),
    user: TokenPayload = Depends(require_roles(*WRITE_ROLES)),
) -> dict:
    """
    Reactivate a service.

    Raises:
        HTTPException(404): Service not found
    """
    logger.info("Reactivating service", extra={"service_id": str(service_id), "user_id": str(user.user_id)})
    return await catalog_service.set_active(service_id, True)


@router.get("/{service_id}/scope-template", response_model=ScopeTemplateResponse)
@handle_domain_errors
async def get_scope_template(
    service_id: UUID,
    catalog_service: ServiceCatalogService = Depends(get_service_catalog_service),
    _: TokenPayload = Depends(require_roles(*ALL_ROLES)),
) -> dict:
    """Scope definition template of a service (null when none is set)."""
    return await catalog_service.get_scope_template(service_id)


@router.put("/{service_id}/scope-template", response_model=ScopeTemplateResponse)
@handle_domain_errors
async def update_scope_template(
    service_id: UUID,
    template: ScopeDefinitionTemplate,
    catalog_service: ServiceCatalogService = Depends(get_service_catalog_service),
    _: TokenPayload = Depends(require_roles(*WRITE_ROLES)),
) -> dict:
    """
    Replace the scope definition template.

    Existing scopes are not re-validated; the template applies to scopes
    created or updated afterwards.
    """
    return await catalog_service.update_scope_template(service_id, template_to_dict(template))


@router.delete("/{service_id}/scope-template", response_model=ScopeTemplateResponse)
@handle_domain_errors
async def clear_scope_template(
    service_id: UUID,
    catalog_service: ServiceCatalogService = Depends(get_service_catalog_service),
    _: TokenPayload = Depends(require_roles(*WRITE_ROLES)),
) -> dict:
    """Remove the scope definition template."""
    return await catalog_service.update_scope_template(service_id, None)
