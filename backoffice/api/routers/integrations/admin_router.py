"""
External data integration admin endpoints.

Routes (admin only):
- POST/GET /integrations/admin/data-sources
- GET/PUT/DELETE /integrations/admin/data-sources/{source_id}
- POST /integrations/admin/data-sources/{source_id}/test - Test connectivity
- POST/GET /integrations/admin/queries
- GET/PUT/DELETE /integrations/admin/queries/{query_id}
- GET /integrations/admin/queries/{query_id}/validate - Template placeholders

Dependencies: backoffice.application.services, backoffice.models.integration
System role: Integration configuration HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends

from backoffice.api.deps import (
    ADMIN_ROLES,
    get_data_source_query_service,
    get_data_source_service,
    require_roles,
)
from backoffice.api.routers.router_utils import handle_domain_errors, update_fields
from backoffice.application.services import DataSourceQueryService, DataSourceService
from backoffice.models.integration import (
    ConnectionTestResponse,
    CreateDataSourceRequest,
    CreateQueryRequest,
    DataSourceResponse,
    QueryResponse,
    TemplateValidationResponse,
    UpdateDataSourceRequest,
    UpdateQueryRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/integrations/admin",
    tags=["integrations"],
    dependencies=[Depends(require_roles(*ADMIN_ROLES))],
)


# Data sources


@router.post("/data-sources", response_model=DataSourceResponse, status_code=201)
@handle_domain_errors
async def create_data_source(
    request: CreateDataSourceRequest,
    source_service: DataSourceService = Depends(get_data_source_service),
) -> dict:
    """
    Register an external data source. Credentials are stored encrypted.

    Raises:
        HTTPException(400): Credentials missing keys for the authentication type
        HTTPException(409): Name already used
    """
    logger.info(
        "Creating data source",
        extra={"source_name": request.name, "authentication_type": request.authentication_type.value},
    )
    return await source_service.create_data_source(**request.model_dump())


@router.get("/data-sources", response_model=list[DataSourceResponse])
@handle_domain_errors
async def list_data_sources(
    source_service: DataSourceService = Depends(get_data_source_service),
) -> list[dict]:
    """All data sources by name."""
    return await source_service.list_data_sources()


@router.get("/data-sources/{source_id}", response_model=DataSourceResponse)
@handle_domain_errors
async def get_data_source(
    source_id: UUID,
    source_service: DataSourceService = Depends(get_data_source_service),
) -> dict:
    """Get a data source with its queries."""
    return await source_service.get_data_source(source_id)


@router.put("/data-sources/{source_id}", response_model=DataSourceResponse)
@handle_domain_errors
async def update_data_source(
    source_id: UUID,
    request: UpdateDataSourceRequest,
    source_service: DataSourceService = Depends(get_data_source_service),
) -> dict:
    """
    Update a data source.

    Raises:
        HTTPException(400): No fields provided, or invalid credentials
        HTTPException(404): Data source not found
        HTTPException(409): Name already used
    """
    fields = update_fields(request)
    logger.info("Updating data source", extra={"source_id": str(source_id), "fields": sorted(fields)})
    return await source_service.update_data_source(source_id, **fields)


@router.delete("/data-sources/{source_id}", status_code=204)
@handle_domain_errors
async def delete_data_source(
    source_id: UUID,
    source_service: DataSourceService = Depends(get_data_source_service),
) -> None:
    """Delete a data source and its queries."""
    await source_service.delete_data_source(source_id)


@router.post("/data-sources/{source_id}/test", response_model=ConnectionTestResponse)
@handle_domain_errors
async def test_data_source_connection(
    source_id: UUID,
    source_service: DataSourceService = Depends(get_data_source_service),
) -> dict:
    """Send an authenticated GET to the base URL and report the outcome."""
    return await source_service.test_connection(source_id)


# Queries


@router.post("/queries", response_model=QueryResponse, status_code=201)
@handle_domain_errors
async def create_query(
    request: CreateQueryRequest,
    query_service: DataSourceQueryService = Depends(get_data_source_query_service),
) -> dict:
    """
    Define a named query against a data source.

    Raises:
        HTTPException(400): Data source missing or JSONPath invalid
        HTTPException(409): Query name already used
    """
    logger.info("Creating data source query", extra={"query_name": request.query_name})
    return await query_service.create_query(**request.model_dump())


@router.get("/queries", response_model=list[QueryResponse])
@handle_domain_errors
async def list_queries(
    data_source_id: UUID | None = None,
    query_service: DataSourceQueryService = Depends(get_data_source_query_service),
) -> list[dict]:
    """Queries by name, optionally for one data source."""
    return await query_service.list_queries(data_source_id=data_source_id)


@router.get("/queries/{query_id}", response_model=QueryResponse)
@handle_domain_errors
async def get_query(
    query_id: UUID,
    query_service: DataSourceQueryService = Depends(get_data_source_query_service),
) -> dict:
    """Get a query by ID."""
    return await query_service.get_query(query_id)


@router.put("/queries/{query_id}", response_model=QueryResponse)
@handle_domain_errors
async def update_query(
    query_id: UUID,
    request: UpdateQueryRequest,
    query_service: DataSourceQueryService = Depends(get_data_source_query_service),
) -> dict:
    """Update a query; name, data source and JSONPath are re-checked."""
    fields = update_fields(request)
    logger.info("Updating data source query", extra={"query_id": str(query_id), "fields": sorted(fields)})
    return await query_service.update_query(query_id, **fields)


@router.delete("/queries/{query_id}", status_code=204)
@handle_domain_errors
async def delete_query(
    query_id: UUID,
    query_service: DataSourceQueryService = Depends(get_data_source_query_service),
) -> None:
    """Delete a query."""
    await query_service.delete_query(query_id)


@router.get("/queries/{query_id}/validate", response_model=TemplateValidationResponse)
@handle_domain_errors
async def validate_query_template(
    query_id: UUID,
    query_service: DataSourceQueryService = Depends(get_data_source_query_service),
) -> dict:
    """Placeholders used by the query's endpoint path and template."""
    return await query_service.validate_template(query_id)
