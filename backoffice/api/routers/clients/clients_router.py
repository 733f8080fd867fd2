"""
Client API endpoints.

Routes:
- POST /clients - Create client
- GET /clients - List clients (search, filters, sort, pagination)
- GET /clients/export - Export the filtered list as CSV
- GET /clients/{client_id} - Get client
- PUT /clients/{client_id} - Update client
- DELETE /clients/{client_id} - Delete client
- GET /clients/{client_id}/service-scopes - Service scopes across the client's contracts

Dependencies: backoffice.application.services, backoffice.models
System role: Client management HTTP API
"""

import logging
from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response

from backoffice.api.deps import ALL_ROLES, FINANCE_ROLES, WRITE_ROLES, get_client_service, require_roles
from backoffice.api.routers.router_utils import handle_domain_errors, update_fields
from backoffice.application.services import ClientService
from backoffice.core.enums import ClientStatus
from backoffice.core.security import TokenPayload
from backoffice.models.client import (
    ClientListParams,
    ClientResponse,
    ClientServiceScopeResponse,
    CreateClientRequest,
    UpdateClientRequest,
)
from backoffice.models.common import PaginatedResponse

from .client_responses import map_client_to_response, map_service_scopes_to_response
from .client_validators import build_client_filters

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/clients", tags=["clients"])


def client_list_params(
    search: str | None = None,
    company_name: str | None = None,
    contact_name: str | None = None,
    contact_email: str | None = None,
    industry: str | None = None,
    status: ClientStatus | None = None,
    created_from: date | None = None,
    created_to: date | None = None,
    sort_by: str = "created_at",
    sort_order: str = Query("desc", pattern="^(asc|desc|ASC|DESC)$"),
) -> ClientListParams:
    """Collect client listing filters from the query string."""
    return ClientListParams(
        search=search,
        company_name=company_name,
        contact_name=contact_name,
        contact_email=contact_email,
        industry=industry,
        status=status,
        created_from=created_from,
        created_to=created_to,
        sort_by=sort_by,
        sort_order=sort_order,
    )


@router.post("", response_model=ClientResponse, status_code=201)
@handle_domain_errors
async def create_client(
    request: CreateClientRequest,
    client_service: ClientService = Depends(get_client_service),
    user: TokenPayload = Depends(require_roles(*WRITE_ROLES)),
) -> ClientResponse:
    """
    Create a new client.

    Args:
        request: CreateClientRequest
        client_service: Injected ClientService
        user: Authenticated user with a write role

    Returns:
        ClientResponse: Created client

    Raises:
        HTTPException(409): Company name already exists
        HTTPException(422): Invalid request body
    """
    logger.info(
        "Creating client",
        extra={"company_name": request.company_name, "user_id": str(user.user_id)},
    )
    client = await client_service.create_client(**request.model_dump())
    return map_client_to_response(client)


@router.get("", response_model=PaginatedResponse[ClientResponse])
@handle_domain_errors
async def list_clients(
    params: ClientListParams = Depends(client_list_params),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    client_service: ClientService = Depends(get_client_service),
    _: TokenPayload = Depends(require_roles(*ALL_ROLES)),
) -> dict:
    """
    List clients.

    Supports a free-text search over company, contact name and email,
    per-field filters, a creation date range and sorting.
    """
    filters = build_client_filters(params)
    return await client_service.list_clients(filters, page=page, limit=limit)


@router.get("/export")
@handle_domain_errors
async def export_clients(
    params: ClientListParams = Depends(client_list_params),
    client_service: ClientService = Depends(get_client_service),
    user: TokenPayload = Depends(require_roles(*ALL_ROLES)),
) -> Response:
    """
    Export the filtered client list as a CSV download.

    Returns:
        Response: text/csv attachment named clients_export_<date>.csv
    """
    filters = build_client_filters(params)
    content = await client_service.export_clients_csv(filters)
    filename = f"clients_export_{date.today().isoformat()}.csv"

    logger.info("Exported clients", extra={"user_id": str(user.user_id), "export_filename": filename})
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/{client_id}", response_model=ClientResponse)
@handle_domain_errors
async def get_client(
    client_id: UUID,
    client_service: ClientService = Depends(get_client_service),
    _: TokenPayload = Depends(require_roles(*ALL_ROLES)),
) -> ClientResponse:
    """
    Get client by ID.

    Raises:
        HTTPException(404): Client not found
    """
    return map_client_to_response(await client_service.get_client(client_id))


@router.put("/{client_id}", response_model=ClientResponse)
@handle_domain_errors
async def update_client(
    client_id: UUID,
    request: UpdateClientRequest,
    client_service: ClientService = Depends(get_client_service),
    user: TokenPayload = Depends(require_roles(*WRITE_ROLES)),
) -> ClientResponse:
    """
    Update client fields.

    Raises:
        HTTPException(400): No fields provided
        HTTPException(404): Client not found
        HTTPException(409): New company name already used
    """
    fields = update_fields(request)
    logger.info(
        "Updating client",
        extra={"client_id": str(client_id), "user_id": str(user.user_id), "fields": sorted(fields)},
    )
    client = await client_service.update_client(client_id, **fields)
    return map_client_to_response(client)


@router.delete("/{client_id}", status_code=204)
@handle_domain_errors
async def delete_client(
    client_id: UUID,
    client_service: ClientService = Depends(get_client_service),
    user: TokenPayload = Depends(require_roles(*FINANCE_ROLES)),
) -> None:
    """
    Delete a client.

    Raises:
        HTTPException(404): Client not found
        HTTPException(409): Client still has contracts
    """
    await client_service.delete_client(client_id)
    logger.info("Client deleted", extra={"client_id": str(client_id), "user_id": str(user.user_id)})


@router.get("/{client_id}/service-scopes", response_model=list[ClientServiceScopeResponse])
@handle_domain_errors
async def get_client_service_scopes(
    client_id: UUID,
    client_service: ClientService = Depends(get_client_service),
    _: TokenPayload = Depends(require_roles(*ALL_ROLES)),
) -> list[ClientServiceScopeResponse]:
    """
    Service scopes across all of a client's contracts.

    Raises:
        HTTPException(404): Client not found
    """
    scopes = await client_service.get_client_service_scopes(client_id)
    return map_service_scopes_to_response(scopes)
