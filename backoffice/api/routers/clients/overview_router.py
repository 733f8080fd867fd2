"""
Client overview API endpoints.

Routes:
- GET /clients/{client_id}/overview - Full dashboard payload
- GET /clients/{client_id}/overview/profile
- GET /clients/{client_id}/overview/contracts
- GET /clients/{client_id}/overview/services
- GET /clients/{client_id}/overview/financials
- GET /clients/{client_id}/overview/hardware
- GET /clients/{client_id}/overview/team

Dependencies: backoffice.application.services, backoffice.models.dashboard
System role: Client dashboard HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends

from backoffice.api.deps import ALL_ROLES, FINANCE_READ_ROLES, get_dashboard_service, require_roles
from backoffice.api.routers.router_utils import handle_domain_errors
from backoffice.application.services import DashboardService
from backoffice.core.security import TokenPayload
from backoffice.models.dashboard import (
    ClientOverviewResponse,
    ClientProfileResponse,
    OverviewContract,
    OverviewFinancials,
    OverviewHardware,
    OverviewService,
    OverviewTeam,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/clients/{client_id}/overview", tags=["client-overview"])


@router.get("", response_model=ClientOverviewResponse)
@handle_domain_errors
async def get_client_overview(
    client_id: UUID,
    dashboard_service: DashboardService = Depends(get_dashboard_service),
    user: TokenPayload = Depends(require_roles(*ALL_ROLES)),
) -> dict:
    """
    Aggregated client dashboard.

    The financials section is only filled in for roles allowed to read
    financial data; for everyone else it is null.

    Raises:
        HTTPException(404): Client not found
    """
    include_financials = user.role in FINANCE_READ_ROLES
    return await dashboard_service.get_client_overview(client_id, include_financials=include_financials)


@router.get("/profile", response_model=ClientProfileResponse)
@handle_domain_errors
async def get_profile(
    client_id: UUID,
    dashboard_service: DashboardService = Depends(get_dashboard_service),
    _: TokenPayload = Depends(require_roles(*ALL_ROLES)),
) -> dict:
    """Client profile with its account manager."""
    return await dashboard_service.get_profile(client_id)


@router.get("/contracts", response_model=list[OverviewContract])
@handle_domain_errors
async def get_contracts(
    client_id: UUID,
    dashboard_service: DashboardService = Depends(get_dashboard_service),
    _: TokenPayload = Depends(require_roles(*ALL_ROLES)),
) -> list[dict]:
    """Active contracts of the client."""
    return await dashboard_service.get_contracts(client_id)


@router.get("/services", response_model=list[OverviewService])
@handle_domain_errors
async def get_services(
    client_id: UUID,
    dashboard_service: DashboardService = Depends(get_dashboard_service),
    _: TokenPayload = Depends(require_roles(*ALL_ROLES)),
) -> list[dict]:
    """Active service scopes with their key parameters."""
    return await dashboard_service.get_services(client_id)


@router.get("/financials", response_model=OverviewFinancials)
@handle_domain_errors
async def get_financials(
    client_id: UUID,
    dashboard_service: DashboardService = Depends(get_dashboard_service),
    _: TokenPayload = Depends(require_roles(*FINANCE_READ_ROLES)),
) -> dict:
    """Contract value, paid and pending totals and recent transactions."""
    return await dashboard_service.get_financials(client_id)


@router.get("/hardware", response_model=OverviewHardware)
@handle_domain_errors
async def get_hardware(
    client_id: UUID,
    dashboard_service: DashboardService = Depends(get_dashboard_service),
    _: TokenPayload = Depends(require_roles(*ALL_ROLES)),
) -> dict:
    """Hardware assigned to the client."""
    return await dashboard_service.get_hardware(client_id)


@router.get("/team", response_model=OverviewTeam)
@handle_domain_errors
async def get_team(
    client_id: UUID,
    dashboard_service: DashboardService = Depends(get_dashboard_service),
    _: TokenPayload = Depends(require_roles(*ALL_ROLES)),
) -> dict:
    """Active team members by role."""
    return await dashboard_service.get_team(client_id)
