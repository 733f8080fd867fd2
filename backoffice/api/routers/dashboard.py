"""
Portfolio dashboard API endpoints.

Routes:
- GET /dashboard/expirations - Services and contracts expiring soon
- GET /dashboard/subscription-metrics - ARR, MRR and portfolio breakdowns

Per-client dashboards live under /clients/{client_id}/overview.

Dependencies: backoffice.application.services, backoffice.models.dashboard
System role: Dashboard HTTP API
"""

from fastapi import APIRouter, Depends, Query

from backoffice.api.deps import ALL_ROLES, FINANCE_READ_ROLES, get_dashboard_service, require_roles
from backoffice.api.routers.router_utils import handle_domain_errors
from backoffice.application.services import DashboardService
from backoffice.boundary.db.models.contract_model import EXPIRING_SOON_DAYS
from backoffice.core.security import TokenPayload
from backoffice.models.dashboard import ExpirationsResponse, SubscriptionMetricsResponse

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/expirations", response_model=ExpirationsResponse)
@handle_domain_errors
async def get_expirations(
    days: int = Query(EXPIRING_SOON_DAYS, ge=1, le=365),
    dashboard_service: DashboardService = Depends(get_dashboard_service),
    _: TokenPayload = Depends(require_roles(*ALL_ROLES)),
) -> dict:
    """Active scopes and contracts ending within the next `days` days."""
    return await dashboard_service.get_expirations(days=days)


@router.get("/subscription-metrics", response_model=SubscriptionMetricsResponse)
@handle_domain_errors
async def get_subscription_metrics(
    dashboard_service: DashboardService = Depends(get_dashboard_service),
    _: TokenPayload = Depends(require_roles(*FINANCE_READ_ROLES)),
) -> dict:
    """Recurring revenue figures across all active contracts."""
    return await dashboard_service.get_subscription_metrics()
