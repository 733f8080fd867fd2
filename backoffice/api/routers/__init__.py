"""
API routers.

Exports all routers for assembly in the main application.
"""

from .auth import router as auth_router
from .clients import overview_router as client_overview_router
from .clients import router as clients_router
from .contracts import router as contracts_router
from .contracts import service_scopes_router
from .dashboard import router as dashboard_router
from .financials import router as financials_router
from .hardware import assignments_router as hardware_assignments_router
from .hardware import router as hardware_assets_router
from .health import router as health_router
from .integrations import data_router as integrations_data_router
from .integrations import router as integrations_admin_router
from .services import router as services_router
from .team_assignments import router as team_assignments_router
from .users import router as users_router

__all__ = [
    "auth_router",
    "client_overview_router",
    "clients_router",
    "contracts_router",
    "dashboard_router",
    "financials_router",
    "hardware_assets_router",
    "hardware_assignments_router",
    "health_router",
    "integrations_admin_router",
    "integrations_data_router",
    "service_scopes_router",
    "services_router",
    "team_assignments_router",
    "users_router",
]
