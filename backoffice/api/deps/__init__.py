"""API-specific dependencies."""

from .auth import (
    ADMIN_ROLES,
    ALL_ROLES,
    FINANCE_ROLES,
    FINANCE_READ_ROLES,
    WRITE_ROLES,
    get_current_user,
    get_optional_current_user,
    require_roles,
)
from .dependencies import (
    get_auth_service,
    get_client_service,
    get_contract_service,
    get_dashboard_service,
    get_data_fetcher_service,
    get_data_source_query_service,
    get_data_source_service,
    get_financial_service,
    get_hardware_asset_service,
    get_hardware_assignment_service,
    get_service_catalog_service,
    get_service_scope_service,
    get_settings_dependency,
    get_team_assignment_service,
)

__all__ = [
    "ADMIN_ROLES",
    "ALL_ROLES",
    "FINANCE_ROLES",
    "FINANCE_READ_ROLES",
    "WRITE_ROLES",
    "get_auth_service",
    "get_client_service",
    "get_contract_service",
    "get_current_user",
    "get_dashboard_service",
    "get_data_fetcher_service",
    "get_data_source_query_service",
    "get_data_source_service",
    "get_financial_service",
    "get_hardware_asset_service",
    "get_hardware_assignment_service",
    "get_optional_current_user",
    "get_service_catalog_service",
    "get_service_scope_service",
    "get_settings_dependency",
    "get_team_assignment_service",
    "require_roles",
]
