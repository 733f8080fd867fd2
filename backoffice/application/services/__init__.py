"""Service orchestrators."""

from .auth_service import AuthService
from .client_service import ClientService
from .contract_service import ContractService
from .dashboard_service import DashboardService
from .data_fetcher_service import DataFetcherService
from .data_source_query_service import DataSourceQueryService
from .data_source_service import DataSourceService
from .financial_service import FinancialService
from .hardware_asset_service import HardwareAssetService
from .hardware_assignment_service import HardwareAssignmentService
from .service_catalog_service import ServiceCatalogService
from .service_scope_service import ServiceScopeService
from .team_assignment_service import TeamAssignmentService

__all__ = [
    "AuthService",
    "ClientService",
    "ContractService",
    "DashboardService",
    "DataFetcherService",
    "DataSourceQueryService",
    "DataSourceService",
    "FinancialService",
    "HardwareAssetService",
    "HardwareAssignmentService",
    "ServiceCatalogService",
    "ServiceScopeService",
    "TeamAssignmentService",
]
