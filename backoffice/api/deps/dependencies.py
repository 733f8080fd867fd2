"""
Dependency injection container.

Factory functions for FastAPI dependencies.

Dependencies: backoffice.configs, backoffice.application, backoffice.boundary
System role: DI container for service injection
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.application.services import (
    AuthService,
    ClientService,
    ContractService,
    DashboardService,
    DataFetcherService,
    DataSourceQueryService,
    DataSourceService,
    FinancialService,
    HardwareAssetService,
    HardwareAssignmentService,
    ServiceCatalogService,
    ServiceScopeService,
    TeamAssignmentService,
)
from backoffice.boundary.cache import get_data_cache
from backoffice.boundary.db import get_async_db
from backoffice.configs import Settings, get_settings


def get_settings_dependency() -> Settings:
    """Get settings singleton."""
    return get_settings()


def get_auth_service(
    db: AsyncSession = Depends(get_async_db),
    settings: Settings = Depends(get_settings_dependency),
) -> AuthService:
    """
    Get auth service instance.

    Args:
        db: Async database session (injected via Depends)
        settings: Application settings (injected via Depends)

    Returns:
        AuthService: Auth service instance
    """
    return AuthService(db=db, settings=settings.auth)


def get_client_service(db: AsyncSession = Depends(get_async_db)) -> ClientService:
    """
    Get client service instance.

    Args:
        db: Async database session (injected via Depends)

    Returns:
        ClientService: Client service instance
    """
    return ClientService(db=db)


def get_service_catalog_service(db: AsyncSession = Depends(get_async_db)) -> ServiceCatalogService:
    """Get service catalog service instance."""
    return ServiceCatalogService(db=db)


def get_contract_service(db: AsyncSession = Depends(get_async_db)) -> ContractService:
    """Get contract service instance."""
    return ContractService(db=db)


def get_service_scope_service(db: AsyncSession = Depends(get_async_db)) -> ServiceScopeService:
    """Get service scope service instance."""
    return ServiceScopeService(db=db)


def get_hardware_asset_service(db: AsyncSession = Depends(get_async_db)) -> HardwareAssetService:
    """Get hardware asset service instance."""
    return HardwareAssetService(db=db)


def get_hardware_assignment_service(db: AsyncSession = Depends(get_async_db)) -> HardwareAssignmentService:
    """
    Get hardware assignment service instance.

    Args:
        db: Async database session (injected via Depends); the assignment
            flows run inside its request transaction

    Returns:
        HardwareAssignmentService: Hardware assignment service instance
    """
    return HardwareAssignmentService(db=db)


def get_financial_service(db: AsyncSession = Depends(get_async_db)) -> FinancialService:
    """Get financial service instance."""
    return FinancialService(db=db)


def get_team_assignment_service(db: AsyncSession = Depends(get_async_db)) -> TeamAssignmentService:
    """Get team assignment service instance."""
    return TeamAssignmentService(db=db)


def get_dashboard_service(db: AsyncSession = Depends(get_async_db)) -> DashboardService:
    """Get dashboard service instance."""
    return DashboardService(db=db)


def get_data_source_service(
    db: AsyncSession = Depends(get_async_db),
    settings: Settings = Depends(get_settings_dependency),
) -> DataSourceService:
    """
    Get data source admin service instance.

    Args:
        db: Async database session (injected via Depends)
        settings: Application settings (injected via Depends)

    Returns:
        DataSourceService: Service configured with integration settings
    """
    return DataSourceService(db=db, settings=settings.integrations)


def get_data_source_query_service(db: AsyncSession = Depends(get_async_db)) -> DataSourceQueryService:
    """Get data source query service instance."""
    return DataSourceQueryService(db=db)


def get_data_fetcher_service(
    db: AsyncSession = Depends(get_async_db),
    settings: Settings = Depends(get_settings_dependency),
) -> DataFetcherService:
    """
    Get data fetcher service instance.

    Uses the process-wide TTL cache so cached results survive across requests.

    Args:
        db: Async database session (injected via Depends)
        settings: Application settings (injected via Depends)

    Returns:
        DataFetcherService: Fetcher bound to the shared cache
    """
    return DataFetcherService(db=db, settings=settings.integrations, cache=get_data_cache())
