"""
CRUD operations for database models.

Exports base CRUD class and model-specific CRUD implementations
with pre-instantiated singletons for direct use.

Usage:
    from backoffice.boundary.db.CRUD import client_crud

    client = await client_crud.get_by_id(db, client_id)
"""

from backoffice.boundary.db.CRUD.base_crud import BaseCRUD, total_pages
from backoffice.boundary.db.CRUD.user_crud import UserCRUD, user_crud
from backoffice.boundary.db.CRUD.client_crud import ClientCRUD, ClientFilters, client_crud
from backoffice.boundary.db.CRUD.service_crud import ServiceCRUD, service_crud
from backoffice.boundary.db.CRUD.contract_crud import ContractCRUD, contract_crud
from backoffice.boundary.db.CRUD.service_scope_crud import ServiceScopeCRUD, service_scope_crud
from backoffice.boundary.db.CRUD.hardware_asset_crud import HardwareAssetCRUD, hardware_asset_crud
from backoffice.boundary.db.CRUD.hardware_assignment_crud import (
    HardwareAssignmentCRUD,
    hardware_assignment_crud,
)
from backoffice.boundary.db.CRUD.financial_transaction_crud import (
    FinancialTransactionCRUD,
    TransactionFilters,
    financial_transaction_crud,
)
from backoffice.boundary.db.CRUD.team_assignment_crud import TeamAssignmentCRUD, team_assignment_crud
from backoffice.boundary.db.CRUD.integration_crud import (
    DataSourceQueryCRUD,
    ExternalDataSourceCRUD,
    data_source_query_crud,
    external_data_source_crud,
)

__all__ = [
    "BaseCRUD",
    "total_pages",
    "UserCRUD",
    "user_crud",
    "ClientCRUD",
    "ClientFilters",
    "client_crud",
    "ServiceCRUD",
    "service_crud",
    "ContractCRUD",
    "contract_crud",
    "ServiceScopeCRUD",
    "service_scope_crud",
    "HardwareAssetCRUD",
    "hardware_asset_crud",
    "HardwareAssignmentCRUD",
    "hardware_assignment_crud",
    "FinancialTransactionCRUD",
    "TransactionFilters",
    "financial_transaction_crud",
    "TeamAssignmentCRUD",
    "team_assignment_crud",
    "ExternalDataSourceCRUD",
    "DataSourceQueryCRUD",
    "external_data_source_crud",
    "data_source_query_crud",
]
