"""
Database models package.

Importing this package registers every ORM model with Base.metadata.

Dependencies: sqlalchemy, backoffice.boundary.db.base
System role: Database model definitions for domain entities
"""

from backoffice.boundary.db.models.user_model import UserModel
from backoffice.boundary.db.models.client_model import ClientModel
from backoffice.boundary.db.models.service_model import ServiceModel
from backoffice.boundary.db.models.contract_model import ContractModel
from backoffice.boundary.db.models.service_scope_model import ServiceScopeModel
from backoffice.boundary.db.models.hardware_asset_model import HardwareAssetModel
from backoffice.boundary.db.models.hardware_assignment_model import ClientHardwareAssignmentModel
from backoffice.boundary.db.models.financial_transaction_model import FinancialTransactionModel
from backoffice.boundary.db.models.team_assignment_model import ClientTeamAssignmentModel
from backoffice.boundary.db.models.external_data_source_model import ExternalDataSourceModel
from backoffice.boundary.db.models.data_source_query_model import DataSourceQueryModel

__all__ = [
    "UserModel",
    "ClientModel",
    "ServiceModel",
    "ContractModel",
    "ServiceScopeModel",
    "HardwareAssetModel",
    "ClientHardwareAssignmentModel",
    "FinancialTransactionModel",
    "ClientTeamAssignmentModel",
    "ExternalDataSourceModel",
    "DataSourceQueryModel",
]
