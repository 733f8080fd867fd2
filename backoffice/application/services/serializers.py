"""
ORM to dict serializers.

Services return plain dicts; these helpers build them from ORM rows,
including derived fields and names of related entities.

Dependencies: backoffice.boundary.db.models
System role: Shared service-layer output shaping
"""

from decimal import Decimal
from typing import Any

from backoffice.boundary.db.CRUD.base_crud import total_pages
from backoffice.boundary.db.models import (
    ClientHardwareAssignmentModel,
    ClientModel,
    ClientTeamAssignmentModel,
    ContractModel,
    DataSourceQueryModel,
    ExternalDataSourceModel,
    FinancialTransactionModel,
    HardwareAssetModel,
    ServiceModel,
    ServiceScopeModel,
    UserModel,
)


def to_float(value: Decimal | float | None) -> float | None:
    return float(value) if value is not None else None


def user_to_dict(user: UserModel) -> dict[str, Any]:
    return {
        "id": user.id,
        "first_name": user.first_name,
        "last_name": user.last_name,
        "email": user.email,
        "role": user.role,
        "is_active": user.is_active,
        "created_at": user.created_at,
        "updated_at": user.updated_at,
    }


def client_to_dict(client: ClientModel) -> dict[str, Any]:
    return {
        "id": client.id,
        "company_name": client.company_name,
        "contact_name": client.contact_name,
        "contact_email": client.contact_email,
        "contact_phone": client.contact_phone,
        "address": client.address,
        "industry": client.industry,
        "website": client.website,
        "notes": client.notes,
        "status": client.status,
        "client_source": client.client_source,
        "is_active": client.is_active,
        "created_at": client.created_at,
        "updated_at": client.updated_at,
    }


def service_to_dict(service: ServiceModel) -> dict[str, Any]:
    return {
        "id": service.id,
        "name": service.name,
        "description": service.description,
        "category": service.category,
        "delivery_model": service.delivery_model,
        "base_price": to_float(service.base_price),
        "is_active": service.is_active,
        "scope_definition_template": service.scope_definition_template,
        "created_at": service.created_at,
        "updated_at": service.updated_at,
    }


def contract_to_dict(contract: ContractModel, service_scope_count: int = 0) -> dict[str, Any]:
    return {
        "id": contract.id,
        "contract_name": contract.contract_name,
        "client_id": contract.client_id,
        "client_name": contract.client.company_name if contract.client else None,
        "start_date": contract.start_date,
        "end_date": contract.end_date,
        "renewal_date": contract.renewal_date,
        "value": to_float(contract.value),
        "status": contract.status,
        "document_link": contract.document_link,
        "notes": contract.notes,
        "previous_contract_id": contract.previous_contract_id,
        "service_scope_count": service_scope_count,
        "is_active": contract.is_active,
        "is_expiring_soon": contract.is_expiring_soon,
        "days_until_expiration": contract.days_until_expiration,
        "duration_days": contract.duration_days,
        "is_renewal": contract.is_renewal,
        "created_at": contract.created_at,
        "updated_at": contract.updated_at,
    }


def service_scope_to_dict(scope: ServiceScopeModel) -> dict[str, Any]:
    contract = scope.contract
    return {
        "id": scope.id,
        "contract_id": scope.contract_id,
        "contract_name": contract.contract_name if contract else None,
        "client_id": contract.client_id if contract else None,
        "service_id": scope.service_id,
        "service_name": scope.service.name if scope.service else None,
        "scope_details": scope.scope_details,
        "price": to_float(scope.price),
        "quantity": scope.quantity,
        "unit": scope.unit,
        "total_value": to_float(scope.total_value),
        "notes": scope.notes,
        "is_active": scope.is_active,
        "saf_document_link": scope.saf_document_link,
        "saf_service_start_date": scope.saf_service_start_date,
        "saf_service_end_date": scope.saf_service_end_date,
        "saf_status": scope.saf_status,
        "is_saf_active": scope.is_saf_active,
        "created_at": scope.created_at,
        "updated_at": scope.updated_at,
    }


def hardware_asset_to_dict(asset: HardwareAssetModel) -> dict[str, Any]:
    return {
        "id": asset.id,
        "asset_tag": asset.asset_tag,
        "serial_number": asset.serial_number,
        "device_name": asset.device_name,
        "manufacturer": asset.manufacturer,
        "model": asset.model,
        "asset_type": asset.asset_type,
        "status": asset.status,
        "purchase_date": asset.purchase_date,
        "purchase_cost": to_float(asset.purchase_cost),
        "warranty_expiry_date": asset.warranty_expiry_date,
        "location": asset.location,
        "notes": asset.notes,
        "is_available": asset.is_available,
        "created_at": asset.created_at,
        "updated_at": asset.updated_at,
    }


def hardware_assignment_to_dict(assignment: ClientHardwareAssignmentModel) -> dict[str, Any]:
    asset = assignment.hardware_asset
    scope = assignment.service_scope
    return {
        "id": assignment.id,
        "hardware_asset_id": assignment.hardware_asset_id,
        "asset_tag": asset.asset_tag if asset else None,
        "asset_type": asset.asset_type if asset else None,
        "client_id": assignment.client_id,
        "client_name": assignment.client.company_name if assignment.client else None,
        "service_scope_id": assignment.service_scope_id,
        "service_name": scope.service.name if scope and scope.service else None,
        "assignment_date": assignment.assignment_date,
        "return_date": assignment.return_date,
        "status": assignment.status,
        "notes": assignment.notes,
        "created_at": assignment.created_at,
        "updated_at": assignment.updated_at,
    }


def financial_transaction_to_dict(transaction: FinancialTransactionModel) -> dict[str, Any]:
    return {
        "id": transaction.id,
        "type": transaction.type,
        "amount": to_float(transaction.amount),
        "currency": transaction.currency,
        "transaction_date": transaction.transaction_date,
        "description": transaction.description,
        "status": transaction.status,
        "reference_id": transaction.reference_id,
        "notes": transaction.notes,
        "due_date": transaction.due_date,
        "client_id": transaction.client_id,
        "client_name": transaction.client.company_name if transaction.client else None,
        "contract_id": transaction.contract_id,
        "contract_name": transaction.contract.contract_name if transaction.contract else None,
        "service_scope_id": transaction.service_scope_id,
        "hardware_asset_id": transaction.hardware_asset_id,
        "recorded_by_user_id": transaction.recorded_by_user_id,
        "recorded_by_name": transaction.recorded_by.full_name if transaction.recorded_by else None,
        "is_revenue": transaction.is_revenue,
        "is_cost": transaction.is_cost,
        "is_overdue": transaction.is_overdue,
        "created_at": transaction.created_at,
        "updated_at": transaction.updated_at,
    }


def team_assignment_to_dict(assignment: ClientTeamAssignmentModel) -> dict[str, Any]:
    user = assignment.user
    return {
        "id": assignment.id,
        "user_id": assignment.user_id,
        "user_name": user.full_name if user else None,
        "user_email": user.email if user else None,
        "user_role": user.role if user else None,
        "client_id": assignment.client_id,
        "client_name": assignment.client.company_name if assignment.client else None,
        "assignment_role": assignment.assignment_role,
        "assignment_date": assignment.assignment_date,
        "end_date": assignment.end_date,
        "is_active": assignment.is_active,
        "notes": assignment.notes,
        "priority": assignment.priority,
        "created_at": assignment.created_at,
        "updated_at": assignment.updated_at,
    }


def data_source_to_dict(
    source: ExternalDataSourceModel,
    queries: list[DataSourceQueryModel] | None = None,
) -> dict[str, Any]:
    """Sanitized data source; encrypted credentials are never included."""
    data = {
        "id": source.id,
        "name": source.name,
        "system_type": source.system_type,
        "base_url": source.base_url,
        "authentication_type": source.authentication_type,
        "has_credentials": bool(source.credentials_encrypted),
        "default_headers": source.default_headers,
        "description": source.description,
        "is_active": source.is_active,
        "created_at": source.created_at,
        "updated_at": source.updated_at,
    }
    if queries is not None:
        data["queries"] = [
            {"id": q.id, "query_name": q.query_name, "is_active": q.is_active} for q in queries
        ]
    return data


def query_to_dict(query: DataSourceQueryModel) -> dict[str, Any]:
    return {
        "id": query.id,
        "query_name": query.query_name,
        "data_source_id": query.data_source_id,
        "data_source_name": query.data_source.name if query.data_source else None,
        "description": query.description,
        "endpoint_path": query.endpoint_path,
        "http_method": query.http_method,
        "query_template": query.query_template,
        "response_extraction_path": query.response_extraction_path,
        "expected_response_type": query.expected_response_type,
        "cache_ttl_seconds": query.cache_ttl_seconds,
        "is_active": query.is_active,
        "notes": query.notes,
        "created_at": query.created_at,
        "updated_at": query.updated_at,
    }


def page_to_dict(items: list[dict[str, Any]], total: int, page: int, limit: int) -> dict[str, Any]:
    """Standard paginated payload."""
    return {
        "items": items,
        "total": total,
        "page": page,
        "limit": limit,
        "total_pages": total_pages(total, limit),
    }
