"""Tests for the financial transaction endpoints."""

import uuid
from datetime import date, datetime, timezone

import pytest

from backoffice.api.deps import get_financial_service
from backoffice.boundary.db.CRUD import TransactionFilters
from backoffice.core.enums import UserRole
from backoffice.core.exceptions import BusinessRuleError


def transaction_payload(**overrides) -> dict:
    now = datetime.now(timezone.utc).isoformat()
    data = {
        "id": str(uuid.uuid4()),
        "type": "REVENUE_CONTRACT_PAYMENT",
        "amount": 5000.0,
        "currency": "SAR",
        "transaction_date": "2025-03-01",
        "description": "Q1 invoice",
        "status": "PAID",
        "reference_id": None,
        "notes": None,
        "due_date": None,
        "client_id": None,
        "client_name": None,
        "contract_id": None,
        "contract_name": None,
        "service_scope_id": None,
        "hardware_asset_id": None,
        "recorded_by_user_id": str(uuid.uuid4()),
        "recorded_by_name": "Finance User",
        "is_revenue": True,
        "is_cost": False,
        "is_overdue": False,
        "created_at": now,
        "updated_at": now,
    }
    data.update(overrides)
    return data


TRANSACTION_BODY = {
    "type": "REVENUE_CONTRACT_PAYMENT",
    "amount": "5000.00",
    "currency": "sar",
    "transaction_date": "2025-03-01",
    "description": "Q1 invoice",
    "status": "PAID",
}

EMPTY_PAGE = {"items": [], "total": 0, "page": 1, "limit": 20, "total_pages": 0}


@pytest.fixture
def financial_service(app, mock_service):
    app.dependency_overrides[get_financial_service] = lambda: mock_service
    return mock_service


def test_create_transaction_records_caller(client, financial_service, make_auth_headers):
    user_id = uuid.uuid4()
    financial_service.create_transaction.return_value = transaction_payload()

    response = client.post(
        "/api/v1/financial-transactions",
        json=TRANSACTION_BODY,
        headers=make_auth_headers(UserRole.MANAGER, user_id=user_id),
    )

    assert response.status_code == 201
    args = financial_service.create_transaction.await_args
    assert args.args[0] == user_id
    assert args.kwargs["currency"] == "SAR"
    assert args.kwargs["client_id"] is None


def test_account_manager_can_read_but_not_write(client, financial_service, account_manager_headers):
    financial_service.list_transactions.return_value = EMPTY_PAGE

    read = client.get("/api/v1/financial-transactions", headers=account_manager_headers)
    write = client.post("/api/v1/financial-transactions", json=TRANSACTION_BODY, headers=account_manager_headers)

    assert read.status_code == 200
    assert write.status_code == 403


def test_engineer_cannot_read_transactions(client, financial_service, engineer_headers):
    response = client.get("/api/v1/financial-transactions", headers=engineer_headers)

    assert response.status_code == 403


def test_zero_amount_is_rejected(client, financial_service, admin_headers):
    response = client.post(
        "/api/v1/financial-transactions",
        json={**TRANSACTION_BODY, "amount": "0"},
        headers=admin_headers,
    )

    assert response.status_code == 422


def test_missing_linked_record_returns_400(client, financial_service, admin_headers):
    financial_service.create_transaction.side_effect = BusinessRuleError("Client not found")

    response = client.post(
        "/api/v1/financial-transactions",
        json={**TRANSACTION_BODY, "client_id": str(uuid.uuid4())},
        headers=admin_headers,
    )

    assert response.status_code == 400


def test_list_maps_date_filters(client, financial_service, manager_headers):
    financial_service.list_transactions.return_value = EMPTY_PAGE

    response = client.get(
        "/api/v1/financial-transactions",
        params={"transaction_date_from": "2025-01-01", "transaction_date_to": "2025-03-31", "status": "PAID"},
        headers=manager_headers,
    )

    assert response.status_code == 200
    filters = financial_service.list_transactions.await_args.args[0]
    assert isinstance(filters, TransactionFilters)
    assert filters.date_from == date(2025, 1, 1)
    assert filters.date_to == date(2025, 3, 31)
    assert filters.status.value == "PAID"


def test_list_rejects_inverted_dates(client, financial_service, manager_headers):
    response = client.get(
        "/api/v1/financial-transactions",
        params={"transaction_date_from": "2025-04-01", "transaction_date_to": "2025-03-31"},
        headers=manager_headers,
    )

    assert response.status_code == 400
    assert "transaction_date_from" in response.json()["detail"]


def test_summary(client, financial_service, account_manager_headers):
    client_id = uuid.uuid4()
    financial_service.get_summary.return_value = {
        "total_revenue": 7000.0,
        "total_costs": 2000.0,
        "net_profit": 5000.0,
        "transaction_count": 3,
    }

    response = client.get(
        f"/api/v1/financial-transactions/summary?client_id={client_id}",
        headers=account_manager_headers,
    )

    assert response.status_code == 200
    assert response.json()["net_profit"] == 5000.0
    financial_service.get_summary.assert_awaited_once_with(
        client_id=client_id, contract_id=None, date_from=None, date_to=None
    )


def test_delete_transaction(client, financial_service, admin_headers):
    transaction_id = uuid.uuid4()

    response = client.delete(f"/api/v1/financial-transactions/{transaction_id}", headers=admin_headers)

    assert response.status_code == 204
    financial_service.delete_transaction.assert_awaited_once_with(transaction_id)
