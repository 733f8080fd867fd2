"""Tests for the contract and service scope endpoints."""

import uuid
from datetime import date, datetime, timedelta, timezone

import pytest

from backoffice.api.deps import get_contract_service, get_service_scope_service
from backoffice.core.exceptions import BusinessRuleError, ConflictError, ResourceNotFoundError


def contract_payload(**overrides) -> dict:
    now = datetime.now(timezone.utc).isoformat()
    start = date.today()
    data = {
        "id": str(uuid.uuid4()),
        "contract_name": "Managed SOC 2025",
        "client_id": str(uuid.uuid4()),
        "client_name": "Acme Security",
        "start_date": start.isoformat(),
        "end_date": (start + timedelta(days=365)).isoformat(),
        "renewal_date": None,
        "value": 120000.0,
        "status": "draft",
        "document_link": None,
        "notes": None,
        "previous_contract_id": None,
        "service_scope_count": 0,
        "is_active": False,
        "is_expiring_soon": False,
        "days_until_expiration": 365,
        "duration_days": 365,
        "is_renewal": False,
        "created_at": now,
        "updated_at": now,
    }
    data.update(overrides)
    return data


@pytest.fixture
def contract_service(app, mock_service):
    app.dependency_overrides[get_contract_service] = lambda: mock_service
    return mock_service


def contract_body(**overrides) -> dict:
    body = {
        "contract_name": "Managed SOC 2025",
        "client_id": str(uuid.uuid4()),
        "start_date": "2025-01-01",
        "end_date": "2025-12-31",
        "value": "120000.00",
    }
    body.update(overrides)
    return body


def test_create_contract(client, contract_service, account_manager_headers):
    contract_service.create_contract.return_value = contract_payload()

    response = client.post("/api/v1/contracts", json=contract_body(), headers=account_manager_headers)

    assert response.status_code == 201
    kwargs = contract_service.create_contract.await_args.kwargs
    assert kwargs["status"].value == "draft"
    assert kwargs["end_date"] == date(2025, 12, 31)


def test_create_contract_with_bad_dates_returns_400(client, contract_service, admin_headers):
    contract_service.create_contract.side_effect = BusinessRuleError("End date must be after start date")

    response = client.post(
        "/api/v1/contracts",
        json=contract_body(start_date="2025-12-31", end_date="2025-01-01"),
        headers=admin_headers,
    )

    assert response.status_code == 400


def test_create_contract_for_missing_client_returns_404(client, contract_service, admin_headers):
    contract_service.create_contract.side_effect = ResourceNotFoundError("Client", uuid.uuid4())

    response = client.post("/api/v1/contracts", json=contract_body(), headers=admin_headers)

    assert response.status_code == 404


def test_create_contract_duplicate_name_returns_409(client, contract_service, admin_headers):
    contract_service.create_contract.side_effect = ConflictError("Contract name already exists")

    response = client.post("/api/v1/contracts", json=contract_body(), headers=admin_headers)

    assert response.status_code == 409


def test_expiring_contracts_uses_days_parameter(client, contract_service, engineer_headers):
    contract_service.list_expiring.return_value = [contract_payload(is_expiring_soon=True)]

    response = client.get("/api/v1/contracts/expiring?days=60", headers=engineer_headers)

    assert response.status_code == 200
    assert len(response.json()) == 1
    contract_service.list_expiring.assert_awaited_once_with(days=60)


def test_expiring_contracts_defaults_to_30_days(client, contract_service, engineer_headers):
    contract_service.list_expiring.return_value = []

    client.get("/api/v1/contracts/expiring", headers=engineer_headers)

    contract_service.list_expiring.assert_awaited_once_with(days=30)


def test_terminate_closed_contract_returns_400(client, contract_service, admin_headers):
    contract_service.terminate_contract.side_effect = BusinessRuleError("Contract is already terminated")

    response = client.delete(f"/api/v1/contracts/{uuid.uuid4()}", headers=admin_headers)

    assert response.status_code == 400


def test_total_value(client, contract_service, engineer_headers):
    contract_id = uuid.uuid4()
    contract_service.get_total_value.return_value = {"contract_id": contract_id, "total_value": 1500.0}

    response = client.get(f"/api/v1/contracts/{contract_id}/total-value", headers=engineer_headers)

    assert response.status_code == 200
    assert response.json() == {"contract_id": str(contract_id), "total_value": 1500.0}


def scope_payload(contract_id: str, **overrides) -> dict:
    now = datetime.now(timezone.utc).isoformat()
    data = {
        "id": str(uuid.uuid4()),
        "contract_id": contract_id,
        "contract_name": "Managed SOC 2025",
        "client_id": str(uuid.uuid4()),
        "service_id": str(uuid.uuid4()),
        "service_name": "EDR",
        "scope_details": {"endpoints": 250},
        "price": 10.0,
        "quantity": 250,
        "unit": "endpoint",
        "total_value": 2500.0,
        "notes": None,
        "is_active": True,
        "saf_document_link": None,
        "saf_service_start_date": None,
        "saf_service_end_date": None,
        "saf_status": "not_initiated",
        "is_saf_active": False,
        "created_at": now,
        "updated_at": now,
    }
    data.update(overrides)
    return data


def test_add_service_scope_to_contract(app, client, mock_service, account_manager_headers):
    contract_id = uuid.uuid4()
    service_id = uuid.uuid4()
    mock_service.create_for_contract.return_value = scope_payload(str(contract_id))
    app.dependency_overrides[get_service_scope_service] = lambda: mock_service

    response = client.post(
        f"/api/v1/contracts/{contract_id}/service-scopes",
        json={"service_id": str(service_id), "scope_details": {"endpoints": 250}, "price": "10", "quantity": 250},
        headers=account_manager_headers,
    )

    assert response.status_code == 201
    args = mock_service.create_for_contract.await_args
    assert args.args[0] == contract_id
    assert args.kwargs["service_id"] == service_id
    assert args.kwargs["saf_status"].value == "not_initiated"


def test_service_scope_with_inverted_saf_dates_is_rejected(app, client, mock_service, admin_headers):
    app.dependency_overrides[get_service_scope_service] = lambda: mock_service

    response = client.post(
        f"/api/v1/contracts/{uuid.uuid4()}/service-scopes",
        json={
            "service_id": str(uuid.uuid4()),
            "saf_service_start_date": "2025-06-01",
            "saf_service_end_date": "2025-01-01",
        },
        headers=admin_headers,
    )

    assert response.status_code == 422
    mock_service.create_for_contract.assert_not_awaited()


def test_service_scope_list_rejects_inverted_price_range(app, client, mock_service, engineer_headers):
    app.dependency_overrides[get_service_scope_service] = lambda: mock_service

    response = client.get("/api/v1/service-scopes?min_price=100&max_price=10", headers=engineer_headers)

    assert response.status_code == 400


def test_hard_delete_service_scope_is_admin_only(app, client, mock_service, manager_headers, admin_headers):
    app.dependency_overrides[get_service_scope_service] = lambda: mock_service
    scope_id = uuid.uuid4()

    forbidden = client.delete(f"/api/v1/service-scopes/{scope_id}/hard", headers=manager_headers)
    allowed = client.delete(f"/api/v1/service-scopes/{scope_id}/hard", headers=admin_headers)

    assert forbidden.status_code == 403
    assert allowed.status_code == 204
    mock_service.hard_delete_scope.assert_awaited_once_with(scope_id)
