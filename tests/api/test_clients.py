"""Tests for the client and client overview endpoints."""

import uuid
from datetime import datetime, timezone

import pytest

from backoffice.api.deps import get_client_service, get_dashboard_service
from backoffice.boundary.db.CRUD import ClientFilters
from backoffice.core.enums import ClientStatus
from backoffice.core.exceptions import ConflictError, ResourceNotFoundError


def client_payload(**overrides) -> dict:
    now = datetime.now(timezone.utc).isoformat()
    data = {
        "id": str(uuid.uuid4()),
        "company_name": "Acme Security",
        "contact_name": "Omar Haddad",
        "contact_email": "omar@acme.example",
        "contact_phone": None,
        "address": None,
        "industry": "Banking",
        "website": None,
        "notes": None,
        "status": "prospect",
        "client_source": None,
        "is_active": True,
        "created_at": now,
        "updated_at": now,
    }
    data.update(overrides)
    return data


CREATE_BODY = {
    "company_name": "Acme Security",
    "contact_name": "Omar Haddad",
    "contact_email": "omar@acme.example",
}


@pytest.fixture
def client_service(app, mock_service):
    app.dependency_overrides[get_client_service] = lambda: mock_service
    return mock_service


def test_create_client(client, client_service, account_manager_headers):
    client_service.create_client.return_value = client_payload()

    response = client.post("/api/v1/clients", json=CREATE_BODY, headers=account_manager_headers)

    assert response.status_code == 201
    assert response.json()["company_name"] == "Acme Security"
    assert client_service.create_client.await_args.kwargs["status"] == ClientStatus.PROSPECT


def test_create_client_duplicate_name_returns_409(client, client_service, account_manager_headers):
    client_service.create_client.side_effect = ConflictError("Client with this company name already exists")

    response = client.post("/api/v1/clients", json=CREATE_BODY, headers=account_manager_headers)

    assert response.status_code == 409


def test_create_client_requires_write_role(client, client_service, engineer_headers):
    response = client.post("/api/v1/clients", json=CREATE_BODY, headers=engineer_headers)

    assert response.status_code == 403
    client_service.create_client.assert_not_awaited()


def test_create_client_rejects_invalid_email(client, client_service, admin_headers):
    response = client.post(
        "/api/v1/clients",
        json={**CREATE_BODY, "contact_email": "not-an-email"},
        headers=admin_headers,
    )

    assert response.status_code == 422


def test_list_clients_passes_filters(client, client_service, engineer_headers):
    client_service.list_clients.return_value = {
        "items": [client_payload()],
        "total": 1,
        "page": 2,
        "limit": 5,
        "total_pages": 1,
    }

    response = client.get(
        "/api/v1/clients",
        params={"search": "acme", "status": "active", "sort_by": "company_name", "sort_order": "asc",
                "page": 2, "limit": 5},
        headers=engineer_headers,
    )

    assert response.status_code == 200
    filters = client_service.list_clients.await_args.args[0]
    assert isinstance(filters, ClientFilters)
    assert filters.search == "acme"
    assert filters.status == ClientStatus.ACTIVE
    assert filters.sort_order == "asc"
    assert client_service.list_clients.await_args.kwargs == {"page": 2, "limit": 5}


def test_list_clients_rejects_limit_over_100(client, client_service, engineer_headers):
    response = client.get("/api/v1/clients?limit=101", headers=engineer_headers)

    assert response.status_code == 422


def test_list_clients_rejects_inverted_date_range(client, client_service, engineer_headers):
    response = client.get(
        "/api/v1/clients?created_from=2024-05-01&created_to=2024-01-01",
        headers=engineer_headers,
    )

    assert response.status_code == 400
    client_service.list_clients.assert_not_awaited()


def test_export_clients_returns_csv_attachment(client, client_service, engineer_headers):
    client_service.export_clients_csv.return_value = "Company Name,Contact Name\r\nAcme,Omar\r\n"

    response = client.get("/api/v1/clients/export?status=active", headers=engineer_headers)

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert "attachment; filename=\"clients_export_" in response.headers["content-disposition"]
    assert response.text.startswith("Company Name")


def test_get_missing_client_returns_404(client, client_service, engineer_headers):
    client_id = uuid.uuid4()
    client_service.get_client.side_effect = ResourceNotFoundError("Client", client_id)

    response = client.get(f"/api/v1/clients/{client_id}", headers=engineer_headers)

    assert response.status_code == 404
    assert response.json()["detail"] == f"Client with ID {client_id} not found"


def test_update_client_without_fields_returns_400(client, client_service, admin_headers):
    response = client.put(f"/api/v1/clients/{uuid.uuid4()}", json={}, headers=admin_headers)

    assert response.status_code == 400
    client_service.update_client.assert_not_awaited()


def test_update_client_sends_only_provided_fields(client, client_service, admin_headers):
    client_id = uuid.uuid4()
    client_service.update_client.return_value = client_payload(id=str(client_id), industry="Energy")

    response = client.put(f"/api/v1/clients/{client_id}", json={"industry": "Energy"}, headers=admin_headers)

    assert response.status_code == 200
    client_service.update_client.assert_awaited_once_with(client_id, industry="Energy")


def test_delete_client_is_limited_to_admin_and_manager(client, client_service, account_manager_headers):
    response = client.delete(f"/api/v1/clients/{uuid.uuid4()}", headers=account_manager_headers)

    assert response.status_code == 403


def test_delete_client_with_contracts_returns_409(client, client_service, manager_headers):
    client_service.delete_client.side_effect = ConflictError("Client has contracts")

    response = client.delete(f"/api/v1/clients/{uuid.uuid4()}", headers=manager_headers)

    assert response.status_code == 409


def test_delete_client(client, client_service, manager_headers):
    response = client.delete(f"/api/v1/clients/{uuid.uuid4()}", headers=manager_headers)

    assert response.status_code == 204


def test_unexpected_service_failure_returns_500(client, client_service, engineer_headers):
    client_service.get_client.side_effect = RuntimeError("boom")

    response = client.get(f"/api/v1/clients/{uuid.uuid4()}", headers=engineer_headers)

    assert response.status_code == 500
    assert response.json()["detail"] == "An internal error occurred"


def overview_payload(client_id: uuid.UUID, financials: dict | None) -> dict:
    profile = client_payload(id=str(client_id))
    profile["account_manager"] = None
    return {
        "profile": profile,
        "contracts": [],
        "services": [],
        "financials": financials,
        "hardware": {"total_assigned": 0, "active_count": 0, "by_type": {}, "recent_assignments": []},
        "team": {"members": [], "members_by_role": {}},
        "summary": {
            "active_contracts": 0,
            "active_services": 0,
            "total_contract_value": 0.0,
            "health_status": "good",
        },
    }


def test_overview_hides_financials_from_engineers(app, client, mock_service, engineer_headers):
    client_id = uuid.uuid4()
    mock_service.get_client_overview.return_value = overview_payload(client_id, None)
    app.dependency_overrides[get_dashboard_service] = lambda: mock_service

    response = client.get(f"/api/v1/clients/{client_id}/overview", headers=engineer_headers)

    assert response.status_code == 200
    assert response.json()["financials"] is None
    mock_service.get_client_overview.assert_awaited_once_with(client_id, include_financials=False)


def test_overview_includes_financials_for_account_managers(app, client, mock_service, account_manager_headers):
    client_id = uuid.uuid4()
    financials = {
        "total_contract_value": 1000.0,
        "total_paid": 400.0,
        "total_pending": 100.0,
        "last_payment_date": None,
        "next_payment_due": None,
        "recent_transactions": [],
    }
    mock_service.get_client_overview.return_value = overview_payload(client_id, financials)
    app.dependency_overrides[get_dashboard_service] = lambda: mock_service

    response = client.get(f"/api/v1/clients/{client_id}/overview", headers=account_manager_headers)

    assert response.status_code == 200
    assert response.json()["financials"]["total_paid"] == 400.0
    mock_service.get_client_overview.assert_awaited_once_with(client_id, include_financials=True)


def test_overview_financials_section_forbidden_for_engineers(app, client, mock_service, engineer_headers):
    app.dependency_overrides[get_dashboard_service] = lambda: mock_service

    response = client.get(f"/api/v1/clients/{uuid.uuid4()}/overview/financials", headers=engineer_headers)

    assert response.status_code == 403
