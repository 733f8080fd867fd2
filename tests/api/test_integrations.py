"""Tests for the integration admin and data endpoints."""

import uuid
from datetime import datetime, timezone

import pytest

from backoffice.api.deps import (
    get_data_fetcher_service,
    get_data_source_query_service,
    get_data_source_service,
)
from backoffice.core.exceptions import ExternalDataError, ResourceNotFoundError


def source_payload(**overrides) -> dict:
    now = datetime.now(timezone.utc).isoformat()
    data = {
        "id": str(uuid.uuid4()),
        "name": "Grafana",
        "system_type": "GRAFANA",
        "base_url": "https://grafana.example.com/",
        "authentication_type": "BEARER_TOKEN_STATIC",
        "has_credentials": True,
        "default_headers": None,
        "description": None,
        "is_active": True,
        "created_at": now,
        "updated_at": now,
        "queries": None,
    }
    data.update(overrides)
    return data


@pytest.fixture
def source_service(app, mock_service):
    app.dependency_overrides[get_data_source_service] = lambda: mock_service
    return mock_service


@pytest.fixture
def fetcher(app, mock_service):
    app.dependency_overrides[get_data_fetcher_service] = lambda: mock_service
    return mock_service


def test_admin_routes_reject_non_admins(client, source_service, manager_headers):
    response = client.get("/api/v1/integrations/admin/data-sources", headers=manager_headers)

    assert response.status_code == 403
    source_service.list_data_sources.assert_not_awaited()


def test_create_data_source_never_echoes_credentials(client, source_service, admin_headers):
    source_service.create_data_source.return_value = source_payload()

    response = client.post(
        "/api/v1/integrations/admin/data-sources",
        json={
            "name": "Grafana",
            "system_type": "GRAFANA",
            "base_url": "https://grafana.example.com",
            "authentication_type": "BEARER_TOKEN_STATIC",
            "credentials": {"token": "secret-token"},
        },
        headers=admin_headers,
    )

    assert response.status_code == 201
    body = response.json()
    assert body["has_credentials"] is True
    assert "credentials" not in body
    assert "secret-token" not in response.text
    kwargs = source_service.create_data_source.await_args.kwargs
    assert kwargs["credentials"] == {"token": "secret-token"}


def test_create_data_source_rejects_invalid_url(client, source_service, admin_headers):
    response = client.post(
        "/api/v1/integrations/admin/data-sources",
        json={"name": "Broken", "system_type": "CUSTOM_API", "base_url": "not a url"},
        headers=admin_headers,
    )

    assert response.status_code == 422


def test_connection_test_reports_failure_without_error(client, source_service, admin_headers):
    source_service.test_connection.return_value = {
        "success": False,
        "message": "Connection failed: timeout",
        "status_code": None,
    }

    response = client.post(f"/api/v1/integrations/admin/data-sources/{uuid.uuid4()}/test", headers=admin_headers)

    assert response.status_code == 200
    assert response.json()["success"] is False


def test_validate_query_template(app, client, mock_service, admin_headers):
    app.dependency_overrides[get_data_source_query_service] = lambda: mock_service
    mock_service.validate_template.return_value = {"valid": True, "placeholders": ["project", "status"]}

    response = client.get(f"/api/v1/integrations/admin/queries/{uuid.uuid4()}/validate", headers=admin_headers)

    assert response.status_code == 200
    assert response.json() == {"valid": True, "placeholders": ["project", "status"]}


def test_query_name_pattern_is_enforced(app, client, mock_service, admin_headers):
    app.dependency_overrides[get_data_source_query_service] = lambda: mock_service

    response = client.post(
        "/api/v1/integrations/admin/queries",
        json={
            "query_name": "open tickets",
            "data_source_id": str(uuid.uuid4()),
            "endpoint_path": "/rest/api/2/search",
            "response_extraction_path": "$.total",
            "expected_response_type": "NUMBER",
        },
        headers=admin_headers,
    )

    assert response.status_code == 422


def test_fetch_get_coerces_query_values(client, fetcher, account_manager_headers):
    fetcher.fetch_data.return_value = {"query_name": "open_tickets", "data": 42, "cached": False}

    response = client.get(
        "/api/v1/integrations/data/open_tickets?limit=5&open=true&project=SOC",
        headers=account_manager_headers,
    )

    assert response.status_code == 200
    assert response.json()["data"] == 42
    fetcher.fetch_data.assert_awaited_once_with("open_tickets", {"limit": 5, "open": True, "project": "SOC"})


def test_fetch_post_uses_body_context(client, fetcher, manager_headers):
    fetcher.fetch_data.return_value = {"query_name": "open_tickets", "data": {"a": 1}, "cached": True}

    response = client.post(
        "/api/v1/integrations/data/open_tickets",
        json={"context_variables": {"project": "SOC"}},
        headers=manager_headers,
    )

    assert response.status_code == 200
    assert response.json()["cached"] is True
    fetcher.fetch_data.assert_awaited_once_with("open_tickets", {"project": "SOC"})


def test_fetch_post_without_context_passes_none(client, fetcher, manager_headers):
    fetcher.fetch_data.return_value = {"query_name": "open_tickets", "data": 3, "cached": False}

    response = client.post("/api/v1/integrations/data/open_tickets", json={}, headers=manager_headers)

    assert response.status_code == 200
    fetcher.fetch_data.assert_awaited_once_with("open_tickets", None)


def test_fetch_unknown_query_returns_404(client, fetcher, manager_headers):
    fetcher.fetch_data.side_effect = ResourceNotFoundError("Data source query", "missing")

    response = client.post("/api/v1/integrations/data/missing", json={}, headers=manager_headers)

    assert response.status_code == 404


def test_fetch_failure_returns_400(client, fetcher, manager_headers):
    fetcher.fetch_data.side_effect = ExternalDataError(
        "Missing required context variable: project", query_name="open_tickets"
    )

    response = client.post("/api/v1/integrations/data/open_tickets", json={}, headers=manager_headers)

    assert response.status_code == 400
    assert "project" in response.json()["detail"]


def test_engineer_cannot_fetch_data(client, fetcher, engineer_headers):
    response = client.get("/api/v1/integrations/data/open_tickets", headers=engineer_headers)

    assert response.status_code == 403
