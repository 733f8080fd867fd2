"""Tests for the dashboard endpoints."""

import pytest

from backoffice.api.deps import get_dashboard_service


@pytest.fixture
def dashboard_service(app, mock_service):
    app.dependency_overrides[get_dashboard_service] = lambda: mock_service
    return mock_service


def empty_expirations(days: int) -> dict:
    return {
        "days": days,
        "services": [],
        "contracts": [],
        "summary": {
            "total_expiring_services": 0,
            "total_expiring_contracts": 0,
            "total_expiring_value": 0.0,
            "clients_affected": 0,
        },
    }


def test_expirations_default_window(client, dashboard_service, engineer_headers):
    dashboard_service.get_expirations.return_value = empty_expirations(30)

    response = client.get("/api/v1/dashboard/expirations", headers=engineer_headers)

    assert response.status_code == 200
    assert response.json()["days"] == 30
    dashboard_service.get_expirations.assert_awaited_once_with(days=30)


@pytest.mark.parametrize("days", [0, 366])
def test_expirations_window_bounds(client, dashboard_service, engineer_headers, days):
    response = client.get(f"/api/v1/dashboard/expirations?days={days}", headers=engineer_headers)

    assert response.status_code == 422


def test_subscription_metrics_requires_finance_read_role(client, dashboard_service, engineer_headers):
    response = client.get("/api/v1/dashboard/subscription-metrics", headers=engineer_headers)

    assert response.status_code == 403


def test_subscription_metrics(client, dashboard_service, account_manager_headers):
    dashboard_service.get_subscription_metrics.return_value = {
        "active_clients": 3,
        "active_contracts": 4,
        "annual_recurring_revenue": 480000.0,
        "monthly_recurring_revenue": 40000.0,
        "average_contract_value": 120000.0,
        "clients_by_source": {"referral": 2, "direct_sales": 1},
        "revenue_by_service": {"Managed EDR": 300000.0},
    }

    response = client.get("/api/v1/dashboard/subscription-metrics", headers=account_manager_headers)

    assert response.status_code == 200
    assert response.json()["monthly_recurring_revenue"] == 40000.0


def test_dashboard_requires_authentication(client, dashboard_service):
    response = client.get("/api/v1/dashboard/expirations")

    assert response.status_code == 401
