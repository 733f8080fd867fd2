"""Tests for the hardware asset and assignment endpoints."""

import uuid
from datetime import date, datetime, timezone

import pytest

from backoffice.api.deps import get_hardware_asset_service, get_hardware_assignment_service
from backoffice.core.exceptions import BusinessRuleError, ConflictError, ResourceNotFoundError


def asset_payload(**overrides) -> dict:
    now = datetime.now(timezone.utc).isoformat()
    data = {
        "id": str(uuid.uuid4()),
        "asset_tag": "FW-0001",
        "serial_number": "SN-123",
        "device_name": None,
        "manufacturer": "Fortinet",
        "model": "FG-100F",
        "asset_type": "firewall",
        "status": "in_stock",
        "purchase_date": None,
        "purchase_cost": None,
        "warranty_expiry_date": None,
        "location": None,
        "notes": None,
        "is_available": True,
        "created_at": now,
        "updated_at": now,
    }
    data.update(overrides)
    return data


def assignment_payload(**overrides) -> dict:
    now = datetime.now(timezone.utc).isoformat()
    data = {
        "id": str(uuid.uuid4()),
        "hardware_asset_id": str(uuid.uuid4()),
        "asset_tag": "FW-0001",
        "asset_type": "firewall",
        "client_id": str(uuid.uuid4()),
        "client_name": "Acme Security",
        "service_scope_id": None,
        "service_name": None,
        "assignment_date": date.today().isoformat(),
        "return_date": None,
        "status": "active",
        "notes": None,
        "created_at": now,
        "updated_at": now,
    }
    data.update(overrides)
    return data


@pytest.fixture
def asset_service(app, mock_service):
    app.dependency_overrides[get_hardware_asset_service] = lambda: mock_service
    return mock_service


@pytest.fixture
def assignment_service(app, mock_service):
    app.dependency_overrides[get_hardware_assignment_service] = lambda: mock_service
    return mock_service


def test_create_asset(client, asset_service, account_manager_headers):
    asset_service.create_asset.return_value = asset_payload()

    response = client.post(
        "/api/v1/hardware-assets",
        json={"asset_tag": "FW-0001", "asset_type": "firewall", "serial_number": "SN-123"},
        headers=account_manager_headers,
    )

    assert response.status_code == 201
    assert response.json()["is_available"] is True


def test_create_asset_duplicate_tag_returns_409(client, asset_service, admin_headers):
    asset_service.create_asset.side_effect = ConflictError("Asset tag 'FW-0001' already exists")

    response = client.post(
        "/api/v1/hardware-assets",
        json={"asset_tag": "FW-0001", "asset_type": "firewall"},
        headers=admin_headers,
    )

    assert response.status_code == 409


def test_engineer_cannot_create_asset(client, asset_service, engineer_headers):
    response = client.post(
        "/api/v1/hardware-assets",
        json={"asset_tag": "FW-0001", "asset_type": "firewall"},
        headers=engineer_headers,
    )

    assert response.status_code == 403


def test_available_route_is_not_shadowed_by_id_route(client, asset_service, engineer_headers):
    asset_service.list_available.return_value = [asset_payload()]

    response = client.get("/api/v1/hardware-assets/available", headers=engineer_headers)

    assert response.status_code == 200
    assert len(response.json()) == 1


def test_patch_status(client, asset_service, manager_headers):
    asset_id = uuid.uuid4()
    asset_service.update_status.return_value = asset_payload(status="under_maintenance", is_available=False)

    response = client.patch(
        f"/api/v1/hardware-assets/{asset_id}/status",
        json={"status": "under_maintenance"},
        headers=manager_headers,
    )

    assert response.status_code == 200
    args = asset_service.update_status.await_args.args
    assert args[0] == asset_id
    assert args[1].value == "under_maintenance"


def test_patch_status_rejects_unknown_status(client, asset_service, manager_headers):
    response = client.patch(
        f"/api/v1/hardware-assets/{uuid.uuid4()}/status",
        json={"status": "borrowed"},
        headers=manager_headers,
    )

    assert response.status_code == 422


def test_dispose_asset_in_use_returns_400(client, asset_service, admin_headers):
    asset_service.dispose_asset.side_effect = BusinessRuleError("Asset has active assignments")

    response = client.delete(f"/api/v1/hardware-assets/{uuid.uuid4()}", headers=admin_headers)

    assert response.status_code == 400
    assert response.json()["detail"] == "Asset has active assignments"


def test_assign_hardware(client, assignment_service, account_manager_headers):
    asset_id = uuid.uuid4()
    client_id = uuid.uuid4()
    assignment_service.assign.return_value = assignment_payload(
        hardware_asset_id=str(asset_id), client_id=str(client_id)
    )

    response = client.post(
        "/api/v1/hardware-assignments",
        json={"hardware_asset_id": str(asset_id), "client_id": str(client_id)},
        headers=account_manager_headers,
    )

    assert response.status_code == 201
    kwargs = assignment_service.assign.await_args.kwargs
    assert kwargs["hardware_asset_id"] == asset_id
    assert kwargs["assignment_date"] == date.today()
    assert kwargs["service_scope_id"] is None


def test_assign_unavailable_asset_returns_400(client, assignment_service, admin_headers):
    assignment_service.assign.side_effect = BusinessRuleError("Hardware asset FW-0001 is not available")

    response = client.post(
        "/api/v1/hardware-assignments",
        json={"hardware_asset_id": str(uuid.uuid4()), "client_id": str(uuid.uuid4())},
        headers=admin_headers,
    )

    assert response.status_code == 400


def test_assign_missing_client_returns_404(client, assignment_service, admin_headers):
    assignment_service.assign.side_effect = ResourceNotFoundError("Client", uuid.uuid4())

    response = client.post(
        "/api/v1/hardware-assignments",
        json={"hardware_asset_id": str(uuid.uuid4()), "client_id": str(uuid.uuid4())},
        headers=admin_headers,
    )

    assert response.status_code == 404


def test_update_assignment_rejects_return_before_assignment(client, assignment_service, admin_headers):
    response = client.put(
        f"/api/v1/hardware-assignments/{uuid.uuid4()}",
        json={"assignment_date": "2025-05-01", "return_date": "2025-04-01"},
        headers=admin_headers,
    )

    assert response.status_code == 422
    assignment_service.update_assignment.assert_not_awaited()


def test_delete_assignment(client, assignment_service, admin_headers):
    assignment_id = uuid.uuid4()

    response = client.delete(f"/api/v1/hardware-assignments/{assignment_id}", headers=admin_headers)

    assert response.status_code == 204
    assignment_service.delete_assignment.assert_awaited_once_with(assignment_id)
