"""Tests for the auth and user endpoints."""

import uuid
from datetime import datetime, timezone

from backoffice.api.deps import get_auth_service
from backoffice.core.enums import UserRole
from backoffice.core.exceptions import AuthenticationError, ConflictError


def user_payload(role: UserRole = UserRole.ENGINEER, **overrides) -> dict:
    now = datetime.now(timezone.utc).isoformat()
    data = {
        "id": str(uuid.uuid4()),
        "first_name": "Sara",
        "last_name": "Ali",
        "email": "sara@example.com",
        "role": role.value,
        "is_active": True,
        "created_at": now,
        "updated_at": now,
    }
    data.update(overrides)
    return data


REGISTER_BODY = {
    "first_name": "Sara",
    "last_name": "Ali",
    "email": "sara@example.com",
    "password": "s3cret-pass",
}


def test_register_defaults_to_engineer(app, client, mock_service):
    mock_service.register.return_value = user_payload()
    app.dependency_overrides[get_auth_service] = lambda: mock_service

    response = client.post("/api/v1/auth/register", json=REGISTER_BODY)

    assert response.status_code == 201
    assert response.json()["role"] == "engineer"
    assert mock_service.register.await_args.kwargs["role"] == UserRole.ENGINEER


def test_register_elevated_role_without_token_is_forbidden(app, client, mock_service):
    app.dependency_overrides[get_auth_service] = lambda: mock_service

    response = client.post("/api/v1/auth/register", json={**REGISTER_BODY, "role": "manager"})

    assert response.status_code == 403
    mock_service.register.assert_not_awaited()


def test_register_elevated_role_by_non_admin_is_forbidden(app, client, mock_service, manager_headers):
    app.dependency_overrides[get_auth_service] = lambda: mock_service

    response = client.post(
        "/api/v1/auth/register",
        json={**REGISTER_BODY, "role": "admin"},
        headers=manager_headers,
    )

    assert response.status_code == 403


def test_register_elevated_role_by_admin(app, client, mock_service, admin_headers):
    mock_service.register.return_value = user_payload(UserRole.MANAGER)
    app.dependency_overrides[get_auth_service] = lambda: mock_service

    response = client.post(
        "/api/v1/auth/register",
        json={**REGISTER_BODY, "role": "manager"},
        headers=admin_headers,
    )

    assert response.status_code == 201
    assert response.json()["role"] == "manager"


def test_register_duplicate_email_returns_409(app, client, mock_service):
    mock_service.register.side_effect = ConflictError("A user with this email already exists")
    app.dependency_overrides[get_auth_service] = lambda: mock_service

    response = client.post("/api/v1/auth/register", json=REGISTER_BODY)

    assert response.status_code == 409


def test_register_rejects_short_password(client):
    response = client.post("/api/v1/auth/register", json={**REGISTER_BODY, "password": "short"})

    assert response.status_code == 422


def test_login_returns_token(app, client, mock_service):
    mock_service.login.return_value = {
        "access_token": "token-value",
        "token_type": "bearer",
        "user": user_payload(),
    }
    app.dependency_overrides[get_auth_service] = lambda: mock_service

    response = client.post("/api/v1/auth/login", json={"email": "sara@example.com", "password": "x"})

    assert response.status_code == 200
    assert response.json()["access_token"] == "token-value"
    assert response.json()["token_type"] == "bearer"


def test_login_invalid_credentials_returns_401(app, client, mock_service):
    mock_service.login.side_effect = AuthenticationError("Invalid credentials")
    app.dependency_overrides[get_auth_service] = lambda: mock_service

    response = client.post("/api/v1/auth/login", json={"email": "sara@example.com", "password": "bad"})

    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid credentials"
    assert response.headers["WWW-Authenticate"] == "Bearer"


def test_me_requires_token(client):
    response = client.get("/api/v1/auth/me")

    assert response.status_code == 401


def test_me_rejects_garbage_token(client):
    response = client.get("/api/v1/auth/me", headers={"Authorization": "Bearer not-a-jwt"})

    assert response.status_code == 401


def test_me_returns_profile_of_token_subject(app, client, mock_service, make_auth_headers):
    user_id = uuid.uuid4()
    mock_service.get_user.return_value = user_payload(id=str(user_id))
    app.dependency_overrides[get_auth_service] = lambda: mock_service

    response = client.get("/api/v1/auth/me", headers=make_auth_headers(UserRole.ENGINEER, user_id))

    assert response.status_code == 200
    mock_service.get_user.assert_awaited_once_with(user_id)


def test_list_users_forbidden_for_engineer(app, client, mock_service, engineer_headers):
    app.dependency_overrides[get_auth_service] = lambda: mock_service

    response = client.get("/api/v1/users", headers=engineer_headers)

    assert response.status_code == 403


def test_list_users_for_manager(app, client, mock_service, manager_headers):
    mock_service.list_users.return_value = {
        "items": [user_payload()],
        "total": 1,
        "page": 1,
        "limit": 20,
        "total_pages": 1,
    }
    app.dependency_overrides[get_auth_service] = lambda: mock_service

    response = client.get("/api/v1/users?role=engineer", headers=manager_headers)

    assert response.status_code == 200
    assert response.json()["total"] == 1
    assert mock_service.list_users.await_args.kwargs["role"] == UserRole.ENGINEER


def test_update_user_is_admin_only(app, client, mock_service, manager_headers):
    app.dependency_overrides[get_auth_service] = lambda: mock_service

    response = client.patch(f"/api/v1/users/{uuid.uuid4()}", json={"is_active": False}, headers=manager_headers)

    assert response.status_code == 403


def test_update_user_without_fields_returns_400(app, client, mock_service, admin_headers):
    app.dependency_overrides[get_auth_service] = lambda: mock_service

    response = client.patch(f"/api/v1/users/{uuid.uuid4()}", json={}, headers=admin_headers)

    assert response.status_code == 400
    mock_service.update_user.assert_not_awaited()
