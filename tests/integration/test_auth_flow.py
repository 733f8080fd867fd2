"""
Integration tests for AuthService against the in-memory database.

System role: Verification of registration, login and user administration
"""

import pytest

from backoffice.application.services import AuthService
from backoffice.core.enums import UserRole
from backoffice.core.exceptions import AuthenticationError, ConflictError
from backoffice.core.security import decode_access_token


@pytest.fixture
def auth_service(test_async_db, auth_settings) -> AuthService:
    return AuthService(test_async_db, auth_settings)


async def register(service: AuthService, email: str = "Lead@Example.com", **overrides) -> dict:
    fields = {"first_name": "Lina", "last_name": "Lead", "email": email, "password": "correct-horse"}
    fields.update(overrides)
    return await service.register(**fields)


class TestRegister:
    @pytest.mark.asyncio
    async def test_email_is_normalised(self, auth_service):
        user = await register(auth_service)

        assert user["email"] == "lead@example.com"
        assert user["role"] == UserRole.ENGINEER

    @pytest.mark.asyncio
    async def test_duplicate_email_conflicts(self, auth_service):
        await register(auth_service)

        with pytest.raises(ConflictError):
            await register(auth_service, email="lead@example.com")


class TestLogin:
    @pytest.mark.asyncio
    async def test_login_issues_token_for_user(self, auth_service, auth_settings):
        user = await register(auth_service, role=UserRole.MANAGER)

        result = await auth_service.login("LEAD@example.com", "correct-horse")

        payload = decode_access_token(result["access_token"], auth_settings)
        assert payload.user_id == user["id"]
        assert payload.role == UserRole.MANAGER

    @pytest.mark.asyncio
    async def test_wrong_password(self, auth_service):
        await register(auth_service)

        with pytest.raises(AuthenticationError):
            await auth_service.login("lead@example.com", "wrong-password")

    @pytest.mark.asyncio
    async def test_inactive_user_cannot_log_in(self, auth_service):
        user = await register(auth_service)
        await auth_service.update_user(user["id"], is_active=False)

        with pytest.raises(AuthenticationError):
            await auth_service.login("lead@example.com", "correct-horse")
