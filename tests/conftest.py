"""
Shared test fixtures and configuration for entire test suite.

Provides: in-memory database session, API client, bearer tokens per role
Dependencies: pytest, sqlalchemy, aiosqlite, fastapi
System role: Test infrastructure and fixture management
"""

import uuid
from datetime import date
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient


@pytest.fixture
async def test_async_db():
    """
    Create in-memory SQLite async database for testing.

    Yields:
        AsyncSession: Test database session with cleanup (lazy imported to avoid settings issues)
    """
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
    from sqlalchemy.pool import StaticPool

    from backoffice.boundary.db import Base

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

    async with async_session() as session:
        yield session
        await session.rollback()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def auth_settings():
    """Auth settings with a cheap bcrypt cost."""
    from backoffice.configs.auth import AuthSettings

    return AuthSettings(bcrypt_rounds=4)


@pytest.fixture
def app():
    """Fresh application per test; dependency overrides are cleared afterwards."""
    from backoffice.api.main import create_app

    application = create_app()
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def make_auth_headers():
    """
    Build Authorization headers for a role.

    Returns:
        Callable[[UserRole], dict]: Headers carrying a valid access token
    """
    from backoffice.configs import get_settings
    from backoffice.core.security import create_access_token

    def _make(role, user_id: uuid.UUID | None = None) -> dict:
        token = create_access_token(
            user_id or uuid.uuid4(),
            f"{role.value}@example.com",
            role,
            get_settings().auth,
        )
        return {"Authorization": f"Bearer {token}"}

    return _make


@pytest.fixture
def admin_headers(make_auth_headers):
    from backoffice.core.enums import UserRole

    return make_auth_headers(UserRole.ADMIN)


@pytest.fixture
def manager_headers(make_auth_headers):
    from backoffice.core.enums import UserRole

    return make_auth_headers(UserRole.MANAGER)


@pytest.fixture
def account_manager_headers(make_auth_headers):
    from backoffice.core.enums import UserRole

    return make_auth_headers(UserRole.ACCOUNT_MANAGER)


@pytest.fixture
def engineer_headers(make_auth_headers):
    from backoffice.core.enums import UserRole

    return make_auth_headers(UserRole.ENGINEER)


@pytest.fixture
def mock_service():
    """Generic AsyncMock standing in for any application service."""
    return AsyncMock()


@pytest.fixture
def today() -> date:
    return date.today()
