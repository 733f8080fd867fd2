"""
Seed fixtures for service tests against the in-memory database.

Provides: a staff user, a client, a catalog service and a contract
Dependencies: pytest, backoffice.boundary.db.CRUD
System role: Shared database state for integration tests
"""

from datetime import date, timedelta

import pytest

from backoffice.boundary.db.CRUD import client_crud, contract_crud, service_crud, user_crud
from backoffice.core.enums import ContractStatus, ServiceCategory, UserRole


@pytest.fixture
async def seeded_user(test_async_db):
    return await user_crud.create(
        test_async_db,
        first_name="Sara",
        last_name="Engineer",
        email="sara@example.com",
        password_hash="not-a-real-hash",
        role=UserRole.ENGINEER,
        is_active=True,
    )


@pytest.fixture
async def seeded_client(test_async_db):
    return await client_crud.create(
        test_async_db,
        company_name="Acme Security",
        contact_name="Jane Doe",
        contact_email="jane@acme.example",
    )


@pytest.fixture
async def seeded_service(test_async_db):
    return await service_crud.create(
        test_async_db,
        name="Managed EDR",
        category=ServiceCategory.ENDPOINT_SECURITY,
        is_active=True,
        scope_definition_template={
            "fields": [
                {"name": "endpoints", "label": "Endpoints", "type": "number", "required": True, "min": 1},
                {"name": "tier", "label": "Tier", "type": "select", "options": ["gold", "silver"]},
            ]
        },
    )


@pytest.fixture
async def seeded_contract(test_async_db, seeded_client):
    start = date.today() - timedelta(days=30)
    return await contract_crud.create(
        test_async_db,
        contract_name="Acme SOC 2025",
        client_id=seeded_client.id,
        start_date=start,
        end_date=start + timedelta(days=365),
        status=ContractStatus.ACTIVE,
    )
