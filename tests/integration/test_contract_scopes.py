"""
Integration tests for contracts and their service scopes.

System role: Verification of contract validation, scope template checks and totals
"""

import uuid
from datetime import date, timedelta
from decimal import Decimal

import pytest

from backoffice.application.services import ContractService, ServiceScopeService
from backoffice.core.enums import ContractStatus
from backoffice.core.exceptions import BusinessRuleError, ConflictError, ResourceNotFoundError


@pytest.fixture
def contract_service(test_async_db) -> ContractService:
    return ContractService(test_async_db)


@pytest.fixture
def scope_service(test_async_db) -> ServiceScopeService:
    return ServiceScopeService(test_async_db)


def contract_fields(client_id, **overrides) -> dict:
    fields = {
        "contract_name": "Acme Pentest 2025",
        "client_id": client_id,
        "start_date": date(2025, 1, 1),
        "end_date": date(2025, 12, 31),
        "status": ContractStatus.DRAFT,
    }
    fields.update(overrides)
    return fields


class TestCreateContract:
    @pytest.mark.asyncio
    async def test_create_contract_includes_derived_fields(self, contract_service, seeded_client):
        result = await contract_service.create_contract(**contract_fields(seeded_client.id))

        assert result["client_name"] == "Acme Security"
        assert result["duration_days"] == 364
        assert result["is_active"] is False
        assert result["service_scope_count"] == 0

    @pytest.mark.asyncio
    async def test_end_date_must_follow_start_date(self, contract_service, seeded_client):
        with pytest.raises(BusinessRuleError):
            await contract_service.create_contract(
                **contract_fields(seeded_client.id, end_date=date(2025, 1, 1))
            )

    @pytest.mark.asyncio
    async def test_unknown_client(self, contract_service, seeded_client):
        with pytest.raises(ResourceNotFoundError):
            await contract_service.create_contract(**contract_fields(uuid.uuid4()))

    @pytest.mark.asyncio
    async def test_duplicate_contract_name(self, contract_service, seeded_contract):
        with pytest.raises(ConflictError):
            await contract_service.create_contract(
                **contract_fields(seeded_contract.client_id, contract_name=seeded_contract.contract_name)
            )

    @pytest.mark.asyncio
    async def test_expiring_contract_is_listed(self, contract_service, seeded_client):
        today = date.today()
        await contract_service.create_contract(
            **contract_fields(
                seeded_client.id,
                start_date=today - timedelta(days=300),
                end_date=today + timedelta(days=10),
                status=ContractStatus.ACTIVE,
            )
        )

        expiring = await contract_service.list_expiring(days=30)

        assert [c["contract_name"] for c in expiring] == ["Acme Pentest 2025"]
        assert expiring[0]["is_expiring_soon"] is True


class TestServiceScopes:
    @pytest.mark.asyncio
    async def test_scope_details_are_checked_against_template(
        self, scope_service, seeded_contract, seeded_service
    ):
        with pytest.raises(BusinessRuleError) as exc_info:
            await scope_service.create_for_contract(
                seeded_contract.id,
                service_id=seeded_service.id,
                scope_details={"tier": "bronze"},
            )

        message = str(exc_info.value)
        assert "Endpoints is required" in message
        assert "Tier must be one of" in message

    @pytest.mark.asyncio
    async def test_service_cannot_be_added_twice(self, scope_service, seeded_contract, seeded_service):
        details = {"endpoints": 100, "tier": "gold"}
        await scope_service.create_for_contract(
            seeded_contract.id, service_id=seeded_service.id, scope_details=details
        )

        with pytest.raises(ConflictError):
            await scope_service.create_for_contract(
                seeded_contract.id, service_id=seeded_service.id, scope_details=details
            )

    @pytest.mark.asyncio
    async def test_total_value_sums_active_scopes(
        self, scope_service, contract_service, seeded_contract, seeded_service
    ):
        scope = await scope_service.create_for_contract(
            seeded_contract.id,
            service_id=seeded_service.id,
            scope_details={"endpoints": 250},
            price=Decimal("10.00"),
            quantity=250,
        )

        result = await contract_service.get_total_value(seeded_contract.id)
        assert result["total_value"] == 2500.0
        assert scope["total_value"] == 2500.0

        await scope_service.deactivate_scope(scope["id"])
        result = await contract_service.get_total_value(seeded_contract.id)
        assert result["total_value"] == 0.0
