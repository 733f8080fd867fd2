"""
Integration tests for DashboardService.

System role: Verification of the client overview and expiration views
"""

import uuid
from datetime import date, timedelta

import pytest

from backoffice.application.services import DashboardService, TeamAssignmentService
from backoffice.boundary.db.CRUD import contract_crud
from backoffice.core.enums import ClientAssignmentRole, ContractStatus
from backoffice.core.exceptions import ResourceNotFoundError


@pytest.fixture
def dashboard_service(test_async_db) -> DashboardService:
    return DashboardService(test_async_db)


@pytest.fixture
async def expiring_contract(test_async_db, seeded_client):
    today = date.today()
    return await contract_crud.create(
        test_async_db,
        contract_name="Acme Firewall Support",
        client_id=seeded_client.id,
        start_date=today - timedelta(days=355),
        end_date=today + timedelta(days=10),
        status=ContractStatus.ACTIVE,
    )


class TestClientOverview:
    @pytest.mark.asyncio
    async def test_healthy_client(self, dashboard_service, seeded_contract):
        overview = await dashboard_service.get_client_overview(seeded_contract.client_id)

        assert overview["profile"]["company_name"] == "Acme Security"
        assert overview["profile"]["account_manager"] is None
        assert overview["summary"]["active_contracts"] == 1
        assert overview["summary"]["health_status"] == "good"
        assert overview["financials"]["recent_transactions"] == []

    @pytest.mark.asyncio
    async def test_expiring_contract_raises_warning(self, dashboard_service, seeded_contract, expiring_contract):
        overview = await dashboard_service.get_client_overview(seeded_contract.client_id)

        assert overview["summary"]["active_contracts"] == 2
        assert overview["summary"]["health_status"] == "warning"

    @pytest.mark.asyncio
    async def test_financials_can_be_left_out(self, dashboard_service, seeded_contract):
        overview = await dashboard_service.get_client_overview(seeded_contract.client_id, include_financials=False)

        assert overview["financials"] is None

    @pytest.mark.asyncio
    async def test_profile_shows_active_account_manager(
        self, test_async_db, dashboard_service, seeded_user, seeded_client
    ):
        await TeamAssignmentService(test_async_db).assign(
            seeded_user.id, seeded_client.id, ClientAssignmentRole.ACCOUNT_MANAGER
        )

        profile = await dashboard_service.get_profile(seeded_client.id)

        assert profile["account_manager"]["name"] == "Sara Engineer"

    @pytest.mark.asyncio
    async def test_unknown_client(self, dashboard_service, seeded_client):
        with pytest.raises(ResourceNotFoundError):
            await dashboard_service.get_client_overview(uuid.uuid4())


class TestExpirations:
    @pytest.mark.asyncio
    async def test_window_selects_contracts(self, dashboard_service, seeded_contract, expiring_contract):
        result = await dashboard_service.get_expirations(days=30)

        assert [c["contract_name"] for c in result["contracts"]] == ["Acme Firewall Support"]
        assert result["summary"]["clients_affected"] == 1

    @pytest.mark.asyncio
    async def test_wider_window_includes_more(self, dashboard_service, seeded_contract, expiring_contract):
        result = await dashboard_service.get_expirations(days=365)

        assert result["summary"]["total_expiring_contracts"] == 2
