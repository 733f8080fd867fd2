"""
Integration tests for the hardware assignment flow.

System role: Verification that asset status follows its assignments
"""

import pytest

from backoffice.application.services import HardwareAssetService, HardwareAssignmentService
from backoffice.core.enums import HardwareAssetStatus, HardwareAssetType, HardwareAssignmentStatus
from backoffice.core.exceptions import BusinessRuleError


@pytest.fixture
def asset_service(test_async_db) -> HardwareAssetService:
    return HardwareAssetService(test_async_db)


@pytest.fixture
def assignment_service(test_async_db) -> HardwareAssignmentService:
    return HardwareAssignmentService(test_async_db)


@pytest.fixture
async def asset(asset_service) -> dict:
    return await asset_service.create_asset(asset_tag="FW-0001", asset_type=HardwareAssetType.FIREWALL)


class TestAssign:
    @pytest.mark.asyncio
    async def test_assign_marks_asset_in_use(self, asset_service, assignment_service, asset, seeded_client):
        # Act
        assignment = await assignment_service.assign(asset["id"], seeded_client.id)

        # Assert
        assert assignment["status"] == HardwareAssignmentStatus.ACTIVE
        assert assignment["client_name"] == "Acme Security"
        refreshed = await asset_service.get_asset(asset["id"])
        assert refreshed["status"] == HardwareAssetStatus.IN_USE
        assert refreshed["is_available"] is False
        assert len(refreshed["assignments"]) == 1

    @pytest.mark.asyncio
    async def test_asset_cannot_be_assigned_twice(self, assignment_service, asset, seeded_client):
        await assignment_service.assign(asset["id"], seeded_client.id)

        with pytest.raises(BusinessRuleError):
            await assignment_service.assign(asset["id"], seeded_client.id)

    @pytest.mark.asyncio
    async def test_asset_under_maintenance_is_unavailable(
        self, asset_service, assignment_service, asset, seeded_client
    ):
        await asset_service.update_status(asset["id"], HardwareAssetStatus.UNDER_MAINTENANCE)

        with pytest.raises(BusinessRuleError):
            await assignment_service.assign(asset["id"], seeded_client.id)


class TestReturn:
    @pytest.mark.asyncio
    async def test_returning_puts_asset_back_in_stock(
        self, asset_service, assignment_service, asset, seeded_client, today
    ):
        assignment = await assignment_service.assign(asset["id"], seeded_client.id)

        updated = await assignment_service.update_assignment(
            assignment["id"], status=HardwareAssignmentStatus.RETURNED
        )

        assert updated["return_date"] == today
        refreshed = await asset_service.get_asset(asset["id"])
        assert refreshed["status"] == HardwareAssetStatus.IN_STOCK

    @pytest.mark.asyncio
    async def test_closed_assignment_cannot_be_reactivated(self, assignment_service, asset, seeded_client):
        assignment = await assignment_service.assign(asset["id"], seeded_client.id)
        await assignment_service.update_assignment(assignment["id"], status=HardwareAssignmentStatus.RETURNED)

        with pytest.raises(BusinessRuleError):
            await assignment_service.update_assignment(assignment["id"], status=HardwareAssignmentStatus.ACTIVE)

    @pytest.mark.asyncio
    async def test_deleting_active_assignment_returns_asset(
        self, asset_service, assignment_service, asset, seeded_client
    ):
        assignment = await assignment_service.assign(asset["id"], seeded_client.id)

        await assignment_service.delete_assignment(assignment["id"])

        refreshed = await asset_service.get_asset(asset["id"])
        assert refreshed["status"] == HardwareAssetStatus.IN_STOCK
        assert refreshed["assignments"] == []
