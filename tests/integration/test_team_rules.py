"""
Integration tests for client team assignment rules.

System role: Verification of one active holder per client role
"""

import pytest

from backoffice.application.services import TeamAssignmentService
from backoffice.boundary.db.CRUD import user_crud
from backoffice.core.enums import ClientAssignmentRole, UserRole
from backoffice.core.exceptions import BusinessRuleError, ConflictError


@pytest.fixture
def team_service(test_async_db) -> TeamAssignmentService:
    return TeamAssignmentService(test_async_db)


@pytest.fixture
async def second_user(test_async_db):
    return await user_crud.create(
        test_async_db,
        first_name="Omar",
        last_name="Analyst",
        email="omar@example.com",
        password_hash="not-a-real-hash",
        role=UserRole.ENGINEER,
        is_active=True,
    )


class TestAssign:
    @pytest.mark.asyncio
    async def test_assign_returns_user_details(self, team_service, seeded_user, seeded_client):
        result = await team_service.assign(seeded_user.id, seeded_client.id, ClientAssignmentRole.LEAD_ENGINEER)

        assert result["user_name"] == "Sara Engineer"
        assert result["is_active"] is True
        assert result["priority"] == 1

    @pytest.mark.asyncio
    async def test_role_held_by_another_user_conflicts(self, team_service, seeded_user, second_user, seeded_client):
        await team_service.assign(seeded_user.id, seeded_client.id, ClientAssignmentRole.LEAD_ENGINEER)

        with pytest.raises(ConflictError):
            await team_service.assign(second_user.id, seeded_client.id, ClientAssignmentRole.LEAD_ENGINEER)

    @pytest.mark.asyncio
    async def test_same_user_can_hold_different_roles(self, team_service, seeded_user, seeded_client):
        await team_service.assign(seeded_user.id, seeded_client.id, ClientAssignmentRole.LEAD_ENGINEER)
        await team_service.assign(seeded_user.id, seeded_client.id, ClientAssignmentRole.SUPPORT_CONTACT)

        team = await team_service.list_for_client(seeded_client.id, active_only=True)
        assert len(team) == 2

    @pytest.mark.asyncio
    async def test_inactive_duplicate_must_be_reactivated(self, team_service, seeded_user, seeded_client):
        first = await team_service.assign(seeded_user.id, seeded_client.id, ClientAssignmentRole.LEAD_ENGINEER)
        await team_service.deactivate(first["id"])

        with pytest.raises(ConflictError):
            await team_service.assign(seeded_user.id, seeded_client.id, ClientAssignmentRole.LEAD_ENGINEER)


class TestDeactivateAndReactivate:
    @pytest.mark.asyncio
    async def test_deactivate_defaults_end_date_to_today(self, team_service, seeded_user, seeded_client, today):
        assignment = await team_service.assign(seeded_user.id, seeded_client.id, ClientAssignmentRole.CONSULTANT)

        result = await team_service.deactivate(assignment["id"])

        assert result["is_active"] is False
        assert result["end_date"] == today

    @pytest.mark.asyncio
    async def test_reactivate_clears_end_date(self, team_service, seeded_user, seeded_client):
        assignment = await team_service.assign(seeded_user.id, seeded_client.id, ClientAssignmentRole.CONSULTANT)
        await team_service.deactivate(assignment["id"])

        result = await team_service.reactivate(assignment["id"])

        assert result["is_active"] is True
        assert result["end_date"] is None

    @pytest.mark.asyncio
    async def test_reactivate_blocked_when_role_taken(
        self, team_service, seeded_user, second_user, seeded_client
    ):
        first = await team_service.assign(seeded_user.id, seeded_client.id, ClientAssignmentRole.LEAD_ENGINEER)
        await team_service.deactivate(first["id"])
        await team_service.assign(second_user.id, seeded_client.id, ClientAssignmentRole.LEAD_ENGINEER)

        with pytest.raises(ConflictError):
            await team_service.reactivate(first["id"])

    @pytest.mark.asyncio
    async def test_reactivating_active_assignment_fails(self, team_service, seeded_user, seeded_client):
        assignment = await team_service.assign(seeded_user.id, seeded_client.id, ClientAssignmentRole.CONSULTANT)

        with pytest.raises(BusinessRuleError):
            await team_service.reactivate(assignment["id"])

    @pytest.mark.asyncio
    async def test_client_stats_count_roles(self, team_service, seeded_user, second_user, seeded_client):
        await team_service.assign(seeded_user.id, seeded_client.id, ClientAssignmentRole.LEAD_ENGINEER)
        other = await team_service.assign(second_user.id, seeded_client.id, ClientAssignmentRole.SECURITY_ANALYST)
        await team_service.deactivate(other["id"])

        stats = await team_service.client_stats(seeded_client.id)

        assert stats["total"] == 2
        assert stats["active"] == 1
        assert stats["inactive"] == 1
