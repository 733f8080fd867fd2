"""
Client team assignment CRUD operations.

Dependencies: sqlalchemy, backoffice.boundary.db.models
System role: Account team persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.boundary.db.CRUD.base_crud import BaseCRUD
from backoffice.boundary.db.models.team_assignment_model import ClientTeamAssignmentModel
from backoffice.core.enums import ClientAssignmentRole


class TeamAssignmentCRUD(BaseCRUD[ClientTeamAssignmentModel]):
    """CRUD operations for ClientTeamAssignmentModel."""

    def __init__(self) -> None:
        """Initialize TeamAssignmentCRUD with ClientTeamAssignmentModel."""
        super().__init__(ClientTeamAssignmentModel)

    async def get_active_for_role(
        self,
        session: AsyncSession,
        client_id: UUID,
        assignment_role: ClientAssignmentRole,
        exclude_id: UUID | None = None,
    ) -> ClientTeamAssignmentModel | None:
        """
        Retrieve the client's active assignment for a role.

        Args:
            session: Async database session
            client_id: Client UUID
            assignment_role: Role to check
            exclude_id: Assignment to ignore (the one being updated)

        Returns:
            Active assignment holding the role, or None
        """
        model = ClientTeamAssignmentModel
        stmt = select(model).where(
            model.client_id == client_id,
            model.assignment_role == assignment_role,
            model.is_active.is_(True),
        )
        if exclude_id is not None:
            stmt = stmt.where(model.id != exclude_id)
        result = await session.execute(stmt.limit(1))
        return result.scalars().first()

    async def list_filtered(
        self,
        session: AsyncSession,
        user_id: UUID | None = None,
        client_id: UUID | None = None,
        assignment_role: ClientAssignmentRole | None = None,
        is_active: bool | None = None,
        page: int = 1,
        limit: int = 20,
    ) -> tuple[Sequence[ClientTeamAssignmentModel], int]:
        """List assignments, newest first."""
        model = ClientTeamAssignmentModel
        stmt = select(model)
        if user_id is not None:
            stmt = stmt.where(model.user_id == user_id)
        if client_id is not None:
            stmt = stmt.where(model.client_id == client_id)
        if assignment_role is not None:
            stmt = stmt.where(model.assignment_role == assignment_role)
        if is_active is not None:
            stmt = stmt.where(model.is_active == is_active)
        stmt = stmt.order_by(model.created_at.desc(), model.id)
        return await self.paginate(session, stmt, page, limit)

    async def list_for_client(
        self,
        session: AsyncSession,
        client_id: UUID,
        active_only: bool = False,
    ) -> Sequence[ClientTeamAssignmentModel]:
        """Assignments of a client ordered by priority, then newest first."""
        return await self._list_by(session, ClientTeamAssignmentModel.client_id == client_id, active_only)

    async def list_for_user(
        self,
        session: AsyncSession,
        user_id: UUID,
        active_only: bool = False,
    ) -> Sequence[ClientTeamAssignmentModel]:
        """Assignments of a user ordered by priority, then newest first."""
        return await self._list_by(session, ClientTeamAssignmentModel.user_id == user_id, active_only)

    async def _list_by(self, session: AsyncSession, condition, active_only: bool) -> Sequence[ClientTeamAssignmentModel]:
        model = ClientTeamAssignmentModel
        stmt = select(model).where(condition)
        if active_only:
            stmt = stmt.where(model.is_active.is_(True))
        stmt = stmt.order_by(model.priority.asc(), model.created_at.desc())
        result = await session.execute(stmt)
        return result.scalars().all()


team_assignment_crud = TeamAssignmentCRUD()
