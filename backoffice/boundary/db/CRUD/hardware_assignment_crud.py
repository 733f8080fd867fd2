"""
Client hardware assignment CRUD operations.

Dependencies: sqlalchemy, backoffice.boundary.db.models
System role: Hardware deployment persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.boundary.db.CRUD.base_crud import BaseCRUD
from backoffice.boundary.db.models.hardware_assignment_model import ClientHardwareAssignmentModel
from backoffice.core.enums import HardwareAssignmentStatus


class HardwareAssignmentCRUD(BaseCRUD[ClientHardwareAssignmentModel]):
    """CRUD operations for ClientHardwareAssignmentModel."""

    def __init__(self) -> None:
        """Initialize HardwareAssignmentCRUD with ClientHardwareAssignmentModel."""
        super().__init__(ClientHardwareAssignmentModel)

    async def get_active_for_asset(
        self,
        session: AsyncSession,
        hardware_asset_id: UUID,
    ) -> ClientHardwareAssignmentModel | None:
        """
        Retrieve the asset's active assignment, if any.

        Args:
            session: Async database session
            hardware_asset_id: Asset UUID

        Returns:
            Active assignment or None
        """
        return await self.get_one_by(
            session,
            hardware_asset_id=hardware_asset_id,
            status=HardwareAssignmentStatus.ACTIVE,
        )

    async def list_filtered(
        self,
        session: AsyncSession,
        status: HardwareAssignmentStatus | None = None,
        client_id: UUID | None = None,
        hardware_asset_id: UUID | None = None,
        service_scope_id: UUID | None = None,
        page: int = 1,
        limit: int = 10,
    ) -> tuple[Sequence[ClientHardwareAssignmentModel], int]:
        """List assignments ordered by assignment date, newest first."""
        model = ClientHardwareAssignmentModel
        stmt = select(model)
        if status is not None:
            stmt = stmt.where(model.status == status)
        if client_id is not None:
            stmt = stmt.where(model.client_id == client_id)
        if hardware_asset_id is not None:
            stmt = stmt.where(model.hardware_asset_id == hardware_asset_id)
        if service_scope_id is not None:
            stmt = stmt.where(model.service_scope_id == service_scope_id)
        stmt = stmt.order_by(model.assignment_date.desc(), model.created_at.desc())
        return await self.paginate(session, stmt, page, limit)

    async def list_for_asset(
        self,
        session: AsyncSession,
        hardware_asset_id: UUID,
    ) -> Sequence[ClientHardwareAssignmentModel]:
        """Full assignment history of an asset, newest first."""
        stmt = (
            select(ClientHardwareAssignmentModel)
            .where(ClientHardwareAssignmentModel.hardware_asset_id == hardware_asset_id)
            .order_by(ClientHardwareAssignmentModel.assignment_date.desc())
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def list_for_client(
        self,
        session: AsyncSession,
        client_id: UUID,
    ) -> Sequence[ClientHardwareAssignmentModel]:
        """All assignments of a client, newest first."""
        stmt = (
            select(ClientHardwareAssignmentModel)
            .where(ClientHardwareAssignmentModel.client_id == client_id)
            .order_by(ClientHardwareAssignmentModel.assignment_date.desc())
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def list_for_service_scope(
        self,
        session: AsyncSession,
        service_scope_id: UUID,
    ) -> Sequence[ClientHardwareAssignmentModel]:
        """Assignments delivering a service scope, newest first."""
        stmt = (
            select(ClientHardwareAssignmentModel)
            .where(ClientHardwareAssignmentModel.service_scope_id == service_scope_id)
            .order_by(ClientHardwareAssignmentModel.assignment_date.desc())
        )
        result = await session.execute(stmt)
        return result.scalars().all()


hardware_assignment_crud = HardwareAssignmentCRUD()
