"""
Contract CRUD operations.

Provides filtered contract listings, expiry windows and the
aggregates used by contract statistics and dashboards.

Dependencies: sqlalchemy, backoffice.boundary.db.models
System role: Contract persistence operations
"""

from datetime import date, timedelta
from decimal import Decimal
from typing import Sequence
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.boundary.db.CRUD.base_crud import BaseCRUD
from backoffice.boundary.db.models.contract_model import ContractModel
from backoffice.boundary.db.models.service_scope_model import ServiceScopeModel
from backoffice.core.enums import ACTIVE_CONTRACT_STATUSES, ContractStatus


class ContractCRUD(BaseCRUD[ContractModel]):
    """CRUD operations for ContractModel."""

    def __init__(self) -> None:
        """Initialize ContractCRUD with ContractModel."""
        super().__init__(ContractModel)

    async def list_filtered(
        self,
        session: AsyncSession,
        client_id: UUID | None = None,
        status: ContractStatus | None = None,
        search: str | None = None,
        expiring_soon_days: int | None = None,
        page: int = 1,
        limit: int = 10,
    ) -> tuple[Sequence[ContractModel], int]:
        """
        List contracts, newest first.

        Args:
            session: Async database session
            client_id: Filter by client
            status: Filter by status
            search: Case-insensitive match on contract name
            expiring_soon_days: Only contracts ending between today and today + N days
            page: 1-based page number
            limit: Page size

        Returns:
            Tuple of (contracts, total)
        """
        stmt = select(ContractModel)
        if client_id is not None:
            stmt = stmt.where(ContractModel.client_id == client_id)
        if status is not None:
            stmt = stmt.where(ContractModel.status == status)
        if search:
            stmt = stmt.where(ContractModel.contract_name.ilike(f"%{search.strip()}%"))
        if expiring_soon_days is not None:
            today = date.today()
            stmt = stmt.where(
                ContractModel.end_date >= today,
                ContractModel.end_date <= today + timedelta(days=expiring_soon_days),
            )
        stmt = stmt.order_by(ContractModel.created_at.desc(), ContractModel.id)
        return await self.paginate(session, stmt, page, limit)

    async def list_expiring(
        self,
        session: AsyncSession,
        days: int = 30,
        statuses: tuple[ContractStatus, ...] = ACTIVE_CONTRACT_STATUSES,
    ) -> Sequence[ContractModel]:
        """
        Contracts in the given statuses ending between today and today + days.

        Args:
            session: Async database session
            days: Window size in days
            statuses: Statuses to include

        Returns:
            Contracts ordered by end_date ascending
        """
        today = date.today()
        stmt = (
            select(ContractModel)
            .where(
                ContractModel.status.in_(statuses),
                ContractModel.end_date >= today,
                ContractModel.end_date <= today + timedelta(days=days),
            )
            .order_by(ContractModel.end_date)
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def list_active_for_client(self, session: AsyncSession, client_id: UUID) -> Sequence[ContractModel]:
        """Active or renewed-active contracts of a client ordered by end date."""
        stmt = (
            select(ContractModel)
            .where(
                ContractModel.client_id == client_id,
                ContractModel.status.in_(ACTIVE_CONTRACT_STATUSES),
            )
            .order_by(ContractModel.end_date)
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def list_active(self, session: AsyncSession) -> Sequence[ContractModel]:
        """All contracts in an active status."""
        stmt = select(ContractModel).where(ContractModel.status.in_(ACTIVE_CONTRACT_STATUSES))
        result = await session.execute(stmt)
        return result.scalars().all()

    async def count_service_scopes(self, session: AsyncSession, contract_id: UUID) -> int:
        """Number of service scopes attached to a contract."""
        stmt = select(func.count(ServiceScopeModel.id)).where(ServiceScopeModel.contract_id == contract_id)
        result = await session.execute(stmt)
        return result.scalar_one()

    async def count_active_scopes_by_contract(
        self,
        session: AsyncSession,
        contract_ids: list[UUID],
    ) -> dict[UUID, int]:
        """Active service scope count per contract id."""
        if not contract_ids:
            return {}
        stmt = (
            select(ServiceScopeModel.contract_id, func.count(ServiceScopeModel.id))
            .where(
                ServiceScopeModel.contract_id.in_(contract_ids),
                ServiceScopeModel.is_active.is_(True),
            )
            .group_by(ServiceScopeModel.contract_id)
        )
        result = await session.execute(stmt)
        return dict(result.all())

    async def count_by_status(self, session: AsyncSession) -> dict[str, int]:
        """Contract count per status value."""
        stmt = select(ContractModel.status, func.count(ContractModel.id)).group_by(ContractModel.status)
        result = await session.execute(stmt)
        return {status.value: count for status, count in result.all()}

    async def total_value(self, session: AsyncSession, contract_id: UUID) -> Decimal:
        """
        Sum of price x quantity over the contract's active, priced scopes.

        Args:
            session: Async database session
            contract_id: Contract UUID

        Returns:
            Decimal total (0 when nothing is priced)
        """
        stmt = select(
            func.coalesce(
                func.sum(ServiceScopeModel.price * func.coalesce(ServiceScopeModel.quantity, 1)),
                0,
            )
        ).where(
            ServiceScopeModel.contract_id == contract_id,
            ServiceScopeModel.is_active.is_(True),
            ServiceScopeModel.price.is_not(None),
        )
        result = await session.execute(stmt)
        return Decimal(str(result.scalar_one()))


contract_crud = ContractCRUD()
