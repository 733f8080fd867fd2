"""
Service scope CRUD operations.

Dependencies: sqlalchemy, backoffice.boundary.db.models
System role: Contract line item persistence operations
"""

from datetime import date, timedelta
from decimal import Decimal
from typing import Sequence
from uuid import UUID

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.boundary.db.CRUD.base_crud import BaseCRUD
from backoffice.boundary.db.models.contract_model import ContractModel
from backoffice.boundary.db.models.service_model import ServiceModel
from backoffice.boundary.db.models.service_scope_model import ServiceScopeModel
from backoffice.core.enums import ACTIVE_CONTRACT_STATUSES, SAFStatus

SORTABLE_COLUMNS = {
    "created_at": ServiceScopeModel.created_at,
    "updated_at": ServiceScopeModel.updated_at,
    "price": ServiceScopeModel.price,
    "quantity": ServiceScopeModel.quantity,
    "saf_status": ServiceScopeModel.saf_status,
    "saf_service_end_date": ServiceScopeModel.saf_service_end_date,
}


class ServiceScopeCRUD(BaseCRUD[ServiceScopeModel]):
    """CRUD operations for ServiceScopeModel."""

    def __init__(self) -> None:
        """Initialize ServiceScopeCRUD with ServiceScopeModel."""
        super().__init__(ServiceScopeModel)

    async def list_filtered(
        self,
        session: AsyncSession,
        contract_id: UUID | None = None,
        service_id: UUID | None = None,
        saf_status: SAFStatus | None = None,
        is_active: bool | None = None,
        search: str | None = None,
        min_price: Decimal | None = None,
        max_price: Decimal | None = None,
        sort_by: str = "created_at",
        sort_order: str = "desc",
        page: int = 1,
        limit: int = 50,
    ) -> tuple[Sequence[ServiceScopeModel], int]:
        """
        List service scopes with filters.

        Args:
            session: Async database session
            contract_id: Filter by contract
            service_id: Filter by service
            saf_status: Filter by SAF status
            is_active: Filter by active flag
            search: Case-insensitive match on service name or scope notes
            min_price: Inclusive lower price bound
            max_price: Inclusive upper price bound
            sort_by: Sortable column name
            sort_order: "asc" or "desc"
            page: 1-based page number
            limit: Page size

        Returns:
            Tuple of (scopes, total)
        """
        stmt = select(ServiceScopeModel).join(ServiceModel, ServiceScopeModel.service_id == ServiceModel.id)
        if contract_id is not None:
            stmt = stmt.where(ServiceScopeModel.contract_id == contract_id)
        if service_id is not None:
            stmt = stmt.where(ServiceScopeModel.service_id == service_id)
        if saf_status is not None:
            stmt = stmt.where(ServiceScopeModel.saf_status == saf_status)
        if is_active is not None:
            stmt = stmt.where(ServiceScopeModel.is_active == is_active)
        if search:
            term = f"%{search.strip()}%"
            stmt = stmt.where(or_(ServiceModel.name.ilike(term), ServiceScopeModel.notes.ilike(term)))
        if min_price is not None:
            stmt = stmt.where(ServiceScopeModel.price >= min_price)
        if max_price is not None:
            stmt = stmt.where(ServiceScopeModel.price <= max_price)

        column = SORTABLE_COLUMNS.get(sort_by, ServiceScopeModel.created_at)
        ordering = column.asc() if sort_order.lower() == "asc" else column.desc()
        stmt = stmt.order_by(ordering, ServiceScopeModel.id)
        return await self.paginate(session, stmt, page, limit)

    async def list_for_contract(self, session: AsyncSession, contract_id: UUID) -> Sequence[ServiceScopeModel]:
        """All scopes of a contract, newest first."""
        stmt = (
            select(ServiceScopeModel)
            .where(ServiceScopeModel.contract_id == contract_id)
            .order_by(ServiceScopeModel.created_at.desc())
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def list_active_for_client(
        self,
        session: AsyncSession,
        client_id: UUID,
        active_contracts_only: bool = False,
    ) -> Sequence[ServiceScopeModel]:
        """
        Active scopes across a client's contracts, newest first.

        Args:
            session: Async database session
            client_id: Client UUID
            active_contracts_only: Only include scopes on active/renewed-active contracts

        Returns:
            Sequence of ServiceScopeModel with contract and service loaded
        """
        stmt = (
            select(ServiceScopeModel)
            .join(ContractModel, ServiceScopeModel.contract_id == ContractModel.id)
            .where(ContractModel.client_id == client_id, ServiceScopeModel.is_active.is_(True))
        )
        if active_contracts_only:
            stmt = stmt.where(ContractModel.status.in_(ACTIVE_CONTRACT_STATUSES))
        stmt = stmt.order_by(ServiceScopeModel.created_at.desc())
        result = await session.execute(stmt)
        return result.scalars().all()

    async def list_active_on_active_contracts(self, session: AsyncSession) -> Sequence[ServiceScopeModel]:
        """Active scopes belonging to active contracts."""
        stmt = (
            select(ServiceScopeModel)
            .join(ContractModel, ServiceScopeModel.contract_id == ContractModel.id)
            .where(
                ServiceScopeModel.is_active.is_(True),
                ContractModel.status.in_(ACTIVE_CONTRACT_STATUSES),
            )
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def list_saf_expiring(self, session: AsyncSession, days: int = 30) -> Sequence[ServiceScopeModel]:
        """Active scopes whose SAF service end date falls between today and today + days."""
        today = date.today()
        stmt = (
            select(ServiceScopeModel)
            .where(
                ServiceScopeModel.is_active.is_(True),
                ServiceScopeModel.saf_service_end_date.is_not(None),
                ServiceScopeModel.saf_service_end_date >= today,
                ServiceScopeModel.saf_service_end_date <= today + timedelta(days=days),
            )
            .order_by(ServiceScopeModel.saf_service_end_date)
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def service_in_contract(
        self,
        session: AsyncSession,
        contract_id: UUID,
        service_id: UUID,
        exclude_id: UUID | None = None,
    ) -> bool:
        """True when the contract already includes the service."""
        return await self.exists_by(
            session,
            exclude_id=exclude_id,
            contract_id=contract_id,
            service_id=service_id,
        )


service_scope_crud = ServiceScopeCRUD()
