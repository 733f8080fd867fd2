"""
Client CRUD operations.

Provides filtered, sortable client listings and relationship checks
used before destructive operations.

Dependencies: sqlalchemy, backoffice.boundary.db.models
System role: Client persistence operations
"""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from typing import Sequence
from uuid import UUID

from sqlalchemy import Select, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.boundary.db.CRUD.base_crud import BaseCRUD
from backoffice.boundary.db.models.client_model import ClientModel
from backoffice.boundary.db.models.contract_model import ContractModel
from backoffice.core.enums import ClientStatus

SORTABLE_COLUMNS = {
    "company_name": ClientModel.company_name,
    "contact_name": ClientModel.contact_name,
    "contact_email": ClientModel.contact_email,
    "status": ClientModel.status,
    "industry": ClientModel.industry,
    "created_at": ClientModel.created_at,
    "updated_at": ClientModel.updated_at,
}


@dataclass
class ClientFilters:
    """Filter and sort options for client listings."""

    search: str | None = None
    company_name: str | None = None
    contact_name: str | None = None
    contact_email: str | None = None
    industry: str | None = None
    status: ClientStatus | None = None
    created_from: date | None = None
    created_to: date | None = None
    sort_by: str = "created_at"
    sort_order: str = "desc"


class ClientCRUD(BaseCRUD[ClientModel]):
    """
    CRUD operations for ClientModel.

    Extends BaseCRUD with search/filter listing and contract checks.
    """

    def __init__(self) -> None:
        """Initialize ClientCRUD with ClientModel."""
        super().__init__(ClientModel)

    def build_list_query(self, filters: ClientFilters) -> Select:
        """
        Build the filtered and ordered client select.

        Args:
            filters: ClientFilters with search, field filters and sort

        Returns:
            Select statement over ClientModel
        """
        stmt = select(ClientModel)

        if filters.search:
            term = f"%{filters.search.strip()}%"
            stmt = stmt.where(
                or_(
                    ClientModel.company_name.ilike(term),
                    ClientModel.contact_name.ilike(term),
                    ClientModel.contact_email.ilike(term),
                    ClientModel.contact_phone.ilike(term),
                )
            )
        if filters.company_name:
            stmt = stmt.where(ClientModel.company_name.ilike(f"%{filters.company_name}%"))
        if filters.contact_name:
            stmt = stmt.where(ClientModel.contact_name.ilike(f"%{filters.contact_name}%"))
        if filters.contact_email:
            stmt = stmt.where(ClientModel.contact_email.ilike(f"%{filters.contact_email}%"))
        if filters.industry:
            stmt = stmt.where(ClientModel.industry.ilike(f"%{filters.industry}%"))
        if filters.status is not None:
            stmt = stmt.where(ClientModel.status == filters.status)
        if filters.created_from is not None:
            start = datetime.combine(filters.created_from, time.min, tzinfo=timezone.utc)
            stmt = stmt.where(ClientModel.created_at >= start)
        if filters.created_to is not None:
            # Inclusive of the whole end day
            end = datetime.combine(filters.created_to + timedelta(days=1), time.min, tzinfo=timezone.utc)
            stmt = stmt.where(ClientModel.created_at < end)

        column = SORTABLE_COLUMNS.get(filters.sort_by, ClientModel.created_at)
        ordering = column.asc() if filters.sort_order.lower() == "asc" else column.desc()
        return stmt.order_by(ordering, ClientModel.id)

    async def list_filtered(
        self,
        session: AsyncSession,
        filters: ClientFilters,
        page: int = 1,
        limit: int = 20,
    ) -> tuple[Sequence[ClientModel], int]:
        """
        List clients matching filters, one page at a time.

        Args:
            session: Async database session
            filters: ClientFilters
            page: 1-based page number
            limit: Page size

        Returns:
            Tuple of (clients, total)
        """
        return await self.paginate(session, self.build_list_query(filters), page, limit)

    async def list_for_export(
        self,
        session: AsyncSession,
        filters: ClientFilters,
        max_rows: int = 10000,
    ) -> Sequence[ClientModel]:
        """Return up to max_rows clients matching filters."""
        result = await session.execute(self.build_list_query(filters).limit(max_rows))
        return result.scalars().all()

    async def get_by_company_name(self, session: AsyncSession, company_name: str) -> ClientModel | None:
        """Retrieve a client by exact company name."""
        return await self.get_one_by(session, company_name=company_name)

    async def has_contracts(self, session: AsyncSession, client_id: UUID) -> bool:
        """True when any contract references the client."""
        stmt = select(ContractModel.id).where(ContractModel.client_id == client_id).limit(1)
        result = await session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def count_active(self, session: AsyncSession) -> int:
        """Count clients in an active status."""
        stmt = select(func.count(ClientModel.id)).where(
            ClientModel.status.in_([ClientStatus.ACTIVE, ClientStatus.RENEWED])
        )
        result = await session.execute(stmt)
        return result.scalar_one()

    async def count_by_source(self, session: AsyncSession) -> dict[str, int]:
        """Count clients per acquisition source; unknown sources are grouped under "unknown"."""
        stmt = select(ClientModel.client_source, func.count(ClientModel.id)).group_by(
            ClientModel.client_source
        )
        result = await session.execute(stmt)
        return {
            (source.value if source is not None else "unknown"): count
            for source, count in result.all()
        }


client_crud = ClientCRUD()
