"""
Financial transaction CRUD operations.

Dependencies: sqlalchemy, backoffice.boundary.db.models
System role: Financial ledger persistence operations
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Sequence
from uuid import UUID

from sqlalchemy import Select, case, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.boundary.db.CRUD.base_crud import BaseCRUD
from backoffice.boundary.db.models.financial_transaction_model import FinancialTransactionModel
from backoffice.core.enums import (
    EXCLUDED_FROM_TOTALS,
    FinancialTransactionStatus,
    FinancialTransactionType,
)

REVENUE_TYPES = tuple(t for t in FinancialTransactionType if t.is_revenue)
COST_TYPES = tuple(t for t in FinancialTransactionType if t.is_cost)


@dataclass
class TransactionFilters:
    """Filter options for transaction listings and summaries."""

    type: FinancialTransactionType | None = None
    status: FinancialTransactionStatus | None = None
    client_id: UUID | None = None
    contract_id: UUID | None = None
    service_scope_id: UUID | None = None
    hardware_asset_id: UUID | None = None
    recorded_by_user_id: UUID | None = None
    date_from: date | None = None
    date_to: date | None = None


class FinancialTransactionCRUD(BaseCRUD[FinancialTransactionModel]):
    """CRUD operations for FinancialTransactionModel."""

    def __init__(self) -> None:
        """Initialize FinancialTransactionCRUD with FinancialTransactionModel."""
        super().__init__(FinancialTransactionModel)

    def apply_filters(self, stmt: Select, filters: TransactionFilters) -> Select:
        """Add the WHERE clauses for every filter that is set."""
        model = FinancialTransactionModel
        equality = {
            model.type: filters.type,
            model.status: filters.status,
            model.client_id: filters.client_id,
            model.contract_id: filters.contract_id,
            model.service_scope_id: filters.service_scope_id,
            model.hardware_asset_id: filters.hardware_asset_id,
            model.recorded_by_user_id: filters.recorded_by_user_id,
        }
        for column, value in equality.items():
            if value is not None:
                stmt = stmt.where(column == value)
        if filters.date_from is not None:
            stmt = stmt.where(model.transaction_date >= filters.date_from)
        if filters.date_to is not None:
            stmt = stmt.where(model.transaction_date <= filters.date_to)
        return stmt

    def build_query(self, filters: TransactionFilters) -> Select:
        """Build a filtered select ordered by transaction date then creation, newest first."""
        model = FinancialTransactionModel
        stmt = self.apply_filters(select(model), filters)
        return stmt.order_by(model.transaction_date.desc(), model.created_at.desc())

    async def list_filtered(
        self,
        session: AsyncSession,
        filters: TransactionFilters,
        page: int = 1,
        limit: int = 20,
    ) -> tuple[Sequence[FinancialTransactionModel], int]:
        """List transactions matching filters, one page at a time."""
        return await self.paginate(session, self.build_query(filters), page, limit)

    async def list_all(
        self,
        session: AsyncSession,
        filters: TransactionFilters,
        limit: int | None = None,
    ) -> Sequence[FinancialTransactionModel]:
        """All transactions matching filters, newest first."""
        stmt = self.build_query(filters)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def summarize(
        self,
        session: AsyncSession,
        filters: TransactionFilters,
    ) -> tuple[Decimal, Decimal, int]:
        """
        Aggregate revenue, costs and row count in one query.

        Cancelled, failed and refunded rows are excluded. Types that are
        neither revenue nor cost count toward the row count only.

        Returns:
            tuple: (total revenue, total costs, transaction count)
        """
        model = FinancialTransactionModel
        revenue = func.coalesce(
            func.sum(case((model.type.in_(REVENUE_TYPES), model.amount), else_=0)), 0
        )
        costs = func.coalesce(
            func.sum(case((model.type.in_(COST_TYPES), model.amount), else_=0)), 0
        )
        stmt = self.apply_filters(select(revenue, costs, func.count(model.id)), filters)
        stmt = stmt.where(model.status.not_in(EXCLUDED_FROM_TOTALS))
        total_revenue, total_costs, count = (await session.execute(stmt)).one()
        return Decimal(str(total_revenue)), Decimal(str(total_costs)), count


financial_transaction_crud = FinancialTransactionCRUD()
