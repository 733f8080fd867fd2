"""
External data source and query CRUD operations.

Dependencies: sqlalchemy, backoffice.boundary.db.models
System role: Integration configuration persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.boundary.db.CRUD.base_crud import BaseCRUD
from backoffice.boundary.db.models.data_source_query_model import DataSourceQueryModel
from backoffice.boundary.db.models.external_data_source_model import ExternalDataSourceModel


class ExternalDataSourceCRUD(BaseCRUD[ExternalDataSourceModel]):
    """CRUD operations for ExternalDataSourceModel."""

    def __init__(self) -> None:
        """Initialize ExternalDataSourceCRUD with ExternalDataSourceModel."""
        super().__init__(ExternalDataSourceModel)

    async def list_ordered(self, session: AsyncSession) -> Sequence[ExternalDataSourceModel]:
        """All data sources ordered by name."""
        result = await session.execute(select(ExternalDataSourceModel).order_by(ExternalDataSourceModel.name))
        return result.scalars().all()


class DataSourceQueryCRUD(BaseCRUD[DataSourceQueryModel]):
    """CRUD operations for DataSourceQueryModel."""

    def __init__(self) -> None:
        """Initialize DataSourceQueryCRUD with DataSourceQueryModel."""
        super().__init__(DataSourceQueryModel)

    async def list_ordered(
        self,
        session: AsyncSession,
        data_source_id: UUID | None = None,
    ) -> Sequence[DataSourceQueryModel]:
        """Queries ordered by name, optionally for one data source."""
        stmt = select(DataSourceQueryModel)
        if data_source_id is not None:
            stmt = stmt.where(DataSourceQueryModel.data_source_id == data_source_id)
        result = await session.execute(stmt.order_by(DataSourceQueryModel.query_name))
        return result.scalars().all()

    async def get_active_by_name(self, session: AsyncSession, query_name: str) -> DataSourceQueryModel | None:
        """Retrieve an active query by its name."""
        return await self.get_one_by(session, query_name=query_name, is_active=True)


external_data_source_crud = ExternalDataSourceCRUD()
data_source_query_crud = DataSourceQueryCRUD()
