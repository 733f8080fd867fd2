"""
Service catalog CRUD operations.

Dependencies: sqlalchemy, backoffice.boundary.db.models
System role: Service catalog persistence operations
"""

from typing import Sequence

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.boundary.db.CRUD.base_crud import BaseCRUD
from backoffice.boundary.db.models.service_model import ServiceModel
from backoffice.core.enums import ServiceCategory, ServiceDeliveryModel


class ServiceCRUD(BaseCRUD[ServiceModel]):
    """CRUD operations for ServiceModel."""

    def __init__(self) -> None:
        """Initialize ServiceCRUD with ServiceModel."""
        super().__init__(ServiceModel)

    async def list_filtered(
        self,
        session: AsyncSession,
        is_active: bool | None = None,
        category: ServiceCategory | None = None,
        delivery_model: ServiceDeliveryModel | None = None,
        search: str | None = None,
        page: int = 1,
        limit: int = 50,
    ) -> tuple[Sequence[ServiceModel], int]:
        """
        List catalog services ordered by name.

        Args:
            session: Async database session
            is_active: Filter by active flag
            category: Filter by category
            delivery_model: Filter by delivery model
            search: Case-insensitive match on name or description
            page: 1-based page number
            limit: Page size

        Returns:
            Tuple of (services, total)
        """
        stmt = select(ServiceModel)
        if is_active is not None:
            stmt = stmt.where(ServiceModel.is_active == is_active)
        if category is not None:
            stmt = stmt.where(ServiceModel.category == category)
        if delivery_model is not None:
            stmt = stmt.where(ServiceModel.delivery_model == delivery_model)
        if search:
            term = f"%{search.strip()}%"
            stmt = stmt.where(or_(ServiceModel.name.ilike(term), ServiceModel.description.ilike(term)))
        stmt = stmt.order_by(ServiceModel.name)
        return await self.paginate(session, stmt, page, limit)

    async def get_active(self, session: AsyncSession, service_id) -> ServiceModel | None:
        """Retrieve a service only when it is active."""
        stmt = select(ServiceModel).where(ServiceModel.id == service_id, ServiceModel.is_active.is_(True))
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def statistics(self, session: AsyncSession) -> dict:
        """
        Aggregate catalog counts.

        Returns:
            dict with total, active, inactive, by_category, by_delivery_model
        """
        total = (await session.execute(select(func.count(ServiceModel.id)))).scalar_one()
        active = (
            await session.execute(
                select(func.count(ServiceModel.id)).where(ServiceModel.is_active.is_(True))
            )
        ).scalar_one()

        by_category_rows = await session.execute(
            select(ServiceModel.category, func.count(ServiceModel.id)).group_by(ServiceModel.category)
        )
        by_delivery_rows = await session.execute(
            select(ServiceModel.delivery_model, func.count(ServiceModel.id))
            .where(ServiceModel.delivery_model.is_not(None))
            .group_by(ServiceModel.delivery_model)
        )

        return {
            "total": total,
            "active": active,
            "inactive": total - active,
            "by_category": {category.value: count for category, count in by_category_rows.all()},
            "by_delivery_model": {model.value: count for model, count in by_delivery_rows.all()},
        }


service_crud = ServiceCRUD()
