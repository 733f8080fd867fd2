"""
Hardware asset CRUD operations.

Dependencies: sqlalchemy, backoffice.boundary.db.models
System role: Hardware inventory persistence operations
"""

from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.boundary.db.CRUD.base_crud import BaseCRUD
from backoffice.boundary.db.models.hardware_asset_model import HardwareAssetModel
from backoffice.core.enums import AVAILABLE_ASSET_STATUSES, HardwareAssetStatus, HardwareAssetType


class HardwareAssetCRUD(BaseCRUD[HardwareAssetModel]):
    """CRUD operations for HardwareAssetModel."""

    def __init__(self) -> None:
        """Initialize HardwareAssetCRUD with HardwareAssetModel."""
        super().__init__(HardwareAssetModel)

    async def list_filtered(
        self,
        session: AsyncSession,
        asset_tag: str | None = None,
        serial_number: str | None = None,
        location: str | None = None,
        manufacturer: str | None = None,
        model: str | None = None,
        asset_type: HardwareAssetType | None = None,
        status: HardwareAssetStatus | None = None,
        page: int = 1,
        limit: int = 20,
    ) -> tuple[Sequence[HardwareAssetModel], int]:
        """
        List assets, newest first.

        Text filters match substrings case-insensitively; asset_type and
        status match exactly.

        Returns:
            Tuple of (assets, total)
        """
        stmt = select(HardwareAssetModel)
        text_filters = {
            HardwareAssetModel.asset_tag: asset_tag,
            HardwareAssetModel.serial_number: serial_number,
            HardwareAssetModel.location: location,
            HardwareAssetModel.manufacturer: manufacturer,
            HardwareAssetModel.model: model,
        }
        for column, value in text_filters.items():
            if value:
                stmt = stmt.where(column.ilike(f"%{value}%"))
        if asset_type is not None:
            stmt = stmt.where(HardwareAssetModel.asset_type == asset_type)
        if status is not None:
            stmt = stmt.where(HardwareAssetModel.status == status)
        stmt = stmt.order_by(HardwareAssetModel.created_at.desc(), HardwareAssetModel.id)
        return await self.paginate(session, stmt, page, limit)

    async def list_available(self, session: AsyncSession) -> Sequence[HardwareAssetModel]:
        """Assets that can be assigned, ordered by asset tag."""
        stmt = (
            select(HardwareAssetModel)
            .where(HardwareAssetModel.status.in_(AVAILABLE_ASSET_STATUSES))
            .order_by(HardwareAssetModel.asset_tag)
        )
        result = await session.execute(stmt)
        return result.scalars().all()


hardware_asset_crud = HardwareAssetCRUD()
