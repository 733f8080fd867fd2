"""
Hardware asset service orchestrator.

Coordinates inventory lifecycle: registration, uniqueness of tags
and serial numbers, status changes and disposal.

Dependencies: backoffice.boundary.db.CRUD, backoffice.core
System role: Hardware inventory use case orchestration
"""

import logging
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.application.services.serializers import (
    hardware_asset_to_dict,
    hardware_assignment_to_dict,
    page_to_dict,
)
from backoffice.boundary.db.CRUD.hardware_asset_crud import hardware_asset_crud
from backoffice.boundary.db.CRUD.hardware_assignment_crud import hardware_assignment_crud
from backoffice.core.enums import HardwareAssetStatus, HardwareAssetType
from backoffice.core.exceptions import (
    BackOfficeError,
    BusinessRuleError,
    ConflictError,
    ResourceNotFoundError,
)

logger = logging.getLogger(__name__)


class HardwareAssetService:
    """Hardware asset service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize hardware asset service with async database session.

        Args:
            db: Async SQLAlchemy session
        """
        self.db = db

    async def _get_or_404(self, asset_id: UUID):
        asset = await hardware_asset_crud.get_by_id(self.db, asset_id)
        if asset is None:
            raise ResourceNotFoundError("Hardware asset", asset_id)
        return asset

    async def _ensure_unique(
        self,
        asset_tag: str | None,
        serial_number: str | None,
        exclude_id: UUID | None = None,
    ) -> None:
        if asset_tag and await hardware_asset_crud.exists_by(
            self.db, exclude_id=exclude_id, asset_tag=asset_tag
        ):
            raise ConflictError(
                f"Hardware asset with tag '{asset_tag}' already exists",
                details={"asset_tag": asset_tag},
            )
        if serial_number and await hardware_asset_crud.exists_by(
            self.db, exclude_id=exclude_id, serial_number=serial_number
        ):
            raise ConflictError(
                f"Hardware asset with serial number '{serial_number}' already exists",
                details={"serial_number": serial_number},
            )

    async def create_asset(self, **fields: Any) -> dict:
        """
        Register a hardware asset.

        Raises:
            ConflictError: If the asset tag or serial number is taken
        """
        try:
            await self._ensure_unique(fields.get("asset_tag"), fields.get("serial_number"))
            asset = await hardware_asset_crud.create(self.db, **fields)
            logger.info(
                "Hardware asset created",
                extra={"hardware_asset_id": str(asset.id), "asset_tag": asset.asset_tag},
            )
            return hardware_asset_to_dict(asset)
        except BackOfficeError:
            raise
        except Exception as e:
            logger.error(
                "Failed to create hardware asset",
                extra={"error": str(e), "asset_tag": fields.get("asset_tag")},
            )
            raise

    async def list_assets(
        self,
        asset_tag: str | None = None,
        serial_number: str | None = None,
        location: str | None = None,
        manufacturer: str | None = None,
        model: str | None = None,
        asset_type: HardwareAssetType | None = None,
        status: HardwareAssetStatus | None = None,
        page: int = 1,
        limit: int = 20,
    ) -> dict:
        """List hardware assets, newest first."""
        assets, total = await hardware_asset_crud.list_filtered(
            self.db,
            asset_tag=asset_tag,
            serial_number=serial_number,
            location=location,
            manufacturer=manufacturer,
            model=model,
            asset_type=asset_type,
            status=status,
            page=page,
            limit=limit,
        )
        return page_to_dict([hardware_asset_to_dict(a) for a in assets], total, page, limit)

    async def get_asset(self, asset_id: UUID) -> dict:
        """
        Get an asset with its assignment history.

        Raises:
            ResourceNotFoundError: If the asset does not exist
        """
        asset = await self._get_or_404(asset_id)
        history = await hardware_assignment_crud.list_for_asset(self.db, asset_id)
        data = hardware_asset_to_dict(asset)
        data["assignments"] = [hardware_assignment_to_dict(a) for a in history]
        return data

    async def update_asset(self, asset_id: UUID, **updates: Any) -> dict:
        """
        Update an asset.

        Raises:
            ResourceNotFoundError: If the asset does not exist
            ConflictError: If the new tag or serial number is taken
        """
        try:
            asset = await self._get_or_404(asset_id)
            new_tag = updates.get("asset_tag")
            new_serial = updates.get("serial_number")
            await self._ensure_unique(
                new_tag if new_tag != asset.asset_tag else None,
                new_serial if new_serial != asset.serial_number else None,
                exclude_id=asset_id,
            )
            if updates:
                await hardware_asset_crud.update_instance(self.db, asset, **updates)
                logger.info(
                    "Hardware asset updated",
                    extra={"hardware_asset_id": str(asset_id), "fields": sorted(updates)},
                )
            return hardware_asset_to_dict(asset)
        except BackOfficeError:
            raise
        except Exception as e:
            logger.error(
                "Failed to update hardware asset",
                extra={"error": str(e), "hardware_asset_id": str(asset_id)},
            )
            raise

    async def update_status(self, asset_id: UUID, status: HardwareAssetStatus) -> dict:
        """
        Change only the asset status.

        Raises:
            ResourceNotFoundError: If the asset does not exist
        """
        asset = await self._get_or_404(asset_id)
        previous = asset.status
        await hardware_asset_crud.update_instance(self.db, asset, status=status)
        logger.info(
            "Hardware asset status changed",
            extra={
                "hardware_asset_id": str(asset_id),
                "from_status": previous.value,
                "to_status": status.value,
            },
        )
        return hardware_asset_to_dict(asset)

    async def dispose_asset(self, asset_id: UUID) -> dict:
        """
        Mark an asset disposed (soft delete).

        Raises:
            ResourceNotFoundError: If the asset does not exist
            BusinessRuleError: If the asset is still assigned
        """
        asset = await self._get_or_404(asset_id)
        active = await hardware_assignment_crud.get_active_for_asset(self.db, asset_id)
        if active is not None:
            raise BusinessRuleError(
                "Cannot dispose an asset with an active assignment",
                details={"hardware_asset_id": str(asset_id), "assignment_id": str(active.id)},
            )
        await hardware_asset_crud.update_instance(self.db, asset, status=HardwareAssetStatus.DISPOSED)
        logger.info("Hardware asset disposed", extra={"hardware_asset_id": str(asset_id)})
        return hardware_asset_to_dict(asset)

    async def list_available(self) -> list[dict]:
        """Assets in stock or awaiting deployment, ordered by tag."""
        assets = await hardware_asset_crud.list_available(self.db)
        return [hardware_asset_to_dict(a) for a in assets]
