"""
Service catalog orchestrator.

Coordinates catalog service lifecycle, statistics and scope templates.

Dependencies: backoffice.boundary.db.CRUD, backoffice.core
System role: Service catalog use case orchestration
"""

import logging
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.application.services.serializers import page_to_dict, service_to_dict
from backoffice.boundary.db.CRUD.service_crud import service_crud
from backoffice.core.enums import ServiceCategory, ServiceDeliveryModel
from backoffice.core.exceptions import BackOfficeError, ConflictError, ResourceNotFoundError

logger = logging.getLogger(__name__)


class ServiceCatalogService:
    """Service catalog orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize catalog service with async database session.

        Args:
            db: Async SQLAlchemy session
        """
        self.db = db

    async def _get_or_404(self, service_id: UUID):
        service = await service_crud.get_by_id(self.db, service_id)
        if service is None:
            raise ResourceNotFoundError("Service", service_id)
        return service

    async def _ensure_name_free(self, name: str, exclude_id: UUID | None = None) -> None:
        if await service_crud.exists_by(self.db, exclude_id=exclude_id, name=name):
            raise ConflictError(f"Service with name '{name}' already exists", details={"name": name})

    async def create_service(self, **fields: Any) -> dict:
        """
        Create a catalog service.

        Args:
            **fields: Service column values

        Returns:
            dict: Created service

        Raises:
            ConflictError: If the name is already taken
        """
        try:
            await self._ensure_name_free(fields["name"])
            service = await service_crud.create(self.db, **fields)
            logger.info("Service created", extra={"service_id": str(service.id), "service_name": service.name})
            return service_to_dict(service)
        except BackOfficeError:
            raise
        except Exception as e:
            logger.error("Failed to create service", extra={"error": str(e), "service_name": fields.get("name")})
            raise

    async def list_services(
        self,
        is_active: bool | None = None,
        category: ServiceCategory | None = None,
        delivery_model: ServiceDeliveryModel | None = None,
        search: str | None = None,
        page: int = 1,
        limit: int = 50,
    ) -> dict:
        """List catalog services ordered by name."""
        services, total = await service_crud.list_filtered(
            self.db,
            is_active=is_active,
            category=category,
            delivery_model=delivery_model,
            search=search,
            page=page,
            limit=limit,
        )
        return page_to_dict([service_to_dict(s) for s in services], total, page, limit)

    async def get_service(self, service_id: UUID) -> dict:
        """
        Get a catalog service.

        Raises:
            ResourceNotFoundError: If the service does not exist
        """
        return service_to_dict(await self._get_or_404(service_id))

    async def update_service(self, service_id: UUID, **updates: Any) -> dict:
        """
        Update a catalog service.

        Raises:
            ResourceNotFoundError: If the service does not exist
            ConflictError: If the new name is taken
        """
        try:
            service = await self._get_or_404(service_id)
            if updates.get("name") and updates["name"] != service.name:
                await self._ensure_name_free(updates["name"], exclude_id=service_id)
            if updates:
                await service_crud.update_instance(self.db, service, **updates)
                logger.info("Service updated", extra={"service_id": str(service_id), "fields": sorted(updates)})
            return service_to_dict(service)
        except BackOfficeError:
            raise
        except Exception as e:
            logger.error("Failed to update service", extra={"error": str(e), "service_id": str(service_id)})
            raise

    async def set_active(self, service_id: UUID, is_active: bool) -> dict:
        """
        Deactivate (soft delete) or reactivate a service. Idempotent.

        Raises:
            ResourceNotFoundError: If the service does not exist
        """
        service = await self._get_or_404(service_id)
        if service.is_active != is_active:
            await service_crud.update_instance(self.db, service, is_active=is_active)
            logger.info(
                "Service reactivated" if is_active else "Service deactivated",
                extra={"service_id": str(service_id)},
            )
        return service_to_dict(service)

    async def get_statistics(self) -> dict:
        """Catalog totals by status, category and delivery model."""
        return await service_crud.statistics(self.db)

    async def get_scope_template(self, service_id: UUID) -> dict:
        """
        Get a service's scope definition template.

        Raises:
            ResourceNotFoundError: If the service does not exist
        """
        service = await self._get_or_404(service_id)
        return {
            "service_id": service.id,
            "service_name": service.name,
            "scope_definition_template": service.scope_definition_template,
        }

    async def update_scope_template(self, service_id: UUID, template: dict | None) -> dict:
        """
        Replace a service's scope definition template.

        Args:
            service_id: Service UUID
            template: Validated template dict, or None to clear it

        Raises:
            ResourceNotFoundError: If the service does not exist
        """
        service = await self._get_or_404(service_id)
        await service_crud.update_instance(self.db, service, scope_definition_template=template)
        logger.info(
            "Service scope template updated",
            extra={
                "service_id": str(service_id),
                "field_count": len(template["fields"]) if template else 0,
            },
        )
        return {
            "service_id": service.id,
            "service_name": service.name,
            "scope_definition_template": service.scope_definition_template,
        }
