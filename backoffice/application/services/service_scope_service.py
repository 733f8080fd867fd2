"""
Service scope orchestrator.

Coordinates the services attached to contracts: catalog checks,
per-contract uniqueness and scope template validation.

Dependencies: backoffice.boundary.db.CRUD, backoffice.core
System role: Contract line item use case orchestration
"""

import logging
from decimal import Decimal
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.application.services.serializers import page_to_dict, service_scope_to_dict
from backoffice.boundary.db.CRUD.contract_crud import contract_crud
from backoffice.boundary.db.CRUD.service_crud import service_crud
from backoffice.boundary.db.CRUD.service_scope_crud import service_scope_crud
from backoffice.core.enums import SAFStatus
from backoffice.core.exceptions import (
    BackOfficeError,
    BusinessRuleError,
    ConflictError,
    ResourceNotFoundError,
)
from backoffice.core.scope_template import validate_scope_details

logger = logging.getLogger(__name__)


class ServiceScopeService:
    """Service scope orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize service scope service with async database session.

        Args:
            db: Async SQLAlchemy session
        """
        self.db = db

    async def _get_or_404(self, scope_id: UUID, refresh: bool = False):
        scope = await service_scope_crud.get_by_id(self.db, scope_id, refresh=refresh)
        if scope is None:
            raise ResourceNotFoundError("Service scope", scope_id)
        return scope

    async def _get_active_service(self, service_id: UUID):
        service = await service_crud.get_active(self.db, service_id)
        if service is None:
            raise ResourceNotFoundError(
                "Service",
                service_id,
                message=f"Active service with ID {service_id} not found",
            )
        return service

    @staticmethod
    def _check_scope_details(service, scope_details: dict | None) -> None:
        errors = validate_scope_details(service.scope_definition_template, scope_details)
        if errors:
            raise BusinessRuleError(
                f"Scope details do not match the service scope template: {'; '.join(errors)}",
                details={"service_id": str(service.id), "errors": errors},
            )

    async def create_for_contract(self, contract_id: UUID, **fields: Any) -> dict:
        """
        Add a catalog service to a contract.

        Args:
            contract_id: Contract UUID
            **fields: Scope column values; service_id is required

        Returns:
            dict: Created scope

        Raises:
            ResourceNotFoundError: If the contract or active service is missing
            ConflictError: If the service is already on the contract
            BusinessRuleError: If scope_details violate the service template
        """
        service_id = fields["service_id"]
        try:
            if not await contract_crud.exists(self.db, contract_id):
                raise ResourceNotFoundError("Contract", contract_id)
            service = await self._get_active_service(service_id)

            if await service_scope_crud.service_in_contract(self.db, contract_id, service_id):
                raise ConflictError(
                    "Service is already part of this contract",
                    details={"contract_id": str(contract_id), "service_id": str(service_id)},
                )
            self._check_scope_details(service, fields.get("scope_details"))

            scope = await service_scope_crud.create(self.db, contract_id=contract_id, **fields)
            scope = await self._get_or_404(scope.id, refresh=True)

            logger.info(
                "Service scope created",
                extra={
                    "service_scope_id": str(scope.id),
                    "contract_id": str(contract_id),
                    "service_id": str(service_id),
                },
            )
            return service_scope_to_dict(scope)
        except BackOfficeError:
            raise
        except Exception as e:
            logger.error(
                "Failed to create service scope",
                extra={"error": str(e), "contract_id": str(contract_id), "service_id": str(service_id)},
            )
            raise

    async def list_scopes(
        self,
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
    ) -> dict:
        """List service scopes with filters."""
        scopes, total = await service_scope_crud.list_filtered(
            self.db,
            contract_id=contract_id,
            service_id=service_id,
            saf_status=saf_status,
            is_active=is_active,
            search=search,
            min_price=min_price,
            max_price=max_price,
            sort_by=sort_by,
            sort_order=sort_order,
            page=page,
            limit=limit,
        )
        return page_to_dict([service_scope_to_dict(s) for s in scopes], total, page, limit)

    async def list_for_contract(self, contract_id: UUID) -> list[dict]:
        """
        All scopes of a contract.

        Raises:
            ResourceNotFoundError: If the contract does not exist
        """
        if not await contract_crud.exists(self.db, contract_id):
            raise ResourceNotFoundError("Contract", contract_id)
        scopes = await service_scope_crud.list_for_contract(self.db, contract_id)
        return [service_scope_to_dict(s) for s in scopes]

    async def get_scope(self, scope_id: UUID) -> dict:
        """
        Get a service scope.

        Raises:
            ResourceNotFoundError: If the scope does not exist
        """
        return service_scope_to_dict(await self._get_or_404(scope_id))

    async def update_scope(self, scope_id: UUID, **updates: Any) -> dict:
        """
        Update a service scope.

        Changing the service re-runs the active-service and duplicate checks.
        scope_details are re-validated against the effective service's template.

        Raises:
            ResourceNotFoundError: If the scope or new service is missing
            ConflictError: If the new service is already on the contract
            BusinessRuleError: If scope_details violate the template
        """
        try:
            scope = await self._get_or_404(scope_id)

            new_service_id = updates.get("service_id")
            if new_service_id is not None and new_service_id != scope.service_id:
                service = await self._get_active_service(new_service_id)
                if await service_scope_crud.service_in_contract(
                    self.db, scope.contract_id, new_service_id, exclude_id=scope_id
                ):
                    raise ConflictError(
                        "Service is already part of this contract",
                        details={"contract_id": str(scope.contract_id), "service_id": str(new_service_id)},
                    )
            else:
                service = scope.service

            if "scope_details" in updates or service is not scope.service:
                self._check_scope_details(service, updates.get("scope_details", scope.scope_details))

            start = updates.get("saf_service_start_date", scope.saf_service_start_date)
            end = updates.get("saf_service_end_date", scope.saf_service_end_date)
            if start is not None and end is not None and end < start:
                raise BusinessRuleError("SAF service end date must not be before the start date")

            if updates:
                await service_scope_crud.update_instance(self.db, scope, **updates)
                scope = await self._get_or_404(scope_id, refresh=True)
                logger.info(
                    "Service scope updated",
                    extra={"service_scope_id": str(scope_id), "fields": sorted(updates)},
                )
            return service_scope_to_dict(scope)
        except BackOfficeError:
            raise
        except Exception as e:
            logger.error(
                "Failed to update service scope",
                extra={"error": str(e), "service_scope_id": str(scope_id)},
            )
            raise

    async def deactivate_scope(self, scope_id: UUID) -> dict:
        """
        Soft delete a service scope.

        Raises:
            ResourceNotFoundError: If the scope does not exist
        """
        scope = await self._get_or_404(scope_id)
        if scope.is_active:
            await service_scope_crud.update_instance(self.db, scope, is_active=False)
            logger.info("Service scope deactivated", extra={"service_scope_id": str(scope_id)})
        return service_scope_to_dict(scope)

    async def hard_delete_scope(self, scope_id: UUID) -> None:
        """
        Permanently delete a service scope.

        Raises:
            ResourceNotFoundError: If the scope does not exist
        """
        await self._get_or_404(scope_id)
        await service_scope_crud.delete_by_id(self.db, scope_id)
        logger.info("Service scope deleted", extra={"service_scope_id": str(scope_id)})
