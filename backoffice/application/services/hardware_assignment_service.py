"""
Hardware assignment service orchestrator.

Runs the multi-step assignment flow: an asset is handed to a client
(optionally for a service scope) and its inventory status follows the
assignment. Every flow writes the assignment and the asset in the same
transaction; unexpected failures roll the session back before re-raising.

Dependencies: backoffice.boundary.db.CRUD, backoffice.core
System role: Hardware assignment use case orchestration
"""

import logging
from datetime import date
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.application.services.serializers import hardware_assignment_to_dict, page_to_dict
from backoffice.boundary.db.CRUD.client_crud import client_crud
from backoffice.boundary.db.CRUD.hardware_asset_crud import hardware_asset_crud
from backoffice.boundary.db.CRUD.hardware_assignment_crud import hardware_assignment_crud
from backoffice.boundary.db.CRUD.service_scope_crud import service_scope_crud
from backoffice.core.enums import HardwareAssetStatus, HardwareAssignmentStatus
from backoffice.core.exceptions import BackOfficeError, BusinessRuleError, ResourceNotFoundError

logger = logging.getLogger(__name__)

RETURNING_STATUSES = (HardwareAssignmentStatus.RETURNED, HardwareAssignmentStatus.REPLACED)


class HardwareAssignmentService:
    """Hardware assignment service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize hardware assignment service with async database session.

        Args:
            db: Async SQLAlchemy session
        """
        self.db = db

    async def _get_or_404(self, assignment_id: UUID, refresh: bool = False):
        assignment = await hardware_assignment_crud.get_by_id(self.db, assignment_id, refresh=refresh)
        if assignment is None:
            raise ResourceNotFoundError("Hardware assignment", assignment_id)
        return assignment

    async def _check_service_scope(self, service_scope_id: UUID, client_id: UUID) -> None:
        scope = await service_scope_crud.get_by_id(self.db, service_scope_id)
        if scope is None:
            raise ResourceNotFoundError("Service scope", service_scope_id)
        if scope.contract.client_id != client_id:
            raise BusinessRuleError(
                "Service scope does not belong to the client's contracts",
                details={"service_scope_id": str(service_scope_id), "client_id": str(client_id)},
            )

    async def _return_asset(self, asset_id: UUID) -> None:
        asset = await hardware_asset_crud.get_by_id(self.db, asset_id)
        if asset is not None:
            await hardware_asset_crud.update_instance(self.db, asset, status=HardwareAssetStatus.IN_STOCK)

    async def assign(
        self,
        hardware_asset_id: UUID,
        client_id: UUID,
        service_scope_id: UUID | None = None,
        assignment_date: date | None = None,
        notes: str | None = None,
    ) -> dict:
        """
        Assign an available asset to a client.

        Steps:
            1. Asset exists and is in stock or awaiting deployment
            2. Asset has no active assignment
            3. Client exists; optional service scope exists and belongs to the client
            4. Create the active assignment and set the asset in use

        Returns:
            dict: Created assignment

        Raises:
            ResourceNotFoundError: If the asset, client or service scope is missing
            BusinessRuleError: If the asset is unavailable or the scope belongs elsewhere
        """
        try:
            asset = await hardware_asset_crud.get_by_id(self.db, hardware_asset_id)
            if asset is None:
                raise ResourceNotFoundError("Hardware asset", hardware_asset_id)
            if not asset.is_available:
                raise BusinessRuleError(
                    f"Hardware asset {asset.asset_tag} is not available for assignment. "
                    f"Current status: {asset.status.value}",
                    details={"hardware_asset_id": str(hardware_asset_id), "status": asset.status.value},
                )

            active = await hardware_assignment_crud.get_active_for_asset(self.db, hardware_asset_id)
            if active is not None:
                raise BusinessRuleError(
                    f"Hardware asset {asset.asset_tag} already has an active assignment",
                    details={"hardware_asset_id": str(hardware_asset_id), "assignment_id": str(active.id)},
                )

            if not await client_crud.exists(self.db, client_id):
                raise ResourceNotFoundError("Client", client_id)
            if service_scope_id is not None:
                await self._check_service_scope(service_scope_id, client_id)

            assignment = await hardware_assignment_crud.create(
                self.db,
                hardware_asset_id=hardware_asset_id,
                client_id=client_id,
                service_scope_id=service_scope_id,
                assignment_date=assignment_date or date.today(),
                status=HardwareAssignmentStatus.ACTIVE,
                notes=notes,
            )
            await hardware_asset_crud.update_instance(self.db, asset, status=HardwareAssetStatus.IN_USE)
            assignment = await self._get_or_404(assignment.id, refresh=True)

            logger.info(
                "Hardware assigned",
                extra={
                    "assignment_id": str(assignment.id),
                    "hardware_asset_id": str(hardware_asset_id),
                    "client_id": str(client_id),
                },
            )
            return hardware_assignment_to_dict(assignment)
        except BackOfficeError:
            raise
        except Exception as e:
            await self.db.rollback()
            logger.error(
                "Failed to assign hardware",
                extra={"error": str(e), "hardware_asset_id": str(hardware_asset_id), "client_id": str(client_id)},
            )
            raise

    async def list_assignments(
        self,
        status: HardwareAssignmentStatus | None = None,
        client_id: UUID | None = None,
        hardware_asset_id: UUID | None = None,
        service_scope_id: UUID | None = None,
        page: int = 1,
        limit: int = 10,
    ) -> dict:
        """List assignments, newest assignment date first."""
        assignments, total = await hardware_assignment_crud.list_filtered(
            self.db,
            status=status,
            client_id=client_id,
            hardware_asset_id=hardware_asset_id,
            service_scope_id=service_scope_id,
            page=page,
            limit=limit,
        )
        return page_to_dict([hardware_assignment_to_dict(a) for a in assignments], total, page, limit)

    async def list_for_client(self, client_id: UUID) -> list[dict]:
        """All assignments of a client."""
        if not await client_crud.exists(self.db, client_id):
            raise ResourceNotFoundError("Client", client_id)
        assignments = await hardware_assignment_crud.list_for_client(self.db, client_id)
        return [hardware_assignment_to_dict(a) for a in assignments]

    async def list_for_asset(self, hardware_asset_id: UUID) -> list[dict]:
        """Assignment history of an asset."""
        if not await hardware_asset_crud.exists(self.db, hardware_asset_id):
            raise ResourceNotFoundError("Hardware asset", hardware_asset_id)
        assignments = await hardware_assignment_crud.list_for_asset(self.db, hardware_asset_id)
        return [hardware_assignment_to_dict(a) for a in assignments]

    async def list_for_service_scope(self, service_scope_id: UUID) -> list[dict]:
        """Assignments delivering a service scope."""
        if not await service_scope_crud.exists(self.db, service_scope_id):
            raise ResourceNotFoundError("Service scope", service_scope_id)
        assignments = await hardware_assignment_crud.list_for_service_scope(self.db, service_scope_id)
        return [hardware_assignment_to_dict(a) for a in assignments]

    async def get_assignment(self, assignment_id: UUID) -> dict:
        """
        Get an assignment.

        Raises:
            ResourceNotFoundError: If the assignment does not exist
        """
        return hardware_assignment_to_dict(await self._get_or_404(assignment_id))

    async def update_assignment(self, assignment_id: UUID, **updates: Any) -> dict:
        """
        Update an assignment.

        Moving an active assignment to returned or replaced puts the asset
        back in stock and defaults return_date to today. A closed
        assignment cannot be made active again.

        Raises:
            ResourceNotFoundError: If the assignment or new service scope is missing
            BusinessRuleError: On reactivation or a scope of another client
        """
        try:
            assignment = await self._get_or_404(assignment_id)
            old_status = assignment.status
            new_status = updates.get("status")

            if (
                new_status == HardwareAssignmentStatus.ACTIVE
                and old_status != HardwareAssignmentStatus.ACTIVE
            ):
                raise BusinessRuleError(
                    "A closed assignment cannot be reactivated; create a new assignment instead",
                    details={"assignment_id": str(assignment_id), "status": old_status.value},
                )

            scope_id = updates.get("service_scope_id")
            if scope_id is not None and scope_id != assignment.service_scope_id:
                await self._check_service_scope(scope_id, assignment.client_id)

            returning = old_status == HardwareAssignmentStatus.ACTIVE and new_status in RETURNING_STATUSES
            if returning and updates.get("return_date") is None:
                updates["return_date"] = date.today()

            effective_start = updates.get("assignment_date") or assignment.assignment_date
            effective_return = updates.get("return_date") or assignment.return_date
            if effective_return is not None and effective_return < effective_start:
                raise BusinessRuleError("Return date must not be before the assignment date")

            if updates:
                await hardware_assignment_crud.update_instance(self.db, assignment, **updates)
            if returning:
                await self._return_asset(assignment.hardware_asset_id)

            assignment = await self._get_or_404(assignment_id, refresh=True)
            logger.info(
                "Hardware assignment updated",
                extra={
                    "assignment_id": str(assignment_id),
                    "fields": sorted(updates),
                    "asset_returned": returning,
                },
            )
            return hardware_assignment_to_dict(assignment)
        except BackOfficeError:
            raise
        except Exception as e:
            await self.db.rollback()
            logger.error(
                "Failed to update hardware assignment",
                extra={"error": str(e), "assignment_id": str(assignment_id)},
            )
            raise

    async def delete_assignment(self, assignment_id: UUID) -> None:
        """
        Permanently delete an assignment.

        An active assignment first returns its asset to stock.

        Raises:
            ResourceNotFoundError: If the assignment does not exist
        """
        try:
            assignment = await self._get_or_404(assignment_id)
            was_active = assignment.status == HardwareAssignmentStatus.ACTIVE
            asset_id = assignment.hardware_asset_id

            if was_active:
                await self._return_asset(asset_id)
            await hardware_assignment_crud.delete_by_id(self.db, assignment_id)

            logger.info(
                "Hardware assignment deleted",
                extra={
                    "assignment_id": str(assignment_id),
                    "hardware_asset_id": str(asset_id),
                    "asset_returned": was_active,
                },
            )
        except BackOfficeError:
            raise
        except Exception as e:
            await self.db.rollback()
            logger.error(
                "Failed to delete hardware assignment",
                extra={"error": str(e), "assignment_id": str(assignment_id)},
            )
            raise
