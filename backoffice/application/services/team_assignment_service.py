"""
Client team assignment service orchestrator.

Manages which staff members work on which client accounts. A client
has at most one active assignment per assignment role.

Dependencies: backoffice.boundary.db.CRUD, backoffice.core
System role: Account team use case orchestration
"""

import logging
from collections import Counter
from datetime import date
from typing import Any, Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.application.services.serializers import page_to_dict, team_assignment_to_dict
from backoffice.boundary.db.CRUD.client_crud import client_crud
from backoffice.boundary.db.CRUD.team_assignment_crud import team_assignment_crud
from backoffice.boundary.db.CRUD.user_crud import user_crud
from backoffice.boundary.db.models.team_assignment_model import ClientTeamAssignmentModel
from backoffice.core.enums import ClientAssignmentRole
from backoffice.core.exceptions import (
    BackOfficeError,
    BusinessRuleError,
    ConflictError,
    ResourceNotFoundError,
)

logger = logging.getLogger(__name__)


def _check_dates(assignment_date: date | None, end_date: date | None) -> None:
    if assignment_date is not None and end_date is not None and end_date <= assignment_date:
        raise BusinessRuleError(
            "End date must be after assignment date",
            details={"assignment_date": assignment_date.isoformat(), "end_date": end_date.isoformat()},
        )


def _stats(assignments: Sequence[ClientTeamAssignmentModel]) -> dict:
    active = sum(1 for a in assignments if a.is_active)
    by_role = Counter(a.assignment_role.value for a in assignments)
    return {
        "total": len(assignments),
        "active": active,
        "inactive": len(assignments) - active,
        "by_role": dict(by_role),
        "assignments": [team_assignment_to_dict(a) for a in assignments],
    }


class TeamAssignmentService:
    """Client team assignment service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize team assignment service with async database session.

        Args:
            db: Async SQLAlchemy session
        """
        self.db = db

    async def _get_or_404(self, assignment_id: UUID, refresh: bool = False):
        assignment = await team_assignment_crud.get_by_id(self.db, assignment_id, refresh=refresh)
        if assignment is None:
            raise ResourceNotFoundError("Team assignment", assignment_id)
        return assignment

    async def _ensure_role_free(
        self,
        client_id: UUID,
        assignment_role: ClientAssignmentRole,
        exclude_id: UUID | None = None,
    ) -> None:
        holder = await team_assignment_crud.get_active_for_role(
            self.db, client_id, assignment_role, exclude_id=exclude_id
        )
        if holder is not None:
            raise ConflictError(
                f"Client already has an active {assignment_role.value} assignment",
                details={
                    "client_id": str(client_id),
                    "assignment_role": assignment_role.value,
                    "existing_assignment_id": str(holder.id),
                },
            )

    async def assign(
        self,
        user_id: UUID,
        client_id: UUID,
        assignment_role: ClientAssignmentRole,
        assignment_date: date | None = None,
        end_date: date | None = None,
        notes: str | None = None,
        priority: int = 1,
    ) -> dict:
        """
        Assign a user to a client account in a role.

        Raises:
            ResourceNotFoundError: If the user or client is missing
            ConflictError: If the role is held, or an inactive identical row exists
            BusinessRuleError: If end_date is not after assignment_date
        """
        try:
            if not await user_crud.exists(self.db, user_id):
                raise ResourceNotFoundError("User", user_id)
            if not await client_crud.exists(self.db, client_id):
                raise ResourceNotFoundError("Client", client_id)

            assignment_date = assignment_date or date.today()
            _check_dates(assignment_date, end_date)
            await self._ensure_role_free(client_id, assignment_role)

            if await team_assignment_crud.exists_by(
                self.db, user_id=user_id, client_id=client_id, assignment_role=assignment_role
            ):
                raise ConflictError(
                    "An inactive assignment for this user, client and role already exists; reactivate it instead",
                    details={
                        "user_id": str(user_id),
                        "client_id": str(client_id),
                        "assignment_role": assignment_role.value,
                    },
                )

            assignment = await team_assignment_crud.create(
                self.db,
                user_id=user_id,
                client_id=client_id,
                assignment_role=assignment_role,
                assignment_date=assignment_date,
                end_date=end_date,
                notes=notes,
                priority=priority,
                is_active=True,
            )
            assignment = await self._get_or_404(assignment.id, refresh=True)
            logger.info(
                "Team member assigned",
                extra={
                    "assignment_id": str(assignment.id),
                    "user_id": str(user_id),
                    "client_id": str(client_id),
                    "assignment_role": assignment_role.value,
                },
            )
            return team_assignment_to_dict(assignment)
        except BackOfficeError:
            raise
        except Exception as e:
            logger.error(
                "Failed to assign team member",
                extra={"error": str(e), "user_id": str(user_id), "client_id": str(client_id)},
            )
            raise

    async def list_assignments(
        self,
        user_id: UUID | None = None,
        client_id: UUID | None = None,
        assignment_role: ClientAssignmentRole | None = None,
        is_active: bool | None = None,
        page: int = 1,
        limit: int = 20,
    ) -> dict:
        """List team assignments, newest first."""
        assignments, total = await team_assignment_crud.list_filtered(
            self.db,
            user_id=user_id,
            client_id=client_id,
            assignment_role=assignment_role,
            is_active=is_active,
            page=page,
            limit=limit,
        )
        return page_to_dict([team_assignment_to_dict(a) for a in assignments], total, page, limit)

    async def list_for_client(self, client_id: UUID, active_only: bool = False) -> list[dict]:
        """A client's team ordered by priority."""
        if not await client_crud.exists(self.db, client_id):
            raise ResourceNotFoundError("Client", client_id)
        assignments = await team_assignment_crud.list_for_client(self.db, client_id, active_only=active_only)
        return [team_assignment_to_dict(a) for a in assignments]

    async def list_for_user(self, user_id: UUID, active_only: bool = False) -> list[dict]:
        """A user's client accounts ordered by priority."""
        if not await user_crud.exists(self.db, user_id):
            raise ResourceNotFoundError("User", user_id)
        assignments = await team_assignment_crud.list_for_user(self.db, user_id, active_only=active_only)
        return [team_assignment_to_dict(a) for a in assignments]

    async def get_assignment(self, assignment_id: UUID) -> dict:
        """
        Get a team assignment.

        Raises:
            ResourceNotFoundError: If the assignment does not exist
        """
        return team_assignment_to_dict(await self._get_or_404(assignment_id))

    async def update_assignment(self, assignment_id: UUID, **updates: Any) -> dict:
        """
        Update a team assignment.

        Raises:
            ResourceNotFoundError: If the assignment does not exist
            ConflictError: If a role change collides with another assignment
            BusinessRuleError: If the effective dates are out of order
        """
        try:
            assignment = await self._get_or_404(assignment_id)

            new_role = updates.get("assignment_role")
            if new_role is not None and new_role != assignment.assignment_role:
                if assignment.is_active:
                    await self._ensure_role_free(assignment.client_id, new_role, exclude_id=assignment_id)
                if await team_assignment_crud.exists_by(
                    self.db,
                    exclude_id=assignment_id,
                    user_id=assignment.user_id,
                    client_id=assignment.client_id,
                    assignment_role=new_role,
                ):
                    raise ConflictError(
                        "This user already has an assignment for this client and role",
                        details={"assignment_id": str(assignment_id), "assignment_role": new_role.value},
                    )

            _check_dates(
                updates.get("assignment_date") or assignment.assignment_date,
                updates.get("end_date", assignment.end_date),
            )

            if updates:
                await team_assignment_crud.update_instance(self.db, assignment, **updates)
                logger.info(
                    "Team assignment updated",
                    extra={"assignment_id": str(assignment_id), "fields": sorted(updates)},
                )
            return team_assignment_to_dict(assignment)
        except BackOfficeError:
            raise
        except Exception as e:
            logger.error(
                "Failed to update team assignment",
                extra={"error": str(e), "assignment_id": str(assignment_id)},
            )
            raise

    async def deactivate(self, assignment_id: UUID, end_date: date | None = None) -> dict:
        """
        Deactivate an assignment; end_date defaults to today.

        Raises:
            ResourceNotFoundError: If the assignment does not exist
        """
        assignment = await self._get_or_404(assignment_id)
        await team_assignment_crud.update_instance(
            self.db,
            assignment,
            is_active=False,
            end_date=end_date or assignment.end_date or date.today(),
        )
        logger.info("Team assignment deactivated", extra={"assignment_id": str(assignment_id)})
        return team_assignment_to_dict(assignment)

    async def reactivate(self, assignment_id: UUID) -> dict:
        """
        Reactivate an assignment and clear its end date.

        Raises:
            ResourceNotFoundError: If the assignment does not exist
            BusinessRuleError: If it is already active
            ConflictError: If another active assignment holds the role
        """
        assignment = await self._get_or_404(assignment_id)
        if assignment.is_active:
            raise BusinessRuleError(
                "Team assignment is already active",
                details={"assignment_id": str(assignment_id)},
            )
        await self._ensure_role_free(assignment.client_id, assignment.assignment_role, exclude_id=assignment_id)

        await team_assignment_crud.update_instance(self.db, assignment, is_active=True, end_date=None)
        logger.info("Team assignment reactivated", extra={"assignment_id": str(assignment_id)})
        return team_assignment_to_dict(assignment)

    async def hard_delete(self, assignment_id: UUID) -> None:
        """
        Permanently delete an assignment.

        Raises:
            ResourceNotFoundError: If the assignment does not exist
        """
        await self._get_or_404(assignment_id)
        await team_assignment_crud.delete_by_id(self.db, assignment_id)
        logger.info("Team assignment deleted", extra={"assignment_id": str(assignment_id)})

    async def client_stats(self, client_id: UUID) -> dict:
        """Assignment counts and list for a client."""
        if not await client_crud.exists(self.db, client_id):
            raise ResourceNotFoundError("Client", client_id)
        return _stats(await team_assignment_crud.list_for_client(self.db, client_id))

    async def user_stats(self, user_id: UUID) -> dict:
        """Assignment counts and list for a user."""
        if not await user_crud.exists(self.db, user_id):
            raise ResourceNotFoundError("User", user_id)
        return _stats(await team_assignment_crud.list_for_user(self.db, user_id))
