"""
Client team assignment API endpoints.

Routes:
- POST /team-assignments - Assign a user to a client in a role
- GET /team-assignments - List assignments
- GET /team-assignments/client/{client_id} - A client's team
- GET /team-assignments/user/{user_id} - A user's accounts
- GET /team-assignments/client/{client_id}/stats
- GET /team-assignments/user/{user_id}/stats
- GET /team-assignments/{assignment_id} - Get assignment
- PUT /team-assignments/{assignment_id} - Update assignment
- DELETE /team-assignments/{assignment_id} - Deactivate assignment
- POST /team-assignments/{assignment_id}/reactivate - Reactivate assignment
- DELETE /team-assignments/{assignment_id}/hard - Delete assignment (admin)

Dependencies: backoffice.application.services, backoffice.models
System role: Client team HTTP API
"""

import logging
from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from backoffice.api.deps import ADMIN_ROLES, ALL_ROLES, WRITE_ROLES, get_team_assignment_service, require_roles
from backoffice.api.routers.router_utils import handle_domain_errors, update_fields
from backoffice.application.services import TeamAssignmentService
from backoffice.core.enums import ClientAssignmentRole
from backoffice.core.security import TokenPayload
from backoffice.models.common import PaginatedResponse
from backoffice.models.team_assignment import (
    CreateTeamAssignmentRequest,
    TeamAssignmentResponse,
    TeamAssignmentStatsResponse,
    UpdateTeamAssignmentRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/team-assignments", tags=["team-assignments"])


@router.post("", response_model=TeamAssignmentResponse, status_code=201)
@handle_domain_errors
async def assign_team_member(
    request: CreateTeamAssignmentRequest,
    team_service: TeamAssignmentService = Depends(get_team_assignment_service),
    user: TokenPayload = Depends(require_roles(*WRITE_ROLES)),
) -> dict:
    """
    Assign a user to a client account.

    A client has at most one active assignment per role.

    Raises:
        HTTPException(400): end_date not after assignment_date
        HTTPException(404): User or client not found
        HTTPException(409): Role already held, or an inactive identical assignment exists
    """
    logger.info(
        "Assigning team member",
        extra={
            "member_user_id": str(request.user_id),
            "client_id": str(request.client_id),
            "assignment_role": request.assignment_role.value,
            "user_id": str(user.user_id),
        },
    )
    return await team_service.assign(**request.model_dump())


@router.get("", response_model=PaginatedResponse[TeamAssignmentResponse])
@handle_domain_errors
async def list_team_assignments(
    user_id: UUID | None = None,
    client_id: UUID | None = None,
    assignment_role: ClientAssignmentRole | None = None,
    is_active: bool | None = None,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    team_service: TeamAssignmentService = Depends(get_team_assignment_service),
    _: TokenPayload = Depends(require_roles(*ALL_ROLES)),
) -> dict:
    """List team assignments, newest first."""
    return await team_service.list_assignments(
        user_id=user_id,
        client_id=client_id,
        assignment_role=assignment_role,
        is_active=is_active,
        page=page,
        limit=limit,
    )


@router.get("/client/{client_id}", response_model=list[TeamAssignmentResponse])
@handle_domain_errors
async def list_client_team(
    client_id: UUID,
    active_only: bool = False,
    team_service: TeamAssignmentService = Depends(get_team_assignment_service),
    _: TokenPayload = Depends(require_roles(*ALL_ROLES)),
) -> list[dict]:
    """A client's team ordered by priority."""
    return await team_service.list_for_client(client_id, active_only=active_only)


@router.get("/user/{user_id}", response_model=list[TeamAssignmentResponse])
@handle_domain_errors
async def list_user_assignments(
    user_id: UUID,
    active_only: bool = False,
    team_service: TeamAssignmentService = Depends(get_team_assignment_service),
    _: TokenPayload = Depends(require_roles(*ALL_ROLES)),
) -> list[dict]:
    """Accounts a user is assigned to, ordered by priority."""
    return await team_service.list_for_user(user_id, active_only=active_only)


@router.get("/client/{client_id}/stats", response_model=TeamAssignmentStatsResponse)
@handle_domain_errors
async def get_client_team_stats(
    client_id: UUID,
    team_service: TeamAssignmentService = Depends(get_team_assignment_service),
    _: TokenPayload = Depends(require_roles(*ALL_ROLES)),
) -> dict:
    """Team totals and role breakdown for a client."""
    return await team_service.client_stats(client_id)


@router.get("/user/{user_id}/stats", response_model=TeamAssignmentStatsResponse)
@handle_domain_errors
async def get_user_team_stats(
    user_id: UUID,
    team_service: TeamAssignmentService = Depends(get_team_assignment_service),
    _: TokenPayload = Depends(require_roles(*ALL_ROLES)),
) -> dict:
    """Assignment totals and role breakdown for a user."""
    return await team_service.user_stats(user_id)


@router.get("/{assignment_id}", response_model=TeamAssignmentResponse)
@handle_domain_errors
async def get_team_assignment(
    assignment_id: UUID,
    team_service: TeamAssignmentService = Depends(get_team_assignment_service),
    _: TokenPayload = Depends(require_roles(*ALL_ROLES)),
) -> dict:
    """Get a team assignment by ID."""
    return await team_service.get_assignment(assignment_id)


@router.put("/{assignment_id}", response_model=TeamAssignmentResponse)
@handle_domain_errors
async def update_team_assignment(
    assignment_id: UUID,
    request: UpdateTeamAssignmentRequest,
    team_service: TeamAssignmentService = Depends(get_team_assignment_service),
    user: TokenPayload = Depends(require_roles(*WRITE_ROLES)),
) -> dict:
    """
    Update a team assignment.

    Raises:
        HTTPException(400): No fields provided, or end_date not after assignment_date
        HTTPException(404): Assignment not found
        HTTPException(409): New role already held on the client
    """
    fields = update_fields(request)
    logger.info(
        "Updating team assignment",
        extra={"assignment_id": str(assignment_id), "user_id": str(user.user_id), "fields": sorted(fields)},
    )
    return await team_service.update_assignment(assignment_id, **fields)


@router.delete("/{assignment_id}", response_model=TeamAssignmentResponse)
@handle_domain_errors
async def deactivate_team_assignment(
    assignment_id: UUID,
    end_date: date | None = None,
    team_service: TeamAssignmentService = Depends(get_team_assignment_service),
    user: TokenPayload = Depends(require_roles(*WRITE_ROLES)),
) -> dict:
    """Deactivate an assignment; end_date defaults to today."""
    logger.info(
        "Deactivating team assignment",
        extra={"assignment_id": str(assignment_id), "user_id": str(user.user_id)},
    )
    return await team_service.deactivate(assignment_id, end_date=end_date)


@router.post("/{assignment_id}/reactivate", response_model=TeamAssignmentResponse)
@handle_domain_errors
async def reactivate_team_assignment(
    assignment_id: UUID,
    team_service: TeamAssignmentService = Depends(get_team_assignment_service),
    _: TokenPayload = Depends(require_roles(*WRITE_ROLES)),
) -> dict:
    """
    Reactivate an assignment and clear its end date.

    Raises:
        HTTPException(400): Assignment already active
        HTTPException(409): Role now held by another active assignment
    """
    return await team_service.reactivate(assignment_id)


@router.delete("/{assignment_id}/hard", status_code=204)
@handle_domain_errors
async def hard_delete_team_assignment(
    assignment_id: UUID,
    team_service: TeamAssignmentService = Depends(get_team_assignment_service),
    user: TokenPayload = Depends(require_roles(*ADMIN_ROLES)),
) -> None:
    """Permanently delete an assignment."""
    await team_service.hard_delete(assignment_id)
    logger.info("Team assignment deleted", extra={"assignment_id": str(assignment_id), "user_id": str(user.user_id)})
