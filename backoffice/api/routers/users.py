"""
User management API endpoints.

Routes:
- GET /users - List users
- GET /users/{id} - Get user
- PATCH /users/{id} - Change role or active flag (admin)

Dependencies: backoffice.application.services, backoffice.models
System role: Staff user administration HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from backoffice.api.deps import ADMIN_ROLES, FINANCE_ROLES, get_auth_service, require_roles
from backoffice.api.routers.router_utils import handle_domain_errors, update_fields
from backoffice.application.services import AuthService
from backoffice.core.enums import UserRole
from backoffice.core.security import TokenPayload
from backoffice.models.auth import UpdateUserRequest, UserResponse
from backoffice.models.common import PaginatedResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=PaginatedResponse[UserResponse])
@handle_domain_errors
async def list_users(
    role: UserRole | None = None,
    is_active: bool | None = None,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    auth_service: AuthService = Depends(get_auth_service),
    _: TokenPayload = Depends(require_roles(*FINANCE_ROLES)),
) -> dict:
    """List users, optionally by role and active flag."""
    return await auth_service.list_users(role=role, is_active=is_active, page=page, limit=limit)


@router.get("/{user_id}", response_model=UserResponse)
@handle_domain_errors
async def get_user(
    user_id: UUID,
    auth_service: AuthService = Depends(get_auth_service),
    _: TokenPayload = Depends(require_roles(*FINANCE_ROLES)),
) -> UserResponse:
    """Get a user by ID."""
    return UserResponse(**await auth_service.get_user(user_id))


@router.patch("/{user_id}", response_model=UserResponse)
@handle_domain_errors
async def update_user(
    user_id: UUID,
    request: UpdateUserRequest,
    auth_service: AuthService = Depends(get_auth_service),
    admin: TokenPayload = Depends(require_roles(*ADMIN_ROLES)),
) -> UserResponse:
    """Change a user's role or active flag."""
    fields = update_fields(request)
    logger.info(
        "Updating user",
        extra={"user_id": str(user_id), "by_user_id": str(admin.user_id), "fields": sorted(fields)},
    )
    return UserResponse(**await auth_service.update_user(user_id, **fields))
