"""
Authentication API endpoints.

Routes:
- POST /auth/register - Create a staff user
- POST /auth/login - Exchange credentials for a bearer token
- GET /auth/me - Current user profile

Dependencies: backoffice.application.services, backoffice.models
System role: Authentication HTTP API
"""

import logging

from fastapi import APIRouter, Depends

from backoffice.api.deps import get_auth_service, get_current_user, get_optional_current_user
from backoffice.api.routers.router_utils import handle_domain_errors
from backoffice.application.services import AuthService
from backoffice.core.enums import UserRole
from backoffice.core.exceptions import PermissionDeniedError
from backoffice.core.security import TokenPayload
from backoffice.models.auth import LoginRequest, RegisterRequest, TokenResponse, UserResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=UserResponse, status_code=201)
@handle_domain_errors
async def register(
    request: RegisterRequest,
    auth_service: AuthService = Depends(get_auth_service),
    caller: TokenPayload | None = Depends(get_optional_current_user),
) -> UserResponse:
    """
    Register a staff user.

    Self-registration creates engineers; any other role needs an admin token.

    Raises:
        HTTPException(403): Elevated role requested without an admin token
        HTTPException(409): Email already registered
    """
    role = request.role or UserRole.ENGINEER
    if role != UserRole.ENGINEER and (caller is None or caller.role != UserRole.ADMIN):
        raise PermissionDeniedError(
            "Only administrators can register users with elevated roles",
            details={"requested_role": role.value},
        )

    user = await auth_service.register(
        first_name=request.first_name,
        last_name=request.last_name,
        email=request.email,
        password=request.password,
        role=role,
    )
    return UserResponse(**user)


@router.post("/login", response_model=TokenResponse)
@handle_domain_errors
async def login(
    request: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> TokenResponse:
    """
    Log in with email and password.

    Raises:
        HTTPException(401): Invalid credentials or inactive user
    """
    result = await auth_service.login(email=request.email, password=request.password)
    return TokenResponse(**result)


@router.get("/me", response_model=UserResponse)
@handle_domain_errors
async def me(
    user: TokenPayload = Depends(get_current_user),
    auth_service: AuthService = Depends(get_auth_service),
) -> UserResponse:
    """Profile of the authenticated user."""
    return UserResponse(**await auth_service.get_user(user.user_id))
