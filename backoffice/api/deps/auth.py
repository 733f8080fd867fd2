"""
Authentication and authorization dependencies.

Bearer tokens are validated statelessly from their claims; routes
declare the roles they accept with require_roles().

Dependencies: fastapi, backoffice.core.security
System role: Request authentication and role checks
"""

import logging
from typing import Callable

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from backoffice.api.deps.dependencies import get_settings_dependency
from backoffice.configs import Settings
from backoffice.core.enums import UserRole
from backoffice.core.exceptions import AuthenticationError
from backoffice.core.security import TokenPayload, decode_access_token

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)

ALL_ROLES = tuple(UserRole)
WRITE_ROLES = (UserRole.ADMIN, UserRole.MANAGER, UserRole.ACCOUNT_MANAGER)
FINANCE_ROLES = (UserRole.ADMIN, UserRole.MANAGER)
FINANCE_READ_ROLES = (*FINANCE_ROLES, UserRole.ACCOUNT_MANAGER)
ADMIN_ROLES = (UserRole.ADMIN,)


def _unauthorized(message: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=message,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_optional_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    settings: Settings = Depends(get_settings_dependency),
) -> TokenPayload | None:
    """
    Resolve the caller from an optional bearer token.

    Returns:
        TokenPayload, or None when no token was sent

    Raises:
        HTTPException(401): A token was sent but is invalid or expired
    """
    if credentials is None:
        return None
    try:
        return decode_access_token(credentials.credentials, settings.auth)
    except AuthenticationError as e:
        logger.warning("Rejected bearer token", extra={"error": e.message})
        raise _unauthorized(e.message)


async def get_current_user(
    user: TokenPayload | None = Depends(get_optional_current_user),
) -> TokenPayload:
    """
    Resolve the caller from a required bearer token.

    Raises:
        HTTPException(401): Missing, invalid or expired token
    """
    if user is None:
        raise _unauthorized("Not authenticated")
    return user


def require_roles(*roles: UserRole) -> Callable:
    """
    Build a dependency that admits only the given roles.

    Args:
        *roles: Allowed roles

    Returns:
        Dependency returning the authenticated TokenPayload

    Example:
        user: TokenPayload = Depends(require_roles(*WRITE_ROLES))
    """
    allowed = frozenset(roles)

    async def dependency(user: TokenPayload = Depends(get_current_user)) -> TokenPayload:
        if user.role not in allowed:
            logger.warning(
                "Role not permitted",
                extra={"user_id": str(user.user_id), "role": user.role.value},
            )
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient permissions for this operation",
            )
        return user

    return dependency
