"""
Domain error handling for API endpoints.

Provides a decorator that maps domain exceptions raised by services
and router validators to HTTPExceptions with consistent logging.

Dependencies: fastapi, pydantic, backoffice.core.exceptions
System role: Exception to HTTP status translation
"""

import functools
import logging
from typing import Any, Callable, TypeVar

from fastapi import HTTPException, status
from pydantic import ValidationError

from backoffice.core.exceptions import (
    AuthenticationError,
    BackOfficeError,
    BusinessRuleError,
    ConfigurationError,
    ConflictError,
    CredentialEncryptionError,
    ExternalDataError,
    PermissionDeniedError,
    ResourceNotFoundError,
)

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

STATUS_BY_ERROR: list[tuple[type[BackOfficeError], int]] = [
    (ResourceNotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
    (BusinessRuleError, status.HTTP_400_BAD_REQUEST),
    (ExternalDataError, status.HTTP_400_BAD_REQUEST),
    (AuthenticationError, status.HTTP_401_UNAUTHORIZED),
    (PermissionDeniedError, status.HTTP_403_FORBIDDEN),
    (ConfigurationError, status.HTTP_500_INTERNAL_SERVER_ERROR),
    (CredentialEncryptionError, status.HTTP_500_INTERNAL_SERVER_ERROR),
]


def status_for(error: BackOfficeError) -> int:
    """HTTP status for a domain exception; unknown subclasses map to 400."""
    for error_type, status_code in STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return status_code
    return status.HTTP_400_BAD_REQUEST


def handle_domain_errors(func: F) -> F:
    """
    Decorator to turn domain errors into HTTPExceptions.

    This centralizes:
    - Mapping domain exceptions to HTTP status codes
    - ValueError from router validators to 400
    - Logging with the error details
    - A generic 500 for anything unexpected
    """
    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)

        except HTTPException:
            raise

        except BackOfficeError as e:
            status_code = status_for(e)
            log = logger.error if status_code >= 500 else logger.warning
            log(
                "Request failed",
                extra={"error_type": type(e).__name__, "error": e.message, "details": e.details},
            )
            headers = {"WWW-Authenticate": "Bearer"} if status_code == 401 else None
            raise HTTPException(status_code=status_code, detail=e.message, headers=headers)

        except ValidationError as e:
            logger.warning("Pydantic validation error", extra={"error": str(e)})
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=e.errors(include_url=False, include_context=False, include_input=False),
            )

        except ValueError as e:
            logger.warning("Invalid request", extra={"error": str(e)})
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

        except Exception as e:
            logger.exception("Unexpected failure", extra={"error": str(e)})
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="An internal error occurred",
            )

    return wrapper  # type: ignore
