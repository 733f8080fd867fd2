"""
Exception hierarchy for the back-office application.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.
Routers translate them to HTTP status codes via handle_domain_errors.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class BackOfficeError(Exception):
    """Base exception for all back-office application errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ResourceNotFoundError(BackOfficeError):
    """Raised when a requested entity does not exist."""

    def __init__(
        self,
        resource: str,
        resource_id: Any = None,
        message: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize not found error.

        Args:
            resource: Entity name (e.g. "Client")
            resource_id: Identifier that was looked up
            message: Override for the default message
            details: Additional context
        """
        details = details or {}
        details["resource"] = resource
        if resource_id is not None:
            details["resource_id"] = str(resource_id)
        self.resource = resource
        self.resource_id = resource_id
        default = f"{resource} with ID {resource_id} not found" if resource_id is not None else f"{resource} not found"
        super().__init__(message or default, details)


class ConflictError(BackOfficeError):
    """Raised when a write would violate a uniqueness rule."""


class BusinessRuleError(BackOfficeError):
    """Raised when a request is well-formed but breaks a business rule."""


class ExternalDataError(BackOfficeError):
    """Raised when fetching or extracting external data fails."""

    def __init__(
        self,
        message: str,
        query_name: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if query_name:
            details["query_name"] = query_name
        super().__init__(message, details)


class AuthenticationError(BackOfficeError):
    """Raised when credentials or tokens are missing or invalid."""


class PermissionDeniedError(BackOfficeError):
    """Raised when the caller's role is not allowed to perform an action."""


class ConfigurationError(BackOfficeError):
    """Raised when required configuration is missing or invalid."""


class CredentialEncryptionError(BackOfficeError):
    """Raised when stored credentials cannot be encrypted or decrypted."""
