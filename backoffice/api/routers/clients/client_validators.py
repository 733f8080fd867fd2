"""
Client validation utilities.

Checks not covered by the Pydantic request models.

Dependencies: backoffice.models.client
System role: Client request validation
"""

from backoffice.boundary.db.CRUD import ClientFilters
from backoffice.models.client import ClientListParams


class ClientValidationError(ValueError):
    """Raised when a client request fails validation."""


def validate_client_list_params(params: ClientListParams) -> None:
    """
    Validate listing filters.

    Raises:
        ClientValidationError: If created_from is after created_to
    """
    if params.created_from and params.created_to and params.created_from > params.created_to:
        raise ClientValidationError("created_from must not be after created_to")


def build_client_filters(params: ClientListParams) -> ClientFilters:
    """Validate listing params and convert them to CRUD filters."""
    validate_client_list_params(params)
    return ClientFilters(**params.model_dump())
