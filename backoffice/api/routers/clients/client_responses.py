"""
Client response mapping utilities.

Dependencies: backoffice.models.client
System role: Client response transformation
"""

from typing import Any

from backoffice.models.client import ClientResponse, ClientServiceScopeResponse


def map_client_to_response(client_data: dict[str, Any]) -> ClientResponse:
    """Transform a client dict into ClientResponse."""
    return ClientResponse(**client_data)


def map_service_scopes_to_response(scopes: list[dict[str, Any]]) -> list[ClientServiceScopeResponse]:
    """Transform client service scope dicts into responses."""
    return [ClientServiceScopeResponse(**scope) for scope in scopes]
