"""
External API authentication.

Validates the credential shape required by each authentication type and
applies decrypted credentials to outgoing request headers or params.

Dependencies: base64 (stdlib)
System role: Credential handling for external data sources
"""

import base64
from typing import Any

from backoffice.core.enums import ExternalApiAuthenticationType
from backoffice.core.exceptions import BusinessRuleError

REQUIRED_CREDENTIAL_KEYS: dict[ExternalApiAuthenticationType, tuple[str, ...]] = {
    ExternalApiAuthenticationType.NONE: (),
    ExternalApiAuthenticationType.BASIC_AUTH_USERNAME_PASSWORD: ("username", "password"),
    ExternalApiAuthenticationType.BEARER_TOKEN_STATIC: ("token",),
    ExternalApiAuthenticationType.API_KEY_IN_HEADER: ("headerName", "keyValue"),
    ExternalApiAuthenticationType.API_KEY_IN_QUERY_PARAM: ("paramName", "keyValue"),
}


def validate_credentials(
    authentication_type: ExternalApiAuthenticationType,
    credentials: dict[str, Any] | None,
) -> dict[str, Any] | None:
    """
    Check credentials against an authentication type.

    Args:
        authentication_type: Scheme the data source uses
        credentials: Plaintext credentials

    Returns:
        The credentials to store, or None for NONE

    Raises:
        BusinessRuleError: If credentials are missing or lack a required key
    """
    if authentication_type == ExternalApiAuthenticationType.NONE:
        return None
    if not credentials:
        raise BusinessRuleError(
            "Credentials are required for this authentication type",
            details={"authentication_type": authentication_type.value},
        )

    missing = [key for key in REQUIRED_CREDENTIAL_KEYS[authentication_type] if not credentials.get(key)]
    if missing:
        raise BusinessRuleError(
            f"Missing credential fields for {authentication_type.value}: {', '.join(missing)}",
            details={"authentication_type": authentication_type.value, "missing": missing},
        )
    return credentials


def apply_authentication(
    authentication_type: ExternalApiAuthenticationType,
    credentials: dict[str, Any] | None,
    headers: dict[str, str],
    params: dict[str, Any],
) -> None:
    """
    Add authentication to request headers or query params in place.

    Args:
        authentication_type: Scheme the data source uses
        credentials: Decrypted credentials
        headers: Outgoing headers (mutated)
        params: Outgoing query params (mutated)

    Raises:
        BusinessRuleError: If the scheme needs credentials and none are stored
    """
    if authentication_type == ExternalApiAuthenticationType.NONE:
        return
    if not credentials:
        raise BusinessRuleError(
            "Data source requires credentials but none are configured",
            details={"authentication_type": authentication_type.value},
        )

    if authentication_type == ExternalApiAuthenticationType.BASIC_AUTH_USERNAME_PASSWORD:
        pair = f"{credentials['username']}:{credentials['password']}".encode("utf-8")
        headers["Authorization"] = f"Basic {base64.b64encode(pair).decode('ascii')}"
    elif authentication_type == ExternalApiAuthenticationType.BEARER_TOKEN_STATIC:
        headers["Authorization"] = f"Bearer {credentials['token']}"
    elif authentication_type == ExternalApiAuthenticationType.API_KEY_IN_HEADER:
        headers[credentials["headerName"]] = str(credentials["keyValue"])
    elif authentication_type == ExternalApiAuthenticationType.API_KEY_IN_QUERY_PARAM:
        params[credentials["paramName"]] = str(credentials["keyValue"])
