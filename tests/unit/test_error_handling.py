"""Unit tests for the domain error to HTTP status mapping."""

import pytest
from fastapi import HTTPException
from pydantic import BaseModel, ValidationError

from backoffice.api.routers.router_utils.error_handling import handle_domain_errors, status_for
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


class _Payload(BaseModel):
    amount: int


def raising(error: Exception):
    @handle_domain_errors
    async def endpoint():
        raise error

    return endpoint


@pytest.mark.parametrize(
    "error, expected",
    [
        (ResourceNotFoundError("Client", "abc"), 404),
        (ConflictError("duplicate"), 409),
        (BusinessRuleError("rule"), 400),
        (ExternalDataError("upstream"), 400),
        (AuthenticationError("bad token"), 401),
        (PermissionDeniedError("nope"), 403),
        (ConfigurationError("missing"), 500),
        (CredentialEncryptionError("broken"), 500),
        (BackOfficeError("generic"), 400),
    ],
)
def test_status_for(error, expected):
    assert status_for(error) == expected


@pytest.mark.asyncio
async def test_domain_error_keeps_message():
    with pytest.raises(HTTPException) as exc_info:
        await raising(ResourceNotFoundError("Client", "abc"))()

    assert exc_info.value.status_code == 404
    assert exc_info.value.detail == "Client with ID abc not found"
    assert exc_info.value.headers is None


@pytest.mark.asyncio
async def test_authentication_error_sets_challenge_header():
    with pytest.raises(HTTPException) as exc_info:
        await raising(AuthenticationError("Invalid email or password"))()

    assert exc_info.value.status_code == 401
    assert exc_info.value.headers == {"WWW-Authenticate": "Bearer"}


@pytest.mark.asyncio
async def test_pydantic_validation_error_is_422():
    with pytest.raises(ValidationError) as validation:
        _Payload(amount="many")

    with pytest.raises(HTTPException) as exc_info:
        await raising(validation.value)()

    assert exc_info.value.status_code == 422
    assert exc_info.value.detail[0]["loc"] == ("amount",)


@pytest.mark.asyncio
async def test_value_error_is_400():
    with pytest.raises(HTTPException) as exc_info:
        await raising(ValueError("date_from must be before date_to"))()

    assert exc_info.value.status_code == 400
    assert exc_info.value.detail == "date_from must be before date_to"


@pytest.mark.asyncio
async def test_unexpected_error_is_hidden():
    with pytest.raises(HTTPException) as exc_info:
        await raising(RuntimeError("db exploded"))()

    assert exc_info.value.status_code == 500
    assert exc_info.value.detail == "An internal error occurred"


@pytest.mark.asyncio
async def test_http_exception_passes_through():
    original = HTTPException(status_code=418, detail="teapot")

    with pytest.raises(HTTPException) as exc_info:
        await raising(original)()

    assert exc_info.value is original


@pytest.mark.asyncio
async def test_return_value_is_untouched():
    @handle_domain_errors
    async def endpoint(value):
        return {"value": value}

    assert await endpoint(3) == {"value": 3}
