"""
External integration schemas.

Data sources, data source queries and data fetch requests/responses.
Credentials are accepted on write and never echoed back.

Dependencies: pydantic
System role: Integration admin and data API contracts
"""

import uuid
from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, HttpUrl

from backoffice.core.enums import (
    ExpectedResponseType,
    ExternalApiAuthenticationType,
    ExternalSystemType,
    HttpMethod,
)


class CreateDataSourceRequest(BaseModel):
    """Request schema for registering an external data source."""

    name: str = Field(..., min_length=1, max_length=255)
    system_type: ExternalSystemType
    base_url: HttpUrl
    authentication_type: ExternalApiAuthenticationType = ExternalApiAuthenticationType.NONE
    credentials: dict[str, Any] | None = Field(None, description="Plaintext credentials; stored encrypted")
    default_headers: dict[str, str] | None = None
    description: str | None = None
    is_active: bool = True


class UpdateDataSourceRequest(BaseModel):
    """Request schema for updating a data source; omitted fields are unchanged."""

    name: str | None = Field(None, min_length=1, max_length=255)
    system_type: ExternalSystemType | None = None
    base_url: HttpUrl | None = None
    authentication_type: ExternalApiAuthenticationType | None = None
    credentials: dict[str, Any] | None = None
    default_headers: dict[str, str] | None = None
    description: str | None = None
    is_active: bool | None = None


class DataSourceQuerySummary(BaseModel):
    id: uuid.UUID
    query_name: str
    is_active: bool


class DataSourceResponse(BaseModel):
    """Sanitized data source: credentials are replaced by has_credentials."""

    id: uuid.UUID
    name: str
    system_type: ExternalSystemType
    base_url: str
    authentication_type: ExternalApiAuthenticationType
    has_credentials: bool
    default_headers: dict[str, str] | None
    description: str | None
    is_active: bool
    created_at: datetime
    updated_at: datetime
    queries: list[DataSourceQuerySummary] | None = None


class ConnectionTestResponse(BaseModel):
    success: bool
    message: str
    status_code: int | None = None


class CreateQueryRequest(BaseModel):
    """Request schema for defining a data source query."""

    query_name: str = Field(..., min_length=1, max_length=255, pattern=r"^[\w.\-]+$")
    data_source_id: uuid.UUID
    description: str | None = None
    endpoint_path: str = Field(..., min_length=1, max_length=1000)
    http_method: HttpMethod = HttpMethod.GET
    query_template: str | None = None
    response_extraction_path: str = Field(..., min_length=1, max_length=500)
    expected_response_type: ExpectedResponseType
    cache_ttl_seconds: int = Field(0, ge=0, le=86400)
    is_active: bool = True
    notes: str | None = None


class UpdateQueryRequest(BaseModel):
    """Request schema for updating a query; omitted fields are unchanged."""

    query_name: str | None = Field(None, min_length=1, max_length=255, pattern=r"^[\w.\-]+$")
    data_source_id: uuid.UUID | None = None
    description: str | None = None
    endpoint_path: str | None = Field(None, min_length=1, max_length=1000)
    http_method: HttpMethod | None = None
    query_template: str | None = None
    response_extraction_path: str | None = Field(None, min_length=1, max_length=500)
    expected_response_type: ExpectedResponseType | None = None
    cache_ttl_seconds: int | None = Field(None, ge=0, le=86400)
    is_active: bool | None = None
    notes: str | None = None


class QueryResponse(BaseModel):
    """Response schema for data source queries."""

    id: uuid.UUID
    query_name: str
    data_source_id: uuid.UUID
    data_source_name: str | None
    description: str | None
    endpoint_path: str
    http_method: HttpMethod
    query_template: str | None
    response_extraction_path: str
    expected_response_type: ExpectedResponseType
    cache_ttl_seconds: int
    is_active: bool
    notes: str | None
    created_at: datetime
    updated_at: datetime


class TemplateValidationResponse(BaseModel):
    valid: bool
    placeholders: list[str]


class FetchDataRequest(BaseModel):
    context_variables: dict[str, Any] | None = None


class FetchDataResponse(BaseModel):
    query_name: str
    data: Any
    cached: bool = False
