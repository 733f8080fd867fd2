"""
Service catalog schemas.

Request/response schemas for catalog services and their scope
definition templates.

Dependencies: pydantic
System role: Service catalog API contracts
"""

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from backoffice.core.enums import ServiceCategory, ServiceDeliveryModel

ScopeFieldType = Literal["string", "number", "boolean", "select", "textarea", "date", "email", "url"]


class ScopeFieldDefinition(BaseModel):
    """One field of a scope definition template."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1, max_length=100, pattern=r"^\w+$")
    label: str = Field(..., min_length=1, max_length=255)
    type: ScopeFieldType
    required: bool = False
    options: list[str] | None = None
    min: float | None = None
    max: float | None = None
    min_length: int | None = Field(None, ge=0, alias="minLength")
    max_length: int | None = Field(None, ge=0, alias="maxLength")
    placeholder: str | None = None
    description: str | None = None
    default: Any = None

    @model_validator(mode="after")
    def check_consistency(self) -> "ScopeFieldDefinition":
        if self.type == "select" and not self.options:
            raise ValueError(f"Select field '{self.name}' requires options")
        if self.min is not None and self.max is not None and self.min > self.max:
            raise ValueError(f"Field '{self.name}' has min greater than max")
        return self


class ScopeDefinitionTemplate(BaseModel):
    """Form template describing a service's scope_details."""

    fields: list[ScopeFieldDefinition] = Field(..., min_length=1)
    version: str | None = Field(None, max_length=20)
    description: str | None = Field(None, max_length=1000)

    @model_validator(mode="after")
    def unique_field_names(self) -> "ScopeDefinitionTemplate":
        names = [field.name for field in self.fields]
        if len(names) != len(set(names)):
            raise ValueError("Template field names must be unique")
        return self


class CreateServiceRequest(BaseModel):
    """Request schema for creating a catalog service."""

    name: str = Field(..., min_length=2, max_length=255)
    description: str | None = Field(None, max_length=5000)
    category: ServiceCategory = ServiceCategory.OTHER
    delivery_model: ServiceDeliveryModel | None = None
    base_price: Decimal | None = Field(None, ge=0, max_digits=12, decimal_places=2)
    is_active: bool = True
    scope_definition_template: ScopeDefinitionTemplate | None = None


class UpdateServiceRequest(BaseModel):
    """Request schema for updating a catalog service; omitted fields are unchanged."""

    name: str | None = Field(None, min_length=2, max_length=255)
    description: str | None = Field(None, max_length=5000)
    category: ServiceCategory | None = None
    delivery_model: ServiceDeliveryModel | None = None
    base_price: Decimal | None = Field(None, ge=0, max_digits=12, decimal_places=2)
    is_active: bool | None = None
    scope_definition_template: ScopeDefinitionTemplate | None = None


class ServiceResponse(BaseModel):
    """Response schema for catalog services."""

    id: uuid.UUID
    name: str
    description: str | None
    category: ServiceCategory
    delivery_model: ServiceDeliveryModel | None
    base_price: float | None
    is_active: bool
    scope_definition_template: dict | None
    created_at: datetime
    updated_at: datetime


class ServiceStatisticsResponse(BaseModel):
    """Catalog aggregates."""

    total: int
    active: int
    inactive: int
    by_category: dict[str, int]
    by_delivery_model: dict[str, int]


class ScopeTemplateResponse(BaseModel):
    """A service's scope template."""

    service_id: uuid.UUID
    service_name: str
    scope_definition_template: dict | None
