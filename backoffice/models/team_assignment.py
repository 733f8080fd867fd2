"""
Client team assignment schemas.

Dependencies: pydantic
System role: Account team API contracts
"""

import uuid
from datetime import date, datetime

from pydantic import BaseModel, Field

from backoffice.core.enums import ClientAssignmentRole, UserRole


class CreateTeamAssignmentRequest(BaseModel):
    """Request schema for assigning a user to a client account."""

    user_id: uuid.UUID
    client_id: uuid.UUID
    assignment_role: ClientAssignmentRole
    assignment_date: date | None = None
    end_date: date | None = None
    notes: str | None = Field(None, max_length=2000)
    priority: int = Field(1, ge=1, le=10)


class UpdateTeamAssignmentRequest(BaseModel):
    """Request schema for updating an assignment; omitted fields are unchanged."""

    assignment_role: ClientAssignmentRole | None = None
    assignment_date: date | None = None
    end_date: date | None = None
    notes: str | None = Field(None, max_length=2000)
    priority: int | None = Field(None, ge=1, le=10)


class TeamAssignmentResponse(BaseModel):
    """Response schema for team assignments."""

    id: uuid.UUID
    user_id: uuid.UUID
    user_name: str | None
    user_email: str | None
    user_role: UserRole | None
    client_id: uuid.UUID
    client_name: str | None
    assignment_role: ClientAssignmentRole
    assignment_date: date
    end_date: date | None
    is_active: bool
    notes: str | None
    priority: int
    created_at: datetime
    updated_at: datetime


class TeamAssignmentStatsResponse(BaseModel):
    """Assignment counts for one client or one user."""

    total: int
    active: int
    inactive: int
    by_role: dict[str, int]
    assignments: list[TeamAssignmentResponse]
