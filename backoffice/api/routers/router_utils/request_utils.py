"""
Request helpers shared by routers.

Dependencies: pydantic
System role: Turning request models into service keyword arguments
"""

from datetime import date
from typing import Any

from pydantic import BaseModel


def update_fields(request: BaseModel) -> dict[str, Any]:
    """
    Fields the client actually sent, without nulls.

    Raises:
        ValueError: If no field was provided
    """
    fields = request.model_dump(exclude_unset=True, exclude_none=True)
    if not fields:
        raise ValueError("At least one field must be provided for update")
    return fields


def validate_date_range(start: date | None, end: date | None, start_name: str, end_name: str) -> None:
    """
    Reject a filter range whose start is after its end.

    Raises:
        ValueError: If start > end
    """
    if start is not None and end is not None and start > end:
        raise ValueError(f"{start_name} must not be after {end_name}")
