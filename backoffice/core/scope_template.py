"""
Service scope template validation.

A service's scope_definition_template describes the fields a contract's
service scope must fill in (scope_details). This module checks a
scope_details dict against such a template.

Template shape:
    {
        "fields": [
            {"name": "endpoints", "label": "Endpoints", "type": "number",
             "required": true, "min": 1},
            {"name": "tier", "label": "Tier", "type": "select",
             "options": ["gold", "silver"]}
        ],
        "version": "1.0",
        "description": "..."
    }

Dependencies: re, datetime (stdlib)
System role: Domain validation for service scope parameters
"""

import re
from datetime import date
from typing import Any

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
URL_PATTERN = re.compile(r"^https?://\S+$", re.IGNORECASE)
TEXT_TYPES = ("string", "textarea", "email", "url", "date", "select")


def _is_empty(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _validate_field(field: dict[str, Any], value: Any) -> list[str]:
    label = field.get("label") or field["name"]
    field_type = field.get("type", "string")
    errors: list[str] = []

    if field_type == "number":
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return [f"{label} must be a number"]
        if field.get("min") is not None and value < field["min"]:
            errors.append(f"{label} must be at least {field['min']}")
        if field.get("max") is not None and value > field["max"]:
            errors.append(f"{label} must be at most {field['max']}")
        return errors

    if field_type == "boolean":
        if not isinstance(value, bool):
            errors.append(f"{label} must be true or false")
        return errors

    if field_type in TEXT_TYPES:
        if not isinstance(value, str):
            return [f"{label} must be a string"]
        if field.get("min_length") is not None and len(value) < field["min_length"]:
            errors.append(f"{label} must be at least {field['min_length']} characters")
        if field.get("max_length") is not None and len(value) > field["max_length"]:
            errors.append(f"{label} must be at most {field['max_length']} characters")
        if field_type == "email" and not EMAIL_PATTERN.match(value):
            errors.append(f"{label} must be a valid email address")
        elif field_type == "url" and not URL_PATTERN.match(value):
            errors.append(f"{label} must be a valid URL")
        elif field_type == "date":
            try:
                date.fromisoformat(value)
            except ValueError:
                errors.append(f"{label} must be a date (YYYY-MM-DD)")
        elif field_type == "select" and value not in (field.get("options") or []):
            errors.append(f"{label} must be one of: {', '.join(field.get('options') or [])}")

    return errors


def validate_scope_details(template: dict[str, Any] | None, details: dict[str, Any] | None) -> list[str]:
    """
    Validate scope details against a scope definition template.

    Keys in details that the template does not define are allowed.

    Args:
        template: Service scope_definition_template (None means no constraints)
        details: Scope details supplied for a service scope

    Returns:
        list[str]: Human-readable validation errors, empty when valid
    """
    if not template or not template.get("fields"):
        return []

    details = details or {}
    errors: list[str] = []
    for field in template["fields"]:
        value = details.get(field["name"])
        if _is_empty(value):
            if field.get("required"):
                errors.append(f"{field.get('label') or field['name']} is required")
            continue
        errors.extend(_validate_field(field, value))
    return errors
