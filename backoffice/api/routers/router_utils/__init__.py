"""Shared router helpers."""

from .error_handling import handle_domain_errors
from .request_utils import update_fields, validate_date_range

__all__ = ["handle_domain_errors", "update_fields", "validate_date_range"]
