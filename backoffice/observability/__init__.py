"""Observability: logging configuration, correlation ids and request middleware."""

from backoffice.observability.logger import configure_logging

__all__ = ["configure_logging"]
