"""Outbound HTTP adapters."""

from backoffice.boundary.http.external_api_client import ExternalApiClient

__all__ = ["ExternalApiClient"]
