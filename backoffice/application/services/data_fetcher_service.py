"""
Dynamic external data fetcher.

Executes a named data source query: builds the request from templates
and context variables, authenticates with the stored credentials,
calls the external API with retry, extracts a value via JSONPath and
coerces it to the query's expected type. Results are cached per query
and context when the query has a positive cache TTL.

Dependencies: backoffice.boundary, backoffice.core
System role: Runtime execution of configured integrations
"""

import json
import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.boundary.cache import MemoryTTLCache
from backoffice.boundary.db.CRUD.integration_crud import data_source_query_crud
from backoffice.boundary.http import ExternalApiClient
from backoffice.configs.integrations import IntegrationSettings
from backoffice.core.credential_cipher import CredentialCipher
from backoffice.core.enums import HttpMethod
from backoffice.core.exceptions import (
    BusinessRuleError,
    ExternalDataError,
    ResourceNotFoundError,
)
from backoffice.core.integrations.authentication import apply_authentication
from backoffice.core.integrations.extraction import ExtractionError, coerce_value, extract_value
from backoffice.core.integrations.templating import (
    build_url,
    parse_query_string,
    substitute_placeholders,
)

logger = logging.getLogger(__name__)

CACHE_KEY_PREFIX = "external_data"


def build_cache_key(query_name: str, context_variables: dict[str, Any] | None) -> str:
    """
    Cache key for a query and its context.

    Variables are appended in sorted key order so the key does not
    depend on the order the caller supplied them in.

    Example:
        external_data:ticket_count:project:SEC:status:open
    """
    parts = [CACHE_KEY_PREFIX, query_name]
    for key in sorted(context_variables or {}):
        parts.extend([key, str(context_variables[key])])
    return ":".join(parts)


class DataFetcherService:
    """Runs configured external data queries."""

    def __init__(
        self,
        db: AsyncSession,
        settings: IntegrationSettings,
        cache: MemoryTTLCache,
        http_client: ExternalApiClient | None = None,
    ) -> None:
        """
        Initialize the fetcher.

        Args:
            db: Async SQLAlchemy session
            settings: Integration settings (encryption key, timeout, retry)
            cache: Shared TTL cache for query results
            http_client: Outbound client; built from settings when omitted
        """
        self.db = db
        self.settings = settings
        self.cache = cache
        self.http_client = http_client or ExternalApiClient(
            timeout=settings.request_timeout_seconds,
            retry_attempts=settings.retry_attempts,
            retry_max_wait=settings.retry_max_wait_seconds,
        )

    async def fetch_data(self, query_name: str, context_variables: dict[str, Any] | None = None) -> dict:
        """
        Execute a named query.

        Args:
            query_name: Active query name
            context_variables: Values for {placeholder} tokens

        Returns:
            dict with query_name, data and cached

        Raises:
            ResourceNotFoundError: If no active query has that name
            BusinessRuleError: If the data source is unavailable or lacks credentials
            ExternalDataError: On a missing variable, request failure or extraction failure
        """
        query = await data_source_query_crud.get_active_by_name(self.db, query_name)
        if query is None:
            raise ResourceNotFoundError("Query", message=f'Query "{query_name}" not found or inactive')

        source = query.data_source
        if source is None or not source.is_active:
            raise BusinessRuleError(f'Data source for query "{query_name}" is not available')

        cache_key = build_cache_key(query_name, context_variables)
        if query.cache_ttl_seconds > 0:
            cached = self.cache.get(cache_key)
            if cached is not None:
                logger.debug("Data fetch cache hit", extra={"query_name": query_name, "cache_key": cache_key})
                return {"query_name": query_name, "data": cached, "cached": True}

        try:
            url = build_url(source.base_url, substitute_placeholders(query.endpoint_path, context_variables))
            headers = {
                **(source.default_headers or {}),
                "Accept": "application/json",
                "Content-Type": "application/json",
            }
            params: dict[str, Any] = {}
            credentials = (
                CredentialCipher(self.settings.encryption_key).decrypt_object(source.credentials_encrypted)
                if source.credentials_encrypted
                else None
            )
            apply_authentication(source.authentication_type, credentials, headers, params)

            body = None
            if query.query_template:
                rendered = substitute_placeholders(query.query_template, context_variables)
                if query.http_method == HttpMethod.GET:
                    params.update(parse_query_string(rendered))
                else:
                    body = json.loads(rendered)

            logger.info(
                "Fetching external data",
                extra={"query_name": query_name, "method": query.http_method.value, "url": url},
            )
            payload = await self.http_client.request_json(
                query.http_method.value,
                url,
                headers=headers,
                params=params,
                json_body=body,
            )
        except (ResourceNotFoundError, BusinessRuleError, ExternalDataError):
            raise
        except Exception as e:
            logger.error(
                "External data fetch failed",
                extra={"query_name": query_name, "error": str(e)},
            )
            raise ExternalDataError(f"Failed to fetch data: {e}", query_name=query_name) from e

        try:
            data = coerce_value(
                extract_value(payload, query.response_extraction_path),
                query.expected_response_type,
            )
        except ExtractionError as e:
            logger.error(
                "External data extraction failed",
                extra={"query_name": query_name, "path": query.response_extraction_path, "error": str(e)},
            )
            raise ExternalDataError(f"Failed to extract data: {e}", query_name=query_name) from e

        if query.cache_ttl_seconds > 0:
            self.cache.set(cache_key, data, query.cache_ttl_seconds)

        logger.info("External data fetched", extra={"query_name": query_name})
        return {"query_name": query_name, "data": data, "cached": False}
