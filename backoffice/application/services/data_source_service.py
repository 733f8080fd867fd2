"""
External data source service.

Admin operations on external REST API definitions. Credentials are
validated per authentication type, encrypted before storage and never
returned.

Dependencies: httpx, backoffice.boundary, backoffice.core
System role: Integration admin use case orchestration
"""

import logging
from typing import Any
from uuid import UUID

import httpx
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.application.services.serializers import data_source_to_dict
from backoffice.boundary.db.CRUD.integration_crud import (
    data_source_query_crud,
    external_data_source_crud,
)
from backoffice.boundary.http import ExternalApiClient
from backoffice.configs.integrations import IntegrationSettings
from backoffice.core.credential_cipher import CredentialCipher
from backoffice.core.enums import ExternalApiAuthenticationType
from backoffice.core.exceptions import BackOfficeError, ConflictError, ResourceNotFoundError
from backoffice.core.integrations.authentication import apply_authentication, validate_credentials

logger = logging.getLogger(__name__)


class DataSourceService:
    """External data source admin service."""

    def __init__(
        self,
        db: AsyncSession,
        settings: IntegrationSettings,
        http_client: ExternalApiClient | None = None,
    ) -> None:
        """
        Initialize data source service.

        Args:
            db: Async SQLAlchemy session
            settings: Integration settings (encryption key, timeouts)
            http_client: Client for connection tests; built from settings when omitted
        """
        self.db = db
        self.settings = settings
        self.http_client = http_client or ExternalApiClient(
            timeout=settings.request_timeout_seconds,
            retry_attempts=settings.retry_attempts,
            retry_max_wait=settings.retry_max_wait_seconds,
        )

    @property
    def cipher(self) -> CredentialCipher:
        return CredentialCipher(self.settings.encryption_key)

    async def _get_or_404(self, source_id: UUID):
        source = await external_data_source_crud.get_by_id(self.db, source_id)
        if source is None:
            raise ResourceNotFoundError("Data source", source_id)
        return source

    async def _ensure_name_free(self, name: str, exclude_id: UUID | None = None) -> None:
        if await external_data_source_crud.exists_by(self.db, exclude_id=exclude_id, name=name):
            raise ConflictError(f'Data source with name "{name}" already exists', details={"name": name})

    def _encrypt_credentials(
        self,
        authentication_type: ExternalApiAuthenticationType,
        credentials: dict[str, Any] | None,
    ) -> str | None:
        validated = validate_credentials(authentication_type, credentials)
        return self.cipher.encrypt_object(validated) if validated else None

    async def create_data_source(self, credentials: dict[str, Any] | None = None, **fields: Any) -> dict:
        """
        Register an external data source.

        Args:
            credentials: Plaintext credentials for the authentication type
            **fields: Data source column values

        Returns:
            dict: Sanitized data source

        Raises:
            ConflictError: If the name is taken
            BusinessRuleError: If credentials do not fit the authentication type
            ConfigurationError: If credentials are given but no encryption key is set
        """
        name = fields["name"]
        try:
            await self._ensure_name_free(name)
            fields["base_url"] = str(fields["base_url"])
            auth_type = fields.get("authentication_type", ExternalApiAuthenticationType.NONE)
            encrypted = self._encrypt_credentials(auth_type, credentials)

            source = await external_data_source_crud.create(
                self.db, credentials_encrypted=encrypted, **fields
            )
            logger.info(
                "Data source created",
                extra={
                    "data_source_id": str(source.id),
                    "data_source_name": name,
                    "authentication_type": auth_type.value,
                },
            )
            return data_source_to_dict(source)
        except BackOfficeError:
            raise
        except Exception as e:
            logger.error("Failed to create data source", extra={"error": str(e), "data_source_name": name})
            raise

    async def list_data_sources(self) -> list[dict]:
        """All data sources ordered by name."""
        sources = await external_data_source_crud.list_ordered(self.db)
        return [data_source_to_dict(s) for s in sources]

    async def get_data_source(self, source_id: UUID) -> dict:
        """
        Get a data source with its queries.

        Raises:
            ResourceNotFoundError: If the data source does not exist
        """
        source = await self._get_or_404(source_id)
        queries = await data_source_query_crud.list_ordered(self.db, data_source_id=source_id)
        return data_source_to_dict(source, queries=list(queries))

    async def update_data_source(
        self,
        source_id: UUID,
        credentials: dict[str, Any] | None = None,
        **updates: Any,
    ) -> dict:
        """
        Update a data source.

        New credentials are validated against the effective authentication
        type; switching to NONE clears stored credentials.

        Raises:
            ResourceNotFoundError: If the data source does not exist
            ConflictError: If the new name is taken
            BusinessRuleError: If credentials do not fit the authentication type
        """
        try:
            source = await self._get_or_404(source_id)
            if updates.get("name") and updates["name"] != source.name:
                await self._ensure_name_free(updates["name"], exclude_id=source_id)
            if updates.get("base_url") is not None:
                updates["base_url"] = str(updates["base_url"])

            auth_type = updates.get("authentication_type") or source.authentication_type
            if credentials:
                updates["credentials_encrypted"] = self._encrypt_credentials(auth_type, credentials)
            elif auth_type == ExternalApiAuthenticationType.NONE:
                updates["credentials_encrypted"] = None

            await external_data_source_crud.update_instance(self.db, source, **updates)
            logger.info(
                "Data source updated",
                extra={
                    "data_source_id": str(source_id),
                    "fields": sorted(k for k in updates if k != "credentials_encrypted"),
                    "credentials_changed": "credentials_encrypted" in updates,
                },
            )
            return data_source_to_dict(source)
        except BackOfficeError:
            raise
        except Exception as e:
            logger.error("Failed to update data source", extra={"error": str(e), "data_source_id": str(source_id)})
            raise

    async def delete_data_source(self, source_id: UUID) -> None:
        """
        Delete a data source and, by cascade, its queries.

        Raises:
            ResourceNotFoundError: If the data source does not exist
        """
        source = await self._get_or_404(source_id)
        await external_data_source_crud.delete_by_id(self.db, source_id)
        logger.info("Data source deleted", extra={"data_source_id": str(source_id), "data_source_name": source.name})

    async def test_connection(self, source_id: UUID) -> dict:
        """
        Send one authenticated GET to the base URL.

        Network and HTTP failures are reported in the result rather than raised.

        Returns:
            dict with success, message, status_code

        Raises:
            ResourceNotFoundError: If the data source does not exist
        """
        source = await self._get_or_404(source_id)
        headers = {**(source.default_headers or {}), "Accept": "application/json"}
        params: dict[str, Any] = {}
        credentials = (
            self.cipher.decrypt_object(source.credentials_encrypted) if source.credentials_encrypted else None
        )
        apply_authentication(source.authentication_type, credentials, headers, params)

        try:
            response = await self.http_client.request(
                "GET", source.base_url, headers=headers, params=params, retry=False
            )
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            logger.warning(
                "Data source connection test failed",
                extra={"data_source_id": str(source_id), "status_code": status_code},
            )
            return {
                "success": False,
                "message": f"Connection failed with HTTP {status_code}",
                "status_code": status_code,
            }
        except httpx.HTTPError as e:
            logger.warning(
                "Data source unreachable",
                extra={"data_source_id": str(source_id), "error": str(e)},
            )
            return {"success": False, "message": f"Connection failed: {e}", "status_code": None}

        logger.info(
            "Data source connection test succeeded",
            extra={"data_source_id": str(source_id), "status_code": response.status_code},
        )
        return {
            "success": True,
            "message": "Connection test successful",
            "status_code": response.status_code,
        }
