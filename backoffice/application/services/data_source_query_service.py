"""
Data source query service.

Admin operations on named queries: each query binds an endpoint and
request template on a data source to a JSONPath extraction and an
expected result type.

Dependencies: backoffice.boundary.db.CRUD, backoffice.core
System role: Integration query admin orchestration
"""

import logging
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.application.services.serializers import query_to_dict
from backoffice.boundary.db.CRUD.integration_crud import (
    data_source_query_crud,
    external_data_source_crud,
)
from backoffice.core.exceptions import (
    BackOfficeError,
    BusinessRuleError,
    ConflictError,
    ResourceNotFoundError,
)
from backoffice.core.integrations.extraction import ExtractionError, validate_jsonpath
from backoffice.core.integrations.templating import extract_placeholders

logger = logging.getLogger(__name__)


class DataSourceQueryService:
    """Data source query admin service."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize query service with async database session.

        Args:
            db: Async SQLAlchemy session
        """
        self.db = db

    async def _get_or_404(self, query_id: UUID, refresh: bool = False):
        query = await data_source_query_crud.get_by_id(self.db, query_id, refresh=refresh)
        if query is None:
            raise ResourceNotFoundError("Query", query_id)
        return query

    async def _validate(
        self,
        data_source_id: UUID | None,
        query_name: str | None,
        extraction_path: str | None,
        exclude_id: UUID | None = None,
    ) -> None:
        if query_name and await data_source_query_crud.exists_by(
            self.db, exclude_id=exclude_id, query_name=query_name
        ):
            raise ConflictError(
                f'Query with name "{query_name}" already exists',
                details={"query_name": query_name},
            )
        if data_source_id is not None and not await external_data_source_crud.exists(self.db, data_source_id):
            raise BusinessRuleError(
                f'Data source with ID "{data_source_id}" not found',
                details={"data_source_id": str(data_source_id)},
            )
        if extraction_path is not None:
            try:
                validate_jsonpath(extraction_path)
            except ExtractionError as e:
                raise BusinessRuleError(str(e), details={"response_extraction_path": extraction_path}) from e

    async def create_query(self, **fields: Any) -> dict:
        """
        Define a query on a data source.

        Raises:
            ConflictError: If the query name is taken
            BusinessRuleError: If the data source is missing or the JSONPath is invalid
        """
        try:
            await self._validate(
                fields["data_source_id"],
                fields["query_name"],
                fields["response_extraction_path"],
            )
            query = await data_source_query_crud.create(self.db, **fields)
            query = await self._get_or_404(query.id, refresh=True)
            logger.info(
                "Data source query created",
                extra={
                    "query_id": str(query.id),
                    "query_name": query.query_name,
                    "data_source_id": str(query.data_source_id),
                },
            )
            return query_to_dict(query)
        except BackOfficeError:
            raise
        except Exception as e:
            logger.error(
                "Failed to create data source query",
                extra={"error": str(e), "query_name": fields.get("query_name")},
            )
            raise

    async def list_queries(self, data_source_id: UUID | None = None) -> list[dict]:
        """Queries ordered by name, optionally for one data source."""
        queries = await data_source_query_crud.list_ordered(self.db, data_source_id=data_source_id)
        return [query_to_dict(q) for q in queries]

    async def get_query(self, query_id: UUID) -> dict:
        """
        Get a query.

        Raises:
            ResourceNotFoundError: If the query does not exist
        """
        return query_to_dict(await self._get_or_404(query_id))

    async def update_query(self, query_id: UUID, **updates: Any) -> dict:
        """
        Update a query, re-running the create checks on changed fields.

        Raises:
            ResourceNotFoundError: If the query does not exist
            ConflictError: If the new name is taken
            BusinessRuleError: If the data source is missing or the JSONPath is invalid
        """
        try:
            query = await self._get_or_404(query_id)
            new_name = updates.get("query_name")
            await self._validate(
                updates.get("data_source_id"),
                new_name if new_name != query.query_name else None,
                updates.get("response_extraction_path"),
                exclude_id=query_id,
            )
            if updates:
                await data_source_query_crud.update_instance(self.db, query, **updates)
                query = await self._get_or_404(query_id, refresh=True)
                logger.info(
                    "Data source query updated",
                    extra={"query_id": str(query_id), "fields": sorted(updates)},
                )
            return query_to_dict(query)
        except BackOfficeError:
            raise
        except Exception as e:
            logger.error(
                "Failed to update data source query",
                extra={"error": str(e), "query_id": str(query_id)},
            )
            raise

    async def delete_query(self, query_id: UUID) -> None:
        """
        Delete a query.

        Raises:
            ResourceNotFoundError: If the query does not exist
        """
        await self._get_or_404(query_id)
        await data_source_query_crud.delete_by_id(self.db, query_id)
        logger.info("Data source query deleted", extra={"query_id": str(query_id)})

    async def validate_template(self, query_id: UUID) -> dict:
        """
        List the placeholders a query needs as context variables.

        Returns:
            dict with valid and placeholders (endpoint path first, then template)
        """
        query = await self._get_or_404(query_id)
        return {
            "valid": True,
            "placeholders": extract_placeholders(query.endpoint_path, query.query_template),
        }
