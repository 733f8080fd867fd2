"""
Client service orchestrator.

Coordinates client lifecycle operations, listings and CSV export.

Dependencies: backoffice.boundary.db.CRUD, backoffice.core
System role: Client use case orchestration
"""

import csv
import io
import logging
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.application.services.serializers import (
    client_to_dict,
    page_to_dict,
    to_float,
)
from backoffice.boundary.db.CRUD.client_crud import ClientFilters, client_crud
from backoffice.boundary.db.CRUD.service_scope_crud import service_scope_crud
from backoffice.core.exceptions import BackOfficeError, ConflictError, ResourceNotFoundError

logger = logging.getLogger(__name__)

EXPORT_COLUMNS = [
    "Company Name",
    "Contact Name",
    "Contact Email",
    "Contact Phone",
    "Address",
    "Status",
    "Created Date",
    "Last Updated",
    "Notes",
]
EXPORT_MAX_ROWS = 10000


class ClientService:
    """Client service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize client service with async database session.

        Args:
            db: Async SQLAlchemy session
        """
        self.db = db

    async def _get_or_404(self, client_id: UUID):
        client = await client_crud.get_by_id(self.db, client_id)
        if client is None:
            raise ResourceNotFoundError("Client", client_id)
        return client

    async def create_client(self, **fields: Any) -> dict:
        """
        Create a client.

        Args:
            **fields: Client column values (company_name, contact_name, ...)

        Returns:
            dict: Created client

        Raises:
            ConflictError: If the company name is already taken
        """
        company_name = fields["company_name"]
        if fields.get("website") is not None:
            fields["website"] = str(fields["website"])
        try:
            if await client_crud.get_by_company_name(self.db, company_name):
                raise ConflictError(
                    f"Client with company name '{company_name}' already exists",
                    details={"company_name": company_name},
                )

            client = await client_crud.create(self.db, **fields)
            logger.info(
                "Client created",
                extra={"client_id": str(client.id), "company_name": company_name},
            )
            return client_to_dict(client)
        except BackOfficeError:
            raise
        except Exception as e:
            logger.error(
                "Failed to create client",
                extra={"error": str(e), "company_name": company_name},
            )
            raise

    async def list_clients(self, filters: ClientFilters, page: int = 1, limit: int = 20) -> dict:
        """
        List clients with search, filters and sorting.

        Args:
            filters: ClientFilters
            page: 1-based page number
            limit: Page size

        Returns:
            dict: Paginated payload of client dicts
        """
        try:
            clients, total = await client_crud.list_filtered(self.db, filters, page=page, limit=limit)
            return page_to_dict([client_to_dict(c) for c in clients], total, page, limit)
        except Exception as e:
            logger.error("Failed to list clients", extra={"error": str(e)})
            raise

    async def get_client(self, client_id: UUID) -> dict:
        """
        Get client by ID.

        Raises:
            ResourceNotFoundError: If client not found
        """
        return client_to_dict(await self._get_or_404(client_id))

    async def update_client(self, client_id: UUID, **updates: Any) -> dict:
        """
        Update client fields.

        Args:
            client_id: Client UUID
            **updates: Fields to change; only provided keys are applied

        Returns:
            dict: Updated client

        Raises:
            ResourceNotFoundError: If client not found
            ConflictError: If the new company name is taken by another client
        """
        try:
            client = await self._get_or_404(client_id)

            new_name = updates.get("company_name")
            if new_name and new_name != client.company_name:
                if await client_crud.exists_by(self.db, exclude_id=client_id, company_name=new_name):
                    raise ConflictError(
                        f"Client with company name '{new_name}' already exists",
                        details={"company_name": new_name},
                    )

            if updates.get("website") is not None:
                updates["website"] = str(updates["website"])
            if updates:
                await client_crud.update_instance(self.db, client, **updates)
                logger.info(
                    "Client updated",
                    extra={"client_id": str(client_id), "fields": sorted(updates)},
                )
            return client_to_dict(client)
        except BackOfficeError:
            raise
        except Exception as e:
            logger.error(
                "Failed to update client",
                extra={"error": str(e), "client_id": str(client_id)},
            )
            raise

    async def delete_client(self, client_id: UUID) -> None:
        """
        Permanently delete a client.

        Raises:
            ResourceNotFoundError: If client not found
            ConflictError: If contracts still reference the client
        """
        await self._get_or_404(client_id)
        if await client_crud.has_contracts(self.db, client_id):
            raise ConflictError(
                "Client has contracts and cannot be deleted",
                details={"client_id": str(client_id)},
            )
        await client_crud.delete_by_id(self.db, client_id)
        logger.info("Client deleted", extra={"client_id": str(client_id)})

    async def get_client_service_scopes(self, client_id: UUID) -> list[dict]:
        """
        Active service scopes across all of a client's contracts.

        Raises:
            ResourceNotFoundError: If client not found
        """
        await self._get_or_404(client_id)
        scopes = await service_scope_crud.list_active_for_client(self.db, client_id)
        return [
            {
                "id": scope.id,
                "contract_id": scope.contract_id,
                "contract_name": scope.contract.contract_name,
                "service_id": scope.service_id,
                "service_name": scope.service.name,
                "price": to_float(scope.price),
                "quantity": scope.quantity,
                "unit": scope.unit,
                "total_value": to_float(scope.total_value),
                "saf_status": scope.saf_status,
                "saf_service_start_date": scope.saf_service_start_date,
                "saf_service_end_date": scope.saf_service_end_date,
                "scope_details": scope.scope_details,
                "created_at": scope.created_at,
            }
            for scope in scopes
        ]

    async def export_clients_csv(self, filters: ClientFilters) -> str:
        """
        Render the filtered client list as CSV.

        Args:
            filters: ClientFilters

        Returns:
            str: CSV text with a header row
        """
        clients = await client_crud.list_for_export(self.db, filters, max_rows=EXPORT_MAX_ROWS)

        buffer = io.StringIO()
        writer = csv.writer(buffer)
        writer.writerow(EXPORT_COLUMNS)
        for client in clients:
            writer.writerow(
                [
                    client.company_name,
                    client.contact_name,
                    client.contact_email,
                    client.contact_phone or "",
                    client.address or "",
                    client.status.value,
                    client.created_at.date().isoformat(),
                    client.updated_at.date().isoformat(),
                    client.notes or "",
                ]
            )

        logger.info("Clients exported", extra={"rows": len(clients)})
        return buffer.getvalue()
