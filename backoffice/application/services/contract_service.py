"""
Contract service orchestrator.

Coordinates contract lifecycle, expiry listings and aggregates.

Dependencies: backoffice.boundary.db.CRUD, backoffice.core
System role: Contract use case orchestration
"""

import logging
from datetime import date
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.application.services.serializers import contract_to_dict, page_to_dict, to_float
from backoffice.boundary.db.CRUD.client_crud import client_crud
from backoffice.boundary.db.CRUD.contract_crud import contract_crud
from backoffice.boundary.db.models.contract_model import EXPIRING_SOON_DAYS
from backoffice.core.enums import CLOSED_CONTRACT_STATUSES, ContractStatus
from backoffice.core.exceptions import (
    BackOfficeError,
    BusinessRuleError,
    ConflictError,
    ResourceNotFoundError,
)

logger = logging.getLogger(__name__)


class ContractService:
    """Contract service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize contract service with async database session.

        Args:
            db: Async SQLAlchemy session
        """
        self.db = db

    async def _get_or_404(self, contract_id: UUID, refresh: bool = False):
        contract = await contract_crud.get_by_id(self.db, contract_id, refresh=refresh)
        if contract is None:
            raise ResourceNotFoundError("Contract", contract_id)
        return contract

    async def _to_dict(self, contract) -> dict:
        scope_count = await contract_crud.count_service_scopes(self.db, contract.id)
        return contract_to_dict(contract, service_scope_count=scope_count)

    async def _validate(
        self,
        client_id: UUID,
        contract_name: str,
        start_date: date,
        end_date: date,
        previous_contract_id: UUID | None,
        exclude_id: UUID | None = None,
    ) -> None:
        """
        Shared create/update checks on the effective contract values.

        Raises:
            BusinessRuleError: If end_date is not after start_date
            ResourceNotFoundError: If the client or previous contract is missing
            ConflictError: If the contract name is taken
        """
        if end_date <= start_date:
            raise BusinessRuleError(
                "End date must be after start date",
                details={"start_date": start_date.isoformat(), "end_date": end_date.isoformat()},
            )
        if not await client_crud.exists(self.db, client_id):
            raise ResourceNotFoundError("Client", client_id)
        if previous_contract_id is not None:
            if previous_contract_id == exclude_id:
                raise BusinessRuleError("A contract cannot renew itself")
            if not await contract_crud.exists(self.db, previous_contract_id):
                raise ResourceNotFoundError("Previous contract", previous_contract_id)
        if await contract_crud.exists_by(self.db, exclude_id=exclude_id, contract_name=contract_name):
            raise ConflictError(
                f"Contract with name '{contract_name}' already exists",
                details={"contract_name": contract_name},
            )

    async def create_contract(self, **fields: Any) -> dict:
        """
        Create a contract.

        Args:
            **fields: Contract column values

        Returns:
            dict: Created contract with derived fields

        Raises:
            ResourceNotFoundError: If the client or previous contract is missing
            ConflictError: If the contract name is taken
            BusinessRuleError: If end_date is not after start_date
        """
        try:
            await self._validate(
                client_id=fields["client_id"],
                contract_name=fields["contract_name"],
                start_date=fields["start_date"],
                end_date=fields["end_date"],
                previous_contract_id=fields.get("previous_contract_id"),
            )
            contract = await contract_crud.create(self.db, **fields)
            contract = await self._get_or_404(contract.id, refresh=True)

            logger.info(
                "Contract created",
                extra={
                    "contract_id": str(contract.id),
                    "client_id": str(contract.client_id),
                    "status": contract.status.value,
                },
            )
            return await self._to_dict(contract)
        except BackOfficeError:
            raise
        except Exception as e:
            logger.error(
                "Failed to create contract",
                extra={"error": str(e), "contract_name": fields.get("contract_name")},
            )
            raise

    async def list_contracts(
        self,
        client_id: UUID | None = None,
        status: ContractStatus | None = None,
        search: str | None = None,
        expiring_soon_days: int | None = None,
        page: int = 1,
        limit: int = 10,
    ) -> dict:
        """List contracts, newest first."""
        contracts, total = await contract_crud.list_filtered(
            self.db,
            client_id=client_id,
            status=status,
            search=search,
            expiring_soon_days=expiring_soon_days,
            page=page,
            limit=limit,
        )
        items = [await self._to_dict(c) for c in contracts]
        return page_to_dict(items, total, page, limit)

    async def get_contract(self, contract_id: UUID) -> dict:
        """
        Get a contract with client name and scope count.

        Raises:
            ResourceNotFoundError: If the contract does not exist
        """
        return await self._to_dict(await self._get_or_404(contract_id))

    async def update_contract(self, contract_id: UUID, **updates: Any) -> dict:
        """
        Update a contract, validating the merged values.

        Raises:
            ResourceNotFoundError: If the contract, client or previous contract is missing
            ConflictError: If the new name is taken
            BusinessRuleError: If the merged dates are out of order
        """
        try:
            contract = await self._get_or_404(contract_id)
            await self._validate(
                client_id=updates.get("client_id") or contract.client_id,
                contract_name=updates.get("contract_name") or contract.contract_name,
                start_date=updates.get("start_date") or contract.start_date,
                end_date=updates.get("end_date") or contract.end_date,
                previous_contract_id=updates.get("previous_contract_id", contract.previous_contract_id),
                exclude_id=contract_id,
            )

            if updates:
                await contract_crud.update_instance(self.db, contract, **updates)
                contract = await self._get_or_404(contract_id, refresh=True)
                logger.info(
                    "Contract updated",
                    extra={"contract_id": str(contract_id), "fields": sorted(updates)},
                )
            return await self._to_dict(contract)
        except BackOfficeError:
            raise
        except Exception as e:
            logger.error(
                "Failed to update contract",
                extra={"error": str(e), "contract_id": str(contract_id)},
            )
            raise

    async def terminate_contract(self, contract_id: UUID) -> dict:
        """
        Terminate a contract (soft delete).

        Raises:
            ResourceNotFoundError: If the contract does not exist
            BusinessRuleError: If the contract is already closed
        """
        contract = await self._get_or_404(contract_id)
        if contract.status in CLOSED_CONTRACT_STATUSES:
            raise BusinessRuleError(
                f"Contract is already {contract.status.value}",
                details={"contract_id": str(contract_id), "status": contract.status.value},
            )

        await contract_crud.update_instance(self.db, contract, status=ContractStatus.TERMINATED)
        logger.info("Contract terminated", extra={"contract_id": str(contract_id)})
        return await self._to_dict(contract)

    async def list_expiring(self, days: int = EXPIRING_SOON_DAYS) -> list[dict]:
        """Active or renewed-active contracts ending within the next N days."""
        contracts = await contract_crud.list_expiring(self.db, days=days)
        return [await self._to_dict(c) for c in contracts]

    async def get_statistics(self) -> dict:
        """Contract totals by status, plus active and expiring counts."""
        by_status = await contract_crud.count_by_status(self.db)
        active = await contract_crud.list_active(self.db)
        expiring = await contract_crud.list_expiring(self.db, days=EXPIRING_SOON_DAYS)
        return {
            "total": sum(by_status.values()),
            "by_status": by_status,
            "active_contracts": len(active),
            "expiring_contracts": len(expiring),
        }

    async def get_total_value(self, contract_id: UUID) -> dict:
        """
        Sum of price x quantity over the contract's active, priced scopes.

        Raises:
            ResourceNotFoundError: If the contract does not exist
        """
        await self._get_or_404(contract_id)
        total = await contract_crud.total_value(self.db, contract_id)
        return {"contract_id": contract_id, "total_value": to_float(total)}
