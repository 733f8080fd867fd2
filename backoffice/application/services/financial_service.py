"""
Financial transaction service orchestrator.

Records revenue and cost transactions against clients, contracts,
service scopes and hardware, and summarizes them.

Dependencies: backoffice.boundary.db.CRUD, backoffice.core
System role: Financial ledger use case orchestration
"""

import logging
from datetime import date
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.application.services.serializers import (
    financial_transaction_to_dict,
    page_to_dict,
    to_float,
)
from backoffice.boundary.db.CRUD.base_crud import BaseCRUD
from backoffice.boundary.db.CRUD.client_crud import client_crud
from backoffice.boundary.db.CRUD.contract_crud import contract_crud
from backoffice.boundary.db.CRUD.financial_transaction_crud import (
    TransactionFilters,
    financial_transaction_crud,
)
from backoffice.boundary.db.CRUD.hardware_asset_crud import hardware_asset_crud
from backoffice.boundary.db.CRUD.service_scope_crud import service_scope_crud
from backoffice.core.exceptions import BackOfficeError, BusinessRuleError, ResourceNotFoundError

logger = logging.getLogger(__name__)

# Optional foreign keys checked before writes: field -> (label, crud)
REFERENCE_CHECKS: dict[str, tuple[str, BaseCRUD]] = {
    "client_id": ("Client", client_crud),
    "contract_id": ("Contract", contract_crud),
    "service_scope_id": ("Service scope", service_scope_crud),
    "hardware_asset_id": ("Hardware asset", hardware_asset_crud),
}


class FinancialService:
    """Financial transaction service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize financial service with async database session.

        Args:
            db: Async SQLAlchemy session
        """
        self.db = db

    async def _get_or_404(self, transaction_id: UUID, refresh: bool = False):
        transaction = await financial_transaction_crud.get_by_id(self.db, transaction_id, refresh=refresh)
        if transaction is None:
            raise ResourceNotFoundError("Financial transaction", transaction_id)
        return transaction

    async def _validate_references(self, fields: dict[str, Any]) -> None:
        """
        Check that every referenced entity exists.

        Raises:
            BusinessRuleError: "<Entity> with ID ... not found"
        """
        for field, (label, crud) in REFERENCE_CHECKS.items():
            ref_id = fields.get(field)
            if ref_id is not None and not await crud.exists(self.db, ref_id):
                raise BusinessRuleError(f"{label} with ID {ref_id} not found", details={field: str(ref_id)})

    async def create_transaction(self, recorded_by_user_id: UUID, **fields: Any) -> dict:
        """
        Record a transaction.

        Args:
            recorded_by_user_id: Authenticated user recording the transaction
            **fields: Transaction column values

        Returns:
            dict: Created transaction

        Raises:
            BusinessRuleError: If a referenced entity does not exist
        """
        try:
            await self._validate_references(fields)
            transaction = await financial_transaction_crud.create(
                self.db, recorded_by_user_id=recorded_by_user_id, **fields
            )
            transaction = await self._get_or_404(transaction.id, refresh=True)
            logger.info(
                "Financial transaction recorded",
                extra={
                    "transaction_id": str(transaction.id),
                    "type": transaction.type.value,
                    "amount": str(transaction.amount),
                    "currency": transaction.currency,
                    "recorded_by_user_id": str(recorded_by_user_id),
                },
            )
            return financial_transaction_to_dict(transaction)
        except BackOfficeError:
            raise
        except Exception as e:
            logger.error(
                "Failed to record financial transaction",
                extra={"error": str(e), "recorded_by_user_id": str(recorded_by_user_id)},
            )
            raise

    async def list_transactions(self, filters: TransactionFilters, page: int = 1, limit: int = 20) -> dict:
        """List transactions, newest transaction date first."""
        transactions, total = await financial_transaction_crud.list_filtered(
            self.db, filters, page=page, limit=limit
        )
        return page_to_dict([financial_transaction_to_dict(t) for t in transactions], total, page, limit)

    async def get_transaction(self, transaction_id: UUID) -> dict:
        """
        Get a transaction.

        Raises:
            ResourceNotFoundError: If the transaction does not exist
        """
        return financial_transaction_to_dict(await self._get_or_404(transaction_id))

    async def update_transaction(self, transaction_id: UUID, **updates: Any) -> dict:
        """
        Update a transaction, re-validating changed references.

        Raises:
            ResourceNotFoundError: If the transaction does not exist
            BusinessRuleError: If a referenced entity does not exist
        """
        try:
            transaction = await self._get_or_404(transaction_id)
            await self._validate_references(updates)
            if updates:
                await financial_transaction_crud.update_instance(self.db, transaction, **updates)
                transaction = await self._get_or_404(transaction_id, refresh=True)
                logger.info(
                    "Financial transaction updated",
                    extra={"transaction_id": str(transaction_id), "fields": sorted(updates)},
                )
            return financial_transaction_to_dict(transaction)
        except BackOfficeError:
            raise
        except Exception as e:
            logger.error(
                "Failed to update financial transaction",
                extra={"error": str(e), "transaction_id": str(transaction_id)},
            )
            raise

    async def delete_transaction(self, transaction_id: UUID) -> None:
        """
        Permanently delete a transaction.

        Raises:
            ResourceNotFoundError: If the transaction does not exist
        """
        await self._get_or_404(transaction_id)
        await financial_transaction_crud.delete_by_id(self.db, transaction_id)
        logger.info("Financial transaction deleted", extra={"transaction_id": str(transaction_id)})

    async def get_summary(
        self,
        client_id: UUID | None = None,
        contract_id: UUID | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> dict:
        """
        Revenue and cost totals.

        Cancelled, failed and refunded transactions are left out of both
        the totals and the count. OTHER transactions are counted but are
        neither revenue nor cost.

        Returns:
            dict with total_revenue, total_costs, net_profit, transaction_count
        """
        filters = TransactionFilters(
            client_id=client_id,
            contract_id=contract_id,
            date_from=date_from,
            date_to=date_to,
        )
        revenue, costs, count = await financial_transaction_crud.summarize(self.db, filters)

        return {
            "total_revenue": to_float(revenue),
            "total_costs": to_float(costs),
            "net_profit": to_float(revenue - costs),
            "transaction_count": count,
        }
