"""
Integration tests for financial transactions and summaries.

System role: Verification of reference checks and summary exclusions
"""

import uuid
from datetime import date
from decimal import Decimal

import pytest

from backoffice.application.services import FinancialService
from backoffice.boundary.db.CRUD import TransactionFilters, financial_transaction_crud
from backoffice.core.enums import FinancialTransactionStatus, FinancialTransactionType
from backoffice.core.exceptions import BusinessRuleError


@pytest.fixture
def financial_service(test_async_db) -> FinancialService:
    return FinancialService(test_async_db)


async def record(service, user_id, transaction_type, amount, status, **extra) -> dict:
    return await service.create_transaction(
        user_id,
        type=transaction_type,
        amount=Decimal(amount),
        currency="SAR",
        transaction_date=extra.pop("transaction_date", date(2025, 3, 1)),
        description=f"{transaction_type.value} {amount}",
        status=status,
        **extra,
    )


class TestCreateTransaction:
    @pytest.mark.asyncio
    async def test_records_user_and_client(self, financial_service, seeded_user, seeded_client):
        result = await record(
            financial_service,
            seeded_user.id,
            FinancialTransactionType.REVENUE_CONTRACT_PAYMENT,
            "5000.00",
            FinancialTransactionStatus.PAID,
            client_id=seeded_client.id,
        )

        assert result["recorded_by_user_id"] == seeded_user.id
        assert result["recorded_by_name"] == "Sara Engineer"
        assert result["client_name"] == "Acme Security"
        assert result["is_revenue"] is True

    @pytest.mark.asyncio
    async def test_unknown_contract_is_rejected(self, financial_service, seeded_user):
        with pytest.raises(BusinessRuleError):
            await record(
                financial_service,
                seeded_user.id,
                FinancialTransactionType.REVENUE_CONTRACT_PAYMENT,
                "100.00",
                FinancialTransactionStatus.PENDING,
                contract_id=uuid.uuid4(),
            )


class TestSummary:
    @pytest.mark.asyncio
    async def test_summary_excludes_cancelled_failed_and_refunded(self, financial_service, seeded_user):
        revenue = FinancialTransactionType.REVENUE_CONTRACT_PAYMENT
        cost = FinancialTransactionType.COST_LICENSE_PURCHASE
        await record(financial_service, seeded_user.id, revenue, "7000.00", FinancialTransactionStatus.PAID)
        await record(financial_service, seeded_user.id, revenue, "1000.00", FinancialTransactionStatus.CANCELLED)
        await record(financial_service, seeded_user.id, revenue, "500.00", FinancialTransactionStatus.REFUNDED)
        await record(financial_service, seeded_user.id, cost, "2000.00", FinancialTransactionStatus.COMPLETED)
        await record(financial_service, seeded_user.id, cost, "300.00", FinancialTransactionStatus.FAILED)
        await record(
            financial_service, seeded_user.id, FinancialTransactionType.OTHER, "50.00", FinancialTransactionStatus.PAID
        )

        summary = await financial_service.get_summary()

        assert summary == {
            "total_revenue": 7000.0,
            "total_costs": 2000.0,
            "net_profit": 5000.0,
            "transaction_count": 3,
        }

    @pytest.mark.asyncio
    async def test_summary_honours_date_range(self, financial_service, seeded_user):
        revenue = FinancialTransactionType.REVENUE_SUPPORT
        await record(
            financial_service,
            seeded_user.id,
            revenue,
            "100.00",
            FinancialTransactionStatus.PAID,
            transaction_date=date(2025, 1, 15),
        )
        await record(
            financial_service,
            seeded_user.id,
            revenue,
            "200.00",
            FinancialTransactionStatus.PAID,
            transaction_date=date(2025, 2, 15),
        )

        summary = await financial_service.get_summary(date_from=date(2025, 2, 1), date_to=date(2025, 2, 28))

        assert summary["total_revenue"] == 200.0
        assert summary["transaction_count"] == 1

    @pytest.mark.asyncio
    async def test_summary_of_empty_ledger_is_zero(self, financial_service):
        summary = await financial_service.get_summary()

        assert summary == {
            "total_revenue": 0.0,
            "total_costs": 0.0,
            "net_profit": 0.0,
            "transaction_count": 0,
        }

    @pytest.mark.asyncio
    async def test_crud_aggregate_filters_by_client(
        self, test_async_db, financial_service, seeded_user, seeded_client
    ):
        # Arrange
        revenue = FinancialTransactionType.REVENUE_LICENSE_SALE
        cost = FinancialTransactionType.COST_HARDWARE_PURCHASE
        await record(
            financial_service,
            seeded_user.id,
            revenue,
            "900.00",
            FinancialTransactionStatus.PAID,
            client_id=seeded_client.id,
        )
        await record(
            financial_service,
            seeded_user.id,
            cost,
            "250.00",
            FinancialTransactionStatus.PENDING,
            client_id=seeded_client.id,
        )
        await record(financial_service, seeded_user.id, revenue, "400.00", FinancialTransactionStatus.PAID)

        # Act
        total_revenue, total_costs, count = await financial_transaction_crud.summarize(
            test_async_db, TransactionFilters(client_id=seeded_client.id)
        )

        # Assert
        assert total_revenue == Decimal("900")
        assert total_costs == Decimal("250")
        assert count == 2
