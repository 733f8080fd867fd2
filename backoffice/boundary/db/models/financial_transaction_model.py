"""
Financial transaction ORM model.

Revenue and cost bookkeeping entries, optionally linked to the client,
contract, service scope or asset they relate to.

Dependencies: sqlalchemy, backoffice.boundary.db.base
System role: Financial ledger persistence
"""

import uuid
from datetime import date
from decimal import Decimal

from sqlalchemy import CheckConstraint, Date, ForeignKey, Numeric, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from backoffice.boundary.db.base import Base, UUIDMixin, TimestampMixin, enum_column_type
from backoffice.core.enums import FinancialTransactionStatus, FinancialTransactionType


class FinancialTransactionModel(Base, UUIDMixin, TimestampMixin):
    """
    Ledger entry.

    Attributes:
        type: Revenue/cost category
        amount: Positive amount
        currency: ISO 4217 code (default SAR)
        transaction_date: Booking date
        description: What the entry is for
        status: Settlement status
        reference_id: External reference (invoice number, PO, ...)
        notes: Free-form notes
        due_date: Payment due date
        client_id / contract_id / service_scope_id / hardware_asset_id: Optional links (SET NULL)
        recorded_by_user_id: Staff member who recorded it (RESTRICT)
    """

    __tablename__ = "financial_transactions"
    __table_args__ = (CheckConstraint("amount > 0", name="ck_financial_transaction_amount_positive"),)

    type: Mapped[FinancialTransactionType] = mapped_column(
        enum_column_type(FinancialTransactionType),
        nullable=False,
        index=True,
    )
    amount: Mapped[Decimal] = mapped_column(Numeric(15, 2), nullable=False)
    currency: Mapped[str] = mapped_column(String(3), nullable=False, default="SAR")
    transaction_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[FinancialTransactionStatus] = mapped_column(
        enum_column_type(FinancialTransactionStatus),
        nullable=False,
        index=True,
    )
    reference_id: Mapped[str | None] = mapped_column(String(100), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    due_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    client_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("clients.id", ondelete="SET NULL"), nullable=True, index=True
    )
    contract_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("contracts.id", ondelete="SET NULL"), nullable=True, index=True
    )
    service_scope_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("service_scopes.id", ondelete="SET NULL"), nullable=True
    )
    hardware_asset_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("hardware_assets.id", ondelete="SET NULL"), nullable=True
    )
    recorded_by_user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="RESTRICT"), nullable=False
    )

    client = relationship("ClientModel", lazy="selectin")
    contract = relationship("ContractModel", lazy="selectin")
    recorded_by = relationship("UserModel", lazy="selectin")

    @property
    def is_revenue(self) -> bool:
        return self.type.is_revenue

    @property
    def is_cost(self) -> bool:
        return self.type.is_cost

    @property
    def is_overdue(self) -> bool:
        return (
            self.due_date is not None
            and self.due_date < date.today()
            and self.status == FinancialTransactionStatus.PENDING
        )
