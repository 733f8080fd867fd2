"""
Contract ORM model.

Commercial agreement between the MSSP and a client. Renewals point
back at the contract they replace.

Dependencies: sqlalchemy, backoffice.boundary.db.base
System role: Contract persistence
"""

import uuid
from datetime import date
from decimal import Decimal

from sqlalchemy import Date, ForeignKey, Numeric, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from backoffice.boundary.db.base import Base, UUIDMixin, TimestampMixin, enum_column_type
from backoffice.core.enums import ACTIVE_CONTRACT_STATUSES, ContractStatus

EXPIRING_SOON_DAYS = 30


class ContractModel(Base, UUIDMixin, TimestampMixin):
    """
    Client contract.

    Attributes:
        contract_name: Human-readable contract name (unique)
        client_id: Owning client (RESTRICT on delete)
        start_date: First day of coverage
        end_date: Last day of coverage, strictly after start_date
        renewal_date: Optional planned renewal date
        value: Total contract value
        status: Lifecycle status (default draft)
        document_link: Optional URL to the signed document
        notes: Free-form notes
        previous_contract_id: Contract this one renews (SET NULL on delete)

    Relationships:
        client: Many-to-one with ClientModel, eagerly loaded
    """

    __tablename__ = "contracts"

    contract_name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    client_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("clients.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    renewal_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    value: Mapped[Decimal | None] = mapped_column(Numeric(15, 2), nullable=True)
    status: Mapped[ContractStatus] = mapped_column(
        enum_column_type(ContractStatus),
        nullable=False,
        default=ContractStatus.DRAFT,
        index=True,
    )
    document_link: Mapped[str | None] = mapped_column(String(500), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    previous_contract_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("contracts.id", ondelete="SET NULL"),
        nullable=True,
    )

    client = relationship("ClientModel", lazy="selectin")

    @property
    def is_active(self) -> bool:
        today = date.today()
        return self.status in ACTIVE_CONTRACT_STATUSES and self.start_date <= today <= self.end_date

    @property
    def days_until_expiration(self) -> int:
        return (self.end_date - date.today()).days

    @property
    def is_expiring_soon(self) -> bool:
        return 0 <= self.days_until_expiration <= EXPIRING_SOON_DAYS

    @property
    def duration_days(self) -> int:
        return (self.end_date - self.start_date).days

    @property
    def is_renewal(self) -> bool:
        return self.previous_contract_id is not None
