"""
Service scope ORM model.

Line item of a contract: one catalog service with its price, quantity,
scope parameters and Service Activation Form (SAF) workflow state.

Dependencies: sqlalchemy, backoffice.boundary.db.base
System role: Contract line item persistence
"""

import uuid
from datetime import date
from decimal import Decimal

from sqlalchemy import Boolean, Date, ForeignKey, Integer, JSON, Numeric, String, Text, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from backoffice.boundary.db.base import Base, UUIDMixin, TimestampMixin, enum_column_type
from backoffice.core.enums import ACTIVE_SAF_STATUSES, SAFStatus


class ServiceScopeModel(Base, UUIDMixin, TimestampMixin):
    """
    Service included in a contract.

    Attributes:
        contract_id: Parent contract (CASCADE on delete)
        service_id: Catalog service (RESTRICT on delete)
        scope_details: JSON parameters validated against the service template
        price: Unit price
        quantity: Units (treated as 1 when empty)
        unit: Unit label (e.g. "endpoints")
        notes: Free-form notes
        is_active: Soft-delete flag
        saf_document_link: Optional URL of the SAF document
        saf_service_start_date: Service start per SAF
        saf_service_end_date: Service end per SAF
        saf_status: SAF workflow state (default not_initiated)

    Constraints:
        (contract_id, service_id): A service appears at most once per contract
    """

    __tablename__ = "service_scopes"
    __table_args__ = (
        UniqueConstraint("contract_id", "service_id", name="uq_service_scope_contract_service"),
    )

    contract_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("contracts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    service_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("services.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    scope_details: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    price: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), nullable=True)
    quantity: Mapped[int | None] = mapped_column(Integer, nullable=True)
    unit: Mapped[str | None] = mapped_column(String(50), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    saf_document_link: Mapped[str | None] = mapped_column(String(500), nullable=True)
    saf_service_start_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    saf_service_end_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    saf_status: Mapped[SAFStatus] = mapped_column(
        enum_column_type(SAFStatus),
        nullable=False,
        default=SAFStatus.NOT_INITIATED,
    )

    contract = relationship("ContractModel", lazy="selectin")
    service = relationship("ServiceModel", lazy="selectin")

    @property
    def total_value(self) -> Decimal | None:
        if self.price is None:
            return None
        return self.price * (self.quantity or 1)

    @property
    def is_saf_active(self) -> bool:
        return self.saf_status in ACTIVE_SAF_STATUSES
