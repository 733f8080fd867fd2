"""
Client hardware assignment ORM model.

Records which asset is deployed at which client, optionally tied to
the service scope it supports.

Dependencies: sqlalchemy, backoffice.boundary.db.base
System role: Hardware deployment history persistence
"""

import uuid
from datetime import date

from sqlalchemy import Date, ForeignKey, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from backoffice.boundary.db.base import Base, UUIDMixin, TimestampMixin, enum_column_type
from backoffice.core.enums import HardwareAssignmentStatus


class ClientHardwareAssignmentModel(Base, UUIDMixin, TimestampMixin):
    """
    Assignment of a hardware asset to a client.

    At most one ACTIVE assignment exists per asset; the service layer
    enforces this before inserting.

    Attributes:
        hardware_asset_id: Assigned asset (CASCADE on delete)
        client_id: Receiving client (CASCADE on delete)
        service_scope_id: Optional supporting service scope (SET NULL on delete)
        assignment_date: Deployment date
        return_date: Date the asset came back
        status: Assignment state (default active)
        notes: Free-form notes
    """

    __tablename__ = "client_hardware_assignments"

    hardware_asset_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("hardware_assets.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    client_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("clients.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    service_scope_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("service_scopes.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    assignment_date: Mapped[date] = mapped_column(Date, nullable=False)
    return_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    status: Mapped[HardwareAssignmentStatus] = mapped_column(
        enum_column_type(HardwareAssignmentStatus),
        nullable=False,
        default=HardwareAssignmentStatus.ACTIVE,
        index=True,
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    hardware_asset = relationship("HardwareAssetModel", lazy="selectin")
    client = relationship("ClientModel", lazy="selectin")
    service_scope = relationship("ServiceScopeModel", lazy="selectin")
