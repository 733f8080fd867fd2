"""
Hardware asset ORM model.

Inventory of physical devices the MSSP deploys at client sites.

Dependencies: sqlalchemy, backoffice.boundary.db.base
System role: Hardware inventory persistence
"""

from datetime import date
from decimal import Decimal

from sqlalchemy import Date, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from backoffice.boundary.db.base import Base, UUIDMixin, TimestampMixin, enum_column_type
from backoffice.core.enums import AVAILABLE_ASSET_STATUSES, HardwareAssetStatus, HardwareAssetType


class HardwareAssetModel(Base, UUIDMixin, TimestampMixin):
    """
    Physical hardware asset.

    Attributes:
        asset_tag: Internal inventory tag (unique)
        serial_number: Manufacturer serial (unique when present)
        device_name: Optional hostname/label
        manufacturer: Vendor
        model: Vendor model
        asset_type: Device classification
        status: Inventory status (default in_stock)
        purchase_date: Date of purchase
        purchase_cost: Acquisition cost
        warranty_expiry_date: Warranty end
        location: Storage or deployment location
        notes: Free-form notes
    """

    __tablename__ = "hardware_assets"

    asset_tag: Mapped[str] = mapped_column(String(100), nullable=False, unique=True, index=True)
    serial_number: Mapped[str | None] = mapped_column(String(255), nullable=True, unique=True)
    device_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    manufacturer: Mapped[str | None] = mapped_column(String(100), nullable=True)
    model: Mapped[str | None] = mapped_column(String(100), nullable=True)
    asset_type: Mapped[HardwareAssetType] = mapped_column(
        enum_column_type(HardwareAssetType),
        nullable=False,
    )
    status: Mapped[HardwareAssetStatus] = mapped_column(
        enum_column_type(HardwareAssetStatus),
        nullable=False,
        default=HardwareAssetStatus.IN_STOCK,
        index=True,
    )
    purchase_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    purchase_cost: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), nullable=True)
    warranty_expiry_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    @property
    def is_available(self) -> bool:
        return self.status in AVAILABLE_ASSET_STATUSES
