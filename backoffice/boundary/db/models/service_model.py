"""
Service catalog ORM model.

Services the MSSP offers; contracts include them through service scopes.

Dependencies: sqlalchemy, backoffice.boundary.db.base
System role: Service catalog persistence
"""

from decimal import Decimal

from sqlalchemy import Boolean, JSON, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from backoffice.boundary.db.base import Base, UUIDMixin, TimestampMixin, enum_column_type
from backoffice.core.enums import ServiceCategory, ServiceDeliveryModel


class ServiceModel(Base, UUIDMixin, TimestampMixin):
    """
    Catalog service.

    Attributes:
        name: Service name (unique)
        description: Optional description
        category: Catalog category
        delivery_model: How the service is delivered
        base_price: Optional list price
        is_active: Inactive services cannot be added to contracts
        scope_definition_template: JSON form template describing scope_details fields
    """

    __tablename__ = "services"

    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    category: Mapped[ServiceCategory] = mapped_column(
        enum_column_type(ServiceCategory),
        nullable=False,
        default=ServiceCategory.OTHER,
    )
    delivery_model: Mapped[ServiceDeliveryModel | None] = mapped_column(
        enum_column_type(ServiceDeliveryModel),
        nullable=True,
    )
    base_price: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, index=True)
    scope_definition_template: Mapped[dict | None] = mapped_column(JSON, nullable=True)
