"""
External data source ORM model.

Connection settings for an external REST API the back office polls.

Dependencies: sqlalchemy, backoffice.boundary.db.base
System role: Integration endpoint persistence
"""

from sqlalchemy import Boolean, JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from backoffice.boundary.db.base import Base, UUIDMixin, TimestampMixin, enum_column_type
from backoffice.core.enums import ExternalApiAuthenticationType, ExternalSystemType


class ExternalDataSourceModel(Base, UUIDMixin, TimestampMixin):
    """
    External API connection.

    Attributes:
        name: Display name (unique)
        system_type: Kind of system
        base_url: Root URL requests are built from
        authentication_type: Auth scheme applied to requests
        credentials_encrypted: AES-256-GCM encrypted credentials JSON
        default_headers: Headers sent with every request
        description: Optional description
        is_active: Inactive sources are never called
    """

    __tablename__ = "external_data_sources"

    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    system_type: Mapped[ExternalSystemType] = mapped_column(
        enum_column_type(ExternalSystemType),
        nullable=False,
    )
    base_url: Mapped[str] = mapped_column(String(500), nullable=False)
    authentication_type: Mapped[ExternalApiAuthenticationType] = mapped_column(
        enum_column_type(ExternalApiAuthenticationType),
        nullable=False,
        default=ExternalApiAuthenticationType.NONE,
    )
    credentials_encrypted: Mapped[str | None] = mapped_column(Text, nullable=True)
    default_headers: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
