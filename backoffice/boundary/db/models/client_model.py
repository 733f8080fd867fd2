"""
Client ORM model.

Customer organisations the MSSP contracts with.

Dependencies: sqlalchemy, backoffice.boundary.db.base
System role: Client relationship persistence
"""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from backoffice.boundary.db.base import Base, UUIDMixin, TimestampMixin, enum_column_type
from backoffice.core.enums import ClientSourceType, ClientStatus


class ClientModel(Base, UUIDMixin, TimestampMixin):
    """
    Client organisation.

    Attributes:
        company_name: Legal/company name (unique)
        contact_name: Primary contact person
        contact_email: Primary contact email
        contact_phone: Optional phone number
        address: Optional postal address
        industry: Optional industry vertical
        website: Optional website URL
        notes: Free-form notes
        status: Lifecycle status (default prospect)
        client_source: Acquisition channel
    """

    __tablename__ = "clients"

    company_name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    contact_name: Mapped[str] = mapped_column(String(100), nullable=False)
    contact_email: Mapped[str] = mapped_column(String(255), nullable=False)
    contact_phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    industry: Mapped[str | None] = mapped_column(String(100), nullable=True)
    website: Mapped[str | None] = mapped_column(String(255), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[ClientStatus] = mapped_column(
        enum_column_type(ClientStatus),
        nullable=False,
        default=ClientStatus.PROSPECT,
        index=True,
    )
    client_source: Mapped[ClientSourceType | None] = mapped_column(
        enum_column_type(ClientSourceType),
        nullable=True,
    )

    @property
    def is_active(self) -> bool:
        return self.status in (ClientStatus.ACTIVE, ClientStatus.RENEWED)
