"""
Data source query ORM model.

Named, parameterised request against an external data source plus the
JSONPath used to pull a value out of its response.

Dependencies: sqlalchemy, backoffice.boundary.db.base
System role: Integration query persistence
"""

import uuid

from sqlalchemy import Boolean, ForeignKey, Integer, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from backoffice.boundary.db.base import Base, UUIDMixin, TimestampMixin, enum_column_type
from backoffice.core.enums import ExpectedResponseType, HttpMethod


class DataSourceQueryModel(Base, UUIDMixin, TimestampMixin):
    """
    External data query.

    Attributes:
        query_name: Lookup key used by the data endpoint (unique)
        data_source_id: Owning data source (CASCADE on delete)
        description: Optional description
        endpoint_path: Path appended to the source base_url, may contain {placeholders}
        http_method: GET or POST
        query_template: Query string (GET) or JSON body (POST) template
        response_extraction_path: JSONPath starting with "$"
        expected_response_type: Type the extracted value is coerced to
        cache_ttl_seconds: Result cache lifetime, 0 disables caching
        is_active: Inactive queries cannot be fetched
        notes: Free-form notes
    """

    __tablename__ = "data_source_queries"

    query_name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    data_source_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("external_data_sources.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    endpoint_path: Mapped[str] = mapped_column(String(1000), nullable=False)
    http_method: Mapped[HttpMethod] = mapped_column(
        enum_column_type(HttpMethod, length=10),
        nullable=False,
        default=HttpMethod.GET,
    )
    query_template: Mapped[str | None] = mapped_column(Text, nullable=True)
    response_extraction_path: Mapped[str] = mapped_column(String(500), nullable=False)
    expected_response_type: Mapped[ExpectedResponseType] = mapped_column(
        enum_column_type(ExpectedResponseType),
        nullable=False,
    )
    cache_ttl_seconds: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    data_source = relationship("ExternalDataSourceModel", lazy="selectin")
