"""
Client team assignment ORM model.

Links staff users to client accounts in a given role.

Dependencies: sqlalchemy, backoffice.boundary.db.base
System role: Account team persistence
"""

import uuid
from datetime import date

from sqlalchemy import Boolean, CheckConstraint, Date, ForeignKey, Integer, Text, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from backoffice.boundary.db.base import Base, UUIDMixin, TimestampMixin, enum_column_type
from backoffice.core.enums import ClientAssignmentRole


class ClientTeamAssignmentModel(Base, UUIDMixin, TimestampMixin):
    """
    Staff member assigned to a client account.

    Attributes:
        user_id: Assigned user (CASCADE on delete)
        client_id: Client account (CASCADE on delete)
        assignment_role: Role on the account
        assignment_date: Start of the assignment
        end_date: Optional end, strictly after assignment_date
        is_active: Soft-delete flag
        notes: Free-form notes
        priority: 1 (highest) to 10

    Constraints:
        (user_id, client_id, assignment_role): one row per user/client/role
    """

    __tablename__ = "client_team_assignments"
    __table_args__ = (
        UniqueConstraint("user_id", "client_id", "assignment_role", name="uq_team_assignment_user_client_role"),
        CheckConstraint("priority >= 1 AND priority <= 10", name="ck_team_assignment_priority_range"),
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    client_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("clients.id", ondelete="CASCADE"), nullable=False, index=True
    )
    assignment_role: Mapped[ClientAssignmentRole] = mapped_column(
        enum_column_type(ClientAssignmentRole),
        nullable=False,
    )
    assignment_date: Mapped[date] = mapped_column(Date, nullable=False, default=date.today)
    end_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, index=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    priority: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    user = relationship("UserModel", lazy="selectin")
    client = relationship("ClientModel", lazy="selectin")
