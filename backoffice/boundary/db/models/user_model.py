"""
User ORM model.

Back-office staff accounts used for authentication and team assignment.

Dependencies: sqlalchemy, backoffice.boundary.db.base
System role: Staff identity persistence
"""

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from backoffice.boundary.db.base import Base, UUIDMixin, TimestampMixin, enum_column_type
from backoffice.core.enums import UserRole


class UserModel(Base, UUIDMixin, TimestampMixin):
    """
    Staff user account.

    Attributes:
        first_name: Given name
        last_name: Family name
        email: Login email, stored lower-cased (unique)
        password_hash: bcrypt hash, never returned by the API
        role: Authorization role (default engineer)
        is_active: Inactive users cannot log in
    """

    __tablename__ = "users"

    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[UserRole] = mapped_column(
        enum_column_type(UserRole),
        nullable=False,
        default=UserRole.ENGINEER,
    )
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
