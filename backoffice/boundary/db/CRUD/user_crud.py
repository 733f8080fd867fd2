"""
User CRUD operations.

Dependencies: sqlalchemy, backoffice.boundary.db.models
System role: Staff account persistence operations
"""

from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.boundary.db.CRUD.base_crud import BaseCRUD
from backoffice.boundary.db.models.user_model import UserModel
from backoffice.core.enums import UserRole


class UserCRUD(BaseCRUD[UserModel]):
    """CRUD operations for UserModel."""

    def __init__(self) -> None:
        """Initialize UserCRUD with UserModel."""
        super().__init__(UserModel)

    async def get_by_email(self, session: AsyncSession, email: str) -> UserModel | None:
        """
        Retrieve a user by email, case-insensitively.

        Args:
            session: Async database session
            email: Login email

        Returns:
            UserModel if found, None otherwise
        """
        stmt = select(UserModel).where(UserModel.email == email.strip().lower())
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_filtered(
        self,
        session: AsyncSession,
        role: UserRole | None = None,
        is_active: bool | None = None,
        page: int = 1,
        limit: int = 20,
    ) -> tuple[Sequence[UserModel], int]:
        """List users ordered by last then first name."""
        stmt = select(UserModel)
        if role is not None:
            stmt = stmt.where(UserModel.role == role)
        if is_active is not None:
            stmt = stmt.where(UserModel.is_active == is_active)
        stmt = stmt.order_by(UserModel.last_name, UserModel.first_name)
        return await self.paginate(session, stmt, page, limit)


user_crud = UserCRUD()
