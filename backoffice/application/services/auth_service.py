"""
Authentication service.

Registers staff users, verifies credentials and issues access tokens.

Dependencies: backoffice.boundary.db.CRUD, backoffice.core.security
System role: Authentication use case orchestration
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.application.services.serializers import page_to_dict, user_to_dict
from backoffice.boundary.db.CRUD.user_crud import user_crud
from backoffice.configs.auth import AuthSettings
from backoffice.core.enums import UserRole
from backoffice.core.exceptions import (
    AuthenticationError,
    BackOfficeError,
    ConflictError,
    ResourceNotFoundError,
)
from backoffice.core.security import create_access_token, hash_password, verify_password

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"


class AuthService:
    """Authentication and user account orchestrator."""

    def __init__(self, db: AsyncSession, settings: AuthSettings) -> None:
        """
        Initialize auth service.

        Args:
            db: Async SQLAlchemy session
            settings: JWT and bcrypt settings
        """
        self.db = db
        self.settings = settings

    async def register(
        self,
        first_name: str,
        last_name: str,
        email: str,
        password: str,
        role: UserRole = UserRole.ENGINEER,
    ) -> dict:
        """
        Create a staff user.

        Args:
            first_name: Given name
            last_name: Family name
            email: Login email (stored lower-cased)
            password: Plaintext password (hashed with bcrypt)
            role: Authorization role

        Returns:
            dict: Created user profile

        Raises:
            ConflictError: If the email is already registered
        """
        normalized_email = email.strip().lower()
        try:
            if await user_crud.get_by_email(self.db, normalized_email):
                raise ConflictError(
                    "A user with this email already exists",
                    details={"email": normalized_email},
                )

            user = await user_crud.create(
                self.db,
                first_name=first_name.strip(),
                last_name=last_name.strip(),
                email=normalized_email,
                password_hash=hash_password(password, self.settings.bcrypt_rounds),
                role=role,
                is_active=True,
            )
            logger.info("User registered", extra={"user_id": str(user.id), "role": role.value})
            return user_to_dict(user)
        except BackOfficeError:
            raise
        except Exception as e:
            logger.error("Failed to register user", extra={"error": str(e), "email": normalized_email})
            raise

    async def login(self, email: str, password: str) -> dict:
        """
        Verify credentials and issue an access token.

        Unknown emails, inactive users and wrong passwords all produce the
        same error so callers cannot probe which accounts exist.

        Args:
            email: Login email
            password: Plaintext password

        Returns:
            dict: access_token, token_type and user profile

        Raises:
            AuthenticationError: If credentials are invalid
        """
        user = await user_crud.get_by_email(self.db, email)
        if user is None or not user.is_active or not verify_password(password, user.password_hash):
            logger.warning("Login rejected", extra={"email": email.strip().lower()})
            raise AuthenticationError(INVALID_CREDENTIALS)

        token = create_access_token(user.id, user.email, user.role, self.settings)
        logger.info("User logged in", extra={"user_id": str(user.id)})
        return {"access_token": token, "token_type": "bearer", "user": user_to_dict(user)}

    async def get_user(self, user_id: UUID) -> dict:
        """
        Get a user profile.

        Raises:
            ResourceNotFoundError: If the user does not exist
        """
        user = await user_crud.get_by_id(self.db, user_id)
        if user is None:
            raise ResourceNotFoundError("User", user_id)
        return user_to_dict(user)

    async def list_users(
        self,
        role: UserRole | None = None,
        is_active: bool | None = None,
        page: int = 1,
        limit: int = 20,
    ) -> dict:
        """List users, one page at a time."""
        users, total = await user_crud.list_filtered(self.db, role=role, is_active=is_active, page=page, limit=limit)
        return page_to_dict([user_to_dict(u) for u in users], total, page, limit)

    async def update_user(
        self,
        user_id: UUID,
        role: UserRole | None = None,
        is_active: bool | None = None,
    ) -> dict:
        """
        Change a user's role or active flag.

        Raises:
            ResourceNotFoundError: If the user does not exist
        """
        user = await user_crud.get_by_id(self.db, user_id)
        if user is None:
            raise ResourceNotFoundError("User", user_id)

        updates = {}
        if role is not None:
            updates["role"] = role
        if is_active is not None:
            updates["is_active"] = is_active
        if updates:
            await user_crud.update_instance(self.db, user, **updates)
            logger.info(
                "User updated",
                extra={"user_id": str(user_id), "fields": sorted(updates)},
            )
        return user_to_dict(user)
