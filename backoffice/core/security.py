"""
Password hashing and access token utilities.

bcrypt for password storage and PyJWT (HS256) for stateless bearer tokens.

Dependencies: bcrypt, jwt (PyJWT), backoffice.configs
System role: Credential verification primitives for the auth layer
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from uuid import UUID

import bcrypt
import jwt

from backoffice.configs.auth import AuthSettings
from backoffice.core.enums import UserRole
from backoffice.core.exceptions import AuthenticationError


@dataclass(frozen=True)
class TokenPayload:
    """Claims carried by an access token."""

    user_id: UUID
    email: str
    role: UserRole


def hash_password(password: str, rounds: int = 12) -> str:
    """
    Hash a plaintext password with bcrypt.

    Args:
        password: Plaintext password
        rounds: bcrypt cost factor

    Returns:
        str: bcrypt hash (utf-8)
    """
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a plaintext password against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed stored hash
        return False


def create_access_token(user_id: UUID, email: str, role: UserRole, settings: AuthSettings) -> str:
    """
    Issue a signed access token.

    Args:
        user_id: Subject user UUID
        email: User email
        role: User role
        settings: AuthSettings with secret, algorithm and lifetime

    Returns:
        str: Encoded JWT with sub, email, role, iat and exp claims
    """
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "email": email,
        "role": role.value,
        "iat": now,
        "exp": now + timedelta(minutes=settings.expires_minutes),
    }
    return jwt.encode(payload, settings.secret, algorithm=settings.algorithm)


def decode_access_token(token: str, settings: AuthSettings) -> TokenPayload:
    """
    Validate a bearer token and return its claims.

    Args:
        token: Encoded JWT
        settings: AuthSettings with secret and algorithm

    Returns:
        TokenPayload: Parsed claims

    Raises:
        AuthenticationError: If the token is expired, tampered with or malformed
    """
    try:
        claims = jwt.decode(
            token,
            settings.secret,
            algorithms=[settings.algorithm],
            options={"require": ["sub", "exp", "iat"]},
        )
    except jwt.ExpiredSignatureError as e:
        raise AuthenticationError("Token has expired") from e
    except jwt.PyJWTError as e:
        raise AuthenticationError("Invalid token") from e

    try:
        return TokenPayload(
            user_id=UUID(claims["sub"]),
            email=claims.get("email", ""),
            role=UserRole(claims.get("role")),
        )
    except (KeyError, ValueError) as e:
        raise AuthenticationError("Invalid token claims") from e
