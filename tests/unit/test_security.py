"""
Unit tests for password hashing and access tokens.

System role: Verification of bcrypt and JWT primitives
"""

import uuid
from datetime import datetime, timedelta, timezone

import jwt
import pytest

from backoffice.core.enums import UserRole
from backoffice.core.exceptions import AuthenticationError
from backoffice.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)


class TestPasswords:
    def test_hash_verifies(self):
        hashed = hash_password("correct-horse", rounds=4)

        assert hashed != "correct-horse"
        assert verify_password("correct-horse", hashed) is True
        assert verify_password("wrong-horse", hashed) is False

    def test_malformed_hash_does_not_verify(self):
        assert verify_password("anything", "not-a-bcrypt-hash") is False


class TestAccessTokens:
    def test_claims_round_trip(self, auth_settings):
        user_id = uuid.uuid4()

        token = create_access_token(user_id, "am@example.com", UserRole.ACCOUNT_MANAGER, auth_settings)
        payload = decode_access_token(token, auth_settings)

        assert payload.user_id == user_id
        assert payload.email == "am@example.com"
        assert payload.role == UserRole.ACCOUNT_MANAGER

    def test_expired_token(self, auth_settings):
        issued = datetime.now(timezone.utc) - timedelta(hours=2)
        token = jwt.encode(
            {"sub": str(uuid.uuid4()), "role": "admin", "iat": issued, "exp": issued + timedelta(hours=1)},
            auth_settings.secret,
            algorithm=auth_settings.algorithm,
        )

        with pytest.raises(AuthenticationError, match="Token has expired"):
            decode_access_token(token, auth_settings)

    def test_token_signed_with_other_secret(self, auth_settings):
        other = auth_settings.model_copy(update={"secret": "x" * 40})
        token = create_access_token(uuid.uuid4(), "a@example.com", UserRole.ADMIN, other)

        with pytest.raises(AuthenticationError, match="Invalid token"):
            decode_access_token(token, auth_settings)

    def test_unknown_role_claim(self, auth_settings):
        now = datetime.now(timezone.utc)
        token = jwt.encode(
            {"sub": str(uuid.uuid4()), "role": "superuser", "iat": now, "exp": now + timedelta(minutes=5)},
            auth_settings.secret,
            algorithm=auth_settings.algorithm,
        )

        with pytest.raises(AuthenticationError, match="Invalid token claims"):
            decode_access_token(token, auth_settings)
