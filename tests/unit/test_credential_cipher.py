"""
Unit tests for CredentialCipher.

System role: Verification of AES-GCM credential storage format
"""

import base64

import pytest

from backoffice.core.credential_cipher import CredentialCipher
from backoffice.core.exceptions import ConfigurationError, CredentialEncryptionError


@pytest.fixture
def cipher() -> CredentialCipher:
    return CredentialCipher("unit-test-secret")


def test_object_survives_encryption(cipher):
    credentials = {"username": "svc-backoffice", "password": "s3cr3t"}

    encrypted = cipher.encrypt_object(credentials)

    assert "s3cr3t" not in encrypted
    assert cipher.decrypt_object(encrypted) == credentials


def test_format_is_iv_tag_ciphertext(cipher):
    iv, tag, ciphertext = cipher.encrypt("token-value").split(":")

    assert len(base64.b64decode(iv)) == 16
    assert len(base64.b64decode(tag)) == 16
    assert len(base64.b64decode(ciphertext)) == len("token-value")


def test_each_encryption_uses_fresh_iv(cipher):
    assert cipher.encrypt("same") != cipher.encrypt("same")


def test_wrong_key_fails_authentication(cipher):
    encrypted = cipher.encrypt("token-value")

    with pytest.raises(CredentialEncryptionError, match="Failed to decrypt"):
        CredentialCipher("another-secret").decrypt(encrypted)


def test_tampered_ciphertext_fails(cipher):
    iv, tag, ciphertext = cipher.encrypt("token-value").split(":")
    forged = base64.b64encode(b"x" * len(base64.b64decode(ciphertext))).decode("ascii")

    with pytest.raises(CredentialEncryptionError):
        cipher.decrypt(f"{iv}:{tag}:{forged}")


@pytest.mark.parametrize("value", ["no-separators", "a:b", "a:b:c:d"])
def test_malformed_input(cipher, value):
    with pytest.raises(CredentialEncryptionError, match="Invalid encrypted data format"):
        cipher.decrypt(value)


@pytest.mark.parametrize("secret", [None, ""])
def test_missing_secret_is_a_configuration_error(secret):
    with pytest.raises(ConfigurationError):
        CredentialCipher(secret)
