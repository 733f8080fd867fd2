"""
Credential encryption.

AES-256-GCM encryption of external API credentials at rest. The key is
the SHA-256 digest of the configured secret; ciphertext is stored as
"base64(iv):base64(tag):base64(ciphertext)".

Dependencies: cryptography
System role: Secret storage for integration credentials
"""

import base64
import hashlib
import json
import os
from typing import Any

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from backoffice.core.exceptions import ConfigurationError, CredentialEncryptionError

IV_LENGTH = 16
TAG_LENGTH = 16


class CredentialCipher:
    """Encrypts and decrypts credential payloads with AES-256-GCM."""

    def __init__(self, secret: str | None) -> None:
        """
        Derive the AES key from the configured secret.

        Args:
            secret: Encryption secret (INTEGRATIONS_ENCRYPTION_KEY)

        Raises:
            ConfigurationError: If no secret is configured
        """
        if not secret:
            raise ConfigurationError("INTEGRATIONS_ENCRYPTION_KEY is not configured")
        self._aesgcm = AESGCM(hashlib.sha256(secret.encode("utf-8")).digest())

    def encrypt(self, plaintext: str) -> str:
        """
        Encrypt a string.

        Args:
            plaintext: Value to encrypt

        Returns:
            str: "iv:tag:ciphertext", each part base64 encoded
        """
        iv = os.urandom(IV_LENGTH)
        sealed = self._aesgcm.encrypt(iv, plaintext.encode("utf-8"), None)
        ciphertext, tag = sealed[:-TAG_LENGTH], sealed[-TAG_LENGTH:]
        return ":".join(base64.b64encode(part).decode("ascii") for part in (iv, tag, ciphertext))

    def decrypt(self, encrypted: str) -> str:
        """
        Decrypt a value produced by encrypt().

        Args:
            encrypted: "iv:tag:ciphertext" string

        Returns:
            str: Original plaintext

        Raises:
            CredentialEncryptionError: If the format is wrong or authentication fails
        """
        parts = encrypted.split(":")
        if len(parts) != 3:
            raise CredentialEncryptionError("Invalid encrypted data format")
        try:
            iv, tag, ciphertext = (base64.b64decode(part, validate=True) for part in parts)
            plaintext = self._aesgcm.decrypt(iv, ciphertext + tag, None)
        except (InvalidTag, ValueError) as e:
            raise CredentialEncryptionError("Failed to decrypt credentials") from e
        return plaintext.decode("utf-8")

    def encrypt_object(self, value: dict[str, Any]) -> str:
        """Encrypt a JSON-serialisable dict."""
        return self.encrypt(json.dumps(value))

    def decrypt_object(self, encrypted: str) -> dict[str, Any]:
        """Decrypt a value produced by encrypt_object()."""
        return json.loads(self.decrypt(encrypted))
