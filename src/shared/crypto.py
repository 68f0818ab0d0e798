"""Credential encryption for merchant-supplied provider secrets.

AES-256-GCM. The stored form is base64(IV || ciphertext || auth tag), with a
12-byte IV and 16-byte tag, keyed by ``CREDENTIALS_ENCRYPTION_KEY`` (32 bytes,
base64 encoded).
"""

import base64
import os

from cryptography.hazmat.primitives.ciphers.aead import AESGCM

IV_LENGTH = 12
KEY_LENGTH = 32


class EncryptionKeyError(ValueError):
    """Raised when the encryption key is missing or malformed."""


def _load_key(key: str | None = None) -> bytes:
    raw = key if key is not None else os.environ.get("CREDENTIALS_ENCRYPTION_KEY")
    if not raw:
        raise EncryptionKeyError("CREDENTIALS_ENCRYPTION_KEY environment variable is not set")

    key_bytes = base64.b64decode(raw)
    if len(key_bytes) != KEY_LENGTH:
        raise EncryptionKeyError("CREDENTIALS_ENCRYPTION_KEY must be 32 bytes (256 bits) encoded in base64")
    return key_bytes


def encrypt(plaintext: str, key: str | None = None) -> str:
    """Encrypt ``plaintext`` and return the base64 envelope."""
    iv = os.urandom(IV_LENGTH)
    # AESGCM appends the 16-byte tag to the ciphertext
    sealed = AESGCM(_load_key(key)).encrypt(iv, plaintext.encode("utf-8"), None)
    return base64.b64encode(iv + sealed).decode("ascii")


def decrypt(ciphertext: str, key: str | None = None) -> str:
    """Decrypt a value produced by :func:`encrypt`.

    Raises ``cryptography.exceptions.InvalidTag`` if the value was tampered
    with or encrypted under another key.
    """
    combined = base64.b64decode(ciphertext)
    iv, sealed = combined[:IV_LENGTH], combined[IV_LENGTH:]
    return AESGCM(_load_key(key)).decrypt(iv, sealed, None).decode("utf-8")


def generate_encryption_key() -> str:
    """Return a fresh base64-encoded 32-byte key."""
    return base64.b64encode(os.urandom(KEY_LENGTH)).decode("ascii")


def mask_secret(value: str | None) -> str:
    """Mask a secret for display, keeping only the last four characters."""
    if not value or len(value) < 4:
        return "••••••••"
    return f"••••••••{value[-4:]}"
