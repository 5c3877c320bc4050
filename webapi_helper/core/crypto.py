"""Symmetric encryption and digest helpers."""

from __future__ import annotations

import hashlib
import logging

from cryptography.fernet import Fernet, InvalidToken

from webapi_helper.core.exceptions import BusinessException

logger = logging.getLogger(__name__)


def _fernet(key: str | bytes) -> Fernet:
    try:
        return Fernet(key)
    except (ValueError, TypeError) as exc:
        raise BusinessException("Invalid encryption key") from exc


# PUBLIC_INTERFACE
def generate_key() -> str:
    """Generate a new url-safe base64 Fernet key."""
    return Fernet.generate_key().decode("ascii")


# PUBLIC_INTERFACE
def encrypt(plain: str, key: str | bytes) -> str:
    """Encrypt text with the given key and return the token as a string."""
    return _fernet(key).encrypt(plain.encode("utf-8")).decode("ascii")


# PUBLIC_INTERFACE
def decrypt(token: str, key: str | bytes) -> str:
    """
    Decrypt a token produced by encrypt.

    Raises:
        BusinessException: the key is malformed, or the token was tampered
        with or encrypted under another key.
    """
    try:
        return _fernet(key).decrypt(token.encode("ascii")).decode("utf-8")
    except (InvalidToken, UnicodeEncodeError) as exc:
        logger.warning("Failed to decrypt token")
        raise BusinessException("Invalid or corrupted ciphertext") from exc


def md5_hex(text: str) -> str:
    return hashlib.md5(text.encode("utf-8")).hexdigest()


def sha256_hex(text: str) -> str:
    return hashlib.sha256(text.encode("utf-8")).hexdigest()
