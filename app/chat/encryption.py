"""
At-rest encryption for message content.

When MESSAGE_ENCRYPTION_KEY is set (a Fernet key, see
``cryptography.fernet.Fernet.generate_key``), message text is stored as a
Fernet token and decrypted on the way out. With no key configured content is
stored as-is.

Decryption never raises: a value that is not a valid token for the current
key (plaintext written before encryption was enabled, a rotated key) is
returned unchanged so history and moderation broadcasts keep working.
"""

from __future__ import annotations

import logging

from cryptography.fernet import Fernet, InvalidToken
from django.conf import settings

logger = logging.getLogger(__name__)


class MessageCipher:
    """
    Symmetric cipher for message content.

    Usage:
        cipher = MessageCipher.from_settings()
        stored = cipher.encrypt("hello")
        cipher.decrypt(stored)  # "hello"
    """

    def __init__(self, key: str | bytes | None):
        self._fernet = Fernet(key) if key else None

    @classmethod
    def from_settings(cls) -> MessageCipher:
        return cls(getattr(settings, "MESSAGE_ENCRYPTION_KEY", "") or None)

    @property
    def enabled(self) -> bool:
        return self._fernet is not None

    def encrypt(self, text: str) -> str:
        if not self._fernet or not text:
            return text
        return self._fernet.encrypt(text.encode("utf-8")).decode("ascii")

    def decrypt(self, stored: str | None) -> str | None:
        if not self._fernet or not stored:
            return stored
        try:
            return self._fernet.decrypt(stored.encode("utf-8")).decode("utf-8")
        except (InvalidToken, UnicodeError) as e:
            logger.warning(f"Could not decrypt message content, returning raw value: {e!r}")
            return stored
