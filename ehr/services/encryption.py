"""
Application-layer encryption for PHI columns.

Patient identity fields are stored as Fernet tokens; the ORM hands plaintext
to the rest of the application through the ``EncryptedString`` column type.
"""

from __future__ import annotations

import logging
import os

from cryptography.fernet import Fernet
from sqlalchemy import Text
from sqlalchemy.types import TypeDecorator

logger = logging.getLogger(__name__)


class EncryptionService:
    """Wraps Fernet symmetric encryption for PHI fields."""

    def __init__(self, key: str | None = None):
        raw_key = key or os.getenv("PHI_ENCRYPTION_KEY", "")
        if raw_key:
            self._fernet = Fernet(raw_key.encode() if isinstance(raw_key, str) else raw_key)
        else:
            # Development only: data written under an ephemeral key is unreadable after restart
            logger.warning("PHI_ENCRYPTION_KEY not set; using an ephemeral key")
            self._fernet = Fernet(Fernet.generate_key())

    def encrypt(self, plaintext: str) -> str:
        """Encrypt a string and return base64-encoded ciphertext."""
        if not plaintext:
            return ""
        return self._fernet.encrypt(plaintext.encode()).decode()

    def decrypt(self, ciphertext: str) -> str:
        """Decrypt base64-encoded ciphertext back to plaintext."""
        if not ciphertext:
            return ""
        return self._fernet.decrypt(ciphertext.encode()).decode()


class EncryptedString(TypeDecorator):
    """Text column whose value is encrypted on the way in and decrypted on the way out.

    NULL stays NULL so that absent PHI is still omitted from responses.
    Ciphertext is not deterministic, so these columns cannot be filtered on.
    """

    impl = Text
    cache_ok = True

    def __init__(self, cipher: EncryptionService, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.cipher = cipher

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return self.cipher.encrypt(str(value))

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return self.cipher.decrypt(value)
