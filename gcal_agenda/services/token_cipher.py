"""Symmetric encryption for OAuth tokens held in the credential store."""

from __future__ import annotations

import base64
import hashlib
from typing import Optional

from cryptography.fernet import Fernet, InvalidToken


class TokenCipherService:
    """Fernet cipher keyed by the SHA-256 digest of a configured secret."""

    def __init__(self, *, secret: str) -> None:
        if not secret:
            raise ValueError("Token encryption secret must be provided.")
        key = base64.urlsafe_b64encode(hashlib.sha256(secret.encode("utf-8")).digest())
        self._fernet = Fernet(key)

    @classmethod
    def from_optional_secret(cls, secret: Optional[str]) -> Optional["TokenCipherService"]:
        """Return a cipher, or ``None`` when token encryption is not configured."""
        if not secret:
            return None
        return cls(secret=secret)

    def encrypt(self, token: str) -> str:
        return self._fernet.encrypt(token.encode("utf-8")).decode("utf-8")

    def decrypt(self, ciphertext: str) -> str:
        try:
            token = self._fernet.decrypt(ciphertext.encode("utf-8"))
        except InvalidToken as exc:
            raise ValueError("Stored token is not valid ciphertext for this secret.") from exc
        return token.decode("utf-8")


__all__ = ["TokenCipherService"]
