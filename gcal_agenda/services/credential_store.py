"""
Credential store port and the record-level helpers built on top of it.

The lifecycle service only depends on ``get``/``set``/``set_many``; any backend
exposing those coroutines can hold the credential record.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol

from gcal_agenda.core.errors import CredentialStoreError, NoAuthorizationError
from gcal_agenda.models.credentials import (
    ACCESS_TOKEN_KEY,
    REFRESH_TOKEN_KEY,
    TOKEN_EXPIRY_KEY,
    CredentialRecord,
)
from gcal_agenda.services.token_cipher import TokenCipherService

_RECORD_KEYS = (ACCESS_TOKEN_KEY, REFRESH_TOKEN_KEY, TOKEN_EXPIRY_KEY)


class CredentialStore(Protocol):
    async def get(self, key: str) -> Optional[Any]:
        ...

    async def set(self, key: str, value: Any) -> None:
        ...

    async def set_many(self, values: Mapping[str, Any]) -> None:
        ...


class EncryptedCredentialStore:
    """Wrap another store and encrypt string values at rest."""

    def __init__(self, inner: CredentialStore, cipher: TokenCipherService) -> None:
        self._inner = inner
        self._cipher = cipher

    def _encode(self, value: Any) -> Any:
        if isinstance(value, str):
            return self._cipher.encrypt(value)
        return value

    async def get(self, key: str) -> Optional[Any]:
        value = await self._inner.get(key)
        if not isinstance(value, str):
            return value
        try:
            return self._cipher.decrypt(value)
        except ValueError as exc:
            raise CredentialStoreError(
                f"Stored value for {key!r} could not be decrypted; check TOKEN_ENCRYPTION_SECRET."
            ) from exc

    async def set(self, key: str, value: Any) -> None:
        await self._inner.set(key, self._encode(value))

    async def set_many(self, values: Mapping[str, Any]) -> None:
        await self._inner.set_many({key: self._encode(value) for key, value in values.items()})


async def load_credential_record(store: CredentialStore) -> CredentialRecord:
    """Read the credential record, raising when no access token is stored."""
    values = {key: await store.get(key) for key in _RECORD_KEYS}
    try:
        record = CredentialRecord.from_store_values(values)
    except (TypeError, ValueError) as exc:
        raise CredentialStoreError("Stored Google credentials are malformed.") from exc
    if record is None:
        raise NoAuthorizationError("No Google credentials stored; login required.")
    return record


async def save_credential_record(store: CredentialStore, record: CredentialRecord) -> None:
    """Persist the record; access token and expiry always land in the same write."""
    await store.set_many(record.to_store_values())


__all__ = [
    "CredentialStore",
    "EncryptedCredentialStore",
    "load_credential_record",
    "save_credential_record",
]
