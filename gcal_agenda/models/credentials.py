"""
Domain model for the persisted OAuth credential record.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, Field

ACCESS_TOKEN_KEY = "access_token"
REFRESH_TOKEN_KEY = "refresh_token"
TOKEN_EXPIRY_KEY = "token_expiry"


class CredentialRecord(BaseModel):
    """The single credential record kept per installation."""

    access_token: str
    refresh_token: Optional[str] = None
    expiry: Optional[int] = Field(
        None, description="Epoch milliseconds after which the access token is stale."
    )

    def is_stale(self, *, now_ms: int, margin_ms: int) -> bool:
        """A record without an expiry is never fresh."""
        if self.expiry is None:
            return True
        return now_ms > self.expiry - margin_ms

    def merged_with(self, issued: "CredentialRecord") -> "CredentialRecord":
        """Apply a newly issued record, keeping our refresh token if none was reissued."""
        return CredentialRecord(
            access_token=issued.access_token,
            refresh_token=issued.refresh_token or self.refresh_token,
            expiry=issued.expiry,
        )

    def to_store_values(self) -> Dict[str, Any]:
        values: Dict[str, Any] = {
            ACCESS_TOKEN_KEY: self.access_token,
            TOKEN_EXPIRY_KEY: self.expiry,
        }
        if self.refresh_token:
            values[REFRESH_TOKEN_KEY] = self.refresh_token
        return values

    @classmethod
    def from_store_values(cls, values: Mapping[str, Any]) -> Optional["CredentialRecord"]:
        access_token = values.get(ACCESS_TOKEN_KEY)
        if not access_token:
            return None
        expiry = values.get(TOKEN_EXPIRY_KEY)
        return cls(
            access_token=access_token,
            refresh_token=values.get(REFRESH_TOKEN_KEY) or None,
            expiry=int(expiry) if expiry is not None else None,
        )


__all__ = [
    "ACCESS_TOKEN_KEY",
    "CredentialRecord",
    "REFRESH_TOKEN_KEY",
    "TOKEN_EXPIRY_KEY",
]
