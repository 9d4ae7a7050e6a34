"""Schemas related to OAuth flows."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class TokenResponse(BaseModel):
    """JSON body returned by the Google token endpoint."""

    access_token: str = Field(..., min_length=1)
    refresh_token: Optional[str] = None
    expires_in: int = Field(..., description="Lifetime of the access token in seconds.")
    scope: Optional[str] = None
    token_type: Optional[str] = None


class AuthorizationUrlResponse(BaseModel):
    authorization_url: str


class AuthStatusResponse(BaseModel):
    state: str


__all__ = ["AuthStatusResponse", "AuthorizationUrlResponse", "TokenResponse"]
