"""
Google OAuth utilities.

Builds the consent URL and performs the two token grants against Google's
token endpoint. Nothing here touches the credential store; callers persist
the returned records.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional, Type
from urllib.parse import urlencode

import httpx
from pydantic import ValidationError

from gcal_agenda.core.errors import TokenExchangeError, TokenRefreshError
from gcal_agenda.models.credentials import CredentialRecord
from gcal_agenda.schemas.auth import TokenResponse
from gcal_agenda.utils.clock import Clock, now_ms

logger = logging.getLogger(__name__)


class GoogleOAuthClient:
    """Build Google authorization URLs and exchange codes or refresh tokens."""

    AUTH_BASE_URL = "https://accounts.google.com/o/oauth2/v2/auth"
    TOKEN_URL = "https://oauth2.googleapis.com/token"
    # Must match the redirect URI registered for the OAuth client in Google Cloud Console.
    REDIRECT_URI = "http://127.0.0.1:42813/callback"
    SCOPE = "https://www.googleapis.com/auth/calendar.readonly"

    def __init__(
        self,
        *,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        clock: Clock = now_ms,
    ) -> None:
        self._timeout = timeout
        self._transport = transport
        self._clock = clock

    def build_authorization_url(self, client_id: str) -> str:
        """Construct the Google OAuth consent URL."""
        params = {
            "client_id": client_id,
            "redirect_uri": self.REDIRECT_URI,
            "response_type": "code",
            "scope": self.SCOPE,
            "access_type": "offline",
            # Re-consent on every login so Google always issues a refresh token.
            "prompt": "consent",
        }
        return f"{self.AUTH_BASE_URL}?{urlencode(params)}"

    async def exchange_authorization_code(
        self, client_id: str, client_secret: str, code: str
    ) -> CredentialRecord:
        """Exchange an authorization code for a fresh credential record."""
        payload = {
            "code": code,
            "client_id": client_id,
            "client_secret": client_secret,
            "redirect_uri": self.REDIRECT_URI,
            "grant_type": "authorization_code",
        }
        return await self._request_token(payload, TokenExchangeError)

    async def refresh(
        self, client_id: str, client_secret: str, refresh_token: str
    ) -> CredentialRecord:
        """
        Redeem a refresh token for a new access token.

        Google usually omits ``refresh_token`` on this grant; the returned record
        then has ``refresh_token=None``, meaning "keep the one you have".
        """
        payload = {
            "client_id": client_id,
            "client_secret": client_secret,
            "refresh_token": refresh_token,
            "grant_type": "refresh_token",
        }
        return await self._request_token(payload, TokenRefreshError)

    async def _request_token(
        self, payload: Dict[str, str], error_cls: Type[TokenExchangeError]
    ) -> CredentialRecord:
        grant_type = payload["grant_type"]
        issued_at = self._clock()

        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.post(
                    self.TOKEN_URL,
                    data=payload,
                    headers={"Accept": "application/json"},
                )
        except httpx.HTTPError as exc:
            logger.warning("Token request (%s) failed in transport: %s", grant_type, exc)
            raise error_cls(f"Token request failed: {exc}") from exc

        if not response.is_success:
            logger.warning(
                "Token endpoint rejected %s grant with status %s",
                grant_type,
                response.status_code,
            )
            raise error_cls(response.text, status_code=response.status_code)

        try:
            token = TokenResponse.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise error_cls(
                "Incomplete token payload returned from Google.",
                status_code=response.status_code,
            ) from exc

        return CredentialRecord(
            access_token=token.access_token,
            refresh_token=token.refresh_token,
            expiry=issued_at + token.expires_in * 1000,
        )


__all__ = ["GoogleOAuthClient"]
