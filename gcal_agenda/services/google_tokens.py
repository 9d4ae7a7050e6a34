"""
Helpers for retrieving and refreshing Google OAuth tokens.

Refresh happens lazily whenever a caller asks for an access token; there is no
background timer. At most one refresh grant is in flight at a time and
concurrent callers share its outcome. Refresh and login persist under the same
lock, so neither can write over a record the other saved after it read.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import timedelta
from enum import Enum
from typing import Optional

from gcal_agenda.clients.google_auth import GoogleOAuthClient
from gcal_agenda.core.errors import (
    CredentialStoreError,
    NoAuthorizationError,
    TokenExchangeError,
    TokenRefreshError,
)
from gcal_agenda.models.credentials import CredentialRecord
from gcal_agenda.schemas.notices import Notice, NoticeKind
from gcal_agenda.services.credential_store import (
    CredentialStore,
    load_credential_record,
    save_credential_record,
)
from gcal_agenda.services.notifications import NotificationHub
from gcal_agenda.utils.clock import Clock, now_ms

logger = logging.getLogger(__name__)


class TokenState(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    FRESH = "fresh"
    NEAR_EXPIRY = "near_expiry"
    EXPIRED = "expired"
    INVALID = "invalid"


class GoogleTokenService:
    """Serves usable access tokens from the persisted credential record."""

    _REFRESH_MARGIN = timedelta(seconds=60)

    def __init__(
        self,
        store: CredentialStore,
        oauth_client: GoogleOAuthClient,
        notifier: NotificationHub,
        *,
        clock: Clock = now_ms,
    ) -> None:
        self._store = store
        self._oauth = oauth_client
        self._notifier = notifier
        self._clock = clock
        self._refresh_task: Optional["asyncio.Task[Optional[str]]"] = None
        # Held across load -> save by both refresh and login.
        self._persist_lock = asyncio.Lock()

    @property
    def _margin_ms(self) -> int:
        return int(self._REFRESH_MARGIN.total_seconds() * 1000)

    def classify(self, record: Optional[CredentialRecord]) -> TokenState:
        """Map a stored record onto the lifecycle states without side effects."""
        if record is None:
            return TokenState.UNAUTHENTICATED
        now = self._clock()
        if not record.is_stale(now_ms=now, margin_ms=self._margin_ms):
            return TokenState.FRESH
        if not record.refresh_token:
            return TokenState.INVALID
        if record.expiry is not None and now <= record.expiry:
            return TokenState.NEAR_EXPIRY
        return TokenState.EXPIRED

    async def get_state(self) -> TokenState:
        """Classify the stored record. Storage failures propagate to the caller."""
        try:
            record = await load_credential_record(self._store)
        except NoAuthorizationError:
            return TokenState.UNAUTHENTICATED
        return self.classify(record)

    async def get_valid_access_token(
        self, *, client_id: str, client_secret: str
    ) -> Optional[str]:
        """
        Return an access token that is safe to present, refreshing it if needed.

        Returns ``None`` when the user has never logged in, when no refresh token
        is available, or when the refresh grant fails. The latter two emit a
        notice asking the user to log in again.
        """
        try:
            record = await load_credential_record(self._store)
        except NoAuthorizationError:
            logger.debug("No stored Google credentials; login required.")
            return None
        except CredentialStoreError as exc:
            logger.error("Unable to read credential record: %s", exc)
            await self._notifier.emit(Notice.storage_error(str(exc)))
            return None

        if not record.is_stale(now_ms=self._clock(), margin_ms=self._margin_ms):
            return record.access_token

        if self._refresh_task is None:
            self._refresh_task = asyncio.create_task(
                self._refresh(client_id=client_id, client_secret=client_secret)
            )
        # Shielded so a cancelled caller does not cancel the refresh others await.
        return await asyncio.shield(self._refresh_task)

    async def _refresh(self, *, client_id: str, client_secret: str) -> Optional[str]:
        try:
            async with self._persist_lock:
                return await self._refresh_locked(
                    client_id=client_id, client_secret=client_secret
                )
        except NoAuthorizationError:
            return None
        except CredentialStoreError as exc:
            logger.error("Credential store failure during refresh: %s", exc)
            await self._notifier.emit(Notice.storage_error(str(exc)))
            return None
        finally:
            self._refresh_task = None

    async def _refresh_locked(self, *, client_id: str, client_secret: str) -> Optional[str]:
        record = await load_credential_record(self._store)
        # A refresh or login that finished while we waited may have fixed things.
        if not record.is_stale(now_ms=self._clock(), margin_ms=self._margin_ms):
            return record.access_token

        if not record.refresh_token:
            logger.info("Access token is stale and no refresh token is stored.")
            await self._notifier.emit(Notice.needs_reauth())
            return None

        try:
            issued = await self._oauth.refresh(client_id, client_secret, record.refresh_token)
        except TokenRefreshError as exc:
            logger.warning("Token refresh failed: %s", exc.message)
            await self._notifier.emit(Notice.refresh_error(exc.message))
            return None

        refreshed = record.merged_with(issued)
        await save_credential_record(self._store, refreshed)
        logger.info("Refreshed Google access token (expires at %s ms).", refreshed.expiry)
        return refreshed.access_token

    async def complete_authorization(
        self, *, client_id: str, client_secret: str, code: str
    ) -> bool:
        """Exchange an authorization code and persist the resulting credentials."""
        try:
            issued = await self._oauth.exchange_authorization_code(
                client_id, client_secret, code
            )
        except TokenExchangeError as exc:
            logger.warning("Authorization code exchange failed: %s", exc.message)
            await self._notifier.emit(
                Notice(
                    kind=NoticeKind.EXCHANGE_ERROR,
                    message=f"Login failed: {exc.message}",
                    reason=exc.message,
                )
            )
            return False

        try:
            # A refresh waiting on the lock re-reads the store and sees this login.
            async with self._persist_lock:
                try:
                    existing: Optional[CredentialRecord] = await load_credential_record(
                        self._store
                    )
                except NoAuthorizationError:
                    existing = None
                record = existing.merged_with(issued) if existing else issued
                await save_credential_record(self._store, record)
        except CredentialStoreError as exc:
            logger.error("Unable to persist credentials after login: %s", exc)
            await self._notifier.emit(Notice.storage_error(str(exc)))
            return False

        logger.info("Stored Google credentials from authorization code exchange.")
        await self._notifier.emit(Notice.info("Login successful!"))
        return True


__all__ = ["GoogleTokenService", "TokenState"]
