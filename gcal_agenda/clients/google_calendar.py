"""Google Calendar client listing upcoming events on the primary calendar."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, TYPE_CHECKING

import httpx
from pydantic import ValidationError

from gcal_agenda.core.errors import CalendarQueryError
from gcal_agenda.schemas.calendar import CalendarEvent
from gcal_agenda.schemas.notices import Notice, NoticeKind
from gcal_agenda.services.notifications import NotificationHub
from gcal_agenda.utils.clock import Clock, now_ms, rfc3339_from_ms

if TYPE_CHECKING:  # pragma: no cover - type hints only
    from gcal_agenda.services.google_tokens import GoogleTokenService

logger = logging.getLogger(__name__)


class GoogleCalendarClient:
    """Read-only access to the signed-in user's upcoming events."""

    EVENTS_URL = "https://www.googleapis.com/calendar/v3/calendars/primary/events"
    MAX_RESULTS = 20

    def __init__(
        self,
        token_service: "GoogleTokenService",
        notifier: NotificationHub,
        *,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        clock: Clock = now_ms,
    ) -> None:
        self._token_service = token_service
        self._notifier = notifier
        self._timeout = timeout
        self._transport = transport
        self._clock = clock

    async def list_upcoming_events(
        self, *, client_id: str, client_secret: str
    ) -> List[CalendarEvent]:
        """Return upcoming events in start order, or an empty list on any failure."""
        token = await self._token_service.get_valid_access_token(
            client_id=client_id, client_secret=client_secret
        )
        if not token:
            return []

        try:
            return await self._fetch_events(token)
        except CalendarQueryError as exc:
            logger.error("Failed to fetch calendar events: %s", exc.message)
            if exc.is_unauthorized:
                notice = Notice(
                    kind=NoticeKind.AUTHENTICATION_FAILED,
                    message="Google Calendar: Authentication failed.",
                    reason=exc.message,
                )
            else:
                notice = Notice(
                    kind=NoticeKind.QUERY_ERROR,
                    message="Error fetching calendar events. Check logs.",
                    reason=exc.message,
                )
            await self._notifier.emit(notice)
            return []

    async def _fetch_events(self, token: str) -> List[CalendarEvent]:
        params: Dict[str, Any] = {
            "timeMin": rfc3339_from_ms(self._clock()),
            "maxResults": str(self.MAX_RESULTS),
            "singleEvents": "true",
            "orderBy": "startTime",
        }

        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.get(
                    self.EVENTS_URL,
                    params=params,
                    headers={"Authorization": f"Bearer {token}"},
                )
        except httpx.HTTPError as exc:
            raise CalendarQueryError(f"Calendar request failed: {exc}") from exc

        if not response.is_success:
            raise CalendarQueryError(
                f"Calendar API failed: {response.status_code} {response.reason_phrase}",
                status_code=response.status_code,
            )

        try:
            payload = response.json()
            items = payload.get("items") or []
            return [CalendarEvent.model_validate(item) for item in items]
        except (ValueError, AttributeError, ValidationError) as exc:
            raise CalendarQueryError(
                "Calendar API returned an unexpected payload.",
                status_code=response.status_code,
            ) from exc


__all__ = ["GoogleCalendarClient"]
