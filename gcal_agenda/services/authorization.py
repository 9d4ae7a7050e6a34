"""
Start the Google consent flow and recover the code from the loopback redirect.
"""

from __future__ import annotations

import logging
import webbrowser
from typing import Callable
from urllib.parse import parse_qs, urlsplit

from gcal_agenda.clients.google_auth import GoogleOAuthClient
from gcal_agenda.schemas.notices import Notice
from gcal_agenda.services.notifications import NotificationHub

logger = logging.getLogger(__name__)

BrowserOpener = Callable[[str], bool]


class AuthorizationService:
    """Sends the user to Google's consent screen in an external browser."""

    def __init__(
        self,
        oauth_client: GoogleOAuthClient,
        notifier: NotificationHub,
        *,
        open_browser: BrowserOpener = webbrowser.open,
    ) -> None:
        self._oauth = oauth_client
        self._notifier = notifier
        self._open_browser = open_browser

    async def initiate(self, client_id: str) -> str:
        """Open the consent URL and return it so callers can show it as a fallback."""
        url = self._oauth.build_authorization_url(client_id)
        await self._notifier.emit(Notice.info("Opening Google Login in browser..."))
        try:
            opened = self._open_browser(url)
        except webbrowser.Error as exc:
            logger.warning("Could not launch a browser: %s", exc)
            opened = False
        if not opened:
            logger.warning("No browser available; open the authorization URL manually.")
        return url


def extract_authorization_code(redirected_url: str) -> str:
    """
    Pull the ``code`` query parameter out of the URL Google redirected to.

    Raises ``ValueError`` with a user-presentable message when the URL is
    malformed, carries an ``error`` instead of a code, or has no code at all.
    """
    parts = urlsplit(redirected_url.strip())
    if not parts.scheme or not parts.netloc:
        raise ValueError("Invalid URL format.")

    query = parse_qs(parts.query)
    if "error" in query:
        raise ValueError(f"Google returned an error: {query['error'][0]}")
    codes = query.get("code")
    if not codes or not codes[0]:
        raise ValueError("Invalid URL: No code found.")
    return codes[0]


__all__ = ["AuthorizationService", "BrowserOpener", "extract_authorization_code"]
