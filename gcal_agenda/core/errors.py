"""
Error taxonomy for the Google Calendar authentication and query flow.

Provider-facing and storage-facing errors are raised by the clients and stores
and caught at the boundary of the service that issued the call.
"""

from __future__ import annotations

from typing import Optional


class CalendarAuthError(RuntimeError):
    """Base class for every error raised by this package."""


class MissingCredentialsError(CalendarAuthError):
    """Raised when the Google client ID or client secret is not configured."""


class NoAuthorizationError(CalendarAuthError):
    """Raised when no credential record has been stored yet."""


class TokenExchangeError(CalendarAuthError):
    """Raised when the token endpoint rejects an authorization-code exchange."""

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class TokenRefreshError(TokenExchangeError):
    """Raised when the token endpoint rejects a refresh-token grant."""


class CalendarQueryError(CalendarAuthError):
    """Raised when the event-list request fails."""

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    @property
    def is_unauthorized(self) -> bool:
        return self.status_code == 401


class CredentialStoreError(CalendarAuthError):
    """Raised when the credential store cannot be read or written."""


__all__ = [
    "CalendarAuthError",
    "CalendarQueryError",
    "CredentialStoreError",
    "MissingCredentialsError",
    "NoAuthorizationError",
    "TokenExchangeError",
    "TokenRefreshError",
]
