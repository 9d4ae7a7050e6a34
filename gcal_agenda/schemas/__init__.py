"""Public schema exports."""

from .auth import AuthStatusResponse, AuthorizationUrlResponse, TokenResponse
from .calendar import CalendarEvent, EventTime
from .notices import Notice, NoticeKind

__all__ = [
    "AuthStatusResponse",
    "AuthorizationUrlResponse",
    "CalendarEvent",
    "EventTime",
    "Notice",
    "NoticeKind",
    "TokenResponse",
]
