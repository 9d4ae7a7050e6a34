"""User-facing notices emitted by the authentication and calendar services."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class NoticeKind(str, Enum):
    NEEDS_REAUTH = "needs_reauth"
    REFRESH_ERROR = "refresh_error"
    INFO = "info"
    EXCHANGE_ERROR = "exchange_error"
    AUTHENTICATION_FAILED = "authentication_failed"
    QUERY_ERROR = "query_error"
    STORAGE_ERROR = "storage_error"


class Notice(BaseModel):
    """A message meant for whichever presentation layer is listening."""

    kind: NoticeKind
    message: str
    reason: Optional[str] = Field(
        None, description="Diagnostic detail, e.g. the provider's error body."
    )
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def info(cls, message: str) -> "Notice":
        return cls(kind=NoticeKind.INFO, message=message)

    @classmethod
    def needs_reauth(cls) -> "Notice":
        return cls(kind=NoticeKind.NEEDS_REAUTH, message="Session expired. Please login again.")

    @classmethod
    def storage_error(cls, reason: str) -> "Notice":
        return cls(
            kind=NoticeKind.STORAGE_ERROR,
            message="Could not access saved Google credentials.",
            reason=reason,
        )

    @classmethod
    def refresh_error(cls, reason: str) -> "Notice":
        return cls(
            kind=NoticeKind.REFRESH_ERROR,
            message="Failed to refresh session. Please login again.",
            reason=reason,
        )


__all__ = ["Notice", "NoticeKind"]
