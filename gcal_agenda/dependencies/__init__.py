"""Expose dependency helpers for FastAPI routers."""

from .clients import (
    get_authorization_service,
    get_calendar_client,
    get_credential_store,
    get_google_oauth_client,
    get_google_token_service,
    get_notification_hub,
)
from .config import get_app_settings, get_client_credentials

__all__ = [
    "get_app_settings",
    "get_authorization_service",
    "get_calendar_client",
    "get_client_credentials",
    "get_credential_store",
    "get_google_oauth_client",
    "get_google_token_service",
    "get_notification_hub",
]
