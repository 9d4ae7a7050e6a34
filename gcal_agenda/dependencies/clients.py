"""
Factory functions to provide shared clients and services as FastAPI dependencies.

The CLI uses the same factories so both surfaces share one credential store,
one notification hub and one single-flight refresh.
"""

from functools import lru_cache

from gcal_agenda.clients import GoogleCalendarClient, GoogleOAuthClient, SQLiteKeyValueStore
from gcal_agenda.core.config import get_settings
from gcal_agenda.services import (
    AuthorizationService,
    CredentialStore,
    EncryptedCredentialStore,
    GoogleTokenService,
    NotificationHub,
    TokenCipherService,
)


@lru_cache()
def _settings():
    """Internal helper to cache settings for client factories."""
    return get_settings()


@lru_cache()
def get_notification_hub() -> NotificationHub:
    """Provide the process-wide notice publisher."""
    return NotificationHub()


@lru_cache()
def get_google_oauth_client() -> GoogleOAuthClient:
    """Create a singleton Google OAuth client."""
    return GoogleOAuthClient(timeout=_settings().http.timeout_seconds)


@lru_cache()
def get_credential_store() -> CredentialStore:
    """Provide the SQLite credential store, encrypted when a secret is configured."""
    settings = _settings()
    store = SQLiteKeyValueStore(settings.storage.token_store_path)
    cipher = TokenCipherService.from_optional_secret(
        settings.security.token_encryption_secret
    )
    if cipher is None:
        return store
    return EncryptedCredentialStore(store, cipher)


@lru_cache()
def get_google_token_service() -> GoogleTokenService:
    """Provide helper for managing Google OAuth tokens."""
    return GoogleTokenService(
        store=get_credential_store(),
        oauth_client=get_google_oauth_client(),
        notifier=get_notification_hub(),
    )


@lru_cache()
def get_authorization_service() -> AuthorizationService:
    """Provide the consent-flow launcher."""
    return AuthorizationService(get_google_oauth_client(), get_notification_hub())


@lru_cache()
def get_calendar_client() -> GoogleCalendarClient:
    """Provide Google Calendar client instance."""
    return GoogleCalendarClient(
        token_service=get_google_token_service(),
        notifier=get_notification_hub(),
        timeout=_settings().http.timeout_seconds,
    )


__all__ = [
    "get_authorization_service",
    "get_calendar_client",
    "get_credential_store",
    "get_google_oauth_client",
    "get_google_token_service",
    "get_notification_hub",
]
