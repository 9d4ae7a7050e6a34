"""Service layer exports."""

from .authorization import AuthorizationService, extract_authorization_code
from .credential_store import CredentialStore, EncryptedCredentialStore
from .google_tokens import GoogleTokenService, TokenState
from .notifications import NotificationHub
from .token_cipher import TokenCipherService

__all__ = [
    "AuthorizationService",
    "CredentialStore",
    "EncryptedCredentialStore",
    "GoogleTokenService",
    "NotificationHub",
    "TokenCipherService",
    "TokenState",
    "extract_authorization_code",
]
