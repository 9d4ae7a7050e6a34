"""
Application configuration models and helpers.

Centralizes settings management so the API server and the command line tool
share a consistent configuration surface.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional, Tuple

import os

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from gcal_agenda.core.errors import MissingCredentialsError


def _load_env_file(path: str = ".env") -> None:
    """Copy key=value pairs from a .env file into os.environ for every settings model."""
    env_path = Path(path)
    if not env_path.exists():
        return
    for raw_line in env_path.read_text().splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        key, sep, value = line.partition("=")
        if not sep:
            continue
        key = key.strip()
        if not key or key in os.environ:
            continue
        cleaned = value.strip().strip('"').strip("'")
        os.environ[key] = cleaned


_load_env_file()


class GoogleSettings(BaseSettings):
    """Client credentials for the Google OAuth application."""

    client_id: Optional[str] = Field(None, validation_alias="GOOGLE_CLIENT_ID")
    client_secret: Optional[str] = Field(None, validation_alias="GOOGLE_CLIENT_SECRET")

    def require_client_credentials(self) -> Tuple[str, str]:
        """Return ``(client_id, client_secret)`` or raise when either is missing."""
        if not self.client_id or not self.client_secret:
            raise MissingCredentialsError(
                "Please set Client ID and Secret in settings first."
            )
        return self.client_id, self.client_secret

    def require_client_id(self) -> str:
        if not self.client_id:
            raise MissingCredentialsError("Please set Client ID in settings first.")
        return self.client_id


class StorageSettings(BaseSettings):
    """Location of the persisted credential record."""

    token_store_path: str = Field(
        ".gcal_agenda/tokens.sqlite3",
        validation_alias="TOKEN_STORE_PATH",
        description="SQLite file holding the access token, refresh token and expiry.",
    )


class SecuritySettings(BaseSettings):
    """Security-related configuration."""

    token_encryption_secret: Optional[str] = Field(
        None,
        validation_alias="TOKEN_ENCRYPTION_SECRET",
        description=(
            "Secret used to derive the symmetric key for encrypting stored tokens."
        ),
    )


class HTTPSettings(BaseSettings):
    """Outbound HTTP behaviour."""

    timeout_seconds: float = Field(10.0, validation_alias="HTTP_TIMEOUT_SECONDS")


class AppSettings(BaseSettings):
    """Root settings object for the API server and CLI."""

    model_config = SettingsConfigDict(extra="ignore")

    environment: str = Field("development", validation_alias="APP_ENV")
    log_level: str = Field("INFO", validation_alias="APP_LOG_LEVEL")
    google: GoogleSettings = Field(default_factory=GoogleSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    security: SecuritySettings = Field(default_factory=SecuritySettings)
    http: HTTPSettings = Field(default_factory=HTTPSettings)


@lru_cache()
def get_settings() -> AppSettings:
    """Return a cached settings object."""
    return AppSettings()


__all__ = [
    "AppSettings",
    "GoogleSettings",
    "HTTPSettings",
    "SecuritySettings",
    "StorageSettings",
    "get_settings",
]
