"""
FastAPI dependency utilities for injecting configuration.
"""

from functools import lru_cache
from typing import Tuple

from fastapi import Depends, HTTPException, status

from gcal_agenda.core.config import AppSettings, get_settings
from gcal_agenda.core.errors import MissingCredentialsError


@lru_cache()
def _settings_singleton() -> AppSettings:
    """Ensure configuration is created once per process."""
    return get_settings()


def get_app_settings() -> AppSettings:
    """FastAPI dependency returning application settings."""
    return _settings_singleton()


def get_client_credentials(
    settings: AppSettings = Depends(get_app_settings),
) -> Tuple[str, str]:
    """Resolve the OAuth client ID and secret or reject the request."""
    try:
        return settings.google.require_client_credentials()
    except MissingCredentialsError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


__all__ = ["get_app_settings", "get_client_credentials"]
