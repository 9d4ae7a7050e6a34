"""
FastAPI application entrypoint for the calendar agenda.
"""

from __future__ import annotations

from fastapi import FastAPI

from gcal_agenda import __version__
from gcal_agenda.api.routes import callback_router, router as api_router
from gcal_agenda.core.config import get_settings
from gcal_agenda.core.logging import configure_logging


def create_app() -> FastAPI:
    """Factory for the FastAPI application."""
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Google Calendar Agenda",
        version=__version__,
        description="Upcoming Google Calendar events behind a self-refreshing OAuth login.",
    )
    app.include_router(api_router, prefix="/api")
    app.include_router(callback_router)
    return app


app = create_app()

__all__ = ["app", "create_app"]
