"""
FastAPI routes for the calendar agenda.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Annotated, Any, List, Optional, Tuple

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse

from gcal_agenda.core.errors import CredentialStoreError, MissingCredentialsError
from gcal_agenda.dependencies import (
    get_app_settings,
    get_calendar_client,
    get_client_credentials,
    get_google_oauth_client,
    get_google_token_service,
    get_notification_hub,
)
from gcal_agenda.schemas import (
    AuthStatusResponse,
    AuthorizationUrlResponse,
    CalendarEvent,
    Notice,
)

router = APIRouter()
# Served at the root so it matches the registered loopback redirect URI.
callback_router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/health", status_code=HTTPStatus.OK)
async def healthcheck() -> dict:
    """Simple health endpoint for monitoring."""
    return {"status": "ok"}


@router.get("/auth/google/authorize", status_code=HTTPStatus.OK)
async def start_google_oauth_flow(
    request: Request,
    oauth_client: Annotated[Any, Depends(get_google_oauth_client)],
    settings: Annotated[Any, Depends(get_app_settings)],
    redirect: bool = Query(
        default=False,
        description="When true, redirect browser clients instead of returning JSON.",
    ),
) -> Response:
    """Return (or redirect to) the Google consent URL."""
    try:
        client_id = settings.google.require_client_id()
    except MissingCredentialsError as exc:
        raise HTTPException(status_code=HTTPStatus.BAD_REQUEST, detail=str(exc)) from exc

    authorization_url = oauth_client.build_authorization_url(client_id)

    accept_header = request.headers.get("accept", "")
    if redirect or "text/html" in accept_header.lower():
        return RedirectResponse(url=authorization_url, status_code=HTTPStatus.TEMPORARY_REDIRECT)

    return JSONResponse(
        content=AuthorizationUrlResponse(authorization_url=authorization_url).model_dump()
    )


@callback_router.get("/callback", status_code=HTTPStatus.OK)
async def handle_google_oauth_callback(
    request: Request,
    token_service: Annotated[Any, Depends(get_google_token_service)],
    credentials: Annotated[Tuple[str, str], Depends(get_client_credentials)],
    code: Optional[str] = Query(None, description="Authorization code returned by Google."),
    error: Optional[str] = Query(None, description="Error returned when consent is denied."),
) -> Response:
    """Complete the OAuth exchange for the loopback redirect."""
    if error:
        raise HTTPException(
            status_code=HTTPStatus.BAD_REQUEST,
            detail=f"Authorization was not granted: {error}",
        )
    if not code:
        raise HTTPException(
            status_code=HTTPStatus.BAD_REQUEST, detail="Invalid URL: No code found."
        )

    client_id, client_secret = credentials
    connected = await token_service.complete_authorization(
        client_id=client_id, client_secret=client_secret, code=code
    )
    if not connected:
        raise HTTPException(
            status_code=HTTPStatus.BAD_REQUEST,
            detail="Failed to exchange authorization code.",
        )

    if "text/html" in request.headers.get("accept", "").lower():
        return HTMLResponse("<p>Login successful! You can close this window.</p>")
    return JSONResponse(content={"status": "connected"})


@router.get("/auth/status", response_model=AuthStatusResponse)
async def get_auth_status(
    token_service: Annotated[Any, Depends(get_google_token_service)],
) -> AuthStatusResponse:
    try:
        state = await token_service.get_state()
    except CredentialStoreError as exc:
        logger.error("Credential store unavailable: %s", exc)
        raise HTTPException(
            status_code=HTTPStatus.SERVICE_UNAVAILABLE,
            detail="Credential store unavailable.",
        ) from exc
    return AuthStatusResponse(state=state.value)


@router.get("/calendar/events", response_model=List[CalendarEvent])
async def list_upcoming_events(
    calendar_client: Annotated[Any, Depends(get_calendar_client)],
    credentials: Annotated[Tuple[str, str], Depends(get_client_credentials)],
) -> List[CalendarEvent]:
    """Upcoming events; empty when not signed in or when Google cannot be reached."""
    client_id, client_secret = credentials
    return await calendar_client.list_upcoming_events(
        client_id=client_id, client_secret=client_secret
    )


@router.get("/notices", response_model=List[Notice])
async def list_recent_notices(
    notifier: Annotated[Any, Depends(get_notification_hub)],
) -> List[Notice]:
    return notifier.recent()


__all__ = ["callback_router", "router"]
