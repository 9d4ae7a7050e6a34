"""Command line front-end for the Google Calendar agenda.

Typical first run::

    # Opens the consent screen; Google redirects to http://127.0.0.1:42813/callback
    python -m scripts.agenda_cli login

    # Either keep ``serve`` running so the redirect is handled automatically ...
    python -m scripts.agenda_cli serve

    # ... or paste the URL the browser ended up on.
    python -m scripts.agenda_cli complete-login "http://127.0.0.1:42813/callback?code=..."

    python -m scripts.agenda_cli events
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from typing import Awaitable, Callable, Dict, Optional, Sequence
from urllib.parse import urlsplit

from gcal_agenda.clients import GoogleOAuthClient
from gcal_agenda.core.config import AppSettings, get_settings
from gcal_agenda.core.errors import CredentialStoreError, MissingCredentialsError
from gcal_agenda.core.logging import configure_logging
from gcal_agenda.dependencies import (
    get_authorization_service,
    get_calendar_client,
    get_google_token_service,
    get_notification_hub,
)
from gcal_agenda.schemas import Notice
from gcal_agenda.services import extract_authorization_code

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE_ERROR = 2
EXIT_CONFIG_ERROR = 3


def _print_notice(notice: Notice) -> None:
    print(f"[{notice.kind.value}] {notice.message}", file=sys.stderr)


async def _login(settings: AppSettings, _: argparse.Namespace) -> int:
    client_id = settings.google.require_client_id()
    url = await get_authorization_service().initiate(client_id)
    print("If the browser did not open, visit:")
    print(url)
    print("Then run `complete-login` with the URL you were redirected to.")
    return EXIT_OK


async def _complete_login(settings: AppSettings, args: argparse.Namespace) -> int:
    try:
        code = extract_authorization_code(args.url)
    except ValueError as exc:
        print(str(exc), file=sys.stderr)
        return EXIT_USAGE_ERROR

    client_id, client_secret = settings.google.require_client_credentials()
    connected = await get_google_token_service().complete_authorization(
        client_id=client_id, client_secret=client_secret, code=code
    )
    return EXIT_OK if connected else EXIT_FAILURE


async def _events(settings: AppSettings, _: argparse.Namespace) -> int:
    client_id, client_secret = settings.google.require_client_credentials()
    events = await get_calendar_client().list_upcoming_events(
        client_id=client_id, client_secret=client_secret
    )
    if not events:
        print("No upcoming events found.")
        return EXIT_OK
    for event in events:
        line = f"{event.start.display:<16}  {event.display_title}"
        if event.html_link:
            line += f"  <{event.html_link}>"
        print(line)
    return EXIT_OK


async def _status(_: AppSettings, __: argparse.Namespace) -> int:
    try:
        state = await get_google_token_service().get_state()
    except CredentialStoreError as exc:
        print(str(exc), file=sys.stderr)
        return EXIT_FAILURE
    print(state.value)
    return EXIT_OK


def _serve(settings: AppSettings, _: argparse.Namespace) -> int:
    import uvicorn

    redirect = urlsplit(GoogleOAuthClient.REDIRECT_URI)
    uvicorn.run(
        "gcal_agenda.main:app",
        host=redirect.hostname or "127.0.0.1",
        port=redirect.port or 42813,
        log_level=settings.log_level.lower(),
    )
    return EXIT_OK


_ASYNC_COMMANDS: Dict[str, Callable[[AppSettings, argparse.Namespace], Awaitable[int]]] = {
    "login": _login,
    "complete-login": _complete_login,
    "events": _events,
    "status": _status,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("login", help="Open the Google consent screen in a browser.")
    complete = subparsers.add_parser(
        "complete-login", help="Finish login using the URL Google redirected to."
    )
    complete.add_argument("url", help="Full redirect URL, starting with http://127.0.0.1...")
    subparsers.add_parser("events", help="List upcoming events on the primary calendar.")
    subparsers.add_parser("status", help="Show whether the stored token is usable.")
    subparsers.add_parser("serve", help="Run the API server on the loopback redirect address.")
    return parser


def main(argv: Optional[Sequence[str]] = None, *, settings: Optional[AppSettings] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    if args.command == "serve":
        return _serve(settings, args)

    unsubscribe = get_notification_hub().subscribe(_print_notice)
    try:
        return asyncio.run(_ASYNC_COMMANDS[args.command](settings, args))
    except MissingCredentialsError as exc:
        print(str(exc), file=sys.stderr)
        return EXIT_CONFIG_ERROR
    finally:
        unsubscribe()


if __name__ == "__main__":
    sys.exit(main())
