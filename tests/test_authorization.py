from __future__ import annotations

import webbrowser

import pytest

from gcal_agenda.clients import GoogleOAuthClient
from gcal_agenda.schemas import NoticeKind
from gcal_agenda.services import AuthorizationService, extract_authorization_code


@pytest.mark.asyncio
async def test_initiate_opens_consent_url_and_notifies(hub) -> None:
    opened: list[str] = []

    def _open(url: str) -> bool:
        opened.append(url)
        return True

    service = AuthorizationService(GoogleOAuthClient(), hub, open_browser=_open)

    url = await service.initiate("my-client")

    assert opened == [url]
    assert "client_id=my-client" in url
    assert "prompt=consent" in url
    assert [(n.kind, n.message) for n in hub.recent()] == [
        (NoticeKind.INFO, "Opening Google Login in browser...")
    ]


@pytest.mark.asyncio
async def test_initiate_survives_missing_browser(hub) -> None:
    def _broken(url: str) -> bool:
        raise webbrowser.Error("could not locate runnable browser")

    service = AuthorizationService(GoogleOAuthClient(), hub, open_browser=_broken)

    url = await service.initiate("my-client")

    assert url.startswith(GoogleOAuthClient.AUTH_BASE_URL)


def test_extract_code_from_loopback_url() -> None:
    url = "http://127.0.0.1:42813/callback?code=4/0AbC-def&scope=https://www.googleapis.com/auth/calendar.readonly"

    assert extract_authorization_code(url) == "4/0AbC-def"


@pytest.mark.parametrize(
    ("url", "message"),
    [
        ("not a url", "Invalid URL format."),
        ("http://127.0.0.1:42813/callback?scope=x", "Invalid URL: No code found."),
        ("http://127.0.0.1:42813/callback?error=access_denied", "Google returned an error: access_denied"),
    ],
)
def test_extract_code_rejects_bad_urls(url: str, message: str) -> None:
    with pytest.raises(ValueError) as excinfo:
        extract_authorization_code(url)

    assert str(excinfo.value) == message
