from __future__ import annotations

import pytest

from gcal_agenda.schemas import Notice
from gcal_agenda.services import NotificationHub


@pytest.mark.asyncio
async def test_sync_and_async_subscribers_receive_notices() -> None:
    hub = NotificationHub()
    sync_seen: list[Notice] = []
    async_seen: list[Notice] = []

    async def _async_subscriber(notice: Notice) -> None:
        async_seen.append(notice)

    hub.subscribe(sync_seen.append)
    hub.subscribe(_async_subscriber)

    notice = Notice.needs_reauth()
    await hub.emit(notice)

    assert sync_seen == [notice]
    assert async_seen == [notice]


@pytest.mark.asyncio
async def test_failing_subscriber_does_not_block_others() -> None:
    hub = NotificationHub()
    seen: list[Notice] = []

    def _broken(notice: Notice) -> None:
        raise RuntimeError("ui went away")

    hub.subscribe(_broken)
    hub.subscribe(seen.append)

    await hub.emit(Notice.info("hello"))

    assert len(seen) == 1


@pytest.mark.asyncio
async def test_unsubscribe_and_bounded_history() -> None:
    hub = NotificationHub(history_size=2)
    seen: list[Notice] = []
    unsubscribe = hub.subscribe(seen.append)

    await hub.emit(Notice.info("one"))
    unsubscribe()
    await hub.emit(Notice.info("two"))
    await hub.emit(Notice.info("three"))

    assert [n.message for n in seen] == ["one"]
    assert [n.message for n in hub.recent()] == ["two", "three"]
