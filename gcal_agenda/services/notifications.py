"""
In-process publisher for user-facing notices.

Services emit typed ``Notice`` objects; the API server, the CLI or tests
subscribe to them instead of the services calling into any UI directly.
"""

from __future__ import annotations

import inspect
import logging
from collections import deque
from typing import Awaitable, Callable, Deque, List, Union

from gcal_agenda.schemas.notices import Notice

logger = logging.getLogger(__name__)

NoticeCallback = Callable[[Notice], Union[None, Awaitable[None]]]


class NotificationHub:
    """Fan notices out to subscribers and keep a short history."""

    def __init__(self, *, history_size: int = 50) -> None:
        self._subscribers: List[NoticeCallback] = []
        self._history: Deque[Notice] = deque(maxlen=history_size)

    def subscribe(self, callback: NoticeCallback) -> Callable[[], None]:
        """Register ``callback``; the returned function unsubscribes it."""
        self._subscribers.append(callback)

        def _unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return _unsubscribe

    async def emit(self, notice: Notice) -> None:
        self._history.append(notice)
        logger.info("Notice [%s]: %s", notice.kind.value, notice.message)
        for callback in list(self._subscribers):
            try:
                result = callback(notice)
                if inspect.isawaitable(result):
                    await result
            except Exception:
                logger.exception("Notice subscriber %r failed", callback)

    def recent(self) -> List[Notice]:
        return list(self._history)


__all__ = ["NoticeCallback", "NotificationHub"]
