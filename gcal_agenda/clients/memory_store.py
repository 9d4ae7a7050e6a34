"""In-memory key-value store for tests and throwaway sessions."""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional


class InMemoryKeyValueStore:
    """Process-local store; nothing survives a restart."""

    def __init__(self, initial: Optional[Mapping[str, Any]] = None) -> None:
        self._data: Dict[str, Any] = dict(initial or {})

    async def get(self, key: str) -> Optional[Any]:
        return self._data.get(key)

    async def set(self, key: str, value: Any) -> None:
        self._data[key] = value

    async def set_many(self, values: Mapping[str, Any]) -> None:
        self._data.update(values)

    def snapshot(self) -> Dict[str, Any]:
        return dict(self._data)


__all__ = ["InMemoryKeyValueStore"]
