"""Durable key-value capability used by the scheduling store."""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from typing import Protocol

from sqlalchemy.engine import Engine
from sqlmodel import Session

from ..models.kv import KeyValueEntry


class KeyValueStore(Protocol):
    """Async string-valued key-value store."""

    async def get(self, key: str) -> str | None:
        ...

    async def set(self, key: str, value: str) -> None:
        ...


class MemoryKeyValueStore:
    """Process-local store; contents vanish with the process."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> str | None:
        return self._data.get(key)

    async def set(self, key: str, value: str) -> None:
        self._data[key] = value


class SQLKeyValueStore:
    """One KeyValueEntry row per key. Blocking DB calls run in a worker thread."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def _get_sync(self, key: str) -> str | None:
        with Session(self._engine) as session:
            entry = session.get(KeyValueEntry, key)
            return entry.value if entry else None

    def _set_sync(self, key: str, value: str) -> None:
        with Session(self._engine) as session:
            entry = session.get(KeyValueEntry, key)
            if entry is None:
                entry = KeyValueEntry(key=key, value=value)
            else:
                entry.value = value
                entry.updated_at = datetime.now(timezone.utc)
            session.add(entry)
            session.commit()

    async def get(self, key: str) -> str | None:
        return await asyncio.to_thread(self._get_sync, key)

    async def set(self, key: str, value: str) -> None:
        await asyncio.to_thread(self._set_sync, key, value)
