from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any

from .database import Entry, JsonDatabase
from .settings import DatabaseOptions


class AsyncJsonDatabase:
    """
    Async wrapper around JsonDatabase.
    Uses asyncio.to_thread to avoid blocking the event loop on file I/O; the
    wrapped store's lock keeps worker threads from interleaving.
    """

    def __init__(self, file_path: str | Path | None = None, options: DatabaseOptions | None = None) -> None:
        self._db = JsonDatabase(file_path, options)

    @property
    def sync(self) -> JsonDatabase:
        return self._db

    async def get(self, path: str, default: Any = None) -> Any:
        return await asyncio.to_thread(self._db.get, path, default)

    async def has(self, path: str) -> bool:
        return await asyncio.to_thread(self._db.has, path)

    async def all(self) -> list[Entry]:
        return await asyncio.to_thread(self._db.all)

    async def set(self, path: str, value: Any) -> None:
        await asyncio.to_thread(self._db.set, path, value)

    async def delete(self, key: str) -> None:
        await asyncio.to_thread(self._db.delete, key)

    async def add(self, key: str, amount: int | float) -> None:
        await asyncio.to_thread(self._db.add, key, amount)

    async def subtract(self, key: str, amount: int | float) -> None:
        await asyncio.to_thread(self._db.subtract, key, amount)

    async def push(self, key: str, element: Any) -> None:
        await asyncio.to_thread(self._db.push, key, element)

    async def pull_one(self, key: str, element: Any) -> None:
        await asyncio.to_thread(self._db.pull_one, key, element)

    async def pull_many(self, key: str, element: Any) -> None:
        await asyncio.to_thread(self._db.pull_many, key, element)

    async def clear(self, key: str) -> None:
        await asyncio.to_thread(self._db.clear, key)

    async def clear_all(self) -> None:
        await asyncio.to_thread(self._db.clear_all)

    async def make_snapshot(self, path: str | Path | None = None) -> Path:
        return await asyncio.to_thread(self._db.make_snapshot, path)

    async def aclose(self) -> None:
        await asyncio.to_thread(self._db.close)

    async def __aenter__(self) -> "AsyncJsonDatabase":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()


