"""Single-writer lock shared by the in-process repositories."""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager


class WriteLock:
    """An asyncio lock that the holding task may enter again.

    Services wrap a check-then-write sequence in ``hold()`` and the
    repository's own mutating methods enter it a second time, so the
    repository does not deadlock on itself.
    """

    def __init__(self) -> None:
        self._lock = asyncio.Lock()
        self._owner: asyncio.Task | None = None

    @property
    def locked(self) -> bool:
        return self._lock.locked()

    @asynccontextmanager
    async def hold(self) -> AsyncIterator[None]:
        task = asyncio.current_task()
        if task is not None and self._owner is task:
            yield
            return
        async with self._lock:
            self._owner = task
            try:
                yield
            finally:
                self._owner = None
