"""Single asyncio scheduler for every timed step in a session.

Delays are given in milliseconds and multiplied by `time_scale`; a scale of 0
turns every wait into a bare yield to the event loop, so ordering is kept but
nothing actually sleeps.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable, Coroutine
from typing import Any

logger = logging.getLogger(__name__)


class Scheduler:
    def __init__(self, time_scale: float = 1.0) -> None:
        self._time_scale = time_scale
        self._tasks: set[asyncio.Task] = set()

    async def sleep(self, ms: int) -> None:
        await asyncio.sleep(ms * self._time_scale / 1000)

    def spawn(self, coro: Coroutine[Any, Any, Any]) -> asyncio.Task:
        """Run a coroutine as a tracked background task."""
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._finished)
        return task

    def call_later(self, ms: int, callback: Callable[[], Awaitable[Any] | None]) -> asyncio.Task:
        """Run `callback` after `ms` milliseconds. Coroutine callbacks are awaited."""

        async def _later() -> None:
            await self.sleep(ms)
            result = callback()
            if inspect.isawaitable(result):
                await result

        return self.spawn(_later())

    async def drain(self) -> None:
        """Wait until no scheduled work remains, including work scheduled meanwhile."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def _finished(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.error("scheduled task failed", exc_info=task.exception())
