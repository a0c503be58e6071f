"""Cancellable countdown used to pace the quiz rounds."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Coroutine
from typing import Any

logger = logging.getLogger(__name__)

TickHandler = Callable[[int], Awaitable[None]]


class RoundTimer:
    """Runs at most one scheduled coroutine at a time.

    Starting a new schedule cancels the previous one, and ``cancel`` guarantees
    that nothing scheduled earlier runs afterwards.
    """

    def __init__(self, tick_seconds: float = 1.0) -> None:
        self._task: asyncio.Task[Any] | None = None
        self._tick_seconds = tick_seconds

    def start(self, coro: Coroutine[Any, Any, Any]) -> asyncio.Task[Any]:
        self.cancel()
        self._task = asyncio.get_running_loop().create_task(coro)
        self._task.add_done_callback(self._log_failure)
        return self._task

    def cancel(self) -> None:
        task, self._task = self._task, None
        if task is not None and not task.done() and task is not _current_task():
            task.cancel()

    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def wait(self) -> None:
        """Wait until the scheduled coroutine finishes or is cancelled."""
        task = self._task
        if task is None:
            return
        try:
            await asyncio.shield(task)
        except asyncio.CancelledError:
            if not task.cancelled():
                raise

    async def sleep(self, seconds: float) -> None:
        await asyncio.sleep(max(seconds, 0))

    async def countdown(self, seconds: int, on_tick: TickHandler) -> None:
        """Call ``on_tick`` with the remaining seconds, once per tick, down to 1."""
        for remaining in range(seconds, 0, -1):
            await on_tick(remaining)
            await self.sleep(self._tick_seconds)

    @staticmethod
    def _log_failure(task: asyncio.Task[Any]) -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Round timer task failed", exc_info=exc)


def _current_task() -> asyncio.Task[Any] | None:
    try:
        return asyncio.current_task()
    except RuntimeError:
        return None
